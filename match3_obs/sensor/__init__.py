"""
Sensor Module

This module turns boards into observations for learning agents.

Key Components:
    - TensorEncoder: one-hot float32 tensor, flat or (rows, columns, types)
    - ChannelPacker: 3 one-hot channels per RGB pixel buffer
    - encode_png / decode_png: Pillow PNG codec adapter
    - Match3Sensor: shape, tensor and compressed observations for one board

Data Flow:
    AbstractBoard → TensorEncoder.write_flat() → (N,) float32 → agent
    AbstractBoard → ChannelPacker.pack() x ceil(types / 3) → encode_png() → bytes → agent
"""

from match3_obs.sensor.config import CompressionType, SensorConfig
from match3_obs.sensor.packer import ChannelPacker, image_count, unpack
from match3_obs.sensor.png import decode_png, encode_png, split_png_stream
from match3_obs.sensor.sensor import Match3Sensor
from match3_obs.sensor.tensor import TensorEncoder, observation_shape, tensor_to_cell_types

__all__ = [
    'ChannelPacker',
    'CompressionType',
    'Match3Sensor',
    'SensorConfig',
    'TensorEncoder',
    'decode_png',
    'encode_png',
    'image_count',
    'observation_shape',
    'split_png_stream',
    'tensor_to_cell_types',
    'unpack',
]
