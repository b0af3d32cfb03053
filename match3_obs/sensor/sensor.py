"""
Match3 Sensor

Ties the encoders together into the observation a learning agent consumes:
a shape descriptor, a one-hot tensor, or PNG-compressed channel images, plus
the compression type that says which of the last two to expect.

Usage:
    from match3_obs.board import GridBoard
    from match3_obs.sensor import Match3Sensor, SensorConfig

    board = GridBoard([[0, 1], [2, 3]], num_cell_types=4)
    sensor = Match3Sensor(board, SensorConfig(compression="png"))

    sensor.get_observation_shape()       # (16,)
    tensor, count = sensor.write()       # float32 (16,), 16
    data = sensor.get_compressed_observation()  # 2 PNGs back to back
"""

import logging
from typing import List, Optional, Tuple

import gymnasium as gym
import numpy as np

from match3_obs.board.base import AbstractBoard, check_board_matches
from match3_obs.sensor.config import CompressionType, SensorConfig
from match3_obs.sensor.packer import ChannelPacker
from match3_obs.sensor.png import encode_png
from match3_obs.sensor.tensor import TensorEncoder

logger = logging.getLogger(__name__)


class Match3Sensor:
    """Observes one board. Each sensor owns its own encoders and scratch buffers."""

    def __init__(self, board: AbstractBoard, config: Optional[SensorConfig] = None):
        """
        Args:
            board: Board to observe
            config: Sensor settings (default: SensorConfig())

        Raises:
            BoardConfigurationError: If the board has non-positive dimensions
        """
        self.config = config if config is not None else SensorConfig()
        self.board = board
        self._dimensions = board.dimensions
        self.tensor_encoder = TensorEncoder(board)
        self.packer = ChannelPacker(board.rows, board.columns, dtype=self.config.pixel_dtype)
        self._shape = TensorEncoder.shape(
            board.rows,
            board.columns,
            board.num_cell_types,
            self.config.use_vector_observations,
        )

        logger.info(f"Created {self.config.name}: {board!r}, shape={self._shape}")

    def get_observation_shape(self) -> Tuple[int, ...]:
        return self._shape

    def observation_space(self) -> gym.spaces.Box:
        """Gymnasium space matching the tensor observation."""
        return gym.spaces.Box(low=0.0, high=1.0, shape=self._shape, dtype=np.float32)

    def write(self, out: Optional[np.ndarray] = None) -> Tuple[np.ndarray, int]:
        """
        Write the one-hot tensor in the configured layout.

        Returns:
            Tuple of (tensor, count of values written)
        """
        return self.tensor_encoder.write(self.config.use_vector_observations, out)

    def get_compressed_images(self) -> List[bytes]:
        """
        PNG bytes for each group of 3 cell types, in offset order.

        Raises:
            BoardConfigurationError: If the board changed size since the sensor was built
        """
        check_board_matches(self.board, self._dimensions)
        return [encode_png(pixels) for pixels in self.packer.pack_all(self.board)]

    def get_compressed_observation(self) -> bytes:
        """All channel images as one byte string of back-to-back PNG files."""
        images = self.get_compressed_images()
        logger.debug(f"Compressed observation: {len(images)} images, {sum(map(len, images))} bytes")
        return b"".join(images)

    def get_compression_type(self) -> CompressionType:
        return self.config.compression

    def get_name(self) -> str:
        return self.config.name

    def update(self):
        pass

    def reset(self):
        pass

    def __repr__(self) -> str:
        return f"Match3Sensor(name={self.get_name()!r}, shape={self._shape})"
