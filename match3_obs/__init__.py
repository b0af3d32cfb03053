"""
match3_obs

Observation encoders for grid ("match-3") boards: one-hot tensors for vector
observations and PNG-packed channel images for visual ones.

## Architecture

1. **board**: Board source interface
   - AbstractBoard: rows, columns, num_cell_types, get_cell_type()
   - GridBoard: numpy-backed implementation

2. **sensor**: Observation encoding
   - TensorEncoder: flat or 3D one-hot float tensor
   - ChannelPacker: 3 cell types per RGB image
   - PNG codec adapter (Pillow)
   - Match3Sensor: everything a learning agent asks for

3. **errors**: BoardConfigurationError, CellTypeRangeError

## Quick Start

```python
from match3_obs.board import GridBoard
from match3_obs.sensor import TensorEncoder, ChannelPacker, image_count

board = GridBoard([[0, 1], [2, 3]], num_cell_types=4)

tensor, count = TensorEncoder(board).write_flat()   # (16,) float32

packer = ChannelPacker(board.rows, board.columns)
for i in range(image_count(board.num_cell_types)):
    pixels = packer.pack(board, 3 * i)               # (2, 2, 3) uint8
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from match3_obs.board import AbstractBoard, GridBoard
from match3_obs.errors import BoardConfigurationError, CellTypeRangeError, ObservationError
from match3_obs.sensor import ChannelPacker, Match3Sensor, SensorConfig, TensorEncoder

__all__ = [
    'AbstractBoard',
    'GridBoard',
    'BoardConfigurationError',
    'CellTypeRangeError',
    'ObservationError',
    'ChannelPacker',
    'Match3Sensor',
    'SensorConfig',
    'TensorEncoder',
]
