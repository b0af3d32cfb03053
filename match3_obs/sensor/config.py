"""
Sensor configuration.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np


class CompressionType(Enum):
    """How a sensor hands its observation to the consumer."""

    NONE = "none"
    """Raw float tensor"""

    PNG = "png"
    """Concatenated PNG images, 3 cell types per image"""


@dataclass
class SensorConfig:
    """Configuration for a Match3Sensor.

    Groups the observation mode settings so sensors can be created with the
    same options across environments.
    """

    use_vector_observations: bool = True
    """Flat (rows*columns*types,) tensor if True, else (rows, columns, types)"""

    compression: Union[CompressionType, str] = CompressionType.PNG
    """Compression reported to the consumer. Only changes what
    get_compression_type() returns; compressed images are always available."""

    name: str = "Match3 Sensor"
    """Sensor name reported to the observation consumer"""

    pixel_dtype: str = "uint8"
    """Dtype of packed pixel buffers: 'uint8' (0/255) or a float dtype (0/1)"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.compression, str):
            try:
                self.compression = CompressionType(self.compression.lower())
            except ValueError:
                raise ValueError(
                    f"compression should be 'none' or 'png', got {self.compression!r}"
                ) from None

        if not self.name:
            raise ValueError("name must be a non-empty string")

        dtype = np.dtype(self.pixel_dtype)
        if not (np.issubdtype(dtype, np.integer) or np.issubdtype(dtype, np.floating)):
            raise ValueError(f"pixel_dtype must be an integer or float dtype, got {self.pixel_dtype}")
        if np.issubdtype(dtype, np.integer) and np.iinfo(dtype).max < 255:
            raise ValueError(f"pixel_dtype must hold 255, got {self.pixel_dtype}")
        self.pixel_dtype = dtype.name

    def __repr__(self) -> str:
        """String representation of config."""
        layout = "flat" if self.use_vector_observations else "3D"
        return (
            f"SensorConfig(name={self.name!r}, layout={layout}, "
            f"compression={self.compression.value}, pixel_dtype={self.pixel_dtype})"
        )
