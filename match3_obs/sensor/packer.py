"""
One-hot to RGB channel packing.

Encodes 3 cell types at a time as pixel colours so a board can be shipped as
a handful of small lossless images instead of a wide float tensor.

Colour mapping for a window starting at channel_offset:
    type == channel_offset     → red   (1, 0, 0)
    type == channel_offset + 1 → green (0, 1, 0)
    type == channel_offset + 2 → blue  (0, 0, 1)
    anything else              → black (0, 0, 0)

A board with N cell types needs image_count(N) = ceil(N / 3) images, packed
with offsets 0, 3, 6, ...
"""

import logging
from typing import Iterator, Sequence

import numpy as np

from match3_obs.board.base import AbstractBoard, check_board_matches
from match3_obs.errors import BoardConfigurationError

logger = logging.getLogger(__name__)

CHANNELS_PER_IMAGE = 3


def image_count(num_cell_types: int) -> int:
    """Number of RGB images needed to cover every cell type."""
    if num_cell_types <= 0:
        raise BoardConfigurationError(
            f"num_cell_types must be positive, got {num_cell_types}"
        )
    return (num_cell_types + CHANNELS_PER_IMAGE - 1) // CHANNELS_PER_IMAGE


class ChannelPacker:
    """
    Packs one-hot channels of a board into RGB pixel buffers.

    The pixel buffer is scratch owned by the packer and overwritten in place
    by every pack() call. Copy it if you need to keep it past the next call.
    """

    def __init__(self, rows: int, columns: int, dtype=np.uint8):
        """
        Args:
            rows: Board rows (image height)
            columns: Board columns (image width)
            dtype: Pixel dtype. Integer dtypes use 0/255, float dtypes 0.0/1.0.

        Raises:
            BoardConfigurationError: If rows or columns is not positive
        """
        if rows <= 0 or columns <= 0:
            raise BoardConfigurationError(
                f"Image dimensions must be positive, got {rows}x{columns}"
            )

        self.rows = rows
        self.columns = columns
        self.dtype = np.dtype(dtype)
        self._pixels = np.zeros((rows, columns, CHANNELS_PER_IMAGE), dtype=self.dtype)

        full = 255 if np.issubdtype(self.dtype, np.integer) else 1.0
        # Row i is the colour for channel i; the last row is black
        self._palette = np.zeros((CHANNELS_PER_IMAGE + 1, CHANNELS_PER_IMAGE), dtype=self.dtype)
        for channel in range(CHANNELS_PER_IMAGE):
            self._palette[channel, channel] = full

    @property
    def full_value(self):
        """Value of a lit channel (255 or 1.0)."""
        return self._palette[0, 0]

    def pack(self, board: AbstractBoard, channel_offset: int) -> np.ndarray:
        """
        Encode cell types [channel_offset, channel_offset + 3) as RGB pixels.

        Args:
            board: Board with the packer's rows and columns
            channel_offset: First cell type of the window (0, 3, 6, ...)

        Returns:
            The scratch pixel buffer, shape (rows, columns, 3)

        Raises:
            ValueError: If channel_offset is negative
            BoardConfigurationError: If the board's size differs from the packer's
            CellTypeRangeError: If a cell type is out of range
        """
        if channel_offset < 0:
            raise ValueError(f"channel_offset must be non-negative, got {channel_offset}")
        check_board_matches(board, (self.rows, self.columns))

        black = CHANNELS_PER_IMAGE
        for row, col, value in board.iter_cells():
            if value < channel_offset or value >= channel_offset + CHANNELS_PER_IMAGE:
                self._pixels[row, col] = self._palette[black]
            else:
                self._pixels[row, col] = self._palette[value - channel_offset]

        return self._pixels

    def pack_all(self, board: AbstractBoard) -> Iterator[np.ndarray]:
        """
        Yield one packed buffer per group of 3 cell types.

        Every yielded value is the same scratch buffer, refilled for the next
        offset when the iterator advances.
        """
        count = image_count(board.num_cell_types)
        logger.debug(f"Packing {board.num_cell_types} cell types into {count} images")
        for index in range(count):
            yield self.pack(board, CHANNELS_PER_IMAGE * index)


def unpack(images: Sequence[np.ndarray], num_cell_types: int) -> np.ndarray:
    """
    Recover the cell-type grid from a full sequence of packed images.

    This is the inverse of ChannelPacker.pack_all().

    Args:
        images: image_count(num_cell_types) arrays of shape (rows, columns, 3),
            in offset order
        num_cell_types: Number of cell types on the board

    Returns:
        int64 array of shape (rows, columns)

    Raises:
        ValueError: On a wrong image count or a cell that lights no channel
            or more than one
    """
    expected = image_count(num_cell_types)
    if len(images) != expected:
        raise ValueError(f"Expected {expected} images for {num_cell_types} types, got {len(images)}")

    # (rows, columns, images * 3), truncated to the real number of types
    planes = np.concatenate([np.asarray(image) > 0 for image in images], axis=2)
    planes = planes[:, :, :num_cell_types]

    lit = planes.sum(axis=2)
    if np.any(lit != 1):
        row, col = (int(x) for x in np.argwhere(lit != 1)[0])
        raise ValueError(f"Pixel ({row}, {col}) lights {int(lit[row, col])} channels, expected 1")

    return np.argmax(planes, axis=2).astype(np.int64)
