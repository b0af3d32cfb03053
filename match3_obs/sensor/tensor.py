"""
One-hot Tensor Encoding

This module converts a board into a one-hot float32 tensor for vector
observations.

Layouts:
    flat: shape (rows * columns * num_cell_types,)
    3D:   shape (rows, columns, num_cell_types)

Both layouts hold the same values. For cell (r, c) with type t:
    flat[r * columns * num_cell_types + c * num_cell_types + i] == tensor_3d[r, c, i]
    == 1.0 if i == t else 0.0

Example (2x2 board, 4 types, cells [[0, 1], [2, 3]]):
    flat = [1,0,0,0, 0,1,0,0, 0,0,1,0, 0,0,0,1]
"""

import logging
from typing import Optional, Tuple

import numpy as np

from match3_obs.board.base import AbstractBoard, check_board_matches, validate_dimensions
from match3_obs.errors import BoardConfigurationError

logger = logging.getLogger(__name__)


def observation_shape(board: Optional[AbstractBoard], flattened: bool) -> Tuple[int, ...]:
    """
    Declared observation shape for a board, or () when no board is bound.

    An empty shape means "not configured yet"; consumers must not encode
    until a board is available.
    """
    if board is None:
        return ()
    return TensorEncoder.shape(board.rows, board.columns, board.num_cell_types, flattened)


class TensorEncoder:
    """
    Writes one-hot tensors for a single board.

    Dimensions are fixed at construction. Tensors are allocated per call
    unless an ``out`` array is supplied, in which case it is overwritten
    in place and returned.
    """

    def __init__(self, board: AbstractBoard):
        """
        Args:
            board: Board to observe

        Raises:
            BoardConfigurationError: If the board has non-positive dimensions
        """
        validate_dimensions(board.rows, board.columns, board.num_cell_types)
        self.board = board
        self.rows = board.rows
        self.columns = board.columns
        self.num_cell_types = board.num_cell_types

    @staticmethod
    def shape(rows: int, columns: int, num_cell_types: int, flattened: bool) -> Tuple[int, ...]:
        """
        Shape of the tensor for the given dimensions.

        Returns:
            (rows * columns * num_cell_types,) if flattened,
            else (rows, columns, num_cell_types)

        Raises:
            BoardConfigurationError: If any dimension is not positive
        """
        validate_dimensions(rows, columns, num_cell_types)
        if flattened:
            return (rows * columns * num_cell_types,)
        return (rows, columns, num_cell_types)

    @property
    def size(self) -> int:
        """Number of elements in either layout."""
        return self.rows * self.columns * self.num_cell_types

    def write(self, flattened: bool, out: Optional[np.ndarray] = None) -> Tuple[np.ndarray, int]:
        """Write the flat or 3D tensor depending on ``flattened``."""
        if flattened:
            return self.write_flat(out)
        return self.write_3d(out)

    def write_flat(self, out: Optional[np.ndarray] = None) -> Tuple[np.ndarray, int]:
        """
        Write the board as a flat one-hot vector.

        Cells are visited row-major; each cell contributes num_cell_types
        values with 1.0 at its own type.

        Args:
            out: Optional float array of shape (size,) to write into

        Returns:
            Tuple of (tensor, count) where count is the number of elements
            written

        Raises:
            BoardConfigurationError: If the board changed size or out is mis-shaped
            CellTypeRangeError: If a cell type is out of range
        """
        tensor = self._prepare(out, self.shape(self.rows, self.columns, self.num_cell_types, True))

        offset = 0
        for _, _, value in self.board.iter_cells():
            for i in range(self.num_cell_types):
                tensor[offset] = 1.0 if i == value else 0.0
                offset += 1

        self._check_count(offset)
        return tensor, offset

    def write_3d(self, out: Optional[np.ndarray] = None) -> Tuple[np.ndarray, int]:
        """
        Write the board as a (rows, columns, num_cell_types) one-hot tensor.

        Same values as write_flat(), indexed by [row, col, type].
        """
        tensor = self._prepare(out, self.shape(self.rows, self.columns, self.num_cell_types, False))

        count = 0
        for row, col, value in self.board.iter_cells():
            for i in range(self.num_cell_types):
                tensor[row, col, i] = 1.0 if i == value else 0.0
                count += 1

        self._check_count(count)
        return tensor, count

    def _prepare(self, out: Optional[np.ndarray], shape: Tuple[int, ...]) -> np.ndarray:
        check_board_matches(self.board, (self.rows, self.columns, self.num_cell_types))

        if out is None:
            return np.empty(shape, dtype=np.float32)

        if out.shape != shape:
            raise BoardConfigurationError(
                f"Output buffer has shape {out.shape}, expected {shape}"
            )
        return out

    def _check_count(self, count: int) -> None:
        # Every cell writes exactly num_cell_types values
        if count != self.size:
            raise BoardConfigurationError(
                f"Wrote {count} values, declared shape holds {self.size}"
            )
        logger.debug(f"Wrote {count} one-hot values for {self.rows}x{self.columns} board")


def tensor_to_cell_types(
    tensor: np.ndarray, rows: int, columns: int, num_cell_types: int
) -> np.ndarray:
    """
    Recover the cell-type grid from a one-hot tensor.

    This is the inverse of TensorEncoder.write_flat() / write_3d().

    Args:
        tensor: Flat or 3D one-hot tensor
        rows, columns, num_cell_types: Board dimensions

    Returns:
        int64 array of shape (rows, columns)

    Raises:
        ValueError: If the tensor has the wrong size or a cell isn't one-hot
    """
    expected = rows * columns * num_cell_types
    if tensor.size != expected or tensor.shape not in (
        (expected,),
        (rows, columns, num_cell_types),
    ):
        raise ValueError(
            f"Invalid tensor shape: {tensor.shape}. "
            f"Expected ({expected},) or ({rows}, {columns}, {num_cell_types})"
        )

    cube = tensor.reshape(rows, columns, num_cell_types)
    hot = cube > 0.5
    per_cell = hot.sum(axis=2)
    if np.any(per_cell != 1):
        row, col = (int(x) for x in np.argwhere(per_cell != 1)[0])
        raise ValueError(f"Cell ({row}, {col}) is not one-hot: {cube[row, col].tolist()}")

    return np.argmax(hot, axis=2).astype(np.int64)
