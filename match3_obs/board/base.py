"""
Abstract Board Interface

This module defines the read-only contract every board source must satisfy
before it can be observed. Encoders depend only on this interface, so any
game-state type can be plugged in without the encoders knowing about it.

Key Principles:
    1. Boards are owned and mutated by the game, never by an encoder
    2. rows, columns and num_cell_types are positive
    3. get_cell_type() returns a value in [0, num_cell_types)
    4. Dimensions and cell types don't change during one encoding call

Convention:
    - Row 0 is the first row written to tensors and the top row of images
    - Iteration order is row-major: rows outer, columns inner
"""

from abc import ABC, abstractmethod
from numbers import Integral
from typing import Iterator, Tuple

from match3_obs.errors import BoardConfigurationError, CellTypeRangeError


class AbstractBoard(ABC):
    """
    Abstract base class for observable grid boards.

    Attributes:
        rows: Number of rows in the grid
        columns: Number of columns in the grid
        num_cell_types: Number of distinct cell types

    Methods:
        get_cell_type(row, col): Returns the type index of one cell
    """

    @property
    @abstractmethod
    def rows(self) -> int:
        pass

    @property
    @abstractmethod
    def columns(self) -> int:
        pass

    @property
    @abstractmethod
    def num_cell_types(self) -> int:
        pass

    @abstractmethod
    def get_cell_type(self, row: int, col: int) -> int:
        """
        Return the cell type at (row, col).

        Args:
            row: Row index (0 <= row < rows)
            col: Column index (0 <= col < columns)

        Returns:
            int: Cell type in [0, num_cell_types)

        Raises:
            NotImplementedError: If subclass doesn't implement this method
        """
        pass

    @property
    def dimensions(self) -> Tuple[int, int, int]:
        """(rows, columns, num_cell_types) as one tuple."""
        return self.rows, self.columns, self.num_cell_types

    def iter_cells(self) -> Iterator[Tuple[int, int, int]]:
        """
        Yield (row, col, cell_type) for every cell in row-major order.

        Cell types are range-checked as they are read.

        Raises:
            CellTypeRangeError: If a cell type is outside [0, num_cell_types)
        """
        num_cell_types = self.num_cell_types
        for row in range(self.rows):
            for col in range(self.columns):
                value = self.get_cell_type(row, col)
                if value < 0 or value >= num_cell_types:
                    raise CellTypeRangeError(row, col, value, num_cell_types)
                yield row, col, value

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(rows={self.rows}, columns={self.columns}, "
            f"num_cell_types={self.num_cell_types})"
        )


def validate_dimensions(rows: int, columns: int, num_cell_types: int) -> None:
    """
    Check that board dimensions are usable for encoding.

    Raises:
        BoardConfigurationError: If any dimension is not a positive integer
    """
    for name, value in (
        ("rows", rows),
        ("columns", columns),
        ("num_cell_types", num_cell_types),
    ):
        if not isinstance(value, Integral) or isinstance(value, bool) or value <= 0:
            raise BoardConfigurationError(f"{name} must be a positive integer, got {value!r}")


def check_board_matches(board: AbstractBoard, expected: Tuple[int, ...]) -> None:
    """
    Check that a board still has the dimensions an encoder was built for.

    Args:
        board: Board about to be encoded
        expected: Dimensions fixed at encoder construction; either
            (rows, columns) or (rows, columns, num_cell_types)

    Raises:
        BoardConfigurationError: If the board's dimensions differ
    """
    actual = board.dimensions[: len(expected)]
    if actual != tuple(expected):
        raise BoardConfigurationError(
            f"Board dimensions {actual} don't match encoder dimensions {tuple(expected)}"
        )
