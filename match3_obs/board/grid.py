"""
Numpy-backed board implementation.

GridBoard is the simplest useful board source: a 2D integer array plus the
number of cell types. Games that keep their state elsewhere implement
AbstractBoard directly instead.
"""

from typing import Optional, Sequence, Union

import numpy as np

from match3_obs.board.base import AbstractBoard, validate_dimensions
from match3_obs.errors import BoardConfigurationError, CellTypeRangeError


class GridBoard(AbstractBoard):
    """Board whose cell types live in a (rows, columns) integer array."""

    def __init__(
        self,
        cells: Union[np.ndarray, Sequence[Sequence[int]]],
        num_cell_types: Optional[int] = None,
    ):
        """
        Create a board from a 2D grid of cell types.

        Args:
            cells: 2D array-like of integer cell types
            num_cell_types: Number of distinct cell types. Defaults to
                max(cells) + 1.

        Raises:
            BoardConfigurationError: If cells isn't a non-empty 2D grid
            CellTypeRangeError: If a cell is outside [0, num_cell_types)
        """
        grid = np.array(cells, dtype=np.int64)
        if grid.ndim != 2 or grid.size == 0:
            raise BoardConfigurationError(
                f"cells must be a non-empty 2D grid, got shape {grid.shape}"
            )

        if num_cell_types is None:
            num_cell_types = int(grid.max()) + 1

        validate_dimensions(int(grid.shape[0]), int(grid.shape[1]), num_cell_types)

        self._cells = grid
        self._num_cell_types = num_cell_types
        self._check_range()

    @classmethod
    def random(
        cls,
        rows: int,
        columns: int,
        num_cell_types: int,
        rng: Optional[np.random.Generator] = None,
    ) -> "GridBoard":
        """Create a board with uniformly random cell types."""
        validate_dimensions(rows, columns, num_cell_types)
        rng = rng if rng is not None else np.random.default_rng()
        cells = rng.integers(0, num_cell_types, size=(rows, columns))
        return cls(cells, num_cell_types)

    @property
    def rows(self) -> int:
        return int(self._cells.shape[0])

    @property
    def columns(self) -> int:
        return int(self._cells.shape[1])

    @property
    def num_cell_types(self) -> int:
        return self._num_cell_types

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the cell grid."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def get_cell_type(self, row: int, col: int) -> int:
        return int(self._cells[row, col])

    def set_cell_type(self, row: int, col: int, value: int) -> None:
        """
        Change one cell.

        Raises:
            CellTypeRangeError: If value is outside [0, num_cell_types)
        """
        if value < 0 or value >= self._num_cell_types:
            raise CellTypeRangeError(row, col, value, self._num_cell_types)
        self._cells[row, col] = value

    def _check_range(self) -> None:
        bad = np.argwhere((self._cells < 0) | (self._cells >= self._num_cell_types))
        if len(bad):
            row, col = (int(x) for x in bad[0])
            raise CellTypeRangeError(row, col, int(self._cells[row, col]), self._num_cell_types)
