"""
Error types raised while encoding board observations.

All of these indicate a broken contract between the caller (or its board)
and the encoder. None of them are retryable.
"""


class ObservationError(Exception):
    """Base class for observation encoding failures."""


class BoardConfigurationError(ObservationError, ValueError):
    """Board dimensions are missing, non-positive, or don't match the encoder."""


class CellTypeRangeError(ObservationError, IndexError):
    """A board reported a cell type outside [0, num_cell_types)."""

    def __init__(self, row: int, col: int, value: int, num_cell_types: int):
        self.row = row
        self.col = col
        self.value = value
        self.num_cell_types = num_cell_types
        super().__init__(
            f"Cell ({row}, {col}) has type {value}, "
            f"expected 0 <= type < {num_cell_types}"
        )
