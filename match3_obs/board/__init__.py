"""
Board Module

This module defines what the encoders need from a board. The key design
principle is that boards are SWAPPABLE - the encoders work with any object
that implements the AbstractBoard interface.

Key Components:
    - AbstractBoard (ABC): rows, columns, num_cell_types, get_cell_type()
    - GridBoard: numpy-backed board for tests, tools and simple games

Data Flow:
    game state → AbstractBoard.get_cell_type(row, col) → int in [0, num_cell_types)
"""

from match3_obs.board.base import AbstractBoard, validate_dimensions
from match3_obs.board.grid import GridBoard

__all__ = ['AbstractBoard', 'GridBoard', 'validate_dimensions']
