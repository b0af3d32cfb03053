"""
Tests for one-hot tensor encoding.

Covers the flat and 3D layouts, their equivalence, the empty "unconfigured"
shape, and failure on malformed boards.
"""

import pytest
import numpy as np

from match3_obs.board import GridBoard
from match3_obs.errors import BoardConfigurationError, CellTypeRangeError
from match3_obs.sensor.tensor import TensorEncoder, observation_shape, tensor_to_cell_types
from tests.boards import ListBoard


@pytest.fixture
def small_board():
    """2x2 board with one cell of each of 4 types."""
    return GridBoard([[0, 1], [2, 3]], num_cell_types=4)


@pytest.fixture
def random_board():
    return GridBoard.random(7, 5, 6, rng=np.random.default_rng(1234))


class TestShape:
    """Test declared observation shapes."""

    def test_flat_shape(self):
        assert TensorEncoder.shape(2, 2, 4, flattened=True) == (16,)

    def test_3d_shape(self):
        assert TensorEncoder.shape(8, 9, 6, flattened=False) == (8, 9, 6)

    def test_non_positive_raises(self):
        with pytest.raises(BoardConfigurationError):
            TensorEncoder.shape(0, 2, 4, flattened=True)

    def test_no_board_gives_empty_shape(self):
        """Test that an unbound board signals 'not ready' with ()."""
        assert observation_shape(None, flattened=True) == ()
        assert observation_shape(None, flattened=False) == ()

    def test_observation_shape_for_board(self, small_board):
        assert observation_shape(small_board, flattened=True) == (16,)
        assert observation_shape(small_board, flattened=False) == (2, 2, 4)


class TestWriteFlat:
    """Test the flat layout."""

    def test_scenario_values(self, small_board):
        """Test the 2x2, 4-type board encodes cell-major, row-major."""
        tensor, count = TensorEncoder(small_board).write_flat()

        expected = np.array(
            [1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1], dtype=np.float32
        )
        np.testing.assert_array_equal(tensor, expected)
        assert count == 16
        assert tensor.dtype == np.float32

    def test_one_hot_invariant(self, random_board):
        """Test that every cell sums to 1 with the 1 at its type."""
        encoder = TensorEncoder(random_board)
        tensor, _ = encoder.write_flat()
        cells = tensor.reshape(random_board.rows, random_board.columns, random_board.num_cell_types)

        np.testing.assert_array_equal(cells.sum(axis=2), np.ones((7, 5)))
        np.testing.assert_array_equal(cells.argmax(axis=2), random_board.cells)

    def test_count_matches_shape(self, random_board):
        tensor, count = TensorEncoder(random_board).write_flat()
        assert count == tensor.size == 7 * 5 * 6

    def test_writes_into_out(self, small_board):
        """Test that a supplied buffer is fully overwritten and returned."""
        out = np.full(16, 7.0, dtype=np.float32)
        tensor, _ = TensorEncoder(small_board).write_flat(out)

        assert tensor is out
        assert set(np.unique(out).tolist()) == {0.0, 1.0}

    def test_out_wrong_shape(self, small_board):
        with pytest.raises(BoardConfigurationError, match="Output buffer has shape"):
            TensorEncoder(small_board).write_flat(np.zeros(15, dtype=np.float32))

    def test_deterministic(self, random_board):
        encoder = TensorEncoder(random_board)
        first, _ = encoder.write_flat()
        second, _ = encoder.write_flat()
        np.testing.assert_array_equal(first, second)

    def test_tracks_board_changes(self):
        board = GridBoard([[0, 0]], num_cell_types=2)
        encoder = TensorEncoder(board)

        board.set_cell_type(0, 1, 1)
        tensor, _ = encoder.write_flat()
        np.testing.assert_array_equal(tensor, [1, 0, 0, 1])

    def test_single_type(self):
        board = GridBoard([[0, 0, 0]], num_cell_types=1)
        tensor, count = TensorEncoder(board).write_flat()
        np.testing.assert_array_equal(tensor, [1, 1, 1])
        assert count == 3


class TestWrite3D:
    """Test the 3D layout."""

    def test_scenario_values(self, small_board):
        tensor, count = TensorEncoder(small_board).write_3d()

        assert tensor.shape == (2, 2, 4)
        assert count == 16
        np.testing.assert_array_equal(tensor[0, 0], [1, 0, 0, 0])
        np.testing.assert_array_equal(tensor[0, 1], [0, 1, 0, 0])
        np.testing.assert_array_equal(tensor[1, 0], [0, 0, 1, 0])
        np.testing.assert_array_equal(tensor[1, 1], [0, 0, 0, 1])

    def test_flat_3d_equivalence(self, random_board):
        """Test flat[r*cols*types + c*types + i] == three_d[r, c, i]."""
        encoder = TensorEncoder(random_board)
        flat, flat_count = encoder.write_flat()
        three_d, three_d_count = encoder.write_3d()

        rows, cols, types = random_board.dimensions
        for r in range(rows):
            for c in range(cols):
                for i in range(types):
                    assert flat[r * cols * types + c * types + i] == three_d[r, c, i]
        assert flat_count == three_d_count

    def test_write_dispatch(self, small_board):
        encoder = TensorEncoder(small_board)
        assert encoder.write(flattened=True)[0].shape == (16,)
        assert encoder.write(flattened=False)[0].shape == (2, 2, 4)


class TestMalformedBoards:
    """Test that contract violations fail fast."""

    def test_out_of_range_flat(self):
        board = ListBoard([[0, 1], [4, 0]], num_cell_types=4)
        with pytest.raises(CellTypeRangeError, match=r"Cell \(1, 0\) has type 4"):
            TensorEncoder(board).write_flat()

    def test_out_of_range_3d(self):
        board = ListBoard([[0, -1]], num_cell_types=4)
        with pytest.raises(CellTypeRangeError):
            TensorEncoder(board).write_3d()

    def test_zero_cell_types(self):
        board = ListBoard([[0]], num_cell_types=0)
        with pytest.raises(BoardConfigurationError):
            TensorEncoder(board)

    def test_board_resized_after_construction(self):
        board = ListBoard([[0, 1]], num_cell_types=2)
        encoder = TensorEncoder(board)

        board.cells = [[0, 1], [1, 0]]
        with pytest.raises(BoardConfigurationError, match="don't match encoder dimensions"):
            encoder.write_flat()


class TestTensorToCellTypes:
    """Test recovering the board from a tensor."""

    def test_flat_round_trip(self, random_board):
        tensor, _ = TensorEncoder(random_board).write_flat()
        cells = tensor_to_cell_types(tensor, *random_board.dimensions)
        np.testing.assert_array_equal(cells, random_board.cells)

    def test_3d_round_trip(self, random_board):
        tensor, _ = TensorEncoder(random_board).write_3d()
        cells = tensor_to_cell_types(tensor, *random_board.dimensions)
        np.testing.assert_array_equal(cells, random_board.cells)

    def test_wrong_shape(self):
        with pytest.raises(ValueError, match="Invalid tensor shape"):
            tensor_to_cell_types(np.zeros(10, dtype=np.float32), 2, 2, 4)

    def test_not_one_hot(self):
        tensor = np.zeros((2, 2, 4), dtype=np.float32)
        tensor[:, :, 0] = 1.0
        tensor[1, 1, 2] = 1.0
        with pytest.raises(ValueError, match=r"Cell \(1, 1\) is not one-hot"):
            tensor_to_cell_types(tensor, 2, 2, 4)
