"""Tests for the PNG codec adapter."""

import pytest
import numpy as np

from match3_obs.board import GridBoard
from match3_obs.sensor.packer import ChannelPacker
from match3_obs.sensor.png import PNG_SIGNATURE, decode_png, encode_png, split_png_stream


@pytest.fixture
def packed():
    board = GridBoard([[0, 1, 2], [2, 1, 0]], num_cell_types=3)
    return ChannelPacker(2, 3).pack(board, 0).copy()


class TestEncodePng:
    """Test PNG compression of pixel buffers."""

    def test_signature(self, packed):
        assert encode_png(packed).startswith(PNG_SIGNATURE)

    def test_lossless(self, packed):
        np.testing.assert_array_equal(decode_png(encode_png(packed)), packed)

    def test_image_size(self, packed):
        """Test that rows map to height and columns to width."""
        decoded = decode_png(encode_png(packed))
        assert decoded.shape == (2, 3, 3)

    def test_float_buffer_scaled(self):
        board = GridBoard([[0, 1], [2, 0]], num_cell_types=3)
        as_float = ChannelPacker(2, 2, dtype=np.float32).pack(board, 0).copy()
        as_uint8 = ChannelPacker(2, 2).pack(board, 0).copy()

        np.testing.assert_array_equal(decode_png(encode_png(as_float)), as_uint8)

    def test_rejects_wrong_shape(self):
        with pytest.raises(ValueError, match="Expected pixel buffer"):
            encode_png(np.zeros((2, 2), dtype=np.uint8))


class TestSplitPngStream:
    """Test splitting concatenated PNG files."""

    def test_split(self, packed):
        first = encode_png(packed)
        second = encode_png(np.zeros((2, 3, 3), dtype=np.uint8))

        assert split_png_stream(first + second) == [first, second]

    def test_empty(self):
        assert split_png_stream(b"") == []

    def test_missing_signature(self, packed):
        with pytest.raises(ValueError, match="Missing PNG signature"):
            split_png_stream(encode_png(packed) + b"garbage!")

    def test_truncated(self, packed):
        data = encode_png(packed)
        with pytest.raises(ValueError, match="Truncated PNG stream"):
            split_png_stream(data[:-6])
