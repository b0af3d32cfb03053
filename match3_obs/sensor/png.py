"""
PNG codec adapter.

Compression itself is Pillow's job; this module only moves pixel buffers in
and out of it and splits the concatenated PNG stream used by compressed
observations back into individual files.
"""

import io
import struct
from typing import List

import numpy as np
from PIL import Image

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def encode_png(pixels: np.ndarray) -> bytes:
    """
    Compress a (rows, columns, 3) pixel buffer to PNG bytes.

    Float buffers are treated as 0.0-1.0 and scaled to 0-255. Row 0 becomes
    the top row of the image.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected pixel buffer of shape (rows, columns, 3), got {pixels.shape}")

    if np.issubdtype(pixels.dtype, np.floating):
        rgb = np.rint(np.clip(pixels, 0.0, 1.0) * 255).astype(np.uint8)
    else:
        rgb = pixels.astype(np.uint8, copy=False)

    buffer = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(rgb)).save(buffer, format="PNG")
    return buffer.getvalue()


def decode_png(data: bytes) -> np.ndarray:
    """Decode PNG bytes into a uint8 (rows, columns, 3) array."""
    with Image.open(io.BytesIO(data)) as image:
        return np.array(image.convert("RGB"), dtype=np.uint8)


def split_png_stream(data: bytes) -> List[bytes]:
    """
    Split back-to-back PNG files into a list of individual files.

    Raises:
        ValueError: If the stream is truncated or doesn't start with a PNG signature
    """
    images = []
    pos = 0
    while pos < len(data):
        start = pos
        if data[pos:pos + len(PNG_SIGNATURE)] != PNG_SIGNATURE:
            raise ValueError(f"Missing PNG signature at byte {pos}")
        pos += len(PNG_SIGNATURE)

        while True:
            if pos + 8 > len(data):
                raise ValueError("Truncated PNG stream")
            length, chunk_type = struct.unpack(">I4s", data[pos:pos + 8])
            # length + type + payload + crc
            pos += 8 + length + 4
            if pos > len(data):
                raise ValueError("Truncated PNG stream")
            if chunk_type == b"IEND":
                break

        images.append(data[start:pos])

    return images
