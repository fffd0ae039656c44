"""Pytest configuration and fixtures."""

import pytest

from netpbm_converter import FormatTag, PixelBuffer


@pytest.fixture
def ascii_bitmap_data() -> bytes:
    """2 rows x 3 columns ASCII bitmap (bitmap headers are rows first)."""
    return b"P1\n2 3\n1 0 1\n0 1 0\n"


@pytest.fixture
def ascii_greymap_data() -> bytes:
    """3 columns x 2 rows ASCII greymap."""
    return b"P2\n3 2\n255\n10 20 30\n40 50 60\n"


@pytest.fixture
def greymap() -> PixelBuffer:
    return PixelBuffer.from_rows(
        FormatTag.BINARY_GREYMAP,
        [[0, 64, 127, 128], [200, 255, 1, 2], [9, 8, 7, 6]],
        max_value=255,
    )


@pytest.fixture
def bitmap() -> PixelBuffer:
    return PixelBuffer.from_rows(
        FormatTag.BINARY_BITMAP,
        [
            [1, 0, 0, 1, 1, 0, 1, 0, 1, 1],
            [0, 0, 1, 1, 0, 1, 0, 0, 0, 1],
            [1, 1, 1, 1, 1, 1, 1, 1, 1, 1],
        ],
    )


@pytest.fixture
def write_image(tmp_path):
    """Write raw bytes to a file in tmp_path and return its path."""

    def _write(name: str, data: bytes) -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    return _write
