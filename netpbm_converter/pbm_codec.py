"""
PBM Bitmap Codec

Decodes and encodes 1-bit images in both Netpbm bitmap encodings:
- P1 (ASCII): '0'/'1' tokens separated by whitespace, one row per line
- P4 (binary): eight pixels per byte, most significant bit first, every
  row padded to a byte boundary
"""

import numpy as np

from .netpbm_format import FormatError, FormatTag, NetpbmHeader
from .pixel_buffer import PixelBuffer
from .token_reader import TokenReader


def row_bytes(width: int) -> int:
    """Number of bytes a packed P4 row occupies."""
    return (width + 7) // 8


def decode_pbm(reader: TokenReader, header: NetpbmHeader) -> PixelBuffer:
    """
    Decode bitmap samples following the header.

    Args:
        reader: Reader positioned at the first sample
        header: Header already read from the same reader

    Returns:
        PixelBuffer with boolean samples
    """
    if header.format_tag == FormatTag.ASCII_BITMAP:
        arena = _read_ascii(reader, header.width, header.height)
    elif header.format_tag == FormatTag.BINARY_BITMAP:
        arena = _read_binary(reader, header.width, header.height)
    else:
        raise FormatError(f"{reader.name}: {header.format_tag.magic} is not a bitmap")

    return PixelBuffer(header.format_tag, header.width, header.height, arena)


def _read_ascii(reader: TokenReader, width: int, height: int) -> np.ndarray:
    """Read width * height '0'/'1' tokens."""
    arena = np.zeros(width * height, dtype=bool)

    for index in range(width * height):
        token = reader.next_token()
        if token is None:
            raise FormatError(
                f"{reader.name}: truncated bitmap data, "
                f"expected {width * height} samples, got {index}"
            )
        if token == "1":
            arena[index] = True
        elif token != "0":
            raise FormatError(
                f"{reader.name}:{reader.last_line_number}: "
                f"invalid bitmap sample {token!r}"
            )

    return arena


def _read_binary(reader: TokenReader, width: int, height: int) -> np.ndarray:
    """Read packed rows and drop the padding bits."""
    stride = row_bytes(width)
    expected = stride * height
    data = reader.read_bytes(expected)
    if len(data) != expected:
        raise FormatError(
            f"{reader.name}: truncated bitmap data, "
            f"expected {expected} bytes, got {len(data)}"
        )

    packed = np.frombuffer(data, dtype=np.uint8).reshape((height, stride))
    bits = np.unpackbits(packed, axis=1)[:, :width]
    return bits.astype(bool).reshape(-1)


def encode_pbm(buffer: PixelBuffer) -> bytes:
    """
    Encode bitmap samples (without the header).

    Raises:
        FormatError: If the buffer does not carry a bitmap format tag
    """
    grid = buffer.samples

    if buffer.format_tag == FormatTag.ASCII_BITMAP:
        lines = [" ".join("1" if value else "0" for value in row) for row in grid]
        return "".join(line + "\n" for line in lines).encode("ascii")

    if buffer.format_tag == FormatTag.BINARY_BITMAP:
        # np.packbits zero-pads each row to a whole byte
        return np.packbits(grid, axis=1).tobytes()

    raise FormatError(f"cannot encode {buffer.format_tag!r} as a bitmap")
