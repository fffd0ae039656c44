"""
PGM Greymap Codec

Decodes and encodes 8-bit greymap images.
Supports both P2 (ASCII) and P5 (binary) PGM formats. Binary samples are
stored one byte per pixel and are not scaled by the max value.
"""

import numpy as np

from .netpbm_format import FormatError, FormatTag, NetpbmHeader, parse_decimal
from .pixel_buffer import PixelBuffer
from .token_reader import TokenReader


def decode_pgm(reader: TokenReader, header: NetpbmHeader) -> PixelBuffer:
    """
    Decode greymap samples following the header.

    Args:
        reader: Reader positioned at the first sample
        header: Header already read from the same reader

    Returns:
        PixelBuffer with uint8 samples
    """
    if header.format_tag == FormatTag.ASCII_GREYMAP:
        arena = _read_ascii(reader, header)
    elif header.format_tag == FormatTag.BINARY_GREYMAP:
        arena = _read_binary(reader, header)
    else:
        raise FormatError(f"{reader.name}: {header.format_tag.magic} is not a greymap")

    return PixelBuffer(
        header.format_tag, header.width, header.height, arena, header.max_value
    )


def _read_ascii(reader: TokenReader, header: NetpbmHeader) -> np.ndarray:
    """
    Read ASCII format PGM data.

    Args:
        reader: Reader positioned at image data
        header: Parsed header

    Returns:
        Flat uint8 array of width * height samples
    """
    count = header.width * header.height
    arena = np.zeros(count, dtype=np.uint8)

    for index in range(count):
        token = reader.next_token()
        if token is None:
            raise FormatError(
                f"{reader.name}: truncated greymap data, "
                f"expected {count} samples, got {index}"
            )
        value = parse_decimal(token)
        if value is None:
            raise FormatError(
                f"{reader.name}:{reader.last_line_number}: "
                f"invalid greymap sample {token!r}"
            )
        if not 0 <= value <= header.max_value:
            raise FormatError(
                f"{reader.name}:{reader.last_line_number}: "
                f"sample {value} outside 0-{header.max_value}"
            )
        arena[index] = value

    return arena


def _read_binary(reader: TokenReader, header: NetpbmHeader) -> np.ndarray:
    """
    Read binary format PGM data.

    Args:
        reader: Reader positioned at image data
        header: Parsed header

    Returns:
        Flat uint8 array of width * height samples
    """
    count = header.width * header.height
    data = reader.read_bytes(count)
    if len(data) != count:
        raise FormatError(
            f"{reader.name}: truncated greymap data, "
            f"expected {count} bytes, got {len(data)}"
        )

    arena = np.frombuffer(data, dtype=np.uint8).copy()
    if arena.max() > header.max_value:
        raise FormatError(
            f"{reader.name}: sample {int(arena.max())} exceeds "
            f"max value {header.max_value}"
        )
    return arena


def encode_pgm(buffer: PixelBuffer) -> bytes:
    """
    Encode greymap samples (without the header).

    Raises:
        FormatError: If the buffer does not carry a greymap format tag
    """
    grid = buffer.samples

    if buffer.format_tag == FormatTag.ASCII_GREYMAP:
        lines = [" ".join(str(int(value)) for value in row) for row in grid]
        return "".join(line + "\n" for line in lines).encode("ascii")

    if buffer.format_tag == FormatTag.BINARY_GREYMAP:
        return grid.astype(np.uint8).tobytes()

    raise FormatError(f"cannot encode {buffer.format_tag!r} as a greymap")
