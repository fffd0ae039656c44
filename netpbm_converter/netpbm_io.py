"""
Netpbm Reading and Writing

Dispatches between the bitmap and greymap codecs based on the format tag.
Stream-level functions never open or close files; load() and save() are the
path-level helpers used by the converter.
"""

from typing import BinaryIO, Union

from .netpbm_format import FormatError, FormatTag, NetpbmHeader, format_header, read_header
from .pbm_codec import decode_pbm, encode_pbm
from .pgm_codec import decode_pgm, encode_pgm
from .pixel_buffer import PixelBuffer
from .token_reader import TokenReader


def decode(source: Union[bytes, BinaryIO], name: str = "<stream>") -> PixelBuffer:
    """
    Decode a complete Netpbm image.

    Args:
        source: File contents, or a binary stream that is read to the end
        name: Logical file name used in error messages

    Returns:
        Decoded PixelBuffer

    Raises:
        FormatError: If the data is not a valid P1, P2, P4 or P5 image
    """
    data = source if isinstance(source, (bytes, bytearray)) else source.read()
    reader = TokenReader(bytes(data), name)
    header = read_header(reader)

    if header.format_tag.is_bitmap:
        return decode_pbm(reader, header)
    return decode_pgm(reader, header)


def encode(buffer: PixelBuffer) -> bytes:
    """
    Encode a buffer as a complete Netpbm image using its format tag.

    Raises:
        FormatError: If the buffer's format tag is not supported
    """
    if not isinstance(buffer.format_tag, FormatTag):
        raise FormatError(f"unrecognized format tag {buffer.format_tag!r}")

    header = NetpbmHeader(
        buffer.format_tag, buffer.width, buffer.height, buffer.max_value
    )
    if buffer.format_tag.is_bitmap:
        body = encode_pbm(buffer)
    else:
        body = encode_pgm(buffer)
    return format_header(header) + body


def write(buffer: PixelBuffer, stream: BinaryIO):
    """Encode a buffer and write it to a binary stream."""
    stream.write(encode(buffer))


def load(path: str) -> PixelBuffer:
    """
    Read and decode a Netpbm file.

    Raises:
        OSError: If the file cannot be read
        FormatError: If the contents are not a valid image
    """
    with open(path, "rb") as f:
        data = f.read()
    return decode(data, name=path)


def save(buffer: PixelBuffer, path: str):
    """
    Encode a buffer and write it to path.

    The image is encoded before the file is created, so a format error
    leaves no partial file behind.
    """
    data = encode(buffer)
    with open(path, "wb") as f:
        f.write(data)
