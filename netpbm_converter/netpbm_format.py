"""
Netpbm Format Definitions

Format tags, the format error type and the header reader/writer shared by
the bitmap (P1/P4) and greymap (P2/P5) codecs.

Header layout:

    <magic>
    [# comment lines]
    <dimensions>
    [<max value>]        greymap only

The dimension line is "rows columns" for bitmaps and "columns rows" for
greymaps. Files written by this package use the same per-format order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .token_reader import TokenReader

MAX_SAMPLE_VALUE = 255


class FormatError(ValueError):
    """Raised when Netpbm data cannot be parsed or encoded."""


class FormatTag(Enum):
    ASCII_BITMAP = "P1"
    ASCII_GREYMAP = "P2"
    BINARY_BITMAP = "P4"
    BINARY_GREYMAP = "P5"

    @classmethod
    def from_magic(cls, magic: str, name: str = "<stream>") -> "FormatTag":
        """
        Look up the tag for a magic value.

        Raises:
            FormatError: If the magic value is not a supported format
        """
        for tag in cls:
            if tag.value == magic:
                return tag
        raise FormatError(f"{name}: unrecognized magic value {magic!r}")

    @property
    def magic(self) -> str:
        return self.value

    @property
    def is_bitmap(self) -> bool:
        return self in (FormatTag.ASCII_BITMAP, FormatTag.BINARY_BITMAP)

    @property
    def is_greymap(self) -> bool:
        return not self.is_bitmap

    @property
    def is_binary(self) -> bool:
        return self in (FormatTag.BINARY_BITMAP, FormatTag.BINARY_GREYMAP)

    @property
    def is_ascii(self) -> bool:
        return not self.is_binary

    @property
    def ascii_variant(self) -> "FormatTag":
        return FormatTag.ASCII_BITMAP if self.is_bitmap else FormatTag.ASCII_GREYMAP

    @property
    def binary_variant(self) -> "FormatTag":
        return FormatTag.BINARY_BITMAP if self.is_bitmap else FormatTag.BINARY_GREYMAP

    @property
    def extension(self) -> str:
        return ".pbm" if self.is_bitmap else ".pgm"


@dataclass
class NetpbmHeader:
    """Parsed Netpbm header."""

    format_tag: FormatTag
    width: int
    height: int
    max_value: Optional[int] = None


def parse_decimal(text: str) -> Optional[int]:
    """Parse an unsigned ASCII decimal integer; None if text is anything else."""
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


def _parse_int(text: str, field: str, reader: TokenReader) -> int:
    value = parse_decimal(text)
    if value is None:
        raise FormatError(
            f"{reader.name}:{reader.last_line_number}: malformed {field} {text!r}"
        )
    return value


def read_header(reader: TokenReader) -> NetpbmHeader:
    """
    Read the magic value, dimensions and (greymap) max value.

    Args:
        reader: Reader positioned at the start of the file

    Returns:
        NetpbmHeader; the reader is left at the first sample

    Raises:
        FormatError: On an unknown magic value or malformed header fields
    """
    magic = reader.next_line(skip_comments=False)
    if magic is None:
        raise FormatError(f"{reader.name}: empty file, missing magic value")
    format_tag = FormatTag.from_magic(magic, reader.name)

    line = reader.next_line()
    if line is None:
        raise FormatError(f"{reader.name}: missing dimensions")
    fields = line.split()
    if len(fields) != 2:
        raise FormatError(
            f"{reader.name}:{reader.last_line_number}: "
            f"expected two dimension fields, got {line!r}"
        )

    if format_tag.is_bitmap:
        height = _parse_int(fields[0], "row count", reader)
        width = _parse_int(fields[1], "column count", reader)
    else:
        width = _parse_int(fields[0], "column count", reader)
        height = _parse_int(fields[1], "row count", reader)

    if width <= 0 or height <= 0:
        raise FormatError(
            f"{reader.name}:{reader.last_line_number}: "
            f"dimensions must be positive, got {width}x{height}"
        )

    max_value = None
    if format_tag.is_greymap:
        line = reader.next_line()
        if line is None:
            raise FormatError(f"{reader.name}: missing max value")
        fields = line.split()
        if len(fields) != 1:
            raise FormatError(
                f"{reader.name}:{reader.last_line_number}: "
                f"expected a single max value, got {line!r}"
            )
        max_value = _parse_int(fields[0], "max value", reader)
        if not 0 < max_value <= MAX_SAMPLE_VALUE:
            raise FormatError(
                f"{reader.name}:{reader.last_line_number}: "
                f"max value {max_value} out of range (1-{MAX_SAMPLE_VALUE})"
            )

    return NetpbmHeader(format_tag, width, height, max_value)


def format_header(header: NetpbmHeader) -> bytes:
    """Render a header using the per-format dimension order."""
    if header.format_tag.is_bitmap:
        text = f"{header.format_tag.magic}\n{header.height} {header.width}\n"
    else:
        text = (
            f"{header.format_tag.magic}\n{header.width} {header.height}\n"
            f"{header.max_value}\n"
        )
    return text.encode("ascii")
