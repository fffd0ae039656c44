"""Tests for format tags and header parsing."""

import pytest

from netpbm_converter.netpbm_format import (
    FormatError,
    FormatTag,
    NetpbmHeader,
    format_header,
    read_header,
)
from netpbm_converter.token_reader import TokenReader


def _header(data: bytes) -> NetpbmHeader:
    return read_header(TokenReader(data, "test.pnm"))


def test_format_tag_properties():
    assert FormatTag.from_magic("P4") is FormatTag.BINARY_BITMAP
    assert FormatTag.ASCII_BITMAP.is_bitmap and FormatTag.ASCII_BITMAP.is_ascii
    assert FormatTag.BINARY_GREYMAP.is_greymap and FormatTag.BINARY_GREYMAP.is_binary
    assert FormatTag.ASCII_GREYMAP.binary_variant is FormatTag.BINARY_GREYMAP
    assert FormatTag.BINARY_BITMAP.ascii_variant is FormatTag.ASCII_BITMAP
    assert FormatTag.ASCII_GREYMAP.extension == ".pgm"


@pytest.mark.parametrize("magic", ["P3", "P6", "P9", "p1", "PX"])
def test_unrecognized_magic_value(magic):
    with pytest.raises(FormatError, match="unrecognized magic value"):
        _header(f"{magic}\n2 2\n".encode())


def test_bitmap_dimensions_are_rows_then_columns():
    header = _header(b"P1\n2 3\n")
    assert header == NetpbmHeader(FormatTag.ASCII_BITMAP, width=3, height=2)


def test_greymap_dimensions_are_columns_then_rows():
    header = _header(b"P5\n3 2\n200\n")
    assert header == NetpbmHeader(FormatTag.BINARY_GREYMAP, 3, 2, 200)


def test_comment_lines_are_skipped():
    header = _header(b"P2\n# created by hand\n# second comment\n4 5\n# max\n15\n")
    assert (header.width, header.height, header.max_value) == (4, 5, 15)


def test_leading_blank_lines_before_magic():
    assert _header(b"\n\nP4\n1 1\n").format_tag is FormatTag.BINARY_BITMAP


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"P1\n",
        b"P1\n3\n",
        b"P1\n3 4 5\n",
        b"P1\nthree 4\n",
        b"P1\n0 4\n",
        b"P2\n4 -1\n255\n",
        b"P2\n4 4\n",
        b"P2\n4 4\n0\n",
        b"P2\n4 4\n256\n",
        b"P2\n4 4\n255 1\n",
        b"P5\n4 4\nabc\n",
        b"P2\n1_0 1\n255\n",
        b"P2\n+5 1\n255\n",
        b"P1\n2 \xd9\xa3\n",
        b"P2\n2 1\n2_5\n",
        b"# c\nP1\n1 1\n1\n",
    ],
)
def test_malformed_headers(data):
    with pytest.raises(FormatError):
        _header(data)


def test_error_mentions_name_and_line():
    with pytest.raises(FormatError, match=r"test\.pnm:3"):
        _header(b"P1\n# comment\nx 4\n")


def test_format_header_uses_per_format_order():
    assert format_header(NetpbmHeader(FormatTag.ASCII_BITMAP, 3, 2)) == b"P1\n2 3\n"
    assert format_header(NetpbmHeader(FormatTag.BINARY_GREYMAP, 3, 2, 255)) == (
        b"P5\n3 2\n255\n"
    )


def test_comment_before_magic_value_is_rejected():
    with pytest.raises(FormatError, match="unrecognized magic value"):
        _header(b"# created by hand\nP1\n1 1\n")
