"""Tests for the P2/P5 greymap codec."""

import io

import pytest

from netpbm_converter import FormatError, FormatTag, PixelBuffer, decode, encode, write


def test_decode_ascii_greymap(ascii_greymap_data):
    image = decode(ascii_greymap_data)
    assert image.format_tag is FormatTag.ASCII_GREYMAP
    assert image.size() == (3, 2)
    assert image.max_value == 255
    assert image.at(1, 1) == 50
    assert image.samples.tolist() == [[10, 20, 30], [40, 50, 60]]


def test_ascii_greymap_invert(ascii_greymap_data):
    image = decode(ascii_greymap_data).invert()
    assert image.at(1, 1) == 205


def test_encode_ascii_greymap(ascii_greymap_data):
    assert encode(decode(ascii_greymap_data)) == ascii_greymap_data


def test_ascii_greymap_with_irregular_layout():
    image = decode(b"P2\n2 2\n# max\n9\n1\n2 3\n  4 # end\n")
    assert image.samples.tolist() == [[1, 2], [3, 4]]


@pytest.mark.parametrize(
    "data, message",
    [
        (b"P2\n2 1\n9\n1 10\n", "outside 0-9"),
        (b"P2\n2 1\n9\n1 -1\n", "invalid greymap sample"),
        (b"P2\n2 1\n255\n1_0 2\n", "invalid greymap sample"),
        (b"P2\n2 1\n255\n+5 2\n", "invalid greymap sample"),
        (b"P2\n2 1\n9\n1 2.5\n", "invalid greymap sample"),
        (b"P2\n2 2\n9\n1 2 3\n", "truncated"),
    ],
)
def test_ascii_greymap_errors(data, message):
    with pytest.raises(FormatError, match=message):
        decode(data)


def test_decode_binary_greymap_without_scaling():
    image = decode(b"P5\n2 2\n100\n" + bytes([0, 50, 99, 100]))
    assert image.format_tag is FormatTag.BINARY_GREYMAP
    assert image.max_value == 100
    assert image.samples.tolist() == [[0, 50], [99, 100]]


def test_decode_binary_greymap_from_stream():
    stream = io.BytesIO(b"P5\n1 1\n255\n\x0a")
    assert decode(stream, "stream.pgm").at(0, 0) == 10


def test_binary_greymap_sample_above_max_value():
    with pytest.raises(FormatError, match="exceeds max value"):
        decode(b"P5\n2 1\n100\n" + bytes([5, 101]))


def test_truncated_binary_greymap():
    with pytest.raises(FormatError, match="truncated"):
        decode(b"P5\n2 2\n255\n\x01\x02\x03")


def test_binary_greymap_round_trip(greymap):
    stream = io.BytesIO()
    write(greymap, stream)
    assert stream.getvalue().startswith(b"P5\n4 3\n255\n")
    assert decode(stream.getvalue()) == greymap


@pytest.mark.parametrize("tag", [FormatTag.ASCII_GREYMAP, FormatTag.BINARY_GREYMAP])
def test_round_trip_with_small_max_value(tag):
    image = PixelBuffer.from_rows(tag, [[0, 3], [7, 1]], max_value=7)
    assert decode(encode(image)) == image


def test_greymap_encoder_rejects_bitmap_tag():
    from netpbm_converter.pgm_codec import encode_pgm

    bitmap = PixelBuffer.from_rows(FormatTag.ASCII_BITMAP, [[1]])
    with pytest.raises(FormatError):
        encode_pgm(bitmap)
