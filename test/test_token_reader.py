"""Tests for the token reader."""

from netpbm_converter.token_reader import TokenReader


def test_next_line_skips_comments_and_blank_lines():
    reader = TokenReader(b"P2\n# a comment\n\n  # indented comment\n3 2\n")
    assert reader.next_line() == "P2"
    assert reader.next_line() == "3 2"
    assert reader.last_line_number == 5
    assert reader.next_line() is None


def test_next_line_without_trailing_newline():
    reader = TokenReader(b"P1\n2 3")
    assert reader.next_line() == "P1"
    assert reader.next_line() == "2 3"
    assert reader.at_end()


def test_next_token_splits_on_any_whitespace():
    reader = TokenReader(b"1 0\t1\r\n0  1\n\n0")
    tokens = []
    while True:
        token = reader.next_token()
        if token is None:
            break
        tokens.append(token)
    assert tokens == ["1", "0", "1", "0", "1", "0"]


def test_next_token_skips_comments():
    reader = TokenReader(b"10 # ignored 99\n# 77\n20#30\n")
    assert reader.next_token() == "10"
    assert reader.next_token() == "20"
    assert reader.last_line_number == 3
    assert reader.next_token() is None


def test_read_bytes_after_header_line():
    reader = TokenReader(b"P5\n\x00\x0a\xff")
    assert reader.next_line() == "P5"
    assert reader.read_bytes(3) == b"\x00\x0a\xff"
    assert reader.read_bytes(1) == b""


def test_read_bytes_truncated_returns_available():
    reader = TokenReader(b"\x01\x02")
    assert reader.read_bytes(5) == b"\x01\x02"
    assert reader.at_end()


def test_next_line_can_return_comment_lines():
    reader = TokenReader(b"\n# not a magic value\nP1\n")
    assert reader.next_line(skip_comments=False) == "# not a magic value"
    assert reader.last_line_number == 2
