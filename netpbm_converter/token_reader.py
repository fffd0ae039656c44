"""
Netpbm Token Reader

Splits a fully buffered Netpbm file into header lines, whitespace-separated
sample tokens and raw sample bytes. Lines (and trailing text) starting with
'#' are comments and never reach the caller.
"""

from typing import Optional

WHITESPACE = b" \t\r\n\v\f"


class TokenReader:
    """Sequential reader over the bytes of one Netpbm file."""

    def __init__(self, data: bytes, name: str = "<stream>"):
        """
        Initialize TokenReader.

        Args:
            data: Complete file contents
            name: Logical file name used in error messages
        """
        self.data = data
        self.name = name
        self.position = 0
        self._line = 1
        self._last_line = 1

    @property
    def line_number(self) -> int:
        """1-based line number of the current read position."""
        return self._line

    def at_end(self) -> bool:
        return self.position >= len(self.data)

    def next_line(self, skip_comments: bool = True) -> Optional[str]:
        """
        Return the next non-blank line, skipping comment lines by default.

        The read position is left just after the line's newline, which is
        where packed sample data starts once the header is complete.

        Returns:
            Stripped line text, or None when the data is exhausted
        """
        while not self.at_end():
            end = self.data.find(b"\n", self.position)
            if end < 0:
                raw = self.data[self.position :]
                self.position = len(self.data)
            else:
                raw = self.data[self.position : end]
                self.position = end + 1

            line_number = self._line
            if end >= 0:
                self._line += 1

            line = raw.decode("ascii", errors="replace").strip()
            if not line or (skip_comments and line.startswith("#")):
                continue

            self._last_line = line_number
            return line

        return None

    def next_token(self) -> Optional[str]:
        """
        Return the next whitespace-delimited token, skipping comments.

        Returns:
            Token text, or None when the data is exhausted
        """
        data = self.data
        size = len(data)

        while self.position < size:
            byte = data[self.position : self.position + 1]
            if byte == b"#":
                end = data.find(b"\n", self.position)
                self.position = size if end < 0 else end
            elif byte in WHITESPACE:
                if byte == b"\n":
                    self._line += 1
                self.position += 1
            else:
                break

        if self.position >= size:
            return None

        start = self.position
        while self.position < size and data[self.position : self.position + 1] not in (
            WHITESPACE + b"#"
        ):
            self.position += 1

        self._last_line = self._line
        return data[start : self.position].decode("ascii", errors="replace")

    @property
    def last_line_number(self) -> int:
        """Line number of the most recent line or token returned."""
        return self._last_line

    def read_bytes(self, count: int) -> bytes:
        """
        Read up to count raw bytes from the current position.

        Fewer bytes are returned when the data is truncated; the caller
        decides whether that is an error.
        """
        chunk = self.data[self.position : self.position + count]
        self.position += len(chunk)
        return chunk
