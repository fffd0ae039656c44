"""
Pixel Buffer and Transform Engine

In-memory sample grid for a decoded bitmap or greymap image. Samples live in
one contiguous numpy arena indexed by row * width + col; bitmaps store bool,
greymaps store uint8 bounded by max_value.

All transforms operate in place and return the buffer, except the format
conversions, which return a new, independently owned buffer.
"""

import numpy as np
from typing import Optional, Sequence, Tuple, Union

from .netpbm_format import MAX_SAMPLE_VALUE, FormatError, FormatTag

Sample = Union[bool, int]


class PixelBuffer:
    """Class holding the samples and metadata of one Netpbm image."""

    def __init__(
        self,
        format_tag: FormatTag,
        width: int,
        height: int,
        arena: np.ndarray,
        max_value: Optional[int] = None,
    ):
        """
        Initialize PixelBuffer. Buffers are normally created by the decoders.

        Args:
            format_tag: On-disk encoding and sample type
            width: Number of columns
            height: Number of rows
            arena: Flat array of width * height samples in row-major order
            max_value: Upper sample bound (greymap only)
        """
        self.format_tag = format_tag
        self.width = width
        self.height = height
        self.max_value = max_value if format_tag.is_greymap else None
        self._arena = arena

    @classmethod
    def from_rows(
        cls,
        format_tag: FormatTag,
        rows: Sequence[Sequence[Sample]],
        max_value: Optional[int] = None,
    ) -> "PixelBuffer":
        """
        Build a buffer from nested rows of samples.

        Args:
            format_tag: Target format
            rows: height rows of width samples each
            max_value: Greymap max value (default: 255)

        Raises:
            FormatError: If rows are ragged or samples violate the format
        """
        height = len(rows)
        width = len(rows[0]) if height else 0
        if any(len(row) != width for row in rows):
            raise FormatError("rows must all have the same length")

        values = np.array(rows).reshape(-1)

        if format_tag.is_bitmap:
            if not np.isin(values, (0, 1)).all():
                raise FormatError("bitmap samples must be 0 or 1")
            return cls(format_tag, width, height, values.astype(bool))

        if max_value is None:
            max_value = MAX_SAMPLE_VALUE
        if not 0 < max_value <= MAX_SAMPLE_VALUE:
            raise FormatError(f"max value {max_value} out of range")

        if values.size and not (
            np.issubdtype(values.dtype, np.integer) or values.dtype == bool
        ):
            raise FormatError("greymap samples must be integers")
        values = values.astype(np.int64)
        if values.size and (values.min() < 0 or values.max() > max_value):
            raise FormatError(f"sample values must be within 0-{max_value}")

        return cls(format_tag, width, height, values.astype(np.uint8), max_value)

    @property
    def samples(self) -> np.ndarray:
        """Read-only (height, width) view of the sample arena."""
        view = self._arena.reshape((self.height, self.width))
        view.flags.writeable = False
        return view

    @property
    def zero_value(self) -> Sample:
        return False if self.format_tag.is_bitmap else 0

    def size(self) -> Tuple[int, int]:
        """
        Get image dimensions.

        Returns:
            Tuple of (width, height)
        """
        return (self.width, self.height)

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x: int, y: int) -> Sample:
        """
        Get the sample at column x, row y.

        Coordinates outside the image read as the zero value (False / 0).
        """
        if not self._contains(x, y):
            return self.zero_value
        value = self._arena[y * self.width + x]
        return bool(value) if self.format_tag.is_bitmap else int(value)

    def set(self, x: int, y: int, value: Sample):
        """
        Set the sample at column x, row y.

        Raises:
            IndexError: If (x, y) lies outside the image
            ValueError: If a greymap value is not an integer in 0..max_value
        """
        if not self._contains(x, y):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} image"
            )

        if self.format_tag.is_bitmap:
            self._arena[y * self.width + x] = bool(value)
            return

        if not isinstance(value, (int, np.integer)):
            raise ValueError(f"sample {value!r} is not an integer")
        if not 0 <= value <= self.max_value:
            raise ValueError(f"sample {value} outside 0-{self.max_value}")
        self._arena[y * self.width + x] = value

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(
            self.format_tag,
            self.width,
            self.height,
            self._arena.copy(),
            self.max_value,
        )

    def _grid(self) -> np.ndarray:
        return self._arena.reshape((self.height, self.width))

    def _replace_grid(self, grid: np.ndarray):
        self.height, self.width = grid.shape
        self._arena = np.ascontiguousarray(grid).reshape(-1)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def invert(self) -> "PixelBuffer":
        """Negate bitmap samples; map greymap samples s to max_value - s."""
        if self.format_tag.is_bitmap:
            np.logical_not(self._arena, out=self._arena)
        else:
            self._arena = (self.max_value - self._arena).astype(np.uint8)
        return self

    def flip(self) -> "PixelBuffer":
        """Mirror horizontally: column j swaps with column width - 1 - j."""
        self._replace_grid(self._grid()[:, ::-1])
        return self

    def flop(self) -> "PixelBuffer":
        """Mirror vertically: row i swaps with row height - 1 - i."""
        self._replace_grid(self._grid()[::-1, :])
        return self

    def rotate(self) -> "PixelBuffer":
        """
        Rotate 90 degrees clockwise.

        The new grid satisfies new[x][y] = old[height - 1 - y][x], so width
        and height swap.
        """
        self._replace_grid(np.rot90(self._grid(), k=-1))
        return self

    def set_format_tag(self, format_tag: FormatTag) -> "PixelBuffer":
        """
        Switch between the ASCII and binary encoding of the same format.

        Raises:
            FormatError: If the tag belongs to the other format family
        """
        if format_tag.is_bitmap != self.format_tag.is_bitmap:
            raise FormatError(
                f"cannot retag {self.format_tag.magic} as {format_tag.magic}; "
                "use to_bitmap() or to_greymap()"
            )
        self.format_tag = format_tag
        return self

    def set_max_value(self, max_value: int) -> "PixelBuffer":
        """
        Change the greymap max value, rescaling samples (rounding half up).

        Raises:
            FormatError: If the buffer is a bitmap
            ValueError: If max_value is outside 1..255
        """
        if self.format_tag.is_bitmap:
            raise FormatError("bitmaps have no max value")
        if not 0 < max_value <= MAX_SAMPLE_VALUE:
            raise ValueError(f"max value {max_value} out of range (1-255)")

        old = self.max_value
        if max_value != old:
            scaled = (self._arena.astype(np.int64) * max_value + old // 2) // old
            self._arena = scaled.astype(np.uint8)
            self.max_value = max_value
        return self

    def to_bitmap(
        self, format_tag: FormatTag = FormatTag.BINARY_BITMAP
    ) -> "PixelBuffer":
        """
        Threshold a greymap into a new bitmap.

        A sample becomes True iff it is greater than max_value // 2. The
        source buffer is unchanged.
        """
        if self.format_tag.is_bitmap:
            raise FormatError("buffer is already a bitmap")
        if not format_tag.is_bitmap:
            raise FormatError(f"{format_tag.magic} is not a bitmap format")

        arena = self._arena > (self.max_value // 2)
        return PixelBuffer(format_tag, self.width, self.height, arena)

    def to_greymap(
        self,
        max_value: int = MAX_SAMPLE_VALUE,
        format_tag: FormatTag = FormatTag.BINARY_GREYMAP,
    ) -> "PixelBuffer":
        """
        Expand a bitmap into a new greymap: True -> max_value, False -> 0.

        The source buffer is unchanged.
        """
        if self.format_tag.is_greymap:
            raise FormatError("buffer is already a greymap")
        if not format_tag.is_greymap:
            raise FormatError(f"{format_tag.magic} is not a greymap format")
        if not 0 < max_value <= MAX_SAMPLE_VALUE:
            raise ValueError(f"max value {max_value} out of range (1-255)")

        arena = np.where(self._arena, max_value, 0).astype(np.uint8)
        return PixelBuffer(format_tag, self.width, self.height, arena, max_value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.format_tag == other.format_tag
            and self.size() == other.size()
            and self.max_value == other.max_value
            and np.array_equal(self._arena, other._arena)
        )

    def __str__(self) -> str:
        """String representation."""
        lines = [
            "PixelBuffer(",
            f"  format: {self.format_tag.magic}",
            f"  dimensions: {self.width}x{self.height}",
        ]
        if self.max_value is not None:
            lines.append(f"  max_value: {self.max_value}")
        lines.append(")")
        return "\n".join(lines)
