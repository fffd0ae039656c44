"""Netpbm bitmap/greymap codec and in-memory transforms."""

from .netpbm_format import FormatError, FormatTag, NetpbmHeader
from .netpbm_io import decode, encode, load, save, write
from .pixel_buffer import PixelBuffer

__all__ = [
    "FormatError",
    "FormatTag",
    "NetpbmHeader",
    "PixelBuffer",
    "decode",
    "encode",
    "load",
    "save",
    "write",
]
