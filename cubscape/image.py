"""An in-memory 32-bit pixel image and colour packing."""

from __future__ import annotations

import sys
from array import array

_TYPECODE = "I" if array("I").itemsize == 4 else "L"
_MASK = 0xFFFFFFFF


def trgb(t: int, r: int, g: int, b: int) -> int:
    """Pack transparency, red, green and blue channels into one colour value."""
    return (t << 24) | (r << 16) | (g << 8) | b


class Image:
    """A width x height grid of 32-bit pixels, initially all zero (black)."""

    bits_per_pixel = 32

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = array(_TYPECODE, bytes(4 * width * height))

    @property
    def line_length(self) -> int:
        """Number of bytes in one row of pixels."""
        return self.width * 4

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} image"
            )
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> int:
        """Return the unsigned 32-bit colour at (x, y)."""
        return self._pixels[self._offset(x, y)]

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store the low 32 bits of ``color`` at (x, y)."""
        self._pixels[self._offset(x, y)] = color & _MASK

    def fill(self, color: int) -> None:
        """Set every pixel to ``color``."""
        value = color & _MASK
        for index in range(len(self._pixels)):
            self._pixels[index] = value

    def to_bytes(self) -> bytes:
        """Return the pixels as little-endian 32-bit words (B, G, R, A byte order)."""
        if sys.byteorder == "little":
            return self._pixels.tobytes()
        swapped = array(_TYPECODE, self._pixels)
        swapped.byteswap()
        return swapped.tobytes()