"""In-memory 32-bit images."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class Image:
    """A ``width`` x ``height`` image of 32-bit pixels in a byte buffer.

    ``endian`` is 0 for little-endian pixel bytes and 1 for big-endian.
    """

    width: int
    height: int
    endian: int = 0
    bits_per_pixel: int = field(default=32, init=False)
    data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"image size must be positive, got {self.width}x{self.height}"
            )
        self.data = bytearray(self.size_line * self.height)

    @property
    def bytes_per_pixel(self) -> int:
        return self.bits_per_pixel // 8

    @property
    def size_line(self) -> int:
        """Number of bytes in one row of pixels."""
        return self.width * self.bytes_per_pixel

    @property
    def _byteorder(self) -> str:
        return "big" if self.endian else "little"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return y * self.size_line + x * self.bytes_per_pixel

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` as an unsigned 32-bit value at (x, y)."""
        start = self._offset(x, y)
        self.data[start:start + self.bytes_per_pixel] = (
            color & 0xFFFFFFFF
        ).to_bytes(self.bytes_per_pixel, self._byteorder)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the unsigned 32-bit value at (x, y)."""
        start = self._offset(x, y)
        return int.from_bytes(
            self.data[start:start + self.bytes_per_pixel], self._byteorder
        )

    def fill(self, color: int) -> None:
        """Set every pixel to ``color``."""
        pixel = (color & 0xFFFFFFFF).to_bytes(self.bytes_per_pixel, self._byteorder)
        self.data[:] = pixel * (self.width * self.height)