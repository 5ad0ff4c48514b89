from __future__ import annotations

from typing import Optional, Tuple

from ..errors import AllocationFailure, InvalidArgument
from .color import check_channel
from .header import BYTES_PER_PIXEL, BitmapHeader

FILL_BYTE = 0xFF


class PixelBuffer:
    """Row-major 24-bit BGR pixel buffer with 4-byte aligned rows.

    Row 0 is stored first and is written to the file as-is. The buffer is
    consumed by ``serialize``; after that every operation raises
    ``InvalidArgument``.
    """

    def __init__(self, width: int, height: int) -> None:
        self._header = BitmapHeader.for_size(width, height)
        try:
            self._data: Optional[bytearray] = bytearray([FILL_BYTE]) * self._header.pixel_data_size
        except (MemoryError, OverflowError) as exc:
            raise AllocationFailure(f"{self._header.pixel_data_size} bytes") from exc

    @classmethod
    def create(cls, width: int, height: int) -> "PixelBuffer":
        return cls(width, height)

    @property
    def width(self) -> int:
        return self._header.width

    @property
    def height(self) -> int:
        return self._header.height

    @property
    def stride(self) -> int:
        return self._header.stride

    @property
    def header(self) -> BitmapHeader:
        return self._header

    @property
    def consumed(self) -> bool:
        return self._data is None

    @property
    def data(self) -> bytearray:
        """Return the live pixel bytes, row padding included."""
        if self._data is None:
            raise InvalidArgument("pixel buffer was already serialized")
        return self._data

    def release(self) -> bytearray:
        """Hand the pixel bytes over and mark the buffer consumed."""
        data = self.data
        self._data = None
        return data

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def offset(self, x: int, y: int) -> int:
        """Return the byte offset of pixel (x, y)."""
        for name, value in (("x", x), ("y", y)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgument(f"{name} must be an integer, got {value!r}")
        if not self.contains(x, y):
            raise InvalidArgument(f"pixel ({x}, {y}) is outside {self.width}x{self.height}")
        return BYTES_PER_PIXEL * x + self.stride * y

    def set_pixel(self, x: int, y: int, red: int, green: int, blue: int) -> None:
        data = self.data
        pos = self.offset(x, y)
        check_channel(red, "red")
        check_channel(green, "green")
        check_channel(blue, "blue")
        data[pos] = blue
        data[pos + 1] = green
        data[pos + 2] = red

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        """Return the (red, green, blue) value stored at (x, y)."""
        data = self.data
        pos = self.offset(x, y)
        return data[pos + 2], data[pos + 1], data[pos]

    def fill_tile(self, x: int, y: int, size: int, red: int, green: int, blue: int) -> int:
        """Fill a size x size square whose top-left cell is (x, y).

        Cells outside the canvas are skipped and the fill carries on, so a
        tile hanging over the edge only paints its visible part. The result
        is the status of the last cell actually written; a tile with no cell
        on the canvas raises ``InvalidArgument``. Returns the number of
        pixels written.
        """
        data = self.data
        check_channel(red, "red")
        check_channel(green, "green")
        check_channel(blue, "blue")
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise InvalidArgument(f"tile size must be a non-negative integer, got {size!r}")
        written = 0
        last_error: Optional[InvalidArgument] = None
        for i in range(size):
            for j in range(size):
                try:
                    pos = self.offset(x + i, y + j)
                except InvalidArgument as exc:
                    last_error = exc
                    continue
                data[pos] = blue
                data[pos + 1] = green
                data[pos + 2] = red
                written += 1
        if size and not written and last_error is not None:
            raise last_error
        return written


def create_buffer(width: int, height: int) -> PixelBuffer:
    return PixelBuffer.create(width, height)


def set_pixel(buffer: PixelBuffer, x: int, y: int, red: int, green: int, blue: int) -> None:
    if buffer is None:
        raise InvalidArgument("missing pixel buffer")
    buffer.set_pixel(x, y, red, green, blue)


def fill_tile(buffer: PixelBuffer, x: int, y: int, size: int, red: int, green: int, blue: int) -> int:
    if buffer is None:
        raise InvalidArgument("missing pixel buffer")
    return buffer.fill_tile(x, y, size, red, green, blue)
