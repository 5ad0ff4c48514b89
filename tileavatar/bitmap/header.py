from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..errors import InvalidArgument

SIGNATURE = b"BM"
PIXEL_DATA_OFFSET = 0x36
INFO_HEADER_SIZE = 0x28
COLOR_PLANES = 1
BIT_DEPTH = 24
BYTES_PER_PIXEL = BIT_DEPTH // 8
COMPRESSION_NONE = 0

INT32_MAX = 0x7FFFFFFF
UINT32_MAX = 0xFFFFFFFF


def round_up4(value: int) -> int:
    """Round a byte count up to the next multiple of 4."""
    return ((value + 3) // 4) * 4


def row_stride(width: int) -> int:
    """Return the padded byte width of one row of 24-bit pixels."""
    return round_up4(width * BYTES_PER_PIXEL)


def check_dimensions(width: int, height: int) -> None:
    """Validate image dimensions against the header field widths."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise InvalidArgument(f"{name} must be greater than zero")
        if value > INT32_MAX:
            raise InvalidArgument(f"{name} must not exceed {INT32_MAX}")
    if PIXEL_DATA_OFFSET + row_stride(width) * height > UINT32_MAX:
        raise InvalidArgument(f"{width}x{height} image does not fit a bitmap file")


@dataclass(frozen=True)
class BitmapHeader:
    """File and info headers of an uncompressed 24-bit bitmap.

    Every field is derived from the image dimensions; use ``for_size``.
    """

    signature: bytes
    file_size: int
    reserved: int
    pixel_data_offset: int
    header_size: int
    width: int
    height: int
    planes: int
    bit_depth: int
    compression: int
    pixel_data_size: int
    h_resolution: int
    v_resolution: int
    palette_colors: int
    important_colors: int

    @classmethod
    def for_size(cls, width: int, height: int) -> "BitmapHeader":
        check_dimensions(width, height)
        pixel_data_size = height * row_stride(width)
        return cls(
            signature=SIGNATURE,
            file_size=PIXEL_DATA_OFFSET + pixel_data_size,
            reserved=0,
            pixel_data_offset=PIXEL_DATA_OFFSET,
            header_size=INFO_HEADER_SIZE,
            width=width,
            height=height,
            planes=COLOR_PLANES,
            bit_depth=BIT_DEPTH,
            compression=COMPRESSION_NONE,
            pixel_data_size=pixel_data_size,
            h_resolution=0,
            v_resolution=0,
            palette_colors=0,
            important_colors=0,
        )

    @property
    def stride(self) -> int:
        return row_stride(self.width)

    def fields(self) -> List[Tuple[str, bytes]]:
        """Return the encoded header fields in file order."""
        return [
            ("signature", self.signature),
            ("file_size", _u32(self.file_size)),
            ("reserved", _u32(self.reserved)),
            ("pixel_data_offset", _u32(self.pixel_data_offset)),
            ("header_size", _u32(self.header_size)),
            ("width", _i32(self.width)),
            ("height", _i32(self.height)),
            ("planes", _u16(self.planes)),
            ("bit_depth", _u16(self.bit_depth)),
            ("compression", _u32(self.compression)),
            ("pixel_data_size", _u32(self.pixel_data_size)),
            ("h_resolution", _i32(self.h_resolution)),
            ("v_resolution", _i32(self.v_resolution)),
            ("palette_colors", _u32(self.palette_colors)),
            ("important_colors", _u32(self.important_colors)),
        ]

    def to_bytes(self) -> bytes:
        return b"".join(chunk for _, chunk in self.fields())


def _u16(value: int) -> bytes:
    return value.to_bytes(2, "little", signed=False)


def _u32(value: int) -> bytes:
    return value.to_bytes(4, "little", signed=False)


def _i32(value: int) -> bytes:
    return value.to_bytes(4, "little", signed=True)
