from .color import CHANNEL_MAX, check_channel, saturating_add
from .encoding import BitmapEncoder, encode, serialize
from .header import (
    BIT_DEPTH,
    INFO_HEADER_SIZE,
    PIXEL_DATA_OFFSET,
    SIGNATURE,
    BitmapHeader,
    round_up4,
    row_stride,
)
from .types import PixelBuffer, create_buffer, fill_tile, set_pixel

__all__ = [
    "BIT_DEPTH",
    "BitmapEncoder",
    "BitmapHeader",
    "CHANNEL_MAX",
    "check_channel",
    "create_buffer",
    "encode",
    "fill_tile",
    "INFO_HEADER_SIZE",
    "PIXEL_DATA_OFFSET",
    "PixelBuffer",
    "round_up4",
    "row_stride",
    "saturating_add",
    "serialize",
    "set_pixel",
    "SIGNATURE",
]
