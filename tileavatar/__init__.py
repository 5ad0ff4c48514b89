from .bitmap import BitmapEncoder, BitmapHeader, PixelBuffer, saturating_add, serialize
from .errors import (
    AllocationFailure,
    CloseFailure,
    InvalidArgument,
    OpenFailure,
    TileAvatarError,
    WriteFailure,
)
from .generator import GenerationSettings, TileImageBuilder, generate, write_image

__all__ = [
    "AllocationFailure",
    "BitmapEncoder",
    "BitmapHeader",
    "CloseFailure",
    "generate",
    "GenerationSettings",
    "InvalidArgument",
    "OpenFailure",
    "PixelBuffer",
    "saturating_add",
    "serialize",
    "TileAvatarError",
    "TileImageBuilder",
    "write_image",
    "WriteFailure",
]
