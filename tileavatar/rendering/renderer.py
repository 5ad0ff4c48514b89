from __future__ import annotations

from PIL import Image

from ..bitmap import PixelBuffer


def buffer_to_image(buffer: PixelBuffer, bottom_up: bool = False) -> Image.Image:
    """Convert padded BGR rows to an RGB image.

    With ``bottom_up`` the first stored row ends up at the bottom, which is
    how bitmap viewers show the saved file.
    """
    orientation = -1 if bottom_up else 1
    return Image.frombytes(
        "RGB",
        (buffer.width, buffer.height),
        bytes(buffer.data),
        "raw",
        "BGR",
        buffer.stride,
        orientation,
    )
