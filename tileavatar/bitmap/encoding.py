from __future__ import annotations

import io
from typing import BinaryIO, Optional

from ..errors import InvalidArgument, WriteFailure
from .types import PixelBuffer


def _write(stream: BinaryIO, chunk: bytes, what: str) -> None:
    try:
        written = stream.write(chunk)
    except (OSError, ValueError) as exc:
        raise WriteFailure(f"{what}: {exc}") from exc
    # Raw streams may report short writes; buffered ones return the full count or None.
    if written is not None and written < len(chunk):
        raise WriteFailure(f"{what}: wrote {written} of {len(chunk)} bytes")


class BitmapEncoder:
    """Write a pixel buffer as an uncompressed 24-bit bitmap file."""

    def serialize(self, buffer: Optional[PixelBuffer], stream: Optional[BinaryIO]) -> None:
        """Write header and pixel data to ``stream``, consuming ``buffer``.

        Each header field goes out as its own write, followed by the pixel
        data in one block. The first failed or short write raises
        ``WriteFailure`` and nothing after it is written. The buffer is
        released whatever the outcome.
        """
        if buffer is None or stream is None:
            raise InvalidArgument("missing pixel buffer or output stream")
        if buffer.consumed:
            raise InvalidArgument("pixel buffer was already serialized")
        header = buffer.header
        data = buffer.release()
        for name, chunk in header.fields():
            _write(stream, chunk, name)
        _write(stream, data, "pixel_data")

    def encode(self, buffer: Optional[PixelBuffer]) -> bytes:
        """Return the complete file contents, consuming ``buffer``."""
        out = io.BytesIO()
        self.serialize(buffer, out)
        return out.getvalue()


def serialize(buffer: Optional[PixelBuffer], stream: Optional[BinaryIO]) -> None:
    BitmapEncoder().serialize(buffer, stream)


def encode(buffer: Optional[PixelBuffer]) -> bytes:
    return BitmapEncoder().encode(buffer)
