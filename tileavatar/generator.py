from __future__ import annotations

import random
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional

from .bitmap import CHANNEL_MAX, BitmapEncoder, PixelBuffer, saturating_add
from .bitmap.header import check_dimensions
from .errors import CloseFailure, InvalidArgument, OpenFailure

DEFAULT_PATH = "default.bmp"
DEFAULT_WIDTH = 100
DEFAULT_HEIGHT = 100
DEFAULT_TILE_SIZE = 10
DEFAULT_MAX_VARIATION = 30

BuiltHook = Callable[[PixelBuffer], None]


@dataclass
class GenerationSettings:
    path: str = DEFAULT_PATH
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    tile_size: int = DEFAULT_TILE_SIZE
    max_variation: int = DEFAULT_MAX_VARIATION
    seed: Optional[int] = None

    def validate(self) -> None:
        """Validate settings before any file is touched."""
        if not self.path:
            raise InvalidArgument("output path must not be empty")
        check_dimensions(self.width, self.height)
        if isinstance(self.tile_size, bool) or not isinstance(self.tile_size, int) or self.tile_size < 1:
            raise InvalidArgument(f"tile size must be a positive integer, got {self.tile_size!r}")
        if (
            isinstance(self.max_variation, bool)
            or not isinstance(self.max_variation, int)
            or not 0 <= self.max_variation <= CHANNEL_MAX
        ):
            raise InvalidArgument(f"max variation must be in 0..{CHANNEL_MAX}, got {self.max_variation!r}")

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)


class TileImageBuilder:
    def __init__(self, settings: Optional[GenerationSettings] = None, rng: Optional[random.Random] = None) -> None:
        self.settings = settings or GenerationSettings()
        self.rng = rng if rng is not None else self.settings.make_rng()

    def build(self) -> PixelBuffer:
        """Paint a grid of tiles jittered around one random base color."""
        self.settings.validate()
        settings = self.settings
        buffer = PixelBuffer.create(settings.width, settings.height)
        red = self._random_byte()
        green = self._random_byte()
        blue = self._random_byte()
        for x in range(0, settings.width, settings.tile_size):
            for y in range(0, settings.height, settings.tile_size):
                variation = self._variation()
                buffer.fill_tile(
                    x,
                    y,
                    settings.tile_size,
                    saturating_add(red, variation),
                    saturating_add(green, variation),
                    saturating_add(blue, variation),
                )
        return buffer

    def write_to(self, stream: BinaryIO, on_built: Optional[BuiltHook] = None) -> None:
        buffer = self.build()
        if on_built is not None:
            on_built(buffer)
        BitmapEncoder().serialize(buffer, stream)

    def write_file(self, on_built: Optional[BuiltHook] = None) -> None:
        """Generate the image and save it to ``settings.path``.

        The file is opened before anything is generated; a failure later on
        leaves whatever was written so far on disk.
        """
        self.settings.validate()
        try:
            handle = open(self.settings.path, "wb")
        except OSError as exc:
            raise OpenFailure(f"{self.settings.path}: {exc.strerror or exc}") from exc
        try:
            self.write_to(handle, on_built)
        except BaseException:
            handle.close()
            raise
        try:
            handle.close()
        except OSError as exc:
            raise CloseFailure(f"{self.settings.path}: {exc.strerror or exc}") from exc

    def _random_byte(self) -> int:
        return self.rng.randrange(CHANNEL_MAX + 1)

    def _variation(self) -> int:
        if not self.settings.max_variation:
            return 0
        return self.rng.randrange(self.settings.max_variation)


def generate(settings: Optional[GenerationSettings] = None, rng: Optional[random.Random] = None) -> PixelBuffer:
    return TileImageBuilder(settings, rng).build()


def write_image(settings: Optional[GenerationSettings] = None, rng: Optional[random.Random] = None) -> None:
    TileImageBuilder(settings, rng).write_file()
