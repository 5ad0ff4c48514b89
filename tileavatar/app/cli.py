from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from ..bitmap import PixelBuffer
from ..errors import InvalidArgument, describe
from ..generator import (
    DEFAULT_HEIGHT,
    DEFAULT_MAX_VARIATION,
    DEFAULT_PATH,
    DEFAULT_TILE_SIZE,
    DEFAULT_WIDTH,
    GenerationSettings,
    TileImageBuilder,
)

POSITIONALS = ("path", "width", "height", "tile_size", "max_variation")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tileavatar",
        description="Generate a random tiled avatar as an uncompressed 24-bit BMP file.",
    )
    parser.add_argument("path", nargs="?", help=f"Output file (default: {DEFAULT_PATH})")
    parser.add_argument("width", nargs="?", help=f"Image width in pixels (default: {DEFAULT_WIDTH})")
    parser.add_argument("height", nargs="?", help=f"Image height in pixels (default: {DEFAULT_HEIGHT})")
    parser.add_argument("tile_size", nargs="?", help=f"Tile edge in pixels (default: {DEFAULT_TILE_SIZE})")
    parser.add_argument(
        "max_variation",
        nargs="?",
        help=f"Upper bound (exclusive) of the per-tile color jitter (default: {DEFAULT_MAX_VARIATION})",
    )
    parser.add_argument("--seed", help="Seed for the random source (default: system entropy)")
    parser.add_argument("--preview", action="store_true", help="Show the image before writing it")
    parser.epilog = "Unless all five positional arguments are given, all of them take their defaults."
    # Extra trailing arguments are ignored.
    args, _ = parser.parse_known_args(argv)
    return args


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value, 10)
    except ValueError as exc:
        raise InvalidArgument(f"{name} must be an integer, got {value!r}") from exc


def settings_from_args(args: argparse.Namespace) -> GenerationSettings:
    settings = GenerationSettings()
    if args.seed is not None:
        settings.seed = _parse_int("seed", args.seed)
    if any(getattr(args, name) is None for name in POSITIONALS):
        return settings
    settings.path = args.path
    settings.width = _parse_int("width", args.width)
    settings.height = _parse_int("height", args.height)
    settings.tile_size = _parse_int("tile size", args.tile_size)
    settings.max_variation = _parse_int("max variation", args.max_variation)
    return settings


def show_preview(buffer: PixelBuffer) -> None:
    from ..rendering import buffer_to_image

    buffer_to_image(buffer, bottom_up=True).show()


def notice(exc: BaseException) -> None:
    print(f"Error: {describe(exc)}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = settings_from_args(args)
        settings.validate()
        TileImageBuilder(settings).write_file(show_preview if args.preview else None)
    except Exception as exc:
        notice(exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
