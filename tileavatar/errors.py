from __future__ import annotations


class TileAvatarError(Exception):
    """Base class for failures that abort an image generation run."""

    description = "Unknown error."

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail or self.description)


class InvalidArgument(TileAvatarError, ValueError):
    description = "Bad arguments."


class AllocationFailure(TileAvatarError, MemoryError):
    description = "Dynamic allocation fail."


class WriteFailure(TileAvatarError, OSError):
    description = "Writing error."


class OpenFailure(TileAvatarError, OSError):
    description = "Unable to open a file."


class CloseFailure(TileAvatarError, OSError):
    description = "Unable to close a file."


def describe(exc: BaseException) -> str:
    """Return the one-line description used in error notices."""
    if isinstance(exc, TileAvatarError):
        if exc.detail:
            return f"{exc.description} ({exc.detail})"
        return exc.description
    return str(exc) or type(exc).__name__
