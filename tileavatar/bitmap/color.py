from __future__ import annotations

from ..errors import InvalidArgument

CHANNEL_MAX = 0xFF


def check_channel(value: int, name: str = "channel") -> int:
    """Validate a single 8-bit color channel value."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if value < 0 or value > CHANNEL_MAX:
        raise InvalidArgument(f"{name} must be in 0..{CHANNEL_MAX}, got {value}")
    return value


def saturating_add(a: int, b: int) -> int:
    """Add two channel values, clamping at 255 instead of wrapping."""
    check_channel(a, "a")
    check_channel(b, "b")
    total = (a + b) & CHANNEL_MAX
    if total < a or total < b:
        return CHANNEL_MAX
    return total
