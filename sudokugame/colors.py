"""RGBA colours and the palette shared by the views."""

from __future__ import annotations

from dataclasses import dataclass, replace


def _check_channel(name: str, value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} channel must be within 0..255, got {value}")


@dataclass(frozen=True)
class RGBA:
    """An 8-bit-per-channel colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            _check_channel(name, getattr(self, name))

    def to_hex(self) -> str:
        """Return the colour as ``#rrggbbaa``."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"

    def with_alpha(self, alpha: int) -> "RGBA":
        """Return the same colour with a different alpha channel."""
        return replace(self, a=alpha)


def rgba(r: int, g: int, b: int, a: float) -> RGBA:
    """Build a colour from 0..255 channels and an opacity between 0 and 1."""
    for name, value in (("red", r), ("green", g), ("blue", b)):
        _check_channel(name, value)
    if not 0 <= a <= 1:
        raise ValueError(f"opacity must be within 0..1, got {a}")
    return RGBA(r, g, b, int(a * 255))


def rgb(r: int, g: int, b: int) -> RGBA:
    """Build an opaque colour."""
    return rgba(r, g, b, 1.0)


TRANSPARENT = RGBA(0, 0, 0, 0)
LINE_BORDER = rgb(0, 0, 255)
SIMPLE_TEXT = rgb(0, 0, 85)
BLUE_TEXT = rgb(0, 0, 178)