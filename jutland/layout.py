"""Screen layout values and text measurement."""

from __future__ import annotations

from dataclasses import dataclass


def calc_text_width(text: str, font_size: float) -> float:
    """Approximate rendered width of ``text``: 0.35 of the font size per byte."""
    return font_size * len(text.encode("utf-8")) / 20 * 7


@dataclass(frozen=True)
class ScreenPos:
    """A position on screen, in pixels."""

    sx: int
    sy: int


@dataclass(frozen=True)
class ScreenLayout:
    """Size of the screen, usually its resolution."""

    width: int
    height: int