"""Colours and the sprites used to draw shells and torpedoes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255


RED = Color(255, 0, 0)
DARK_RED = Color(139, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
SKY_BLUE = Color(135, 206, 235)
DARK_BLUE = Color(0, 0, 139)
YELLOW = Color(255, 255, 0)
BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
GRAY = Color(128, 128, 128)
CYAN = Color(0, 255, 255)
MAGENTA = Color(255, 0, 255)
ORANGE = Color(255, 165, 0)
BROWN = Color(165, 42, 42)
PINK = Color(255, 192, 203)
PURPLE = Color(128, 0, 128)
VIOLET = Color(238, 130, 238)
GOLD = Color(255, 215, 0)
SILVER = Color(192, 192, 192)
DARK_SILVER = Color(105, 105, 105)


class BulletType(str, Enum):
    """Kind of ammunition."""

    SHELL = "shell"
    TORPEDO = "torpedo"


@dataclass(frozen=True)
class Sprite:
    """A filled rectangle of one colour."""

    width: int
    height: int
    color: Color


# Shown in place of anything unknown, so that it stands out.
NOT_FOUND = Sprite(10, 20, RED)

_SHELLS = {
    1024: Sprite(6, 14, DARK_RED),
    460: Sprite(4, 9, GOLD),
    406: Sprite(4, 8, SILVER),
    381: Sprite(4, 7, GOLD),
    356: Sprite(4, 6, GOLD),
    343: Sprite(3, 6, WHITE),
    305: Sprite(3, 5, SILVER),
    283: Sprite(3, 5, GRAY),
    203: Sprite(3, 4, WHITE),
    180: Sprite(2, 4, GRAY),
    155: Sprite(2, 4, GOLD),
    152: Sprite(2, 4, WHITE),
    150: Sprite(2, 4, GRAY),
    140: Sprite(2, 3, SILVER),
    133: Sprite(2, 3, DARK_BLUE),
    130: Sprite(2, 3, WHITE),
    127: Sprite(2, 3, SILVER),
    120: Sprite(2, 3, DARK_BLUE),
    114: Sprite(2, 2, SILVER),
    105: Sprite(2, 2, GRAY),
    102: Sprite(2, 2, SILVER),
    100: Sprite(2, 2, WHITE),
    88: Sprite(2, 2, GOLD),
    76: Sprite(2, 2, WHITE),
    40: Sprite(1, 1, GOLD),
    37: Sprite(1, 1, DARK_BLUE),
    25: Sprite(1, 1, GOLD),
    20: Sprite(1, 1, WHITE),
    13: Sprite(1, 1, GRAY),
    # 12.7 mm machine-gun rounds
    12: Sprite(1, 1, WHITE),
}

_TORPEDOES = {
    450: Sprite(3, 16, SILVER),
    533: Sprite(3, 20, DARK_SILVER),
    610: Sprite(4, 24, SILVER),
    622: Sprite(4, 25, GRAY),
}

_width_cache: dict[str, int] = {}


def shell_sprite(diameter: int) -> Sprite:
    """Sprite of a shell of the given calibre in millimetres."""
    return _SHELLS.get(diameter, NOT_FOUND)


def torpedo_sprite(diameter: int) -> Sprite:
    """Sprite of a torpedo of the given diameter in millimetres."""
    return _TORPEDOES.get(diameter, NOT_FOUND)


def bullet_sprite(bullet_type: BulletType | str, diameter: int) -> Sprite:
    """Sprite for any kind of ammunition."""
    if bullet_type == BulletType.SHELL:
        return shell_sprite(diameter)
    if bullet_type == BulletType.TORPEDO:
        return torpedo_sprite(diameter)
    return NOT_FOUND


def bullet_width(name: str, bullet_type: BulletType | str, diameter: int) -> int:
    """Width of a bullet's sprite, remembered by bullet name."""
    try:
        return _width_cache[name]
    except KeyError:
        width = bullet_sprite(bullet_type, diameter).width
        _width_cache[name] = width
        return width