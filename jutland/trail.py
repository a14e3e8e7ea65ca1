"""Wakes left behind by ships, shells and torpedoes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from jutland.position import MapPos
from jutland.sprites import Color


class TrailShape(IntEnum):
    """How a trail is drawn."""

    CIRCLE = 0
    # A rectangle fifteen times as long as it is wide, half of it drawn.
    RECT = 1


@dataclass
class Trail:
    """A fading wake: it grows by ``diffusion_rate`` and loses life each update.

    While ``delay`` is positive an update only counts the delay down.
    ``color`` of ``None`` means the default white.
    """

    pos: MapPos
    shape: TrailShape
    cur_size: float
    diffusion_rate: float
    cur_life: float
    life_reduction_rate: float
    delay: float = 0.0
    rotation: float = 0.0
    color: Color | None = None

    def update(self) -> None:
        """Advance the trail by one tick."""
        if self.delay > 0:
            self.delay -= self.life_reduction_rate
            return
        self.cur_size += self.diffusion_rate
        self.cur_life -= self.life_reduction_rate

    def is_alive(self) -> bool:
        """Whether the trail still has life and a visible size."""
        return self.cur_life > 0 and self.cur_size >= 1

    def is_active(self) -> bool:
        """Whether the trail is alive and its delay has passed."""
        return self.delay <= 0 and self.is_alive()