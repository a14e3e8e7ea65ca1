"""Positions on the mission map."""

from __future__ import annotations

import math
from dataclasses import dataclass

from jutland.geometry import calc_distance


@dataclass
class MapPos:
    """A position on the map.

    ``mx``/``my`` are whole map cells, used for general calculations such as
    the minimap. ``rx``/``ry`` are the exact real coordinates. The mutating
    methods keep the two in step.
    """

    mx: int = 0
    my: int = 0
    rx: float = 0.0
    ry: float = 0.0

    @classmethod
    def from_map(cls, mx: int, my: int) -> MapPos:
        """Build a position from map cell coordinates."""
        return cls(mx, my, float(mx), float(my))

    @classmethod
    def from_real(cls, rx: float, ry: float) -> MapPos:
        """Build a position from real coordinates; the cell is the floor."""
        return cls(math.floor(rx), math.floor(ry), rx, ry)

    def m_equal(self, other: MapPos) -> bool:
        """Whether both positions fall in the same map cell."""
        return self.mx == other.mx and self.my == other.my

    def near(self, other: MapPos, distance: float) -> bool:
        """Whether ``other`` is within ``distance`` of this position."""
        return calc_distance(self.rx, self.ry, other.rx, other.ry) <= distance

    def __str__(self) -> str:
        return f"({self.mx}, {self.my})"

    def assign_rxy(self, rx: float, ry: float) -> None:
        """Set the real coordinates and derive the cell."""
        self.rx, self.ry = rx, ry
        self.mx, self.my = math.floor(rx), math.floor(ry)

    def assign_mxy(self, mx: int, my: int) -> None:
        """Set the cell and derive the real coordinates."""
        self.mx, self.my = mx, my
        self.rx, self.ry = float(mx), float(my)

    def add_rx(self, rx: float) -> None:
        self.rx += rx
        self.mx = math.floor(self.rx)

    def sub_rx(self, rx: float) -> None:
        """Move left, never past zero."""
        self.rx -= rx
        self.mx = max(math.floor(self.rx), 0)
        self.rx = max(self.rx, 0.0)

    def add_ry(self, ry: float) -> None:
        self.ry += ry
        self.my = math.floor(self.ry)

    def sub_ry(self, ry: float) -> None:
        """Move up, never past zero."""
        self.ry -= ry
        self.my = max(math.floor(self.ry), 0)
        self.ry = max(self.ry, 0.0)

    def add_mx(self, mx: int) -> None:
        self.mx += mx
        self.rx += mx

    def sub_mx(self, mx: int) -> None:
        """Move left by whole cells, never past zero."""
        self.mx = max(self.mx - mx, 0)
        self.rx = max(self.rx - mx, 0.0)

    def add_my(self, my: int) -> None:
        self.my += my
        self.ry += my

    def sub_my(self, my: int) -> None:
        """Move up by whole cells, never past zero."""
        self.my = max(self.my - my, 0)
        self.ry = max(self.ry - my, 0.0)

    def ensure_border(self, border_x: float, border_y: float) -> None:
        """Clamp the position into ``[0, border_x] x [0, border_y]``."""
        self.rx = max(min(self.rx, border_x), 0.0)
        self.ry = max(min(self.ry, border_y), 0.0)
        self.mx = math.floor(self.rx)
        self.my = math.floor(self.ry)

    def on_border(self, border_x: float, border_y: float) -> bool:
        """Whether the position lies on or beyond the map border."""
        return self.rx <= 0 or self.rx >= border_x or self.ry <= 0 or self.ry >= border_y

    def copy(self) -> MapPos:
        """An independent copy of this position."""
        return MapPos(self.mx, self.my, self.rx, self.ry)