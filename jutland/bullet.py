"""Shells and torpedoes in flight."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Any, Mapping

from jutland.geometry import calc_angle_between_points, calc_distance
from jutland.position import MapPos
from jutland.sprites import BulletType, bullet_width
from jutland.trail import Trail, TrailShape

# Bullets younger than this many steps leave no wake yet.
_TRAIL_MIN_AGE = 10


class BulletShotType(IntEnum):
    """How a bullet travels."""

    DIRECT = 0
    # Lobbed along a parabola; it lands on its target point.
    ARCING = 1


class CriticalType(IntEnum):
    """Critical hit multiplier dealt by a bullet."""

    NONE = 0
    THREE_TIMES = 1
    TEN_TIMES = 2


class HitObjectType(IntEnum):
    """What a bullet has hit."""

    NONE = 0
    SHIP = 1
    WATER = 2
    LAND = 3


@dataclass
class Bullet:
    """A shell or torpedo: a configured template, or one in flight."""

    name: str
    bullet_type: BulletType
    diameter: int
    damage: float
    critical_rate: float = 0.0
    life: int = 0

    uid: str = ""
    cur_pos: MapPos = field(default_factory=MapPos)
    target_pos: MapPos = field(default_factory=MapPos)
    rotation: float = 0.0
    speed: float = 0.0
    shot_type: BulletShotType = BulletShotType.DIRECT
    forward_age: int = 0

    belong_ship: str = ""
    belong_player: str = ""

    real_damage: float = 0.0
    critical_type: CriticalType = CriticalType.NONE
    hit_object_type: HitObjectType = HitObjectType.NONE

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> Bullet:
        """Build a bullet template from one entry of the bullets configuration.

        Raises ``ValueError`` if the name or type is missing or the type unknown.
        """
        try:
            name = data["name"]
            bullet_type = BulletType(data["type"])
        except KeyError as exc:
            raise ValueError(f"bullet config is missing {exc}") from None
        return cls(
            name=str(name),
            bullet_type=bullet_type,
            diameter=int(data.get("diameter", 0)),
            damage=float(data.get("damage", 0.0)),
            critical_rate=float(data.get("criticalRate", 0.0)),
            life=int(data.get("life", 0)),
        )

    def forward(self) -> None:
        """Advance one step along the heading.

        An arcing bullet that would move away from its target lands on it.
        Raises ``ValueError`` for an unknown shot type.
        """
        rad = self.rotation * math.pi / 180
        next_pos = self.cur_pos.copy()
        next_pos.add_rx(math.sin(rad) * self.speed)
        next_pos.sub_ry(math.cos(rad) * self.speed)

        if self.shot_type == BulletShotType.DIRECT:
            self.cur_pos = next_pos
        elif self.shot_type == BulletShotType.ARCING:
            target = self.target_pos
            cur_dist = calc_distance(self.cur_pos.rx, self.cur_pos.ry, target.rx, target.ry)
            next_dist = calc_distance(next_pos.rx, next_pos.ry, target.rx, target.ry)
            self.cur_pos = target.copy() if next_dist > cur_dist else next_pos
        else:
            raise ValueError(f"unknown bullet shot type: {self.shot_type!r}")

        self.life -= 1
        self.forward_age += 1

    def gen_trails(self) -> list[Trail]:
        """The wake left at the current position; none once hit or just fired."""
        if self.hit_object_type != HitObjectType.NONE:
            return []
        if self.forward_age <= _TRAIL_MIN_AGE:
            return []
        diffusion_rate, size_to_life, life_reduction_rate = 0.1, 7.0, 2.0
        if self.bullet_type == BulletType.TORPEDO:
            diffusion_rate, size_to_life, life_reduction_rate = 0.5, 8.0, 3.0
        size = float(bullet_width(self.name, self.bullet_type, self.diameter))
        return [
            Trail(
                pos=self.cur_pos.copy(),
                shape=TrailShape.RECT,
                cur_size=size,
                diffusion_rate=diffusion_rate,
                cur_life=size * size_to_life,
                life_reduction_rate=life_reduction_rate,
                delay=0.0,
                rotation=self.rotation,
                color=None,
            )
        ]

    def spawn(
        self,
        cur_pos: MapPos,
        target_pos: MapPos,
        shot_type: BulletShotType,
        speed: float,
        life: int,
        ship_uid: str,
        player: str,
    ) -> Bullet:
        """A new bullet in flight made from this template, heading at the target."""
        return replace(
            self,
            uid=str(uuid.uuid4()),
            cur_pos=cur_pos.copy(),
            target_pos=target_pos.copy(),
            shot_type=shot_type,
            rotation=calc_angle_between_points(
                cur_pos.rx, cur_pos.ry, target_pos.rx, target_pos.ry
            ),
            speed=speed,
            life=life,
            belong_ship=ship_uid,
            belong_player=player,
            critical_type=CriticalType.NONE,
            hit_object_type=HitObjectType.NONE,
        )