"""Guns and torpedo launchers mounted on ships."""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from jutland.bullet import Bullet, BulletShotType
from jutland.geometry import calc_angle_between_points, calc_distance, calc_weapon_fire_angle
from jutland.position import MapPos

# Configured ranges are halved and speeds scaled down into map units.
_RANGE_DIVISOR = 2
_GUN_SPEED_DIVISOR = 4000
_TORPEDO_SPEED_DIVISOR = 600

# Extra steps of life beyond the target distance.
_GUN_LIFE_MARGIN = 15
_TORPEDO_LIFE_MARGIN = 5

_RAIL_GUN = "RailGun"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class FiringArc:
    """A range of bearings, relative to the ship's heading, a weapon covers."""

    start: float
    end: float

    def contains(self, angle: float) -> bool:
        """Whether ``angle`` lies within the arc, ends included."""
        return self.start <= angle <= self.end


_NO_ARC = FiringArc(0.0, 0.0)


def _muzzle_and_target(
    pos_percent: float, bullet_speed: float, ship: Any, enemy: Any, block_size: float
) -> tuple[MapPos, MapPos]:
    """Where the weapon sits on the ship, and where to aim to meet the enemy."""
    muzzle = ship.cur_pos.copy()
    offset = pos_percent * ship.length / block_size / 2
    rad = ship.cur_rotation * math.pi / 180
    muzzle.add_rx(math.sin(rad) * offset)
    muzzle.sub_ry(math.cos(rad) * offset)

    _, target_x, target_y = calc_weapon_fire_angle(
        ship.cur_pos.rx,
        ship.cur_pos.ry,
        bullet_speed,
        enemy.cur_pos.rx,
        enemy.cur_pos.ry,
        enemy.cur_speed,
        enemy.cur_rotation,
    )
    return muzzle, MapPos.from_real(target_x, target_y)


def _in_arcs(
    left: FiringArc, right: FiringArc, ship_rotation: float, cur: MapPos, target: MapPos
) -> bool:
    bearing = calc_angle_between_points(cur.rx, cur.ry, target.rx, target.ry)
    bearing = math.fmod(bearing - ship_rotation + 360, 360)
    return left.contains(bearing) or right.contains(bearing)


def _require(data: Mapping[str, Any], key: str, kind: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"{kind} config is missing {key!r}") from None


def _check_bullet(data: Mapping[str, Any], bullet: Bullet, kind: str) -> str:
    bullet_name = str(_require(data, "bulletName", kind))
    if bullet.name != bullet_name:
        raise ValueError(f"{kind} fires {bullet_name!r}, not {bullet.name!r}")
    return bullet_name


@dataclass
class Gun:
    """A gun turret firing salvoes of shells."""

    name: str
    bullet_name: str
    bullet: Bullet
    bullet_count: int
    reload_time: float
    range: float
    bullet_spread: int
    bullet_speed: float
    # Offset from the ship's centre as a share of its length, positive forwards.
    pos_percent: float = 0.0
    left_firing_arc: FiringArc = field(default=_NO_ARC)
    right_firing_arc: FiringArc = field(default=_NO_ARC)
    disable: bool = False
    reload_start_at: int = 0

    @classmethod
    def from_config(cls, data: Mapping[str, Any], bullet: Bullet) -> Gun:
        """Build a gun from its configuration entry and the shell it fires.

        Range and shell speed are converted into map units. Raises
        ``ValueError`` if the name is missing or the shell does not match.
        """
        name = str(_require(data, "name", "gun"))
        bullet_name = _check_bullet(data, bullet, "gun")
        return cls(
            name=name,
            bullet_name=bullet_name,
            bullet=bullet,
            bullet_count=int(data.get("bulletCount", 0)),
            reload_time=float(data.get("reloadTime", 0.0)),
            range=float(data.get("range", 0.0)) / _RANGE_DIVISOR,
            bullet_spread=int(data.get("bulletSpread", 0)),
            bullet_speed=float(data.get("bulletSpeed", 0.0)) / _GUN_SPEED_DIVISOR,
        )

    def mounted(
        self, pos_percent: float, left_firing_arc: FiringArc, right_firing_arc: FiringArc
    ) -> Gun:
        """A copy of this gun placed on a ship with the given arcs."""
        return replace(
            self,
            pos_percent=pos_percent,
            left_firing_arc=left_firing_arc,
            right_firing_arc=right_firing_arc,
        )

    def can_fire(self, ship_cur_rotation: float, cur_pos: MapPos, target_pos: MapPos) -> bool:
        """Whether the gun is enabled, loaded, in range and within its arcs."""
        if self.disable or not self.reloaded():
            return False
        distance = calc_distance(cur_pos.rx, cur_pos.ry, target_pos.rx, target_pos.ry)
        if distance > self.range:
            return False
        return _in_arcs(
            self.left_firing_arc, self.right_firing_arc, ship_cur_rotation, cur_pos, target_pos
        )

    def reloaded(self) -> bool:
        """Whether reloading has finished."""
        return self.reload_start_at + int(self.reload_time * 1e3) <= _now_ms()

    def _shot_type(self, range_percent: float) -> BulletShotType:
        if self.name == _RAIL_GUN:
            return BulletShotType.DIRECT
        diameter = self.bullet.diameter
        if (
            range_percent < 0.65
            or diameter <= 100
            or (diameter <= 200 and range_percent < 0.8)
            or (diameter <= 300 and range_percent < 0.65)
        ):
            return BulletShotType.DIRECT
        return BulletShotType.ARCING

    def fire(self, ship: Any, enemy: Any, block_size: float) -> list[Bullet]:
        """Fire a salvo from ``ship`` at ``enemy``; empty if the gun cannot fire.

        Shells scatter around the aim point, less so at shorter range.
        """
        cur_pos, target_pos = _muzzle_and_target(
            self.pos_percent, self.bullet_speed, ship, enemy, block_size
        )
        if not self.can_fire(ship.cur_rotation, cur_pos, target_pos):
            return []
        self.reload_start_at = _now_ms()

        distance = calc_distance(cur_pos.rx, cur_pos.ry, target_pos.rx, target_pos.ry)
        range_percent = distance / self.range
        radius = float(self.bullet_spread) / block_size * range_percent
        shot_type = self._shot_type(range_percent)
        life = int(distance / self.bullet_speed) + _GUN_LIFE_MARGIN

        shots = []
        for _ in range(self.bullet_count):
            pos = target_pos.copy()
            pos.add_rx(random.randint(-1, 1) * random.random() * radius)
            pos.add_ry(random.randint(-1, 1) * random.random() * radius)
            shots.append(
                self.bullet.spawn(
                    cur_pos,
                    pos,
                    shot_type,
                    self.bullet_speed,
                    life,
                    ship.uid,
                    ship.belong_player,
                )
            )
        return shots


@dataclass
class TorpedoLauncher:
    """A torpedo launcher firing its torpedoes one at a time, then reloading."""

    name: str
    bullet_name: str
    bullet: Bullet
    bullet_count: int
    shot_interval: float
    reload_time: float
    range: float
    bullet_speed: float
    pos_percent: float = 0.0
    left_firing_arc: FiringArc = field(default=_NO_ARC)
    right_firing_arc: FiringArc = field(default=_NO_ARC)
    disable: bool = False
    reload_start_at: int = 0
    latest_fire_at: int = 0
    shot_count_before_reload: int = 0

    @classmethod
    def from_config(cls, data: Mapping[str, Any], bullet: Bullet) -> TorpedoLauncher:
        """Build a launcher from its configuration entry and the torpedo it fires.

        Range and torpedo speed are converted into map units. Raises
        ``ValueError`` if the name is missing or the torpedo does not match.
        """
        name = str(_require(data, "name", "torpedo launcher"))
        bullet_name = _check_bullet(data, bullet, "torpedo launcher")
        return cls(
            name=name,
            bullet_name=bullet_name,
            bullet=bullet,
            bullet_count=int(data.get("bulletCount", 0)),
            shot_interval=float(data.get("shotInterval", 0.0)),
            reload_time=float(data.get("reloadTime", 0.0)),
            range=float(data.get("range", 0.0)) / _RANGE_DIVISOR,
            bullet_speed=float(data.get("bulletSpeed", 0.0)) / _TORPEDO_SPEED_DIVISOR,
        )

    def mounted(
        self, pos_percent: float, left_firing_arc: FiringArc, right_firing_arc: FiringArc
    ) -> TorpedoLauncher:
        """A copy of this launcher placed on a ship with the given arcs."""
        return replace(
            self,
            pos_percent=pos_percent,
            left_firing_arc=left_firing_arc,
            right_firing_arc=right_firing_arc,
        )

    def can_fire(self, ship_cur_rotation: float, cur_pos: MapPos, target_pos: MapPos) -> bool:
        """Whether the launcher is enabled, in range, within its arcs and ready."""
        if self.disable:
            return False
        distance = calc_distance(cur_pos.rx, cur_pos.ry, target_pos.rx, target_pos.ry)
        if distance > self.range:
            return False
        if not _in_arcs(
            self.left_firing_arc, self.right_firing_arc, ship_cur_rotation, cur_pos, target_pos
        ):
            return False
        return self.reloaded()

    def reloaded(self) -> bool:
        """Whether reloading and the interval since the last shot have passed."""
        now = _now_ms()
        if now < self.reload_start_at + int(self.reload_time * 1e3):
            return False
        if now < self.latest_fire_at + int(self.shot_interval * 1e3):
            return False
        return self.shot_count_before_reload < self.bullet_count

    def fire(self, ship: Any, enemy: Any, block_size: float) -> list[Bullet]:
        """Launch one torpedo from ``ship`` at ``enemy``; empty if not ready."""
        cur_pos, target_pos = _muzzle_and_target(
            self.pos_percent, self.bullet_speed, ship, enemy, block_size
        )
        if not self.can_fire(ship.cur_rotation, cur_pos, target_pos):
            return []

        self.shot_count_before_reload += 1
        now = _now_ms()
        self.latest_fire_at = now
        if self.shot_count_before_reload >= self.bullet_count:
            self.shot_count_before_reload = 0
            self.reload_start_at = now

        life = int(self.range / self.bullet_speed) + _TORPEDO_LIFE_MARGIN
        return [
            self.bullet.spawn(
                cur_pos,
                target_pos,
                BulletShotType.DIRECT,
                self.bullet_speed,
                life,
                ship.uid,
                ship.belong_player,
            )
        ]