"""Warships: their weapons, movement, damage and wakes."""

from __future__ import annotations

import copy
import math
import random
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from jutland.bullet import Bullet, BulletShotType, CriticalType
from jutland.geometry import calc_angle_between_points
from jutland.position import MapPos
from jutland.sprites import SKY_BLUE
from jutland.trail import Trail, TrailShape
from jutland.weapons import Gun, TorpedoLauncher

_WATER_DROP = "WaterDrop"

# Close enough to the target to count as arrived.
_ARRIVE_DISTANCE = 0.6
# Within this distance a ship turns on the spot before moving on.
_TURN_IN_PLACE_DISTANCE = 4
_TURN_IN_PLACE_TOLERANCE = 1


class GroupID(IntEnum):
    """Control group a ship is assigned to."""

    G0 = 0
    G1 = 1
    G2 = 2
    G3 = 3
    G4 = 4
    G5 = 5
    G6 = 6
    G7 = 7
    G8 = 8
    G9 = 9
    NONE = 10


class WeaponType(str, Enum):
    """Kind of weapon, or all of them."""

    ALL = "all"
    MAIN_GUN = "mainGun"
    SECONDARY_GUN = "secondaryGun"
    TORPEDO = "torpedo"
    MISSILE = "missile"


class ShipType(str, Enum):
    """Class of ship."""

    DEFAULT = "default"
    BATTLESHIP = "battleship"
    CRUISER = "cruiser"
    DESTROYER = "destroyer"
    TORPEDO_BOAT = "torpedo_boat"
    CARGO = "cargo"


class _Rotate(IntEnum):
    CLOCKWISE = 1
    ANTICLOCKWISE = -1


@dataclass(frozen=True)
class WeaponMetadata:
    """Where a weapon is mounted and which bearings it covers.

    ``pos_percent`` is the offset from the ship's centre as a share of its
    length: 0.35 is towards the bow, -0.3 towards the stern.
    """

    name: str
    pos_percent: float = 0.0
    left_firing_arc: tuple[float, float] = (0.0, 0.0)
    right_firing_arc: tuple[float, float] = (0.0, 0.0)


@dataclass
class Weapon:
    """A ship's armament."""

    main_guns_md: list[WeaponMetadata] = field(default_factory=list)
    secondary_guns_md: list[WeaponMetadata] = field(default_factory=list)
    torpedoes_md: list[WeaponMetadata] = field(default_factory=list)
    main_guns: list[Gun] = field(default_factory=list)
    secondary_guns: list[Gun] = field(default_factory=list)
    torpedoes: list[TorpedoLauncher] = field(default_factory=list)
    max_range: float = 0.0
    has_main_gun: bool = False
    has_secondary_gun: bool = False
    has_torpedo: bool = False
    main_gun_disabled: bool = False
    secondary_gun_disabled: bool = False
    torpedo_disabled: bool = False

    def main_gun_reloaded(self) -> bool:
        """Whether any main gun is loaded."""
        return any(gun.reloaded() for gun in self.main_guns)

    def secondary_gun_reloaded(self) -> bool:
        """Whether any secondary gun is loaded."""
        return any(gun.reloaded() for gun in self.secondary_guns)

    def torpedo_launcher_reloaded(self) -> bool:
        """Whether any torpedo launcher is ready."""
        return any(launcher.reloaded() for launcher in self.torpedoes)


@dataclass
class ShipUidGenerator:
    """Hands out ship ids numbered per type abbreviation for one player."""

    player: str
    counter: dict[str, int] = field(default_factory=dict)

    def gen(self, type_abbr: str) -> str:
        """The next id, such as ``player/BB-1``."""
        self.counter[type_abbr] = self.counter.get(type_abbr, 0) + 1
        return f"{self.player}/{type_abbr}-{self.counter[type_abbr]}"


@dataclass
class BattleShip:
    """A warship: a configured template, or one in a mission."""

    name: str
    display_name: str = ""
    ship_type: ShipType = ShipType.DEFAULT
    type_abbr: str = ""
    description: list[str] = field(default_factory=list)

    total_hp: float = 0.0
    # 0.7 means only 30% of a hit's damage is taken.
    horizontal_damage_reduction: float = 0.0
    vertical_damage_reduction: float = 0.0
    max_speed: float = 0.0
    acceleration: float = 0.0
    rotate_speed: float = 0.0
    length: float = 0.0
    width: float = 0.0
    funds_cost: int = 0
    time_cost: int = 0
    tonnage: float = 0.0
    weapon: Weapon = field(default_factory=Weapon)

    uid: str = ""
    cur_hp: float = 0.0
    cur_pos: MapPos = field(default_factory=MapPos)
    cur_rotation: float = 0.0
    cur_speed: float = 0.0
    group_id: GroupID = GroupID.NONE
    belong_player: str = ""

    def _weapon_groups(self, weapon_type: WeaponType) -> list[tuple[list[Any], str]]:
        groups = []
        if weapon_type in (WeaponType.ALL, WeaponType.MAIN_GUN):
            groups.append((self.weapon.main_guns, "main_gun_disabled"))
        if weapon_type in (WeaponType.ALL, WeaponType.SECONDARY_GUN):
            groups.append((self.weapon.secondary_guns, "secondary_gun_disabled"))
        if weapon_type in (WeaponType.ALL, WeaponType.TORPEDO):
            groups.append((self.weapon.torpedoes, "torpedo_disabled"))
        return groups

    def _set_weapon_disabled(self, weapon_type: WeaponType, disabled: bool) -> None:
        for weapons, flag in self._weapon_groups(weapon_type):
            for weapon in weapons:
                weapon.disable = disabled
            setattr(self.weapon, flag, disabled)

    def disable_weapon(self, weapon_type: WeaponType) -> None:
        """Stop the given kind of weapon from firing."""
        self._set_weapon_disabled(weapon_type, True)

    def enable_weapon(self, weapon_type: WeaponType) -> None:
        """Allow the given kind of weapon to fire again."""
        self._set_weapon_disabled(weapon_type, False)

    def fire(self, enemy: BattleShip, block_size: float) -> list[Bullet]:
        """Fire every weapon that can at ``enemy``; nothing if sunk."""
        if self.cur_hp <= 0:
            return []
        shots: list[Bullet] = []
        for gun in self.weapon.main_guns:
            shots.extend(gun.fire(self, enemy, block_size))
        for gun in self.weapon.secondary_guns:
            shots.extend(gun.fire(self, enemy, block_size))
        for launcher in self.weapon.torpedoes:
            shots.extend(launcher.fire(self, enemy, block_size))
        return shots

    def hurt_by(self, bullet: Bullet) -> None:
        """Take damage from ``bullet``, recording the damage dealt on it.

        Direct fire strikes the horizontal belt and arcing fire the vertical
        armour; a hit may be critical for three or ten times the damage.
        """
        if bullet.shot_type == BulletShotType.DIRECT:
            real_damage = bullet.damage * (1 - self.horizontal_damage_reduction)
        else:
            real_damage = bullet.damage * (1 - self.vertical_damage_reduction)

        critical = CriticalType.NONE
        roll = random.random()
        if roll < bullet.critical_rate / 10:
            real_damage *= 10
            critical = CriticalType.TEN_TIMES
        elif roll < bullet.critical_rate:
            real_damage *= 3
            critical = CriticalType.THREE_TIMES

        self.cur_hp = max(0.0, self.cur_hp - real_damage)
        bullet.real_damage += real_damage
        bullet.critical_type = CriticalType(max(critical, bullet.critical_type))

    def gen_trails(self, block_size: float) -> list[Trail]:
        """The wake left this tick; none while stopped."""
        if self.cur_speed <= 0:
            return []
        if self.type_abbr == _WATER_DROP:
            return [
                Trail(
                    pos=self.cur_pos.copy(),
                    shape=TrailShape.RECT,
                    cur_size=(0.4 + self.cur_speed / self.max_speed) * self.width * 0.5,
                    diffusion_rate=-2,
                    cur_life=self.length / 6 + 150 * self.cur_speed,
                    life_reduction_rate=5,
                    delay=0,
                    rotation=self.cur_rotation,
                    color=SKY_BLUE,
                )
            ]

        offset = self.length / block_size
        rad = self.cur_rotation * math.pi / 180
        sin_val, cos_val = math.sin(rad), math.cos(rad)

        front, back = self.cur_pos.copy(), self.cur_pos.copy()
        front.add_rx(sin_val * offset * 0.25)
        front.sub_ry(cos_val * offset * 0.25)
        back.sub_rx(sin_val * offset * 0.2)
        back.add_ry(cos_val * offset * 0.2)

        return [
            Trail(
                pos=front,
                shape=TrailShape.CIRCLE,
                cur_size=self.width * 0.6,
                diffusion_rate=1.1,
                cur_life=self.length / 8 + 555 * self.cur_speed,
                life_reduction_rate=1,
            ),
            Trail(
                pos=back,
                shape=TrailShape.CIRCLE,
                cur_size=self.width,
                diffusion_rate=0.6,
                cur_life=self.length / 9 + 380 * self.cur_speed,
                life_reduction_rate=1.5,
            ),
        ]

    def can_on_land(self) -> bool:
        """Whether the ship may cross land."""
        return self.type_abbr == _WATER_DROP

    def move_to(
        self, map_cfg: Any, target_pos: MapPos, near_goal: bool, block_size: float
    ) -> bool:
        """Steer and move one step towards ``target_pos``.

        Returns ``True`` once the ship has arrived, is sunk, or, with
        ``near_goal`` set, would run aground.
        """
        if self.cur_hp <= 0:
            return True
        if self.cur_pos.near(target_pos, _ARRIVE_DISTANCE):
            self.cur_speed = 0.0
            return True

        if self.cur_speed < self.max_speed:
            self.cur_speed = min(self.max_speed, self.cur_speed + self.acceleration)
        if near_goal and self.cur_pos.near(target_pos, self.length / block_size * 1.5):
            self.cur_speed = max(self.acceleration * 20, self.cur_speed - self.acceleration * 10)

        target_rotation = calc_angle_between_points(
            self.cur_pos.rx, self.cur_pos.ry, target_pos.rx, target_pos.ry
        )
        if self.cur_rotation != target_rotation:
            flag = _Rotate.CLOCKWISE
            if math.fmod(target_rotation - self.cur_rotation + 360, 360) > 180:
                flag = _Rotate.ANTICLOCKWISE
            step = min(abs(target_rotation - self.cur_rotation), self.rotate_speed)
            self.cur_rotation = math.fmod(self.cur_rotation + int(flag) * step + 360, 360)
            if (
                self.cur_pos.near(target_pos, _TURN_IN_PLACE_DISTANCE)
                and abs(self.cur_rotation - target_rotation) > _TURN_IN_PLACE_TOLERANCE
            ):
                self.cur_speed = 0.0

        rad = self.cur_rotation * math.pi / 180
        next_pos = self.cur_pos.copy()
        next_pos.add_rx(math.sin(rad) * self.cur_speed)
        next_pos.sub_ry(math.cos(rad) * self.cur_speed)
        next_pos.ensure_border(float(map_cfg.width - 2), float(map_cfg.height - 2))

        if (
            near_goal
            and map_cfg.map_data.is_land(next_pos.mx, next_pos.my)
            and not self.can_on_land()
        ):
            self.cur_speed = 0.0
            return True

        self.cur_pos = next_pos
        return False

    def spawn(
        self, uid_generator: ShipUidGenerator, pos: MapPos, rotation: float, player: str
    ) -> BattleShip:
        """A new, independent ship built from this template."""
        ship = copy.deepcopy(self)
        ship.uid = uid_generator.gen(ship.type_abbr)
        ship.cur_pos = pos.copy()
        ship.cur_rotation = rotation
        ship.belong_player = player
        ship.group_id = GroupID.NONE
        return ship