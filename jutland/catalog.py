"""The catalogue of bullets, weapons and ships a game is configured with."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from itertools import chain
from pathlib import Path
from typing import Any, Iterable, Mapping

from jutland.bullet import Bullet
from jutland.jsonfile import load_json5
from jutland.position import MapPos
from jutland.ship import BattleShip, ShipType, ShipUidGenerator, Weapon, WeaponMetadata
from jutland.weapons import FiringArc, Gun, TorpedoLauncher

# Configured ship speeds are scaled down into map units per tick.
_SPEED_DIVISOR = 600

_BULLETS_FILE = "bullets.json5"
_GUNS_FILE = "guns.json5"
_TORPEDO_LAUNCHERS_FILE = "torpedo_launchers.json5"
_SHIPS_FILE = "ships.json5"


def _arc(value: Any, where: str) -> tuple[float, float]:
    if value is None:
        return (0.0, 0.0)
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{where}: a firing arc needs exactly two bearings, got {value!r}")
    return (float(value[0]), float(value[1]))


def _weapon_metadata(data: Mapping[str, Any]) -> WeaponMetadata:
    try:
        name = str(data["name"])
    except KeyError:
        raise ValueError(f"weapon mount without a name: {data!r}") from None
    return WeaponMetadata(
        name=name,
        pos_percent=float(data.get("posPercent", 0.0)),
        left_firing_arc=_arc(data.get("leftFiringArc"), name),
        right_firing_arc=_arc(data.get("rightFiringArc"), name),
    )


def _mount(
    mounts: list[WeaponMetadata], templates: Mapping[str, Any], kind: str
) -> list[Any]:
    mounted = []
    for md in mounts:
        try:
            template = templates[md.name]
        except KeyError:
            raise ValueError(f"{kind} {md.name} not found") from None
        mounted.append(
            template.mounted(
                md.pos_percent, FiringArc(*md.left_firing_arc), FiringArc(*md.right_firing_arc)
            )
        )
    return mounted


def _ship_from_config(
    data: Mapping[str, Any],
    guns: Mapping[str, Gun],
    launchers: Mapping[str, TorpedoLauncher],
) -> BattleShip:
    try:
        name = str(data["name"])
    except KeyError:
        raise ValueError(f"ship config without a name: {data!r}") from None
    try:
        ship_type = ShipType(data.get("type", ShipType.DEFAULT.value))
    except ValueError:
        raise ValueError(f"ship {name} has unknown type {data.get('type')!r}") from None

    weapon_cfg = data.get("weapon") or {}
    weapon = Weapon(
        main_guns_md=[_weapon_metadata(md) for md in weapon_cfg.get("mainGuns") or []],
        secondary_guns_md=[_weapon_metadata(md) for md in weapon_cfg.get("secondaryGuns") or []],
        torpedoes_md=[_weapon_metadata(md) for md in weapon_cfg.get("torpedoes") or []],
    )
    weapon.main_guns = _mount(weapon.main_guns_md, guns, "gun")
    weapon.has_main_gun = bool(weapon.main_guns)
    weapon.secondary_guns = _mount(weapon.secondary_guns_md, guns, "gun")
    weapon.has_secondary_gun = bool(weapon.secondary_guns)
    weapon.torpedoes = _mount(weapon.torpedoes_md, launchers, "torpedo launcher")
    weapon.has_torpedo = bool(weapon.torpedoes)
    weapon.max_range = max(
        [0.0, *(w.range for w in chain(weapon.main_guns, weapon.secondary_guns, weapon.torpedoes))]
    )

    total_hp = float(data.get("totalHP", 0.0))
    max_speed = float(data.get("maxSpeed", 0.0))
    funds_cost = int(data.get("fundsCost", 0))
    time_cost = int(data.get("timeCost", 0))
    description = [str(line) for line in data.get("description") or []]
    description.append(
        f"HP：{total_hp:.0f}，速度：{max_speed:.0f} 节，费用：${funds_cost} / {time_cost}s"
    )

    return BattleShip(
        name=name,
        display_name=str(data.get("displayName", "")),
        ship_type=ship_type,
        type_abbr=str(data.get("typeAbbr", "")),
        description=description,
        total_hp=total_hp,
        horizontal_damage_reduction=min(1.0, float(data.get("horizontalDamageReduction", 0.0))),
        vertical_damage_reduction=min(1.0, float(data.get("verticalDamageReduction", 0.0))),
        max_speed=max_speed / _SPEED_DIVISOR,
        acceleration=float(data.get("acceleration", 0.0)) / _SPEED_DIVISOR,
        rotate_speed=float(data.get("rotateSpeed", 0.0)),
        length=float(data.get("length", 0.0)),
        width=float(data.get("width", 0.0)),
        funds_cost=funds_cost,
        time_cost=time_cost,
        tonnage=total_hp,
        weapon=weapon,
        cur_hp=total_hp,
    )


def _load_list(path: Path) -> list[Any]:
    data = load_json5(path)
    if not isinstance(data, list):
        raise ValueError(f"{path.name} must hold a list")
    return data


def _bullet_for(data: Mapping[str, Any], bullets: Mapping[str, Bullet], kind: str) -> Bullet:
    bullet_name = data.get("bulletName")
    try:
        return bullets[bullet_name]
    except KeyError:
        raise ValueError(f"{kind} {data.get('name')!r} fires unknown {bullet_name!r}") from None


@dataclass
class Catalog:
    """Templates of every bullet, gun, torpedo launcher and ship, by name."""

    bullets: dict[str, Bullet] = field(default_factory=dict)
    guns: dict[str, Gun] = field(default_factory=dict)
    torpedo_launchers: dict[str, TorpedoLauncher] = field(default_factory=dict)
    ships: dict[str, BattleShip] = field(default_factory=dict)

    @classmethod
    def from_data(
        cls,
        bullets: Iterable[Mapping[str, Any]],
        guns: Iterable[Mapping[str, Any]],
        torpedo_launchers: Iterable[Mapping[str, Any]],
        ships: Iterable[Mapping[str, Any]],
    ) -> Catalog:
        """Build the catalogue from parsed configuration entries.

        Raises ``ValueError`` when an entry refers to something not configured.
        """
        bullet_map = {b.name: b for b in map(Bullet.from_config, bullets)}
        gun_map: dict[str, Gun] = {}
        for data in guns:
            gun = Gun.from_config(data, _bullet_for(data, bullet_map, "gun"))
            gun_map[gun.name] = gun
        launcher_map: dict[str, TorpedoLauncher] = {}
        for data in torpedo_launchers:
            launcher = TorpedoLauncher.from_config(
                data, _bullet_for(data, bullet_map, "torpedo launcher")
            )
            launcher_map[launcher.name] = launcher
        ship_map = {}
        for data in ships:
            ship = _ship_from_config(data, gun_map, launcher_map)
            ship_map[ship.name] = ship
        return cls(bullet_map, gun_map, launcher_map, ship_map)

    @classmethod
    def load(cls, config_dir: str | os.PathLike[str]) -> Catalog:
        """Load the catalogue from the JSON5 files in ``config_dir``."""
        base = Path(config_dir)
        return cls.from_data(
            _load_list(base / _BULLETS_FILE),
            _load_list(base / _GUNS_FILE),
            _load_list(base / _TORPEDO_LAUNCHERS_FILE),
            _load_list(base / _SHIPS_FILE),
        )

    def new_ship(
        self,
        uid_generator: ShipUidGenerator,
        name: str,
        pos: MapPos,
        rotation: float,
        player: str,
    ) -> BattleShip:
        """A new ship of class ``name``. Raises ``KeyError`` for an unknown class."""
        return self.ships[name].spawn(uid_generator, pos, rotation, player)

    def ship_display_name(self, name: str) -> str:
        """The display name of a ship class, or ``name`` itself if unknown."""
        ship = self.ships.get(name)
        return name if ship is None else ship.display_name

    def ship_cost(self, name: str) -> tuple[int, int]:
        """``(funds_cost, time_cost)`` of a ship class; zeros if unknown."""
        ship = self.ships.get(name)
        return (0, 0) if ship is None else (ship.funds_cost, ship.time_cost)

    def ship_desc(self, name: str) -> list[str]:
        """The description lines of a ship class; empty if unknown."""
        ship = self.ships.get(name)
        return [] if ship is None else list(ship.description)