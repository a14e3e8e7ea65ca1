"""Mission definitions: map, funds and the ships and buildings a mission starts with."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping

from jutland.jsonfile import load_json5
from jutland.mapcfg import MapCfg
from jutland.position import MapPos

_MISSIONS_FILE = "missions.json5"


@dataclass
class InitShipMetadata:
    """A ship present when a mission starts."""

    ship_name: str
    pos: MapPos
    rotation: float
    belong_player: str


@dataclass
class InitReinforcePointMetadata:
    """A reinforcement point present when a mission starts."""

    pos: MapPos
    rotation: float
    rally_pos: MapPos
    belong_player: str
    max_oncoming_ship: int
    provided_ship_names: list[str]


@dataclass
class InitOilPlatformMetadata:
    """An oil platform present when a mission starts."""

    pos: MapPos
    radius: int
    fund_yield: int


@dataclass
class MissionMetadata:
    """Everything a mission is set up from. ``map_cfg`` is ``None`` for an unknown map."""

    name: str
    display_name: str = ""
    map_cfg: MapCfg | None = None
    max_ship_count: int = 0
    init_funds: int = 0
    init_camera_pos: MapPos = field(default_factory=MapPos)
    description: list[str] = field(default_factory=list)
    init_ships: list[InitShipMetadata] = field(default_factory=list)
    init_reinforce_points: list[InitReinforcePointMetadata] = field(default_factory=list)
    init_oil_platforms: list[InitOilPlatformMetadata] = field(default_factory=list)


def _pos(value: Any) -> MapPos:
    if value is None:
        return MapPos.from_map(0, 0)
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"a position needs exactly two coordinates, got {value!r}")
    return MapPos.from_map(int(value[0]), int(value[1]))


def _ship(data: Mapping[str, Any]) -> InitShipMetadata:
    return InitShipMetadata(
        ship_name=str(data.get("name", "")),
        pos=_pos(data.get("pos")),
        rotation=float(int(data.get("rotation", 0))),
        belong_player=str(data.get("belongPlayer", "")),
    )


def _reinforce_point(data: Mapping[str, Any]) -> InitReinforcePointMetadata:
    return InitReinforcePointMetadata(
        pos=_pos(data.get("pos")),
        rotation=float(int(data.get("rotation", 0))),
        rally_pos=_pos(data.get("rallyPos")),
        belong_player=str(data.get("belongPlayer", "")),
        max_oncoming_ship=int(data.get("maxOncomingShip", 0)),
        provided_ship_names=[str(name) for name in data.get("providedShipNames") or []],
    )


def _oil_platform(data: Mapping[str, Any]) -> InitOilPlatformMetadata:
    return InitOilPlatformMetadata(
        pos=_pos(data.get("pos")),
        radius=int(data.get("radius", 0)),
        fund_yield=int(data.get("yield", 0)),
    )


def _mission(data: Mapping[str, Any], maps: Mapping[str, MapCfg]) -> MissionMetadata:
    try:
        name = str(data["name"])
    except KeyError:
        raise ValueError(f"mission without a name: {data!r}") from None
    return MissionMetadata(
        name=name,
        display_name=str(data.get("displayName", "")),
        map_cfg=maps.get(data.get("mapName", "")),
        max_ship_count=int(data.get("maxShipCount", 0)),
        init_funds=int(data.get("initFunds", 0)),
        init_camera_pos=_pos(data.get("initCameraPos")),
        description=[str(line) for line in data.get("description") or []],
        init_ships=[_ship(s) for s in data.get("initShips") or []],
        init_reinforce_points=[_reinforce_point(p) for p in data.get("initReinforcePoints") or []],
        init_oil_platforms=[_oil_platform(p) for p in data.get("initOilPlatforms") or []],
    )


class MissionCatalog:
    """All configured missions, by name."""

    def __init__(self, missions: Mapping[str, MissionMetadata]) -> None:
        self._missions = dict(missions)

    @classmethod
    def from_data(
        cls, missions: Iterable[Mapping[str, Any]], maps: Mapping[str, MapCfg]
    ) -> MissionCatalog:
        """Build the catalogue from parsed mission entries and the loaded maps."""
        built = {}
        for data in missions:
            mission = _mission(data, maps)
            built[mission.name] = mission
        return cls(built)

    @classmethod
    def load(
        cls, config_dir: str | os.PathLike[str], maps: Mapping[str, MapCfg]
    ) -> MissionCatalog:
        """Load ``missions.json5`` from ``config_dir``."""
        data = load_json5(Path(config_dir) / _MISSIONS_FILE)
        if not isinstance(data, list):
            raise ValueError(f"{_MISSIONS_FILE} must hold a list of missions")
        return cls.from_data(data, maps)

    def get(self, mission: str) -> MissionMetadata:
        """The mission named ``mission``. Raises ``KeyError`` if there is none."""
        return self._missions[mission]

    def available_missions(self) -> list[str]:
        """Names of all missions."""
        return list(self._missions)