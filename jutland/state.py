"""The live state of a mission: camera, funds, ships, buildings and effects."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from jutland.building import OilPlatform, ReinforcePoint
from jutland.bullet import Bullet
from jutland.catalog import Catalog
from jutland.layout import ScreenLayout
from jutland.metadata import MissionMetadata
from jutland.position import MapPos
from jutland.ship import BattleShip, GroupID, ShipUidGenerator
from jutland.trail import Trail

# Default camera movement speed, in map cells per tick.
_CAMERA_BASE_MOVE_SPEED = 0.25


class MissionStatus(str, Enum):
    """What the mission screen is currently doing."""

    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    PAUSED = "paused"
    IN_MAP = "inMap"
    IN_TERMINAL = "inTerminal"
    IN_BUILDING = "inBuilding"


@dataclass
class Camera:
    """The visible part of the map; ``pos`` is its top-left cell."""

    pos: MapPos
    width: int
    height: int
    base_move_speed: float = _CAMERA_BASE_MOVE_SPEED

    def contains(self, pos: MapPos) -> bool:
        """Whether ``pos`` lies in view, edges included."""
        return (
            self.pos.mx <= pos.mx <= self.pos.mx + self.width
            and self.pos.my <= pos.my <= self.pos.my + self.height
        )


@dataclass
class ShipClass:
    """Ships of one class in a fleet: how many, and one of them as example."""

    total: int
    kind: BattleShip


@dataclass
class Fleet:
    """A player's ships grouped by class, heaviest class first."""

    player: str
    total: int
    classes: list[ShipClass] = field(default_factory=list)


@dataclass
class GameOptions:
    """Options that change how a mission plays and is shown."""

    friendly_fire: bool = False
    force_display_state: bool = True
    display_damage_number: bool = True
    zoom: int = 1


@dataclass
class MissionState:
    """Everything that changes while a mission is played."""

    mission: str
    mission_md: MissionMetadata
    layout: ScreenLayout
    camera: Camera
    cur_player: str
    cur_enemy: str
    cur_funds: int = 0
    mission_status: MissionStatus = MissionStatus.RUNNING
    game_opts: GameOptions = field(default_factory=GameOptions)
    is_area_selecting: bool = False
    is_grouping: bool = False
    selected_reinforce_point_uid: str = ""
    reinforce_points: dict[str, ReinforcePoint] = field(default_factory=dict)
    selected_summon_ship_name: str = ""
    oil_platforms: dict[str, OilPlatform] = field(default_factory=dict)
    ships: dict[str, BattleShip] = field(default_factory=dict)
    ship_uid_generators: dict[str, ShipUidGenerator] = field(default_factory=dict)
    selected_ships: list[str] = field(default_factory=list)
    selected_group_id: GroupID = GroupID.NONE
    destroyed_ships: list[BattleShip] = field(default_factory=list)
    trails: list[Trail] = field(default_factory=list)
    forwarding_bullets: list[Bullet] = field(default_factory=list)
    game_marks: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def new(
        cls,
        mission: str,
        mission_md: MissionMetadata,
        catalog: Catalog,
        layout: ScreenLayout,
        block_size: int,
        cur_player: str,
        cur_enemy: str,
    ) -> MissionState:
        """Set up a mission from its metadata.

        Raises ``ValueError`` if an initial ship belongs to neither player, and
        ``KeyError`` if it is of an unknown class.
        """
        generators = {
            cur_player: ShipUidGenerator(cur_player),
            cur_enemy: ShipUidGenerator(cur_enemy),
        }

        ships: dict[str, BattleShip] = {}
        for md in mission_md.init_ships:
            generator = generators.get(md.belong_player)
            if generator is None:
                raise ValueError(
                    f"ship {md.ship_name} belongs to unknown player {md.belong_player!r}"
                )
            ship = catalog.new_ship(generator, md.ship_name, md.pos, md.rotation, md.belong_player)
            ships[ship.uid] = ship

        selected_rp_uid = ""
        reinforce_points: dict[str, ReinforcePoint] = {}
        for md in mission_md.init_reinforce_points:
            point = ReinforcePoint(
                pos=md.pos.copy(),
                rotation=md.rotation,
                rally_pos=md.rally_pos.copy(),
                belong_player=md.belong_player,
                max_oncoming_ship=md.max_oncoming_ship,
                provided_ship_names=md.provided_ship_names,
                catalog=catalog,
            )
            reinforce_points[point.uid] = point
            if point.belong_player == cur_player:
                selected_rp_uid = point.uid

        oil_platforms: dict[str, OilPlatform] = {}
        for md in mission_md.init_oil_platforms:
            platform = OilPlatform(md.pos.copy(), md.radius, md.fund_yield)
            oil_platforms[platform.uid] = platform

        # One extra row and column of map is shown to avoid black edges.
        camera = Camera(
            pos=mission_md.init_camera_pos.copy(),
            width=layout.width // block_size + 1,
            height=layout.height // block_size + 1,
        )

        return cls(
            mission=mission,
            mission_md=mission_md,
            layout=layout,
            camera=camera,
            cur_player=cur_player,
            cur_enemy=cur_enemy,
            cur_funds=mission_md.init_funds,
            selected_reinforce_point_uid=selected_rp_uid,
            reinforce_points=reinforce_points,
            oil_platforms=oil_platforms,
            ships=ships,
            ship_uid_generators=generators,
        )

    def camera_pos_border(self) -> tuple[float, float]:
        """The furthest top-left position the camera may take.

        Raises ``ValueError`` if the mission has no map.
        """
        map_cfg = self.mission_md.map_cfg
        if map_cfg is None:
            raise ValueError(f"mission {self.mission} has no map")
        return (
            float(map_cfg.width - self.camera.width - 1),
            float(map_cfg.height - self.camera.height - 1),
        )

    def fleet(self, player: str) -> Fleet:
        """The ships of ``player`` counted by class, heaviest class first."""
        classes: dict[str, ShipClass] = {}
        total = 0
        for ship in self.ships.values():
            if ship.belong_player != player:
                continue
            total += 1
            cls_entry = classes.get(ship.name)
            if cls_entry is None:
                classes[ship.name] = ShipClass(total=1, kind=ship)
            else:
                cls_entry.total += 1
        ordered = sorted(classes.values(), key=lambda c: c.kind.tonnage, reverse=True)
        return Fleet(player=player, total=total, classes=ordered)