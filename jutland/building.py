"""Buildings on the map: reinforcement points and oil platforms."""

from __future__ import annotations

import math
import time
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jutland.position import MapPos
from jutland.ship import BattleShip, ShipUidGenerator

if TYPE_CHECKING:
    from jutland.catalog import Catalog

# Loading oil onto a cargo ship takes this many seconds.
_OIL_LOADING_SECONDS = 5
_FULL_PROGRESS = 100


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _progress(started_at: int, time_cost: int) -> float:
    """Percentage of ``time_cost`` seconds passed since ``started_at``."""
    elapsed = _now_ms() - started_at
    if time_cost == 0:
        return math.inf
    return elapsed / time_cost / 10


@dataclass
class OncomingShip:
    """A ship being built at a reinforcement point."""

    name: str
    funds_cost: int
    time_cost: int
    started_at: int = 0
    progress: float = 0.0

    def update(self) -> bool:
        """Advance construction; ``True`` once finished. The first call starts it."""
        if self.started_at == 0:
            self.started_at = _now_ms()
            return False
        self.progress = _progress(self.started_at, self.time_cost)
        return self.progress >= _FULL_PROGRESS


@dataclass
class ReinforcePoint:
    """A place where a player's new ships are built, one at a time."""

    pos: MapPos
    rotation: float
    rally_pos: MapPos
    belong_player: str
    max_oncoming_ship: int
    provided_ship_names: list[str]
    catalog: Catalog = field(repr=False, compare=False)
    uid: str = field(default_factory=lambda: str(uuid.uuid4()))
    cur_selected_ship_index: int = 0
    oncoming_ships: list[OncomingShip] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.provided_ship_names = list(self.provided_ship_names)

    def summon(self, ship_name: str) -> None:
        """Queue a ship, unless the queue is full or the point does not build it."""
        if len(self.oncoming_ships) >= self.max_oncoming_ship:
            return
        if ship_name not in self.provided_ship_names:
            return
        funds_cost, time_cost = self.catalog.ship_cost(ship_name)
        self.oncoming_ships.append(OncomingShip(ship_name, funds_cost, time_cost))

    def update(self, uid_generator: ShipUidGenerator, cur_funds: int) -> BattleShip | None:
        """Work on the first queued ship; return it once it is finished.

        Nothing progresses while ``cur_funds`` cannot pay for it.
        """
        if not self.oncoming_ships:
            return None
        oncoming = self.oncoming_ships[0]
        if cur_funds < oncoming.funds_cost:
            return None
        if not oncoming.update():
            return None
        self.oncoming_ships.pop(0)
        return self.catalog.new_ship(
            uid_generator, oncoming.name, self.pos, self.rotation, self.belong_player
        )

    def progress(self) -> int:
        """Percentage built of the first queued ship, at most 100."""
        if not self.oncoming_ships:
            return 0
        return int(min(self.oncoming_ships[0].progress, _FULL_PROGRESS))


@dataclass
class LoadingOilShip:
    """A cargo ship loading oil at a platform."""

    cur_pos: MapPos
    fund_yield: int
    time_cost: int
    started_at: int = 0
    progress: float = 0.0

    def update(self) -> bool:
        """Advance loading; ``True`` when a load is complete, which starts over."""
        if self.started_at == 0:
            self.started_at = _now_ms()
            return False
        self.progress = _progress(self.started_at, self.time_cost)
        if self.progress >= _FULL_PROGRESS:
            self.started_at = 0
            self.progress = 0.0
            return True
        return False


@dataclass
class OilPlatform:
    """An oil well that yields funds to the cargo ships loading at it."""

    pos: MapPos
    radius: int
    fund_yield: int
    uid: str = field(default_factory=lambda: str(uuid.uuid4()))
    loading_oil_ships: dict[str, LoadingOilShip] = field(default_factory=dict)

    def add_ship(self, ship: BattleShip) -> None:
        """Start loading ``ship``, unless it is loading already."""
        if ship.uid not in self.loading_oil_ships:
            self.loading_oil_ships[ship.uid] = LoadingOilShip(
                cur_pos=ship.cur_pos.copy(),
                fund_yield=self.fund_yield,
                time_cost=_OIL_LOADING_SECONDS,
            )

    def remove_ship(self, ship_uid: str) -> None:
        """Stop loading the ship with ``ship_uid``, if it is loading."""
        self.loading_oil_ships.pop(ship_uid, None)