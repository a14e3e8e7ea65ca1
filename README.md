# jutland

The model behind a naval real-time strategy game: battleships with their guns
and torpedo launchers, shells and torpedoes in flight, wakes, maps and sea
path finding, reinforcement points and oil platforms, and the state of a
running mission. It has no dependencies outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `jutland.geometry`: headings (degrees, clockwise, 0 pointing towards
  negative y), distances, point-in-rotated-rectangle tests and
  `calc_weapon_fire_angle`, which leads a shot at a moving target.
- `jutland.grid`: `Grid(cells).search(start, goal)` finds a route between two
  `Point`s with A* and jump points, reduced to its turning points; an empty
  list means there is no route.
- `jutland.position`: `MapPos`, a position holding both whole map cells
  (`mx`, `my`) and exact coordinates (`rx`, `ry`), kept in step.
- `jutland.jsonfile`: a JSON5 reader, `parse_json5` and `load_json5`;
  malformed input raises `Json5Error` with its line and column.
- `jutland.mapcfg`: `MapData`, `MapCfg`, `load_map_cfg` and `load_maps`.
- `jutland.sprites`: `Color`, the named colours, and the size and colour of
  the `Sprite` for each shell calibre and torpedo diameter.
- `jutland.trail`: `Trail`, a wake that grows and fades each `update()`.
- `jutland.bullet`: `Bullet` templates and bullets in flight, with
  `forward()`, `gen_trails()` and `spawn(...)`.
- `jutland.weapons`: `FiringArc`, `Gun` and `TorpedoLauncher`.
- `jutland.ship`: `BattleShip`, `Weapon`, `WeaponMetadata`,
  `ShipUidGenerator`, `GroupID`, `WeaponType` and `ShipType`. Ships move,
  turn, fire, take damage (with three- and ten-fold critical hits) and leave
  wakes.
- `jutland.catalog`: `Catalog`, the templates of every bullet, gun, torpedo
  launcher and ship, built from configuration.
- `jutland.building`: `ReinforcePoint`, `OncomingShip`, `OilPlatform` and
  `LoadingOilShip`. Building and loading progress follow the wall clock.
- `jutland.metadata`: `MissionMetadata` and `MissionCatalog`.
- `jutland.state`: `MissionState`, `Camera`, `Fleet`, `ShipClass`,
  `GameOptions` and `MissionStatus`.
- `jutland.layout`: `ScreenLayout`, `ScreenPos` and `calc_text_width`.
- `jutland.version`: `get_version()` returns the version banner.

## Configuration

The game data lives in JSON5 files in a configuration directory, each
holding a list:

- `bullets.json5`, `guns.json5`, `torpedo_launchers.json5` and `ships.json5`,
  read by `Catalog.load(config_dir)`. Gun and launcher ranges are halved and
  speeds scaled into map units; ship speed and acceleration are divided
  by 600.
- `maps.json5`, a list of entries with a `name`, read by
  `load_maps(config_dir, map_dir)`, which then reads `<map_dir>/<name>.map`
  for each.
- `missions.json5`, read by `MissionCatalog.load(config_dir, maps)`.

A map file holds one character per block:

- `.` sea
- `O` deep sea
- `S` shallow water (navigable, but path finding avoids it)
- `C` coast
- `L` land

An entry that refers to a bullet, gun or launcher that is not configured
raises `ValueError`.

## Example

```python
from jutland.catalog import Catalog
from jutland.layout import ScreenLayout
from jutland.mapcfg import load_maps
from jutland.metadata import MissionCatalog
from jutland.state import MissionState

catalog = Catalog.load("configs")
maps = load_maps("configs", "resources/maps")
missions = MissionCatalog.load("configs", maps)

name = missions.available_missions()[0]
state = MissionState.new(
    name,
    missions.get(name),
    catalog,
    ScreenLayout(width=1920, height=1080),
    64,
    "human_alpha",
    "computer_alpha",
)

fleet = state.fleet(state.cur_player)
print(fleet.total, [cls.kind.name for cls in fleet.classes])
```

Players are plain strings. `MissionState.new` raises `ValueError` if an
initial ship belongs to neither the current player nor the enemy.

The helpers work without any configuration as well:

```python
from jutland.geometry import calc_angle_between_points, calc_weapon_fire_angle
from jutland.grid import Grid, Point

calc_angle_between_points(0, 0, 1, 0)   # 90.0
angle, tx, ty = calc_weapon_fire_angle(0, 0, 1, 10, 10, 1, 45)

path = Grid([[0, 0, 0], [0, -1, 0], [0, 0, 0]]).search(Point(0, 0), Point(2, 2))
```

## What it does not do

This is a library, not a playable game. It has no command, no window, no
game loop, no input handling, no computer opponent, and it draws nothing,
loads no images or fonts and plays no sound. A front end drives the objects
each tick (moving ships, advancing bullets and trails, updating buildings)
and draws them from their fields.