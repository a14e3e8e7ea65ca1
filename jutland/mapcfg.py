"""Map definitions: the character grid of sea and land, and its loading."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from jutland.grid import OPEN, SHALLOW, WALL, Cells, Grid, Point
from jutland.jsonfile import load_json5

CHR_SEA = "."
CHR_DEEP_SEA = "O"
CHR_SHALLOW = "S"
CHR_COAST = "C"
CHR_LAND = "L"

_SEA_CHARS = frozenset((CHR_SEA, CHR_DEEP_SEA, CHR_SHALLOW))
_LAND_CHARS = frozenset((CHR_COAST, CHR_LAND))
_CELL_VALUES = {
    CHR_SHALLOW: SHALLOW,
    CHR_SEA: OPEN,
    CHR_DEEP_SEA: OPEN,
    CHR_COAST: WALL,
    CHR_LAND: WALL,
}


@dataclass(frozen=True)
class MapData:
    """The rows of a map, one character per cell."""

    rows: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))

    def __len__(self) -> int:
        return len(self.rows)

    def get(self, x: int, y: int) -> str:
        """The character at (x, y), or a space outside the map.

        Both coordinates are bounded by the number of rows; maps are square.
        """
        size = len(self.rows)
        if not (0 <= x < size and 0 <= y < size):
            return " "
        return self.rows[y][x]

    def is_sea(self, x: int, y: int) -> bool:
        return self.get(x, y) in _SEA_CHARS

    def is_land(self, x: int, y: int) -> bool:
        return self.get(x, y) in _LAND_CHARS

    def to_grid_cells(self) -> Cells:
        """Convert to path-finding cells; unknown characters are left out."""
        return [[_CELL_VALUES[ch] for ch in row if ch in _CELL_VALUES] for row in self.rows]


@dataclass
class MapCfg:
    """A loaded map with its path-finding cells and size."""

    name: str
    map_data: MapData
    cells: Cells
    width: int
    height: int
    display_name: str = field(default="")

    def gen_path(self, start: Point, end: Point) -> list[Point]:
        """Find a sea route from ``start`` to ``end``; empty if there is none."""
        return Grid(self.cells).search(start, end)


def _read_lines(path: Path) -> list[str]:
    text = path.read_text(encoding="utf-8")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_map_cfg(map_dir: str | os.PathLike[str], name: str) -> MapCfg:
    """Load ``<map_dir>/<name>.map``.

    Raises ``OSError`` if the file cannot be read and ``ValueError`` if it
    holds no rows.
    """
    path = Path(map_dir) / f"{name}.map"
    rows = _read_lines(path)
    if not rows:
        raise ValueError(f"map {name} is empty: {path}")
    data = MapData(rows)
    return MapCfg(
        name=name,
        map_data=data,
        cells=data.to_grid_cells(),
        width=len(rows[0]),
        height=len(rows),
    )


def load_maps(
    config_dir: str | os.PathLike[str], map_dir: str | os.PathLike[str]
) -> dict[str, MapCfg]:
    """Load every map listed in ``<config_dir>/maps.json5``, keyed by name."""
    entries = load_json5(Path(config_dir) / "maps.json5")
    if not isinstance(entries, list):
        raise ValueError("maps.json5 must hold a list of maps")
    maps: dict[str, MapCfg] = {}
    for entry in entries:
        name = entry.get("name") if isinstance(entry, dict) else None
        if not isinstance(name, str):
            raise ValueError(f"map entry without a name: {entry!r}")
        maps[name] = load_map_cfg(map_dir, name)
    return maps