import pytest

from jutland.grid import OPEN, SHALLOW, WALL, Point
from jutland.mapcfg import MapData, load_map_cfg, load_maps


@pytest.fixture
def small_map():
    return MapData(["..L", "SCO", "..."])


def test_get_inside_and_outside(small_map):
    assert small_map.get(2, 0) == "L"
    assert small_map.get(1, 1) == "C"
    assert small_map.get(-1, 0) == " "
    assert small_map.get(0, 3) == " "


@pytest.mark.parametrize("x, y", [(0, 0), (0, 1), (2, 1)])
def test_sea_cells(small_map, x, y):
    assert small_map.is_sea(x, y)
    assert not small_map.is_land(x, y)


@pytest.mark.parametrize("x, y", [(2, 0), (1, 1)])
def test_land_cells(small_map, x, y):
    assert small_map.is_land(x, y)
    assert not small_map.is_sea(x, y)


def test_outside_is_neither(small_map):
    assert not small_map.is_sea(5, 5)
    assert not small_map.is_land(5, 5)


def test_to_grid_cells_mapping():
    data = MapData(["S.O", "CL?"])
    assert data.to_grid_cells() == [[SHALLOW, OPEN, OPEN], [WALL, WALL]]


def test_load_map_cfg(tmp_path):
    (tmp_path / "demo.map").write_bytes(b"...\r\n.L.\r\n...\n")
    cfg = load_map_cfg(tmp_path, "demo")
    assert cfg.name == "demo"
    assert cfg.map_data.rows == ("...", ".L.", "...")
    assert (cfg.width, cfg.height) == (3, 3)
    assert cfg.cells[1] == [OPEN, WALL, OPEN]


def test_load_empty_map_fails(tmp_path):
    (tmp_path / "void.map").write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_map_cfg(tmp_path, "void")


def test_load_missing_map_fails(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_map_cfg(tmp_path, "nowhere")


def test_load_maps_from_config(tmp_path):
    config_dir = tmp_path / "configs"
    map_dir = tmp_path / "maps"
    config_dir.mkdir()
    map_dir.mkdir()
    (config_dir / "maps.json5").write_text(
        "[\n // maps\n {name: 'north', displayName: 'North'},\n {name: 'south'},\n]",
        encoding="utf-8",
    )
    (map_dir / "north.map").write_text("..\n..\n", encoding="utf-8")
    (map_dir / "south.map").write_text("LL\n..\n", encoding="utf-8")
    maps = load_maps(config_dir, map_dir)
    assert sorted(maps) == ["north", "south"]
    assert maps["south"].map_data.is_land(0, 0)


def test_load_maps_rejects_nameless_entry(tmp_path):
    (tmp_path / "maps.json5").write_text("[{displayName: 'x'}]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_maps(tmp_path, tmp_path)


def test_gen_path_connects_endpoints(tmp_path):
    (tmp_path / "open.map").write_text("....\n....\n....\n....\n", encoding="utf-8")
    cfg = load_map_cfg(tmp_path, "open")
    cells_before = [list(row) for row in cfg.cells]
    path = cfg.gen_path(Point(0, 0), Point(3, 3))
    assert path[0] == Point(0, 0)
    assert path[-1] == Point(3, 3)
    assert cfg.cells == cells_before


def test_gen_path_to_land_is_empty(tmp_path):
    (tmp_path / "isle.map").write_text("...\n.L.\n...\n", encoding="utf-8")
    cfg = load_map_cfg(tmp_path, "isle")
    assert cfg.gen_path(Point(0, 0), Point(1, 1)) == []