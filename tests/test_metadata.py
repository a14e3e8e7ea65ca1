import pytest

from jutland.mapcfg import MapCfg, MapData
from jutland.metadata import MissionCatalog
from jutland.position import MapPos

MISSIONS = [
    {
        "name": "m1",
        "displayName": "First",
        "initFunds": 5000,
        "initCameraPos": [3, 4],
        "mapName": "sea",
        "maxShipCount": 10,
        "description": ["line one", "line two"],
        "initShips": [{"name": "cutter", "pos": [10, 12], "rotation": 90, "belongPlayer": "human"}],
        "initReinforcePoints": [
            {
                "pos": [5, 6],
                "rotation": 180,
                "rallyPos": [7, 8],
                "belongPlayer": "human",
                "maxOncomingShip": 3,
                "providedShipNames": ["cutter", "barge"],
            }
        ],
        "initOilPlatforms": [{"pos": [20, 21], "radius": 2, "yield": 50}],
    },
    {"name": "m2", "mapName": "nowhere"},
]


@pytest.fixture
def maps():
    data = MapData(["...", ".L.", "..."])
    return {"sea": MapCfg("sea", data, data.to_grid_cells(), 3, 3)}


@pytest.fixture
def catalog(maps):
    return MissionCatalog.from_data(MISSIONS, maps)


def test_mission_fields(catalog, maps):
    m1 = catalog.get("m1")
    assert m1.display_name == "First"
    assert m1.init_funds == 5000
    assert m1.max_ship_count == 10
    assert m1.init_camera_pos == MapPos.from_map(3, 4)
    assert m1.map_cfg is maps["sea"]
    assert m1.description == ["line one", "line two"]


def test_initial_ships(catalog):
    (ship,) = catalog.get("m1").init_ships
    assert ship.ship_name == "cutter"
    assert ship.pos == MapPos.from_map(10, 12)
    assert ship.rotation == 90.0
    assert ship.belong_player == "human"


def test_initial_reinforce_points(catalog):
    (point,) = catalog.get("m1").init_reinforce_points
    assert point.pos == MapPos.from_map(5, 6)
    assert point.rally_pos == MapPos.from_map(7, 8)
    assert point.rotation == 180.0
    assert point.max_oncoming_ship == 3
    assert point.provided_ship_names == ["cutter", "barge"]


def test_initial_oil_platforms(catalog):
    (platform,) = catalog.get("m1").init_oil_platforms
    assert platform.pos == MapPos.from_map(20, 21)
    assert (platform.radius, platform.fund_yield) == (2, 50)


def test_missing_fields_take_defaults(catalog):
    m2 = catalog.get("m2")
    assert m2.map_cfg is None
    assert m2.init_funds == 0
    assert m2.init_ships == []
    assert m2.init_reinforce_points == []
    assert m2.init_camera_pos == MapPos.from_map(0, 0)


def test_available_missions(catalog):
    assert sorted(catalog.available_missions()) == ["m1", "m2"]


def test_unknown_mission(catalog):
    with pytest.raises(KeyError):
        catalog.get("m3")


def test_bad_position_is_an_error(maps):
    with pytest.raises(ValueError):
        MissionCatalog.from_data([{"name": "bad", "initCameraPos": [1, 2, 3]}], maps)


def test_mission_without_name_is_an_error(maps):
    with pytest.raises(ValueError):
        MissionCatalog.from_data([{"displayName": "Nameless"}], maps)


def test_load_from_file(tmp_path, maps):
    (tmp_path / "missions.json5").write_text(
        "// missions\n[{name: 'patrol', mapName: 'sea', initFunds: 100,"
        " initShips: [{name: 'cutter', pos: [1, 2], belongPlayer: 'ai'}],},]",
        encoding="utf-8",
    )
    catalog = MissionCatalog.load(tmp_path, maps)
    patrol = catalog.get("patrol")
    assert catalog.available_missions() == ["patrol"]
    assert patrol.map_cfg is maps["sea"]
    assert patrol.init_ships[0].pos == MapPos.from_map(1, 2)


def test_load_rejects_non_list(tmp_path, maps):
    (tmp_path / "missions.json5").write_text("{name: 'x'}", encoding="utf-8")
    with pytest.raises(ValueError):
        MissionCatalog.load(tmp_path, maps)