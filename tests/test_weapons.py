import math
from dataclasses import dataclass, field

import pytest

from jutland.bullet import Bullet, BulletShotType
from jutland.position import MapPos
from jutland.sprites import BulletType
from jutland.weapons import FiringArc, Gun, TorpedoLauncher

BLOCK = 32
LEFT = FiringArc(180, 360)
RIGHT = FiringArc(0, 180)


@dataclass
class FakeShip:
    cur_pos: MapPos
    cur_rotation: float = 0.0
    cur_speed: float = 0.0
    length: float = 0.0
    uid: str = "human/BB-1"
    belong_player: str = "human"
    extra: dict = field(default_factory=dict)


def _shell(diameter=406, name="S406"):
    return Bullet(name=name, bullet_type=BulletType.SHELL, diameter=diameter, damage=100.0)


def _gun_data(**overrides):
    data = {
        "name": "G",
        "bulletName": "S406",
        "bulletCount": 3,
        "reloadTime": 5,
        "range": 20,
        "bulletSpread": 0,
        "bulletSpeed": 1600,
    }
    data.update(overrides)
    return data


def _gun(**overrides):
    data = _gun_data(**overrides)
    bullet = _shell(name=data["bulletName"], diameter=overrides.pop("_diameter", 406))
    return Gun.from_config(data, bullet).mounted(0.0, LEFT, RIGHT)


def _torpedo_data():
    return {
        "name": "L",
        "bulletName": "T533",
        "bulletCount": 2,
        "shotInterval": 0,
        "reloadTime": 100,
        "range": 20,
        "bulletSpeed": 300,
    }


def _launcher():
    torpedo = Bullet(name="T533", bullet_type=BulletType.TORPEDO, diameter=533, damage=500.0)
    return TorpedoLauncher.from_config(_torpedo_data(), torpedo).mounted(0.0, LEFT, RIGHT)


def test_firing_arc_includes_its_ends():
    arc = FiringArc(30, 150)
    assert arc.contains(30) and arc.contains(150) and arc.contains(90)
    assert not arc.contains(29.9)
    assert not arc.contains(151)


def test_gun_from_config_converts_units():
    gun = Gun.from_config(_gun_data(), _shell())
    assert gun.range == 10
    assert gun.bullet_speed == pytest.approx(0.4)
    assert gun.bullet_count == 3
    assert gun.bullet_name == "S406"


def test_gun_from_config_rejects_other_bullet():
    with pytest.raises(ValueError):
        Gun.from_config(_gun_data(bulletName="S203"), _shell())


def test_mounted_returns_independent_copy():
    base = Gun.from_config(_gun_data(), _shell())
    mounted = base.mounted(0.35, FiringArc(200, 340), FiringArc(20, 160))
    assert mounted.pos_percent == 0.35
    assert mounted.left_firing_arc == FiringArc(200, 340)
    mounted.disable = True
    assert base.disable is False
    assert base.pos_percent == 0.0


def test_gun_reload_state():
    gun = _gun()
    assert gun.reloaded()
    gun.reload_start_at = 10**15
    assert not gun.reloaded()


def test_gun_can_fire_conditions():
    gun = _gun()
    cur = MapPos.from_map(10, 10)
    assert gun.can_fire(0, cur, MapPos.from_map(10, 5))
    assert not gun.can_fire(0, cur, MapPos.from_map(10, -5))
    gun.disable = True
    assert not gun.can_fire(0, cur, MapPos.from_map(10, 5))


def test_gun_outside_arcs_cannot_fire():
    gun = _gun().mounted(0.0, FiringArc(200, 340), FiringArc(20, 160))
    cur = MapPos.from_map(10, 10)
    assert not gun.can_fire(0, cur, MapPos.from_map(10, 5))
    assert gun.can_fire(0, cur, MapPos.from_map(15, 10))


def test_gun_fire_close_salvo_is_direct():
    gun = _gun()
    ship = FakeShip(MapPos.from_map(10, 10))
    enemy = FakeShip(MapPos.from_map(10, 5), uid="computer/BB-1")
    shots = gun.fire(ship, enemy, BLOCK)
    assert len(shots) == gun.bullet_count
    assert len({b.uid for b in shots}) == len(shots)
    for b in shots:
        assert b.shot_type is BulletShotType.DIRECT
        assert b.target_pos.rx == pytest.approx(10)
        assert b.target_pos.ry == pytest.approx(5)
        assert b.belong_ship == ship.uid
        assert b.belong_player == ship.belong_player
        assert b.speed == gun.bullet_speed
    assert gun.reload_start_at > 0


def test_gun_cannot_fire_again_while_reloading():
    gun = _gun()
    ship = FakeShip(MapPos.from_map(10, 10))
    enemy = FakeShip(MapPos.from_map(10, 5))
    assert gun.fire(ship, enemy, BLOCK)
    assert gun.fire(ship, enemy, BLOCK) == []


def test_gun_fire_far_heavy_shell_arcs():
    gun = _gun()
    shots = gun.fire(FakeShip(MapPos.from_map(10, 10)), FakeShip(MapPos.from_map(10, 1)), BLOCK)
    assert shots
    assert all(b.shot_type is BulletShotType.ARCING for b in shots)


def test_rail_gun_always_direct():
    gun = _gun(name="RailGun")
    shots = gun.fire(FakeShip(MapPos.from_map(10, 10)), FakeShip(MapPos.from_map(10, 1)), BLOCK)
    assert shots
    assert all(b.shot_type is BulletShotType.DIRECT for b in shots)


def test_small_calibre_always_direct():
    bullet = _shell(diameter=100, name="S100")
    gun = Gun.from_config(_gun_data(bulletName="S100"), bullet).mounted(0.0, LEFT, RIGHT)
    shots = gun.fire(FakeShip(MapPos.from_map(10, 10)), FakeShip(MapPos.from_map(10, 1)), BLOCK)
    assert shots
    assert all(b.shot_type is BulletShotType.DIRECT for b in shots)


def test_gun_out_of_range_fires_nothing():
    gun = _gun()
    shots = gun.fire(FakeShip(MapPos.from_map(10, 30)), FakeShip(MapPos.from_map(10, 1)), BLOCK)
    assert shots == []
    assert gun.reload_start_at == 0


def test_spread_stays_within_radius():
    gun = _gun(bulletSpread=64, bulletCount=20)
    shots = gun.fire(FakeShip(MapPos.from_map(10, 10)), FakeShip(MapPos.from_map(10, 5)), BLOCK)
    range_percent = 5 / gun.range
    radius = gun.bullet_spread / BLOCK * range_percent
    assert len(shots) == 20
    for b in shots:
        offset = math.hypot(b.target_pos.rx - 10, b.target_pos.ry - 5)
        assert offset <= radius * math.sqrt(2) + 1e-9


def test_torpedo_from_config_converts_units():
    lc = _launcher()
    assert lc.range == 10
    assert lc.bullet_speed == pytest.approx(0.5)


def test_torpedo_rejects_other_bullet():
    with pytest.raises(ValueError):
        TorpedoLauncher.from_config(_torpedo_data(), _shell())


def test_torpedo_fires_one_by_one_then_reloads():
    lc = _launcher()
    ship = FakeShip(MapPos.from_map(10, 10))
    enemy = FakeShip(MapPos.from_map(10, 5))

    first = lc.fire(ship, enemy, BLOCK)
    assert len(first) == 1
    assert first[0].shot_type is BulletShotType.DIRECT
    assert lc.shot_count_before_reload == 1
    assert lc.reload_start_at == 0

    second = lc.fire(ship, enemy, BLOCK)
    assert len(second) == 1
    assert lc.shot_count_before_reload == 0
    assert lc.reload_start_at > 0

    assert lc.fire(ship, enemy, BLOCK) == []
    assert not lc.reloaded()


def test_torpedo_life_covers_range():
    lc = _launcher()
    [torpedo] = lc.fire(FakeShip(MapPos.from_map(10, 10)), FakeShip(MapPos.from_map(10, 5)), BLOCK)
    assert torpedo.life * torpedo.speed >= lc.range


def test_torpedo_reloaded_requires_remaining_shots():
    lc = _launcher()
    assert lc.reloaded()
    lc.shot_count_before_reload = lc.bullet_count
    assert not lc.reloaded()


def test_torpedo_shot_interval_blocks_fire():
    lc = _launcher()
    lc.shot_interval = 1000
    lc.latest_fire_at = 10**15
    assert not lc.reloaded()


def test_disabled_torpedo_cannot_fire():
    lc = _launcher()
    lc.disable = True
    cur = MapPos.from_map(10, 10)
    assert not lc.can_fire(0, cur, MapPos.from_map(10, 5))
    lc.disable = False
    assert lc.can_fire(0, cur, MapPos.from_map(10, 5))