import pytest

from jutland.sprites import (
    DARK_RED,
    DARK_SILVER,
    NOT_FOUND,
    RED,
    BulletType,
    Color,
    Sprite,
    bullet_sprite,
    bullet_width,
    shell_sprite,
    torpedo_sprite,
)

SHELL_DIAMETERS = [
    1024, 460, 406, 381, 356, 343, 305, 283, 203, 180, 155, 152, 150, 140, 133,
    130, 127, 120, 114, 105, 102, 100, 88, 76, 40, 37, 25, 20, 13, 12,
]


def test_railgun_shell_sprite():
    assert shell_sprite(1024) == Sprite(6, 14, DARK_RED)


def test_torpedo_sprite():
    assert torpedo_sprite(533) == Sprite(3, 20, DARK_SILVER)


@pytest.mark.parametrize("diameter", [0, 999, 533])
def test_unknown_shell_is_not_found(diameter):
    assert shell_sprite(diameter) == NOT_FOUND


@pytest.mark.parametrize("diameter", [0, 460])
def test_unknown_torpedo_is_not_found(diameter):
    assert torpedo_sprite(diameter) == NOT_FOUND


def test_not_found_is_red():
    assert NOT_FOUND.color == Color(255, 0, 0) == RED


def test_shell_sprites_shrink_with_calibre():
    sprites = [shell_sprite(d) for d in SHELL_DIAMETERS]
    assert NOT_FOUND not in sprites
    for bigger, smaller in zip(sprites, sprites[1:]):
        assert bigger.width >= smaller.width
        assert bigger.height >= smaller.height


def test_bullet_sprite_dispatch():
    assert bullet_sprite(BulletType.SHELL, 460) == shell_sprite(460)
    assert bullet_sprite("torpedo", 610) == torpedo_sprite(610)
    assert bullet_sprite("missile", 460) == NOT_FOUND


def test_bullet_width_is_cached_by_name():
    width = bullet_width("cache-check-shell", BulletType.SHELL, 1024)
    assert width == shell_sprite(1024).width
    assert bullet_width("cache-check-shell", BulletType.SHELL, 12) == width


def test_bullet_width_of_torpedo():
    assert bullet_width("cache-check-torpedo", "torpedo", 622) == torpedo_sprite(622).width