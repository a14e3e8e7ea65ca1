"""Plane geometry on the screen coordinate system.

The x axis grows to the right and the y axis grows downwards. Angles are
measured in degrees, clockwise, with 0 pointing up (towards negative y).
"""

from __future__ import annotations

import math

_SOLVER_ITERATIONS = 100
_SOLVER_TOLERANCE = 0.0001


def _heading(dx: float, dy: float) -> float:
    """Clockwise heading in [0, 360) of the vector (dx, dy)."""
    return math.fmod(math.atan2(dy, dx) * 180 / math.pi + 90 + 360, 360)


def calc_angle_between_points(x1: float, y1: float, x2: float, y2: float) -> float:
    """Heading from (x1, y1) towards (x2, y2)."""
    return _heading(x2 - x1, y2 - y1)


def calc_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.sqrt(math.pow(x2 - x1, 2) + math.pow(y2 - y1, 2))


def is_point_in_rotated_rectangle(
    x: float,
    y: float,
    cx: float,
    cy: float,
    length: float,
    width: float,
    angle: float,
) -> bool:
    """Whether (x, y) lies strictly inside a rectangle centred on (cx, cy).

    The rectangle is ``width`` wide and ``length`` long along its heading,
    rotated by ``angle`` degrees. Points on the edge are outside.
    """
    radians = angle * math.pi / 180
    sin_a, cos_a = math.sin(-radians), math.cos(-radians)

    tx, ty = x - cx, y - cy
    rotated_x = tx * cos_a - ty * sin_a
    rotated_y = tx * sin_a + ty * cos_a

    half_length, half_width = length / 2, width / 2
    return -half_width < rotated_x < half_width and -half_length < rotated_y < half_length


def _enemy_position(
    enemy_x: float, enemy_y: float, enemy_speed: float, enemy_rotation: float, time: float
) -> tuple[float, float]:
    rad = enemy_rotation * math.pi / 180
    return (
        enemy_x + enemy_speed * time * math.sin(rad),
        enemy_y - enemy_speed * time * math.cos(rad),
    )


def _solve_bullet_forward_time(
    cur_x: float,
    cur_y: float,
    bullet_speed: float,
    enemy_x: float,
    enemy_y: float,
    enemy_speed: float,
    enemy_rotation: float,
) -> float:
    """Iteratively estimate how long a bullet needs to meet a moving target."""
    time = 0.0
    for _ in range(_SOLVER_ITERATIONS):
        target_x, target_y = _enemy_position(enemy_x, enemy_y, enemy_speed, enemy_rotation, time)
        actual_time = math.hypot(target_x - cur_x, target_y - cur_y) / bullet_speed
        if abs(actual_time - time) < _SOLVER_TOLERANCE:
            break
        time = actual_time
    return time


def calc_weapon_fire_angle(
    cur_x: float,
    cur_y: float,
    bullet_speed: float,
    enemy_x: float,
    enemy_y: float,
    enemy_speed: float,
    enemy_rotation: float,
) -> tuple[float, float, float]:
    """Aim a weapon at a moving enemy, leading the shot.

    Returns ``(angle, target_x, target_y)``: the firing heading and the point
    where the bullet is expected to meet the enemy.
    """
    time = _solve_bullet_forward_time(
        cur_x, cur_y, bullet_speed, enemy_x, enemy_y, enemy_speed, enemy_rotation
    )
    target_x, target_y = _enemy_position(enemy_x, enemy_y, enemy_speed, enemy_rotation, time)
    return _heading(target_x - cur_x, target_y - cur_y), target_x, target_y