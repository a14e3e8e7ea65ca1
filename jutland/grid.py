"""Path finding over a grid of sea cells: A* with straight-line jump points."""

from __future__ import annotations

import math
from dataclasses import dataclass

WALL = -1
OPEN = 0
START = 1
END = 2
SHALLOW = 3

Cells = list[list[int]]

_SHALLOW_PENALTY = 5


@dataclass(frozen=True)
class Point:
    """A cell coordinate."""

    x: int
    y: int

    def is_valid(self) -> bool:
        """A point is valid unless both coordinates are negative."""
        return self.x >= 0 or self.y >= 0


@dataclass
class Node:
    """An entry of the open set: a point with its scores."""

    point: Point
    g: float
    h: float


_INVALID = Point(-1, -1)

_NEIGHBOUR_DIRECTIONS = (
    Point(-1, 0),
    Point(1, 0),
    Point(0, -1),
    Point(0, 1),
    Point(-1, -1),
    Point(-1, 1),
    Point(1, -1),
    Point(1, 1),
)

_STRAIGHT_DIRECTIONS = (Point(-1, 0), Point(1, 0), Point(0, -1), Point(0, 1))


def _slope(a: Point, b: Point) -> float:
    dx = b.x - a.x
    return math.inf if dx == 0 else (b.y - a.y) / dx


class Grid:
    """A rectangular grid of cells that can be searched for paths.

    The cells given are copied; searching never alters the caller's data.
    """

    def __init__(self, cells: Cells) -> None:
        self._source = [list(row) for row in cells]
        self._cells = [list(row) for row in cells]
        self._jump_points: list[list[Point]] = []

    def search(self, start: Point, goal: Point) -> list[Point]:
        """Find a path from ``start`` to ``goal``, reduced to its turning points.

        Returns an empty list when either end is outside the grid or on a
        wall, or when no path exists.
        """
        if not (self._is_open_endpoint(start) and self._is_open_endpoint(goal)):
            return []

        self._cells = [list(row) for row in self._source]
        self._cells[start.y][start.x] = START
        self._cells[goal.y][goal.x] = END
        self._jump_points = self._find_jump_points()

        open_set = [Node(start, 0.0, self._heuristic(start, goal))]
        came_from: dict[Point, Point] = {}
        g_score: dict[Point, float] = {start: 0.0}

        while open_set:
            cur = min(open_set, key=lambda node: node.g + node.h)
            here = cur.point
            if here == goal:
                path = self._reconstruct(came_from, start, goal)
                return self._merge_with_check_points(self._merge_same_slope(path))

            open_set = [node for node in open_set if node.point != here]

            for neighbour in self._neighbours(here):
                tentative = g_score[here] + self._heuristic(here, neighbour)
                if neighbour not in g_score or tentative < g_score[neighbour]:
                    came_from[neighbour] = here
                    g_score[neighbour] = tentative
                    f_score = tentative + self._heuristic(neighbour, goal)
                    open_set.append(Node(neighbour, tentative, f_score))

            jump = self._jump_points[here.y][here.x]
            if jump.is_valid():
                step = self._heuristic(here, jump)
                tentative = g_score[here] + step
                if jump not in g_score or tentative + step < g_score[jump]:
                    came_from[jump] = here
                    g_score[jump] = tentative
                    f_score = tentative + self._heuristic(jump, goal)
                    open_set.append(Node(jump, tentative, f_score))

        return []

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= y < len(self._cells) and 0 <= x < len(self._cells[0])

    def _is_open_endpoint(self, p: Point) -> bool:
        return (
            0 <= p.y < len(self._source)
            and 0 <= p.x < len(self._source[0])
            and self._source[p.y][p.x] != WALL
        )

    def _heuristic(self, a: Point, b: Point) -> float:
        h = float(abs(a.x - b.x) + abs(a.y - b.y))
        return h + _SHALLOW_PENALTY if self._cells[a.y][a.x] == SHALLOW else h

    def _neighbours(self, p: Point) -> list[Point]:
        result = []
        for d in _NEIGHBOUR_DIRECTIONS:
            x, y = p.x + d.x, p.y + d.y
            if self._in_bounds(x, y) and self._cells[y][x] != WALL:
                result.append(Point(x, y))
        return result

    @staticmethod
    def _reconstruct(came_from: dict[Point, Point], start: Point, goal: Point) -> list[Point]:
        path = [goal]
        point = goal
        while point != start:
            point = came_from[point]
            path.append(point)
        path.reverse()
        return path

    @staticmethod
    def _merge_same_slope(path: list[Point]) -> list[Point]:
        """Keep only the points where the direction of travel changes."""
        if len(path) < 3:
            return path
        merged = [path[0]]
        last = _slope(path[0], path[1])
        for prev, point in zip(path[1:], path[2:]):
            m = _slope(prev, point)
            if m != last:
                merged.append(prev)
                last = m
        merged.append(path[-1])
        return merged

    def _merge_with_check_points(self, path: list[Point]) -> list[Point]:
        """Drop intermediate points that have a clear line of sight past them."""
        if len(path) < 3:
            return path
        merged = [path[0]]
        cur_idx, next_idx = 0, 1
        for idx, may in enumerate(path[2:], start=2):
            cur = path[cur_idx]
            distance = math.sqrt(math.pow(may.x - cur.x, 2) + math.pow(may.y - cur.y, 2))
            for i in range(1, int(distance)):
                x = int(i / distance * (may.x - cur.x) + cur.x)
                y = int(i / distance * (may.y - cur.y) + cur.y)
                if self._cells[y][x] == WALL:
                    merged.append(path[next_idx])
                    cur_idx = next_idx
                    break
            next_idx = idx
        merged.append(path[-1])
        return merged

    def _find_jump_points(self) -> list[list[Point]]:
        # Cells without a straight run to the goal keep the origin as jump point.
        width = len(self._cells[0])
        origin = Point(0, 0)
        points = [[origin] * width for _ in self._cells]
        for y, row in enumerate(self._cells):
            for x, cell in enumerate(row):
                if cell == WALL:
                    continue
                for direction in _STRAIGHT_DIRECTIONS:
                    jump = self._jump_point(Point(x, y), direction)
                    if jump.is_valid():
                        points[y][x] = jump
        return points

    def _jump_point(self, p: Point, direction: Point) -> Point:
        dx, dy = direction.x, direction.y
        px, py = p.x, p.y
        while True:
            x, y = px + dx, py + dy
            if not self._in_bounds(x, y) or self._cells[y][x] == WALL:
                return _INVALID
            if self._cells[y][x] == END:
                return Point(x, y)
            if dx != 0 and dy != 0:
                if self._cells[py][x] in (OPEN, END) and self._jump_point(
                    Point(x, y), Point(dx, 0)
                ).is_valid():
                    return Point(x, y)
                if self._cells[y][px] in (OPEN, END) and self._jump_point(
                    Point(x, y), Point(0, dy)
                ).is_valid():
                    return Point(x, y)
            px, py = x, y