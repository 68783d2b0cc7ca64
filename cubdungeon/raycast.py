"""Grid ray casting and minimap line tracing."""

import math
from dataclasses import dataclass

from .common import TILE

BLOCKING_TILES = frozenset("1897X")
HORIZONTAL_HIT = "E"
VERTICAL_HIT = "N"

TWO_PI = 2 * math.pi
HALF_PI = math.pi / 2
_EPSILON = 0.0001


@dataclass
class Ray:
    """A cast ray: where it started, where it stopped and how far it went.

    ``side`` is ``HORIZONTAL_HIT`` when the ray stopped on a horizontal grid
    line and ``VERTICAL_HIT`` when it stopped on a vertical one.
    """

    start: tuple
    end: tuple
    angle: float
    dist: float
    side: str


def _blocked(level, x, y):
    col = int(x / TILE)
    row = int(y / TILE)
    if col < 0 or row < 0 or col >= level.width or row >= level.height:
        return True
    tile = level.tile(col, row)
    return tile is None or tile in BLOCKING_TILES


def _march(level, x, y, dx, dy):
    while not _blocked(level, x, y):
        x += dx
        y += dy
    return x, y


def _horizontal(level, x, y, angle):
    if angle == 0.0 or angle == math.pi:
        return (float(x), float(y)), math.inf
    tan_v = -1 / math.tan(angle)
    row_edge = int(y / TILE) * TILE
    if angle < math.pi:
        end_y = row_edge + TILE
        dy = TILE
    else:
        end_y = row_edge - _EPSILON
        dy = -TILE
    end_x = (y - end_y) * tan_v + x
    dx = -dy * tan_v
    end_x, end_y = _march(level, end_x, end_y, dx, dy)
    return (end_x, end_y), math.hypot(end_x - x, end_y - y)


def _vertical(level, x, y, angle):
    if angle == HALF_PI or angle == 3 * HALF_PI:
        return (float(x), float(y)), math.inf
    tan_v = -math.tan(angle)
    col_edge = int(x / TILE) * TILE
    if HALF_PI < angle < 3 * HALF_PI:
        end_x = col_edge - _EPSILON
        dx = -TILE
    else:
        end_x = col_edge + TILE
        dx = TILE
    end_y = (x - end_x) * tan_v + y
    dy = -dx * tan_v
    end_x, end_y = _march(level, end_x, end_y, dx, dy)
    return (end_x, end_y), math.hypot(end_x - x, end_y - y)


def cast_ray(level, x, y, angle):
    """Cast a ray from pixel position (x, y) until it meets a solid tile.

    Both the horizontal and the vertical grid crossings are followed and the
    nearer one is kept; a horizontal hit has its end point truncated to
    whole pixels.
    """
    x, y = int(x), int(y)
    angle %= TWO_PI
    h_end, h_dist = _horizontal(level, x, y, angle)
    v_end, v_dist = _vertical(level, x, y, angle)
    if h_dist < v_dist:
        end = (float(int(h_end[0])), float(int(h_end[1])))
        return Ray((x, y), end, angle, h_dist, HORIZONTAL_HIT)
    return Ray((x, y), v_end, angle, v_dist, VERTICAL_HIT)


def trace_line(start, end, limit):
    """Return the pixels a line from ``start`` to ``end`` passes through.

    The line is walked in equal steps, one per pixel of its longer axis;
    the start pixel itself is not included, and only pixels with both
    coordinates in ``0..limit-1`` are returned.
    """
    sx, sy = start
    ex, ey = end
    steps = int(max(abs(ex - sx), abs(ey - sy)))
    if steps <= 0:
        return []
    step_x = abs(ex - sx) / steps
    step_y = abs(ey - sy) / steps
    sign_x = 1 if sx <= ex else -1
    sign_y = 1 if sy <= ey else -1
    cx, cy = float(sx), float(sy)
    points = []
    for _ in range(steps):
        cx += sign_x * step_x
        cy += sign_y * step_y
        if 0 <= cx < limit and 0 <= cy < limit:
            points.append((int(cx), int(cy)))
    return points