"""The three crosshair shapes drawn at the centre of the view."""

import math

from .common import HEIGHT, WIDTH
from .settings import CROSSHAIR_CIRCLE, CROSSHAIR_DOT

_CENTRE_X = WIDTH // 2
_CENTRE_Y = HEIGHT // 2
_DIAGONALS = (45, 135, 225, 315)
_GAP_DEGREES = 20
_OUTER_RADIUS = 15
_INNER_RADIUS = 9


def _round(value):
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _angles():
    for degree in range(361):
        yield degree, math.radians(degree)


def _in_gap(degree):
    return any(abs(degree - diagonal) <= _GAP_DEGREES for diagonal in _DIAGONALS)


def _circles():
    for degree, angle in _angles():
        if _in_gap(degree):
            continue
        for radius in (_OUTER_RADIUS, _INNER_RADIUS):
            yield (
                int(_CENTRE_X + radius * math.cos(angle)),
                int(_CENTRE_Y + radius * math.sin(angle)),
            )


def _star():
    for _, angle in _angles():
        ux, uy = _round(math.cos(angle)), _round(math.sin(angle))
        for radius in (1, 2, 3):
            yield _CENTRE_X + radius * ux, _CENTRE_Y + radius * uy


def _dot():
    yield _CENTRE_X, _CENTRE_Y
    for _, angle in _angles():
        for radius in (3, 2, 1):
            yield (
                _CENTRE_X + _round(radius * math.cos(angle)),
                _CENTRE_Y + _round(radius * math.sin(angle)),
            )


def crosshair_points(kind):
    """Return the screen pixels of a crosshair, sorted.

    ``C`` is a broken double circle, ``D`` a filled dot, anything else a star.
    """
    if kind == CROSSHAIR_CIRCLE:
        points = _circles()
    elif kind == CROSSHAIR_DOT:
        points = _dot()
    else:
        points = _star()
    return sorted(set(points))


def draw_crosshair(frame, color, kind):
    """Draw a crosshair into the frame; returns the number of pixels set."""
    points = crosshair_points(kind)
    for x, y in points:
        frame.put(x, y, color)
    return len(points)