"""Player orientation, movement and interaction with map tiles."""

import math
from dataclasses import dataclass, field
from enum import Enum

from .common import TILE

TWO_PI = 2 * math.pi
HALF_PI = math.pi / 2

SOLID_TILES = frozenset("189")
CLOSED_DOORS = frozenset("89")
OPEN_DOOR = "7"
CHEST_TILES = frozenset("Ll")
BODY_RADIUS = 4
REACH = 16

_DIRECTIONS = {
    "N": HALF_PI + math.pi,
    "E": TWO_PI,
    "S": HALF_PI,
    "W": math.pi,
}


class TileEvent(Enum):
    """What stepping onto a tile caused."""

    NONE = "none"
    EXIT = "exit"
    CHEST = "chest"


def _round(value):
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def direction_angle(direction):
    """Return the view angle for a map character's facing letter."""
    try:
        return _DIRECTIONS[direction]
    except KeyError:
        raise ValueError(f"unknown direction {direction!r}") from None


def normalize_angle(angle):
    """Bring an angle that is at most one turn off back into 0..2*pi."""
    if angle < 0:
        return angle + TWO_PI
    if angle >= TWO_PI:
        return angle - TWO_PI
    return angle


def movement_vectors(angle, speed):
    """Return the whole-pixel steps for the w, a, s and d keys."""
    forward = (_round(math.cos(angle) * speed), _round(math.sin(angle) * speed))
    right = (
        _round(math.cos(angle + HALF_PI) * speed),
        _round(math.sin(angle + HALF_PI) * speed),
    )
    return {
        "w": forward,
        "s": (-forward[0], -forward[1]),
        "d": right,
        "a": (-right[0], -right[1]),
    }


@dataclass
class Player:
    """The player's view angle, speed and the steps its keys produce."""

    angle: float = 0.0
    speed: int = 2
    moves: dict = field(default_factory=dict)

    def __post_init__(self):
        self.update_moves(self.speed)

    def rotate(self, rotation):
        """Turn by ``rotation`` radians and refresh the movement steps."""
        self.angle = normalize_angle(self.angle + rotation)
        self.update_moves(self.speed)

    def update_moves(self, speed):
        """Set the speed and recompute the key steps for the current angle."""
        self.speed = speed
        self.moves = movement_vectors(self.angle, speed)


def can_move(level, x, y):
    """Return True if a body centred at (x, y) touches no wall or closed door."""
    x, y = int(x), int(y)
    for k in range(37):
        angle = k * math.pi / 18
        cx = int(x + BODY_RADIUS * math.cos(angle))
        cy = int(y + BODY_RADIUS * math.sin(angle))
        tile = level.tile(int(cx / TILE), int(cy / TILE))
        if tile is None or tile in SOLID_TILES:
            return False
    return True


def toggle_door(level, position, step):
    """Open or close the door just ahead of ``position`` along ``step``.

    Returns True if a door changed state.
    """
    col = int((position[0] + step[0] * REACH) / TILE)
    row = int((position[1] + step[1] * REACH) / TILE)
    tile = level.tile(col, row)
    if tile in CLOSED_DOORS:
        level.grid[row][col] = OPEN_DOOR
        return True
    if tile == OPEN_DOOR:
        level.grid[row][col] = "8"
        return True
    return False


def chest_index(level, col, row):
    """Return how many chests come before the cell (col, row) in reading order."""
    count = 0
    for i in range(level.height):
        for j in range(level.width):
            if i == row and j == col:
                return count
            if level.tile(j, i) in CHEST_TILES:
                count += 1
    return count


def check_position(level, position):
    """React to the tile under ``position``: reach the exit or open a chest."""
    col = int(position[0] / TILE)
    row = int(position[1] / TILE)
    tile = level.tile(col, row)
    if tile == "X":
        return TileEvent.EXIT
    if tile == "L":
        level.grid[row][col] = "l"
        return TileEvent.CHEST
    return TileEvent.NONE


def distance(a, b):
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def sort_by_distance(origin, points):
    """Return the points ordered from farthest to nearest to ``origin``."""
    return sorted(points, key=lambda point: distance(origin, point), reverse=True)