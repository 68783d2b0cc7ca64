"""Random dungeon generation by tunnel carving."""

import random
from dataclasses import dataclass
from enum import IntEnum

from .common import GameError

WALL = "1"
FLOOR = "0"
EXIT = "X"
START = "N"
ENEMY = "W"
CHEST = "L"
HORIZONTAL_CORRIDOR = "H"
VERTICAL_CORRIDOR = "V"
VERTICAL_DOOR = "8"
HORIZONTAL_DOOR = "9"

DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))
LOOT_CHANCE = 10
DOOR_CHANCE = 10


class Corridor(IntEnum):
    NONE = 0
    HORIZONTAL = 1
    VERTICAL = 2


@dataclass
class GeneratedMap:
    """A finished map; positions are (column, row) in the bordered grid."""

    size: int
    rows: list
    loot: int
    player_start: tuple
    exit: tuple

    @property
    def lines(self):
        return ["".join(row) for row in self.rows]


def random_num(rng, low, high):
    """Draw a number the way the generator always has.

    The result lies in ``0..high``; for ``low == 0`` it is in ``low..high``.
    """
    span = high - low + 1
    if span <= 0:
        raise ValueError(f"empty range {low}..{high}")
    return abs(rng.randrange(1 - span, span) + low)


def _at(rows, i, j):
    if 0 <= i < len(rows) and 0 <= j < len(rows[i]):
        return rows[i][j]
    return None


def is_corridor(rows, i, j):
    """Classify a floor cell by the walls on either side of it."""
    if _at(rows, i, j) != FLOOR:
        return Corridor.NONE
    if _at(rows, i, j + 1) == WALL and _at(rows, i, j - 1) == WALL:
        return Corridor.HORIZONTAL
    if _at(rows, i + 1, j) == WALL and _at(rows, i - 1, j) == WALL:
        return Corridor.VERTICAL
    return Corridor.NONE


def set_entities(rows, c, chance, rng):
    """Turn plain floor cells into ``c`` with the given percent chance.

    Returns the number of cells changed.
    """
    placed = 0
    for row in rows:
        for j, cell in enumerate(row):
            if cell == FLOOR and random_num(rng, 1, 100) < chance:
                row[j] = c
                placed += 1
    return placed


def count_loot(rows):
    """Count chests, both full and emptied."""
    return sum(cell in ("L", "l") for row in rows for cell in row)


def add_border(rows):
    """Return a copy of the grid wrapped in a one-cell wall."""
    width = max((len(row) for row in rows), default=0)
    edge = [WALL] * (width + 2)
    bordered = [list(edge)]
    bordered.extend([WALL, *row, WALL] for row in rows)
    bordered.append(list(edge))
    return bordered


def _mark_corridors(rows):
    for i, row in enumerate(rows):
        for j in range(len(row)):
            kind = is_corridor(rows, i, j)
            if kind is Corridor.HORIZONTAL:
                row[j] = HORIZONTAL_CORRIDOR
            elif kind is Corridor.VERTICAL:
                row[j] = VERTICAL_CORRIDOR


def _place_enemy(rows, size, rng):
    if not any(_at(rows, i, j) == FLOOR
               for i in range(size + 1) for j in range(size + 1)):
        raise GameError("no room left for an enemy")
    while True:
        i = random_num(rng, 0, size)
        j = random_num(rng, 0, size)
        if rows[i][j] == FLOOR:
            rows[i][j] = ENEMY
            return


def _place_doors(rows, rng):
    for row in rows:
        for j, cell in enumerate(row):
            roll = random_num(rng, 1, 100)
            if cell in (VERTICAL_CORRIDOR, HORIZONTAL_CORRIDOR) and roll < DOOR_CHANCE:
                row[j] = VERTICAL_DOOR if cell == VERTICAL_CORRIDOR else HORIZONTAL_DOOR


def _carve(rows, size, position, direction, rng, tunnel_len):
    x, y = position
    carved = 0
    for _ in range(random_num(rng, 0, tunnel_len)):
        nx, ny = x + direction[0], y + direction[1]
        if not (0 <= nx < size and 0 <= ny < size):
            break
        rows[y][x] = FLOOR
        x, y = nx, ny
        carved += 1
    return (x, y), carved


def create_map(size, tunnels, tunnel_len, rng=None):
    """Carve a ``size`` x ``size`` dungeon and wrap it in a wall."""
    if size <= 4:
        raise GameError("map too small")
    if tunnel_len == 0:
        raise GameError("tunnel length should never be 0")
    rng = rng or random.Random()
    rows = [[WALL] * size for _ in range(size)]
    position = (random_num(rng, 0, size - 1), random_num(rng, 0, size - 1))
    player_start = position
    direction = DIRECTIONS[random_num(rng, 0, 3)]
    while tunnels > 0:
        position, carved = _carve(rows, size, position, direction, rng, tunnel_len)
        last = direction
        while direction in (last, (-last[0], -last[1])):
            direction = DIRECTIONS[random_num(rng, 0, 3)]
        if carved:
            tunnels -= 1
    ex, ey = position
    rows[ey][ex] = EXIT
    px, py = player_start
    rows[py][px] = START
    bordered = add_border(rows)
    _mark_corridors(bordered)
    set_entities(bordered, CHEST, LOOT_CHANCE, rng)
    _place_enemy(bordered, size, rng)
    _place_doors(bordered, rng)
    return GeneratedMap(
        size=size,
        rows=bordered,
        loot=count_loot(bordered),
        player_start=(px + 1, py + 1),
        exit=(ex + 1, ey + 1),
    )