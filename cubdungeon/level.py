"""A playable level built from a generated map."""

from dataclasses import dataclass

from .common import TILE, GameError, is_char_obj


@dataclass
class Level:
    """The tile grid plus positions of characters and chests in pixels."""

    grid: list
    width: int
    height: int
    loot: int
    player: list
    enemy: list | None
    chests: list
    n_chars: int

    def tile(self, col, row):
        """Return the tile at a grid cell, or None outside the map."""
        if 0 <= row < self.height and 0 <= col < self.width:
            line = self.grid[row]
            if col < len(line):
                return line[col]
        return None


def _centre(col, row):
    return [float(col * TILE + TILE // 2), float(row * TILE + TILE // 2)]


def init_map(generated):
    """Locate the player, the enemy and every chest on a generated map.

    The character found last in reading order is the player; the first one
    (when there is more than one) is the enemy.
    """
    grid = generated.rows
    characters = [
        (i, j)
        for i, row in enumerate(grid)
        for j, cell in enumerate(row)
        if is_char_obj(cell)
    ]
    if not characters:
        raise GameError("no player on the map")
    player_row, player_col = characters[-1]
    enemy = None
    if len(characters) > 1:
        enemy_row, enemy_col = characters[0]
        enemy = _centre(enemy_col, enemy_row)
    chests = [
        _centre(j, i)
        for i, row in enumerate(grid)
        for j, cell in enumerate(row)
        if cell in ("L", "l")
    ]
    return Level(
        grid=grid,
        width=generated.size + 2,
        height=generated.size + 2,
        loot=generated.loot,
        player=_centre(player_col, player_row),
        enemy=enemy,
        chests=chests,
        n_chars=len(characters),
    )