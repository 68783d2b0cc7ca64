"""Per-frame scene assembly: the 3D view, the minimap layout and the torch."""

import math
from dataclasses import dataclass

from .common import MINIMAP, TILE, WIDTH, is_char_obj
from .player import distance, normalize_angle, sort_by_distance
from .raycast import cast_ray, trace_line
from .render import draw_floor_column, draw_sprite, draw_wall_column

TWO_PI = 2 * math.pi
HALF_VIEW = math.radians(30)
CHEST_VIEW_DISTANCE = 130
MINIMAP_MARGIN = 4
CHARACTER_INSET = 8

TORCH_FRAMES = 6
LUCI_FRAMES = 8
TORCH_POSITION = (1100, 450)

# What the minimap shows for each tile, in drawing order.
_TILE_KINDS = {
    " ": ("out",),
    "0": ("floor",),
    "H": ("floor",),
    "V": ("floor",),
    "1": ("wall",),
    "8": ("door_v",),
    "9": ("door_h",),
    "L": ("floor", "chest"),
    "X": ("exit",),
}


@dataclass
class TorchAnimation:
    """The flickering torch, which also paces the enemy's animation."""

    frame: int = 0
    luci_frame: int = 0

    def advance(self):
        """Return the torch image for this tick and move on to the next one."""
        name = "torch.png" if self.frame == 0 else f"torch{self.frame}.png"
        self.frame += 1
        if self.frame >= TORCH_FRAMES:
            self.frame = 0
        if self.frame in (2, 5):
            self.luci_frame += 1
        if self.luci_frame >= LUCI_FRAMES:
            self.luci_frame = 0
        return name


def minimap_tiles(level):
    """Lay out the minimap around the player.

    Returns ``(kind, x, y)`` entries in drawing order, covering the map and a
    margin of four tiles on every side. Kinds are ``out``, ``floor``,
    ``wall``, ``door_v``, ``door_h``, ``chest``, ``exit`` and ``character``;
    a chest tile yields a floor and a chest, a character tile a floor and a
    character marker inset into the tile.
    """
    px, py = level.player
    origin_x = -abs(int(px) // TILE * TILE)
    origin_y = -abs(int(py) // TILE * TILE)
    tiles = []
    for row in range(-MINIMAP_MARGIN, level.height + MINIMAP_MARGIN):
        y = origin_y + (row + MINIMAP_MARGIN) * TILE
        for col in range(-MINIMAP_MARGIN, level.width + MINIMAP_MARGIN):
            x = origin_x + (col + MINIMAP_MARGIN) * TILE
            tile = level.tile(col, row)
            if tile is None:
                tiles.append(("out", x, y))
            elif is_char_obj(tile):
                tiles.append(("floor", x, y))
                tiles.append(("character", x + CHARACTER_INSET, y + CHARACTER_INSET))
            else:
                tiles.extend((kind, x, y) for kind in _TILE_KINDS.get(tile, ()))
    return tiles


def _wall_texture(level, ray, textures, current):
    col = int(int(ray.end[0]) / TILE)
    row = int(int(ray.end[1]) / TILE)
    tile = level.tile(col, row)
    if tile == "1":
        return textures.wall
    if tile in ("8", "9"):
        return textures.door
    if tile == "7":
        return textures.door_open
    if tile == "X":
        return textures.exit
    return current


def render_view(frame, level, player, settings, textures):
    """Render the first-person view and nearby chests into ``frame``.

    Returns ``(depths, lit)``: the corrected wall distance for each screen
    column, and the set of minimap pixels the rays passed over.
    """
    frame.clear()
    px, py = level.player
    origin = (int(px), int(py))
    shift = (px - MINIMAP // 2, py - MINIMAP // 2)
    angle = normalize_angle(player.angle - HALF_VIEW)
    step = math.pi / 180 / settings.graphics
    column_width = WIDTH // settings.fov
    depths = [math.inf] * WIDTH
    lit = set()
    texture = textures.wall
    line_x = 0
    for _ in range(settings.fov):
        angle += step
        if angle >= TWO_PI:
            angle -= TWO_PI
        ray = cast_ray(level, origin[0], origin[1], angle)
        mini_start = (ray.start[0] - shift[0], ray.start[1] - shift[1])
        mini_end = (ray.end[0] - shift[0], ray.end[1] - shift[1])
        lit.update(trace_line(mini_start, mini_end, MINIMAP))
        texture = _wall_texture(level, ray, textures, texture)
        next_x, floor_y = draw_wall_column(
            frame, ray, player.angle, texture, column_width, line_x
        )
        corrected = ray.dist * math.cos(player.angle - ray.angle)
        for x in range(line_x, next_x):
            draw_floor_column(
                frame, x, floor_y, level.player, ray.angle, player.angle, textures.floor
            )
            if x < WIDTH:
                depths[x] = corrected
        line_x = next_x
    for chest in sort_by_distance(level.player, level.chests):
        if distance(level.player, chest) < CHEST_VIEW_DISTANCE:
            draw_sprite(
                frame, textures.chest, chest, level.player, player.angle, depths, level.grid
            )
    return depths, lit