"""Software rendering of walls, floor, ceiling and sprites into a frame."""

import math
from array import array

from .common import HEIGHT, MINIMAP, TILE, WIDTH
from .raycast import HORIZONTAL_HIT

BLACK = 0x000000FF
DARKEN = 0x0F0F0F00
DARKEN_THRESHOLD = 0x0F0F0FFF
TRANSPARENT = 0x433D4900
OPENED_CHEST = "l"

WALL_FADE = 144
WALL_DIM = 30
FLOOR_DARK = 120
FLOOR_DIM = 480

_MASK = 0xFFFFFFFF
_TWO_PI = 2 * math.pi
_MIN_DIST = 1e-6


def _blank(count):
    return array("I", bytes(array("I").itemsize * count))


class Frame:
    """A screen-sized buffer of ``0xRRGGBBAA`` pixels."""

    def __init__(self, width=WIDTH, height=HEIGHT):
        self.width = width
        self.height = height
        self.pixels = _blank(width * height)

    def put(self, x, y, color):
        """Set a pixel; positions outside the frame are ignored."""
        x, y = int(x), int(y)
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color & _MASK

    def get(self, x, y):
        """Return the colour of a pixel."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.pixels[y * self.width + x]

    def clear(self):
        """Set every pixel to zero."""
        self.pixels = _blank(self.width * self.height)


def _darkenable(color):
    color &= _MASK
    signed = color - (1 << 32) if color & 0x80000000 else color
    return signed >= DARKEN_THRESHOLD


def _texel(texture, index):
    if 0 <= index < len(texture.pixels):
        return texture.pixels[index]
    return 0


def shade_wall(color, dist):
    """Darken a wall colour by the distance it is seen from."""
    if dist > WALL_FADE:
        return BLACK
    if dist > WALL_DIM and _darkenable(color):
        return (color - DARKEN) & _MASK
    return color & _MASK


def shade_floor(color, depth):
    """Darken a floor or ceiling colour by its depth below the horizon."""
    if depth < FLOOR_DARK:
        return BLACK
    if depth < FLOOR_DIM and _darkenable(color):
        return (color - DARKEN) & _MASK
    return color & _MASK


def draw_wall_column(frame, ray, view_angle, texture, column_width, line_x):
    """Draw the wall slice a ray hit, ``column_width`` pixels wide from ``line_x``.

    Returns the next free column and the row where the floor begins.
    """
    offset_angle = view_angle - ray.angle
    if offset_angle < 0:
        offset_angle += _TWO_PI
    elif offset_angle >= _TWO_PI:
        offset_angle -= _TWO_PI
    dist = max(ray.dist * math.cos(offset_angle), _MIN_DIST)
    line_height = TILE * HEIGHT / dist
    step = texture.height / line_height
    skipped = 0.0
    if line_height > HEIGHT + 1:
        skipped = (line_height - HEIGHT - 1) / 2
        line_height = HEIGHT - 1
    if ray.side == HORIZONTAL_HIT:
        column = int(ray.end[0] / TILE * texture.width)
    else:
        column = int(ray.end[1] / TILE * texture.height)
    texel_col = column & (texture.width - 1)
    top = int(HEIGHT // 2 - line_height / 2)
    bottom = top + line_height
    column_width = max(int(column_width), 0)
    for x in range(line_x, line_x + column_width):
        pos = skipped * step
        y = top
        while y <= bottom:
            if not (x < MINIMAP and y < MINIMAP) and x < WIDTH and y < HEIGHT:
                color = _texel(texture, int(pos) * texture.width + texel_col)
                frame.put(x, y, shade_wall(color, dist))
            y += 1
            pos += step
    return line_x + column_width, int(bottom)


def draw_floor_column(frame, x, y_start, player, ray_angle, view_angle, texture):
    """Draw the floor below ``y_start`` in column ``x`` and its mirrored ceiling."""
    x = int(x)
    horizon = HEIGHT // 2
    cos_offset = math.cos(view_angle - ray_angle)
    for y in range(int(y_start), HEIGHT):
        dy = y - horizon
        depth = dy * cos_offset
        if depth < FLOOR_DARK:
            color = BLACK
        else:
            reach = horizon * TILE / dy / cos_offset
            tx = int(player[0] + math.cos(ray_angle) * reach)
            ty = int(player[1] + math.sin(ray_angle) * reach)
            index = (ty & (texture.height - 1)) * texture.width + (tx & (texture.width - 1))
            color = shade_floor(_texel(texture, index), depth)
        if not (x < MINIMAP and y < MINIMAP):
            frame.put(x, y, color)
        if not (x < MINIMAP and HEIGHT - y < MINIMAP):
            frame.put(x, HEIGHT - y - 1, color)


def _cell(grid, col, row):
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return None


def draw_sprite(frame, texture, sprite_pos, player, view_angle, depths, grid):
    """Draw a billboard sprite, hidden behind walls nearer than it.

    ``depths`` holds the wall distance for each screen column. Sprites on an
    opened chest tile are not drawn. Returns the number of pixels drawn.
    """
    sp_x, sp_y = sprite_pos
    col = int(int(sp_x) / TILE)
    row = int(int(sp_y) / TILE)
    if _cell(grid, col, row) == OPENED_CHEST:
        return 0
    dx = sp_x - player[0]
    dy = sp_y - player[1]
    cos_a = math.cos(view_angle)
    sin_a = math.sin(view_angle)
    lateral = dy * -cos_a + dx * sin_a
    depth = dx * cos_a + dy * sin_a
    if depth <= 0:
        return 0
    screen_x = lateral * -2000 / depth + WIDTH // 2
    screen_y = (HEIGHT // 2) * 30 / depth + HEIGHT // 2
    width = max(int(texture.width * 50 / depth), 0)
    height = max(int(texture.height * 50 / depth), 0)
    if width == 0 or height == 0:
        return 0
    step_u = texture.width / width
    step_v = texture.height / height
    drawn = 0
    u = float(texture.width)
    for column in range(width):
        v = float(texture.height)
        line = 0
        while line < height and int(v) * texture.width - int(u) >= 0:
            px = screen_x - column
            py = screen_y - line
            if 1 < px < WIDTH and 1 < py < HEIGHT:
                color = _texel(texture, int(v) * texture.width - int(u))
                slot = int(screen_x) - column
                if (
                    color
                    and color != TRANSPARENT
                    and 0 <= slot < len(depths)
                    and depth < depths[slot]
                ):
                    frame.put(px, py, color)
                    drawn += 1
            line += 1
            v -= step_v
        u -= step_u
    return drawn