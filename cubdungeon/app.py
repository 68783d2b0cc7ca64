"""The game loop: menu, play, end screen and the window that shows them."""

import argparse
import random
import sys
import time
from array import array
from pathlib import Path

import pygame

from .audio import (
    BACKGROUND_MUSIC,
    BACKGROUND_VOLUME,
    DOOR_SOUND,
    END_MUSIC,
    MENU_MUSIC,
    SAD_END_MUSIC,
    SPOTTED_SOUND,
    Sound,
)
from .common import HEIGHT, MINIMAP, WIDTH, GameError, format_score
from .crosshair import draw_crosshair
from .enemies import caught, step_enemy
from .ending import EndScreen, end_position
from .level import init_map
from .mapgen import create_map
from .menu import Menu, MenuAction
from .player import (
    Player,
    TileEvent,
    can_move,
    check_position,
    direction_angle,
    toggle_door,
)
from .render import Frame, draw_sprite
from .scene import TORCH_POSITION, TorchAnimation, minimap_tiles, render_view
from .textures import load_texture_set

MAP_SIZE = 30
MAP_TUNNELS = 110
MAP_TUNNEL_LEN = 15

MOUSE_SENSITIVITY = 4000
KEY_TURN = 0.03
WALK_SPEED = 2
RUN_SPEED = 4
CROSSHAIR_COLOR = 0xFFFFFFFF
CAUGHT_LOOT = -0.42
RAY_COLOR = (0x00, 0xBA, 0xD1)
CHARACTER_OFFSET = 8
CAT_Y = 700
SCORE_POSITION = (900, 100)
FPS = 60

RED = "\033[31m"
RESET = "\033[0m"

_KEY_NAMES = {
    pygame.K_w: "w",
    pygame.K_a: "a",
    pygame.K_s: "s",
    pygame.K_d: "d",
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_LSHIFT: "shift",
    pygame.K_ESCAPE: "escape",
}

_MINIMAP_IMAGES = {
    "out": "sprites/tile_water.png",
    "floor": "sprites/floor.png",
    "wall": "sprites/wall.png",
    "door_v": "sprites/door_ver.png",
    "door_h": "sprites/door_hor.png",
    "chest": "sprites/floor_chest.png",
    "exit": "sprites/exit_map.png",
}


def _now_ms():
    return int(time.time() * 1000)


def _numbered(base, n):
    return f"{base}.png" if n == 0 else f"{base}{n}.png"


def _menu_layout():
    layout = {}
    for n in range(6):
        layout[n] = ("sprites/main/back/" + _numbered("background", n), (0, 0))
    layout[6] = ("sprites/main/title.png", (100, 40))
    buttons = (
        (7, "start_game", (120, 250)),
        (8, "start_game_hover", (120, 250)),
        (9, "settings", (120, 350)),
        (10, "settings_hover", (120, 350)),
        (11, "exit", (120, 450)),
        (12, "exit_hover", (120, 450)),
        (65, "continue", (120, 250)),
        (66, "continue_hover", (120, 250)),
        (67, "unmuted", (1840, 1000)),
        (68, "muted", (1840, 1000)),
    )
    for index, name, pos in buttons:
        layout[index] = (f"sprites/main/button/{name}.png", pos)
    for n in range(20):
        layout[13 + n] = ("sprites/main/scroll/" + _numbered("scroll", n), (WIDTH - 850, 60))
    labels = (
        (33, "sens", (1334, 288)),
        (34, "fov", (1372, 405)),
        (35, "graphics", (1418, 519)),
        (36, "crosshair", (1408, 633)),
        (37, "circle", (1425, 666)),
        (38, "circle_s", (1425, 666)),
        (39, "dot", (1475, 666)),
        (40, "dot_s", (1475, 666)),
        (41, "cross", (1525, 666)),
        (42, "cross_s", (1525, 666)),
    )
    for index, name, pos in labels:
        layout[index] = (f"sprites/main/settings/{name}.png", pos)
    sliders = (
        (43, range(8), (1400, 350)),
        (51, range(7, -1, -1), (1400, 470)),
        (59, (7, 5, 4, 3, 2, 0), (1400, 575)),
    )
    for first, notches, pos in sliders:
        for offset, notch in enumerate(notches):
            layout[first + offset] = (
                "sprites/main/settings/" + _numbered("slider", notch),
                pos,
            )
    return layout


_MENU_LAYOUT = _menu_layout()


class _Images:
    """PNG images loaded on first use."""

    def __init__(self, root):
        self.root = Path(root)
        self._cache = {}

    def get(self, relative):
        if relative not in self._cache:
            path = self.root / relative
            try:
                self._cache[relative] = pygame.image.load(str(path)).convert_alpha()
            except (pygame.error, OSError) as exc:
                raise GameError("can't load image ", str(path)) from exc
        return self._cache[relative]


def _frame_surface(frame):
    data = array("I", frame.pixels)
    if sys.byteorder == "little":
        data.byteswap()
    return pygame.image.frombuffer(data.tobytes(), (frame.width, frame.height), "RGBA")


class Game:
    """A whole session: the level, the player, the menu and the end screen."""

    def __init__(self, level, *, root=".", sound=None, clock=None,
                 textures=None, frame=None):
        self.level = level
        self.root = Path(root)
        self.sound = sound if sound is not None else Sound(root=self.root)
        self.clock = clock or _now_ms
        self.textures = textures
        self.frame = frame
        px, py = level.player
        start_tile = level.tile(int(px) // 32, int(py) // 32)
        self.player = Player(angle=direction_angle(start_tile), speed=WALK_SPEED)
        self.menu = Menu()
        self.menu.sound = self.sound.enabled
        self.torch = TorchAnimation()
        self.torch_image = None
        self.loot = 0.0
        self.end = None
        self.running = True
        self.depths = None
        self.lit = set()
        self._spotted = False
        self._to_menu()

    def _to_menu(self):
        now = self.clock()
        self.menu.open(now, self.sound.enabled)
        self.sound.stop_all()
        if self.sound.enabled:
            self.sound.play(MENU_MUSIC)

    def _start_playing(self):
        now = self.clock()
        self.sound.stop_all()
        self.sound.music_start = now // 1000
        self.sound.step = now
        if self.sound.enabled:
            self.sound.play(BACKGROUND_MUSIC, BACKGROUND_VOLUME)

    def _on_click(self, x, y):
        if self.end is not None:
            return MenuAction.NONE
        action = self.menu.click(x, y)
        if action is MenuAction.START_GAME:
            self._start_playing()
        elif action is MenuAction.QUIT:
            self.sound.stop_all()
            self.running = False
        elif action is MenuAction.TOGGLE_SOUND:
            self.sound.stop_all()
            self.sound.enabled = self.menu.sound
            if self.sound.enabled:
                self.sound.play(MENU_MUSIC)
        return action

    def _open_door(self):
        if toggle_door(self.level, self.level.player, self.player.moves["w"]):
            if self.sound.enabled:
                self.sound.play(DOOR_SOUND)

    def _end_game(self, now):
        self.end = EndScreen(
            end_position(self.loot, self.level.loot), music_start=now // 1000
        )
        self.sound.stop_all()
        self.sound.play(END_MUSIC if self.loot > 0 else SAD_END_MUSIC)

    def _move(self, step, now):
        x = self.level.player[0] + step[0]
        y = self.level.player[1] + step[1]
        if not can_move(self.level, x, y):
            return
        self.level.player[0] = x
        self.level.player[1] = y
        self.sound.tick(now, True, self.player.speed)

    def _check_keys(self, keys, now):
        rs = self.menu.settings.rs
        if "escape" in keys:
            self._to_menu()
        for key in ("w", "a", "s", "d"):
            if key in keys:
                self._move(self.player.moves[key], now)
        if "left" in keys:
            self.player.angle -= KEY_TURN * rs
        if "right" in keys:
            self.player.angle += KEY_TURN * rs
        self.player.speed = RUN_SPEED if "shift" in keys else WALK_SPEED

    def _render(self):
        if self.frame is None or self.textures is None:
            self.depths = None
            self.lit = set()
            return
        self.depths, self.lit = render_view(
            self.frame, self.level, self.player, self.menu.settings, self.textures
        )

    def _move_enemy(self, now):
        enemy = self.level.enemy
        if enemy is None:
            return
        px, py = self.level.player
        mx = int(enemy[0] - px) + MINIMAP // 2
        my = int(enemy[1] - py) + MINIMAP // 2
        if 0 <= mx < MINIMAP and 0 <= my < MINIMAP and (mx, my) in self.lit:
            if not self._spotted and self.sound.enabled:
                self.sound.play(SPOTTED_SOUND)
            if self.frame is not None and self.textures is not None and self.depths:
                draw_sprite(
                    self.frame,
                    self.textures.luci[self.torch.luci_frame],
                    enemy,
                    self.level.player,
                    self.player.angle,
                    self.depths,
                    self.level.grid,
                )
            self._spotted = True
            return
        if caught(self.level.player, enemy):
            self.loot = CAUGHT_LOOT
            self._end_game(now)
            return
        self.level.enemy = list(step_enemy(enemy, self.level.player, self.loot))
        self._spotted = False

    def update(self, keys, mouse_dx=0):
        """Advance one frame.

        ``keys`` holds the names of the keys held down: ``w``, ``a``, ``s``,
        ``d``, ``left``, ``right``, ``shift`` and ``escape``. ``mouse_dx`` is
        how far the mouse moved from the window centre.
        """
        keys = frozenset(keys)
        now = self.clock()
        if self.end is not None:
            advanced = self.end.advance(now)
            if not advanced and self.end.should_close(now // 1000, "escape" in keys):
                self.running = False
            return
        if self.menu.in_menu:
            if self.menu.animate(now):
                self.sound.play(MENU_MUSIC)
            return
        settings = self.menu.settings
        self.player.angle += mouse_dx / MOUSE_SENSITIVITY * settings.rs
        self._check_keys(keys, now)
        self.player.rotate(0.0)
        event = check_position(self.level, self.level.player)
        if event is TileEvent.EXIT:
            self._end_game(now)
            return
        if event is TileEvent.CHEST:
            self.loot += 1
        self._render()
        self._move_enemy(now)
        if self.end is not None:
            return
        if self.frame is not None:
            draw_crosshair(self.frame, CROSSHAIR_COLOR, settings.cross_type)
        self.torch_image = self.torch.advance()
        self.sound.tick(now, False, self.player.speed)

    def _pressed_keys(self):
        pressed = pygame.key.get_pressed()
        return {name for key, name in _KEY_NAMES.items() if pressed[key]}

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self._on_click(*event.pos) is MenuAction.START_GAME:
                    pygame.mouse.set_pos(WIDTH // 2, HEIGHT // 2)
            elif event.type == pygame.MOUSEMOTION:
                self.menu.hover(*event.pos)
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_f:
                self._open_door()

    def _draw_menu(self, screen, images):
        for index, shown in enumerate(self.menu.enabled):
            if shown and index in _MENU_LAYOUT:
                path, pos = _MENU_LAYOUT[index]
                screen.blit(images.get(path), pos)

    def _draw_end(self, screen, images):
        end = self.end
        if end.back_shown is not None:
            screen.blit(images.get("sprites/end/" + _numbered("back", end.back_shown)), (0, 0))
        if end.cat_shown is not None:
            if end.cat_shown < 21:
                name = _numbered("cat_sitting", end.cat_shown)
            else:
                name = _numbered("cat_walk", end.cat_shown - 21)
            screen.blit(images.get("sprites/end/cat/" + name), (end.cat_x, CAT_Y))
        font = pygame.font.Font(None, 32)
        screen.blit(font.render(format_score(self.loot), True, (255, 255, 255)),
                    SCORE_POSITION)

    def _draw_game(self, screen, images):
        px, py = self.level.player
        shift_x = 16 + int(px) // 32 * 32 - px
        shift_y = 16 + int(py) // 32 * 32 - py
        screen.set_clip(pygame.Rect(0, 0, MINIMAP, MINIMAP))
        for kind, x, y in minimap_tiles(self.level):
            if kind in _MINIMAP_IMAGES:
                screen.blit(images.get(_MINIMAP_IMAGES[kind]),
                            (int(x + shift_x), int(y + shift_y)))
        centre = MINIMAP // 2 - CHARACTER_OFFSET
        screen.blit(images.get("sprites/player.png"), (centre, centre))
        if self.level.enemy is not None:
            ex, ey = self.level.enemy
            screen.blit(images.get("sprites/luci/luci_map.png"),
                        (int(ex - px) + centre, int(ey - py) + centre))
        screen.set_clip(None)
        if self.frame is not None:
            screen.blit(_frame_surface(self.frame), (0, 0))
        for point in self.lit:
            screen.set_at(point, RAY_COLOR)
        if self.torch_image is not None:
            screen.blit(images.get("sprites/torch/" + self.torch_image), TORCH_POSITION)

    def _draw(self, screen, images):
        screen.fill((0, 0, 0))
        if self.end is not None:
            self._draw_end(screen, images)
        elif self.menu.in_menu:
            self._draw_menu(screen, images)
        else:
            self._draw_game(screen, images)

    def run(self):
        """Open the window and play until it is closed."""
        pygame.init()
        try:
            if self.textures is None:
                self.textures = load_texture_set(self.root)
            if self.frame is None:
                self.frame = Frame()
            screen = pygame.display.set_mode((WIDTH, HEIGHT))
            pygame.display.set_caption("CUB3D")
            images = _Images(self.root)
            try:
                cursor = images.get("sprites/cursor.png")
                pygame.mouse.set_cursor(pygame.cursors.Cursor((0, 0), cursor))
            except (GameError, pygame.error):
                pass
            ticker = pygame.time.Clock()
            while self.running:
                self._handle_events()
                if not self.running:
                    break
                playing = self.end is None and not self.menu.in_menu
                pygame.mouse.set_visible(not playing)
                mouse_dx = 0
                if playing:
                    mouse_dx = pygame.mouse.get_pos()[0] - WIDTH // 2
                    pygame.mouse.set_pos(WIDTH // 2, HEIGHT // 2)
                self.update(self._pressed_keys(), mouse_dx)
                self._draw(screen, images)
                pygame.display.flip()
                ticker.tick(FPS)
        finally:
            self.sound.stop_all()
            pygame.quit()


def main(argv=None):
    """Generate a dungeon and play it."""
    parser = argparse.ArgumentParser(prog="cubdungeon",
                                     description="Explore a random dungeon.")
    parser.add_argument("--root", default=".",
                        help="directory holding sprites/ and music/")
    parser.add_argument("--seed", type=int, help="seed for the map generator")
    parser.add_argument("--mute", action="store_true", help="start with sound off")
    args = parser.parse_args(argv)
    try:
        generated = create_map(MAP_SIZE, MAP_TUNNELS, MAP_TUNNEL_LEN,
                               random.Random(args.seed))
        sound = Sound(root=Path(args.root), enabled=not args.mute)
        game = Game(init_map(generated), root=args.root, sound=sound)
        game.run()
    except GameError as exc:
        sys.stderr.write(f"{RED}{exc}\n{RESET}")
        return 1
    return 0