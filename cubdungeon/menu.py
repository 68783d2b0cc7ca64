"""Main menu state: which images show, animations and mouse handling."""

from dataclasses import dataclass, field
from enum import Enum

from .settings import (
    CROSSHAIR_CIRCLE,
    CROSSHAIR_CROSS,
    CROSSHAIR_DOT,
    Settings,
)

IMAGE_COUNT = 69

BACKGROUND_FRAMES = 6
TITLE = 6
START = 7
START_HOVER = 8
SETTINGS_BUTTON = 9
SETTINGS_HOVER = 10
EXIT = 11
EXIT_HOVER = 12
SCROLL_FIRST = 13
SCROLL_END = 33
TEXT_FIRST = 33
CIRCLE = 37
CIRCLE_SELECTED = 38
DOT = 39
DOT_SELECTED = 40
CROSS = 41
CROSS_SELECTED = 42
SLIDERS_FIRST = 43
SLIDERS_END = 65
CONTINUE = 65
CONTINUE_HOVER = 66
UNMUTED = 67
MUTED = 68

FRAME_MS = 150
SCROLL_FRAME_MS = 15
MENU_MUSIC_SECONDS = 94

SCROLL_OPEN = "O"
SCROLL_CLOSING = "C"
SCROLL_NONE = "N"

_START_BOX = (120, 461, 250, 315)
_SETTINGS_BOX = (120, 374, 350, 415)
_EXIT_BOX = (120, 238, 450, 506)
_SOUND_BOX = (1840, 1888, 1000, 1048)

_ROTATION_IMAGES = {
    0.25: 43, 0.5: 44, 0.75: 45, 1.0: 46,
    1.25: 47, 1.5: 48, 1.75: 49, 2.0: 50,
}
_FOV_IMAGES = {
    1920: 51, 960: 52, 480: 53, 240: 54,
    120: 55, 60: 56, 30: 57, 15: 58,
}
_GRAPHICS_IMAGES = {32: 59, 16: 60, 8: 61, 4: 62, 2: 63, 1: 64}

# Images switched off and on when a crosshair button is pressed.
_CROSSHAIR_SWITCH = {
    CROSSHAIR_CIRCLE: ((CIRCLE, DOT_SELECTED, CROSS_SELECTED), CIRCLE_SELECTED),
    CROSSHAIR_DOT: ((CIRCLE_SELECTED, DOT, CROSS_SELECTED), DOT_SELECTED),
    CROSSHAIR_CROSS: ((CIRCLE_SELECTED, DOT_SELECTED, CROSS), CROSS_SELECTED),
}


def _inside(x, y, box):
    x_min, x_max, y_min, y_max = box
    return x_min <= x <= x_max and y_min <= y <= y_max


class MenuAction(Enum):
    """What a click on the menu asks the game to do."""

    NONE = "none"
    START_GAME = "start_game"
    TOGGLE_SETTINGS = "toggle_settings"
    QUIT = "quit"
    TOGGLE_SOUND = "toggle_sound"
    ADJUST = "adjust"


@dataclass
class Menu:
    """The menu's image visibility flags, animation clocks and settings."""

    settings: Settings = field(default_factory=Settings)
    enabled: list = field(default_factory=lambda: [False] * IMAGE_COUNT)
    in_menu: bool = False
    started_game: bool = False
    sound: bool = True
    scroll_mode: str = SCROLL_NONE
    back_frame: int = 1
    scroll_frame: int = SCROLL_FIRST
    back_seconds: int = 0
    scroll_seconds: int = 0
    music_start: int = 0

    def _set(self, indices, value):
        for index in indices:
            self.enabled[index] = value

    def open(self, now_ms, sound):
        """Show the menu at time ``now_ms`` and reset its animations."""
        self.sound = sound
        self.back_seconds = now_ms
        self.scroll_seconds = now_ms
        self.music_start = now_ms // 1000
        self.enabled[0] = True
        self.enabled[TITLE] = True
        self.enabled[CONTINUE if self.started_game else START] = True
        self.enabled[SETTINGS_BUTTON] = True
        self.enabled[EXIT] = True
        self.enabled[UNMUTED if sound else MUTED] = True
        self.back_frame = 1
        self.scroll_frame = SCROLL_FIRST
        self.scroll_mode = SCROLL_NONE
        self.in_menu = True

    def close(self):
        """Leave the menu for the game.

        While the settings scroll is showing it is rolled up instead and
        False is returned; otherwise the menu images are hidden and True
        is returned.
        """
        if self.scroll_mode != SCROLL_NONE:
            self.scroll_mode = SCROLL_CLOSING
            return False
        self._set(range(EXIT + 1), False)
        self._set((CONTINUE, CONTINUE_HOVER, UNMUTED, MUTED), False)
        self.started_game = True
        self.in_menu = False
        return True

    def animate(self, now_ms):
        """Advance every menu animation.

        Returns True when the menu music should be (re)started.
        """
        restart = False
        now_s = now_ms // 1000
        if self.sound and now_s > self.music_start + MENU_MUSIC_SECONDS:
            self.music_start = now_s
            restart = True
        self.animate_background(now_ms)
        self.animate_scroll(now_ms)
        return restart

    def animate_background(self, now_ms):
        """Show the next background frame once a frame time has passed."""
        if now_ms <= self.back_seconds + FRAME_MS:
            return
        self.back_seconds = now_ms
        self._set(range(BACKGROUND_FRAMES), False)
        self.enabled[self.back_frame] = True
        self.back_frame += 1
        if self.back_frame >= BACKGROUND_FRAMES:
            self.back_frame = 0

    def animate_scroll(self, now_ms):
        """Unroll or roll up the settings scroll by one frame."""
        if now_ms <= self.scroll_seconds + SCROLL_FRAME_MS:
            return
        if self.scroll_mode == SCROLL_OPEN:
            self._open_scroll(now_ms)
        elif self.scroll_mode == SCROLL_CLOSING:
            self._close_scroll(now_ms)

    def _open_scroll(self, now_ms):
        self.scroll_seconds = now_ms
        if self.scroll_frame < SCROLL_END:
            if self.scroll_frame > SCROLL_FIRST:
                self.enabled[self.scroll_frame - 1] = False
            if self.scroll_frame >= SCROLL_FIRST:
                self.enabled[self.scroll_frame] = True
            self.scroll_frame += 1
        else:
            self.scroll_text()

    def _close_scroll(self, now_ms):
        self.scroll_seconds = now_ms
        if self.scroll_frame == SCROLL_END:
            self._set(range(TEXT_FIRST, SLIDERS_END), False)
        if self.scroll_frame >= SCROLL_FIRST:
            if self.scroll_frame < SCROLL_END:
                self.enabled[self.scroll_frame] = False
            if self.scroll_frame != SCROLL_FIRST:
                self.enabled[self.scroll_frame - 1] = True
            else:
                self.scroll_mode = SCROLL_NONE
            self.scroll_frame -= 1

    def scroll_text(self):
        """Show the settings labels, crosshair buttons and slider positions."""
        self._set(range(TEXT_FIRST, CIRCLE), True)
        kind = self.settings.cross_type
        self.enabled[CIRCLE_SELECTED if kind == CROSSHAIR_CIRCLE else CIRCLE] = True
        self.enabled[DOT_SELECTED if kind == CROSSHAIR_DOT else DOT] = True
        self.enabled[CROSS_SELECTED if kind == CROSSHAIR_CROSS else CROSS] = True
        self._set(range(SLIDERS_FIRST, SLIDERS_END), False)
        if self.scroll_mode != SCROLL_OPEN:
            return
        for table, value in (
            (_ROTATION_IMAGES, self.settings.rs),
            (_FOV_IMAGES, self.settings.fov),
            (_GRAPHICS_IMAGES, self.settings.graphics),
        ):
            index = table.get(value)
            if index is not None:
                self.enabled[index] = True

    def hover(self, x, y):
        """Highlight the button under the cursor at (x, y)."""
        if not self.in_menu:
            return
        self.enabled[CONTINUE if self.started_game else START] = True
        self.enabled[CONTINUE_HOVER] = False
        self.enabled[START_HOVER] = False
        self.enabled[SETTINGS_BUTTON] = True
        self.enabled[SETTINGS_HOVER] = False
        self.enabled[EXIT] = True
        self.enabled[EXIT_HOVER] = False
        if _inside(x, y, _START_BOX):
            self.enabled[CONTINUE_HOVER if self.started_game else START_HOVER] = True
        elif _inside(x, y, _SETTINGS_BOX):
            self.enabled[SETTINGS_HOVER] = True
        elif _inside(x, y, _EXIT_BOX):
            self.enabled[EXIT_HOVER] = True

    def click(self, x, y):
        """Handle a left click at (x, y) and return what it asks for."""
        if _inside(x, y, _START_BOX):
            return MenuAction.START_GAME if self.close() else MenuAction.NONE
        if _inside(x, y, _SETTINGS_BOX):
            self.scroll_mode = (
                SCROLL_CLOSING if self.scroll_mode == SCROLL_OPEN else SCROLL_OPEN
            )
            return MenuAction.TOGGLE_SETTINGS
        if _inside(x, y, _EXIT_BOX):
            return MenuAction.QUIT
        if _inside(x, y, _SOUND_BOX):
            self.sound = not self.sound
            self.enabled[UNMUTED] = not self.enabled[UNMUTED]
            self.enabled[MUTED] = not self.enabled[MUTED]
            return MenuAction.TOGGLE_SOUND
        if self.scroll_mode == SCROLL_OPEN:
            kind = self.settings.select_crosshair(x, y)
            if kind is not None:
                hidden, shown = _CROSSHAIR_SWITCH[kind]
                self._set(hidden, False)
                self.enabled[shown] = True
            moved = self.settings.apply_slider_click(x, y)
            if kind is not None or moved:
                return MenuAction.ADJUST
        return MenuAction.NONE