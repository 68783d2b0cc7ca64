"""Shared constants, the game error type and small string helpers."""

WIDTH = 1920
HEIGHT = 1080
MINIMAP = 288
TILE = 32

CHARACTER_TILES = frozenset("NESW")
MAP_EXTENSION = ".cub"


class GameError(Exception):
    """A fatal condition that ends the game."""

    def __init__(self, message, detail=None):
        self.message = message
        self.detail = detail
        super().__init__(f"error: {message}{detail or ''}")


def is_char_obj(c):
    """Return True if the map tile holds a character (player or enemy)."""
    return len(c) == 1 and c in CHARACTER_TILES


def check_file(path):
    """Return True if the path names a map file (ends in ``.cub``)."""
    return str(path).endswith(MAP_EXTENSION)


def strcdup(s, c, start=0):
    """Copy ``s`` from ``start`` up to and including the first ``c``.

    With ``c`` empty or NUL, or when ``c`` does not occur, the copy runs to
    the end of the string. ``None`` is passed through.
    """
    if s is None:
        return None
    if c in ("", "\0"):
        return s[start:]
    end = s.find(c, start)
    if end == -1:
        return s[start:]
    return s[start:end + 1]


def format_score(loot):
    """Return the end-screen score line for the collected loot."""
    return f"Score: {int(loot * 100)}"