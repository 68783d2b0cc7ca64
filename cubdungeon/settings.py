"""Player-adjustable settings and the menu controls that change them."""

from dataclasses import dataclass

CROSSHAIR_CIRCLE = "C"
CROSSHAIR_DOT = "D"
CROSSHAIR_CROSS = "E"

# (x_min, x_max, value) per slider notch; earlier entries win where they overlap.
_ROTATION_ROW = (350, 367)
_ROTATION_NOTCHES = (
    (1400, 1427, 0.25),
    (1428, 1445, 0.5),
    (1446, 1473, 0.75),
    (1472, 1501, 1.0),
    (1502, 1529, 1.25),
    (1530, 1557, 1.5),
    (1558, 1585, 1.75),
    (1586, 1602, 2.0),
)

_FOV_ROW = (470, 487)
_FOV_NOTCHES = (
    (1400, 1427, 15),
    (1428, 1445, 30),
    (1446, 1473, 60),
    (1472, 1501, 120),
    (1502, 1529, 240),
    (1530, 1557, 480),
    (1558, 1585, 960),
    (1586, 1602, 1920),
)

_GRAPHICS_ROW = (575, 593)
_GRAPHICS_NOTCHES = (
    (1400, 1440, 1),
    (1441, 1473, 2),
    (1472, 1501, 4),
    (1502, 1529, 8),
    (1530, 1570, 16),
    (1571, 1602, 32),
)

# Lowest graphics divisor allowed for each field of view.
_MIN_GRAPHICS = (
    (1920, 32),
    (960, 16),
    (480, 8),
    (240, 4),
    (120, 2),
)

_CROSSHAIR_ROW = (666, 708)
_CROSSHAIR_BUTTONS = (
    (1425, 1467, CROSSHAIR_CIRCLE),
    (1475, 1517, CROSSHAIR_DOT),
    (1525, 1567, CROSSHAIR_CROSS),
)


def _pick(x, y, row, notches):
    if not row[0] <= y <= row[1]:
        return None
    for low, high, value in notches:
        if low <= x <= high:
            return value
    return None


@dataclass
class Settings:
    """Crosshair kind, field of view in rays, graphics divisor and turn speed."""

    cross_type: str = CROSSHAIR_CROSS
    fov: int = 1920
    graphics: int = 32
    rs: float = 1.0

    def apply_slider_click(self, x, y):
        """Move whichever slider a click at (x, y) lands on.

        Returns True if any slider was hit.
        """
        hit = False
        rs = _pick(x, y, _ROTATION_ROW, _ROTATION_NOTCHES)
        if rs is not None:
            self.rs = rs
            hit = True
        fov = _pick(x, y, _FOV_ROW, _FOV_NOTCHES)
        if fov is not None:
            self.fov = fov
            hit = True
        graphics = _pick(x, y, _GRAPHICS_ROW, _GRAPHICS_NOTCHES)
        if graphics is not None:
            self.graphics = graphics
            hit = True
        self.enforce_ratio()
        return hit

    def enforce_ratio(self):
        """Raise the graphics divisor to the least the field of view allows."""
        for fov, minimum in _MIN_GRAPHICS:
            if self.fov == fov and self.graphics < minimum:
                self.graphics = minimum
                return

    def select_crosshair(self, x, y):
        """Choose the crosshair whose button is at (x, y).

        Returns the chosen kind, or None if no button was hit.
        """
        kind = _pick(x, y, _CROSSHAIR_ROW, _CROSSHAIR_BUTTONS)
        if kind is not None:
            self.cross_type = kind
        return kind