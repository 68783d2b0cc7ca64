"""The end screen: a cat walks toward a spot set by the loot collected."""

from dataclasses import dataclass

from .common import WIDTH

BACK_FRAMES = 8
CAT_SITTING_LOOP = 9
CAT_WALK_FIRST = 21
CAT_WALK_LAST = 32
CAT_STEP = 2
FRAME_MS = 150
MUSIC_SECONDS = 63
CAT_WIDTH = 400


def end_position(loot, total):
    """Return where the cat stops, in screen pixels, for ``loot`` of ``total``."""
    if total == 0:
        return 0.0
    percent = loot * 100 / total
    position = WIDTH * percent / 100 - CAT_WIDTH
    return max(position, 0.0)


@dataclass
class EndScreen:
    """Animation state of the end screen.

    ``cat_shown`` and ``back_shown`` are the frames currently visible, or
    None before the first frame is drawn.
    """

    end_pos: float
    music_start: int = 0
    cat_x: int = 0
    cat_frame: int = CAT_WALK_FIRST
    back_frame: int = 0
    back_seconds: int = 0
    cat_shown: int | None = None
    back_shown: int | None = None

    def move_cat(self):
        """Walk the cat two pixels unless it has arrived; True if it moved."""
        if self.cat_x >= self.end_pos:
            return False
        self.cat_x += CAT_STEP
        return True

    def _animate_cat(self):
        self.cat_shown = self.cat_frame
        self.cat_frame += 1
        walking = self.cat_x < self.end_pos or (
            self.cat_frame > CAT_WALK_FIRST and self.cat_frame != CAT_WALK_LAST
        )
        if walking:
            if self.cat_frame > CAT_WALK_LAST:
                self.cat_frame = CAT_WALK_FIRST
        elif self.cat_frame == CAT_WALK_FIRST:
            self.cat_frame = CAT_SITTING_LOOP
        elif self.cat_frame > CAT_WALK_FIRST:
            self.cat_frame = 0

    def advance(self, now_ms):
        """Move the cat and, once a frame time has passed, show the next frames.

        Returns True if new frames were shown.
        """
        self.move_cat()
        if now_ms <= self.back_seconds + FRAME_MS:
            return False
        self._animate_cat()
        self.back_seconds = now_ms
        self.back_shown = self.back_frame
        self.back_frame += 1
        if self.back_frame >= BACK_FRAMES:
            self.back_frame = 0
        return True

    def should_close(self, now_s, escape):
        """Return True once the music has ended or escape is held."""
        return now_s > self.music_start + MUSIC_SECONDS or bool(escape)