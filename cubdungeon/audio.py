"""Background music and sound effects played through an external player."""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

PLAYER_COMMAND = "afplay"
STOP_COMMAND = "pkill"

MENU_MUSIC = "music/main_menu.mp3"
BACKGROUND_MUSIC = "music/background.mp3"
STEP_SOUND = "music/step.mp3"
SPOTTED_SOUND = "music/spotted.mp3"
DOOR_SOUND = "music/wind.mp3"
END_MUSIC = "music/end.mp3"
SAD_END_MUSIC = "music/sad_end.mp3"

BACKGROUND_VOLUME = 0.5
STEP_VOLUME = 3
BACKGROUND_SECONDS = 135
STEP_INTERVAL_MS = 1400


def _launch(args):
    """Start a command in the background; False if it cannot be started."""
    try:
        subprocess.Popen(
            args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError:
        return False
    return True


@dataclass
class Sound:
    """Plays sound files in the background and paces music and footsteps.

    ``music_start`` is in seconds, ``step`` in milliseconds.
    """

    root: Path = Path(".")
    enabled: bool = True
    music_start: int = 0
    step: int = 0
    command: str = PLAYER_COMMAND
    launcher: object = field(default=_launch, repr=False)

    def play(self, path, volume=None):
        """Start playing a file below ``root``; returns whether it started."""
        args = [self.command]
        if volume is not None:
            args += ["-v", str(volume)]
        args.append(str(Path(self.root) / path))
        return self.launcher(args)

    def stop_all(self):
        """Stop everything the player is playing."""
        return self.launcher([STOP_COMMAND, self.command])

    def tick(self, now_ms, moving, speed):
        """Restart the music when it has run out, or play a footstep.

        Returns the file started, or None.
        """
        if not self.enabled:
            return None
        now_s = now_ms // 1000
        if now_s > self.music_start + BACKGROUND_SECONDS:
            self.music_start = now_s
            self.play(BACKGROUND_MUSIC, BACKGROUND_VOLUME)
            return BACKGROUND_MUSIC
        if moving and now_ms > self.step + STEP_INTERVAL_MS // speed:
            self.step = now_ms
            self.play(STEP_SOUND, STEP_VOLUME)
            return STEP_SOUND
        return None