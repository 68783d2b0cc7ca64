# cubdungeon

A first-person raycasting dungeon crawler. Each run carves a new 30 x 30
dungeon out of random tunnels. The dungeon holds corridors, doors, loot chests
and an exit, and one enemy hunts you through it. Collect as much loot as you
can and reach the exit before you are caught.

## Installation

```
pip install .
```

The install pulls in `pygame`, the only dependency.

## Game assets

The package holds no images and no sounds. The game loads PNG files from a
`sprites/` directory and plays sounds from a `music/` directory. Both are
looked up under the root directory, which is the current directory unless you
pass `--root`. If a needed image is missing, the game stops with an
`error: can't load image ...` message.

Sounds go to the `afplay` command, and `pkill afplay` stops them. Where
`afplay` is not installed the game runs silently.

## Playing

```
cubdungeon [--root DIR] [--seed N] [--mute]
```

- `--root DIR`: the directory holding `sprites/` and `music/`. The default is `.`.
- `--seed N`: seed for the map generator, so the same dungeon comes back.
- `--mute`: start with sound off.

The command exits with status 1 and prints the error when the game cannot
start. Otherwise it exits with 0.

The game opens on the main menu:

- **Start game / Continue**: enter the dungeon. Once a game has started, this
  button returns you to it.
- **Settings**: unrolls a scroll with these options:
  - rotation speed, from 0.25 to 2
  - field of view, as the number of rays cast per frame, from 15 to 1920
  - graphics divisor, from 1 to 32, which splits each degree into that many rays
  - crosshair style: circle, dot or cross
- **Exit**: quit.
- The speaker icon in the bottom-right corner turns sound on or off.

When the field of view is wide, the graphics divisor is raised to the lowest
value that field of view allows.

### Controls

| Key            | Action                        |
| -------------- | ----------------------------- |
| W / A / S / D  | move                          |
| Left Shift     | run                           |
| Mouse, ← / →   | turn                          |
| F              | open or close the door ahead  |
| Esc            | back to the menu              |

Walking over a chest collects it. Stepping onto the exit tile ends the run.
The enemy also ends the run if it reaches you. It moves faster for every eight
chests you hold, and it stands still while your rays cover it on the minimap.

The end screen shows `Score: <loot × 100>`. A cat walks across the screen and
stops at a point set by the share of chests you collected. Being caught gives
a score of -42. The end screen closes when its music has run out or when you
hold Esc.

## Using the pieces as a library

The map generator, raycaster and renderer work without a window:

```python
import random
from cubdungeon.mapgen import create_map
from cubdungeon.level import init_map
from cubdungeon.raycast import cast_ray

generated = create_map(30, 110, 15, random.Random(1))
print("\n".join(generated.lines))

level = init_map(generated)
ray = cast_ray(level, int(level.player[0]), int(level.player[1]), 0.5)
print(ray.dist, ray.end, ray.side)
```

Modules:

- `cubdungeon.mapgen`: `create_map`, `GeneratedMap`, and the helpers
  `is_corridor`, `set_entities`, `count_loot`, `add_border` and `random_num`.
- `cubdungeon.level`: `init_map` and `Level`, which holds the grid, the player
  and enemy positions and the chest positions, all in pixels.
- `cubdungeon.raycast`: `cast_ray`, `Ray` and `trace_line`, which lists the
  minimap pixels a ray passes over.
- `cubdungeon.player`: `Player`, `movement_vectors`, `can_move`,
  `toggle_door`, `check_position`, `TileEvent`, `chest_index`,
  `direction_angle`, `normalize_angle`, `distance` and `sort_by_distance`.
- `cubdungeon.enemies`: `step_enemy` and `caught`.
- `cubdungeon.settings`: `Settings` and its menu hit-tests.
- `cubdungeon.menu`: `Menu` and `MenuAction`. The menu's image visibility,
  animations, hover and click handling.
- `cubdungeon.textures`: `Texture`, `TextureSet`, `texture_from_rgba`,
  `load_texture` and `load_texture_set`.
- `cubdungeon.render`: `Frame`, `draw_wall_column`, `draw_floor_column`,
  `draw_sprite`, `shade_wall` and `shade_floor`.
- `cubdungeon.crosshair`: `crosshair_points` and `draw_crosshair`.
- `cubdungeon.scene`: `render_view`, `minimap_tiles` and `TorchAnimation`.
- `cubdungeon.ending`: `EndScreen` and `end_position`.
- `cubdungeon.audio`: `Sound`, which starts the external player and paces the
  music and footsteps.
- `cubdungeon.app`: `Game`, whose `update` advances one frame, and `main`.

## What it does not do

- Maps are always generated. The game cannot load a map from a file.
  `common.check_file` only tests for a `.cub` name; nothing reads such a file.
- The package holds no images or sounds. You supply them, as described under
  *Game assets*.

## Running the tests

```
pip install .[test]
pytest
```