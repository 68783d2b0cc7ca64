import math

import pytest

from cubdungeon.common import MINIMAP, TILE, WIDTH
from cubdungeon.level import Level
from cubdungeon.player import Player
from cubdungeon.render import Frame
from cubdungeon.scene import TorchAnimation, minimap_tiles, render_view
from cubdungeon.settings import Settings
from cubdungeon.textures import Texture, TextureSet

WALL_COLOR = 0x808080FF
FLOOR_COLOR = 0x20A020FF


def _solid(color):
    return Texture(32, 32, (color,) * (32 * 32))


def _room():
    grid = [list(line) for line in ("11111", "10001", "10N01", "10001", "11111")]
    return Level(
        grid=grid, width=5, height=5, loot=0, player=[80.0, 80.0],
        enemy=None, chests=[], n_chars=1,
    )


def _textures():
    wall = _solid(WALL_COLOR)
    return TextureSet(
        wall=wall, floor=_solid(FLOOR_COLOR), door=wall, door_open=wall,
        exit=wall, chest=wall, luci=(wall,) * 8,
    )


@pytest.fixture(scope="module")
def rendered():
    frame = Frame()
    depths, lit = render_view(frame, _room(), Player(angle=0.0), Settings(), _textures())
    return frame, depths, lit


def test_torch_frame_names_cycle():
    torch = TorchAnimation()
    names = [torch.advance() for _ in range(7)]
    assert names[0] == "torch.png"
    assert names[1:6] == [f"torch{n}.png" for n in range(1, 6)]
    assert names[6] == "torch.png"


def test_torch_advances_luci_twice_per_cycle():
    torch = TorchAnimation()
    for _ in range(6):
        torch.advance()
    assert torch.luci_frame == 2
    assert torch.frame == 0


def test_luci_frame_wraps():
    torch = TorchAnimation()
    for _ in range(24):
        torch.advance()
        assert 0 <= torch.luci_frame < 8
    assert torch.luci_frame == 0


def test_minimap_first_entry_is_outside_margin():
    tiles = minimap_tiles(_room())
    kind, x, y = tiles[0]
    assert kind == "out"
    assert x == y


def test_minimap_player_tile_centred():
    tiles = minimap_tiles(_room())
    characters = [(x, y) for kind, x, y in tiles if kind == "character"]
    centre = MINIMAP // 2 - TILE // 2 + 8
    assert characters == [(centre, centre)]


def test_minimap_counts_outside_tiles():
    level = _room()
    tiles = minimap_tiles(level)
    outs = sum(1 for kind, _, _ in tiles if kind == "out")
    assert outs == (level.width + 8) * (level.height + 8) - level.width * level.height


def test_minimap_chest_draws_floor_then_chest():
    level = _room()
    level.grid[1][1] = "L"
    tiles = minimap_tiles(level)
    chest = [entry for entry in tiles if entry[0] == "chest"]
    assert len(chest) == 1
    position = tiles.index(chest[0])
    assert tiles[position - 1] == ("floor", chest[0][1], chest[0][2])


def test_minimap_opened_chest_draws_nothing():
    level = _room()
    before = len(minimap_tiles(level))
    level.grid[1][1] = "l"
    assert len(minimap_tiles(level)) == before - 1


def test_render_depths_cover_every_column(rendered):
    _, depths, _ = rendered
    assert len(depths) == WIDTH
    assert all(0 < d < math.inf for d in depths)


def test_render_centre_column_sees_near_wall(rendered):
    frame, depths, _ = rendered
    assert depths[960] == pytest.approx(48, abs=0.5)
    assert frame.get(960, 540) == WALL_COLOR


def test_render_floor_and_ceiling(rendered):
    frame, _, _ = rendered
    assert frame.get(960, 1075) == FLOOR_COLOR
    assert frame.get(960, 4) == FLOOR_COLOR


def test_render_leaves_minimap_corner_empty(rendered):
    frame, _, _ = rendered
    assert frame.get(10, 10) == 0


def test_render_lit_pixels_inside_minimap(rendered):
    _, _, lit = rendered
    assert lit
    assert all(0 <= x < MINIMAP and 0 <= y < MINIMAP for x, y in lit)