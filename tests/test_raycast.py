import math

import pytest

from cubdungeon.common import TILE
from cubdungeon.level import Level
from cubdungeon.raycast import (
    BLOCKING_TILES,
    HORIZONTAL_HIT,
    VERTICAL_HIT,
    cast_ray,
    trace_line,
)

ROOM = ["11111", "10001", "10001", "10001", "11111"]


def make_level(rows):
    grid = [list(r) for r in rows]
    return Level(
        grid=grid,
        width=len(grid[0]),
        height=len(grid),
        loot=0,
        player=[0.0, 0.0],
        enemy=None,
        chests=[],
        n_chars=1,
    )


def end_tile(level, ray):
    return level.tile(int(ray.end[0]) // TILE, int(ray.end[1]) // TILE)


def test_east_ray_stops_on_vertical_wall_face():
    ray = cast_ray(make_level(ROOM), 80, 80, 0.0)
    assert ray.side == VERTICAL_HIT
    assert ray.end[0] == 4 * TILE
    assert ray.dist == pytest.approx(48)


def test_south_ray_stops_on_horizontal_wall_face():
    ray = cast_ray(make_level(ROOM), 80, 80, math.pi / 2)
    assert ray.side == HORIZONTAL_HIT
    assert ray.end == (80, 4 * TILE)
    assert ray.start == (80, 80)


def test_east_and_west_distances_match_in_centred_room():
    level = make_level(ROOM)
    east = cast_ray(level, 80, 80, 0.0)
    west = cast_ray(level, 80, 80, math.pi)
    assert west.dist == pytest.approx(east.dist, abs=1e-3)


@pytest.mark.parametrize("angle", [0.3, 1.0, 2.0, 3.5, 4.0, 5.5, 6.0])
def test_ray_ends_in_blocking_tile(angle):
    level = make_level(ROOM)
    ray = cast_ray(level, 70, 90, angle)
    assert end_tile(level, ray) in BLOCKING_TILES
    measured = math.hypot(ray.end[0] - 70, ray.end[1] - 90)
    assert ray.dist == pytest.approx(measured, abs=1.5)


@pytest.mark.parametrize("door", ["8", "9", "7", "X"])
def test_doors_and_exit_block_the_ray(door):
    rows = ["11111", "10001", "100" + door + "1", "10001", "11111"]
    level = make_level(rows)
    ray = cast_ray(level, 80, 80, 0.0)
    assert end_tile(level, ray) == door
    assert ray.end[0] == 3 * TILE


def test_floor_markers_do_not_block():
    rows = ["11111", "1LlH1", "10V01", "1NW01", "11111"]
    level = make_level(rows)
    ray = cast_ray(level, 48, 80, 0.0)
    assert ray.end[0] == 4 * TILE


def test_angle_is_wrapped_into_one_turn():
    level = make_level(ROOM)
    plain = cast_ray(level, 80, 80, 0.3)
    wrapped = cast_ray(level, 80, 80, 0.3 + 2 * math.pi)
    assert wrapped.dist == pytest.approx(plain.dist)
    assert wrapped.angle == pytest.approx(0.3)


def test_open_map_ray_stops_at_grid_edge():
    level = make_level(["000", "000", "000"])
    ray = cast_ray(level, 48, 48, 0.0)
    assert ray.end[0] >= level.width * TILE
    assert math.isfinite(ray.dist)


def test_trace_line_straight():
    assert trace_line((0, 0), (3, 0), 10) == [(1, 0), (2, 0), (3, 0)]


def test_trace_line_backwards_diagonal():
    assert trace_line((4, 4), (0, 0), 10) == [(3, 3), (2, 2), (1, 1), (0, 0)]


def test_trace_line_respects_limit():
    points = trace_line((0, 0), (5, 0), 3)
    assert points == [(1, 0), (2, 0)]
    assert all(0 <= x < 3 and 0 <= y < 3 for x, y in points)


def test_trace_line_zero_length_is_empty():
    assert trace_line((2, 2), (2, 2), 10) == []


def test_trace_line_length_matches_longer_axis():
    points = trace_line((1, 1), (7, 4), 100)
    assert len(points) == 6
    assert points[-1] == (7, 4)