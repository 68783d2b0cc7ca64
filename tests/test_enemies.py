import math

import pytest

from cubdungeon.enemies import CATCH_RADIUS, caught, step_enemy


def test_enemy_steps_toward_player():
    assert step_enemy((0, 0), (10, -10), 0) == (1, -1)


def test_enemy_speeds_up_with_loot():
    assert step_enemy((0, 0), (10, 10), 8) == (2, 2)


def test_negative_loot_keeps_base_speed():
    assert step_enemy((5, 5), (0, 0), -0.42) == (4, 4)


def test_aligned_axis_does_not_move():
    new = step_enemy((3, 7), (3, 20), 0)
    assert new[0] == 3
    assert new[1] > 7


@pytest.mark.parametrize(
    "enemy,player",
    [((0, 0), (50, 30)), ((100, 40), (20, 90)), ((60, 60), (61, 10))],
)
def test_step_never_increases_distance(enemy, player):
    before = math.dist(enemy, player)
    after = math.dist(step_enemy(enemy, player, 0), player)
    assert after <= before


def test_caught_at_boundary():
    assert caught((0, 0), (CATCH_RADIUS, CATCH_RADIUS))
    assert caught((0, 0), (-CATCH_RADIUS, 0))


def test_not_caught_outside_radius():
    assert not caught((0, 0), (CATCH_RADIUS + 1, 0))
    assert not caught((0, 0), (0, -(CATCH_RADIUS + 1)))