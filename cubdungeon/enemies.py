"""Enemy pursuit and capture checks."""

CATCH_RADIUS = 8
LOOT_PER_SPEED_STEP = 8


def _toward(delta):
    if delta < 0:
        return -1
    if delta > 0:
        return 1
    return 0


def step_enemy(enemy_pos, player_pos, loot):
    """Move the enemy one step toward the player on each axis.

    The step grows by one pixel for every eight pieces of loot collected.
    """
    step = 1 + int(loot / LOOT_PER_SPEED_STEP)
    return tuple(
        int(e) + _toward(int(p) - int(e)) * step
        for e, p in zip(enemy_pos, player_pos)
    )


def caught(player_pos, enemy_pos):
    """Return True if the player is within reach of the enemy."""
    return (
        abs(player_pos[0] - enemy_pos[0]) <= CATCH_RADIUS
        and abs(player_pos[1] - enemy_pos[1]) <= CATCH_RADIUS
    )