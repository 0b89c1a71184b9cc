"""
Occupancy and spawn service.

Finds free cells for fruit, power-ups and respawning snakes, keeps the fruit
pool at its target size and rolls the per-tick power-up spawn.
"""

import logging
import random
from typing import Iterable, List, Optional, Sequence

from domain.constants import (
    FRUIT_TARGET,
    MAX_POWERUPS,
    POWERUP_DURATION,
    POWERUP_SPAWN_CHANCE,
    POWERUP_TYPES,
    SPAWN_ATTEMPTS,
)
from domain.position import Position, in_bounds, occupied_cells
from domain.power_up import PowerUp
from domain.snake import Snake

logger = logging.getLogger(__name__)


def random_free_position(
    width: int,
    height: int,
    snakes: Iterable[Snake],
    avoid: Iterable[Position] = (),
    rng: Optional[random.Random] = None,
) -> Position:
    """
    Return a cell not occupied by any snake segment nor listed in `avoid`.

    Samples uniformly up to SPAWN_ATTEMPTS times, then scans the grid row by
    row for the first free cell. On a saturated grid the last sampled cell is
    returned.
    """
    rng = rng or random
    occupied = occupied_cells(snakes)
    occupied.update(Position(*p) for p in avoid)

    position = Position(0, 0)
    for _ in range(SPAWN_ATTEMPTS):
        position = Position(rng.randrange(width), rng.randrange(height))
        if position not in occupied:
            return position

    for y in range(height):
        for x in range(width):
            candidate = Position(x, y)
            if candidate not in occupied:
                return candidate

    logger.warning(f"Grid {width}x{height} is saturated; returning occupied cell {position}")
    return position


def top_up_fruits(
    fruits: Iterable[Position],
    width: int,
    height: int,
    snakes: Iterable[Snake],
    avoid: Iterable[Position] = (),
    rng: Optional[random.Random] = None,
) -> List[Position]:
    """
    Keep the surviving fruits (in order) and add new ones until the pool
    holds exactly FRUIT_TARGET distinct cells. New fruits also stay off the
    cells listed in `avoid`.
    """
    snakes = list(snakes)
    avoid = [Position(*p) for p in avoid]
    kept: List[Position] = []
    for fruit in fruits:
        fruit = Position(*fruit)
        if fruit in kept or not in_bounds(fruit, width, height):
            continue
        kept.append(fruit)
    kept = kept[:FRUIT_TARGET]

    while len(kept) < FRUIT_TARGET:
        kept.append(random_free_position(width, height, snakes, avoid=kept + avoid, rng=rng))
    return kept


def maybe_spawn_power_up(
    power_ups: Sequence[PowerUp],
    width: int,
    height: int,
    snakes: Iterable[Snake],
    avoid: Iterable[Position] = (),
    rng: Optional[random.Random] = None,
) -> Optional[PowerUp]:
    """
    Roll the per-tick power-up spawn. Returns a new board power-up, or None
    when the roll fails or the pool is already at MAX_POWERUPS.
    """
    if len(power_ups) >= MAX_POWERUPS:
        return None
    rng = rng or random
    if rng.random() >= POWERUP_SPAWN_CHANCE:
        return None

    taken = [p.position for p in power_ups]
    taken.extend(avoid)
    return PowerUp(
        position=random_free_position(width, height, snakes, avoid=taken, rng=rng),
        type=rng.choice(POWERUP_TYPES),
        active=False,
        duration=POWERUP_DURATION,
    )
