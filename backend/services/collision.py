"""
Collision oracle.
"""

import logging
from typing import Iterable, Set

from domain.position import Position, in_bounds
from domain.snake import Snake

logger = logging.getLogger(__name__)


def is_colliding(
    pos: Position,
    snakes: Iterable[Snake],
    width: int,
    height: int,
    self_id: int,
) -> bool:
    """
    True if `pos` is outside the grid or on any snake segment.

    The head of the snake identified by `self_id` is exempt, so the oracle can
    probe a snake's current head cell; its torso and tail are not.
    """
    if not in_bounds(pos, width, height):
        logger.debug(f"Wall collision at {pos} by snake {self_id}")
        return True

    for snake in snakes:
        for index, segment in enumerate(snake.body):
            if snake.id == self_id and index == 0:
                continue
            if segment == pos:
                other = "its own body" if snake.id == self_id else f"snake {snake.id}"
                logger.debug(f"Collision between snake {self_id} and {other} at {pos}")
                return True
    return False


def blocked_cells(snakes: Iterable[Snake], self_id: int) -> Set[Position]:
    """
    The in-grid cells the oracle reports as colliding for `self_id`, as a set.
    Callers that probe many cells in one state use this instead of the oracle.
    """
    cells: Set[Position] = set()
    for snake in snakes:
        segments = snake.body[1:] if snake.id == self_id else snake.body
        cells.update(segments)
    return cells
