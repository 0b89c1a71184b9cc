"""
Initial placement of snakes and fruit.
"""

import logging
import random
from typing import List, Optional, Sequence

from domain.constants import (
    DIRECTIONS,
    PLACEMENT_ATTEMPTS,
    PLACEMENT_EDGE_MARGIN,
    PLACEMENT_SEPARATION,
)
from domain.game_state import GameState
from domain.position import Position, chebyshev, occupied_cells
from domain.snake import Snake
from services.engine import in_bounds_directions
from services.spawn_service import random_free_position, top_up_fruits

logger = logging.getLogger(__name__)


def generate_unique_colors(count: int) -> List[str]:
    """Evenly spaced hues, one per snake."""
    hue_step = 360 / max(count, 1)
    return [f"hsl({round(i * hue_step)}, 100%, 50%)" for i in range(count)]


def _validate_positive(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


def _well_placed(position: Position, placed: Sequence[Position], width: int, height: int) -> bool:
    margin_x = min(PLACEMENT_EDGE_MARGIN, width // 4)
    margin_y = min(PLACEMENT_EDGE_MARGIN, height // 4)
    if not (margin_x <= position.x < width - margin_x and margin_y <= position.y < height - margin_y):
        return False
    return all(chebyshev(position, other) > PLACEMENT_SEPARATION for other in placed)


def initialize_game(
    width: int,
    height: int,
    snake_count: int,
    rng: Optional[random.Random] = None,
    colors: Optional[Sequence[str]] = None,
) -> GameState:
    """
    Build the initial GameState: `snake_count` single-segment snakes spread
    over the board and a full fruit pool.

    Each snake gets PLACEMENT_ATTEMPTS tries at a cell away from the walls and
    from the snakes already placed; after that any free cell will do. If no
    snake could be placed at all, one is put at the centre of the grid.

    Raises:
        ValueError: if width, height or snake_count is not a positive integer.
    """
    width = _validate_positive("width", width)
    height = _validate_positive("height", height)
    snake_count = _validate_positive("snake_count", snake_count)
    rng = rng or random.Random()
    colors = list(colors) if colors else generate_unique_colors(snake_count)

    snakes: List[Snake] = []
    heads: List[Position] = []

    for i in range(snake_count):
        position = None
        for _ in range(PLACEMENT_ATTEMPTS):
            candidate = random_free_position(width, height, snakes, rng=rng)
            if candidate not in heads and _well_placed(candidate, heads, width, height):
                position = candidate
                break

        if position is None:
            candidate = random_free_position(width, height, snakes, rng=rng)
            if candidate in occupied_cells(snakes):
                logger.warning(f"No free cell left for snake {i}; skipping it")
                continue
            logger.warning(f"Snake {i} placed without minimum separation at {candidate}")
            position = candidate

        directions = in_bounds_directions(position, width, height)
        snakes.append(Snake(
            id=i,
            body=(position,),
            direction=rng.choice(directions) if directions else DIRECTIONS[0],
            color=colors[i % len(colors)],
        ))
        heads.append(position)
        logger.debug(f"Snake {i} initialized at {position}")

    if not snakes:
        center = Position(width // 2, height // 2)
        logger.warning(f"No snakes could be placed; falling back to one snake at {center}")
        directions = in_bounds_directions(center, width, height)
        snakes.append(Snake(
            id=0,
            body=(center,),
            direction=rng.choice(directions) if directions else DIRECTIONS[0],
            color=colors[0],
        ))

    fruits = top_up_fruits((), width, height, snakes, rng=rng)
    return GameState(
        width=width,
        height=height,
        snakes=GameState.roster(snakes),
        fruits=tuple(fruits),
    )
