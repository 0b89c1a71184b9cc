"""
Base player interface for the game engine.
"""

import random
from typing import List, Optional, Sequence

from domain.constants import DIRECTIONS
from domain.game_state import GameState
from domain.position import Position, manhattan, step
from domain.snake import Snake
from services.collision import is_colliding


def find_nearest_fruit(position: Position, fruits: Sequence[Position]) -> Optional[Position]:
    """Closest fruit by Manhattan distance; ties go to the earlier fruit."""
    nearest = None
    best = None
    for fruit in fruits:
        distance = manhattan(position, fruit)
        if best is None or distance < best:
            best = distance
            nearest = fruit
    return nearest


class Player:
    """
    Base class/interface for decision strategies.

    Each player is responsible for returning a direction for its snake_id
    given the current game state. Players keep no state between ticks other
    than bounded caches.
    """

    def __init__(self, snake_id: int, rng: Optional[random.Random] = None):
        self.snake_id = snake_id
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Position:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of the unit vectors in domain.constants.DIRECTIONS
        """
        raise NotImplementedError

    def _snake(self, game_state: GameState) -> Snake:
        return game_state.snakes[self.snake_id]

    def _safe_directions(self, game_state: GameState) -> List[Position]:
        """Directions whose destination the collision oracle does not flag."""
        head = self._snake(game_state).head
        snakes = list(game_state.snakes.values())
        return [
            direction for direction in DIRECTIONS
            if not is_colliding(step(head, direction), snakes,
                                game_state.width, game_state.height, self.snake_id)
        ]

    def _fallback_move(self, game_state: GameState) -> Position:
        """Any safe direction, else any direction at all (we'll respawn anyway)."""
        safe = self._safe_directions(game_state)
        if safe:
            return self.rng.choice(safe)
        return self.rng.choice(DIRECTIONS)
