"""
Random player implementation - picks random safe moves.
"""

from domain.game_state import GameState
from domain.position import Position
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a direction the collision oracle considers safe,
    or any direction when boxed in.
    """

    def get_move(self, game_state: GameState) -> Position:
        return self._fallback_move(game_state)
