"""
Player implementations for SnakeSim.

This module contains the decision interface and the strategies that
choose each snake's next direction.
"""

from .base import Player, find_nearest_fruit
from .random_player import RandomPlayer
from .heuristic_player import HeuristicPlayer
from .astar_player import AStarPlayer
from .variant_registry import get_player_class, list_variants, AVAILABLE_VARIANTS, DEFAULT_STRATEGY

__all__ = [
    'Player',
    'find_nearest_fruit',
    'RandomPlayer',
    'HeuristicPlayer',
    'AStarPlayer',
    'get_player_class',
    'list_variants',
    'AVAILABLE_VARIANTS',
    'DEFAULT_STRATEGY',
]
