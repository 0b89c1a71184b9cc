"""
Domain entities for the SnakeSim engine.

This module contains the core simulation entities that are independent of
infrastructure concerns (scheduling, HTTP, configuration, etc.).
"""

from .position import Position
from .constants import (
    UP, DOWN, LEFT, RIGHT, DIRECTIONS, FRUIT_TARGET, MAX_POWERUPS, POWERUP_TYPES,
)
from .power_up import PowerUp
from .snake import Snake
from .game_state import GameState
from .actions import Action

__all__ = [
    'Position',
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'DIRECTIONS',
    'FRUIT_TARGET', 'MAX_POWERUPS', 'POWERUP_TYPES',
    'PowerUp',
    'Snake',
    'GameState',
    'Action',
]
