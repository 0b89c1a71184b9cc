"""
Actions understood by the state transition engine.
"""

from dataclasses import dataclass
from typing import Any

INIT_SNAKES = "INIT_SNAKES"
MOVE_SNAKES = "MOVE_SNAKES"
CHECK_COLLISIONS = "CHECK_COLLISIONS"
CHECK_FRUIT_CONSUMPTION = "CHECK_FRUIT_CONSUMPTION"
CHECK_POWERUPS = "CHECK_POWERUPS"
ADD_POWERUP = "ADD_POWERUP"
UPDATE_POWERUPS = "UPDATE_POWERUPS"
UPDATE_FRUITS = "UPDATE_FRUITS"
UPDATE_DIMENSIONS = "UPDATE_DIMENSIONS"


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None
