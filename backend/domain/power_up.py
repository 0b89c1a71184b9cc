"""
PowerUp entity - a timed effect lying on the board or carried by a snake.
"""

from dataclasses import dataclass

from .constants import POWERUP_DURATION, POWERUP_TYPES
from .position import Position


@dataclass(frozen=True)
class PowerUp:
    """
    Attributes:
        position: cell the power-up was spawned on
        type: one of 'speed', 'shield', 'multiplier'
        active: False while on the board, True once picked up by a snake
        duration: ticks remaining once active
    """

    position: Position
    type: str
    active: bool = False
    duration: int = POWERUP_DURATION

    def __post_init__(self):
        if self.type not in POWERUP_TYPES:
            raise ValueError(
                f"Unknown power-up type '{self.type}'. Available types: {', '.join(POWERUP_TYPES)}"
            )

    def to_dict(self) -> dict:
        return {
            "position": [self.position.x, self.position.y],
            "type": self.type,
            "active": self.active,
            "duration": self.duration,
        }
