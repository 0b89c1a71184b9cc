"""
Snake entity for the game engine.
"""

from dataclasses import dataclass, field
from typing import Tuple

from .constants import MULTIPLIER, RIGHT, SCORE_MULTIPLIER
from .position import Position
from .power_up import PowerUp


@dataclass(frozen=True)
class Snake:
    """
    Represents a snake on the board.

    Snakes are immutable values: the engine derives a new Snake for every
    change with dataclasses.replace().

    Attributes:
        id: stable identifier, kept across respawns
        body: tuple of Position from head at index 0 to tail at the end
        direction: unit vector of the last applied move
        color: presentation-only colour string
        score: non-negative score
        alive: whether this snake is currently alive
        power_ups: active timed effects
        speed_multiplier: 2.0 while a speed effect is active
        invulnerable: True while a shield effect is active
    """

    id: int
    body: Tuple[Position, ...]
    direction: Position = RIGHT
    color: str = "#00ff9d"
    score: int = 0
    alive: bool = True
    power_ups: Tuple[PowerUp, ...] = field(default_factory=tuple)
    speed_multiplier: float = 1.0
    invulnerable: bool = False

    def __post_init__(self):
        # Accept any sequence of (x, y) pairs but always store Positions
        object.__setattr__(self, "body", tuple(Position(*segment) for segment in self.body))
        object.__setattr__(self, "direction", Position(*self.direction))
        if not self.body:
            raise ValueError(f"Snake {self.id} must have at least one body segment.")

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.body[0]

    @property
    def tail(self) -> Position:
        return self.body[-1]

    @property
    def score_multiplier(self) -> int:
        if any(p.type == MULTIPLIER for p in self.power_ups):
            return SCORE_MULTIPLIER
        return 1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "body": [[p.x, p.y] for p in self.body],
            "direction": [self.direction.x, self.direction.y],
            "color": self.color,
            "score": self.score,
            "alive": self.alive,
            "power_ups": [p.to_dict() for p in self.power_ups],
            "speed_multiplier": self.speed_multiplier,
            "invulnerable": self.invulnerable,
        }
