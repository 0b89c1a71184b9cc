"""
GameState entity - a snapshot of the simulation at a point in time.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from .position import Position
from .power_up import PowerUp
from .snake import Snake


@dataclass(frozen=True)
class GameState:
    """
    A snapshot of the simulation after a completed transition.

    GameState is never mutated: the engine returns a new instance for every
    action, so collaborators can hold a reference safely.

    Attributes:
        snakes: dict of snake_id -> Snake, iteration order is stable
        fruits: tuple of fruit positions (three after every completed tick)
        power_ups: tuple of power-ups lying on the board
        width, height: board dimensions in cells
        tick: number of completed ticks
    """

    width: int
    height: int
    snakes: Dict[int, Snake] = field(default_factory=dict)
    fruits: Tuple[Position, ...] = field(default_factory=tuple)
    power_ups: Tuple[PowerUp, ...] = field(default_factory=tuple)
    tick: int = 0

    def __post_init__(self):
        object.__setattr__(self, "fruits", tuple(Position(*f) for f in self.fruits))
        object.__setattr__(self, "power_ups", tuple(self.power_ups))

    @staticmethod
    def roster(snakes: Iterable[Snake]) -> Dict[int, Snake]:
        """Build the id -> Snake mapping from an iterable of snakes."""
        return {snake.id: snake for snake in snakes}

    @property
    def alive_snakes(self) -> List[Snake]:
        return [snake for snake in self.snakes.values() if snake.alive]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = fruit
        * = power-up
        T = snake body
        0,1,2... = snake head (last digit of the snake id)
        Row 0 is printed first, matching the screen coordinates the engine uses.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        def place(position: Position, marker: str):
            if 0 <= position.x < self.width and 0 <= position.y < self.height:
                board[position.y][position.x] = marker

        for power_up in self.power_ups:
            place(power_up.position, '*')

        for fruit in self.fruits:
            place(fruit, 'F')

        for snake_id, snake in self.snakes.items():
            if not snake.alive:
                continue
            # Draw tail first so the head wins on overlapping segments
            for segment in reversed(snake.body[1:]):
                place(segment, 'T')
            place(snake.head, str(snake_id)[-1])

        result = []
        for y in range(self.height):
            result.append(f"{y:2d} {' '.join(board[y])}")

        # x-axis labels at the bottom
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def to_dict(self) -> dict:
        """JSON-serializable representation for replays and the HTTP view."""
        return {
            "tick": self.tick,
            "width": self.width,
            "height": self.height,
            "snakes": [snake.to_dict() for snake in self.snakes.values()],
            "fruits": [[f.x, f.y] for f in self.fruits],
            "power_ups": [p.to_dict() for p in self.power_ups],
        }

    def __repr__(self):
        scores = {sid: snake.score for sid, snake in self.snakes.items()}
        return (
            f"<GameState tick={self.tick}, fruits={list(self.fruits)}, "
            f"snakes={len(self.snakes)}, scores={scores}>"
        )
