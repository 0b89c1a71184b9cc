"""
Grid coordinates and the small amount of arithmetic the engine needs on them.
"""

from typing import Iterable, List, NamedTuple, Set


class Position(NamedTuple):
    """An integer grid cell. Directions are Positions with unit length."""

    x: int
    y: int

    def __repr__(self):
        return f"({self.x}, {self.y})"


def step(position: Position, direction: Position) -> Position:
    """Return the cell reached by moving one step in `direction`."""
    return Position(position.x + direction.x, position.y + direction.y)


def in_bounds(position: Position, width: int, height: int) -> bool:
    return 0 <= position.x < width and 0 <= position.y < height


def manhattan(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def chebyshev(a: Position, b: Position) -> int:
    return max(abs(a.x - b.x), abs(a.y - b.y))


def neighbours(position: Position) -> List[Position]:
    """The four cardinal neighbours, in RIGHT, DOWN, LEFT, UP order."""
    return [
        Position(position.x + 1, position.y),
        Position(position.x, position.y + 1),
        Position(position.x - 1, position.y),
        Position(position.x, position.y - 1),
    ]


def occupied_cells(snakes: Iterable) -> Set[Position]:
    """Every body segment of every snake, heads included."""
    cells: Set[Position] = set()
    for snake in snakes:
        cells.update(snake.body)
    return cells
