"""
Search player - follows an A* path to the nearest fruit.
"""

import heapq
import itertools
from typing import Dict, List, Optional, Set

from domain.constants import DIRECTIONS
from domain.game_state import GameState
from domain.position import Position, in_bounds, manhattan, neighbours, step
from services.cache import StateCache
from services.collision import blocked_cells
from .base import Player, find_nearest_fruit


def find_path(
    start: Position,
    goal: Position,
    blocked: Set[Position],
    width: int,
    height: int,
) -> Optional[List[Position]]:
    """
    A* over the 4-connected grid with a Manhattan heuristic.

    Returns the path from start to goal (both included), or None when the
    goal cannot be reached around the blocked cells.
    """
    counter = itertools.count()  # tie-breaker so the heap never compares Positions
    open_heap = [(manhattan(start, goal), next(counter), start)]
    came_from: Dict[Position, Position] = {}
    g_score: Dict[Position, int] = {start: 0}
    closed: Set[Position] = set()

    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if current == goal:
            return _reconstruct_path(came_from, current)
        if current in closed:
            continue
        closed.add(current)

        for neighbour in neighbours(current):
            if not in_bounds(neighbour, width, height) or neighbour in blocked:
                continue
            tentative = g_score[current] + 1
            if tentative < g_score.get(neighbour, tentative + 1):
                came_from[neighbour] = current
                g_score[neighbour] = tentative
                heapq.heappush(
                    open_heap,
                    (tentative + manhattan(neighbour, goal), next(counter), neighbour),
                )
    return None


def _reconstruct_path(came_from: Dict[Position, Position], current: Position) -> List[Position]:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


class AStarPlayer(Player):
    """
    Moves along the first step of the shortest path to the nearest fruit.
    Without a path it takes the safe direction with the most open
    neighbours, breaking ties at random.
    """

    def __init__(self, snake_id: int, rng=None):
        super().__init__(snake_id, rng)
        self._path_cache = StateCache()

    def get_move(self, game_state: GameState) -> Position:
        self._path_cache.observe(game_state)

        snake = self._snake(game_state)
        head = snake.head
        snakes = list(game_state.snakes.values())
        width, height = game_state.width, game_state.height
        blocked = blocked_cells(snakes, self.snake_id)

        target = find_nearest_fruit(head, game_state.fruits)
        if target is not None:
            path = self._path(head, target, blocked, width, height)
            if path is not None and len(path) > 1:
                return Position(path[1].x - head.x, path[1].y - head.y)

        return self._most_open_move(game_state, head, blocked)

    def _path(self, head, target, blocked, width, height) -> Optional[List[Position]]:
        key = (head, target)
        if key not in self._path_cache:
            self._path_cache.set(key, find_path(head, target, blocked, width, height))
        return self._path_cache.get(key)

    def _most_open_move(self, game_state: GameState, head: Position, blocked: Set[Position]) -> Position:
        width, height = game_state.width, game_state.height
        best: List[Position] = []
        best_open = -1
        for direction in self._safe_directions(game_state):
            destination = step(head, direction)
            open_cells = sum(
                1 for n in neighbours(destination)
                if in_bounds(n, width, height) and n not in blocked
            )
            if open_cells > best_open:
                best, best_open = [direction], open_cells
            elif open_cells == best_open:
                best.append(direction)

        if best:
            return self.rng.choice(best)
        return self.rng.choice(DIRECTIONS)
