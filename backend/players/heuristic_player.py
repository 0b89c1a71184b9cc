"""
Scoring player - the default decision strategy.

Every candidate direction gets a score built from:
  - room to manoeuvre (bounded flood-fill from the destination)
  - progress towards the nearest fruit, only when there is enough room
  - head-on risk from other snakes' heads next to the destination
  - a trap check on the simulated body after the move
  - spacing from the other snakes' heads
Directions the collision oracle flags are eliminated outright.
"""

from collections import deque
from typing import Dict, Iterable, List, Optional, Set

from domain.constants import DIRECTIONS
from domain.game_state import GameState
from domain.position import Position, chebyshev, in_bounds, manhattan, neighbours, step
from domain.snake import Snake
from services.cache import StateCache
from services.collision import blocked_cells, is_colliding
from .base import Player, find_nearest_fruit

HEAD_RISK_PENALTY = -500
SPACE_DEPTH = 3
SPACE_WEIGHT = 10
TARGET_BONUS = 50
TARGET_SAFETY_THRESHOLD = 5
TRAP_PENALTY = -300
TRAP_MIN_CELLS = 3
TRAP_SEARCH_LIMIT = 8
SPACING_WEIGHT = 5


def evaluate_space(
    start: Position,
    blocked: Set[Position],
    width: int,
    height: int,
    depth: int = SPACE_DEPTH,
) -> int:
    """
    Breadth-first flood-fill from `start` limited to `depth` hops. Each cell
    reached contributes its remaining depth, so nearby room counts more.
    """
    if depth <= 0:
        return 0

    score = 0
    visited = {start}
    queue = deque([(start, depth)])
    while queue:
        current, remaining = queue.popleft()
        score += remaining
        if remaining == 0:
            continue
        for nxt in neighbours(current):
            if nxt in visited or nxt in blocked or not in_bounds(nxt, width, height):
                continue
            visited.add(nxt)
            queue.append((nxt, remaining - 1))
    return score


def would_trap(
    snake: Snake,
    direction: Position,
    snakes: Iterable[Snake],
    width: int,
    height: int,
) -> bool:
    """
    Count the free cells reachable from the head after the move, stopping
    at TRAP_SEARCH_LIMIT. The new head and every cell any snake occupies now
    are blocked. Fewer than TRAP_MIN_CELLS means the move walks into a pocket.
    """
    new_head = step(snake.head, direction)
    occupied: Set[Position] = {new_head}
    occupied.update(snake.body)
    for other in snakes:
        if other.id != snake.id:
            occupied.update(other.body)

    accessible = 0
    visited = {new_head}
    queue = deque([new_head])
    while queue and accessible < TRAP_SEARCH_LIMIT:
        current = queue.popleft()
        for nxt in neighbours(current):
            if nxt in visited or nxt in occupied or not in_bounds(nxt, width, height):
                continue
            visited.add(nxt)
            accessible += 1
            queue.append(nxt)
    return accessible < TRAP_MIN_CELLS


class HeuristicPlayer(Player):
    """
    Picks the highest scoring direction that does not collide; ties go to
    the earliest direction in DIRECTIONS order.
    """

    def __init__(self, snake_id: int, rng=None):
        super().__init__(snake_id, rng)
        self._space_cache = StateCache()

    def get_move(self, game_state: GameState) -> Position:
        scores = self.score_directions(game_state)

        best: Optional[Position] = None
        best_score = None
        for direction in DIRECTIONS:
            score = scores[direction]
            if score is None:
                continue
            if best_score is None or score > best_score:
                best, best_score = direction, score

        if best is not None:
            return best
        return self._fallback_move(game_state)

    def score_directions(self, game_state: GameState) -> Dict[Position, Optional[float]]:
        """Score per direction; None marks a direction eliminated by a collision."""
        self._space_cache.observe(game_state)

        snake = self._snake(game_state)
        snakes = list(game_state.snakes.values())
        width, height = game_state.width, game_state.height
        head = snake.head

        blocked = blocked_cells(snakes, self.snake_id)
        target = find_nearest_fruit(head, game_state.fruits)
        other_heads: List[Position] = [
            s.head for s in snakes if s.alive and s.id != self.snake_id
        ]

        scores: Dict[Position, Optional[float]] = {}
        for direction in DIRECTIONS:
            new_pos = step(head, direction)

            if is_colliding(new_pos, snakes, width, height, self.snake_id):
                scores[direction] = None
                continue

            score = 0.0

            if any(chebyshev(new_pos, other) <= 1 for other in other_heads):
                score += HEAD_RISK_PENALTY

            space = self._space(new_pos, blocked, width, height)
            score += space * SPACE_WEIGHT

            if target is not None and space > TARGET_SAFETY_THRESHOLD:
                if manhattan(new_pos, target) < manhattan(head, target):
                    score += TARGET_BONUS

            if would_trap(snake, direction, snakes, width, height):
                score += TRAP_PENALTY

            if other_heads:
                score += min(manhattan(new_pos, other) for other in other_heads) * SPACING_WEIGHT

            scores[direction] = score
        return scores

    def _space(self, position: Position, blocked: Set[Position], width: int, height: int) -> int:
        if position in self._space_cache:
            return self._space_cache.get(position)
        space = evaluate_space(position, blocked, width, height)
        self._space_cache.set(position, space)
        return space
