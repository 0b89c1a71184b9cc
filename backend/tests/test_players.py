"""
Tests for the decision strategies in players/.
"""

import os
import random
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import DIRECTIONS, DOWN, LEFT, RIGHT, UP
from domain.game_state import GameState
from domain.position import Position
from domain.snake import Snake
from players import (
    AVAILABLE_VARIANTS,
    AStarPlayer,
    HeuristicPlayer,
    Player,
    RandomPlayer,
    find_nearest_fruit,
    get_player_class,
    list_variants,
)
from players.astar_player import find_path
from players.heuristic_player import evaluate_space, would_trap


def make_state(snakes, fruits=(), width=10, height=10):
    return GameState(
        width=width,
        height=height,
        snakes=GameState.roster(snakes),
        fruits=tuple(fruits),
    )


class TestFindNearestFruit:
    """Tests for nearest-fruit selection."""

    def test_picks_closest_by_manhattan(self):
        """The fruit with the smallest Manhattan distance is chosen."""
        fruits = [Position(9, 9), Position(2, 3), Position(0, 9)]
        assert find_nearest_fruit(Position(1, 1), fruits) == (2, 3)

    def test_ties_go_to_pool_order(self):
        """Equidistant fruits resolve to the earlier one."""
        fruits = [Position(3, 1), Position(1, 3)]
        assert find_nearest_fruit(Position(1, 1), fruits) == (3, 1)

    def test_empty_pool(self):
        """No fruit means no target."""
        assert find_nearest_fruit(Position(1, 1), []) is None


class TestPlayerInterface:
    """Tests for the base Player."""

    def test_base_player_is_abstract(self):
        """Player.get_move() must be implemented by strategies."""
        state = make_state([Snake(id=0, body=[(5, 5)])])
        with pytest.raises(NotImplementedError):
            Player(0).get_move(state)


class TestEvaluateSpace:
    """Tests for the bounded flood-fill space score."""

    def test_open_board(self):
        """In open space cells at distance d add (3 - d): 3 + 2*4 + 1*8."""
        assert evaluate_space(Position(5, 5), set(), 10, 10) == 19

    def test_fully_blocked(self):
        """With every neighbour blocked only the start cell counts."""
        blocked = {Position(6, 5), Position(4, 5), Position(5, 6), Position(5, 4)}
        assert evaluate_space(Position(5, 5), blocked, 10, 10) == 3

    def test_zero_depth(self):
        """A zero search depth scores nothing."""
        assert evaluate_space(Position(5, 5), set(), 10, 10, depth=0) == 0


class TestWouldTrap:
    """Tests for the trap check."""

    def test_dead_end_is_a_trap(self):
        """Moving into the end of a one-cell-wide corridor is a trap."""
        snake = Snake(id=0, body=[(1, 0)])
        assert would_trap(snake, RIGHT, [snake], 3, 1) is True

    def test_growing_snake_keeps_its_old_cell(self):
        """A one-segment snake still occupies the cell it leaves while growing."""
        snake = Snake(id=0, body=[(1, 0)])
        assert would_trap(snake, RIGHT, [snake], 4, 1) is True

    def test_current_tail_is_not_free(self):
        """The tail cell counts as occupied in the trap search."""
        snake = Snake(id=0, body=[(1, 0), (0, 0), (0, 1)])
        # Only (2,1) and (1,1) are open; a free tail at (0,1) would make three
        assert would_trap(snake, RIGHT, [snake], 3, 2) is True

    def test_open_board_is_not_a_trap(self):
        """Plenty of room means no trap."""
        snake = Snake(id=0, body=[(5, 5), (4, 5), (3, 5)])
        assert would_trap(snake, RIGHT, [snake], 10, 10) is False


class TestHeuristicPlayer:
    """Tests for the scoring strategy."""

    def test_avoids_walls(self):
        """From a corner only the two inward directions are chosen."""
        state = make_state([Snake(id=0, body=[(0, 0)])], fruits=[(9, 9)])
        assert HeuristicPlayer(0).get_move(state) in (RIGHT, DOWN)

    def test_colliding_directions_are_eliminated(self):
        """Reversing into the neck scores None."""
        state = make_state([Snake(id=0, body=[(5, 5), (4, 5), (3, 5)])], fruits=[(9, 9)])
        scores = HeuristicPlayer(0).score_directions(state)
        assert scores[LEFT] is None
        assert all(scores[d] is not None for d in (RIGHT, DOWN, UP))
        assert HeuristicPlayer(0).get_move(state) != LEFT

    def test_moves_towards_fruit(self):
        """With nothing else around, the fruit bonus decides the move."""
        state = make_state([Snake(id=0, body=[(5, 5)])], fruits=[(9, 5)], width=20, height=20)
        assert HeuristicPlayer(0).get_move(state) == RIGHT

    def test_avoids_cells_next_to_other_heads(self):
        """A destination next to another head is penalized below the alternatives."""
        state = make_state(
            [Snake(id=0, body=[(5, 5)]), Snake(id=1, body=[(7, 5)])],
            fruits=[(9, 5)],
            width=20,
            height=20,
        )
        player = HeuristicPlayer(0)
        scores = player.score_directions(state)
        assert scores[RIGHT] < scores[LEFT]
        assert player.get_move(state) != RIGHT

    def test_boxed_in_snake_still_returns_a_direction(self):
        """With every direction blocked the player falls back to a random one."""
        snakes = [
            Snake(id=0, body=[(1, 1)]),
            Snake(id=1, body=[(0, 1), (0, 0), (1, 0), (2, 0)]),
            Snake(id=2, body=[(2, 1), (2, 2), (1, 2), (0, 2)]),
        ]
        state = make_state(snakes, width=3, height=3)
        player = HeuristicPlayer(0, rng=random.Random(5))
        assert all(score is None for score in player.score_directions(state).values())
        assert player.get_move(state) in DIRECTIONS

    def test_same_state_gives_same_move(self):
        """Caches do not change the decision for a given state."""
        state = make_state(
            [Snake(id=0, body=[(4, 4), (4, 5)]), Snake(id=1, body=[(8, 2)])],
            fruits=[(1, 1), (8, 8)],
        )
        player = HeuristicPlayer(0)
        first = player.get_move(state)
        assert player.get_move(state) == first
        assert HeuristicPlayer(0).get_move(state) == first


class TestAStar:
    """Tests for find_path() and the search strategy."""

    def test_straight_path(self):
        """An unobstructed path is a straight line."""
        path = find_path(Position(0, 0), Position(3, 0), set(), 5, 5)
        assert path == [(0, 0), (1, 0), (2, 0), (3, 0)]

    def test_path_around_obstacle(self):
        """Blocked cells force a detour of the right length."""
        blocked = {Position(1, 0), Position(1, 1)}
        path = find_path(Position(0, 0), Position(2, 0), blocked, 5, 5)
        assert path[0] == (0, 0) and path[-1] == (2, 0)
        assert len(path) == 7
        assert not set(path) & blocked

    def test_unreachable_goal(self):
        """A walled-off goal has no path."""
        blocked = {Position(1, 0), Position(1, 1), Position(1, 2)}
        assert find_path(Position(0, 0), Position(2, 0), blocked, 3, 3) is None

    def test_player_follows_path(self):
        """The player takes the first step of the path."""
        state = make_state([Snake(id=0, body=[(0, 0)])], fruits=[(3, 0)], width=5, height=5)
        assert AStarPlayer(0).get_move(state) == RIGHT

    def test_player_detours_around_snake(self):
        """Another snake in the way makes the first step go around it."""
        state = make_state(
            [Snake(id=0, body=[(0, 0)]), Snake(id=1, body=[(1, 0), (1, 1)])],
            fruits=[(3, 0)],
            width=5,
            height=5,
        )
        assert AStarPlayer(0).get_move(state) == DOWN

    def test_player_without_path_takes_safe_move(self):
        """With the fruit unreachable the player still picks a safe direction."""
        state = make_state(
            [Snake(id=0, body=[(0, 1)]), Snake(id=1, body=[(1, 0), (1, 1), (1, 2)])],
            fruits=[(2, 1)],
            width=3,
            height=3,
        )
        assert AStarPlayer(0, rng=random.Random(2)).get_move(state) in (DOWN, UP)


class TestRandomPlayer:
    """Tests for the random baseline."""

    def test_only_safe_moves_from_corner(self):
        """From a corner the random player never walks into a wall."""
        state = make_state([Snake(id=0, body=[(0, 0)])])
        player = RandomPlayer(0, rng=random.Random(11))
        for _ in range(50):
            assert player.get_move(state) in (RIGHT, DOWN)


class TestVariantRegistry:
    """Tests for the strategy registry."""

    def test_default_is_heuristic(self):
        """No key selects the scoring strategy."""
        assert get_player_class() is HeuristicPlayer
        assert get_player_class("") is HeuristicPlayer

    def test_known_keys(self):
        """Each key maps to its class, case-insensitively."""
        assert get_player_class("astar") is AStarPlayer
        assert get_player_class("RANDOM") is RandomPlayer

    def test_unknown_key_raises(self):
        """Unknown strategies are rejected."""
        with pytest.raises(ValueError, match="Unknown strategy"):
            get_player_class("minimax")

    def test_list_variants_matches_registry(self):
        """Every registered key is described."""
        assert [v["key"] for v in list_variants()] == AVAILABLE_VARIANTS
