"""
Tests for the domain value types: Snake, PowerUp and GameState.
"""

import os
import sys
from dataclasses import FrozenInstanceError

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import GameState, PowerUp, Position, Snake
from domain.constants import RIGHT


class TestSnake:
    """Tests for Snake."""

    def test_body_is_normalized_to_positions(self):
        snake = Snake(id=1, body=[[2, 3], (2, 4)])
        assert snake.body == (Position(2, 3), Position(2, 4))
        assert snake.head == (2, 3)
        assert snake.tail == (2, 4)
        assert snake.direction == RIGHT

    def test_empty_body_rejected(self):
        with pytest.raises(ValueError):
            Snake(id=1, body=[])

    def test_snakes_are_immutable(self):
        snake = Snake(id=1, body=[(0, 0)])
        with pytest.raises(FrozenInstanceError):
            snake.score = 5

    def test_score_multiplier(self):
        plain = Snake(id=1, body=[(0, 0)])
        boosted = Snake(id=1, body=[(0, 0)],
                        power_ups=(PowerUp(position=Position(0, 0), type="multiplier", active=True),))
        assert plain.score_multiplier == 1
        assert boosted.score_multiplier == 2


class TestPowerUp:
    """Tests for PowerUp."""

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            PowerUp(position=Position(0, 0), type="teleport")

    def test_defaults(self):
        power_up = PowerUp(position=Position(1, 2), type="speed")
        assert power_up.active is False
        assert power_up.duration == 50


class TestGameState:
    """Tests for GameState rendering and serialization."""

    @pytest.fixture
    def state(self):
        return GameState(
            width=4,
            height=3,
            snakes=GameState.roster([
                Snake(id=0, body=[(1, 1), (0, 1)]),
                Snake(id=12, body=[(3, 2)]),
                Snake(id=5, body=[(3, 0)], alive=False),
            ]),
            fruits=[(2, 0)],
            power_ups=[PowerUp(position=Position(0, 2), type="shield")],
            tick=7,
        )

    def test_print_board(self, state):
        assert state.print_board() == "\n".join([
            " 0 . . F .",
            " 1 T 0 . .",
            " 2 * . . 2",
            "   0 1 2 3",
        ])

    def test_to_dict(self, state):
        data = state.to_dict()
        assert data["tick"] == 7
        assert data["fruits"] == [[2, 0]]
        assert [s["id"] for s in data["snakes"]] == [0, 12, 5]
        assert data["snakes"][0]["body"] == [[1, 1], [0, 1]]
        assert data["power_ups"][0]["type"] == "shield"

    def test_alive_snakes(self, state):
        assert [s.id for s in state.alive_snakes] == [0, 12]

    def test_repr(self, state):
        assert repr(state) == "<GameState tick=7, fruits=[(2, 0)], snakes=3, scores={0: 0, 12: 0, 5: 0}>"
