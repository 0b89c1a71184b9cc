"""
Tests for config.py - startup configuration from the environment.
"""

import os
import sys
from unittest.mock import patch

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig, load_config, log_level


class TestGameConfig:
    """Tests for GameConfig validation."""

    def test_defaults(self):
        config = GameConfig()
        assert config.grid_size == 30
        assert config.snake_count == 4
        assert config.game_speed == 10
        assert config.cell_size == 20
        assert config.strategy == "heuristic"

    @pytest.mark.parametrize("field_name", ["grid_size", "snake_count", "game_speed", "cell_size"])
    @pytest.mark.parametrize("value", [0, -3, 2.5, "7", True])
    def test_rejects_invalid_numbers(self, field_name, value):
        with pytest.raises(ValueError, match=field_name):
            GameConfig(**{field_name: value})

    def test_rejects_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            GameConfig(strategy="minimax")

    def test_to_dict_uses_client_keys(self):
        assert GameConfig(grid_size=12).to_dict() == {
            "gridSize": 12,
            "snakeCount": 4,
            "gameSpeed": 10,
            "cellSize": 20,
            "strategy": "heuristic",
        }


class TestLoadConfig:
    """Tests for load_config() and log_level()."""

    def test_empty_environment_gives_defaults(self):
        assert load_config({}) == GameConfig()

    def test_reads_every_variable(self):
        env = {
            "SNAKESIM_GRID_SIZE": "40",
            "SNAKESIM_SNAKE_COUNT": "6",
            "SNAKESIM_GAME_SPEED": "20",
            "SNAKESIM_CELL_SIZE": "15",
            "SNAKESIM_STRATEGY": " AStar ",
        }
        assert load_config(env) == GameConfig(
            grid_size=40, snake_count=6, game_speed=20, cell_size=15, strategy="astar"
        )

    def test_blank_values_fall_back_to_defaults(self):
        assert load_config({"SNAKESIM_GRID_SIZE": "  "}).grid_size == 30

    def test_non_integer_value_raises(self):
        with pytest.raises(ValueError, match="SNAKESIM_SNAKE_COUNT"):
            load_config({"SNAKESIM_SNAKE_COUNT": "many"})

    def test_non_positive_value_raises(self):
        with pytest.raises(ValueError):
            load_config({"SNAKESIM_GAME_SPEED": "0"})

    def test_reads_os_environ_after_dotenv(self):
        """Without an explicit mapping the process environment is used."""
        with patch("config.load_dotenv") as mock_load_dotenv, \
                patch.dict(os.environ, {"SNAKESIM_SNAKE_COUNT": "2"}):
            config = load_config()
        mock_load_dotenv.assert_called_once()
        assert config.snake_count == 2

    def test_log_level(self):
        assert log_level({}) == "INFO"
        assert log_level({"SNAKESIM_LOG_LEVEL": "debug"}) == "DEBUG"
