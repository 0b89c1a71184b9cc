"""
Startup configuration for SnakeSim.

Values come from the environment (a local .env file is loaded first) and
fall back to the game menu defaults.

Environment variables:
    SNAKESIM_GRID_SIZE    cells per side of the square grid (default 30)
    SNAKESIM_SNAKE_COUNT  number of snakes (default 4)
    SNAKESIM_GAME_SPEED   simulation ticks per second (default 10)
    SNAKESIM_CELL_SIZE    pixels per cell, for renderers (default 20)
    SNAKESIM_STRATEGY     decision strategy key (default 'heuristic')
    SNAKESIM_LOG_LEVEL    logging level name (default 'INFO')
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from players.variant_registry import AVAILABLE_VARIANTS, DEFAULT_STRATEGY

DEFAULT_GRID_SIZE = 30
DEFAULT_SNAKE_COUNT = 4
DEFAULT_GAME_SPEED = 10
DEFAULT_CELL_SIZE = 20
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class GameConfig:
    """
    Initialization input supplied by the configuration collaborator.

    Attributes:
        grid_size: width and height of the grid in cells
        snake_count: number of snakes to place
        game_speed: simulation ticks per second
        cell_size: pixels per cell (presentation only)
        strategy: decision strategy key (see players.variant_registry)
    """

    grid_size: int = DEFAULT_GRID_SIZE
    snake_count: int = DEFAULT_SNAKE_COUNT
    game_speed: int = DEFAULT_GAME_SPEED
    cell_size: int = DEFAULT_CELL_SIZE
    strategy: str = DEFAULT_STRATEGY

    def __post_init__(self):
        for name in ("grid_size", "snake_count", "game_speed", "cell_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.strategy not in AVAILABLE_VARIANTS:
            available = ", ".join(AVAILABLE_VARIANTS)
            raise ValueError(f"Unknown strategy '{self.strategy}'. Available strategies: {available}")

    def to_dict(self) -> dict:
        return {
            "gridSize": self.grid_size,
            "snakeCount": self.snake_count,
            "gameSpeed": self.game_speed,
            "cellSize": self.cell_size,
            "strategy": self.strategy,
        }


def _int_from_env(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def load_config(env: Optional[Mapping[str, str]] = None) -> GameConfig:
    """
    Build a GameConfig from environment variables.

    Args:
        env: mapping to read from; defaults to os.environ after loading .env

    Raises:
        ValueError: if a value is not a positive integer or the strategy is unknown
    """
    if env is None:
        load_dotenv()
        env = os.environ

    return GameConfig(
        grid_size=_int_from_env(env, "SNAKESIM_GRID_SIZE", DEFAULT_GRID_SIZE),
        snake_count=_int_from_env(env, "SNAKESIM_SNAKE_COUNT", DEFAULT_SNAKE_COUNT),
        game_speed=_int_from_env(env, "SNAKESIM_GAME_SPEED", DEFAULT_GAME_SPEED),
        cell_size=_int_from_env(env, "SNAKESIM_CELL_SIZE", DEFAULT_CELL_SIZE),
        strategy=(env.get("SNAKESIM_STRATEGY") or DEFAULT_STRATEGY).strip().lower(),
    )


def log_level(env: Optional[Mapping[str, str]] = None) -> str:
    if env is None:
        load_dotenv()
        env = os.environ
    return (env.get("SNAKESIM_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
