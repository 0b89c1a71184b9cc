"""
Registry for decision strategies.

Maps strategy keys ('heuristic', 'astar', 'random') to player classes. The
engine builds one player per snake from a single strategy, so the rest of
the engine never needs to know which one is in use. To add a strategy,
create a Player subclass, import it here and add an entry to the loaders.
"""

from typing import Callable, Dict, Optional, Type

from .base import Player

DEFAULT_STRATEGY = "heuristic"


# Lazy imports keep the registry importable from the strategy modules
def _get_heuristic_player() -> Type[Player]:
    from .heuristic_player import HeuristicPlayer
    return HeuristicPlayer


def _get_astar_player() -> Type[Player]:
    from .astar_player import AStarPlayer
    return AStarPlayer


def _get_random_player() -> Type[Player]:
    from .random_player import RandomPlayer
    return RandomPlayer


PLAYER_VARIANT_LOADERS: Dict[str, Callable[[], Type[Player]]] = {
    "heuristic": _get_heuristic_player,
    "astar": _get_astar_player,
    "random": _get_random_player,
}

# Canonical list of available strategy keys (for CLI choices and the API)
AVAILABLE_VARIANTS = list(PLAYER_VARIANT_LOADERS.keys())


def get_player_class(variant_key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given strategy key.

    Args:
        variant_key: One of 'heuristic', 'astar', 'random'. If None or empty,
            returns the default strategy.

    Returns:
        The player class (subclass of Player).

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = DEFAULT_STRATEGY

    variant_key = variant_key.strip().lower()

    if variant_key not in PLAYER_VARIANT_LOADERS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown strategy '{variant_key}'. Available strategies: {available}"
        )

    return PLAYER_VARIANT_LOADERS[variant_key]()


def list_variants() -> list:
    """
    Return metadata about all available strategies.

    Returns:
        List of dicts with 'key' and 'description' for each strategy.
    """
    return [
        {"key": "heuristic", "description": "Scores every direction on space, fruit, head-on risk, traps and spacing"},
        {"key": "astar", "description": "Follows an A* path to the nearest fruit, most open safe move otherwise"},
        {"key": "random", "description": "Random safe move; baseline opponent"},
    ]
