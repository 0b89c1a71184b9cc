import argparse
import json
import logging
import os
import random
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from config import GameConfig, load_config, log_level
from domain.game_state import GameState
from players.variant_registry import AVAILABLE_VARIANTS
from services.engine import GameEngine
from services.game_setup import initialize_game
from services.scheduler import TickScheduler

logger = logging.getLogger(__name__)


class SnakeSimulation:
    """
    Manages:
      - Config (grid size, snake count, speed, strategy)
      - The transition engine
      - The current state
      - History for replay
    """
    def __init__(
        self,
        config: GameConfig,
        game_id: Optional[str] = None,
        rng: Optional[random.Random] = None
    ):
        self.config = config
        self.game_id = game_id or str(uuid.uuid4())
        self.start_time = time.time()
        self.engine = GameEngine(strategy=config.strategy, rng=rng)
        self.state: GameState = initialize_game(
            config.grid_size,
            config.grid_size,
            config.snake_count,
            rng=self.engine.rng
        )
        self.history: List[Dict[str, Any]] = [self.state.to_dict()]

    def run_tick(self) -> GameState:
        self.state = self.engine.tick(self.state)
        self.record_history(self.state)
        return self.state

    def record_history(self, state: GameState):
        self.history.append(state.to_dict())

    @property
    def scores(self) -> Dict[int, int]:
        return {sid: snake.score for sid, snake in self.state.snakes.items()}

    def print_board(self):
        """
        Prints a visual representation of the current board state.
        """
        print("\n" + self.state.print_board() + "\n")

    def save_history_to_json(self, filename: Optional[str] = None, directory: str = "completed_games") -> str:
        if filename is None:
            filename = f"snake_sim_{self.game_id}.json"

        metadata = {
            "game_id": self.game_id,
            "start_time": datetime.fromtimestamp(self.start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.now(tz=timezone.utc).isoformat(),
            "config": self.config.to_dict(),
            "final_scores": self.scores,
            "ticks": self.state.tick,
        }

        data = {
            "metadata": metadata,
            "ticks": self.history
        }

        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, filename)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        logger.info(f"Saved replay for game {self.game_id} to {path}")
        return path

    def summary(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "ticks": self.state.tick,
            "final_scores": self.scores,
        }


# -------------------------------
# Simulation Functions
# -------------------------------

def run_simulation(
    config: GameConfig,
    ticks: int,
    verbose: bool = True,
    save: bool = False,
    rng: Optional[random.Random] = None
) -> Dict[str, Any]:
    """
    Runs a headless simulation as fast as the engine allows.

    Args:
        config: startup configuration
        ticks: number of ticks to simulate
        verbose: print the board after every tick
        save: write a JSON replay to completed_games/

    Returns:
        A dictionary summarizing the run (game_id, ticks, final_scores).
    """
    simulation = SnakeSimulation(config, rng=rng)
    print(f"Game ID: {simulation.game_id}")

    for _ in range(ticks):
        simulation.run_tick()
        if verbose:
            print(f"Tick {simulation.state.tick}")
            simulation.print_board()

    print("\nFinal Scores:", simulation.scores)
    if save:
        simulation.save_history_to_json()

    return simulation.summary()


def run_live(config: GameConfig, ticks: int, verbose: bool = True, save: bool = False) -> Dict[str, Any]:
    """
    Runs the simulation through the TickScheduler at config.game_speed ticks
    per second, printing each new state as it is published.
    """
    simulation = SnakeSimulation(config)
    print(f"Game ID: {simulation.game_id}")

    def on_tick(state: GameState):
        simulation.state = state
        simulation.record_history(state)
        if verbose:
            print(f"Tick {state.tick}")
            print("\n" + state.print_board() + "\n")

    scheduler = TickScheduler(
        simulation.engine,
        simulation.state,
        ticks_per_second=config.game_speed,
        max_ticks=ticks,
        on_tick=on_tick
    )
    scheduler.start()
    try:
        scheduler.wait()
    except KeyboardInterrupt:
        print("Interrupted, stopping scheduler.")
    finally:
        scheduler.stop()

    print("\nFinal Scores:", simulation.scores)
    if save:
        simulation.save_history_to_json()

    return simulation.summary()


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------
def main(argv: Optional[List[str]] = None):
    defaults = load_config()

    parser = argparse.ArgumentParser(
        description="Run a multi-snake simulation on a square grid."
    )
    parser.add_argument("--grid_size", type=int, default=defaults.grid_size,
                        help="Width and height of the grid in cells")
    parser.add_argument("--snakes", type=int, default=defaults.snake_count,
                        help="Number of snakes")
    parser.add_argument("--speed", type=int, default=defaults.game_speed,
                        help="Ticks per second in --live mode")
    parser.add_argument("--strategy", type=str, default=defaults.strategy,
                        choices=AVAILABLE_VARIANTS,
                        help="Decision strategy used by every snake")
    parser.add_argument("--ticks", type=int, default=100,
                        help="Number of ticks to simulate")
    parser.add_argument("--live", action="store_true",
                        help="Run at --speed ticks per second instead of as fast as possible")
    parser.add_argument("--save", action="store_true",
                        help="Write a JSON replay to completed_games/")
    parser.add_argument("--quiet", action="store_true",
                        help="Only print the final summary")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.ticks <= 0:
        parser.error("--ticks must be a positive integer")

    try:
        config = GameConfig(
            grid_size=args.grid_size,
            snake_count=args.snakes,
            game_speed=args.speed,
            cell_size=defaults.cell_size,
            strategy=args.strategy,
        )
    except ValueError as e:
        parser.error(str(e))

    if args.live:
        result = run_live(config, args.ticks, verbose=not args.quiet, save=args.save)
    else:
        result = run_simulation(config, args.ticks, verbose=not args.quiet, save=args.save)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
