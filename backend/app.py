import os
import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from config import GameConfig, load_config, log_level
from players.variant_registry import list_variants
from services.engine import GameEngine
from services.game_setup import initialize_game
from services.scheduler import TickScheduler

load_dotenv()


def _allowed_origins():
    # Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if allowed_origins_env:
        return [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
    # sensible defaults for local dev
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


def create_app(scheduler: TickScheduler, config: Optional[GameConfig] = None) -> Flask:
    """
    Read-only HTTP view of a running simulation for render clients.

    The routes only ever read scheduler.current_state; nothing here can
    change the simulation.
    """
    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": _allowed_origins()}})

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({
            "status": "ok",
            "running": scheduler.running,
            "tick": scheduler.current_state.tick,
        })

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """
        Current GameState as JSON (snakes, fruits, power_ups, dimensions, tick).
        """
        try:
            return jsonify(scheduler.current_state.to_dict())
        except Exception as error:
            logging.error(f"Error serializing game state: {error}")
            return jsonify({"error": "Failed to load game state"}), 500

    @app.route("/api/board", methods=["GET"])
    def get_board():
        """
        Current board as text. Pass ?format=json to get it wrapped in JSON.
        """
        board = scheduler.current_state.print_board()
        if request.args.get("format") == "json":
            return jsonify({"tick": scheduler.current_state.tick, "board": board})
        return board, 200, {"Content-Type": "text/plain; charset=utf-8"}

    @app.route("/api/scores", methods=["GET"])
    def get_scores():
        state = scheduler.current_state
        return jsonify({
            "tick": state.tick,
            "scores": [
                {"id": snake.id, "color": snake.color, "score": snake.score, "alive": snake.alive}
                for snake in state.snakes.values()
            ],
        })

    @app.route("/api/strategies", methods=["GET"])
    def get_strategies():
        return jsonify({"strategies": list_variants()})

    @app.route("/api/config", methods=["GET"])
    def get_config():
        if config is None:
            return jsonify({"error": "No configuration attached"}), 404
        return jsonify(config.to_dict())

    return app


if __name__ == "__main__":
    logging.basicConfig(level=log_level(), format="%(asctime)s [%(levelname)s] %(message)s")

    game_config = load_config()
    engine = GameEngine(strategy=game_config.strategy)
    initial_state = initialize_game(game_config.grid_size, game_config.grid_size, game_config.snake_count)
    tick_scheduler = TickScheduler(engine, initial_state, ticks_per_second=game_config.game_speed)
    tick_scheduler.start()

    try:
        create_app(tick_scheduler, game_config).run(
            debug=bool(os.getenv("FLASK_DEBUG")),
            use_reloader=False,
            port=int(os.getenv("PORT", "5000")),
        )
    finally:
        tick_scheduler.stop()
