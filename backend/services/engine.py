"""
State transition engine.

GameEngine.reduce() is the single authority that advances a GameState: it
takes the current state and an Action and returns a new GameState, never
mutating its input. GameEngine.tick() chains the actions that make up one
simulation tick.
"""

import logging
import random
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Set

from domain.actions import (
    ADD_POWERUP,
    CHECK_COLLISIONS,
    CHECK_FRUIT_CONSUMPTION,
    CHECK_POWERUPS,
    INIT_SNAKES,
    MOVE_SNAKES,
    UPDATE_DIMENSIONS,
    UPDATE_FRUITS,
    UPDATE_POWERUPS,
    Action,
)
from domain.constants import (
    DIRECTION_NAMES,
    DIRECTIONS,
    FRUIT_REWARD,
    MAX_POWERUPS,
    MIN_SNAKE_LENGTH,
    RESPAWN_PENALTY,
    SHIELD,
    SPEED,
    SPEED_BOOST,
)
from domain.game_state import GameState
from domain.position import Position, in_bounds, step
from domain.snake import Snake
from players.base import Player
from players.variant_registry import get_player_class
from services.collision import is_colliding
from services.spawn_service import maybe_spawn_power_up, random_free_position, top_up_fruits

logger = logging.getLogger(__name__)


def in_bounds_directions(position: Position, width: int, height: int) -> List[Position]:
    """Directions that do not immediately leave the grid from `position`."""
    return [d for d in DIRECTIONS if in_bounds(step(position, d), width, height)]


def respawn_snake(
    snake: Snake,
    width: int,
    height: int,
    snakes: Iterable[Snake],
    avoid: Iterable[Position] = (),
    rng: Optional[random.Random] = None,
) -> Snake:
    """
    Re-place an eliminated snake: one segment on a free cell, a direction
    that stays on the grid, score reduced by RESPAWN_PENALTY (floored at 0)
    and no active effects. The id is kept.
    """
    rng = rng or random
    position = random_free_position(width, height, snakes, avoid=avoid, rng=rng)
    directions = in_bounds_directions(position, width, height)
    direction = rng.choice(directions) if directions else DIRECTIONS[0]

    logger.debug(f"Respawning snake {snake.id} at {position} heading {DIRECTION_NAMES[direction]} "
                 f"(score {snake.score} -> {max(0, snake.score - RESPAWN_PENALTY)})")
    return replace(
        snake,
        body=(position,),
        direction=direction,
        alive=True,
        score=max(0, snake.score - RESPAWN_PENALTY),
        power_ups=(),
        speed_multiplier=1.0,
        invulnerable=False,
    )


def head_collisions(snakes: Iterable[Snake]) -> Set[int]:
    """
    Ids of snakes whose head shares a cell with another snake's head.

    One pass over a cell -> owner map: a second claimant marks both itself
    and the owner, so the result does not depend on iteration order.
    """
    claimed: Dict[Position, int] = {}
    eliminated: Set[int] = set()
    for snake in snakes:
        owner = claimed.get(snake.head)
        if owner is None:
            claimed[snake.head] = snake.id
        else:
            eliminated.add(owner)
            eliminated.add(snake.id)
    return eliminated



def _power_up_cells(state: GameState) -> List[Position]:
    return [p.position for p in state.power_ups]

class GameEngine:
    """
    Advances GameState one action at a time.

    Holds the decision strategy (one Player per snake, all of the same
    class) and the random source used for spawns and respawns. Engines share
    nothing, so several can run side by side.
    """

    def __init__(self, strategy: Optional[str] = None, rng: Optional[random.Random] = None):
        self.player_class = get_player_class(strategy)
        self.rng = rng or random.Random()
        self.players: Dict[int, Player] = {}
        self._handlers: Dict[str, Callable[[GameState, object], GameState]] = {
            INIT_SNAKES: self._init_snakes,
            MOVE_SNAKES: self._move_snakes,
            CHECK_COLLISIONS: self._check_collisions,
            CHECK_FRUIT_CONSUMPTION: self._check_fruit_consumption,
            CHECK_POWERUPS: self._check_power_ups,
            ADD_POWERUP: self._add_power_up,
            UPDATE_POWERUPS: self._update_power_ups,
            UPDATE_FRUITS: self._update_fruits,
            UPDATE_DIMENSIONS: self._update_dimensions,
        }

    def player_for(self, snake_id: int) -> Player:
        player = self.players.get(snake_id)
        if player is None:
            player = self.player_class(snake_id, rng=self.rng)
            self.players[snake_id] = player
        return player

    def reduce(self, state: GameState, action: Action) -> GameState:
        """Apply one action. Unknown actions return the state unchanged."""
        handler = self._handlers.get(getattr(action, "type", None))
        if handler is None:
            logger.debug(f"Ignoring unrecognized action {action!r}")
            return state
        return handler(state, action.payload)

    def tick(self, state: GameState) -> GameState:
        """
        Run one simulation tick:
          1) move every live snake (head-to-head eliminations included)
          2) respawn eliminated and colliding snakes
          3) eat fruit and refill the pool
          4) age effects and pick up power-ups
          5) maybe spawn a power-up
        """
        for action_type in (MOVE_SNAKES, CHECK_COLLISIONS, CHECK_FRUIT_CONSUMPTION, CHECK_POWERUPS):
            state = self.reduce(state, Action(action_type))

        power_up = maybe_spawn_power_up(
            state.power_ups, state.width, state.height,
            state.snakes.values(), avoid=state.fruits, rng=self.rng,
        )
        if power_up is not None:
            state = self.reduce(state, Action(ADD_POWERUP, power_up))

        return replace(state, tick=state.tick + 1)

    # ------------------------------------------------------------------
    # Action handlers
    # ------------------------------------------------------------------

    def _init_snakes(self, state: GameState, payload) -> GameState:
        self.players = {}
        return replace(state, snakes=GameState.roster(payload or ()))

    def _move_snakes(self, state: GameState, _payload) -> GameState:
        width, height = state.width, state.height
        moved: Dict[int, Snake] = {}
        left_grid: List[int] = []
        stepped: List[int] = []

        # Every decision is taken against the same pre-move state
        for sid, snake in state.snakes.items():
            if not snake.alive:
                moved[sid] = snake
                continue

            direction = self.player_for(sid).get_move(state)
            new_head = step(snake.head, direction)

            if not in_bounds(new_head, width, height):
                logger.debug(f"Snake {sid} hit wall at {new_head} - respawning")
                moved[sid] = snake
                left_grid.append(sid)
                continue

            if len(snake.body) < MIN_SNAKE_LENGTH:
                body = (new_head,) + snake.body
            else:
                body = (new_head,) + snake.body[:-1]
            moved[sid] = replace(snake, body=body, direction=direction)
            stepped.append(sid)

        avoid = list(state.fruits) + _power_up_cells(state)
        for sid in left_grid:
            others = [s for other_id, s in moved.items() if other_id != sid]
            moved[sid] = respawn_snake(moved[sid], width, height, others, avoid=avoid, rng=self.rng)

        for sid in head_collisions(moved[sid] for sid in stepped):
            if moved[sid].invulnerable:
                continue
            logger.debug(f"Snake {sid} eliminated by head-on collision at {moved[sid].head}")
            moved[sid] = replace(moved[sid], alive=False)

        return replace(state, snakes=moved)

    def _check_collisions(self, state: GameState, _payload) -> GameState:
        width, height = state.width, state.height
        roster = list(state.snakes.values())

        # Decide every collision against the same roster before respawning anyone
        doomed = [
            sid for sid, snake in state.snakes.items()
            if not snake.alive or self._collides(snake, roster, width, height)
        ]
        if not doomed:
            return state

        snakes = dict(state.snakes)
        avoid = list(state.fruits) + _power_up_cells(state)
        for sid in doomed:
            others = [s for other_id, s in snakes.items() if other_id != sid]
            snakes[sid] = respawn_snake(snakes[sid], width, height, others, avoid=avoid, rng=self.rng)
        return replace(state, snakes=snakes)

    @staticmethod
    def _collides(snake: Snake, roster: List[Snake], width: int, height: int) -> bool:
        if not in_bounds(snake.head, width, height):
            return True
        if snake.invulnerable:
            return False
        return is_colliding(snake.head, roster, width, height, snake.id)

    def _check_fruit_consumption(self, state: GameState, _payload) -> GameState:
        snakes = dict(state.snakes)
        fruits = set(state.fruits)
        eaten: Set[Position] = set()

        for sid, snake in state.snakes.items():
            if not snake.alive or snake.head not in fruits:
                continue
            reward = FRUIT_REWARD * snake.score_multiplier
            eaten.add(snake.head)
            snakes[sid] = replace(
                snake,
                body=snake.body + (snake.tail,),
                score=snake.score + reward,
            )
            logger.debug(f"Snake {sid} ate fruit at {snake.head} (+{reward})")

        remaining = [f for f in state.fruits if f not in eaten]
        refilled = top_up_fruits(remaining, state.width, state.height, snakes.values(),
                               avoid=_power_up_cells(state), rng=self.rng)
        return replace(state, snakes=snakes, fruits=tuple(refilled))

    def _check_power_ups(self, state: GameState, _payload) -> GameState:
        board = list(state.power_ups)
        picked: Set[int] = set()
        snakes: Dict[int, Snake] = {}

        for sid, snake in state.snakes.items():
            effects = [replace(p, duration=p.duration - 1) for p in snake.power_ups]
            effects = [p for p in effects if p.duration > 0]

            if snake.alive:
                for index, power_up in enumerate(board):
                    if index in picked or power_up.position != snake.head:
                        continue
                    picked.add(index)
                    effects = [e for e in effects if e.type != power_up.type]
                    effects.append(replace(power_up, active=True))
                    logger.debug(f"Snake {sid} picked up {power_up.type} at {power_up.position}")

            types = {p.type for p in effects}
            snakes[sid] = replace(
                snake,
                power_ups=tuple(effects),
                speed_multiplier=SPEED_BOOST if SPEED in types else 1.0,
                invulnerable=SHIELD in types,
            )

        board = [p for index, p in enumerate(board) if index not in picked]
        return replace(state, snakes=snakes, power_ups=tuple(board))

    def _add_power_up(self, state: GameState, payload) -> GameState:
        if payload is None or len(state.power_ups) >= MAX_POWERUPS:
            return state
        return replace(state, power_ups=state.power_ups + (payload,))

    def _update_power_ups(self, state: GameState, payload) -> GameState:
        return replace(state, power_ups=tuple(payload or ())[:MAX_POWERUPS])

    def _update_fruits(self, state: GameState, payload) -> GameState:
        fruits = top_up_fruits(payload or (), state.width, state.height,
                               state.snakes.values(), avoid=_power_up_cells(state), rng=self.rng)
        return replace(state, fruits=tuple(fruits))

    def _update_dimensions(self, state: GameState, payload) -> GameState:
        if isinstance(payload, dict):
            dimensions = (payload.get("width"), payload.get("height"))
        elif isinstance(payload, (tuple, list)) and len(payload) == 2:
            dimensions = tuple(payload)
        else:
            dimensions = None

        if dimensions is None or not all(isinstance(v, int) and not isinstance(v, bool) for v in dimensions):
            logger.warning(f"Ignoring malformed dimensions update: {payload!r}")
            return state
        width, height = dimensions

        if width <= 0 or height <= 0:
            logger.warning(f"Ignoring non-positive dimensions {width}x{height}")
            return state

        power_ups = tuple(p for p in state.power_ups if in_bounds(p.position, width, height))
        fruits = top_up_fruits(state.fruits, width, height, state.snakes.values(),
                               avoid=[p.position for p in power_ups], rng=self.rng)
        return replace(state, width=width, height=height, fruits=tuple(fruits), power_ups=power_ups)
