"""
Tick scheduler - runs the engine at a fixed logical rate.

The scheduler owns the simulation clock only. Presentation reads the latest
state through `current_state` at whatever cadence it likes and never writes
back.
"""

import logging
import threading
from typing import Callable, Optional

import schedule

from domain.game_state import GameState
from services.engine import GameEngine

logger = logging.getLogger(__name__)

MAX_LOOP_SLEEP_SECONDS = 0.05


class TickScheduler:
    """
    Drives GameEngine.tick() `ticks_per_second` times a second on a
    background thread.

    Args:
        engine: the transition engine to call
        state: the initial GameState
        ticks_per_second: logical simulation rate (the configured game speed)
        max_ticks: stop scheduling after this many ticks (None = run until stopped)
        on_tick: optional callback receiving every new state
    """

    def __init__(
        self,
        engine: GameEngine,
        state: GameState,
        ticks_per_second: float,
        max_ticks: Optional[int] = None,
        on_tick: Optional[Callable[[GameState], None]] = None,
    ):
        if ticks_per_second <= 0:
            raise ValueError(f"ticks_per_second must be positive, got {ticks_per_second!r}")

        self.engine = engine
        self.interval = 1.0 / ticks_per_second
        self.max_ticks = max_ticks
        self.on_tick = on_tick
        self.ticks_run = 0

        self._state = state
        self._lock = threading.Lock()
        self._scheduler = schedule.Scheduler()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def current_state(self) -> GameState:
        """The latest completed state; safe to call from any thread."""
        with self._lock:
            return self._state

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def step(self) -> GameState:
        """Run exactly one tick synchronously and publish the result."""
        with self._lock:
            state = self._state
        new_state = self.engine.tick(state)
        with self._lock:
            self._state = new_state
            self.ticks_run += 1

        if self.on_tick is not None:
            self.on_tick(new_state)

        if self.max_ticks is not None and self.ticks_run >= self.max_ticks:
            logger.info(f"Reached {self.max_ticks} ticks; no further ticks will be scheduled")
            self._stop_event.set()
        return new_state

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._scheduler.clear()
        self._scheduler.every(self.interval).seconds.do(self._scheduled_step)
        self._thread = threading.Thread(target=self._loop, name="tick-scheduler", daemon=True)
        self._thread.start()
        logger.info(f"Tick scheduler started at {1.0 / self.interval:g} ticks/s")

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Stop scheduling further ticks and wait for the loop to exit."""
        self._stop_event.set()
        self._scheduler.clear()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.info(f"Tick scheduler stopped after {self.ticks_run} ticks")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the scheduler stops (max_ticks reached or stop()). Returns True if it did."""
        return self._stop_event.wait(timeout)

    def _scheduled_step(self):
        self.step()
        if self._stop_event.is_set():
            return schedule.CancelJob
        return None

    def _loop(self) -> None:
        sleep_seconds = min(self.interval / 4, MAX_LOOP_SLEEP_SECONDS)
        try:
            while not self._stop_event.is_set():
                self._scheduler.run_pending()
                self._stop_event.wait(sleep_seconds)
        except Exception:
            logger.exception(f"Tick {self.ticks_run + 1} failed; stopping scheduler")
        finally:
            self._stop_event.set()
            self._scheduler.clear()
