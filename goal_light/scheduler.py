# goal_light/scheduler.py
"""
Two independent, self-rescheduling timers.

Each timer is a daemon thread running "wait -> act -> compute next delay".
A timer finishes its action before it waits again, so it never overlaps
itself; the two timers may overlap each other and rely on the tracking
day's lock for shared state.
"""

from __future__ import annotations

from datetime import timedelta
import logging
import threading
from typing import Callable, List, Optional

from .handlers.goal_light_handler import GoalLightHandler
from .services.refresh_policy import FALLBACK_INTERVAL

logger = logging.getLogger(__name__)

DEFAULT_WARMUP = timedelta(seconds=20)


class Scheduler:
    """Owns the scoreboard-refresh and notification-dispatch timers."""

    def __init__(self, handler: GoalLightHandler, warmup: timedelta = DEFAULT_WARMUP) -> None:
        self.handler = handler
        self.warmup = warmup
        self._stop = threading.Event()
        self._threads: List[threading.Thread] = []

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self._threads)

    @staticmethod
    def _seconds(delay: timedelta) -> float:
        """Clamp a delay to a non-negative number of seconds; overdue means now."""
        return max(0.0, delay.total_seconds())

    def _loop(self, name: str, first_delay: timedelta, action: Callable[[], timedelta]) -> None:
        delay = first_delay
        while not self._stop.wait(self._seconds(delay)):
            try:
                delay = action()
            except Exception:
                logger.exception("%s action failed. Rearming in %s.", name, FALLBACK_INTERVAL)
                delay = FALLBACK_INTERVAL
        logger.debug("%s timer stopped.", name)

    def _spawn(self, name: str, first_delay: timedelta, action: Callable[[], timedelta]) -> None:
        logger.info("Starting %s timer. First run in %s.", name, first_delay)
        t = threading.Thread(target=self._loop, args=(name, first_delay, action), name=name, daemon=True)
        self._threads.append(t)
        t.start()

    def start(self, first_scoreboard_delay: Optional[timedelta] = None) -> None:
        """Arm both timers. The scoreboard delay defaults to one computed from current state."""
        if self.running:
            return
        self._stop.clear()
        self._threads = []
        if first_scoreboard_delay is None:
            first_scoreboard_delay = self.handler.initial_interval()
        self._spawn("scoreboard-refresh", first_scoreboard_delay, self.handler.scoreboard_cycle)
        self._spawn("notification-dispatch", self.warmup, self.handler.dispatch_cycle)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop both timers and wait for any in-flight action to finish."""
        logger.info("Stopping timers.")
        self._stop.set()
        for t in self._threads:
            if t is not threading.current_thread():
                t.join(timeout)
        self._threads = []

    def wait(self) -> None:
        """Block until stop() is called."""
        # Short waits keep the main thread responsive to signal handlers.
        while not self._stop.wait(1.0):
            pass
