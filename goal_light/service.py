# goal_light/service.py
"""
Service lifecycle: build dependencies, run the startup refresh, arm or skip
the timers, and release everything on shutdown.
"""

from __future__ import annotations

from datetime import datetime, timedelta
import logging
import time
from typing import Optional

from dateutil import tz

from .config import AppConfig
from .handlers.goal_light_handler import GoalLightHandler
from .models import GoalEvent, TrackingDay
from .nhl_client import ScoreboardClient
from .particle_client import ParticleClient
from .scheduler import Scheduler
from .services.notification_service import NotificationService
from .services.scoreboard_service import ScoreboardService

logger = logging.getLogger(__name__)

TEST_MODES = ("Goal", "GameDay", "GameDay:Goal")


class GoalLightService:
    """
    Owns the tracking day, both HTTP clients, and the scheduler.

    Construction performs one synchronous scoreboard refresh so state is
    populated before any timer is armed.
    """

    def __init__(
        self,
        cfg: AppConfig,
        scoreboard_client: Optional[ScoreboardClient] = None,
        particle_client: Optional[ParticleClient] = None,
        refresh_on_start: bool = True,
    ) -> None:
        self.cfg = cfg
        self.scoreboard_client = scoreboard_client or ScoreboardClient(
            cfg.scoreboard_base, timeout=cfg.http_timeout_seconds
        )
        self.particle_client = particle_client or ParticleClient(
            cfg.particle_api_base,
            cfg.particle_access_token,
            event_prefix=cfg.particle_event_prefix,
            ttl=cfg.particle_event_ttl,
            private=cfg.particle_private,
            timeout=cfg.http_timeout_seconds,
        )

        today = datetime.now(tz=tz.gettz(cfg.tz)).date()
        self.handler = GoalLightHandler(
            scoreboard_service=ScoreboardService(client=self.scoreboard_client, tz_name=cfg.tz),
            notification_service=NotificationService(particle=self.particle_client),
            tracking=TrackingDay(effective_date=today),
        )
        self.scheduler = Scheduler(self.handler, warmup=timedelta(seconds=cfg.notify_warmup_seconds))
        self._closed = False

        logger.debug("Creating goal light service.")
        if refresh_on_start:
            self.handler.refresh_scoreboard()

    def start(self) -> None:
        """Periodic mode: arm both timers."""
        self.scheduler.start()

    def run_once(self) -> None:
        """One-shot mode: a single refresh and a single matchup post, no timers."""
        self.handler.refresh_scoreboard()
        self.handler.dispatch_cycle()

    def run_test_mode(self, mode: str, pause_seconds: float = 80.0) -> None:
        """
        Send a scripted sequence of events straight to the device.

        Used to check the device wiring without waiting for a real game.
        """
        if mode not in TEST_MODES:
            raise ValueError(f"unknown test mode {mode!r}; expected one of {', '.join(TEST_MODES)}")
        logger.info("Test mode: %s", mode)

        notify = self.handler.notification_service
        goal = self._scripted_goal
        if mode == "Goal":
            goal("PIT", 1, pause_seconds)
            goal("PIT", 2, pause_seconds)
            goal("CBJ", 1, pause_seconds)
        elif mode == "GameDay":
            notify.post_matchups(["PIT"])
        else:
            notify.post_matchups(["PIT:CBJ", "PHI:NJD"])
            time.sleep(pause_seconds / 4)
            goal("PIT", 1, pause_seconds)
            goal("CBJ", 1, pause_seconds)
            goal("PHI", 1, pause_seconds / 4)
            goal("PIT", 2, pause_seconds)
            goal("CBJ", 2, pause_seconds)

    def _scripted_goal(self, team_abbr: str, score: int, pause_seconds: float) -> None:
        self.handler.notification_service.post_goal(GoalEvent(team_abbr=team_abbr, score=score))
        time.sleep(pause_seconds)

    def close(self) -> None:
        """Stop timers, drop state, and release HTTP resources. Safe to call twice."""
        if self._closed:
            return
        logger.debug("Disposing goal light service.")
        try:
            self.scheduler.stop(timeout=self.cfg.http_timeout_seconds * 2)
        finally:
            with self.handler.tracking.lock:
                self.handler.tracking.clear()
            self.scoreboard_client.close()
            self.particle_client.close()
            self._closed = True

    def __enter__(self) -> "GoalLightService":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
