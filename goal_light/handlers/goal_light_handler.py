# goal_light/handlers/goal_light_handler.py
"""
Handler/controller that runs one scoreboard cycle or one notification cycle.

Keeps the scheduler and the status app simple by concentrating the
fetch -> merge -> diff -> dispatch sequence here. All tracking day access
happens under the day's lock; device publishes happen outside it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
import logging
from typing import Any, Dict, List, Optional

from ..errors import FetchError
from ..models import GoalEvent, TrackingDay
from ..services.notification_service import NotificationService, build_matchups
from ..services.refresh_policy import (
    FALLBACK_INTERVAL,
    LIVE_INTERVAL,
    next_dispatch_interval,
    next_scoreboard_interval,
)
from ..services.score_diff import detect_goals
from ..services.scoreboard_service import ScoreboardService

logger = logging.getLogger(__name__)


@dataclass
class GoalLightHandler:
    """Orchestrates scoreboard + notification services around one shared tracking day."""

    scoreboard_service: ScoreboardService
    notification_service: NotificationService
    tracking: TrackingDay
    last_interval: timedelta = FALLBACK_INTERVAL
    last_refresh_ok: bool = field(default=False, init=False)

    def _now(self) -> datetime:
        return datetime.now(tz=self.scoreboard_service.app_tz)

    def refresh_scoreboard(self, now: Optional[datetime] = None) -> List[GoalEvent]:
        """
        Pull the scoreboard, merge it, and publish any goals.

        Returns the goal events that were detected. A failed fetch is logged
        and leaves the tracking day exactly as it was.
        """
        now = now or self._now()
        with self.tracking.lock:
            try:
                self.scoreboard_service.refresh(self.tracking, now=now)
            except FetchError as e:
                self.last_refresh_ok = False
                logger.error("Scoreboard refresh failed: %s", e)
                return []
            events = detect_goals(self.tracking)
            self.last_refresh_ok = True

        for event in events:
            self.notification_service.post_goal(event)
        return events

    def scoreboard_interval(self, now: Optional[datetime] = None) -> timedelta:
        """Compute (and remember) the next scoreboard delay from current state."""
        now = now or self._now()
        with self.tracking.lock:
            self.last_interval = next_scoreboard_interval(self.tracking, now)
        return self.last_interval

    def initial_interval(self, now: Optional[datetime] = None) -> timedelta:
        """
        First scoreboard delay, computed from whatever the startup refresh produced.

        If the startup refresh failed there is no state to compute from, so the
        current `last_interval` (10 minutes unless set otherwise) is used.
        """
        if not self.last_refresh_ok:
            logger.info("Startup refresh failed. First scoreboard refresh in %s.", self.last_interval)
            return self.last_interval
        return self.scoreboard_interval(now)

    def scoreboard_cycle(self, now: Optional[datetime] = None) -> timedelta:
        """
        One scoreboard tick: refresh, then pick the next delay.

        After a failed fetch the previous delay is reused instead of
        recomputing from stale state. The delay returned here is never
        shorter than the live cadence: inside the pregame lead-in the policy
        reports an elapsed wake-up, and having just refreshed we poll at the
        live rate until the game starts.
        """
        logger.info("Scoreboard timer elapsed. Refreshing scoreboard.")
        now = now or self._now()
        self.refresh_scoreboard(now)
        if self.last_refresh_ok:
            self.scoreboard_interval(now)
        else:
            logger.info("Keeping previous scoreboard interval of %s after failed refresh.", self.last_interval)
        if self.last_interval < LIVE_INTERVAL:
            logger.debug("Pregame lead-in elapsed (%s). Polling every %s.", self.last_interval, LIVE_INTERVAL)
            self.last_interval = LIVE_INTERVAL
        logger.info("Next scoreboard refresh in %s.", self.last_interval)
        return self.last_interval

    def current_matchups(self) -> List[str]:
        with self.tracking.lock:
            return build_matchups(self.tracking)

    def dispatch_cycle(self) -> timedelta:
        """One notification tick: publish today's matchups and pick the next delay."""
        logger.info("Notification timer elapsed. Posting matchups.")
        self.notification_service.post_matchups(self.current_matchups())
        with self.tracking.lock:
            interval = next_dispatch_interval(self.tracking)
        logger.debug("Next notification post in %s.", interval)
        return interval

    def snapshot(self) -> Dict[str, Any]:
        """JSON-safe copy of the tracking day for status endpoints."""
        with self.tracking.lock:
            data = self.tracking.snapshot()
            data["matchups"] = build_matchups(self.tracking)
        data["last_refresh_ok"] = self.last_refresh_ok
        data["next_scoreboard_interval_seconds"] = self.last_interval.total_seconds()
        return data
