# goal_light/services/refresh_policy.py
"""
Refresh cadence for the scoreboard and notification loops.

Scoreboard regimes:
  - a game is live                      -> every minute
  - next game starts within 65 minutes  -> wake 5 minutes before puck drop
  - otherwise (or no games at all)      -> hourly
"""

from __future__ import annotations

from datetime import datetime, timedelta
import logging
from typing import Optional

from ..errors import SchedulingError
from ..models import TrackingDay

logger = logging.getLogger(__name__)

LIVE_INTERVAL = timedelta(seconds=60)
IDLE_INTERVAL = timedelta(minutes=60)
FALLBACK_INTERVAL = timedelta(minutes=10)
IMMINENT_WINDOW = timedelta(minutes=65)
PREGAME_LEAD = timedelta(minutes=5)

DISPATCH_LIVE_INTERVAL = timedelta(seconds=60)
DISPATCH_IDLE_INTERVAL = timedelta(minutes=10)


def is_live_status(status: Optional[str]) -> bool:
    """A status string that is present and not a final counts as a live game."""
    return status is not None and "FINAL" not in status


def _compute(tracking: TrackingDay, now: datetime) -> timedelta:
    if any(is_live_status(r.status_text) for r in tracking.records.values()):
        tracking.game_in_progress = True
        logger.debug("Returning 1 minute. Game in progress.")
        return LIVE_INTERVAL

    tracking.game_in_progress = False

    upcoming = [
        r.scheduled_at
        for r in tracking.records.values()
        if r.scheduled_at is not None and r.scheduled_at > now
    ]
    if not upcoming:
        logger.debug("Returning 60 minutes. No upcoming games.")
        return IDLE_INTERVAL

    next_game = min(upcoming)
    until = next_game - now
    logger.debug("No games in progress. Next game at %s (in %s).", next_game, until)
    if until >= IMMINENT_WINDOW:
        logger.debug("Returning 60 minutes. No games starting in the next 65 minutes.")
        return IDLE_INTERVAL

    return until - PREGAME_LEAD


def next_scoreboard_interval(tracking: TrackingDay, now: datetime) -> timedelta:
    """
    Return how long to wait before the next scoreboard refresh.

    Also recomputes `tracking.game_in_progress`. An empty day is cleared. The
    result can be zero or negative right before a game; the scheduler clamps
    a first delay to zero and the handler floors later rearms at
    `LIVE_INTERVAL`. Never raises: internal faults fall back to 10 minutes.
    """
    if not tracking.records:
        tracking.clear()
        logger.debug("Returning 60 minutes. No games today.")
        return IDLE_INTERVAL

    try:
        return _compute(tracking, now)
    except Exception as e:
        err = SchedulingError(f"computing next scoreboard refresh failed: {e}")
        logger.error("%s. Returning 10 minutes.", err, exc_info=e)
        return FALLBACK_INTERVAL


def next_dispatch_interval(tracking: TrackingDay) -> timedelta:
    """Notification cadence: every minute while a game is live, otherwise every 10 minutes."""
    if tracking.game_in_progress:
        return DISPATCH_LIVE_INTERVAL
    return DISPATCH_IDLE_INTERVAL
