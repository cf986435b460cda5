# goal_light/services/notification_service.py
"""
Notification logic.

Responsibilities:
  - derive today's HOME:AWAY matchups from the tracking day
  - push matchups and goal events to the goal light device

Delivery is best-effort: a failed publish is logged and dropped, the next
cycle sends fresh state anyway.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import List

from ..errors import DispatchError
from ..models import GoalEvent, Side, TrackingDay
from ..particle_client import ParticleClient

logger = logging.getLogger(__name__)


def _game_order(game_id: str) -> tuple:
    """Numeric ids compare as numbers; anything else sorts after them as text."""
    if game_id.isdigit():
        return (0, int(game_id), "")
    return (1, 0, game_id)


def build_matchups(tracking: TrackingDay) -> List[str]:
    """
    Return one "HOME:AWAY" pair per home team playing on the tracked day.

    The away side is found by looking for the record whose opponent is the
    home team. Pairs are ordered by game id so the result does not depend
    on record insertion order.
    """
    records = tracking.records.values()
    pairs: dict[str, tuple[str, str]] = {}

    for home in records:
        if home.side is not Side.HOME or home.team_abbr in pairs:
            continue
        for other in records:
            if other.side is Side.AWAY and other.opponent_abbr == home.team_abbr:
                logger.debug("Found opponent for %s: %s", home.team_abbr, other.team_abbr)
                pairs[home.team_abbr] = (home.game_id, f"{home.team_abbr}:{other.team_abbr}")
                break

    ordered = sorted(pairs.items(), key=lambda kv: (_game_order(kv[1][0]), kv[0]))
    return [pair for _, (_, pair) in ordered]


@dataclass
class NotificationService:
    """Service responsible for publishing matchups and goals to the device."""

    particle: ParticleClient

    def post_matchups(self, matchups: List[str]) -> bool:
        """Publish the game-day update. Returns False if the publish failed."""
        logger.info("Posting gameday for these teams: %s", ";".join(matchups) or "(none)")
        try:
            self.particle.game_day_update(matchups)
        except DispatchError as e:
            logger.error("Game day update failed: %s", e)
            return False
        return True

    def post_goal(self, event: GoalEvent) -> bool:
        """Publish a single goal update. Returns False if the publish failed."""
        try:
            self.particle.goal_update(event.team_abbr, event.score)
        except DispatchError as e:
            logger.error("Goal update for %s (%d) failed: %s", event.team_abbr, event.score, e)
            return False
        return True
