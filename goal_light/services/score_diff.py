# goal_light/services/score_diff.py
"""
Goal detection by diffing each record's current score against the last
score that was notified.
"""

from __future__ import annotations

import logging
from typing import List

from ..errors import DiffError
from ..models import GameRecord, GoalEvent, TrackingDay, parse_score

logger = logging.getLogger(__name__)


def _diff_record(record: GameRecord) -> GoalEvent | None:
    """
    Diff a single record, advancing its prior score on a goal.

    The first time a record is seen its prior score is only seeded, so a game
    picked up mid-way does not fire a goal for every goal already scored.

    Raises:
        DiffError if the current score is not a non-negative number.
    """
    try:
        current = parse_score(record.current_score)
    except (TypeError, ValueError) as e:
        raise DiffError(record.team_abbr, record.current_score) from e
    record.current_score = current

    if record.prior_score is None:
        logger.debug("No prior score for %s, seeding with %d.", record.team_abbr, current)
        record.prior_score = current
        return None

    if current > record.prior_score:
        logger.info("GOAL!: %s;%d", record.team_abbr, current)
        record.prior_score = current
        return GoalEvent(team_abbr=record.team_abbr, score=current)

    return None


def detect_goals(tracking: TrackingDay) -> List[GoalEvent]:
    """
    Return one GoalEvent per record whose score went up since the last cycle.

    A multi-goal jump between polls yields a single event carrying the new
    total. Records with unreadable scores are logged and skipped.
    """
    events: List[GoalEvent] = []
    for record in tracking.records.values():
        try:
            event = _diff_record(record)
        except DiffError as e:
            logger.error("Posting score for %s failed: %s", record.team_abbr, e)
            continue
        if event is not None:
            events.append(event)
    return events
