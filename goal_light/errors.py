# goal_light/errors.py
"""
Exception types raised by the goal light service.

Every error is caught at the boundary of the operation that produced it and
logged; none of them are allowed to stop the service.
"""

from __future__ import annotations

from datetime import date
from typing import Optional


class GoalLightError(Exception):
    """Base class for all service errors."""


class FetchError(GoalLightError):
    """The scoreboard feed could not be reached or its payload could not be decoded."""

    def __init__(self, url: str, day: date, cause: object) -> None:
        self.url = url
        self.day = day
        self.cause = cause
        super().__init__(f"Scoreboard fetch failed for {day.isoformat()} ({url}): {cause}")


class MergeError(GoalLightError):
    """A single feed entry was malformed and could not be merged."""


class DiffError(GoalLightError):
    """A record's score could not be interpreted while diffing."""

    def __init__(self, team_abbr: str, value: object) -> None:
        self.team_abbr = team_abbr
        self.value = value
        super().__init__(f"Invalid score for {team_abbr}: {value!r}")


class DispatchError(GoalLightError):
    """The actuator rejected or never received an event."""

    def __init__(self, event: str, cause: object, status_code: Optional[int] = None) -> None:
        self.event = event
        self.cause = cause
        self.status_code = status_code
        super().__init__(f"Publishing {event} failed: {cause}")


class SchedulingError(GoalLightError):
    """The next refresh interval could not be computed."""
