# goal_light/models.py
"""
Domain models for the goal light service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
import threading
from typing import Any, Dict, List, Optional


class Side(str, Enum):
    """Which side of the matchup a team record belongs to."""
    HOME = "Home"
    AWAY = "Away"


def parse_score(value: Any) -> int:
    """
    Convert a feed score value into a non-negative int.

    Blank values (None, "") mean "no score yet" and become 0.

    Raises:
        ValueError for non-numeric or negative values.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(f"not a score: {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0
    score = int(value)
    if score < 0:
        raise ValueError(f"negative score: {score}")
    return score


@dataclass(frozen=True)
class FeedTeam:
    """One side of a feed entry, exactly as the feed delivered it."""
    abbr: str
    common_name: str
    city: str
    score: Any
    shots: Any


@dataclass(frozen=True)
class FeedGame:
    """A normalized scoreboard feed entry."""
    game_id: str
    status: str     # "7:00 pm", "1st 15:00", "FINAL OT", ...
    home: FeedTeam
    away: FeedTeam


@dataclass(frozen=True)
class Scoreboard:
    """One fetched snapshot of the feed for a date."""
    current_date: date
    games: List[FeedGame]


@dataclass(frozen=True)
class GoalEvent:
    """A detected score increase; score is the new cumulative total."""
    team_abbr: str
    score: int


@dataclass
class GameRecord:
    """Per-team, per-game state tracked across refreshes."""
    team_abbr: str
    team_name: str
    team_city: str
    side: Side
    game_id: str
    opponent_abbr: str
    scheduled_at: Optional[datetime] = None
    status_text: Optional[str] = None
    current_score: int = 0
    prior_score: Optional[int] = None
    shots_on_goal: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into JSON-safe primitives."""
        return {
            "team": self.team_abbr,
            "name": self.team_name,
            "city": self.team_city,
            "side": self.side.value,
            "game_id": self.game_id,
            "opponent": self.opponent_abbr,
            "scheduled_at": self.scheduled_at.isoformat() if self.scheduled_at else None,
            "status": self.status_text,
            "score": self.current_score,
            "prior_score": self.prior_score,
            "shots_on_goal": self.shots_on_goal,
        }


@dataclass
class TrackingDay:
    """
    All game records for the date currently being tracked.

    One instance lives for the whole service runtime. Both schedulers share it,
    so every read or write must happen while holding `lock`.
    """
    effective_date: date
    game_in_progress: bool = False
    records: Dict[str, GameRecord] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def clear(self) -> None:
        """Drop all records and reset the in-progress flag."""
        self.records.clear()
        self.game_in_progress = False

    def poll_date(self, now: datetime) -> date:
        """
        Date to request from the feed.

        Frozen on the tracked date while a game is in progress so a late game
        is not abandoned when the clock passes midnight.
        """
        if self.game_in_progress:
            return self.effective_date
        return now.date()

    def snapshot(self) -> Dict[str, Any]:
        """JSON-safe copy of the day for status endpoints."""
        return {
            "effective_date": self.effective_date.isoformat(),
            "game_in_progress": self.game_in_progress,
            "records": [r.to_dict() for r in self.records.values()],
        }
