# goal_light/services/scoreboard_service.py
"""
Scoreboard refresh + merge logic.

Responsibilities:
  - pick the date to poll (frozen while a game is live)
  - fetch the scoreboard for that date
  - merge fetched entries into the tracking day without duplicating records
    or losing prior scores
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
import logging
from typing import Optional, Tuple

from dateutil import tz

from ..errors import MergeError
from ..models import FeedGame, FeedTeam, GameRecord, Scoreboard, Side, TrackingDay, parse_score
from ..nhl_client import ScoreboardClient

logger = logging.getLogger(__name__)

# The feed's pre-game status is a bare clock time such as "7:00 pm".
GAME_TIME_FORMAT = "%m/%d/%Y %I:%M %p"


def safe_int(v, default=0) -> int:
    """Convert a value to int safely; return default on failures."""
    try:
        return int(v)
    except Exception:
        return default


@dataclass
class ScoreboardService:
    """Service responsible for keeping the tracking day in sync with the feed."""

    client: ScoreboardClient
    tz_name: str

    @property
    def app_tz(self):
        """Return the configured timezone object used for game start times."""
        return tz.gettz(self.tz_name)

    def _now_local(self) -> datetime:
        """Return the current time in the app timezone."""
        return datetime.now(tz=self.app_tz)

    def parse_game_time(self, day: date, status: str) -> Optional[datetime]:
        """
        Anchor a clock-time status ("7:00 pm") on `day` in the app timezone.

        Returns None when the status is not a clock time ("1st 15:00", "FINAL", "").
        """
        if not status:
            return None
        try:
            naive = datetime.strptime(f"{day:%m/%d/%Y} {status.strip()}", GAME_TIME_FORMAT)
        except ValueError:
            return None
        return naive.replace(tzinfo=self.app_tz)

    @staticmethod
    def _scores(game: FeedGame) -> Tuple[int, int]:
        """
        Validate a feed entry and return its (home, away) scores.

        Raises:
            MergeError when a team code is missing or a score is not a non-negative number.
        """
        if not game.home.abbr or not game.away.abbr:
            raise MergeError(f"game {game.game_id or '?'}: missing team code")
        try:
            return parse_score(game.home.score), parse_score(game.away.score)
        except (TypeError, ValueError) as e:
            raise MergeError(f"game {game.game_id or '?'}: bad score ({e})") from e

    def _advance_status(self, day: date, record: GameRecord, status: str) -> None:
        """
        Follow the feed's live/final status on an existing record.

        A clock time never overwrites anything once the record exists. Any
        other status replaces the status text, and a scheduled record switches
        over to status text at puck drop.
        """
        if self.parse_game_time(day, status) is not None:
            return
        if record.scheduled_at is not None:
            logger.info("%s game %s is now %r.", record.team_abbr, record.game_id, status)
            record.scheduled_at = None
        record.status_text = status

    def _merge_side(
        self,
        tracking: TrackingDay,
        game: FeedGame,
        team: FeedTeam,
        opponent: FeedTeam,
        side: Side,
        score: int,
    ) -> None:
        """Match-or-create the record for one side of a game."""
        existing = tracking.records.get(team.abbr)
        if existing is not None:
            logger.debug("Team record already exists. Updating %s (%s).", team.abbr, side.value)
            existing.current_score = score
            existing.shots_on_goal = safe_int(team.shots, 0)
            self._advance_status(tracking.effective_date, existing, game.status)
            return

        logger.debug("Team record does not exist. Adding %s (%s).", team.abbr, side.value)
        record = GameRecord(
            team_abbr=team.abbr,
            team_name=team.common_name,
            team_city=team.city,
            side=side,
            game_id=game.game_id,
            opponent_abbr=opponent.abbr,
            current_score=score,
            shots_on_goal=safe_int(team.shots, 0),
        )
        scheduled = self.parse_game_time(tracking.effective_date, game.status)
        if scheduled is not None:
            record.scheduled_at = scheduled
        else:
            record.status_text = game.status
        tracking.records[team.abbr] = record

    def merge(self, tracking: TrackingDay, scoreboard: Scoreboard) -> TrackingDay:
        """
        Reconcile a fetched scoreboard into the tracking day.

        A feed date later than the tracked date is a day rollover: all records
        are dropped before merging. Malformed entries are logged and skipped.
        """
        if scoreboard.current_date > tracking.effective_date:
            logger.info(
                "Clearing game data: feed moved to %s (tracking %s).",
                scoreboard.current_date,
                tracking.effective_date,
            )
            tracking.clear()

        tracking.effective_date = scoreboard.current_date
        logger.debug("Number of games on %s: %d", tracking.effective_date, len(scoreboard.games))

        for game in scoreboard.games:
            try:
                home_score, away_score = self._scores(game)
            except MergeError as e:
                logger.error("Skipping scoreboard entry: %s", e)
                continue
            self._merge_side(tracking, game, game.home, game.away, Side.HOME, home_score)
            self._merge_side(tracking, game, game.away, game.home, Side.AWAY, away_score)

        return tracking

    def refresh(self, tracking: TrackingDay, now: Optional[datetime] = None) -> TrackingDay:
        """
        Fetch the scoreboard for the tracked date and merge it.

        Raises:
            FetchError, with the tracking day left untouched.
        """
        now = now or self._now_local()
        scoreboard = self.client.fetch(tracking.poll_date(now))
        return self.merge(tracking, scoreboard)
