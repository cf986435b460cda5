"""Shared pytest fixtures for goal light tests."""
from datetime import date, datetime
from unittest.mock import MagicMock

import pytest
from dateutil import tz

from goal_light.models import FeedGame, FeedTeam, Scoreboard, TrackingDay
from goal_light.nhl_client import ScoreboardClient
from goal_light.particle_client import ParticleClient
from goal_light.services.notification_service import NotificationService
from goal_light.services.scoreboard_service import ScoreboardService
from goal_light.handlers.goal_light_handler import GoalLightHandler

TZ_NAME = "America/New_York"
GAME_DAY = date(2015, 11, 14)

TEAMS = {
    "PIT": ("Penguins", "Pittsburgh"),
    "CBJ": ("Blue Jackets", "Columbus"),
    "PHI": ("Flyers", "Philadelphia"),
    "NJD": ("Devils", "New Jersey"),
    "BOS": ("Bruins", "Boston"),
    "TOR": ("Maple Leafs", "Toronto"),
}


@pytest.fixture
def eastern():
    return tz.gettz(TZ_NAME)


@pytest.fixture
def now(eastern):
    """3:00 pm on game day; a 7:00 pm puck drop is four hours out."""
    return datetime(2015, 11, 14, 15, 0, tzinfo=eastern)


@pytest.fixture
def make_game():
    """Build a FeedGame the way the client would normalize a feed entry."""

    def _make(game_id, home, away, status="7:00 pm", home_score="", away_score="", home_sog="", away_sog=""):
        return FeedGame(
            game_id=game_id,
            status=status,
            home=FeedTeam(home, TEAMS[home][0], TEAMS[home][1], home_score, home_sog),
            away=FeedTeam(away, TEAMS[away][0], TEAMS[away][1], away_score, away_sog),
        )

    return _make


@pytest.fixture
def make_scoreboard():
    def _make(*games, current_date=GAME_DAY):
        return Scoreboard(current_date=current_date, games=list(games))

    return _make


@pytest.fixture
def tracking():
    return TrackingDay(effective_date=GAME_DAY)


@pytest.fixture
def scoreboard_client():
    return MagicMock(spec=ScoreboardClient)


@pytest.fixture
def particle():
    return MagicMock(spec=ParticleClient)


@pytest.fixture
def scoreboard_service(scoreboard_client):
    return ScoreboardService(client=scoreboard_client, tz_name=TZ_NAME)


@pytest.fixture
def handler(scoreboard_service, particle, tracking):
    return GoalLightHandler(
        scoreboard_service=scoreboard_service,
        notification_service=NotificationService(particle=particle),
        tracking=tracking,
    )
