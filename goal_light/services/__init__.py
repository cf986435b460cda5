# goal_light/services/__init__.py
"""
Services package exports.
"""
from .notification_service import NotificationService, build_matchups
from .refresh_policy import next_dispatch_interval, next_scoreboard_interval
from .score_diff import detect_goals
from .scoreboard_service import ScoreboardService

__all__ = [
    "NotificationService",
    "ScoreboardService",
    "build_matchups",
    "detect_goals",
    "next_dispatch_interval",
    "next_scoreboard_interval",
]
