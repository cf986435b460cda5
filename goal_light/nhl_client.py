# goal_light/nhl_client.py
"""
Thin HTTP client for the NHL GameCenter scoreboard feed.

The feed is date keyed (/GameData/GCScoreboard/YYYY-MM-DD.jsonp) and answers
with JSONP, so the JSON object has to be cut out of the callback wrapper
before decoding.
"""

from __future__ import annotations

from datetime import date
import json
import logging
from typing import Any, Dict, List

from dateutil import parser as date_parser
import requests

from .errors import FetchError
from .models import FeedGame, FeedTeam, Scoreboard

logger = logging.getLogger(__name__)


def strip_jsonp(text: str) -> str:
    """
    Return the JSON object embedded in a JSONP response.

    Example:
      'loadScoreboard({"games": []})\\n' -> '{"games": []}'

    Raises:
        ValueError when no object is present.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end < start:
        raise ValueError("response does not contain a JSON object")
    return text[start:end + 1]


def _text(v: Any) -> str:
    """Stringify a feed value; None becomes an empty string."""
    return "" if v is None else str(v).strip()


def _feed_game(entry: Dict[str, Any]) -> FeedGame:
    """Map the feed's terse keys (hta, hts, bs, ...) onto a FeedGame."""
    return FeedGame(
        game_id=_text(entry.get("id")),
        status=_text(entry.get("bs")),
        home=FeedTeam(
            abbr=_text(entry.get("hta")),
            common_name=_text(entry.get("htcommon")),
            city=_text(entry.get("htn")),
            score=entry.get("hts"),
            shots=entry.get("htsog"),
        ),
        away=FeedTeam(
            abbr=_text(entry.get("ata")),
            common_name=_text(entry.get("atcommon")),
            city=_text(entry.get("atn")),
            score=entry.get("ats"),
            shots=entry.get("atsog"),
        ),
    )


class ScoreboardClient:
    """A minimal client for retrieving one day's scoreboard from the NHL feed."""

    def __init__(self, base_url: str, timeout: float = 10.0, session: requests.Session | None = None) -> None:
        """Store the base URL and build the HTTP session."""
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": "nhl-goal-light/1.0"})

    def url_for(self, day: date) -> str:
        """Build the scoreboard URL for a calendar date."""
        return f"{self.base_url}/GameData/GCScoreboard/{day:%Y-%m-%d}.jsonp"

    def get_text(self, url: str) -> str:
        """
        Execute a GET request and return the body as text.

        Raises:
            requests.RequestException on transport failures or non-2xx responses.
        """
        r = self._session.get(url, timeout=self.timeout)
        r.raise_for_status()
        return r.text

    def fetch(self, day: date) -> Scoreboard:
        """
        Fetch and decode the scoreboard for `day`.

        Raises:
            FetchError on any transport, HTTP, or payload problem.
        """
        url = self.url_for(day)
        logger.debug("Fetching NHL scoreboard: %s", url)

        try:
            body = self.get_text(url)
            payload = json.loads(strip_jsonp(body))
        except (requests.RequestException, ValueError) as e:
            raise FetchError(url, day, e) from e

        if not isinstance(payload, dict):
            raise FetchError(url, day, "payload is not an object")

        games = payload.get("games")
        if not isinstance(games, list):
            raise FetchError(url, day, "payload has no games list")

        try:
            current_date = date_parser.parse(str(payload.get("currentDate") or "")).date()
        except (ValueError, OverflowError) as e:
            raise FetchError(url, day, f"bad currentDate {payload.get('currentDate')!r}: {e}") from e

        out: List[FeedGame] = []
        for entry in games:
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object scoreboard entry: %r", entry)
                continue
            out.append(_feed_game(entry))

        logger.debug("Number of games on %s: %d", current_date, len(out))
        return Scoreboard(current_date=current_date, games=out)

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

    def __enter__(self) -> "ScoreboardClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
