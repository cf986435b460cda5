"""Tests for the scoreboard feed client."""
import json
from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from goal_light.errors import FetchError
from goal_light.nhl_client import ScoreboardClient, strip_jsonp

PAYLOAD = {
    "currentDate": "2015-11-14",
    "games": [
        {
            "id": 2015020245,
            "bs": "7:00 pm",
            "hta": "PIT",
            "htcommon": "Penguins",
            "htn": "Pittsburgh",
            "hts": "",
            "htsog": "",
            "ata": "CBJ",
            "atcommon": "Blue Jackets",
            "atn": "Columbus",
            "ats": "",
            "atsog": "",
        }
    ],
}


def _client(body=None, status_error=None, get_error=None):
    session = MagicMock()
    resp = MagicMock()
    resp.text = body
    if status_error is not None:
        resp.raise_for_status.side_effect = status_error
    if get_error is not None:
        session.get.side_effect = get_error
    else:
        session.get.return_value = resp
    return ScoreboardClient("http://live.nhle.com/", timeout=5, session=session), session


class TestStripJsonp:

    def test_strips_callback_wrapper(self):
        assert strip_jsonp('loadScoreboard({"a": {"b": 1}})\n') == '{"a": {"b": 1}}'

    def test_plain_json_untouched(self):
        assert strip_jsonp('{"a": 1}') == '{"a": 1}'

    def test_no_object_raises(self):
        with pytest.raises(ValueError):
            strip_jsonp("loadScoreboard()")


class TestScoreboardClient:

    def test_url_is_date_keyed(self):
        client, _ = _client()
        assert client.url_for(date(2015, 1, 5)) == "http://live.nhle.com/GameData/GCScoreboard/2015-01-05.jsonp"

    def test_fetch_parses_games(self):
        client, session = _client(f"loadScoreboard({json.dumps(PAYLOAD)})\n")
        board = client.fetch(date(2015, 11, 14))

        session.get.assert_called_once_with(
            "http://live.nhle.com/GameData/GCScoreboard/2015-11-14.jsonp", timeout=5
        )
        assert board.current_date == date(2015, 11, 14)
        assert len(board.games) == 1
        game = board.games[0]
        assert game.game_id == "2015020245"
        assert game.status == "7:00 pm"
        assert (game.home.abbr, game.home.common_name, game.home.city) == ("PIT", "Penguins", "Pittsburgh")
        assert (game.away.abbr, game.away.common_name, game.away.city) == ("CBJ", "Blue Jackets", "Columbus")
        assert game.home.score == ""

    def test_non_object_entries_skipped(self):
        payload = dict(PAYLOAD, games=PAYLOAD["games"] + ["junk"])
        client, _ = _client(json.dumps(payload))
        assert len(client.fetch(date(2015, 11, 14)).games) == 1

    def test_http_error_becomes_fetch_error(self):
        client, _ = _client("", status_error=requests.HTTPError("503 Server Error"))
        with pytest.raises(FetchError) as exc:
            client.fetch(date(2015, 11, 14))
        assert exc.value.url.endswith("2015-11-14.jsonp")
        assert exc.value.day == date(2015, 11, 14)

    def test_transport_error_becomes_fetch_error(self):
        client, _ = _client(get_error=requests.ConnectionError("refused"))
        with pytest.raises(FetchError):
            client.fetch(date(2015, 11, 14))

    def test_garbage_body_becomes_fetch_error(self):
        client, _ = _client("<html>maintenance</html>")
        with pytest.raises(FetchError):
            client.fetch(date(2015, 11, 14))

    def test_malformed_json_becomes_fetch_error(self):
        client, _ = _client('loadScoreboard({"games": [}})')
        with pytest.raises(FetchError):
            client.fetch(date(2015, 11, 14))

    def test_missing_games_list_becomes_fetch_error(self):
        client, _ = _client('{"currentDate": "2015-11-14"}')
        with pytest.raises(FetchError):
            client.fetch(date(2015, 11, 14))

    def test_bad_current_date_becomes_fetch_error(self):
        client, _ = _client('{"currentDate": "not a date", "games": []}')
        with pytest.raises(FetchError):
            client.fetch(date(2015, 11, 14))

    def test_close_releases_session(self):
        client, session = _client()
        with client:
            pass
        session.close.assert_called_once()
