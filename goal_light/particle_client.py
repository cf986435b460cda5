# goal_light/particle_client.py
"""
Thin HTTP client for publishing events to the Particle Cloud.

The goal light device subscribes to two events:
  - {prefix}Goal     data "PIT;2"           (team code and new total)
  - {prefix}GameDay  data "PIT:CBJ;PHI:NJD" (home:away pairs)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

import requests

from .errors import DispatchError

logger = logging.getLogger(__name__)


class ParticleClient:
    """Publishes named events through the Particle Cloud REST API."""

    def __init__(
        self,
        base_url: str,
        access_token: str,
        event_prefix: str = "NHL",
        ttl: int = 60,
        private: bool = True,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.event_prefix = event_prefix
        self.ttl = ttl
        self.private = private
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def dry_run(self) -> bool:
        """True when no access token is configured; events are only logged."""
        return not self.access_token

    def publish(self, name: str, data: str) -> Dict[str, Any]:
        """
        Publish one event.

        Raises:
            DispatchError on transport failures, non-2xx responses, or {"ok": false}.
        """
        if self.dry_run:
            logger.info("Dry run, not publishing %s: %s", name, data)
            return {"ok": True, "dry_run": True}

        url = f"{self.base_url}/v1/devices/events"
        form = {
            "name": name,
            "data": data,
            "private": "true" if self.private else "false",
            "ttl": str(self.ttl),
        }
        try:
            r = self._session.post(
                url,
                data=form,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=self.timeout,
            )
            r.raise_for_status()
            body = r.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise DispatchError(name, e, status_code=status) from e
        except (requests.RequestException, ValueError) as e:
            raise DispatchError(name, e) from e

        if isinstance(body, dict) and body.get("ok") is False:
            raise DispatchError(name, body.get("error") or "cloud answered ok=false")

        logger.debug("Published %s: %s", name, data)
        return body if isinstance(body, dict) else {"ok": True}

    def goal_update(self, team_abbr: str, score: int) -> Dict[str, Any]:
        """Tell the device a team has a new score."""
        return self.publish(f"{self.event_prefix}Goal", f"{team_abbr};{score}")

    def game_day_update(self, matchups: Sequence[str]) -> Dict[str, Any]:
        """Tell the device which teams play today, as HOME:AWAY pairs."""
        return self.publish(f"{self.event_prefix}GameDay", ";".join(matchups))

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "ParticleClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
