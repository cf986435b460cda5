# app.py
"""
Flask status app for the goal light service.

Routes (read-only):
  JSON:
    - /health
    - /api/scoreboard   tracking day snapshot (records, matchups, cadence)
    - /api/matchups     today's HOME:AWAY pairs

Notes:
  - The app never mutates tracking state; every read goes through the
    handler, which holds the tracking day lock.
  - create_app() without a handler builds the whole service from the
    environment and arms its timers (gunicorn: "app:create_app()").
"""

from __future__ import annotations

import atexit
import os
from typing import Optional

from flask import Flask, jsonify

from goal_light.config import AppConfig
from goal_light.handlers.goal_light_handler import GoalLightHandler
from goal_light.service import GoalLightService


def create_app(handler: Optional[GoalLightHandler] = None) -> Flask:
    """
    App factory.

    When no handler is passed, a GoalLightService is built once per process,
    its startup refresh runs, and both timers are started.
    """
    service: Optional[GoalLightService] = None
    if handler is None:
        service = GoalLightService(AppConfig())
        service.start()
        atexit.register(service.close)
        handler = service.handler

    app = Flask(__name__)
    app.extensions["goal_light_service"] = service

    @app.get("/health")
    def health():
        """Simple health endpoint for Docker/monitoring checks."""
        return {"ok": True}

    @app.get("/api/scoreboard")
    def api_scoreboard():
        """Tracking day snapshot."""
        return jsonify(handler.snapshot())

    @app.get("/api/matchups")
    def api_matchups():
        """Today's matchups as sent to the device."""
        return jsonify({"matchups": handler.current_matchups()})

    return app


if __name__ == "__main__":
    # Dev server (not for production).
    create_app().run(host="0.0.0.0", port=int(os.getenv("PORT", "8000")), debug=False)
