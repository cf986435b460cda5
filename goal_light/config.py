# goal_light/config.py
"""
Configuration for the NHL goal light service.

This module centralizes all tunable settings (timezone, scoreboard feed URL,
HTTP timeouts, Particle Cloud credentials, and notification warm-up).
"""

from __future__ import annotations

from dataclasses import dataclass
import os


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, returning default on missing/invalid values."""
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_float(name: str, default: float) -> float:
    """Read a float environment variable, returning default on missing/invalid values."""
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_bool(name: str, default: bool) -> bool:
    """
    Read a boolean-ish environment variable.

    Treats these as false: 0, false, no, off
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable app configuration.

    Notes on Particle config:
      - particle_access_token: leave empty to run in dry-run mode (events are logged, not sent).
      - particle_event_prefix: prepended to "Goal" / "GameDay" event names.
    """

    # Core settings
    tz: str = os.getenv("TZ", "America/New_York")
    scoreboard_base: str = os.getenv("NHL_SCOREBOARD_BASE", "http://live.nhle.com")
    http_timeout_seconds: float = _env_float("HTTP_TIMEOUT_SECONDS", 10.0)

    # Actuator (Particle Cloud)
    particle_api_base: str = os.getenv("PARTICLE_API_BASE", "https://api.particle.io")
    particle_access_token: str = os.getenv("PARTICLE_ACCESS_TOKEN", "")
    particle_event_prefix: str = os.getenv("PARTICLE_EVENT_PREFIX", "NHL")
    particle_event_ttl: int = _env_int("PARTICLE_EVENT_TTL", 60)
    particle_private: bool = _env_bool("PARTICLE_PRIVATE_EVENTS", True)

    # Scheduling
    notify_warmup_seconds: int = _env_int("NOTIFY_WARMUP_SECONDS", 20)

    # Process
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    port: int = _env_int("PORT", 8000)
