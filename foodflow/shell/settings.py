"""Settings - Environment-backed configuration for the rules service.

The shell is the only place that reads the environment or the wall clock;
everything below it receives these values as arguments.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..core.models import PickupTolerance
from ..core.timezones import DEFAULT_TIMEZONE, is_valid_timezone


logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default


@dataclass
class RulesSettings:
    """Configuration for the rules service.

    Attributes:
        host: Bind address for uvicorn
        port: Bind port for uvicorn
        log_level: Root logging level name
        default_timezone: IANA zone used when a request names none
        early_tolerance_minutes: Minutes before a window a pickup may be confirmed
        late_tolerance_minutes: Minutes after a window a pickup may be confirmed
        allowed_origins: CORS origins for browser clients
    """

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    default_timezone: str = DEFAULT_TIMEZONE
    early_tolerance_minutes: int = 15
    late_tolerance_minutes: int = 30
    allowed_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])

    @property
    def pickup_tolerance(self) -> PickupTolerance:
        return PickupTolerance(
            early_minutes=self.early_tolerance_minutes,
            late_minutes=self.late_tolerance_minutes,
        )


def load_settings() -> RulesSettings:
    """Build settings from environment variables, falling back to defaults."""
    default_timezone = os.environ.get("DEFAULT_TIMEZONE", DEFAULT_TIMEZONE)
    if not is_valid_timezone(default_timezone):
        logger.warning("Unknown DEFAULT_TIMEZONE %r, using %s", default_timezone, DEFAULT_TIMEZONE)
        default_timezone = DEFAULT_TIMEZONE

    origins = os.environ.get("ALLOWED_ORIGINS", "http://localhost:3000")

    return RulesSettings(
        host=os.environ.get("HOST", "0.0.0.0"),
        port=_env_int("PORT", 8080),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        default_timezone=default_timezone,
        early_tolerance_minutes=max(_env_int("PICKUP_EARLY_TOLERANCE_MINUTES", 15), 0),
        late_tolerance_minutes=max(_env_int("PICKUP_LATE_TOLERANCE_MINUTES", 30), 0),
        allowed_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
    )


# Lazy-initialized settings
_settings: RulesSettings | None = None


def get_settings() -> RulesSettings:
    """Get or load the process-wide settings."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def utc_now() -> datetime:
    """Current instant in UTC. The single ambient clock read."""
    return datetime.now(timezone.utc)
