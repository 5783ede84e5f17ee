"""Runtime settings for the desiderata engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    default_user_priority: int
    senior_priority_tier: int
    senior_quota_divisor: int
    standard_quota_divisor: int
    default_holiday_location: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment once per process."""
    return Settings(
        app_name=os.getenv("APP_NAME", "Desiderata Engine"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        default_user_priority=_env_int("DESIDERATA_DEFAULT_PRIORITY", 2),
        senior_priority_tier=_env_int("DESIDERATA_SENIOR_PRIORITY_TIER", 1),
        senior_quota_divisor=_env_int("DESIDERATA_SENIOR_QUOTA_DIVISOR", 4),
        standard_quota_divisor=_env_int("DESIDERATA_STANDARD_QUOTA_DIVISOR", 2),
        default_holiday_location=os.getenv("DESIDERATA_HOLIDAY_LOCATION", "BE"),
    )
