"""Core package exports."""

from .config import (
    ACTIVE_DAY_THRESHOLD,
    ALARM_TRIGGER_PREFIX,
    BASE_DIR,
    DATABASE_URL,
    LOG_LEVEL,
    MAX_INSIGHTS,
    MONTHLY_WINDOW_DAYS,
    PROXY_PREFIX,
    STREAK_WINDOW_DAYS,
    WEEKLY_WINDOW_DAYS,
    get_local_timezone,
    get_upcoming_alarm_limit,
)
from .db import Session, create_session, engine, get_db

__all__ = [
    "BASE_DIR",
    "DATABASE_URL",
    "PROXY_PREFIX",
    "LOG_LEVEL",
    "STREAK_WINDOW_DAYS",
    "ACTIVE_DAY_THRESHOLD",
    "WEEKLY_WINDOW_DAYS",
    "MONTHLY_WINDOW_DAYS",
    "MAX_INSIGHTS",
    "ALARM_TRIGGER_PREFIX",
    "get_local_timezone",
    "get_upcoming_alarm_limit",
    "engine",
    "Session",
    "create_session",
    "get_db",
]
