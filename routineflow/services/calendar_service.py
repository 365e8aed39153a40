"""Day key, time slot and weekday helpers.

Every engine operation works on canonical ``YYYY-MM-DD`` day keys in the
caller's local zone, never on raw instants.
"""

from __future__ import annotations

import datetime
import re
from typing import Any, List

from dateutil import parser as date_parser
from dateutil import tz

from routineflow.core.config import get_local_timezone
from routineflow.models import WEEKDAY_CODES, TimeSlot, WeekdayCode

DAY_KEY_FORMAT = "%Y-%m-%d"

_HHMM_PATTERN = re.compile(r"(\d{1,2}):(\d{2})")


def _resolve_zone(local_zone: Any = None) -> datetime.tzinfo:
    if local_zone is None:
        return get_local_timezone()
    if isinstance(local_zone, str):
        zone = tz.gettz(local_zone)
        if zone is None:
            raise ValueError(f"Unknown time zone: {local_zone}")
        return zone
    return local_zone


def local_now(now: datetime.datetime | None = None, local_zone: Any = None) -> datetime.datetime:
    """Current local wall clock; aware inputs are converted, naive ones kept."""
    if now is None:
        return datetime.datetime.now(_resolve_zone(local_zone))
    if now.tzinfo is not None:
        return now.astimezone(_resolve_zone(local_zone))
    return now


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(tz.UTC)


def as_utc(instant: datetime.datetime, local_zone: Any = None) -> datetime.datetime:
    """Aware UTC instant; a naive value is read as local wall clock."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=_resolve_zone(local_zone))
    return instant.astimezone(tz.UTC)


def stored_day_key(instant: datetime.datetime, local_zone: Any = None) -> str:
    """Local day key of a persisted UTC instant."""
    # 日本語: SQLite はオフセットを保存しないため naive 値は UTC とみなす / English: SQLite drops the offset, so naive stored values are UTC
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=tz.UTC)
    return day_key(instant, local_zone)


def day_key(instant: datetime.date | datetime.datetime, local_zone: Any = None) -> str:
    if isinstance(instant, datetime.datetime):
        return local_now(instant, local_zone).date().strftime(DAY_KEY_FORMAT)
    return instant.strftime(DAY_KEY_FORMAT)


def parse_day_key(value: Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.datetime.strptime(value.strip(), DAY_KEY_FORMAT).date()
        except ValueError:
            try:
                return date_parser.parse(value).date()
            except (ValueError, TypeError, OverflowError) as exc:
                raise ValueError(f"Invalid day key: {value!r}") from exc
    raise ValueError(f"Invalid day key: {value!r}")


def coerce_day(value: Any = None, local_zone: Any = None) -> datetime.date:
    """Accept a day key, date, datetime or None (today) and return a local date."""
    if value is None:
        return local_now(local_zone=local_zone).date()
    if isinstance(value, datetime.datetime):
        return local_now(value, local_zone).date()
    return parse_day_key(value)


def shift_day_key(key: str | datetime.date, days: int) -> str:
    return day_key(parse_day_key(key) + datetime.timedelta(days=days))


def trailing_day_keys(today: Any, count: int) -> List[str]:
    """The ``count`` day keys ending at ``today``, oldest first."""
    anchor = coerce_day(today)
    return [day_key(anchor - datetime.timedelta(days=offset)) for offset in range(count - 1, -1, -1)]


def time_slot_of(hour: int) -> TimeSlot:
    if 5 <= hour < 12:
        return TimeSlot.MORNING
    if 12 <= hour < 17:
        return TimeSlot.AFTERNOON
    if 17 <= hour < 21:
        return TimeSlot.EVENING
    return TimeSlot.NIGHT


def weekday_code(value: Any) -> WeekdayCode:
    return WEEKDAY_CODES[coerce_day(value).weekday()]


def parse_hhmm(value: Any) -> tuple[int, int] | None:
    """Parse ``H:mm``/``HH:mm``; anything else (or out of range) is None."""
    if not isinstance(value, str):
        return None
    match = _HHMM_PATTERN.fullmatch(value.strip())
    if not match:
        return None
    hour = int(match.group(1))
    minute = int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def format_hhmm(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def normalize_hhmm(value: Any) -> str | None:
    parsed = parse_hhmm(value)
    if parsed is None:
        return None
    return format_hhmm(*parsed)


def hhmm_of(instant: datetime.datetime) -> str:
    return format_hhmm(instant.hour, instant.minute)


__all__ = [
    "DAY_KEY_FORMAT",
    "local_now",
    "utc_now",
    "as_utc",
    "stored_day_key",
    "day_key",
    "parse_day_key",
    "coerce_day",
    "shift_day_key",
    "trailing_day_keys",
    "time_slot_of",
    "weekday_code",
    "parse_hhmm",
    "format_hhmm",
    "normalize_hhmm",
    "hhmm_of",
]
