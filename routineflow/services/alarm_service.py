"""Recurrence expansion and reminder alarm planning.

Planning is pure: the functions here only describe which OS triggers to
cancel and which to create. Executing a plan belongs to the notification
collaborator (see ``notification_service``).
"""

from __future__ import annotations

import datetime
from typing import Any, Dict, Iterable, List

from routineflow.core.config import ALARM_TRIGGER_PREFIX
from routineflow.models import (
    WEEKDAY_CODES,
    AlarmPlan,
    AlarmSpec,
    AlarmTriggerType,
    RepeatType,
    WeekdayCode,
)
from routineflow.services.calendar_service import (
    coerce_day,
    format_hhmm,
    hhmm_of,
    local_now,
    parse_hhmm,
    stored_day_key,
)

ALARM_TITLE = "Time for your routine!"
ALARM_PAYLOAD_TYPE = "routine_alarm"

# 日本語: 平日・週末は曜日指定の糖衣構文 / English: Weekdays and weekends are shorthands for specific days
REPEAT_WEEKDAY_SETS = {
    RepeatType.WEEKDAYS: [WeekdayCode.MON, WeekdayCode.TUE, WeekdayCode.WED, WeekdayCode.THU, WeekdayCode.FRI],
    RepeatType.WEEKENDS: [WeekdayCode.SAT, WeekdayCode.SUN],
}

# 日本語: アラーム再作成が必要になる編集対象フィールド / English: Edited fields that require cancel-then-recreate
ALARM_FIELDS = frozenset(
    {
        "scheduled_time",
        "reminder_enabled",
        "reminder_minutes_before",
        "repeat_type",
        "repeat_interval_days",
        "frequency_value",
        "is_active",
    }
)

_WEEKDAY_TOKENS: Dict[str, WeekdayCode] = {}
for _index, _code in enumerate(WEEKDAY_CODES):
    _WEEKDAY_TOKENS[_code.value] = _code
    _WEEKDAY_TOKENS[str(_index)] = _code
for _name, _code in (
    ("monday", WeekdayCode.MON),
    ("tuesday", WeekdayCode.TUE),
    ("wednesday", WeekdayCode.WED),
    ("thursday", WeekdayCode.THU),
    ("friday", WeekdayCode.FRI),
    ("saturday", WeekdayCode.SAT),
    ("sunday", WeekdayCode.SUN),
):
    _WEEKDAY_TOKENS[_name] = _code

# 日本語: ルーチン ID の後ろに付くトリガー接尾辞 / English: Trigger suffixes appended to the routine id
_TRIGGER_SUFFIXES = frozenset([code.value for code in WEEKDAY_CODES] + ["interval", "once"])


def parse_weekdays(frequency_value: Any) -> List[WeekdayCode]:
    """Weekday codes listed in ``frequency_value``, unknown tokens skipped."""
    if not isinstance(frequency_value, str):
        return []
    days: List[WeekdayCode] = []
    for token in frequency_value.split(","):
        code = _WEEKDAY_TOKENS.get(token.strip().lower())
        if code is not None and code not in days:
            days.append(code)
    return days


def routine_trigger_prefix(routine_id: str) -> str:
    return f"{ALARM_TRIGGER_PREFIX}{routine_id}"


def is_managed_trigger(trigger_id: str) -> bool:
    return trigger_id.startswith(ALARM_TRIGGER_PREFIX)


def belongs_to_routine(trigger_id: str, routine_id: str) -> bool:
    """Exact id, or the id plus one of the suffixes ``expand_recurrence`` emits."""
    prefix = routine_trigger_prefix(routine_id)
    if trigger_id == prefix:
        return True
    if not trigger_id.startswith(f"{prefix}_"):
        return False
    return trigger_id[len(prefix) + 1 :] in _TRIGGER_SUFFIXES


def compute_alarm_time(scheduled_time: str, minutes_before: int | None) -> str | None:
    """``scheduled_time`` minus the reminder offset as ``HH:mm``.

    Crossing midnight wraps to the previous day's wall clock (00:10 - 15
    gives 23:55); the trigger's day is not moved.
    """
    parsed = parse_hhmm(scheduled_time)
    if parsed is None:
        return None
    hour, minute = parsed
    total_minutes = (hour * 60 + minute - (minutes_before or 0)) % (24 * 60)
    return format_hhmm(total_minutes // 60, total_minutes % 60)


def is_alarm_eligible(routine) -> bool:
    return bool(
        routine.is_active
        and routine.reminder_enabled
        and routine.scheduled_time
        and parse_hhmm(routine.scheduled_time) is not None
    )


def repeat_label(routine) -> str | None:
    repeat_type = RepeatType(routine.repeat_type)
    if repeat_type == RepeatType.DAILY:
        return "Every day"
    if repeat_type == RepeatType.WEEKDAYS:
        return "Weekdays"
    if repeat_type == RepeatType.WEEKENDS:
        return "Weekends"
    if repeat_type == RepeatType.ONCE:
        return "Once"
    if repeat_type == RepeatType.INTERVAL:
        if routine.repeat_interval_days:
            return f"Every {routine.repeat_interval_days} days"
        return None
    days = parse_weekdays(routine.frequency_value)
    if not days:
        return None
    return ", ".join(code.value.capitalize() for code in days)


def alarm_body(routine) -> str:
    text = f"{routine.icon} {routine.title}".strip()
    if routine.duration_minutes:
        return f"{text} ({routine.duration_minutes} min)"
    return text


def _valid_interval(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _next_interval_date(
    anchor: datetime.date, interval_days: int, today: datetime.date, alarm_passed_today: bool
) -> datetime.date:
    if today <= anchor:
        if today == anchor and alarm_passed_today:
            return anchor + datetime.timedelta(days=interval_days)
        return anchor
    offset = (-(today - anchor).days) % interval_days
    next_date = today + datetime.timedelta(days=offset)
    if offset == 0 and alarm_passed_today:
        next_date += datetime.timedelta(days=interval_days)
    return next_date


def expand_recurrence(routine, now: datetime.datetime | None = None) -> List[AlarmSpec]:
    """Concrete trigger specs for one routine; ineligible routines yield none."""
    if not is_alarm_eligible(routine):
        return []
    alarm_time = compute_alarm_time(routine.scheduled_time, routine.reminder_minutes_before)
    if alarm_time is None:
        return []

    current = local_now(now)
    hour, minute = parse_hhmm(alarm_time)
    prefix = routine_trigger_prefix(routine.id)
    base = {
        "routine_id": routine.id,
        "hour": hour,
        "minute": minute,
        "alarm_time": alarm_time,
        "title": ALARM_TITLE,
        "body": alarm_body(routine),
        "data": {"routine_id": routine.id, "type": ALARM_PAYLOAD_TYPE},
    }

    repeat_type = RepeatType(routine.repeat_type)
    if repeat_type == RepeatType.DAILY:
        return [AlarmSpec(trigger_id=prefix, trigger_type=AlarmTriggerType.DAILY, **base)]

    if repeat_type in (RepeatType.WEEKDAYS, RepeatType.WEEKENDS, RepeatType.SPECIFIC_DAYS):
        days = REPEAT_WEEKDAY_SETS.get(repeat_type) or parse_weekdays(routine.frequency_value)
        return [
            AlarmSpec(
                trigger_id=f"{prefix}_{code.value}",
                trigger_type=AlarmTriggerType.WEEKLY,
                weekday=code,
                **base,
            )
            for code in days
        ]

    today = current.date()
    alarm_passed_today = alarm_time <= hhmm_of(current)

    if repeat_type == RepeatType.INTERVAL:
        interval_days = _valid_interval(routine.repeat_interval_days)
        if interval_days is None:
            return []
        created_at = getattr(routine, "created_at", None)
        anchor = coerce_day(stored_day_key(created_at)) if created_at is not None else today
        return [
            AlarmSpec(
                trigger_id=f"{prefix}_interval",
                trigger_type=AlarmTriggerType.INTERVAL,
                anchor_date=anchor,
                interval_days=interval_days,
                fire_date=_next_interval_date(anchor, interval_days, today, alarm_passed_today),
                **base,
            )
        ]

    # 日本語: 単発は次に来るアラーム時刻で一度だけ / English: One-off fires once at the next occurrence
    fire_date = today + datetime.timedelta(days=1) if alarm_passed_today else today
    return [
        AlarmSpec(
            trigger_id=f"{prefix}_once",
            trigger_type=AlarmTriggerType.DATE,
            repeats=False,
            fire_date=fire_date,
            **base,
        )
    ]


def _dedupe(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def plan_alarms(
    routines: Iterable, existing_schedule_ids: Iterable[str], now: datetime.datetime | None = None
) -> AlarmPlan:
    """Cancel every existing trigger of the given routines, then recreate them."""
    routines = list(routines)
    current = local_now(now)
    routine_ids = [routine.id for routine in routines]
    to_cancel = _dedupe(
        trigger_id
        for trigger_id in existing_schedule_ids
        if any(belongs_to_routine(trigger_id, routine_id) for routine_id in routine_ids)
    )
    to_create = [spec for routine in routines for spec in expand_recurrence(routine, current)]
    return AlarmPlan(to_cancel=to_cancel, to_create=to_create)


def plan_routine_reschedule(
    routine, existing_schedule_ids: Iterable[str], now: datetime.datetime | None = None
) -> AlarmPlan:
    return plan_alarms([routine], existing_schedule_ids, now)


def reschedule_all_alarms(
    routines: Iterable, existing_schedule_ids: Iterable[str], now: datetime.datetime | None = None
) -> AlarmPlan:
    """Full resync: cancel every managed trigger and re-plan the whole set."""
    current = local_now(now)
    to_cancel = _dedupe(trigger_id for trigger_id in existing_schedule_ids if is_managed_trigger(trigger_id))
    to_create = [spec for routine in routines for spec in expand_recurrence(routine, current)]
    return AlarmPlan(to_cancel=to_cancel, to_create=to_create)


def alarm_fields_changed(routine, updates: Dict[str, Any]) -> bool:
    for field_name, value in updates.items():
        if field_name not in ALARM_FIELDS:
            continue
        current_value = getattr(routine, field_name, None)
        if hasattr(value, "value"):
            value = value.value
        if current_value != value:
            return True
    return False


__all__ = [
    "ALARM_TITLE",
    "ALARM_FIELDS",
    "REPEAT_WEEKDAY_SETS",
    "parse_weekdays",
    "routine_trigger_prefix",
    "is_managed_trigger",
    "belongs_to_routine",
    "compute_alarm_time",
    "is_alarm_eligible",
    "repeat_label",
    "alarm_body",
    "expand_recurrence",
    "plan_alarms",
    "plan_routine_reschedule",
    "reschedule_all_alarms",
    "alarm_fields_changed",
]
