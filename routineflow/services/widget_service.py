"""Read-only projections for the home-screen widget host."""

from __future__ import annotations

import datetime
from typing import Any, Iterable, List

from routineflow.core.config import get_upcoming_alarm_limit
from routineflow.models import (
    DailyProgressWidgetData,
    MotivationQuote,
    RoutineListWidgetData,
    TimeSlot,
    WidgetAlarmItem,
    WidgetRoutineItem,
    WidgetSnapshot,
)
from routineflow.services.alarm_service import compute_alarm_time, is_alarm_eligible, repeat_label
from routineflow.services.analytics_service import active_routines_of, completion_rate
from routineflow.services.calendar_service import (
    coerce_day,
    day_key,
    hhmm_of,
    local_now,
    normalize_hhmm,
    time_slot_of,
)
from routineflow.services.completion_index_service import build_index, completed_ids_for_day
from routineflow.services.streak_service import compute_streak

MOTIVATION_QUOTES = [
    MotivationQuote(text="Small habits make big changes.", author="James Clear"),
    MotivationQuote(text="Give today your best, one routine at a time.", author="RoutineFlow"),
    MotivationQuote(text="Consistency beats talent.", author="Angela Duckworth"),
    MotivationQuote(text="Well begun is half done.", author="Aristotle"),
    MotivationQuote(text="Make today a little better than yesterday.", author="RoutineFlow"),
    MotivationQuote(text="Trust the power of habit.", author="Charles Duhigg"),
    MotivationQuote(text="It doesn't have to be perfect. It just has to be steady.", author="RoutineFlow"),
]


def _active_by_sort_order(routines: Iterable) -> list:
    return sorted(active_routines_of(routines), key=lambda routine: routine.sort_order)


def to_widget_routine_item(routine, is_completed: bool) -> WidgetRoutineItem:
    return WidgetRoutineItem(
        id=routine.id,
        title=routine.title,
        icon=routine.icon,
        color=routine.color,
        is_completed=is_completed,
        time_slot=TimeSlot(routine.time_slot),
        scheduled_time=routine.scheduled_time,
        reminder_enabled=bool(routine.reminder_enabled),
        duration_minutes=routine.duration_minutes,
        repeat_label=repeat_label(routine),
    )


def _pending_alarms(active: list, completed_ids: set, current: datetime.datetime) -> List[WidgetAlarmItem]:
    # 日本語: 当日の未来アラームのみ、HH:mm 文字列比較で十分 / English: Same-day future alarms only; zero-padded HH:mm string order is enough
    now_hhmm = hhmm_of(current)
    items = []
    for routine in active:
        if routine.id in completed_ids or not is_alarm_eligible(routine):
            continue
        alarm_time = compute_alarm_time(routine.scheduled_time, routine.reminder_minutes_before)
        if alarm_time is None or alarm_time < now_hhmm:
            continue
        items.append(
            WidgetAlarmItem(
                routine_id=routine.id,
                routine_title=routine.title,
                routine_icon=routine.icon,
                routine_color=routine.color,
                scheduled_time=routine.scheduled_time,
                reminder_minutes_before=routine.reminder_minutes_before or 0,
                alarm_time=alarm_time,
            )
        )
    items.sort(key=lambda item: item.alarm_time)
    return items


def upcoming_alarms(
    routines: Iterable, logs: Iterable, now: datetime.datetime | None = None, limit: int | None = None
) -> List[WidgetAlarmItem]:
    current = local_now(now)
    completed_ids = completed_ids_for_day(logs, day_key(current))
    cap = get_upcoming_alarm_limit() if limit is None else max(0, limit)
    return _pending_alarms(_active_by_sort_order(routines), completed_ids, current)[:cap]


def next_alarm(routines: Iterable, logs: Iterable, now: datetime.datetime | None = None) -> WidgetAlarmItem | None:
    alarms = upcoming_alarms(routines, logs, now, limit=1)
    return alarms[0] if alarms else None


def daily_progress(routines: Iterable, logs: Iterable, now: datetime.datetime | None = None) -> DailyProgressWidgetData:
    logs = list(logs)
    current = local_now(now)
    today_key = day_key(current)
    active = _active_by_sort_order(routines)
    completed_ids = completed_ids_for_day(logs, today_key)

    completed_count = sum(1 for routine in active if routine.id in completed_ids)
    total_count = len(active)

    # 日本語: 現在の時間帯を優先し、なければ全体の最初の未完了 / English: Prefer the current slot, else the first incomplete overall
    current_slot = time_slot_of(current.hour)
    incomplete = [routine for routine in active if routine.id not in completed_ids]
    in_slot = [routine for routine in incomplete if TimeSlot(routine.time_slot) == current_slot]
    candidate = (in_slot or incomplete or [None])[0]

    streak = compute_streak(active, build_index(logs), today_key)

    return DailyProgressWidgetData(
        completed_count=completed_count,
        total_count=total_count,
        percentage=completion_rate(completed_count, total_count),
        current_streak=streak.current,
        next_routine=to_widget_routine_item(candidate, False) if candidate is not None else None,
        upcoming_alarms=_pending_alarms(active, completed_ids, current)[: get_upcoming_alarm_limit()],
    )


def _schedule_sort_key(routine):
    normalized = normalize_hhmm(routine.scheduled_time)
    return (normalized is None, normalized or "", routine.sort_order)


def routine_list(routines: Iterable, logs: Iterable, now: datetime.datetime | None = None) -> RoutineListWidgetData:
    current = local_now(now)
    completed_ids = completed_ids_for_day(logs, day_key(current))
    ordered = sorted(active_routines_of(routines), key=_schedule_sort_key)
    items = [to_widget_routine_item(routine, routine.id in completed_ids) for routine in ordered]
    return RoutineListWidgetData(
        routines=items,
        completed_count=sum(1 for item in items if item.is_completed),
        total_count=len(items),
    )


def daily_motivation(today: Any = None) -> MotivationQuote:
    day_of_year = coerce_day(today).timetuple().tm_yday
    return MOTIVATION_QUOTES[day_of_year % len(MOTIVATION_QUOTES)]


def widget_snapshot(routines: Iterable, logs: Iterable, now: datetime.datetime | None = None) -> WidgetSnapshot:
    routines = list(routines)
    logs = list(logs)
    current = local_now(now)
    return WidgetSnapshot(
        progress=daily_progress(routines, logs, current),
        routines=routine_list(routines, logs, current),
        motivation=daily_motivation(current.date()),
        next_alarm=next_alarm(routines, logs, current),
        updated_at=int(current.timestamp() * 1000),
    )


def serialize_widget_snapshot(routines: Iterable, logs: Iterable, now: datetime.datetime | None = None) -> str:
    """JSON document handed to the native widget host."""
    return widget_snapshot(routines, logs, now).model_dump_json()


__all__ = [
    "MOTIVATION_QUOTES",
    "to_widget_routine_item",
    "upcoming_alarms",
    "next_alarm",
    "daily_progress",
    "routine_list",
    "daily_motivation",
    "widget_snapshot",
    "serialize_widget_snapshot",
]
