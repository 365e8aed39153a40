"""Service-layer exports."""

from .alarm_service import (
    alarm_fields_changed,
    compute_alarm_time,
    expand_recurrence,
    plan_alarms,
    plan_routine_reschedule,
    reschedule_all_alarms,
)
from .analytics_service import compute_analytics, generate_insights
from .calendar_service import day_key, time_slot_of, weekday_code
from .completion_index_service import build_index, is_completed
from .notification_service import NotificationScheduler, apply_alarm_plan
from .routine_store_service import (
    add_routine,
    complete_routine,
    delete_routine,
    toggle_routine_completion,
    uncomplete_routine,
    update_routine,
)
from .streak_service import compute_streak
from .template_service import list_templates, routine_data_from_template
from .widget_service import (
    daily_progress,
    routine_list,
    serialize_widget_snapshot,
    upcoming_alarms,
    widget_snapshot,
)

__all__ = [
    "day_key",
    "time_slot_of",
    "weekday_code",
    "build_index",
    "is_completed",
    "compute_streak",
    "compute_analytics",
    "generate_insights",
    "compute_alarm_time",
    "expand_recurrence",
    "plan_alarms",
    "plan_routine_reschedule",
    "reschedule_all_alarms",
    "alarm_fields_changed",
    "daily_progress",
    "upcoming_alarms",
    "routine_list",
    "widget_snapshot",
    "serialize_widget_snapshot",
    "NotificationScheduler",
    "apply_alarm_plan",
    "list_templates",
    "routine_data_from_template",
    "add_routine",
    "update_routine",
    "delete_routine",
    "complete_routine",
    "uncomplete_routine",
    "toggle_routine_completion",
]
