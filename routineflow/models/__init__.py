"""SQLModel exports for RoutineFlow."""

from .enums import (
    CATEGORY_LABELS,
    TIME_SLOT_LABELS,
    TIME_SLOT_ORDER,
    WEEKDAY_CODES,
    AlarmTriggerType,
    QuickAction,
    RepeatType,
    RoutineCategory,
    TimeSlot,
    WeekdayCode,
)
from .request_models import (
    AlarmPlanRequest,
    CompletionRequest,
    ReorderRequest,
    RoutineCreate,
    RoutineUpdate,
)
from .routine_models import Routine, RoutineLog
from .view_models import (
    AlarmApplyResult,
    AlarmPlan,
    AlarmSpec,
    AnalyticsOverview,
    CategoryStats,
    DailyProgressWidgetData,
    DailyStats,
    MotivationQuote,
    QuickActionResult,
    RoutineListWidgetData,
    StreakInfo,
    TimeSlotStats,
    WidgetAlarmItem,
    WidgetRoutineItem,
    WidgetSnapshot,
)

__all__ = [
    "Routine",
    "RoutineLog",
    "TimeSlot",
    "RoutineCategory",
    "RepeatType",
    "WeekdayCode",
    "AlarmTriggerType",
    "QuickAction",
    "TIME_SLOT_ORDER",
    "TIME_SLOT_LABELS",
    "CATEGORY_LABELS",
    "WEEKDAY_CODES",
    "RoutineCreate",
    "RoutineUpdate",
    "CompletionRequest",
    "ReorderRequest",
    "AlarmPlanRequest",
    "DailyStats",
    "CategoryStats",
    "TimeSlotStats",
    "StreakInfo",
    "AnalyticsOverview",
    "AlarmSpec",
    "AlarmPlan",
    "AlarmApplyResult",
    "WidgetRoutineItem",
    "WidgetAlarmItem",
    "DailyProgressWidgetData",
    "RoutineListWidgetData",
    "MotivationQuote",
    "WidgetSnapshot",
    "QuickActionResult",
]
