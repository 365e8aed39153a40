"""Read-only value objects returned by the engine."""

import datetime
from typing import Any, Dict, List

from sqlmodel import Field, SQLModel

from routineflow.models.enums import (
    AlarmTriggerType,
    QuickAction,
    RoutineCategory,
    TimeSlot,
    WeekdayCode,
)


class DailyStats(SQLModel):
    date_key: str
    completed_count: int
    total_count: int
    rate: int


class CategoryStats(SQLModel):
    category: RoutineCategory
    label: str
    count: int
    completed_count: int
    rate: int


class TimeSlotStats(SQLModel):
    time_slot: TimeSlot
    label: str
    count: int
    completed_count: int
    rate: int


class StreakInfo(SQLModel):
    current: int = 0
    longest: int = 0
    last_active_date: str = ""


class AnalyticsOverview(SQLModel):
    today_key: str
    today_rate: int
    today_completed: int
    today_total: int
    weekly_avg_rate: int
    monthly_avg_rate: int
    current_streak: int
    longest_streak: int
    last_active_date: str
    total_completions: int
    weekly_trend: List[DailyStats] = Field(default_factory=list)
    category_stats: List[CategoryStats] = Field(default_factory=list)
    time_slot_stats: List[TimeSlotStats] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)


# 日本語: OS 通知にそのまま渡せる解決済みトリガー / English: Fully resolved trigger, ready for OS scheduling
class AlarmSpec(SQLModel):
    trigger_id: str
    routine_id: str
    trigger_type: AlarmTriggerType
    hour: int
    minute: int
    alarm_time: str
    repeats: bool = True
    weekday: WeekdayCode | None = None
    fire_date: datetime.date | None = None
    anchor_date: datetime.date | None = None
    interval_days: int | None = None
    title: str = ""
    body: str = ""
    data: Dict[str, Any] = Field(default_factory=dict)


class AlarmPlan(SQLModel):
    to_cancel: List[str] = Field(default_factory=list)
    to_create: List[AlarmSpec] = Field(default_factory=list)


class AlarmApplyResult(SQLModel):
    cancelled: List[str] = Field(default_factory=list)
    scheduled: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)


class WidgetRoutineItem(SQLModel):
    id: str
    title: str
    icon: str
    color: str
    is_completed: bool
    time_slot: TimeSlot
    scheduled_time: str | None = None
    reminder_enabled: bool = False
    duration_minutes: int | None = None
    repeat_label: str | None = None


class WidgetAlarmItem(SQLModel):
    routine_id: str
    routine_title: str
    routine_icon: str
    routine_color: str
    scheduled_time: str
    reminder_minutes_before: int
    alarm_time: str


class DailyProgressWidgetData(SQLModel):
    completed_count: int
    total_count: int
    percentage: int
    current_streak: int
    next_routine: WidgetRoutineItem | None = None
    upcoming_alarms: List[WidgetAlarmItem] = Field(default_factory=list)


class RoutineListWidgetData(SQLModel):
    routines: List[WidgetRoutineItem] = Field(default_factory=list)
    completed_count: int = 0
    total_count: int = 0


class MotivationQuote(SQLModel):
    text: str
    author: str


class WidgetSnapshot(SQLModel):
    progress: DailyProgressWidgetData
    routines: RoutineListWidgetData
    motivation: MotivationQuote
    next_alarm: WidgetAlarmItem | None = None
    updated_at: int


class QuickActionResult(SQLModel):
    success: bool
    routine_id: str
    action: QuickAction
