"""Closed enumerations shared by the tables and the engine."""

from __future__ import annotations

from enum import Enum


class TimeSlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class RoutineCategory(str, Enum):
    EXERCISE = "exercise"
    SLEEP = "sleep"
    MEDITATION = "meditation"
    DIET = "diet"
    WATER = "water"
    SKINCARE = "skincare"
    JOURNAL = "journal"
    CUSTOM = "custom"


class RepeatType(str, Enum):
    ONCE = "once"
    DAILY = "daily"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    SPECIFIC_DAYS = "specific_days"
    INTERVAL = "interval"


class WeekdayCode(str, Enum):
    # 日本語: date.weekday() と同じ並び (0=月) / English: Same order as date.weekday() (0=Mon)
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"


class AlarmTriggerType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    INTERVAL = "interval"
    DATE = "date"


class QuickAction(str, Enum):
    COMPLETE = "complete"
    UNCOMPLETE = "uncomplete"


TIME_SLOT_ORDER = list(TimeSlot)

TIME_SLOT_LABELS = {
    TimeSlot.MORNING: "Morning",
    TimeSlot.AFTERNOON: "Afternoon",
    TimeSlot.EVENING: "Evening",
    TimeSlot.NIGHT: "Night",
}

CATEGORY_LABELS = {
    RoutineCategory.EXERCISE: "Exercise",
    RoutineCategory.SLEEP: "Sleep",
    RoutineCategory.MEDITATION: "Meditation",
    RoutineCategory.DIET: "Diet",
    RoutineCategory.WATER: "Hydration",
    RoutineCategory.SKINCARE: "Skincare",
    RoutineCategory.JOURNAL: "Journal",
    RoutineCategory.CUSTOM: "Other",
}

WEEKDAY_CODES = list(WeekdayCode)
