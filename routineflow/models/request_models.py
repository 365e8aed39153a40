"""Validated input payloads for the store and HTTP layer."""

from typing import List

from sqlmodel import Field, SQLModel

from routineflow.models.enums import RepeatType, RoutineCategory, TimeSlot


class RoutineCreate(SQLModel):
    title: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=200)
    icon: str = Field(default="", max_length=16)
    color: str = Field(default="#26A69A", max_length=16)
    category: RoutineCategory = RoutineCategory.CUSTOM
    time_slot: TimeSlot = TimeSlot.MORNING
    scheduled_time: str | None = Field(default=None, max_length=10)
    duration_minutes: int | None = Field(default=None, ge=0)
    repeat_type: RepeatType = RepeatType.DAILY
    repeat_interval_days: int | None = Field(default=None, ge=1)
    frequency_value: str = Field(default="", max_length=50)
    reminder_enabled: bool = False
    reminder_minutes_before: int = Field(default=0, ge=0)
    is_from_template: bool = False
    template_id: str | None = None


class RoutineUpdate(SQLModel):
    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=200)
    icon: str | None = Field(default=None, max_length=16)
    color: str | None = Field(default=None, max_length=16)
    category: RoutineCategory | None = None
    time_slot: TimeSlot | None = None
    scheduled_time: str | None = Field(default=None, max_length=10)
    duration_minutes: int | None = Field(default=None, ge=0)
    repeat_type: RepeatType | None = None
    repeat_interval_days: int | None = Field(default=None, ge=1)
    frequency_value: str | None = Field(default=None, max_length=50)
    reminder_enabled: bool | None = None
    reminder_minutes_before: int | None = Field(default=None, ge=0)
    is_active: bool | None = None


class CompletionRequest(SQLModel):
    date_key: str | None = None
    note: str | None = None
    duration_seconds: int | None = Field(default=None, ge=0)


class ReorderRequest(SQLModel):
    routine_ids: List[str] = Field(default_factory=list)


class AlarmPlanRequest(SQLModel):
    existing_ids: List[str] = Field(default_factory=list)
    routine_id: str | None = None
    full_resync: bool = False
