"""Routine domain SQLModel tables."""

import datetime
import uuid

from sqlalchemy import Column, DateTime, Text, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from routineflow.models.enums import RepeatType, RoutineCategory, TimeSlot


def _new_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


# 日本語: ユーザー定義の繰り返し習慣 / English: User-defined recurring routine
class Routine(SQLModel, table=True):
    __tablename__ = "routine"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=64)
    title: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=200)
    icon: str = Field(default="", max_length=16)
    color: str = Field(default="#26A69A", max_length=16)
    # 日本語: 列挙値は文字列として保存 / English: Enum values are stored as their string value
    category: str = Field(default=RoutineCategory.CUSTOM.value, max_length=20)
    time_slot: str = Field(default=TimeSlot.MORNING.value, max_length=20)
    scheduled_time: str | None = Field(default=None, max_length=10)
    duration_minutes: int | None = Field(default=None)
    repeat_type: str = Field(default=RepeatType.DAILY.value, max_length=20)
    repeat_interval_days: int | None = Field(default=None)
    # 日本語: カンマ区切り曜日コード (mon,wed,fri) / English: Comma-separated weekday codes (mon,wed,fri)
    frequency_value: str = Field(default="", max_length=50)
    reminder_enabled: bool = Field(default=False)
    reminder_minutes_before: int = Field(default=0)
    sort_order: int = Field(default=0)
    is_active: bool = Field(default=True)
    is_from_template: bool = Field(default=False)
    template_id: str | None = Field(default=None, max_length=64)
    # 日本語: 時刻は UTC のタイムゾーン付きで保存 / English: Instants are stored as timezone-aware UTC
    created_at: datetime.datetime = Field(
        default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    logs: list["RoutineLog"] = Relationship(
        back_populates="routine", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


# 日本語: 1ルーチン1日1件の完了記録 / English: One completion record per routine per day
class RoutineLog(SQLModel, table=True):
    __tablename__ = "routine_log"
    __table_args__ = (UniqueConstraint("routine_id", "date_key", name="uq_routine_log_routine_day"),)

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=64)
    routine_id: str = Field(foreign_key="routine.id", index=True, max_length=64)
    completed_at: datetime.datetime = Field(
        default_factory=_utc_now, sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    date_key: str = Field(index=True, max_length=10)
    duration_seconds: int | None = Field(default=None)
    note: str | None = Field(default=None, sa_column=Column(Text))

    routine: Routine | None = Relationship(back_populates="logs")
