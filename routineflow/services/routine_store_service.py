"""Session-backed routine and completion log store.

The store is the enforcement point for the one-log-per-routine-per-day rule:
completion queries for an existing log before inserting, and the unique
constraint on ``(routine_id, date_key)`` resolves concurrent double taps.
"""

from __future__ import annotations

import datetime
import logging
from enum import Enum
from typing import Any, Dict, List, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from routineflow.models import (
    QuickAction,
    QuickActionResult,
    Routine,
    RoutineCreate,
    RoutineLog,
    RoutineUpdate,
)
from routineflow.services.alarm_service import alarm_fields_changed
from routineflow.services.calendar_service import (
    as_utc,
    day_key,
    local_now,
    normalize_hhmm,
    parse_day_key,
)

logger = logging.getLogger(__name__)

# 日本語: NULL を許可するカラム (それ以外は None 指定を無視) / English: Nullable columns; None for any other field is ignored
_NULLABLE_FIELDS = {"description", "scheduled_time", "duration_minutes", "repeat_interval_days"}


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = {key: _enum_value(value) for key, value in fields.items()}
    if cleaned.get("scheduled_time"):
        # 日本語: 解釈可能な時刻のみ HH:mm に正規化 / English: Normalize only parseable times to HH:mm
        cleaned["scheduled_time"] = normalize_hhmm(cleaned["scheduled_time"]) or cleaned["scheduled_time"]
    return cleaned


def _resolve_day_key(date_key: Any, now: datetime.datetime | None) -> str:
    if date_key:
        return day_key(parse_day_key(date_key))
    return day_key(local_now(now))


def list_routines(db: Session, include_inactive: bool = True) -> List[Routine]:
    statement = select(Routine).order_by(Routine.sort_order)
    if not include_inactive:
        statement = statement.where(Routine.is_active == True)  # noqa: E712
    return list(db.exec(statement).all())


def list_logs(db: Session, routine_id: str | None = None) -> List[RoutineLog]:
    statement = select(RoutineLog).order_by(RoutineLog.date_key)
    if routine_id is not None:
        statement = statement.where(RoutineLog.routine_id == routine_id)
    return list(db.exec(statement).all())


def get_routine(db: Session, routine_id: str) -> Routine | None:
    return db.get(Routine, routine_id)


def add_routine(db: Session, data: RoutineCreate) -> Routine:
    max_order = db.exec(select(func.max(Routine.sort_order))).one()
    fields = _clean_fields(data.model_dump())
    routine = Routine(
        **fields,
        sort_order=(max_order if max_order is not None else -1) + 1,
        is_active=True,
    )
    db.add(routine)
    db.commit()
    db.refresh(routine)
    logger.info("Added routine %s (%s)", routine.id, routine.title)
    return routine


def update_routine(
    db: Session, routine_id: str, updates: RoutineUpdate | Dict[str, Any]
) -> Tuple[Routine | None, bool]:
    """Apply a partial update; the flag says whether alarms must be recreated."""
    routine = db.get(Routine, routine_id)
    if not routine:
        return None, False

    if isinstance(updates, RoutineUpdate):
        updates = updates.model_dump(exclude_unset=True)
    changes = {
        key: value
        for key, value in _clean_fields(updates).items()
        if hasattr(routine, key) and key not in {"id", "created_at"} and (value is not None or key in _NULLABLE_FIELDS)
    }

    reschedule_required = alarm_fields_changed(routine, changes)
    for key, value in changes.items():
        setattr(routine, key, value)
    db.add(routine)
    db.commit()
    db.refresh(routine)
    if reschedule_required:
        logger.info("Routine %s changed alarm fields; reschedule required", routine_id)
    return routine, reschedule_required


def delete_routine(db: Session, routine_id: str) -> bool:
    routine = db.get(Routine, routine_id)
    if not routine:
        return False
    # 日本語: ログは relationship の cascade で一緒に削除 / English: Logs are removed through the relationship cascade
    log_count = len(routine.logs)
    db.delete(routine)
    db.commit()
    logger.info("Deleted routine %s with %d log(s)", routine_id, log_count)
    return True


def toggle_routine_active(db: Session, routine_id: str) -> Routine | None:
    routine = db.get(Routine, routine_id)
    if not routine:
        return None
    routine.is_active = not routine.is_active
    db.add(routine)
    db.commit()
    db.refresh(routine)
    return routine


def reorder_routines(db: Session, routine_ids: List[str]) -> List[Routine]:
    positions = {routine_id: index for index, routine_id in enumerate(routine_ids)}
    for routine in db.exec(select(Routine)).all():
        if routine.id in positions:
            routine.sort_order = positions[routine.id]
            db.add(routine)
    db.commit()
    return list_routines(db)


def _find_log(db: Session, routine_id: str, key: str) -> RoutineLog | None:
    return db.exec(
        select(RoutineLog).where(RoutineLog.routine_id == routine_id, RoutineLog.date_key == key)
    ).first()


def complete_routine(
    db: Session,
    routine_id: str,
    date_key: Any = None,
    note: str | None = None,
    duration_seconds: int | None = None,
    now: datetime.datetime | None = None,
) -> RoutineLog | None:
    """Record a completion; repeating it for the same day returns the stored log."""
    if not db.get(Routine, routine_id):
        return None

    current = local_now(now)
    key = _resolve_day_key(date_key, current)
    existing = _find_log(db, routine_id, key)
    if existing:
        logger.debug("Routine %s already completed on %s", routine_id, key)
        return existing

    log = RoutineLog(
        routine_id=routine_id,
        completed_at=as_utc(current),
        date_key=key,
        duration_seconds=duration_seconds,
        note=note,
    )
    db.add(log)
    try:
        db.commit()
    except IntegrityError:
        # 日本語: 同時completeで一意制約に当たった場合は既存ログを返す / English: A concurrent completion won the unique constraint; return its log
        db.rollback()
        logger.debug("Concurrent completion of routine %s on %s", routine_id, key)
        return _find_log(db, routine_id, key)
    db.refresh(log)
    return log


def uncomplete_routine(
    db: Session, routine_id: str, date_key: Any = None, now: datetime.datetime | None = None
) -> bool:
    key = _resolve_day_key(date_key, now)
    logs = db.exec(
        select(RoutineLog).where(RoutineLog.routine_id == routine_id, RoutineLog.date_key == key)
    ).all()
    if not logs:
        return False
    for log in logs:
        db.delete(log)
    db.commit()
    return True


def toggle_routine_completion(
    db: Session, routine_id: str, now: datetime.datetime | None = None
) -> QuickActionResult:
    """Widget quick action: complete an open routine, reopen a completed one."""
    if not db.get(Routine, routine_id):
        return QuickActionResult(success=False, routine_id=routine_id, action=QuickAction.COMPLETE)

    current = local_now(now)
    if _find_log(db, routine_id, day_key(current)):
        uncomplete_routine(db, routine_id, now=current)
        return QuickActionResult(success=True, routine_id=routine_id, action=QuickAction.UNCOMPLETE)

    complete_routine(db, routine_id, now=current)
    return QuickActionResult(success=True, routine_id=routine_id, action=QuickAction.COMPLETE)


__all__ = [
    "list_routines",
    "list_logs",
    "get_routine",
    "add_routine",
    "update_routine",
    "delete_routine",
    "toggle_routine_active",
    "reorder_routines",
    "complete_routine",
    "uncomplete_routine",
    "toggle_routine_completion",
]
