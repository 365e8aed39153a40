"""HTTP handler implementations used by the feature routers."""

from __future__ import annotations

import datetime
from typing import Any, Callable, Dict

from fastapi import HTTPException
from sqlmodel import Session

from routineflow.models import (
    AlarmPlanRequest,
    CompletionRequest,
    ReorderRequest,
    Routine,
    RoutineCreate,
    RoutineLog,
    RoutineUpdate,
)
from routineflow.services import routine_store_service as store
from routineflow.services.alarm_service import (
    plan_alarms,
    plan_routine_reschedule,
    reschedule_all_alarms,
)
from routineflow.services.analytics_service import active_routines_of, compute_analytics
from routineflow.services.calendar_service import day_key, parse_day_key
from routineflow.services.completion_index_service import build_index
from routineflow.services.streak_service import compute_streak
from routineflow.services.template_service import (
    get_template,
    list_templates,
    routine_data_from_template,
)
from routineflow.services.widget_service import daily_progress, routine_list, widget_snapshot

NowFn = Callable[[], datetime.datetime]


def _serialize_routine(routine: Routine) -> Dict[str, Any]:
    return routine.model_dump(mode="json")


def _serialize_log(log: RoutineLog) -> Dict[str, Any]:
    return log.model_dump(mode="json")


def _require_routine(db: Session, routine_id: str) -> Routine:
    routine = store.get_routine(db, routine_id)
    if not routine:
        raise HTTPException(status_code=404, detail="Routine not found")
    return routine


def _day_or_400(value: str | None, now_fn: NowFn) -> str:
    if not value:
        return day_key(now_fn())
    try:
        return day_key(parse_day_key(value))
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format")


def api_routines(db: Session, include_inactive: bool = True):
    routines = store.list_routines(db, include_inactive=include_inactive)
    return {"routines": [_serialize_routine(routine) for routine in routines]}


def api_create_routine(db: Session, payload: RoutineCreate):
    routine = store.add_routine(db, payload)
    return {"routine": _serialize_routine(routine)}


def api_update_routine(db: Session, routine_id: str, payload: RoutineUpdate):
    routine, reschedule_required = store.update_routine(db, routine_id, payload)
    if not routine:
        raise HTTPException(status_code=404, detail="Routine not found")
    return {"routine": _serialize_routine(routine), "reschedule_required": reschedule_required}


def api_delete_routine(db: Session, routine_id: str):
    if not store.delete_routine(db, routine_id):
        raise HTTPException(status_code=404, detail="Routine not found")
    return {"status": "deleted", "routine_id": routine_id}


def api_toggle_routine_active(db: Session, routine_id: str):
    routine = store.toggle_routine_active(db, routine_id)
    if not routine:
        raise HTTPException(status_code=404, detail="Routine not found")
    # 日本語: 有効/無効の切替はアラーム再作成が必要 / English: Toggling activation always requires an alarm reschedule
    return {"routine": _serialize_routine(routine), "reschedule_required": True}


def api_reorder_routines(db: Session, payload: ReorderRequest):
    routines = store.reorder_routines(db, payload.routine_ids)
    return {"routines": [_serialize_routine(routine) for routine in routines]}


def api_templates():
    return {"templates": list_templates()}


def api_instantiate_template(db: Session, template_id: str, overrides: RoutineUpdate | None):
    template = get_template(template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    override_fields = overrides.model_dump(exclude_unset=True, exclude={"is_active"}) if overrides else {}
    routine = store.add_routine(db, routine_data_from_template(template, override_fields))
    return {"routine": _serialize_routine(routine)}


def api_logs(db: Session, routine_id: str | None = None):
    return {"logs": [_serialize_log(log) for log in store.list_logs(db, routine_id)]}


def api_complete_routine(db: Session, routine_id: str, payload: CompletionRequest | None, *, now_fn: NowFn):
    _require_routine(db, routine_id)
    payload = payload or CompletionRequest()
    key = _day_or_400(payload.date_key, now_fn)
    log = store.complete_routine(
        db,
        routine_id,
        date_key=key,
        note=payload.note,
        duration_seconds=payload.duration_seconds,
        now=now_fn(),
    )
    return {"log": _serialize_log(log)}


def api_uncomplete_routine(db: Session, routine_id: str, payload: CompletionRequest | None, *, now_fn: NowFn):
    _require_routine(db, routine_id)
    payload = payload or CompletionRequest()
    key = _day_or_400(payload.date_key, now_fn)
    removed = store.uncomplete_routine(db, routine_id, date_key=key)
    return {"removed": removed, "date_key": key}


def api_quick_toggle(db: Session, routine_id: str, *, now_fn: NowFn):
    result = store.toggle_routine_completion(db, routine_id, now=now_fn())
    if not result.success:
        raise HTTPException(status_code=404, detail="Routine not found")
    return result


def api_analytics(db: Session, date_str: str | None, *, now_fn: NowFn):
    today = _day_or_400(date_str, now_fn)
    return compute_analytics(store.list_routines(db), store.list_logs(db), today)


def api_streak(db: Session, date_str: str | None, *, now_fn: NowFn):
    today = _day_or_400(date_str, now_fn)
    active = active_routines_of(store.list_routines(db))
    return compute_streak(active, build_index(store.list_logs(db)), today)


def api_alarm_plan(db: Session, payload: AlarmPlanRequest, *, now_fn: NowFn):
    now = now_fn()
    if payload.full_resync:
        return reschedule_all_alarms(store.list_routines(db), payload.existing_ids, now)
    if payload.routine_id:
        routine = _require_routine(db, payload.routine_id)
        return plan_routine_reschedule(routine, payload.existing_ids, now)
    return plan_alarms(store.list_routines(db), payload.existing_ids, now)


def api_widget_progress(db: Session, *, now_fn: NowFn):
    return daily_progress(store.list_routines(db), store.list_logs(db), now_fn())


def api_widget_routines(db: Session, *, now_fn: NowFn):
    return routine_list(store.list_routines(db), store.list_logs(db), now_fn())


def api_widget_snapshot(db: Session, *, now_fn: NowFn):
    return widget_snapshot(store.list_routines(db), store.list_logs(db), now_fn())
