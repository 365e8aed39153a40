"""Alarm planning routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from routineflow.core.db import get_db
from routineflow.models import AlarmPlan, AlarmPlanRequest
from routineflow.services.calendar_service import local_now
from routineflow.web import handlers as web_handlers

# 日本語: 端末側で実行する取消/作成プランを返す / English: Returns cancel/create plans that the device executes
router = APIRouter()


@router.post("/api/alarms/plan", name="api_alarm_plan", response_model=AlarmPlan)
def api_alarm_plan(payload: AlarmPlanRequest, db: Session = Depends(get_db)):
    return web_handlers.api_alarm_plan(db, payload, now_fn=local_now)
