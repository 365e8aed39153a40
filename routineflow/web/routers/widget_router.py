"""Home-screen widget projection routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from routineflow.core.db import get_db
from routineflow.models import DailyProgressWidgetData, RoutineListWidgetData, WidgetSnapshot
from routineflow.services.calendar_service import local_now
from routineflow.web import handlers as web_handlers

router = APIRouter()


@router.get("/api/widget/progress", name="api_widget_progress", response_model=DailyProgressWidgetData)
def api_widget_progress(db: Session = Depends(get_db)):
    return web_handlers.api_widget_progress(db, now_fn=local_now)


@router.get("/api/widget/routines", name="api_widget_routines", response_model=RoutineListWidgetData)
def api_widget_routines(db: Session = Depends(get_db)):
    return web_handlers.api_widget_routines(db, now_fn=local_now)


@router.get("/api/widget/snapshot", name="api_widget_snapshot", response_model=WidgetSnapshot)
def api_widget_snapshot(db: Session = Depends(get_db)):
    return web_handlers.api_widget_snapshot(db, now_fn=local_now)
