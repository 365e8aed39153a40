"""Adherence analytics routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from routineflow.core.db import get_db
from routineflow.models import AnalyticsOverview, StreakInfo
from routineflow.services.calendar_service import local_now
from routineflow.web import handlers as web_handlers

router = APIRouter()


@router.get("/api/analytics", name="api_analytics", response_model=AnalyticsOverview)
def api_analytics(date: str | None = None, db: Session = Depends(get_db)):
    return web_handlers.api_analytics(db, date, now_fn=local_now)


@router.get("/api/streak", name="api_streak", response_model=StreakInfo)
def api_streak(date: str | None = None, db: Session = Depends(get_db)):
    return web_handlers.api_streak(db, date, now_fn=local_now)
