"""Completion log routes."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends
from sqlmodel import Session

from routineflow.core.db import get_db
from routineflow.models import CompletionRequest, QuickActionResult
from routineflow.services.calendar_service import local_now
from routineflow.web import handlers as web_handlers

# 日本語: 完了記録の追加・取消 / English: Router for recording and reverting completions
router = APIRouter()


@router.get("/api/logs", name="api_logs")
def api_logs(routine_id: str | None = None, db: Session = Depends(get_db)):
    return web_handlers.api_logs(db, routine_id)


@router.post("/api/routines/{routine_id}/complete", name="api_complete_routine")
def api_complete_routine(
    routine_id: str,
    payload: CompletionRequest | None = Body(default=None),
    db: Session = Depends(get_db),
):
    return web_handlers.api_complete_routine(db, routine_id, payload, now_fn=local_now)


@router.post("/api/routines/{routine_id}/uncomplete", name="api_uncomplete_routine")
def api_uncomplete_routine(
    routine_id: str,
    payload: CompletionRequest | None = Body(default=None),
    db: Session = Depends(get_db),
):
    return web_handlers.api_uncomplete_routine(db, routine_id, payload, now_fn=local_now)


@router.post("/api/routines/{routine_id}/quick-toggle", name="api_quick_toggle", response_model=QuickActionResult)
def api_quick_toggle(routine_id: str, db: Session = Depends(get_db)):
    # 日本語: ウィジェットからのワンタップ完了 / English: One-tap completion coming from the widget
    return web_handlers.api_quick_toggle(db, routine_id, now_fn=local_now)
