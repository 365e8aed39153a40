"""Routine CRUD and template routes."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends
from sqlmodel import Session

from routineflow.core.db import get_db
from routineflow.models import ReorderRequest, RoutineCreate, RoutineUpdate
from routineflow.web import handlers as web_handlers

router = APIRouter()


@router.get("/api/routines", name="api_routines")
def api_routines(include_inactive: bool = True, db: Session = Depends(get_db)):
    return web_handlers.api_routines(db, include_inactive=include_inactive)


@router.post("/api/routines", name="api_create_routine", status_code=201)
def api_create_routine(payload: RoutineCreate, db: Session = Depends(get_db)):
    return web_handlers.api_create_routine(db, payload)


@router.post("/api/routines/reorder", name="api_reorder_routines")
def api_reorder_routines(payload: ReorderRequest, db: Session = Depends(get_db)):
    return web_handlers.api_reorder_routines(db, payload)


@router.patch("/api/routines/{routine_id}", name="api_update_routine")
def api_update_routine(routine_id: str, payload: RoutineUpdate, db: Session = Depends(get_db)):
    return web_handlers.api_update_routine(db, routine_id, payload)


@router.delete("/api/routines/{routine_id}", name="api_delete_routine")
def api_delete_routine(routine_id: str, db: Session = Depends(get_db)):
    return web_handlers.api_delete_routine(db, routine_id)


@router.post("/api/routines/{routine_id}/toggle-active", name="api_toggle_routine_active")
def api_toggle_routine_active(routine_id: str, db: Session = Depends(get_db)):
    return web_handlers.api_toggle_routine_active(db, routine_id)


@router.get("/api/templates", name="api_templates")
def api_templates():
    return web_handlers.api_templates()


@router.post("/api/templates/{template_id}/instantiate", name="api_instantiate_template", status_code=201)
def api_instantiate_template(
    template_id: str,
    overrides: RoutineUpdate | None = Body(default=None),
    db: Session = Depends(get_db),
):
    return web_handlers.api_instantiate_template(db, template_id, overrides)
