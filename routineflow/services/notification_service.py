"""Execution of alarm plans against an OS notification collaborator."""

from __future__ import annotations

import logging
from typing import List, Protocol

from routineflow.models import AlarmApplyResult, AlarmPlan, AlarmSpec

logger = logging.getLogger(__name__)


class NotificationScheduler(Protocol):
    """Local notification backend (device OS, push bridge, test double)."""

    def schedule(self, spec: AlarmSpec) -> None: ...

    def cancel(self, trigger_id: str) -> None: ...

    def list_scheduled(self) -> List[str]: ...


def apply_alarm_plan(plan: AlarmPlan, scheduler: NotificationScheduler) -> AlarmApplyResult:
    """Cancel first, then create. Collaborator failures are logged and reported."""
    result = AlarmApplyResult()

    for trigger_id in plan.to_cancel:
        try:
            scheduler.cancel(trigger_id)
        except Exception:
            logger.exception("Cancelling trigger %s failed", trigger_id)
            result.failed.append(trigger_id)
            continue
        result.cancelled.append(trigger_id)

    for spec in plan.to_create:
        try:
            scheduler.schedule(spec)
        except Exception:
            logger.exception("Scheduling trigger %s failed", spec.trigger_id)
            result.failed.append(spec.trigger_id)
            continue
        result.scheduled.append(spec.trigger_id)

    logger.info(
        "Applied alarm plan: %d cancelled, %d scheduled, %d failed",
        len(result.cancelled),
        len(result.scheduled),
        len(result.failed),
    )
    return result


__all__ = ["NotificationScheduler", "apply_alarm_plan"]
