"""Trailing-window streak detection over the completion index."""

from __future__ import annotations

import datetime
from typing import Any, Dict, Iterable, Set

from routineflow.core.config import ACTIVE_DAY_THRESHOLD, STREAK_WINDOW_DAYS
from routineflow.models import StreakInfo
from routineflow.services.calendar_service import coerce_day, day_key
from routineflow.services.completion_index_service import completed_count


def is_active_day(index: Dict[str, Set[str]], key: str, active_routines: list) -> bool:
    total = len(active_routines)
    if total == 0:
        return False
    return completed_count(index, key, active_routines) / total >= ACTIVE_DAY_THRESHOLD


def compute_streak(active_routines: Iterable, index: Dict[str, Set[str]], today: Any = None) -> StreakInfo:
    """Current/longest streak over the last 365 days ending at ``today``.

    A day is active when at least half of the *currently* active routines were
    completed on it; the denominator never follows historical routine counts.

    ``current`` is only ever taken at today, or at yesterday while it is still
    0, so it is 0 or 1. Yesterday counts so the streak does not drop to zero
    before the user had a chance to act today.
    """
    routines = list(active_routines)
    if not routines:
        return StreakInfo(current=0, longest=0, last_active_date="")

    anchor = coerce_day(today)
    current = 0
    longest = 0
    temp_streak = 0
    last_active = ""

    for offset in range(STREAK_WINDOW_DAYS):
        key = day_key(anchor - datetime.timedelta(days=offset))
        if is_active_day(index, key, routines):
            temp_streak += 1
            # 日本語: 今日、または今日が未達なら昨日の時点でのみ current を確定 / English: current is only taken at today, or at yesterday while still 0
            if offset == 0 or (offset == 1 and current == 0):
                current = temp_streak
            if not last_active:
                last_active = key
        else:
            longest = max(longest, temp_streak)
            temp_streak = 0
    longest = max(longest, temp_streak)

    return StreakInfo(current=current, longest=longest, last_active_date=last_active)


__all__ = ["is_active_day", "compute_streak"]
