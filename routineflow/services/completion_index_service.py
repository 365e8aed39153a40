"""Day key to completed routine ids lookup built from completion logs."""

from __future__ import annotations

from typing import Dict, Iterable, Set


def build_index(logs: Iterable) -> Dict[str, Set[str]]:
    # 日本語: 同一ルーチン同日の重複ログは1件に畳み込む / English: Duplicate logs for one routine and day collapse into one entry
    index: Dict[str, Set[str]] = {}
    for log in logs:
        index.setdefault(log.date_key, set()).add(log.routine_id)
    return index


def is_completed(index: Dict[str, Set[str]], day_key: str, routine_id: str) -> bool:
    return routine_id in index.get(day_key, ())


def completed_count(index: Dict[str, Set[str]], day_key: str, routines: Iterable) -> int:
    """How many of ``routines`` were completed on ``day_key``."""
    completed = index.get(day_key)
    if not completed:
        return 0
    return sum(1 for routine in routines if routine.id in completed)


def completed_ids_for_day(logs: Iterable, day_key: str) -> Set[str]:
    return {log.routine_id for log in logs if log.date_key == day_key}


def total_completions(index: Dict[str, Set[str]]) -> int:
    return sum(len(routine_ids) for routine_ids in index.values())


__all__ = [
    "build_index",
    "is_completed",
    "completed_count",
    "completed_ids_for_day",
    "total_completions",
]
