"""Adherence analytics: rates, trends, breakdowns and insights."""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Iterable, List, Set, Tuple

from routineflow.core.config import MAX_INSIGHTS, MONTHLY_WINDOW_DAYS, WEEKLY_WINDOW_DAYS
from routineflow.models import (
    CATEGORY_LABELS,
    TIME_SLOT_LABELS,
    AnalyticsOverview,
    CategoryStats,
    DailyStats,
    RoutineCategory,
    TimeSlot,
    TimeSlotStats,
)
from routineflow.services.calendar_service import coerce_day, day_key, trailing_day_keys
from routineflow.services.completion_index_service import (
    build_index,
    completed_count,
    total_completions,
)
from routineflow.services.streak_service import compute_streak

EMPTY_INSIGHT = "Add a routine to see your stats and insights!"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def completion_rate(completed: int, total: int) -> int:
    """Percentage in [0, 100]; 0 when there is nothing to complete."""
    if total <= 0:
        return 0
    return round_half_up(completed * 100 / total)


def active_routines_of(routines: Iterable) -> list:
    return [routine for routine in routines if routine.is_active]


def _group_counts(
    active_routines: list,
    today_completed: Set[str],
    key_fn: Callable[[Any], Any],
    order: Iterable,
) -> List[Tuple[Any, int, int]]:
    # 日本語: 列挙の宣言順で、ルーチンが存在するグループのみ返す / English: Groups in enum declaration order, only those holding a routine
    counts: Dict[Any, List[int]] = {}
    for routine in active_routines:
        entry = counts.setdefault(key_fn(routine), [0, 0])
        entry[0] += 1
        if routine.id in today_completed:
            entry[1] += 1
    return [(group, counts[group][0], counts[group][1]) for group in order if group in counts]


def category_breakdown(active_routines: list, today_completed: Set[str]) -> List[CategoryStats]:
    return [
        CategoryStats(
            category=category,
            label=CATEGORY_LABELS[category],
            count=total,
            completed_count=completed,
            rate=completion_rate(completed, total),
        )
        for category, total, completed in _group_counts(
            active_routines,
            today_completed,
            lambda routine: RoutineCategory(routine.category),
            RoutineCategory,
        )
    ]


def time_slot_breakdown(active_routines: list, today_completed: Set[str]) -> List[TimeSlotStats]:
    return [
        TimeSlotStats(
            time_slot=slot,
            label=TIME_SLOT_LABELS[slot],
            count=total,
            completed_count=completed,
            rate=completion_rate(completed, total),
        )
        for slot, total, completed in _group_counts(
            active_routines,
            today_completed,
            lambda routine: TimeSlot(routine.time_slot),
            TimeSlot,
        )
    ]


def _best_by_rate(stats: list):
    # 日本語: 同率の場合は先に現れた方を採用 / English: Ties keep the first occurrence
    best = None
    for item in stats:
        if best is None or item.rate > best.rate:
            best = item
    return best


def generate_insights(
    *,
    today_rate: int,
    weekly_avg_rate: int,
    streak: int,
    category_stats: List[CategoryStats],
    time_slot_stats: List[TimeSlotStats],
    total_routines: int,
) -> List[str]:
    if total_routines == 0:
        return [EMPTY_INSIGHT]

    insights: List[str] = []

    if today_rate == 100:
        insights.append("🎉 You completed every routine today! Amazing work!")
    elif today_rate >= 70:
        insights.append("👍 Almost there today! Just a little more.")
    elif today_rate > 0:
        insights.append("💪 Great start! Keep checking them off one by one.")

    if streak >= 7:
        insights.append(f"🔥 {streak}-day streak! Your consistency is shining.")
    elif streak >= 3:
        insights.append(f"✨ {streak} days in a row! A habit is taking shape.")

    if weekly_avg_rate > 0 and today_rate > weekly_avg_rate:
        insights.append("📈 Today is going better than your weekly average!")

    best_slot = _best_by_rate(time_slot_stats)
    if best_slot is not None and best_slot.rate > 0:
        insights.append(
            f"⏰ Your {best_slot.label.lower()} routines have the highest completion rate ({best_slot.rate}%)."
        )

    best_category = _best_by_rate(category_stats)
    if best_category is not None and best_category.rate > 0:
        insights.append(f"🏷️ You're doing best at {best_category.label.lower()} routines.")

    return insights[:MAX_INSIGHTS]


def compute_analytics(routines: Iterable, logs: Iterable, today: Any = None) -> AnalyticsOverview:
    active = active_routines_of(routines)
    index = build_index(logs)
    today_key = day_key(coerce_day(today))
    today_total = len(active)

    today_completed_ids = {routine.id for routine in active if routine.id in index.get(today_key, ())}
    today_completed = len(today_completed_ids)
    today_rate = completion_rate(today_completed, today_total)

    # 日本語: 過去日の分母も「今日のアクティブ数」を使う / English: Past days also use today's active count as denominator
    weekly_trend = []
    for key in trailing_day_keys(today_key, WEEKLY_WINDOW_DAYS):
        completed = completed_count(index, key, active)
        weekly_trend.append(
            DailyStats(
                date_key=key,
                completed_count=completed,
                total_count=today_total,
                rate=completion_rate(completed, today_total),
            )
        )
    weekly_avg_rate = round_half_up(sum(item.rate for item in weekly_trend) / len(weekly_trend))

    monthly_rates = [
        (completed_count(index, key, active) * 100 / today_total) if today_total > 0 else 0.0
        for key in trailing_day_keys(today_key, MONTHLY_WINDOW_DAYS)
    ]
    monthly_avg_rate = round_half_up(sum(monthly_rates) / len(monthly_rates))

    streak = compute_streak(active, index, today_key)
    category_stats = category_breakdown(active, today_completed_ids)
    time_slot_stats = time_slot_breakdown(active, today_completed_ids)

    insights = generate_insights(
        today_rate=today_rate,
        weekly_avg_rate=weekly_avg_rate,
        streak=streak.current,
        category_stats=category_stats,
        time_slot_stats=time_slot_stats,
        total_routines=today_total,
    )

    return AnalyticsOverview(
        today_key=today_key,
        today_rate=today_rate,
        today_completed=today_completed,
        today_total=today_total,
        weekly_avg_rate=weekly_avg_rate,
        monthly_avg_rate=monthly_avg_rate,
        current_streak=streak.current,
        longest_streak=streak.longest,
        last_active_date=streak.last_active_date,
        total_completions=total_completions(index),
        weekly_trend=weekly_trend,
        category_stats=category_stats,
        time_slot_stats=time_slot_stats,
        insights=insights,
    )


__all__ = [
    "EMPTY_INSIGHT",
    "round_half_up",
    "completion_rate",
    "active_routines_of",
    "category_breakdown",
    "time_slot_breakdown",
    "generate_insights",
    "compute_analytics",
]
