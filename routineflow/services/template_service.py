"""Built-in routine templates."""

from __future__ import annotations

from typing import Any, Dict, List

from routineflow.models import RepeatType, RoutineCategory, RoutineCreate, TimeSlot

# 日本語: (id, タイトル, 説明, アイコン, カテゴリ, 時間帯, 所要分, 色) / English: (id, title, description, icon, category, slot, minutes, color)
_TEMPLATE_ROWS = [
    ("tpl_morning_water", "Glass of water after waking", "Wake your body up with a glass of water", "💧", RoutineCategory.WATER, TimeSlot.MORNING, 1, "#42A5F5"),
    ("tpl_morning_stretch", "Morning stretch", "Start the day with ten minutes of stretching", "🧘", RoutineCategory.EXERCISE, TimeSlot.MORNING, 10, "#EF5350"),
    ("tpl_morning_meditation", "Morning meditation", "Five minutes of mindfulness before the day begins", "🧘", RoutineCategory.MEDITATION, TimeSlot.MORNING, 5, "#AB47BC"),
    ("tpl_morning_skincare", "Morning skincare", "Basic skincare after washing up", "✨", RoutineCategory.SKINCARE, TimeSlot.MORNING, 5, "#EC407A"),
    ("tpl_lunch_walk", "Walk after lunch", "A fifteen minute walk to help digestion", "🚶", RoutineCategory.EXERCISE, TimeSlot.AFTERNOON, 15, "#66BB6A"),
    ("tpl_afternoon_water", "Afternoon hydration", "Keep a glass of water nearby", "💧", RoutineCategory.WATER, TimeSlot.AFTERNOON, 1, "#42A5F5"),
    ("tpl_healthy_dinner", "Balanced dinner", "Vegetables and protein on the plate", "🥗", RoutineCategory.DIET, TimeSlot.EVENING, 30, "#66BB6A"),
    ("tpl_evening_journal", "Evening journal", "Write three lines about your day", "📝", RoutineCategory.JOURNAL, TimeSlot.EVENING, 10, "#FFB300"),
    ("tpl_night_skincare", "Night skincare", "Cleanse and moisturize before bed", "✨", RoutineCategory.SKINCARE, TimeSlot.NIGHT, 10, "#EC407A"),
    ("tpl_screen_off", "Screens off before bed", "Put the phone away thirty minutes before sleeping", "😴", RoutineCategory.SLEEP, TimeSlot.NIGHT, 30, "#5C6BC0"),
]

ROUTINE_TEMPLATES: List[Dict[str, Any]] = [
    {
        "id": template_id,
        "title": title,
        "description": description,
        "icon": icon,
        "category": category,
        "time_slot": time_slot,
        "duration_minutes": duration_minutes,
        "color": color,
        "repeat_type": RepeatType.DAILY,
    }
    for template_id, title, description, icon, category, time_slot, duration_minutes, color in _TEMPLATE_ROWS
]


def list_templates() -> List[Dict[str, Any]]:
    return [dict(template) for template in ROUTINE_TEMPLATES]


def get_template(template_id: str) -> Dict[str, Any] | None:
    for template in ROUTINE_TEMPLATES:
        if template["id"] == template_id:
            return dict(template)
    return None


def routine_data_from_template(template: Dict[str, Any], overrides: Dict[str, Any] | None = None) -> RoutineCreate:
    payload = {key: value for key, value in template.items() if key != "id"}
    payload.update({key: value for key, value in (overrides or {}).items() if value is not None})
    payload["is_from_template"] = True
    payload["template_id"] = template["id"]
    return RoutineCreate.model_validate(payload)


__all__ = ["ROUTINE_TEMPLATES", "list_templates", "get_template", "routine_data_from_template"]
