import datetime

import pytest

from routineflow.models import AlarmTriggerType, RepeatType, WeekdayCode
from routineflow.services.alarm_service import (
    alarm_fields_changed,
    belongs_to_routine,
    compute_alarm_time,
    expand_recurrence,
    parse_weekdays,
    plan_alarms,
    plan_routine_reschedule,
    repeat_label,
    reschedule_all_alarms,
)

NOW = datetime.datetime(2026, 3, 11, 7, 0)


def _reminder(make_routine, **overrides):
    fields = {"scheduled_time": "08:00", "reminder_enabled": True, "reminder_minutes_before": 0}
    fields.update(overrides)
    return make_routine(**fields)


@pytest.mark.parametrize(
    "scheduled,before,expected",
    [
        ("07:30", 10, "07:20"),
        ("07:05", 10, "06:55"),
        ("10:30", 90, "09:00"),
        ("00:10", 15, "23:55"),
        ("7:00", 0, "07:00"),
        ("07:00", None, "07:00"),
        ("bad", 5, None),
    ],
)
def test_compute_alarm_time(scheduled, before, expected):
    assert compute_alarm_time(scheduled, before) == expected


def test_daily_routine_has_single_repeating_trigger(make_routine):
    routine = _reminder(make_routine, id="abc", reminder_minutes_before=15, duration_minutes=10, title="Stretch")

    specs = expand_recurrence(routine, NOW)

    assert len(specs) == 1
    spec = specs[0]
    assert spec.trigger_id == "routine_abc"
    assert spec.trigger_type == AlarmTriggerType.DAILY
    assert (spec.hour, spec.minute, spec.alarm_time) == (7, 45, "07:45")
    assert spec.repeats is True
    assert spec.data == {"routine_id": "abc", "type": "routine_alarm"}
    assert "Stretch" in spec.body and "(10 min)" in spec.body


def test_specific_days_produce_one_trigger_per_day(make_routine):
    routine = _reminder(make_routine, id="abc", repeat_type="specific_days", frequency_value="mon,wed,fri")

    specs = expand_recurrence(routine, NOW)

    assert [spec.trigger_id for spec in specs] == ["routine_abc_mon", "routine_abc_wed", "routine_abc_fri"]
    assert [spec.weekday for spec in specs] == [WeekdayCode.MON, WeekdayCode.WED, WeekdayCode.FRI]
    assert all(spec.trigger_type == AlarmTriggerType.WEEKLY for spec in specs)


def test_weekdays_and_weekends_shorthands(make_routine):
    weekdays = expand_recurrence(_reminder(make_routine, repeat_type="weekdays"), NOW)
    weekends = expand_recurrence(_reminder(make_routine, repeat_type="weekends"), NOW)

    assert len(weekdays) == 5
    assert [spec.weekday for spec in weekends] == [WeekdayCode.SAT, WeekdayCode.SUN]


def test_midnight_wrap_keeps_trigger_weekday(make_routine):
    routine = _reminder(
        make_routine,
        scheduled_time="00:10",
        reminder_minutes_before=15,
        repeat_type="specific_days",
        frequency_value="tue",
    )

    (spec,) = expand_recurrence(routine, NOW)

    assert spec.alarm_time == "23:55"
    assert spec.weekday == WeekdayCode.TUE


@pytest.mark.parametrize(
    "overrides",
    [
        {"reminder_enabled": False},
        {"is_active": False},
        {"scheduled_time": None},
        {"scheduled_time": "25:00"},
        {"repeat_type": "interval", "repeat_interval_days": None},
        {"repeat_type": "interval", "repeat_interval_days": 0},
        {"repeat_type": "interval", "repeat_interval_days": -2},
        {"repeat_type": "specific_days", "frequency_value": ""},
        {"repeat_type": "specific_days", "frequency_value": "someday"},
    ],
)
def test_ineligible_routines_yield_no_triggers(make_routine, overrides):
    assert expand_recurrence(_reminder(make_routine, **overrides), NOW) == []


def test_interval_fires_on_next_anchor_multiple(make_routine):
    routine = _reminder(
        make_routine,
        id="abc",
        scheduled_time="09:00",
        repeat_type="interval",
        repeat_interval_days=3,
        created_at=datetime.datetime(2026, 3, 1, 8, 0),
    )

    (spec,) = expand_recurrence(routine, NOW)

    assert spec.trigger_id == "routine_abc_interval"
    assert spec.anchor_date == datetime.date(2026, 3, 1)
    assert spec.interval_days == 3
    assert spec.fire_date == datetime.date(2026, 3, 13)


def test_interval_skips_today_when_alarm_already_passed(make_routine):
    routine = _reminder(
        make_routine,
        scheduled_time="09:00",
        repeat_type="interval",
        repeat_interval_days=3,
        created_at=datetime.datetime(2026, 3, 1, 8, 0),
    )

    before = expand_recurrence(routine, datetime.datetime(2026, 3, 10, 8, 0))[0]
    after = expand_recurrence(routine, datetime.datetime(2026, 3, 10, 10, 0))[0]

    assert before.fire_date == datetime.date(2026, 3, 10)
    assert after.fire_date == datetime.date(2026, 3, 13)


@pytest.mark.parametrize(
    "created_at",
    [
        datetime.datetime(2026, 3, 1, 20, 0, tzinfo=datetime.timezone.utc),
        datetime.datetime(2026, 3, 1, 20, 0),
    ],
)
def test_interval_anchor_uses_configured_zone(make_routine, monkeypatch, created_at):
    monkeypatch.setenv("ROUTINEFLOW_TIMEZONE", "Asia/Tokyo")
    routine = _reminder(
        make_routine,
        scheduled_time="10:00",
        repeat_type="interval",
        repeat_interval_days=3,
        created_at=created_at,
    )

    (spec,) = expand_recurrence(routine, datetime.datetime(2026, 3, 11, 0, 0, tzinfo=datetime.timezone.utc))

    assert spec.anchor_date == datetime.date(2026, 3, 2)
    assert spec.fire_date == datetime.date(2026, 3, 11)


def test_once_fires_today_or_tomorrow(make_routine):
    routine = _reminder(make_routine, id="abc", scheduled_time="09:00", repeat_type="once")

    morning = expand_recurrence(routine, datetime.datetime(2026, 3, 11, 8, 0))[0]
    late = expand_recurrence(routine, datetime.datetime(2026, 3, 11, 10, 0))[0]

    assert morning.trigger_id == "routine_abc_once"
    assert morning.trigger_type == AlarmTriggerType.DATE
    assert morning.repeats is False
    assert morning.fire_date == datetime.date(2026, 3, 11)
    assert late.fire_date == datetime.date(2026, 3, 12)


def test_trigger_ownership_does_not_over_match():
    assert belongs_to_routine("routine_a", "a")
    assert belongs_to_routine("routine_a_mon", "a")
    assert not belongs_to_routine("routine_ab", "a")
    assert not belongs_to_routine("routine_ab_mon", "a")
    assert belongs_to_routine("routine_a_interval", "a")
    assert belongs_to_routine("routine_a_once", "a")
    assert not belongs_to_routine("routine_a_b", "a")
    assert not belongs_to_routine("routine_a_b_mon", "a")


def test_plan_leaves_triggers_of_routines_with_a_longer_id(make_routine):
    shorter = _reminder(make_routine, id="a")
    existing = ["routine_a_fri", "routine_a_b", "routine_a_b_fri"]

    plan = plan_routine_reschedule(shorter, existing, NOW)

    assert plan.to_cancel == ["routine_a_fri"]


def test_plan_cancels_only_the_routines_own_triggers(make_routine):
    routine = _reminder(make_routine, id="a")
    existing = ["routine_a", "routine_a_mon", "routine_ab", "routine_b", "other_1", "routine_a"]

    plan = plan_alarms([routine], existing, NOW)

    assert plan.to_cancel == ["routine_a", "routine_a_mon"]
    assert [spec.trigger_id for spec in plan.to_create] == ["routine_a"]


def test_edit_from_specific_days_to_daily_cancels_every_old_trigger(make_routine):
    routine = _reminder(make_routine, id="a", repeat_type="daily")
    existing = ["routine_a_mon", "routine_a_wed", "routine_a_fri"]

    plan = plan_routine_reschedule(routine, existing, NOW)

    assert plan.to_cancel == existing
    assert [spec.trigger_id for spec in plan.to_create] == ["routine_a"]


def test_disabling_reminder_only_cancels(make_routine):
    routine = _reminder(make_routine, id="a", reminder_enabled=False)

    plan = plan_routine_reschedule(routine, ["routine_a"], NOW)

    assert plan.to_cancel == ["routine_a"]
    assert plan.to_create == []


def test_full_resync_cancels_orphans_and_keeps_foreign_ids(make_routine):
    routines = [_reminder(make_routine, id="a"), _reminder(make_routine, id="b", repeat_type="weekends")]
    existing = ["routine_a", "routine_deleted_mon", "calendar_reminder_7"]

    first = reschedule_all_alarms(routines, existing, NOW)
    second = reschedule_all_alarms(routines, existing, NOW)

    assert first.to_cancel == ["routine_a", "routine_deleted_mon"]
    assert [spec.trigger_id for spec in first.to_create] == ["routine_a", "routine_b_sat", "routine_b_sun"]
    assert first.model_dump() == second.model_dump()


def test_parse_weekdays_accepts_several_spellings():
    assert parse_weekdays("Mon, wednesday ,5,mon") == [WeekdayCode.MON, WeekdayCode.WED, WeekdayCode.SAT]
    assert parse_weekdays(None) == []


def test_repeat_label(make_routine):
    assert repeat_label(make_routine(repeat_type="daily")) == "Every day"
    assert repeat_label(make_routine(repeat_type="interval", repeat_interval_days=3)) == "Every 3 days"
    assert repeat_label(make_routine(repeat_type="specific_days", frequency_value="mon,fri")) == "Mon, Fri"


def test_alarm_fields_changed(make_routine):
    routine = _reminder(make_routine)

    assert not alarm_fields_changed(routine, {"title": "Renamed"})
    assert not alarm_fields_changed(routine, {"scheduled_time": "08:00"})
    assert alarm_fields_changed(routine, {"scheduled_time": "08:30"})
    assert alarm_fields_changed(routine, {"repeat_type": RepeatType.WEEKDAYS})
    assert not alarm_fields_changed(routine, {"repeat_type": RepeatType.DAILY})
