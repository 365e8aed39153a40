import datetime
import json

from routineflow.services.widget_service import (
    MOTIVATION_QUOTES,
    daily_motivation,
    daily_progress,
    next_alarm,
    routine_list,
    serialize_widget_snapshot,
    upcoming_alarms,
)

TODAY = "2026-03-11"


def _at(hour, minute=0):
    return datetime.datetime(2026, 3, 11, hour, minute)


def test_next_routine_moves_to_another_slot_when_current_slot_is_done(make_routine, make_log):
    afternoon = make_routine(time_slot="afternoon", sort_order=0)
    evening = make_routine(time_slot="evening", sort_order=1)

    progress = daily_progress([afternoon, evening], [make_log(afternoon, TODAY)], _at(14))

    assert progress.completed_count == 1
    assert progress.total_count == 2
    assert progress.percentage == 50
    assert progress.next_routine.id == evening.id
    assert progress.next_routine.is_completed is False


def test_next_routine_prefers_current_slot(make_routine):
    morning = make_routine(time_slot="morning", sort_order=0)
    afternoon = make_routine(time_slot="afternoon", sort_order=1)

    progress = daily_progress([afternoon, morning], [], _at(13))

    assert progress.next_routine.id == afternoon.id


def test_no_next_routine_when_everything_is_done(make_routine, make_log):
    routine = make_routine()
    progress = daily_progress([routine], [make_log(routine, TODAY), make_log(routine, "2026-03-10")], _at(9))

    assert progress.next_routine is None
    assert progress.percentage == 100
    assert progress.current_streak == 1


def test_upcoming_alarms_filter_sort_and_cap(make_routine, make_log):
    def reminder(time, **overrides):
        return make_routine(scheduled_time=time, reminder_enabled=True, reminder_minutes_before=0, **overrides)

    past = reminder("08:00")
    exact = reminder("10:00")
    later = reminder("18:30")
    soon = reminder("12:00", sort_order=99)
    done = reminder("11:00")
    muted = make_routine(scheduled_time="11:30", reminder_enabled=False)
    paused = reminder("13:00", is_active=False)
    routines = [past, exact, later, soon, done, muted, paused]
    logs = [make_log(done, TODAY)]

    alarms = upcoming_alarms(routines, logs, _at(10), limit=5)

    assert [item.routine_id for item in alarms] == [exact.id, soon.id, later.id]
    assert [item.alarm_time for item in alarms] == ["10:00", "12:00", "18:30"]
    assert len(upcoming_alarms(routines, logs, _at(10), limit=2)) == 2
    assert next_alarm(routines, logs, _at(10)).routine_id == exact.id
    assert next_alarm(routines, logs, _at(19)) is None


def test_alarm_time_accounts_for_reminder_offset(make_routine):
    routine = make_routine(scheduled_time="10:30", reminder_enabled=True, reminder_minutes_before=30)

    (item,) = upcoming_alarms([routine], [], _at(9, 45))

    assert item.alarm_time == "10:00"
    assert item.scheduled_time == "10:30"


def test_routine_list_orders_by_time_then_sort_order(make_routine, make_log):
    untimed = make_routine(scheduled_time=None, sort_order=0)
    ten = make_routine(scheduled_time="10:00", sort_order=1)
    seven_b = make_routine(scheduled_time="07:30", sort_order=5)
    seven_a = make_routine(scheduled_time="7:30", sort_order=2)
    paused = make_routine(scheduled_time="06:00", is_active=False)

    data = routine_list([untimed, ten, seven_b, seven_a, paused], [make_log(ten, TODAY)], _at(9))

    assert [item.id for item in data.routines] == [seven_a.id, seven_b.id, ten.id, untimed.id]
    assert data.completed_count == 1
    assert data.total_count == 4


def test_motivation_is_stable_for_a_day():
    first = daily_motivation("2026-03-11")

    assert first == daily_motivation(datetime.date(2026, 3, 11))
    assert first in MOTIVATION_QUOTES


def test_snapshot_serializes_every_section(make_routine, make_log):
    routine = make_routine(scheduled_time="21:00", reminder_enabled=True, time_slot="night")
    logs = [make_log(routine, "2026-03-10")]

    payload = json.loads(serialize_widget_snapshot([routine], logs, _at(20)))

    assert set(payload) == {"progress", "routines", "motivation", "next_alarm", "updated_at"}
    assert payload["progress"]["total_count"] == 1
    assert payload["progress"]["next_routine"]["time_slot"] == "night"
    assert payload["next_alarm"]["alarm_time"] == "21:00"
    assert payload["routines"]["routines"][0]["repeat_label"] == "Every day"
    assert isinstance(payload["updated_at"], int)
    assert len(logs) == 1
