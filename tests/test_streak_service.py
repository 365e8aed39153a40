import datetime

from routineflow.services.calendar_service import shift_day_key
from routineflow.services.completion_index_service import build_index
from routineflow.services.streak_service import compute_streak, is_active_day

TODAY = "2026-03-11"


def _day(offset):
    return shift_day_key(TODAY, -offset)


def test_no_active_routines_gives_empty_streak(make_log):
    info = compute_streak([], build_index([make_log("r-x", TODAY)]), TODAY)

    assert info.current == 0
    assert info.longest == 0
    assert info.last_active_date == ""


def test_half_done_day_counts_and_empty_today_falls_back_to_yesterday(make_routine, make_log):
    first = make_routine()
    second = make_routine()
    logs = [
        make_log(first, _day(2)),
        make_log(second, _day(2)),
        make_log(first, _day(1)),
    ]

    info = compute_streak([first, second], build_index(logs), TODAY)

    assert info.current == 1
    assert info.longest == 2
    assert info.last_active_date == _day(1)


def test_current_is_taken_at_today_only(make_routine, make_log):
    routine = make_routine()
    logs = [make_log(routine, _day(offset)) for offset in range(3)]

    info = compute_streak([routine], build_index(logs), TODAY)

    assert info.current == 1
    assert info.longest == 3
    assert info.last_active_date == TODAY


def test_longest_can_come_from_an_older_run(make_routine, make_log):
    routine = make_routine()
    offsets = [0] + list(range(5, 9))
    logs = [make_log(routine, _day(offset)) for offset in offsets]

    info = compute_streak([routine], build_index(logs), TODAY)

    assert info.current == 1
    assert info.longest == 4


def test_gap_of_two_days_breaks_current(make_routine, make_log):
    routine = make_routine()
    logs = [make_log(routine, _day(offset)) for offset in (2, 3, 4)]

    info = compute_streak([routine], build_index(logs), TODAY)

    assert info.current == 0
    assert info.longest == 3
    assert info.last_active_date == _day(2)


def test_denominator_is_todays_active_routine_count(make_routine, make_log):
    routines = [make_routine() for _ in range(4)]
    index = build_index([make_log(routines[0], _day(1))])

    assert not is_active_day(index, _day(1), routines)
    assert is_active_day(index, _day(1), routines[:2])


def test_below_threshold_today_does_not_reset_yesterday(make_routine, make_log):
    routines = [make_routine() for _ in range(3)]
    logs = [make_log(routines[0], TODAY)]
    logs += [make_log(routine, _day(1)) for routine in routines[:2]]

    info = compute_streak(routines, build_index(logs), TODAY)

    assert info.current == 1
    assert info.last_active_date == _day(1)


def test_days_outside_window_are_ignored(make_routine, make_log):
    routine = make_routine()
    index = build_index([make_log(routine, _day(365)), make_log(routine, _day(366))])

    info = compute_streak([routine], index, TODAY)

    assert info.longest == 0
    assert info.last_active_date == ""


def test_adding_a_completion_never_lowers_longest(make_routine, make_log):
    routine = make_routine()
    logs = [make_log(routine, _day(offset)) for offset in (1, 2, 5)]
    before = compute_streak([routine], build_index(logs), TODAY)

    logs.append(make_log(routine, _day(3)))
    after = compute_streak([routine], build_index(logs), TODAY)

    assert after.longest >= before.longest
    assert after.longest >= after.current
    assert after.longest == 3
    assert after.current == 1


def test_today_accepts_a_date(make_routine, make_log):
    routine = make_routine()
    info = compute_streak([routine], build_index([make_log(routine, TODAY)]), datetime.date(2026, 3, 11))

    assert info.current == 1
