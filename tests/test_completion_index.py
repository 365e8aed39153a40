from routineflow.services.completion_index_service import (
    build_index,
    completed_count,
    completed_ids_for_day,
    is_completed,
    total_completions,
)


def test_duplicate_logs_collapse(make_routine, make_log):
    routine = make_routine()
    logs = [make_log(routine, "2026-03-11"), make_log(routine, "2026-03-11")]

    index = build_index(logs)

    assert index == {"2026-03-11": {routine.id}}
    assert total_completions(index) == 1


def test_lookup_helpers(make_routine, make_log):
    first = make_routine()
    second = make_routine()
    other = make_routine()
    logs = [
        make_log(first, "2026-03-11"),
        make_log(second, "2026-03-11"),
        make_log(first, "2026-03-10"),
    ]
    index = build_index(logs)

    assert is_completed(index, "2026-03-11", second.id)
    assert not is_completed(index, "2026-03-10", second.id)
    assert not is_completed(index, "2026-01-01", first.id)
    assert completed_count(index, "2026-03-11", [first, other]) == 1
    assert completed_count(index, "2026-03-09", [first, second]) == 0
    assert completed_ids_for_day(logs, "2026-03-10") == {first.id}
    assert total_completions(index) == 3


def test_logs_for_unknown_routines_are_not_counted(make_routine, make_log):
    routine = make_routine()
    index = build_index([make_log("deleted-routine", "2026-03-11"), make_log(routine, "2026-03-11")])

    assert completed_count(index, "2026-03-11", [routine]) == 1
