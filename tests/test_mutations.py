import pytest

from habitquest.buckets import bucket_for
from habitquest.models import Status
from habitquest.mutations import (
    UnknownHabit,
    next_status,
    set_explicit,
    set_explicit_status,
    toggle,
    toggle_habit,
)
from habitquest.status import resolve_status


def test_next_status_cycle():
    assert next_status(Status.neutral) == Status.success
    assert next_status(Status.success) == Status.failure
    assert next_status(Status.failure) == Status.neutral


def test_toggle_cycles_and_repeats(make_habit):
    h = make_habit("daily")
    seen = []
    for _ in range(4):
        h = toggle_habit(h, "2024-05-01")
        seen.append(resolve_status(h, "2024-05-01"))
    assert seen == [Status.success, Status.failure, Status.neutral, Status.success]


def test_toggle_to_neutral_removes_key(make_habit):
    h = make_habit("daily", {"2024-05-01": "failure"})
    h = toggle_habit(h, "2024-05-01")
    assert h.completions == {}


def test_streak_follows_toggles(make_habit):
    h = make_habit("daily", streak=3)
    h = toggle_habit(h, "2024-05-01")
    assert h.streak == 4
    h = toggle_habit(h, "2024-05-01")
    assert h.streak == 0
    h = toggle_habit(h, "2024-05-01")
    assert h.streak == 0
    h = toggle_habit(h, "2024-05-02")
    assert h.streak == 1


def test_retoggle_in_same_week_keeps_one_record(make_habit):
    h = make_habit("weekly")
    h = toggle_habit(h, "2024-03-06")
    assert h.completions == {"2024-03-06": Status.success}

    h = toggle_habit(h, "2024-03-04")
    assert h.completions == {"2024-03-04": Status.failure}


def test_toggle_clears_stray_records_in_bucket(make_habit):
    h = make_habit("monthly", {"2024-03-02": "failure", "2024-03-20": "success", "2024-04-01": "success"})
    h = toggle_habit(h, "2024-03-11")
    assert h.completions == {"2024-03-11": Status.failure, "2024-04-01": Status.success}


def test_many_toggles_in_one_bucket_never_leave_two_keys(make_habit):
    h = make_habit("weekly")
    bucket = bucket_for("2024-03-06", "weekly")
    for day in ["2024-03-03", "2024-03-09", "2024-03-05", "2024-03-06", "2024-03-04", "2024-03-08", "2024-03-07"]:
        h = toggle_habit(h, day)
        h = set_explicit(h, day, Status.failure)
        assert len([k for k in h.completions if bucket.contains(k)]) <= 1


def test_daily_non_interference(make_habit):
    h = make_habit("daily", {"2024-05-02": "success"})
    h = set_explicit(h, "2024-05-01", Status.failure)
    assert resolve_status(h, "2024-05-02") == Status.success


def test_set_explicit_replaces_bucket_and_keeps_streak(make_habit):
    h = make_habit("weekly", {"2024-03-04": "success"}, streak=5)
    h = set_explicit(h, "2024-03-08", Status.failure)
    assert h.completions == {"2024-03-08": Status.failure}
    assert h.streak == 5


def test_set_explicit_neutral_clears_bucket(make_habit, notifier):
    h = make_habit("monthly", {"2024-03-04": "success"})
    h = set_explicit(h, "2024-03-30", Status.neutral, notifier)
    assert h.completions == {}
    assert notifier.calls == []


def test_notifier_gets_value_codes(make_habit, notifier):
    h = make_habit("daily", habit_id=7)
    h = toggle_habit(h, "2024-05-01", notifier)
    h = toggle_habit(h, "2024-05-01", notifier)
    h = toggle_habit(h, "2024-05-01", notifier)
    set_explicit(h, "2024-04-30", Status.success, notifier)
    assert notifier.calls == [(7, "2024-05-01", 1), (7, "2024-05-01", 0), (7, "2024-04-30", 1)]


def test_failing_notifier_does_not_undo_change(make_habit):
    def broken(*args):
        raise RuntimeError("offline")

    h = toggle_habit(make_habit("daily"), "2024-05-01", broken)
    assert h.completions == {"2024-05-01": Status.success}


def test_collection_toggle_leaves_input_alone(make_habit):
    habits = [make_habit("daily", habit_id=1), make_habit("weekly", habit_id=2)]
    updated = toggle(habits, 2, "2024-03-06")
    assert habits[1].completions == {}
    assert updated[1].completions == {"2024-03-06": Status.success}
    assert updated[0] is habits[0]


def test_collection_set_explicit(make_habit):
    habits = [make_habit("daily", habit_id=3)]
    updated = set_explicit_status(habits, 3, "2024-01-31", Status.failure)
    assert updated[0].completions == {"2024-01-31": Status.failure}


def test_unknown_habit_id(make_habit):
    with pytest.raises(UnknownHabit):
        toggle([make_habit()], 99, "2024-03-06")
