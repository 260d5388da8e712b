from datetime import date

from habitquest.models import Frequency, Status
from habitquest.report import build_analysis_report, history_frame, report_frame

TODAY = date(2024, 3, 13)


def test_daily_windows(make_habit):
    h = make_habit(
        "daily",
        {
            "2024-02-10": "success",
            "2024-03-04": "success",
            "2024-03-11": "success",
            "2024-03-12": "success",
            "2024-03-13": "failure",
        },
    )
    (r,) = build_analysis_report([h], TODAY)
    assert r.current_week == 50
    assert r.previous_week == 14
    assert r.week_improved
    assert r.current_month == 23
    assert r.previous_month == 3
    assert r.month_improved
    assert r.trailing_90 == 4
    assert r.year_to_date == 5


def test_improved_flags_drop(make_habit):
    h = make_habit("weekly", {"2024-03-05": "success"})
    (r,) = build_analysis_report([h], TODAY)
    assert r.current_week == 0
    assert r.previous_week == 100
    assert not r.week_improved
    # March so far touches 3 weeks (1 success), February 5 weeks (none)
    assert r.month_improved


def test_daily_history_grid(make_habit):
    h = make_habit("daily", {"2024-02-10": "success", "2024-03-04": "success", "2024-03-13": "failure"})
    (r,) = build_analysis_report([h], TODAY)
    assert len(r.history) == 28
    assert r.history[0].start == date(2024, 2, 15)
    assert r.history[-1].status == Status.failure
    assert r.history_successes == 1


def test_weekly_and_monthly_history(make_habit):
    weekly = make_habit("weekly", {"2024-03-11": "success"}, habit_id=1)
    monthly = make_habit("monthly", {"2024-02-10": "failure", "2023-04-30": "success"}, habit_id=2)
    rw, rm = build_analysis_report([weekly, monthly], TODAY)

    assert len(rw.history) == 12
    assert rw.history[0].start == date(2023, 12, 24)
    assert rw.history[-1].status == Status.success

    assert len(rm.history) == 12
    assert rm.history[0].status == Status.success
    assert rm.history[-2].status == Status.failure
    assert rm.history[-1].status == Status.neutral
    assert rm.frequency == Frequency.monthly


def test_frames(make_habit):
    reports = build_analysis_report(
        [make_habit("daily", habit_id=1), make_habit("monthly", habit_id=2, name="Budget review")], TODAY
    )
    table = report_frame(reports)
    assert list(table["habit"]) == ["Habit 1", "Budget review"]
    assert "year_to_date" in table.columns

    grid = history_frame(reports[0])
    assert len(grid) == 28
    assert grid["col"].max() == 6
    assert grid["row"].max() == 3
    assert set(grid["status"]) == {"neutral"}

    monthly_grid = history_frame(reports[1])
    assert monthly_grid["row"].max() == 1
