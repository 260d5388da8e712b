from datetime import date

from habitquest.metrics import period_progress, rate_in_range


def test_monthly_rate_scenario(make_habit):
    h = make_habit("monthly", {"2024-01-15": "success", "2024-03-20": "success"})
    assert rate_in_range(h, date(2024, 1, 1), date(2024, 3, 31)) == 67


def test_daily_rate_counts_days(make_habit):
    h = make_habit("daily", {"2024-05-01": "success", "2024-05-02": "failure", "2024-05-03": "success"})
    assert rate_in_range(h, "2024-05-01", "2024-05-04") == 50


def test_weekly_rate_walks_from_sunday_before_start(make_habit):
    # 2024-02-26 is before the range but in the week of its first day
    h = make_habit("weekly", {"2024-02-26": "success", "2024-03-12": "success", "2024-03-05": "failure"})
    assert rate_in_range(h, "2024-03-01", "2024-03-16") == 67


def test_rounds_half_up(make_habit):
    h = make_habit("daily", {"2024-05-01": "success"})
    assert rate_in_range(h, "2024-05-01", "2024-05-08") == 13


def test_empty_range_is_zero(make_habit):
    h = make_habit("daily", {"2024-05-01": "success"})
    assert rate_in_range(h, "2024-05-02", "2024-05-01") == 0


def test_full_coverage_is_100(make_habit):
    h = make_habit("weekly", {"2024-03-03": "success", "2024-03-15": "success"})
    assert rate_in_range(h, "2024-03-03", "2024-03-16") == 100


def test_records_outside_range_do_not_matter(make_habit):
    inside = {"2024-03-05": "success"}
    a = make_habit("monthly", {**inside, "2023-01-01": "success", "2025-06-01": "failure"})
    b = make_habit("monthly", {"2025-06-01": "failure", **inside})
    c = make_habit("monthly", inside)
    rates = {rate_in_range(h, "2024-02-01", "2024-04-30") for h in (a, b, c)}
    assert rates == {33}


def test_period_progress(make_habit):
    habits = [
        make_habit("daily", {"2024-03-06": "success"}, habit_id=1),
        make_habit("weekly", {"2024-03-04": "success"}, habit_id=2),
        make_habit("monthly", {"2024-03-01": "failure"}, habit_id=3),
    ]
    assert period_progress(habits, "2024-03-06") == (2, 3, 67)
    assert period_progress([], "2024-03-06") == (0, 0, 0)
