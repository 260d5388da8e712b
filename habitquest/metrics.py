"""
Success rates over date ranges.

Rates are coverage rates: the share of buckets in the range holding at least
one success. Daily habits count days, weekly habits count Sunday-start weeks,
monthly habits count calendar months.
"""

from __future__ import annotations

import math
from typing import Sequence

from .buckets import buckets_between, daterange
from .models import DateLike, Frequency, Habit, Status, as_date
from .status import resolve_in_bucket, resolve_status


def _percent(ok: int, total: int) -> int:
    if total == 0:
        return 0
    # half-up, 0.5 -> 1
    pct = math.floor(ok * 100 / total + 0.5)
    return max(0, min(100, pct))


def rate_in_range(habit: Habit, start: DateLike, end: DateLike) -> int:
    first, last = as_date(start), as_date(end)
    if habit.frequency == Frequency.daily:
        days = daterange(first, last)
        ok = sum(1 for d in days if habit.completions.get(d.isoformat()) == Status.success)
        return _percent(ok, len(days))

    buckets = buckets_between(first, last, habit.frequency)
    ok = sum(1 for b in buckets if resolve_in_bucket(habit, b) == Status.success)
    return _percent(ok, len(buckets))


def period_progress(habits: Sequence[Habit], today: DateLike) -> tuple[int, int, int]:
    """
    (done, total, percent) where `done` counts habits whose current bucket
    resolves to success.
    """
    total = len(habits)
    done = sum(1 for h in habits if resolve_status(h, today) == Status.success)
    return done, total, _percent(done, total)
