"""
Writes to a habit's record map.

Both operations clear the whole bucket before writing, so a weekly or monthly
habit never holds more than one record per bucket. The sink is told about
every non-neutral result after the new habit has been built.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from .buckets import bucket_for
from .models import DateLike, Frequency, Habit, Status, as_date
from .status import resolve_status
from .sync import Notifier, notify_safely

logger = logging.getLogger(__name__)

CYCLE = {
    Status.neutral: Status.success,
    Status.success: Status.failure,
    Status.failure: Status.neutral,
}


class UnknownHabit(KeyError):
    pass


def next_status(current: Status) -> Status:
    return CYCLE[Status(current)]


def _cleared(habit: Habit, day: str) -> Dict[str, Status]:
    if habit.frequency == Frequency.daily:
        return {k: v for k, v in habit.completions.items() if k != day}
    bucket = bucket_for(day, habit.frequency)
    return {k: v for k, v in habit.completions.items() if not bucket.contains(k)}


def _write(habit: Habit, day: str, status: Status) -> Dict[str, Status]:
    completions = _cleared(habit, day)
    if status != Status.neutral:
        completions[day] = status
    return completions


def _streak_after(streak: int, status: Status) -> int:
    if status == Status.success:
        return streak + 1
    if status == Status.failure:
        return 0
    return max(0, streak - 1)


def toggle_habit(habit: Habit, day: DateLike, notifier: Optional[Notifier] = None) -> Habit:
    """
    Cycle neutral -> success -> failure -> neutral, starting from the status
    the whole bucket currently resolves to.
    """
    key = as_date(day).isoformat()
    new = next_status(resolve_status(habit, key))
    updated = replace(
        habit,
        completions=_write(habit, key, new),
        streak=_streak_after(habit.streak, new),
    )
    logger.debug("toggle habit=%s day=%s -> %s (streak %s)", habit.id, key, new.value, updated.streak)
    if new != Status.neutral:
        notify_safely(notifier, updated, key, new)
    return updated


def set_explicit(
    habit: Habit,
    day: DateLike,
    status: Status,
    notifier: Optional[Notifier] = None,
) -> Habit:
    """
    Past-date logging: write `status` directly. The streak is left alone,
    it only follows toggles.
    """
    key = as_date(day).isoformat()
    status = Status(status)
    updated = replace(habit, completions=_write(habit, key, status))
    logger.debug("set habit=%s day=%s -> %s", habit.id, key, status.value)
    if status != Status.neutral:
        notify_safely(notifier, updated, key, status)
    return updated


def _apply(habits: List[Habit], habit_id: int, fn) -> List[Habit]:
    if not any(h.id == habit_id for h in habits):
        raise UnknownHabit(habit_id)
    return [fn(h) if h.id == habit_id else h for h in habits]


def toggle(
    habits: List[Habit],
    habit_id: int,
    day: DateLike,
    notifier: Optional[Notifier] = None,
) -> List[Habit]:
    return _apply(habits, habit_id, lambda h: toggle_habit(h, day, notifier))


def set_explicit_status(
    habits: List[Habit],
    habit_id: int,
    day: DateLike,
    status: Status,
    notifier: Optional[Notifier] = None,
) -> List[Habit]:
    return _apply(habits, habit_id, lambda h: set_explicit(h, day, status, notifier))
