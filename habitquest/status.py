"""
Resolve the effective tri-state status of a habit for a date's bucket.
"""

from __future__ import annotations

from typing import List

from .buckets import Bucket, bucket_for
from .models import DateLike, Frequency, Habit, Status


def keys_in_bucket(habit: Habit, bucket: Bucket) -> List[str]:
    return sorted(k for k in habit.completions if bucket.contains(k))


def resolve_in_bucket(habit: Habit, bucket: Bucket) -> Status:
    """
    Any success wins, then any failure, else neutral.
    """
    seen = {habit.completions[k] for k in keys_in_bucket(habit, bucket)}
    if Status.success in seen:
        return Status.success
    if Status.failure in seen:
        return Status.failure
    return Status.neutral


def resolve_status(habit: Habit, day: DateLike) -> Status:
    bucket = bucket_for(day, habit.frequency)
    if Frequency(habit.frequency) == Frequency.daily:
        return habit.completions.get(bucket.key, Status.neutral)
    return resolve_in_bucket(habit, bucket)
