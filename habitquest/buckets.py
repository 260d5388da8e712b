"""
Date buckets: which day / Sunday-start week / calendar month a date belongs to.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List

from .models import DateLike, Frequency, as_date


@dataclass(frozen=True)
class Bucket:
    """
    Inclusive [start, end] range. `key` is the ISO string of `start`.
    """

    start: date
    end: date

    @property
    def key(self) -> str:
        return self.start.isoformat()

    @property
    def end_key(self) -> str:
        return self.end.isoformat()

    def contains(self, day: str) -> bool:
        # 'YYYY-MM-DD' strings sort like the dates they name
        return self.key <= day <= self.end_key

    def __len__(self) -> int:
        return (self.end - self.start).days + 1


def week_start(d: date) -> date:
    """
    Most recent Sunday on or before d.
    """
    # date.weekday(): Mon=0 .. Sun=6, shifted so Sunday=0
    return d - timedelta(days=(d.weekday() + 1) % 7)


def month_bounds(d: date) -> tuple[date, date]:
    start = d.replace(day=1)
    # next month start
    if start.month == 12:
        nm = start.replace(year=start.year + 1, month=1, day=1)
    else:
        nm = start.replace(month=start.month + 1, day=1)
    end = nm - timedelta(days=1)
    return start, end


def add_months(d: date, months: int) -> date:
    """
    First day of the month `months` away from d's month.
    """
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def bucket_for(day: DateLike, frequency: Frequency) -> Bucket:
    d = as_date(day)
    freq = Frequency(frequency)
    if freq is Frequency.daily:
        return Bucket(d, d)
    if freq is Frequency.weekly:
        start = week_start(d)
        return Bucket(start, start + timedelta(days=6))
    start, end = month_bounds(d)
    return Bucket(start, end)


def next_bucket(bucket: Bucket, frequency: Frequency) -> Bucket:
    return bucket_for(bucket.end + timedelta(days=1), frequency)


def daterange(start: date, end: date) -> List[date]:
    """
    Inclusive date range.
    """
    days = []
    cur = start
    while cur <= end:
        days.append(cur)
        cur += timedelta(days=1)
    return days


def buckets_between(start: DateLike, end: DateLike, frequency: Frequency) -> List[Bucket]:
    """
    Every bucket that overlaps [start, end], walking from the bucket of `start`.
    Empty when end < start.
    """
    first, last = as_date(start), as_date(end)
    if last < first:
        return []
    out = []
    cur = bucket_for(first, frequency)
    while cur.start <= last:
        out.append(cur)
        cur = next_bucket(cur, frequency)
    return out


def last_buckets(today: DateLike, frequency: Frequency, count: int) -> List[Bucket]:
    """
    The `count` buckets ending with the one containing `today`, oldest first.
    """
    d = as_date(today)
    freq = Frequency(frequency)
    out = []
    cur = bucket_for(d, freq)
    for _ in range(count):
        out.append(cur)
        cur = bucket_for(cur.start - timedelta(days=1), freq)
    out.reverse()
    return out
