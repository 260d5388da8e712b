"""
Analysis report: per-habit window comparisons and a fixed-length history grid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Sequence

import pandas as pd

from .buckets import add_months, last_buckets, week_start
from .metrics import rate_in_range
from .models import DateLike, Frequency, Habit, HabitType, Status, as_date
from .status import resolve_in_bucket

HISTORY_LENGTHS = {
    Frequency.daily: 28,
    Frequency.weekly: 12,
    Frequency.monthly: 12,
}

GRID_COLUMNS = {
    Frequency.daily: 7,
    Frequency.weekly: 6,
    Frequency.monthly: 6,
}


@dataclass(frozen=True)
class HistoryCell:
    start: date
    end: date
    status: Status


@dataclass(frozen=True)
class HabitReport:
    habit_id: int
    name: str
    category: str
    frequency: Frequency
    type: HabitType
    current_week: int
    previous_week: int
    current_month: int
    previous_month: int
    trailing_90: int
    year_to_date: int
    history: List[HistoryCell] = field(default_factory=list)

    @property
    def week_improved(self) -> bool:
        return self.current_week >= self.previous_week

    @property
    def month_improved(self) -> bool:
        return self.current_month >= self.previous_month

    @property
    def history_successes(self) -> int:
        return sum(1 for c in self.history if c.status == Status.success)


def history_cells(habit: Habit, today: DateLike) -> List[HistoryCell]:
    freq = Frequency(habit.frequency)
    return [
        HistoryCell(b.start, b.end, resolve_in_bucket(habit, b))
        for b in last_buckets(today, freq, HISTORY_LENGTHS[freq])
    ]


def habit_report(habit: Habit, today: DateLike) -> HabitReport:
    d = as_date(today)
    ws = week_start(d)
    ms = d.replace(day=1)
    return HabitReport(
        habit_id=habit.id,
        name=habit.name,
        category=habit.category,
        frequency=Frequency(habit.frequency),
        type=HabitType(habit.type),
        current_week=rate_in_range(habit, ws, d),
        previous_week=rate_in_range(habit, ws - timedelta(days=7), ws - timedelta(days=1)),
        current_month=rate_in_range(habit, ms, d),
        previous_month=rate_in_range(habit, add_months(ms, -1), ms - timedelta(days=1)),
        trailing_90=rate_in_range(habit, d - timedelta(days=89), d),
        year_to_date=rate_in_range(habit, date(d.year, 1, 1), d),
        history=history_cells(habit, d),
    )


def build_analysis_report(habits: Sequence[Habit], today: Optional[DateLike] = None) -> List[HabitReport]:
    d = as_date(today) if today is not None else date.today()
    return [habit_report(h, d) for h in habits]


def report_frame(reports: Sequence[HabitReport]) -> pd.DataFrame:
    """
    One row per habit, for tables.
    """
    rows = [
        {
            "id": r.habit_id,
            "habit": r.name,
            "category": r.category,
            "frequency": r.frequency.value,
            "this_week": r.current_week,
            "last_week": r.previous_week,
            "week_improved": r.week_improved,
            "this_month": r.current_month,
            "last_month": r.previous_month,
            "month_improved": r.month_improved,
            "last_90_days": r.trailing_90,
            "year_to_date": r.year_to_date,
        }
        for r in reports
    ]
    return pd.DataFrame(rows)


def history_frame(report: HabitReport) -> pd.DataFrame:
    """
    Build a dataframe for a grid chart of the history cells.

    Columns:
      - start, end (date)
      - status ('success' / 'failure' / 'neutral')
      - row, col (grid position, oldest cell top-left)
    """
    width = GRID_COLUMNS[report.frequency]
    rows = []
    for i, cell in enumerate(report.history):
        rows.append(
            {
                "start": cell.start,
                "end": cell.end,
                "status": cell.status.value,
                "row": i // width,
                "col": i % width,
            }
        )
    return pd.DataFrame(rows, columns=["start", "end", "status", "row", "col"])
