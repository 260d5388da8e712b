"""
Data model: habits, tags and the tri-state status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Union


class Status(str, Enum):
    success = "success"
    failure = "failure"
    neutral = "neutral"


class Frequency(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class HabitType(str, Enum):
    # Display polarity only, never used by resolution or rates.
    positive = "positive"
    negative = "negative"


DateLike = Union[date, str]


def as_date(value: DateLike) -> date:
    """
    Accept a date or a 'YYYY-MM-DD' string. Raises ValueError on bad strings.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


@dataclass(frozen=True)
class Habit:
    id: int
    name: str
    category: str
    frequency: Frequency = Frequency.daily
    type: HabitType = HabitType.positive
    # 'YYYY-MM-DD' -> success/failure. Missing key means neutral.
    completions: Dict[str, Status] = field(default_factory=dict)
    streak: int = 0
    created_at: str = field(default_factory=lambda: datetime.now().isoformat(timespec="seconds"))


@dataclass(frozen=True)
class UserTag:
    name: str
    color_index: int = 0
