from __future__ import annotations

import os

import pytest

from habitquest.models import Frequency, Habit, HabitType, Status


@pytest.fixture
def make_habit():
    def _make(frequency="daily", completions=None, habit_id=1, streak=0, **kwargs):
        return Habit(
            id=habit_id,
            name=kwargs.pop("name", f"Habit {habit_id}"),
            category=kwargs.pop("category", "General"),
            frequency=Frequency(frequency),
            type=HabitType(kwargs.pop("type", "positive")),
            completions={k: Status(v) for k, v in (completions or {}).items()},
            streak=streak,
            **kwargs,
        )

    return _make


@pytest.fixture
def db_path(tmp_path):
    return os.path.join(str(tmp_path), "data", "test.db")


class RecordingNotifier:
    def __init__(self):
        self.calls = []

    def __call__(self, habit_id, habit_name, category, day, value):
        self.calls.append((habit_id, day, value))


@pytest.fixture
def notifier():
    return RecordingNotifier()
