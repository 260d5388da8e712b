"""
In-memory store owning the habit and tag collections.

Pages load a store from the database, change it through these methods (or the
functions in `mutations`), and save it back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional

from .models import DateLike, Frequency, Habit, HabitType, Status, UserTag
from .mutations import UnknownHabit, set_explicit_status, toggle
from .sync import Notifier

logger = logging.getLogger(__name__)

DEFAULT_TAG = "General"
TAG_PALETTE_SIZE = 8


class StoreError(ValueError):
    pass


class DuplicateHabitId(StoreError):
    pass


class InvalidHabit(StoreError):
    pass


class DuplicateTag(StoreError):
    pass


class LastTagError(StoreError):
    pass


@dataclass
class HabitStore:
    habits: List[Habit] = field(default_factory=list)
    tags: List[UserTag] = field(default_factory=lambda: [UserTag(DEFAULT_TAG, 0)])

    # --- Habits ---------------------------------------------------------------

    def get(self, habit_id: int) -> Habit:
        for h in self.habits:
            if h.id == habit_id:
                return h
        raise UnknownHabit(habit_id)

    def next_free_id(self) -> int:
        """
        Lowest unused positive integer.
        """
        taken = {h.id for h in self.habits}
        i = 1
        while i in taken:
            i += 1
        return i

    def add_habit(
        self,
        habit_id: int,
        name: str,
        category: str = DEFAULT_TAG,
        frequency: Frequency = Frequency.daily,
        type: HabitType = HabitType.positive,
    ) -> Habit:
        if habit_id < 1:
            raise InvalidHabit("Habit id must be a positive integer.")
        if not name.strip():
            raise InvalidHabit("Please enter a name.")
        if any(h.id == habit_id for h in self.habits):
            logger.info("Rejected duplicate habit id %s", habit_id)
            raise DuplicateHabitId(f"Id {habit_id} is already in use.")
        habit = Habit(
            id=habit_id,
            name=name.strip(),
            category=category,
            frequency=Frequency(frequency),
            type=HabitType(type),
        )
        self.habits.append(habit)
        return habit

    def update_habit(
        self,
        habit_id: int,
        name: Optional[str] = None,
        category: Optional[str] = None,
        frequency: Optional[Frequency] = None,
        type: Optional[HabitType] = None,
    ) -> Habit:
        """
        Edit non-temporal fields. Changing the frequency does not migrate
        existing records, they are read under the new buckets from now on.
        """
        habit = self.get(habit_id)
        changes = {}
        if name is not None:
            if not name.strip():
                raise InvalidHabit("Please enter a name.")
            changes["name"] = name.strip()
        if category is not None:
            changes["category"] = category
        if frequency is not None:
            changes["frequency"] = Frequency(frequency)
        if type is not None:
            changes["type"] = HabitType(type)
        updated = replace(habit, **changes)
        self.habits = [updated if h.id == habit_id else h for h in self.habits]
        return updated

    def delete_habit(self, habit_id: int) -> None:
        self.get(habit_id)
        self.habits = [h for h in self.habits if h.id != habit_id]

    def move_habit(self, habit_id: int, offset: int) -> None:
        """
        Shift a habit up (negative offset) or down in the display order.
        """
        habit = self.get(habit_id)
        idx = self.habits.index(habit)
        new_idx = max(0, min(len(self.habits) - 1, idx + offset))
        self.habits.pop(idx)
        self.habits.insert(new_idx, habit)

    def toggle(self, habit_id: int, day: DateLike, notifier: Optional[Notifier] = None) -> Habit:
        self.habits = toggle(self.habits, habit_id, day, notifier)
        return self.get(habit_id)

    def set_status(
        self,
        habit_id: int,
        day: DateLike,
        status: Status,
        notifier: Optional[Notifier] = None,
    ) -> Habit:
        self.habits = set_explicit_status(self.habits, habit_id, day, status, notifier)
        return self.get(habit_id)

    # --- Tags -----------------------------------------------------------------

    def tag_names(self) -> List[str]:
        return [t.name for t in self.tags]

    def add_tag(self, name: str) -> UserTag:
        name = name.strip()
        if not name:
            raise StoreError("Tag name cannot be empty.")
        if name in self.tag_names():
            raise DuplicateTag(f"Tag '{name}' already exists.")
        used = {t.color_index for t in self.tags}
        free = [i for i in range(TAG_PALETTE_SIZE) if i not in used]
        color = free[0] if free else len(self.tags) % TAG_PALETTE_SIZE
        tag = UserTag(name, color)
        self.tags.append(tag)
        return tag

    def delete_tag(self, name: str) -> None:
        """
        Habits keep the category name of a deleted tag.
        """
        if name not in self.tag_names():
            raise StoreError(f"Unknown tag '{name}'.")
        if len(self.tags) <= 1:
            raise LastTagError("At least one tag must remain.")
        self.tags = [t for t in self.tags if t.name != name]

    def tag_color(self, name: str) -> Optional[int]:
        """
        Palette index for a tag, None for a category with no tag.
        """
        for t in self.tags:
            if t.name == name:
                return t.color_index
        return None
