"""
One-time import of the older storage format.

Older versions kept `completedDates: ["YYYY-MM-DD", ...]` per habit, a plain
list of done dates. The import is lossy: a listed date becomes a success,
anything else stays neutral, and no failure can be recovered.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, Iterable, List, Optional

from .buckets import bucket_for
from .models import Frequency, Habit, HabitType, Status, UserTag, as_date
from .store import DEFAULT_TAG, TAG_PALETTE_SIZE, HabitStore

logger = logging.getLogger(__name__)


def completions_from_dates(dates: Iterable[str], frequency: Frequency) -> Dict[str, Status]:
    """
    Listed dates -> success. For weekly/monthly habits only the latest date
    of each bucket is kept.
    """
    latest: Dict[str, str] = {}
    for raw in dates:
        day = as_date(raw[:10]).isoformat()
        key = bucket_for(day, frequency).key
        if key not in latest or day > latest[key]:
            latest[key] = day
    return {day: Status.success for day in sorted(latest.values())}


def habit_from_legacy(raw: dict) -> Habit:
    frequency = Frequency(raw.get("frequency", "daily"))
    kwargs = {}
    if raw.get("createdAt"):
        kwargs["created_at"] = raw["createdAt"]
    return Habit(
        id=int(raw["id"]),
        name=str(raw.get("name", "")).strip(),
        category=raw.get("category") or DEFAULT_TAG,
        frequency=frequency,
        type=HabitType(raw.get("type", "positive")),
        completions=completions_from_dates(raw.get("completedDates", []), frequency),
        streak=max(0, int(raw.get("streak", 0))),
        **kwargs,
    )


def import_legacy_export(habits_json: str, tags_json: Optional[str] = None) -> HabitStore:
    """
    Build a store from the JSON the old app kept in local storage: a habit
    list and, optionally, a list of tag names.
    """
    habits: List[Habit] = []
    seen = set()
    for raw in json.loads(habits_json or "[]"):
        habit = habit_from_legacy(raw)
        if habit.id < 1 or not habit.name:
            logger.warning("Skipping legacy habit with invalid id %s or empty name", habit.id)
            continue
        if habit.id in seen:
            logger.warning("Skipping legacy habit with duplicate id %s", habit.id)
            continue
        seen.add(habit.id)
        habits.append(habit)

    names = [str(n).strip() for n in json.loads(tags_json) if str(n).strip()] if tags_json else []
    tags = [UserTag(n, i % TAG_PALETTE_SIZE) for i, n in enumerate(dict.fromkeys(names))]
    logger.info("Imported %d legacy habits and %d tags", len(habits), len(tags))
    return HabitStore(habits=habits, tags=tags or [UserTag(DEFAULT_TAG, 0)])
