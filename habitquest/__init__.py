"""
HabitQuest: habit tracking with daily, weekly and monthly buckets.
"""

from .db import init_db
from .mutations import set_explicit_status, toggle
from .metrics import rate_in_range
from .report import build_analysis_report
from .status import resolve_status

__all__ = [
    "init_db",
    "resolve_status",
    "toggle",
    "set_explicit_status",
    "rate_in_range",
    "build_analysis_report",
]
