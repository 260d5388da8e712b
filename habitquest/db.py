"""
SQLite layer for HabitQuest.

The app works on an in-memory `HabitStore`; this module loads a snapshot of it
from disk and writes the whole snapshot back.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager

from .config import DB_PATH_DEFAULT
from .models import Frequency, Habit, HabitType, Status, UserTag
from .store import DEFAULT_TAG, HabitStore

logger = logging.getLogger(__name__)


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


@contextmanager
def connect(db_path: str = DB_PATH_DEFAULT):
    _ensure_parent_dir(db_path)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: str = DB_PATH_DEFAULT) -> None:
    """
    Create tables if they don't exist yet and seed the default tag.
    """
    with connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS habits (
                id INTEGER PRIMARY KEY,             -- chosen by the user
                name TEXT NOT NULL,
                category TEXT NOT NULL,
                type TEXT NOT NULL DEFAULT 'positive',
                frequency TEXT NOT NULL DEFAULT 'daily',
                streak INTEGER NOT NULL DEFAULT 0,
                position INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS completions (
                habit_id INTEGER NOT NULL,
                day TEXT NOT NULL,                  -- YYYY-MM-DD
                status TEXT NOT NULL,               -- success / failure
                UNIQUE(habit_id, day),
                FOREIGN KEY (habit_id) REFERENCES habits(id) ON DELETE CASCADE
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS tags (
                name TEXT PRIMARY KEY,
                color_index INTEGER NOT NULL DEFAULT 0,
                position INTEGER NOT NULL DEFAULT 0
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )
        if conn.execute("SELECT COUNT(*) FROM tags").fetchone()[0] == 0:
            conn.execute("INSERT INTO tags (name, color_index, position) VALUES (?, 0, 0)", (DEFAULT_TAG,))


# --- Store snapshot -----------------------------------------------------------

def load_store(db_path: str = DB_PATH_DEFAULT) -> HabitStore:
    with connect(db_path) as conn:
        habit_rows = conn.execute(
            "SELECT id, name, category, type, frequency, streak, created_at FROM habits ORDER BY position, id"
        ).fetchall()
        completion_rows = conn.execute("SELECT habit_id, day, status FROM completions ORDER BY day").fetchall()
        tag_rows = conn.execute("SELECT name, color_index FROM tags ORDER BY position, name").fetchall()

    completions: dict[int, dict[str, Status]] = {}
    for r in completion_rows:
        completions.setdefault(r["habit_id"], {})[r["day"]] = Status(r["status"])

    habits = [
        Habit(
            id=r["id"],
            name=r["name"],
            category=r["category"],
            frequency=Frequency(r["frequency"]),
            type=HabitType(r["type"]),
            completions=completions.get(r["id"], {}),
            streak=r["streak"],
            created_at=r["created_at"],
        )
        for r in habit_rows
    ]
    tags = [UserTag(r["name"], r["color_index"]) for r in tag_rows] or [UserTag(DEFAULT_TAG, 0)]
    return HabitStore(habits=habits, tags=tags)


def save_store(store: HabitStore, db_path: str = DB_PATH_DEFAULT) -> None:
    """
    Replace the stored habits, records and tags with the store's contents.
    """
    with connect(db_path) as conn:
        ids = [h.id for h in store.habits]
        placeholders = ",".join("?" for _ in ids)
        if ids:
            conn.execute(f"DELETE FROM habits WHERE id NOT IN ({placeholders})", ids)
        else:
            conn.execute("DELETE FROM habits")

        for pos, h in enumerate(store.habits):
            conn.execute(
                """
                INSERT INTO habits (id, name, category, type, frequency, streak, position, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name=excluded.name,
                    category=excluded.category,
                    type=excluded.type,
                    frequency=excluded.frequency,
                    streak=excluded.streak,
                    position=excluded.position
                """,
                (h.id, h.name, h.category, HabitType(h.type).value, Frequency(h.frequency).value,
                 h.streak, pos, h.created_at),
            )
            conn.execute("DELETE FROM completions WHERE habit_id = ?", (h.id,))
            conn.executemany(
                "INSERT INTO completions (habit_id, day, status) VALUES (?, ?, ?)",
                [(h.id, day, Status(s).value) for day, s in sorted(h.completions.items())],
            )

        conn.execute("DELETE FROM tags")
        conn.executemany(
            "INSERT INTO tags (name, color_index, position) VALUES (?, ?, ?)",
            [(t.name, t.color_index, pos) for pos, t in enumerate(store.tags)],
        )
    logger.debug("Saved %d habits and %d tags to %s", len(store.habits), len(store.tags), db_path)


# --- Settings ----------------------------------------------------------------

def get_setting(key: str, default: str = "", db_path: str = DB_PATH_DEFAULT) -> str:
    with connect(db_path) as conn:
        row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
    return str(row["value"]) if row else default


def set_setting(key: str, value: str, db_path: str = DB_PATH_DEFAULT) -> None:
    with connect(db_path) as conn:
        conn.execute(
            """
            INSERT INTO settings (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
            (key, str(value)),
        )
