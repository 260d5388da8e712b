"""
HabitQuest - Dashboard

Run with:
    streamlit run Habit_Quest.py
"""

from __future__ import annotations

from datetime import date, timedelta

import streamlit as st

from habitquest import init_db
from habitquest import db
from habitquest.buckets import bucket_for
from habitquest.config import load_settings, setup_logging
from habitquest.metrics import period_progress, rate_in_range
from habitquest.models import Frequency, Habit, Status
from habitquest.status import resolve_status
from habitquest.store import HabitStore
from habitquest.ui_helpers import app_header, get_notifier, status_label, tag_badge, toast_success


st.set_page_config(
    page_title="HabitQuest",
    page_icon="✅",
    layout="wide",
)

settings = load_settings()
setup_logging(settings.log_level)
init_db(settings.db_path)


FREQUENCY_LABELS = {
    Frequency.daily: "Daily",
    Frequency.weekly: "Weekly",
    Frequency.monthly: "Monthly",
}


def period_caption(habit: Habit, today: date) -> str:
    bucket = bucket_for(today, habit.frequency)
    if habit.frequency == Frequency.daily:
        return "Today"
    return f"{bucket.start.strftime('%d %b')} – {bucket.end.strftime('%d %b')}"


def render_progress(store: HabitStore, today: date) -> None:
    done, total, pct = period_progress(store.habits, today)
    c1, c2 = st.columns([0.3, 0.7])
    c1.metric("Progress this period", f"{pct}%", help="Habits whose current day/week/month is a success.")
    with c2:
        st.caption(f"{done} / {total} habits")
        st.progress(pct / 100)


def render_habit(store: HabitStore, habit: Habit, today: date, reorder: bool) -> None:
    status = resolve_status(habit, today)
    with st.container(border=True):
        left, mid, right = st.columns([0.55, 0.2, 0.25])
        with left:
            st.write(f"**{habit.name}**")
            st.markdown(
                f"{tag_badge(store, habit.category)} · {FREQUENCY_LABELS[habit.frequency]} · {period_caption(habit, today)}",
                unsafe_allow_html=True,
            )
        with mid:
            st.caption(f"Streak: {habit.streak}")
            st.caption(f"Last 90 days: {rate_in_range(habit, today - timedelta(days=89), today)}%")
        with right:
            if reorder:
                up, down = st.columns(2)
                if up.button("↑", key=f"up_{habit.id}"):
                    store.move_habit(habit.id, -1)
                    db.save_store(store, settings.db_path)
                    st.rerun()
                if down.button("↓", key=f"down_{habit.id}"):
                    store.move_habit(habit.id, 1)
                    db.save_store(store, settings.db_path)
                    st.rerun()
            elif st.button(status_label(habit.type, status), key=f"toggle_{habit.id}", use_container_width=True):
                updated = store.toggle(habit.id, today, get_notifier())
                db.save_store(store, settings.db_path)
                new_status = resolve_status(updated, today)
                if new_status != Status.neutral:
                    toast_success(f"{habit.name}: {new_status.value}")
                st.rerun()


def main() -> None:
    app_header("HabitQuest", "Mark today's outcome: tap once for success, twice for failure, three times to clear.")

    store = db.load_store(settings.db_path)
    today = date.today()

    if not store.habits:
        st.info("No habits yet. Create one in **Habits**.")
        return

    render_progress(store, today)
    st.divider()

    reorder = st.toggle("Reorder", value=False)
    for habit in list(store.habits):
        render_habit(store, habit, today, reorder)


if __name__ == "__main__":
    main()
