"""
Habits page

Create, edit, and delete habits, and manage the tags they are filed under.
"""

from __future__ import annotations

import streamlit as st

from habitquest import init_db
from habitquest import db
from habitquest.config import load_settings
from habitquest.models import Frequency, HabitType
from habitquest.store import StoreError
from habitquest.ui_helpers import app_header, tag_badge, toast_error, toast_success

settings = load_settings()
init_db(settings.db_path)

st.set_page_config(page_title="Habits", page_icon="📌", layout="wide")

FREQUENCIES = [f.value for f in Frequency]
TYPES = [t.value for t in HabitType]


def render_tags(store) -> None:
    st.subheader("Tags")
    new_tag = st.text_input("New tag", key="new_tag", placeholder="e.g. Health")
    if st.button("Add tag"):
        try:
            store.add_tag(new_tag)
            db.save_store(store, settings.db_path)
            toast_success("Tag added")
            st.rerun()
        except StoreError as e:
            toast_error(str(e))

    for t in list(store.tags):
        cols = st.columns([0.8, 0.2])
        with cols[0]:
            st.markdown(tag_badge(store, t.name), unsafe_allow_html=True)
        with cols[1]:
            if st.button("Remove", key=f"tag_del_{t.name}", disabled=len(store.tags) <= 1):
                try:
                    store.delete_tag(t.name)
                    db.save_store(store, settings.db_path)
                    st.rerun()
                except StoreError as e:
                    toast_error(str(e))


def main() -> None:
    app_header("Habits", "Create habits and choose how often they count.")

    store = db.load_store(settings.db_path)

    left, right = st.columns([0.9, 1.1], gap="large")

    with left:
        st.subheader("Your habits")
        if not store.habits:
            st.info("No habits yet.")
        else:
            for h in store.habits:
                cols = st.columns([0.75, 0.25])
                with cols[0]:
                    st.write(f"**#{h.id} {h.name}**")
                    st.markdown(
                        f"{tag_badge(store, h.category)} · {h.frequency.value} · {h.type.value}",
                        unsafe_allow_html=True,
                    )
                with cols[1]:
                    if st.button("Edit", key=f"edit_{h.id}"):
                        st.session_state["edit_id"] = h.id
                        st.session_state["confirm_delete"] = False
                        st.rerun()

        st.divider()
        render_tags(store)

    with right:
        edit_id = st.session_state.get("edit_id", None)
        habit = next((h for h in store.habits if h.id == edit_id), None)
        st.subheader("Edit Habit" if habit else "New Habit")

        tags = store.tag_names()
        if habit and habit.category not in tags:
            # category of a deleted tag stays selectable for this habit
            tags = tags + [habit.category]

        habit_id = st.number_input(
            "Id",
            min_value=1,
            step=1,
            value=habit.id if habit else store.next_free_id(),
            disabled=habit is not None,
        )
        if not habit and any(h.id == habit_id for h in store.habits):
            st.warning(f"Id {habit_id} is already in use.")

        name = st.text_input("Name", value=habit.name if habit else "", placeholder="e.g. Walk 20 minutes")
        category = st.selectbox("Tag", options=tags, index=tags.index(habit.category) if habit else 0)
        frequency = st.selectbox(
            "Frequency",
            options=FREQUENCIES,
            index=FREQUENCIES.index(habit.frequency.value) if habit else 0,
            help="One outcome per day, per week (Sunday to Saturday) or per calendar month.",
        )
        habit_type = st.radio(
            "Type",
            options=TYPES,
            index=TYPES.index(habit.type.value) if habit else 0,
            horizontal=True,
            help="Negative habits are things to avoid. Only the wording changes.",
        )

        save_col, del_col = st.columns([0.6, 0.4])
        with save_col:
            if st.button("Save", type="primary"):
                try:
                    if habit:
                        store.update_habit(habit.id, name=name, category=category,
                                           frequency=frequency, type=habit_type)
                        toast_success("Habit updated")
                    else:
                        store.add_habit(int(habit_id), name, category, frequency, habit_type)
                        toast_success("Habit created")
                    db.save_store(store, settings.db_path)
                    st.session_state["edit_id"] = None
                    st.rerun()
                except StoreError as e:
                    toast_error(str(e))
        with del_col:
            if habit:
                if st.button("Delete", help="Deletes the habit and its history."):
                    st.session_state["confirm_delete"] = True

        if habit and st.session_state.get("confirm_delete"):
            st.warning("This will remove the habit and its history.")
            c1, c2 = st.columns(2)
            with c1:
                if st.button("Cancel"):
                    st.session_state["confirm_delete"] = False
                    st.rerun()
            with c2:
                if st.button("Delete permanently", type="primary"):
                    store.delete_habit(habit.id)
                    db.save_store(store, settings.db_path)
                    st.session_state["confirm_delete"] = False
                    st.session_state["edit_id"] = None
                    toast_success("Habit deleted")
                    st.rerun()


if __name__ == "__main__":
    main()
