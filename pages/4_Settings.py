"""
Settings page

Spreadsheet sync and import of data from the older version of the app.
"""

from __future__ import annotations

import streamlit as st

from habitquest import init_db
from habitquest import db
from habitquest.config import load_settings
from habitquest.legacy import import_legacy_export
from habitquest.sync import resync_history
from habitquest.ui_helpers import app_header, get_notifier, toast_error, toast_success

settings = load_settings()
init_db(settings.db_path)
st.set_page_config(page_title="Settings", page_icon="⚙️", layout="wide")


def render_sync() -> None:
    st.subheader("Spreadsheet sync")
    current = db.get_setting("sync_url", settings.sync_url, db_path=settings.db_path)
    url = st.text_input("Webhook URL", value=current, placeholder="https://script.google.com/macros/s/.../exec")
    st.caption("Every change is posted to this URL. Leave empty to turn sync off.")

    c1, c2 = st.columns(2)
    with c1:
        if st.button("Save URL", type="primary"):
            db.set_setting("sync_url", url.strip(), db_path=settings.db_path)
            toast_success("Saved")
    with c2:
        if st.button("Send full history", disabled=not current):
            notifier = get_notifier()
            store = db.load_store(settings.db_path)
            sent = resync_history(store.habits, notifier)
            toast_success(f"Queued {sent} records")


def render_import() -> None:
    st.subheader("Import from the old app")
    st.caption(
        "Old exports only know which dates were done. Those become successes; "
        "failures cannot be recovered. Importing replaces all current habits and tags."
    )
    habits_file = st.file_uploader("Habits (JSON)", type=["json"], key="legacy_habits")
    tags_file = st.file_uploader("Tags (JSON, optional)", type=["json"], key="legacy_tags")
    confirm = st.checkbox("I understand", key="legacy_confirm")

    if st.button("Import", disabled=not (habits_file and confirm)):
        try:
            store = import_legacy_export(
                habits_file.getvalue().decode("utf-8"),
                tags_file.getvalue().decode("utf-8") if tags_file else None,
            )
        except (ValueError, KeyError, TypeError) as e:
            toast_error(f"Could not read the export: {e}")
            return
        db.save_store(store, settings.db_path)
        toast_success(f"Imported {len(store.habits)} habits")


def main() -> None:
    app_header("Settings")
    render_sync()
    st.divider()
    render_import()


if __name__ == "__main__":
    main()
