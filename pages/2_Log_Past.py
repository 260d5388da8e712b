"""
Log past page

Set the outcome of a habit for an earlier date directly, without cycling.
For weekly and monthly habits the choice replaces whatever was recorded for
that week or month.
"""

from __future__ import annotations

from datetime import date

import streamlit as st

from habitquest import init_db
from habitquest import db
from habitquest.buckets import bucket_for
from habitquest.config import load_settings
from habitquest.models import Frequency, Status
from habitquest.status import keys_in_bucket, resolve_status
from habitquest.ui_helpers import app_header, get_notifier, status_label, toast_success

settings = load_settings()
init_db(settings.db_path)
st.set_page_config(page_title="Log past", page_icon="🗓️", layout="wide")

STATUSES = [Status.success, Status.failure, Status.neutral]


def main() -> None:
    app_header("Log past", "Record an outcome for an earlier date.")

    store = db.load_store(settings.db_path)
    if not store.habits:
        st.info("Create a habit first.")
        return

    chosen = st.date_input("Date", value=date.today(), max_value=date.today())

    st.divider()
    st.write(f"### {chosen.isoformat()}")

    for h in store.habits:
        current = resolve_status(h, chosen)
        bucket = bucket_for(chosen, h.frequency)

        with st.container(border=True):
            st.write(f"**{h.name}**")
            if h.frequency != Frequency.daily:
                recorded = ", ".join(keys_in_bucket(h, bucket)) or "nothing"
                st.caption(f"{bucket.key} to {bucket.end_key}: {recorded} recorded")

            col1, col2 = st.columns([0.6, 0.4])
            with col1:
                pick = st.radio(
                    "Outcome",
                    options=STATUSES,
                    index=STATUSES.index(current),
                    format_func=lambda s, t=h.type: status_label(t, s),
                    horizontal=True,
                    key=f"status_{h.id}_{chosen.isoformat()}",
                )
            with col2:
                if st.button("Save", key=f"save_{h.id}"):
                    store.set_status(h.id, chosen, pick, get_notifier())
                    db.save_store(store, settings.db_path)
                    toast_success("Saved")
                    st.rerun()


if __name__ == "__main__":
    main()
