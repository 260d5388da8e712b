"""
Analysis page

Week and month comparisons, longer-run rates, and a history grid per habit.
"""

from __future__ import annotations

from datetime import date

import altair as alt
import streamlit as st

from habitquest import init_db
from habitquest import db
from habitquest.config import load_settings
from habitquest.models import Frequency
from habitquest.report import HabitReport, build_analysis_report, history_frame, report_frame
from habitquest.ui_helpers import app_header

settings = load_settings()
init_db(settings.db_path)
st.set_page_config(page_title="Analysis", page_icon="📈", layout="wide")

HISTORY_TITLES = {
    Frequency.daily: "Last 28 days",
    Frequency.weekly: "Last 12 weeks",
    Frequency.monthly: "Last 12 months",
}

STATUS_SCALE = alt.Scale(
    domain=["success", "failure", "neutral"],
    range=["#ea580c", "#e11d48", "#ffedd5"],
)


def render_history(report: HabitReport) -> None:
    df = history_frame(report)
    chart = (
        alt.Chart(df)
        .mark_rect(cornerRadius=4, stroke="white", strokeWidth=2)
        .encode(
            x=alt.X("col:O", axis=None),
            y=alt.Y("row:O", axis=None),
            color=alt.Color("status:N", scale=STATUS_SCALE, legend=None),
            tooltip=["start:T", "end:T", "status:N"],
        )
        .properties(height=40 * (int(df["row"].max()) + 1) if not df.empty else 40)
    )
    st.altair_chart(chart, use_container_width=True)


def render_report(report: HabitReport) -> None:
    with st.container(border=True):
        st.write(f"**{report.name}**")
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("This week", f"{report.current_week}%",
                  delta=f"{report.current_week - report.previous_week} vs last week")
        c2.metric("This month", f"{report.current_month}%",
                  delta=f"{report.current_month - report.previous_month} vs last month")
        c3.metric("Last 90 days", f"{report.trailing_90}%")
        c4.metric("Year to date", f"{report.year_to_date}%")

        title = HISTORY_TITLES[report.frequency]
        st.caption(f"{title}: {report.history_successes} of {len(report.history)} successful")
        render_history(report)


def main() -> None:
    app_header("Analysis", "How each habit is doing over the last weeks and months.")

    store = db.load_store(settings.db_path)
    if not store.habits:
        st.info("Create a habit first to see an analysis.")
        return

    reports = build_analysis_report(store.habits, date.today())

    improving = sum(1 for r in reports if r.week_improved)
    st.metric("Habits at or above last week", f"{improving} / {len(reports)}")

    with st.expander("All habits"):
        st.dataframe(report_frame(reports), hide_index=True, use_container_width=True)

    for report in reports:
        render_report(report)


if __name__ == "__main__":
    main()
