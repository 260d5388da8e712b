"""
UI helpers shared across pages (Streamlit).

Keeping this separate avoids repeating small formatting bits.
"""

from __future__ import annotations

import html

import streamlit as st

from habitquest import db
from habitquest.config import load_settings
from habitquest.models import HabitType, Status
from habitquest.store import HabitStore
from habitquest.sync import Notifier, NullNotifier, WebhookNotifier

TAG_COLORS = ["#f97316", "#f59e0b", "#10b981", "#0ea5e9", "#6366f1", "#ec4899", "#84cc16", "#ef4444"]
UNKNOWN_TAG_COLOR = "#a8a29e"

STATUS_ICONS = {Status.success: "✅", Status.failure: "❌", Status.neutral: "⬜"}

# Same status, phrased by polarity
STATUS_LABELS = {
    HabitType.positive: {Status.success: "Done", Status.failure: "Missed", Status.neutral: "Open"},
    HabitType.negative: {Status.success: "Avoided", Status.failure: "Slipped", Status.neutral: "Open"},
}


def app_header(title: str, subtitle: str | None = None) -> None:
    st.title(title)
    if subtitle:
        st.caption(subtitle)


def toast_success(msg: str) -> None:
    try:
        st.toast(msg, icon="✅")
    except Exception:
        st.success(msg)


def toast_error(msg: str) -> None:
    try:
        st.toast(msg, icon="⚠️")
    except Exception:
        st.error(msg)


def status_label(habit_type: HabitType, status: Status) -> str:
    return f"{STATUS_ICONS[Status(status)]} {STATUS_LABELS[HabitType(habit_type)][Status(status)]}"


def tag_color(store: HabitStore, name: str) -> str:
    idx = store.tag_color(name)
    if idx is None:
        return UNKNOWN_TAG_COLOR
    return TAG_COLORS[idx % len(TAG_COLORS)]


def tag_badge(store: HabitStore, name: str) -> str:
    return f"<span style='color:{tag_color(store, name)};font-weight:700'>● {html.escape(name)}</span>"


SYNC_OFF = NullNotifier()


@st.cache_resource
def _webhook_notifier(url: str, timeout: float) -> WebhookNotifier:
    # one notifier per URL across reruns, so its queue keeps posts in order
    return WebhookNotifier(url, timeout=timeout)


def get_notifier() -> Notifier:
    """
    Webhook notifier for the configured sync URL, or a no-op when sync is off.
    """
    settings = load_settings()
    url = db.get_setting("sync_url", settings.sync_url, db_path=settings.db_path).strip()
    if not url:
        return SYNC_OFF
    return _webhook_notifier(url, settings.sync_timeout)
