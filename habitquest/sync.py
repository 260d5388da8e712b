"""
One-way push of status changes to a spreadsheet webhook.

Delivery is best-effort: a failed post is logged and dropped, the local
change it describes is already saved.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Iterable, Optional, Protocol

import httpx

from .models import Habit, Status

logger = logging.getLogger(__name__)

VALUE_CODES = {Status.success: 1, Status.failure: 0}


class Notifier(Protocol):
    def __call__(self, habit_id: int, habit_name: str, category: str, day: str, value: int) -> None:
        ...


class NullNotifier:
    def __call__(self, habit_id: int, habit_name: str, category: str, day: str, value: int) -> None:
        return None


def build_payload(habit_id: int, habit_name: str, category: str, day: str, value: int) -> dict:
    return {
        "action": "upsert",
        "habit_id": habit_id,
        "habit_name": habit_name,
        "category": category,
        "date": day,
        "value": value,
    }


class WebhookNotifier:
    """
    POST one JSON payload per change. With `background=True` (the default)
    payloads go on a queue drained by a single daemon thread, so the caller
    never waits and posts arrive in the order they were queued.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        background: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.background = background
        self.transport = transport
        self._queue: "queue.Queue[dict]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def __call__(self, habit_id: int, habit_name: str, category: str, day: str, value: int) -> None:
        payload = build_payload(habit_id, habit_name, category, day, value)
        if not self.background:
            self.post(payload)
            return
        self._ensure_worker()
        self._queue.put(payload)

    def join(self) -> None:
        """
        Block until every queued payload has been posted or dropped.
        """
        self._queue.join()

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._worker is None or not self._worker.is_alive():
                self._worker = threading.Thread(target=self._run, name="habitquest-sync", daemon=True)
                self._worker.start()

    def _run(self) -> None:
        while True:
            payload = self._queue.get()
            try:
                self.post(payload)
            except Exception:
                logger.warning("Sync worker failed on %s", payload.get("date"), exc_info=True)
            finally:
                self._queue.task_done()

    def post(self, payload: dict) -> bool:
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.post(self.url, json=payload)
                resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Sync failed for habit %s on %s: %s", payload["habit_id"], payload["date"], e)
            return False
        return True


def notify_safely(notifier: Optional[Notifier], habit: Habit, day: str, status: Status) -> None:
    if notifier is None or status not in VALUE_CODES:
        return
    try:
        notifier(habit.id, habit.name, habit.category, day, VALUE_CODES[status])
    except Exception:
        logger.warning("Notifier raised for habit %s on %s", habit.id, day, exc_info=True)


def resync_history(habits: Iterable[Habit], notifier: Notifier) -> int:
    """
    Send every stored record, one notification per date, in date order.
    """
    sent = 0
    for h in habits:
        for day in sorted(h.completions):
            status = Status(h.completions[day])
            if status in VALUE_CODES:
                notify_safely(notifier, h, day, status)
                sent += 1
    return sent
