"""
notifications.py
Bounded in-app notification queue with per-item expiry, and the change-feed
watcher that turns new members/subscriptions/expenses into notifications.
"""

from __future__ import annotations

import itertools
import time
from typing import Callable

from models import LARGE_EXPENSE_THRESHOLD, AppNotification, Expense, Member, Subscription
from utils import format_taka

MAX_VISIBLE = 3
EXPIRY_SECONDS = 6.0

_ids = itertools.count(1)


class NotificationQueue:
    """Newest first; holds at most `limit` items, each living `ttl` seconds."""

    def __init__(self, limit: int = MAX_VISIBLE, ttl: float = EXPIRY_SECONDS, clock: Callable[[], float] = time.time):
        self.limit = limit
        self.ttl = ttl
        self.clock = clock
        self._items: list[AppNotification] = []

    def push(self, type: str, title: str, message: str, action_view: str | None = None) -> AppNotification:
        note = AppNotification(
            id=f"n{next(_ids)}",
            type=type,
            title=title,
            message=message,
            action_view=action_view,
            created_at=self.clock(),
        )
        self._items = [note] + self._items[: self.limit - 1]
        return note

    def dismiss(self, note_id: str) -> None:
        self._items = [n for n in self._items if n.id != note_id]

    def visible(self, now: float | None = None) -> list[AppNotification]:
        now = self.clock() if now is None else now
        self._items = [n for n in self._items if now - n.created_at < self.ttl]
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


class ChangeWatcher:
    """
    Receives collection snapshots and pushes a notification for every
    document that was not in the previous snapshot. The first snapshot of
    each collection only primes the known ids.
    """

    def __init__(self, queue: NotificationQueue):
        self.queue = queue
        self._seen: dict[str, set[str] | None] = {"members": None, "subscriptions": None, "expenses": None}

    def _added(self, collection: str, rows: list) -> list:
        ids = {r.id for r in rows}
        previous = self._seen[collection]
        self._seen[collection] = ids
        if previous is None:
            return []
        return [r for r in rows if r.id not in previous]

    def on_members(self, rows: list[Member]) -> None:
        for m in self._added("members", rows):
            self.queue.push("info", "নতুন সদস্য", f"{m.name} পরিবারে যোগ দিয়েছেন।", "Members")

    def on_subscriptions(self, rows: list[Subscription]) -> None:
        for _ in self._added("subscriptions", rows):
            self.queue.push("success", "চাঁদা জমা", "তহবিলে নতুন চাঁদা জমা হয়েছে।", "Collections")

    def on_expenses(self, rows: list[Expense]) -> None:
        for e in self._added("expenses", rows):
            if e.amount >= LARGE_EXPENSE_THRESHOLD:
                self.queue.push("alert", "বড় খরচ অ্যালার্ট", f"{format_taka(e.amount)} খরচ হয়েছে: {e.description}", "Expenses")
            else:
                self.queue.push("warning", "নতুন খরচ", "তহবিল থেকে টাকা খরচ হয়েছে।", "Expenses")
