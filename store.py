"""
store.py
Collection reads/writes for members, subscriptions, expenses and trash,
plus change listeners that receive the full collection after every write.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from contextlib import contextmanager
from dataclasses import asdict
from datetime import date, datetime, timezone
from typing import Callable

import db
import ledger
from models import (
    COLLECTORS,
    DEFAULT_COUNTRY,
    DEFAULT_PHOTO,
    MEMBER_STATUSES,
    Expense,
    ExpenseItem,
    Member,
    Subscription,
    TrashRecord,
)
from utils import format_month, parse_month

logger = logging.getLogger(__name__)

MEMBERS = "members"
SUBSCRIPTIONS = "subscriptions"
EXPENSES = "expenses"
TRASH = "trash"
COLLECTIONS = (MEMBERS, SUBSCRIPTIONS, EXPENSES, TRASH)

Listener = Callable[[list], None]
_listeners: dict[str, list[Listener]] = {name: [] for name in COLLECTIONS}


class ValidationError(Exception):
    """Missing field or bad amount; nothing was written."""


class StoreError(Exception):
    """The database write failed."""


def new_id() -> str:
    return uuid.uuid4().hex[:20]


# ---------- Row mapping ----------

def _member(row) -> Member:
    return Member(
        id=row["id"],
        name=row["name"],
        house_name=row["house_name"],
        mobile=row["mobile"] or "",
        country=row["country"],
        status=row["status"],
        photo_url=row["photo_url"] or DEFAULT_PHOTO,
    )


def _subscription(row) -> Subscription:
    return Subscription(
        id=row["id"],
        member_id=row["member_id"],
        amount=float(row["amount"]),
        month=row["month"],
        date=row["date"],
        received_by=row["received_by"],
        receipt_no=row["receipt_no"],
    )


def _expense(row) -> Expense:
    items = tuple(ExpenseItem(name=i["name"], amount=float(i["amount"])) for i in json.loads(row["items"] or "[]"))
    return Expense(
        id=row["id"],
        category=row["category"],
        description=row["description"],
        date=row["date"],
        items=items,
    )


def _trash(row) -> TrashRecord:
    return TrashRecord(
        id=row["id"],
        original_id=row["original_id"],
        type=row["type"],
        data=json.loads(row["data"]),
        deleted_at=row["deleted_at"],
    )


# ---------- Snapshots & listeners ----------

def snapshot(collection: str) -> list:
    """The whole collection, in display order."""
    if collection == MEMBERS:
        return [_member(r) for r in db.fetch_all("SELECT * FROM members ORDER BY name ASC")]
    if collection == SUBSCRIPTIONS:
        return ledger.sort_subscriptions([_subscription(r) for r in db.fetch_all("SELECT * FROM subscriptions")])
    if collection == EXPENSES:
        return ledger.sort_expenses([_expense(r) for r in db.fetch_all("SELECT * FROM expenses")])
    if collection == TRASH:
        return [_trash(r) for r in db.fetch_all("SELECT * FROM trash ORDER BY deleted_at DESC")]
    raise KeyError(collection)


def subscribe(collection: str, callback: Listener) -> Callable[[], None]:
    """
    Register `callback` for `collection`. It receives the current snapshot
    immediately and again after every write. Returns an unsubscribe function.
    """
    _listeners[collection].append(callback)
    callback(snapshot(collection))

    def unsubscribe() -> None:
        if callback in _listeners[collection]:
            _listeners[collection].remove(callback)

    return unsubscribe


@contextmanager
def listening(callbacks: dict[str, Listener]):
    """
    Subscribe each callback to its collection for the duration of the block,
    then unsubscribe all of them, even when the block raises.
    """
    handles = []
    try:
        for collection, callback in callbacks.items():
            handles.append(subscribe(collection, callback))
        yield
    finally:
        for unsubscribe in handles:
            unsubscribe()


def _notify(collection: str) -> None:
    if not _listeners[collection]:
        return
    rows = snapshot(collection)
    for callback in list(_listeners[collection]):
        callback(rows)


def _write(collection: str, sql: str, params: tuple) -> None:
    try:
        db.execute(sql, params)
    except sqlite3.Error as exc:
        logger.exception("Write to %s failed", collection)
        raise StoreError(str(exc)) from exc
    _notify(collection)


# ---------- Members ----------

def get_member(members: list[Member], member_id: str) -> Member | None:
    return next((m for m in members if m.id == member_id), None)


def search_members(members: list[Member], term: str) -> list[Member]:
    needle = term.strip().lower()
    if not needle:
        return list(members)
    return [m for m in members if needle in m.name.lower() or needle in m.house_name.lower()]


def save_member(
    name: str,
    house_name: str,
    mobile: str = "",
    country: str = "",
    status: str = "active",
    photo_url: str = "",
    member_id: str | None = None,
) -> Member:
    """Create a member, or overwrite the fields of `member_id`."""
    if not name.strip() or not house_name.strip():
        raise ValidationError("দয়া করে নাম এবং বাড়ির নাম দিন।")
    if status not in MEMBER_STATUSES:
        raise ValidationError(f"Unknown status: {status}")

    member = Member(
        id=member_id or new_id(),
        name=name.strip(),
        house_name=house_name.strip(),
        mobile=mobile.strip(),
        country=country.strip() or DEFAULT_COUNTRY,
        status=status,
        photo_url=photo_url.strip() or DEFAULT_PHOTO,
    )
    _write(
        MEMBERS,
        """
        INSERT INTO members(id, name, house_name, mobile, country, status, photo_url)
        VALUES(?,?,?,?,?,?,?)
        ON CONFLICT(id) DO UPDATE SET name=excluded.name, house_name=excluded.house_name,
            mobile=excluded.mobile, country=excluded.country, status=excluded.status,
            photo_url=excluded.photo_url
        """,
        (member.id, member.name, member.house_name, member.mobile, member.country, member.status, member.photo_url),
    )
    logger.info("%s member %s (%s)", "Updated" if member_id else "Added", member.id, member.name)
    return member


# ---------- Subscriptions ----------

def subscription_id(member_id: str, month: str) -> str:
    return f"{member_id}_{month}"


def receipt_number(member_id: str, month: str) -> str:
    return f"RCP-{month.replace('-', '')}-{member_id[-4:].upper()}"


def record_subscription(
    member_id: str,
    month: str,
    amount: float,
    received_by: str = COLLECTORS[0],
    today: date | None = None,
) -> Subscription:
    """
    Upsert one member's payment for one month. A second payment for the same
    month replaces the first.
    """
    try:
        amount = float(amount)
    except (TypeError, ValueError):
        amount = 0.0
    if not member_id or amount <= 0:
        raise ValidationError("অনুগ্রহ করে সদস্য এবং সঠিক পরিমাণ সিলেক্ট করুন।")
    try:
        month = format_month(*parse_month(month))
    except (AttributeError, ValueError) as exc:
        raise ValidationError(f"Invalid month: {month}") from exc

    sub = Subscription(
        id=subscription_id(member_id, month),
        member_id=member_id,
        amount=amount,
        month=month,
        date=(today or date.today()).isoformat(),
        received_by=received_by,
        receipt_no=receipt_number(member_id, month),
    )
    _write(
        SUBSCRIPTIONS,
        """
        INSERT INTO subscriptions(id, member_id, amount, month, date, received_by, receipt_no)
        VALUES(?,?,?,?,?,?,?)
        ON CONFLICT(id) DO UPDATE SET amount=excluded.amount, date=excluded.date,
            received_by=excluded.received_by, receipt_no=excluded.receipt_no
        """,
        (sub.id, sub.member_id, sub.amount, sub.month, sub.date, sub.received_by, sub.receipt_no),
    )
    logger.info("Recorded %s for member %s month %s", sub.amount, member_id, month)
    return sub


# ---------- Expenses ----------

def clean_items(items: list[dict]) -> list[ExpenseItem]:
    """Drop blank-named rows; non-numeric amounts count as 0."""
    out = []
    for item in items:
        name = str(item.get("name") or "").strip()
        if not name:
            continue
        try:
            amount = float(item.get("amount") or 0)
        except (TypeError, ValueError):
            amount = 0.0
        out.append(ExpenseItem(name=name, amount=amount))
    return out


def save_expense(
    category: str,
    description: str,
    expense_date: str,
    items: list[dict],
    expense_id: str | None = None,
) -> Expense:
    expense = Expense(
        id=expense_id or new_id(),
        category=category or "Others",
        description=description.strip(),
        date=expense_date,
        items=tuple(clean_items(items)),
    )
    if not expense.description or expense.amount <= 0:
        raise ValidationError("অনুগ্রহ করে বিবরণ এবং সঠিক পরিমাণ লিখুন।")

    payload = json.dumps([asdict(i) for i in expense.items], ensure_ascii=False)
    _write(
        EXPENSES,
        """
        INSERT INTO expenses(id, category, description, date, items) VALUES(?,?,?,?,?)
        ON CONFLICT(id) DO UPDATE SET category=excluded.category, description=excluded.description,
            date=excluded.date, items=excluded.items
        """,
        (expense.id, expense.category, expense.description, expense.date, payload),
    )
    logger.info("%s expense %s total %s", "Updated" if expense_id else "Added", expense.id, expense.amount)
    return expense


def delete_expense(expense: Expense, now: datetime | None = None) -> TrashRecord:
    """Snapshot the expense into trash, then remove it."""
    data = asdict(expense)
    data["items"] = [asdict(i) for i in expense.items]
    data["amount"] = expense.amount
    record = TrashRecord(
        id=new_id(),
        original_id=expense.id,
        type="expense",
        data=data,
        deleted_at=(now or datetime.now(timezone.utc)).isoformat(timespec="seconds"),
    )
    _write(
        TRASH,
        "INSERT INTO trash(id, original_id, type, data, deleted_at) VALUES(?,?,?,?,?)",
        (record.id, record.original_id, record.type, json.dumps(record.data, ensure_ascii=False), record.deleted_at),
    )
    _write(EXPENSES, "DELETE FROM expenses WHERE id = ?", (expense.id,))
    logger.info("Moved expense %s to trash", expense.id)
    return record
