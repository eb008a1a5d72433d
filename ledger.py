"""
ledger.py
Fund arithmetic over in-memory collections: totals, balance, paid/unpaid, per-month figures.
"""

from __future__ import annotations

from datetime import date

from models import Expense, Member, Subscription
from utils import ALL_MONTHS, last_n_months, month_of_date, parse_month


def total_collections(subscriptions: list[Subscription]) -> float:
    return sum(float(s.amount) for s in subscriptions)


def total_expenses(expenses: list[Expense]) -> float:
    return sum(e.amount for e in expenses)


def fund_balance(subscriptions: list[Subscription], expenses: list[Expense]) -> float:
    return total_collections(subscriptions) - total_expenses(expenses)


def member_total(subscriptions: list[Subscription], member_id: str) -> float:
    return sum(float(s.amount) for s in subscriptions if s.member_id == member_id)


def is_paid(subscriptions: list[Subscription], member_id: str, month: str) -> bool:
    return any(s.member_id == member_id and s.month == month for s in subscriptions)


def sort_subscriptions(subscriptions: list[Subscription]) -> list[Subscription]:
    # ISO strings are zero-padded, so lexical order is chronological
    by_date = sorted(subscriptions, key=lambda s: s.date, reverse=True)
    return sorted(by_date, key=lambda s: s.month, reverse=True)


def sort_expenses(expenses: list[Expense]) -> list[Expense]:
    return sorted(expenses, key=lambda e: e.date, reverse=True)


def subscriptions_for_month(subscriptions: list[Subscription], month: str) -> list[Subscription]:
    """Subscriptions of one month (or every month for "all"), newest month first."""
    if month == ALL_MONTHS:
        rows = [s for s in subscriptions if s.member_id]
    else:
        rows = [s for s in subscriptions if s.member_id and s.month == month]
    return sort_subscriptions(rows)


def expenses_for_month(expenses: list[Expense], month: str) -> list[Expense]:
    if month == ALL_MONTHS:
        return sort_expenses(expenses)
    target = parse_month(month)
    return sort_expenses([e for e in expenses if month_of_date(e.date) == target])


def month_collections(subscriptions: list[Subscription], month: str) -> float:
    return total_collections(subscriptions_for_month(subscriptions, month))


def month_expenses(expenses: list[Expense], month: str) -> float:
    return total_expenses(expenses_for_month(expenses, month))


def month_balance(subscriptions: list[Subscription], expenses: list[Expense], month: str) -> float:
    return month_collections(subscriptions, month) - month_expenses(expenses, month)


def active_members(members: list[Member]) -> list[Member]:
    return [m for m in members if m.status == "active"]


def paid_members(members: list[Member], subscriptions: list[Subscription], month: str) -> list[Member]:
    paid_ids = {s.member_id for s in subscriptions if s.month == month}
    return [m for m in active_members(members) if m.id in paid_ids]


def defaulters(members: list[Member], subscriptions: list[Subscription], month: str) -> list[Member]:
    """Active members with no subscription for `month`, by name."""
    paid_ids = {s.member_id for s in subscriptions if s.month == month}
    rows = [m for m in active_members(members) if m.id not in paid_ids]
    return sorted(rows, key=lambda m: m.name)


def paid_ratio(members: list[Member], subscriptions: list[Subscription], month: str) -> tuple[int, int]:
    """(paid, active) member counts for the month."""
    return len(paid_members(members, subscriptions, month)), len(active_members(members))


def member_summary(members: list[Member], subscriptions: list[Subscription]) -> list[tuple[Member, float]]:
    """
    Active members with their lifetime contribution, largest first.
    sorted() is stable, so ties keep their incoming order.
    """
    totals: dict[str, float] = {}
    for s in subscriptions:
        totals[s.member_id] = totals.get(s.member_id, 0.0) + float(s.amount)
    rows = [(m, totals.get(m.id, 0.0)) for m in active_members(members)]
    return sorted(rows, key=lambda r: r[1], reverse=True)


def monthly_series(
    subscriptions: list[Subscription],
    expenses: list[Expense],
    today: date | None = None,
    months: int = 6,
) -> list[dict]:
    """Per-month in/out for the last `months` months, oldest first (dashboard chart)."""
    return [
        {
            "month": m,
            "collections": month_collections(subscriptions, m),
            "expenses": month_expenses(expenses, m),
        }
        for m in last_n_months(today, months)
    ]


def recent_transactions(
    subscriptions: list[Subscription], expenses: list[Expense], limit: int = 5
) -> list[dict]:
    rows = [
        {"type": "income", "id": s.id, "date": s.date, "member_id": s.member_id, "description": s.receipt_no, "amount": float(s.amount)}
        for s in subscriptions
    ] + [
        {"type": "expense", "id": e.id, "date": e.date, "member_id": None, "description": e.description, "amount": e.amount}
        for e in expenses
    ]
    rows.sort(key=lambda r: r["date"], reverse=True)
    return rows[:limit]
