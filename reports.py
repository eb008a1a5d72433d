"""
reports.py
Report row-sets per print mode and the printable HTML built from them.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field

import pandas as pd

import ledger
from models import DEFAULT_PHOTO, FIXED_ADDRESS, UNKNOWN_MEMBER, Expense, Member, Subscription
from utils import bengali_month_name, format_taka

COLLECTIONS = "collections"
EXPENSES = "expenses"
MEMBER_SUMMARY = "member_summary"
MEMBER_LIST = "member_list"
FULL_AUDIT = "full_audit"

REPORT_MODES = {
    COLLECTIONS: "মাসিক চাঁদা আদায় রিপোর্ট",
    EXPENSES: "মাসিক ব্যয় বিবরণী",
    MEMBER_SUMMARY: "গ্রামের প্রবাসী সদস্য তালিকা",
    MEMBER_LIST: "সদস্যদের মাসিক পরিশোধ তালিকা",
    FULL_AUDIT: "মাসিক অডিট সামারি রিপোর্ট",
}

PAID_LABEL = "পরিশোধিত"
DUE_LABEL = "বকেয়া"


@dataclass
class Report:
    mode: str
    month: str
    title: str
    rows: list[dict] = field(default_factory=list)
    grand_total: float = 0.0
    # full audit only
    expense_rows: list[dict] = field(default_factory=list)
    total_in: float = 0.0
    total_out: float = 0.0
    balance: float = 0.0


def member_lookup(members: list[Member], member_id: str) -> dict:
    """Display fields for a member id; unknown ids get a placeholder."""
    m = next((m for m in members if m.id == member_id), None)
    if m is None:
        return {"name": UNKNOWN_MEMBER, "house_name": "", "photo_url": DEFAULT_PHOTO}
    return {"name": m.name, "house_name": m.house_name, "photo_url": m.photo_url or DEFAULT_PHOTO}


def collection_rows(members: list[Member], subscriptions: list[Subscription]) -> list[dict]:
    rows = []
    for s in subscriptions:
        who = member_lookup(members, s.member_id)
        rows.append({
            "receipt_no": s.receipt_no,
            "member_id": s.member_id,
            "name": who["name"],
            "house_name": who["house_name"],
            "photo_url": who["photo_url"],
            "month": s.month,
            "date": s.date,
            "received_by": s.received_by,
            "amount": float(s.amount),
        })
    return rows


def expense_rows(expenses: list[Expense]) -> list[dict]:
    return [
        {
            "date": e.date,
            "category": e.category,
            "description": e.description,
            "items": ", ".join(f"{i.name} ({format_taka(i.amount)})" for i in e.items),
            "amount": e.amount,
        }
        for e in expenses
    ]


def build_report(
    mode: str,
    month: str,
    members: list[Member],
    subscriptions: list[Subscription],
    expenses: list[Expense],
) -> Report:
    if mode not in REPORT_MODES:
        raise ValueError(f"unknown report mode: {mode}")
    report = Report(mode=mode, month=month, title=REPORT_MODES[mode])

    month_subs = ledger.subscriptions_for_month(subscriptions, month)
    month_exps = ledger.expenses_for_month(expenses, month)

    if mode == COLLECTIONS:
        report.rows = collection_rows(members, month_subs)
        report.grand_total = ledger.total_collections(month_subs)

    elif mode == EXPENSES:
        report.rows = expense_rows(month_exps)
        report.grand_total = ledger.total_expenses(month_exps)

    elif mode == MEMBER_SUMMARY:
        summary = ledger.member_summary(members, subscriptions)
        report.rows = [
            {
                "member_id": m.id,
                "name": m.name,
                "house_name": m.house_name,
                "country": m.country,
                "photo_url": m.photo_url,
                "amount": total,
            }
            for m, total in summary
        ]
        report.grand_total = sum(total for _, total in summary)

    elif mode == MEMBER_LIST:
        by_member = {s.member_id: s for s in month_subs}
        for m in sorted(ledger.active_members(members), key=lambda m: m.name):
            sub = by_member.get(m.id)
            report.rows.append({
                "member_id": m.id,
                "name": m.name,
                "house_name": m.house_name,
                "country": m.country,
                "photo_url": m.photo_url,
                "status": PAID_LABEL if sub else DUE_LABEL,
                "amount": float(sub.amount) if sub else 0.0,
            })
        report.grand_total = sum(r["amount"] for r in report.rows)

    else:
        report.rows = collection_rows(members, month_subs)
        report.expense_rows = expense_rows(month_exps)
        report.total_in = ledger.total_collections(month_subs)
        report.total_out = ledger.total_expenses(month_exps)
        report.balance = report.total_in - report.total_out
        report.grand_total = report.balance

    return report


# ---------- Presentation ----------

_COLUMNS = {
    COLLECTIONS: {"receipt_no": "রসিদ নং", "name": "সদস্যের নাম", "house_name": "বাড়ি", "received_by": "গ্রহণকারী", "amount": "পরিমাণ"},
    EXPENSES: {"date": "তারিখ", "category": "খাত", "description": "বিবরণ", "items": "আইটেম", "amount": "পরিমাণ"},
    MEMBER_SUMMARY: {"photo_url": "ছবি", "name": "সদস্যের নাম ও বাড়ি", "country": "বসবাসরত দেশ", "amount": "মোট অনুদান"},
    MEMBER_LIST: {"name": "সদস্যের নাম", "house_name": "বাড়ি", "country": "দেশ", "status": "স্ট্যাটাস", "amount": "আদায়ের পরিমাণ"},
}


def report_frame(rows: list[dict], mode: str) -> pd.DataFrame:
    """Rows as a DataFrame with Bengali headers, numbered from 1."""
    columns = _COLUMNS[mode]
    df = pd.DataFrame(rows, columns=list(columns))
    if not df.empty:
        df["amount"] = df["amount"].map(format_taka)
    df = df.rename(columns=columns)
    df.index = range(1, len(df) + 1)
    return df


def _print_rows(rows: list[dict], mode: str) -> list[dict]:
    """Escape text cells; the member summary gets a photo and a name/house cell."""
    out = []
    for row in rows:
        r = {k: html.escape(v) if isinstance(v, str) else v for k, v in row.items()}
        if mode == MEMBER_SUMMARY:
            r["photo_url"] = f"<img src=\"{r['photo_url']}\" width=\"48\" height=\"48\">"
            r["name"] = f"{r['name']}<br><small>বাড়ি: {r['house_name']}</small>"
        out.append(r)
    return out


def _table_html(rows: list[dict], mode: str, total: float) -> str:
    df = report_frame(_print_rows(rows, mode), mode)
    table = df.to_html(classes="report", border=1, escape=False)
    return f"{table}<p class='total'>সর্বমোট জমা/ব্যয়: {html.escape(format_taka(total))}</p>"


def render_print_html(report: Report) -> str:
    parts = [
        "<div class='print-report'>",
        "<h1>কালিপুর পাহারাদার কল্যাণ তহবিল</h1>",
        f"<p>{html.escape(FIXED_ADDRESS)}</p>",
        f"<h2>{html.escape(report.title)}</h2>",
        f"<p>রিপোর্ট মাস: {html.escape(bengali_month_name(report.month))}</p>",
    ]
    if report.mode == FULL_AUDIT:
        parts.append(
            "<table class='kpi'><tr>"
            f"<td>মোট আদায়<br><b>{format_taka(report.total_in)}</b></td>"
            f"<td>মোট ব্যয়<br><b>{format_taka(report.total_out)}</b></td>"
            f"<td>নেট ব্যালেন্স<br><b>{format_taka(report.balance)}</b></td>"
            "</tr></table>"
        )
        parts.append(f"<h3>আদায় বিবরণী (মোট: {len(report.rows)} জন)</h3>")
        parts.append(_table_html(report.rows, COLLECTIONS, report.total_in))
        parts.append(f"<h3>ব্যয় বিবরণী (মোট খরচ: {len(report.expense_rows)} টি)</h3>")
        parts.append(_table_html(report.expense_rows, EXPENSES, report.total_out))
    else:
        parts.append(_table_html(report.rows, report.mode, report.grand_total))
    parts.append("</div>")
    return "\n".join(parts)


PRINT_STYLE = """
<style>
 body { font-family: sans-serif; }
 table.report, table.kpi { width: 100%; border-collapse: collapse; }
 table.report th, table.report td { padding: 6px; border: 1px solid #000; }
 p.total { text-align: right; font-weight: bold; font-size: 1.2em; }
</style>
"""


def print_page(body_html: str) -> str:
    """A standalone page that opens the browser print dialog once loaded."""
    return f"<html><head><meta charset='utf-8'>{PRINT_STYLE}</head><body>{body_html}<script>window.print();</script></body></html>"
