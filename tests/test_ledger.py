from datetime import date

import ledger
from models import Expense, ExpenseItem, Member, Subscription


def sub(member_id, month, amount, day="01"):
    return Subscription(
        id=f"{member_id}_{month}", member_id=member_id, amount=amount, month=month,
        date=f"{month}-{day}", received_by="x", receipt_no="r",
    )


def exp(id, date_, *amounts, description="d"):
    return Expense(id=id, category="Others", description=description, date=date_,
                   items=tuple(ExpenseItem(f"i{n}", a) for n, a in enumerate(amounts)))


MEMBERS = [
    Member(id="m1", name="Karim", house_name="Mia Bari"),
    Member(id="m2", name="Rahim", house_name="Khan Bari"),
    Member(id="m3", name="Salam", house_name="Bhuiyan Bari", status="inactive"),
]


def test_totals_and_balance():
    subs = [sub("m1", "2026-01", 100), sub("m2", "2026-01", 250)]
    exps = [exp("e1", "2026-01-05", 80)]
    assert ledger.total_collections(subs) == 350
    assert ledger.total_expenses(exps) == 80
    assert ledger.fund_balance(subs, exps) == 270


def test_empty_collections_are_zero():
    assert ledger.total_collections([]) == 0
    assert ledger.total_expenses([]) == 0
    assert ledger.fund_balance([], []) == 0
    assert ledger.month_balance([], [], "2026-01") == 0
    assert ledger.member_summary([], []) == []


def test_expense_amount_is_sum_of_items():
    assert exp("e1", "2026-01-05", 30, 20.5).amount == 50.5
    assert exp("e2", "2026-01-05").amount == 0


def test_is_paid_needs_exact_month():
    subs = [sub("m1", "2026-01", 100)]
    assert ledger.is_paid(subs, "m1", "2026-01")
    assert not ledger.is_paid(subs, "m1", "2026-02")
    assert not ledger.is_paid(subs, "m1", "2025-12")
    assert not ledger.is_paid(subs, "m2", "2026-01")


def test_member_total():
    subs = [sub("m1", "2026-01", 100), sub("m1", "2026-02", 150), sub("m2", "2026-01", 999)]
    assert ledger.member_total(subs, "m1") == 250
    assert ledger.member_total(subs, "nobody") == 0


def test_month_scoped_totals():
    subs = [sub("m1", "2026-01", 100), sub("m2", "2026-02", 300)]
    exps = [exp("e1", "2026-01-31", 40), exp("e2", "2026-02-01", 10), exp("e3", "2025-01-15", 999)]
    assert ledger.month_collections(subs, "2026-01") == 100
    assert ledger.month_expenses(exps, "2026-01") == 40
    assert ledger.month_balance(subs, exps, "2026-02") == 290
    assert ledger.month_collections(subs, "all") == 400


def test_expenses_with_unparseable_dates_never_match_a_month():
    exps = [exp("e1", "bad-date", 40)]
    assert ledger.expenses_for_month(exps, "2026-01") == []


def test_inactive_members_excluded_from_rollups():
    subs = [sub("m1", "2026-01", 100), sub("m3", "2026-01", 100)]
    assert ledger.paid_ratio(MEMBERS, subs, "2026-01") == (1, 2)
    assert [m.id for m in ledger.defaulters(MEMBERS, subs, "2026-01")] == ["m2"]
    assert [m.id for m, _ in ledger.member_summary(MEMBERS, subs)] == ["m1", "m2"]


def test_member_summary_descending_and_stable():
    members = [
        Member(id="a", name="A", house_name="h"),
        Member(id="b", name="B", house_name="h"),
        Member(id="c", name="C", house_name="h"),
        Member(id="d", name="D", house_name="h"),
    ]
    subs = [sub("b", "2026-01", 50), sub("c", "2026-01", 200), sub("a", "2026-01", 50)]
    rows = ledger.member_summary(members, subs)
    assert [(m.id, t) for m, t in rows] == [("c", 200), ("a", 50), ("b", 50), ("d", 0)]


def test_sorting_is_newest_first():
    subs = [sub("m1", "2025-12", 1), sub("m1", "2026-02", 1), sub("m2", "2026-01", 1)]
    assert [s.month for s in ledger.sort_subscriptions(subs)] == ["2026-02", "2026-01", "2025-12"]
    exps = [exp("a", "2026-01-02", 1), exp("b", "2026-03-01", 1), exp("c", "2026-01-20", 1)]
    assert [e.id for e in ledger.sort_expenses(exps)] == ["b", "c", "a"]


def test_monthly_series_last_six_months():
    subs = [sub("m1", "2026-03", 100), sub("m2", "2025-10", 70)]
    exps = [exp("e1", "2026-03-10", 30)]
    series = ledger.monthly_series(subs, exps, today=date(2026, 3, 20))
    assert [r["month"] for r in series] == ["2025-10", "2025-11", "2025-12", "2026-01", "2026-02", "2026-03"]
    assert series[0]["collections"] == 70
    assert series[-1] == {"month": "2026-03", "collections": 100, "expenses": 30}


def test_recent_transactions_merges_and_limits():
    subs = [sub("m1", "2026-01", 100, day="05"), sub("m2", "2026-01", 100, day="01")]
    exps = [exp("e1", "2026-01-03", 40), exp("e2", "2026-01-10", 20)]
    rows = ledger.recent_transactions(subs, exps, limit=3)
    assert [(r["type"], r["date"]) for r in rows] == [
        ("expense", "2026-01-10"),
        ("income", "2026-01-05"),
        ("expense", "2026-01-03"),
    ]
