"""
utils.py
Month ranges, Bengali month/digit formatting, money formatting.
"""

from __future__ import annotations

from datetime import date

from models import MIN_MONTH

BENGALI_DIGITS = "০১২৩৪৫৬৭৮৯"
_TO_BN = str.maketrans("0123456789", BENGALI_DIGITS)
_FROM_BN = str.maketrans(BENGALI_DIGITS, "0123456789")

BENGALI_MONTHS = {
    "01": "জানুয়ারি", "02": "ফেব্রুয়ারি", "03": "মার্চ", "04": "এপ্রিল",
    "05": "মে", "06": "জুন", "07": "জুলাই", "08": "আগস্ট",
    "09": "সেপ্টেম্বর", "10": "অক্টোবর", "11": "নভেম্বর", "12": "ডিসেম্বর",
}

ALL_MONTHS = "all"
ALL_MONTHS_LABEL = "সকল মাস"


def parse_month(month: str) -> tuple[int, int]:
    """
    "YYYY-MM" -> (year, month). Raises ValueError on anything else.
    """
    year_s, _, month_s = month.strip().partition("-")
    year, mon = int(year_s), int(month_s)
    if not 1 <= mon <= 12:
        raise ValueError(f"invalid month: {month!r}")
    return year, mon


def month_of_date(iso_date: str) -> tuple[int, int] | None:
    """
    (year, month) of an ISO date string, or None when it can't be parsed.
    """
    try:
        d = date.fromisoformat(iso_date.strip()[:10])
    except (ValueError, AttributeError):
        return None
    return d.year, d.month


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def current_month(today: date | None = None) -> str:
    today = today or date.today()
    return format_month(today.year, today.month)


def default_month(today: date | None = None, start: str = MIN_MONTH) -> str:
    """Current month, clamped so it never precedes the start month."""
    now = parse_month(current_month(today))
    first = parse_month(start)
    return format_month(*max(now, first))


def available_months(today: date | None = None, start: str = MIN_MONTH) -> list[str]:
    """
    All months from `start` up to the month of `today`, newest first.
    If today is before start, only the start month is returned.
    """
    year, mon = parse_month(start)
    end = parse_month(current_month(today))
    months = [format_month(year, mon)]
    while (year, mon) < end:
        year, mon = (year + 1, 1) if mon == 12 else (year, mon + 1)
        months.append(format_month(year, mon))
    months.reverse()
    return months


def last_n_months(today: date | None = None, n: int = 6) -> list[str]:
    """The n months ending with today's month, oldest first."""
    year, mon = parse_month(current_month(today))
    out = []
    for _ in range(n):
        out.append(format_month(year, mon))
        year, mon = (year - 1, 12) if mon == 1 else (year, mon - 1)
    out.reverse()
    return out


def to_bengali_digits(value) -> str:
    return str(value).translate(_TO_BN)


def from_bengali_digits(value: str) -> str:
    return str(value).translate(_FROM_BN)


def bengali_month_name(month: str, bengali_digits: bool = True) -> str:
    if month == ALL_MONTHS:
        return ALL_MONTHS_LABEL
    year, _, mon = month.partition("-")
    name = BENGALI_MONTHS.get(mon)
    if not name or not year.isdigit():
        return month
    return f"{name} {to_bengali_digits(year) if bengali_digits else year}"


def short_month_name(month: str) -> str:
    """Month name only (chart axis labels)."""
    return BENGALI_MONTHS.get(month.partition("-")[2], month)


def format_taka(amount: float) -> str:
    amount = float(amount)
    if amount.is_integer():
        return f"৳{int(amount):,}"
    return f"৳{amount:,.2f}"
