from datetime import date

import pytest

from utils import (
    available_months,
    bengali_month_name,
    default_month,
    format_taka,
    from_bengali_digits,
    last_n_months,
    month_of_date,
    parse_month,
    to_bengali_digits,
)


def test_available_months_newest_first():
    assert available_months(date(2026, 3, 15), start="2025-12") == ["2026-03", "2026-02", "2026-01", "2025-12"]


def test_available_months_before_start_is_clamped():
    assert available_months(date(2025, 6, 1), start="2025-12") == ["2025-12"]


def test_available_months_same_month():
    assert available_months(date(2025, 12, 31), start="2025-12") == ["2025-12"]


def test_default_month_clamps_to_start():
    assert default_month(date(2024, 1, 1), start="2025-12") == "2025-12"
    assert default_month(date(2026, 7, 4), start="2025-12") == "2026-07"


def test_last_n_months_crosses_year():
    assert last_n_months(date(2026, 2, 10), 4) == ["2025-11", "2025-12", "2026-01", "2026-02"]


def test_parse_month_rejects_garbage():
    assert parse_month("2026-03") == (2026, 3)
    with pytest.raises(ValueError):
        parse_month("2026-13")
    with pytest.raises(ValueError):
        parse_month("March")


def test_month_of_date():
    assert month_of_date("2026-01-31") == (2026, 1)
    assert month_of_date("2026-01-31T10:00:00") == (2026, 1)
    assert month_of_date("31/01/2026") is None


def test_bengali_digits():
    assert to_bengali_digits("2026") == "২০২৬"
    assert to_bengali_digits("RCP-202603-AB12") == "RCP-২০২৬০৩-AB১২"
    assert to_bengali_digits(1500) == "১৫০০"
    assert from_bengali_digits(to_bengali_digits("0123456789")) == "0123456789"


def test_bengali_month_name():
    assert bengali_month_name("2026-03") == "মার্চ ২০২৬"
    assert bengali_month_name("2026-03", bengali_digits=False) == "মার্চ 2026"
    assert bengali_month_name("all") == "সকল মাস"
    assert bengali_month_name("2026-13") == "2026-13"
    assert bengali_month_name("nonsense") == "nonsense"


def test_format_taka():
    assert format_taka(1234567) == "৳1,234,567"
    assert format_taka(12.5) == "৳12.50"
    assert format_taka(0) == "৳0"
