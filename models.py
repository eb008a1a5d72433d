"""
models.py
Domain dataclasses and fixed lookup values (collectors, categories, countries).
"""

from __future__ import annotations

from dataclasses import dataclass, field

# First month the fund started collecting
MIN_MONTH = "2025-12"
FIXED_ADDRESS = "কালিপুর, হোমনা, কুমিল্লা"
DEFAULT_PHOTO = "https://png.pngtree.com/png-vector/20231019/ourmid/pngtree-user-profile-avatar-png-image_10211467.png"
DEFAULT_COUNTRY = "বাংলাদেশ"
UNKNOWN_MEMBER = "অজানা সদস্য"

COLLECTORS = ["কাউছার", "সাব্বির", "সাঈদ", "ইমন", "সাইফুদ্দিন"]

COUNTRY_OPTIONS = [
    "বাংলাদেশ", "সৌদি আরব", "সংযুক্ত আরব আমিরাত", "ওমান", "মালয়েশিয়া", "কাতার", "কুয়েত", "সিঙ্গাপুর",
    "যুক্তরাজ্য", "ইতালি", "পর্তুগাল", "ফ্রান্স", "যুক্তরাষ্ট্র", "অস্ট্রেলিয়া", "অন্যান্য",
]

# category id -> Bengali label
EXPENSE_CATEGORIES = {
    "Salary": "বেতন",
    "Biriyani": "বিরিয়ানি",
    "Snacks": "নাস্তা",
    "Others": "অন্যান্য",
}

# Quick presets for itemised expenses
PRESET_ITEMS = {
    "Biriyani": ["চাল (৫ কেজি)", "মুরগির মাংস", "তেল ও ঘি", "মসলাপাতি", "সালাদ ও টকদই"],
    "Snacks": ["চানাচুর", "মুড়ি", "চা পাতা ও চিনি", "বিস্কুট"],
}

MEMBER_STATUSES = ("active", "inactive")

# Expenses at or above this amount raise an "alert" notification
LARGE_EXPENSE_THRESHOLD = 5000


@dataclass(frozen=True)
class Member:
    id: str
    name: str
    house_name: str
    mobile: str = ""
    country: str = DEFAULT_COUNTRY
    status: str = "active"  # 'active' or 'inactive'
    photo_url: str = DEFAULT_PHOTO


@dataclass(frozen=True)
class Subscription:
    id: str  # "{member_id}_{month}"
    member_id: str
    amount: float
    month: str  # YYYY-MM
    date: str
    received_by: str
    receipt_no: str


@dataclass(frozen=True)
class ExpenseItem:
    name: str
    amount: float


@dataclass(frozen=True)
class Expense:
    id: str
    category: str
    description: str
    date: str  # YYYY-MM-DD
    items: tuple[ExpenseItem, ...] = ()

    @property
    def amount(self) -> float:
        return sum(float(i.amount) for i in self.items)


@dataclass(frozen=True)
class TrashRecord:
    id: str
    original_id: str
    type: str  # 'member' or 'expense'
    data: dict = field(default_factory=dict)
    deleted_at: str = ""


@dataclass(frozen=True)
class AppNotification:
    id: str
    type: str  # success/info/warning/alert
    title: str
    message: str
    action_view: str | None = None
    created_at: float = 0.0
