"""
db.py
SQLite helpers + initialization (creates DB/tables, inserts default admin, etc.)
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone

import config

DB_FILE = config.DB_FILE

logger = logging.getLogger(__name__)


@contextmanager
def get_conn():
    conn = sqlite3.connect(DB_FILE, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def execute(sql: str, params: tuple = ()) -> int:
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.lastrowid


def fetch_one(sql: str, params: tuple = ()):
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.fetchone()


def fetch_all(sql: str, params: tuple = ()) -> list[sqlite3.Row]:
    with get_conn() as conn:
        cur = conn.execute(sql, params)
        return cur.fetchall()


def _create_tables() -> None:
    execute(
        """
        CREATE TABLE IF NOT EXISTS admin_users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at TEXT NOT NULL
        )
        """
    )

    execute(
        """
        CREATE TABLE IF NOT EXISTS members (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            house_name TEXT NOT NULL,
            mobile TEXT NOT NULL DEFAULT '',
            country TEXT NOT NULL,
            status TEXT NOT NULL CHECK(status IN ('active','inactive')),
            photo_url TEXT NOT NULL
        )
        """
    )

    # id is "{member_id}_{month}": one row per member per month
    execute(
        """
        CREATE TABLE IF NOT EXISTS subscriptions (
            id TEXT PRIMARY KEY,
            member_id TEXT NOT NULL,
            amount REAL NOT NULL,
            month TEXT NOT NULL,
            date TEXT NOT NULL,
            received_by TEXT NOT NULL,
            receipt_no TEXT NOT NULL
        )
        """
    )

    # amount is derived from items, never stored
    execute(
        """
        CREATE TABLE IF NOT EXISTS expenses (
            id TEXT PRIMARY KEY,
            category TEXT NOT NULL,
            description TEXT NOT NULL,
            date TEXT NOT NULL,
            items TEXT NOT NULL DEFAULT '[]'
        )
        """
    )

    execute(
        """
        CREATE TABLE IF NOT EXISTS trash (
            id TEXT PRIMARY KEY,
            original_id TEXT NOT NULL,
            type TEXT NOT NULL CHECK(type IN ('member','expense')),
            data TEXT NOT NULL,
            deleted_at TEXT NOT NULL
        )
        """
    )

    execute(
        """
        CREATE TABLE IF NOT EXISTS app_settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
        """
    )


def get_setting(key: str, default: str | None = None) -> str | None:
    row = fetch_one("SELECT value FROM app_settings WHERE key = ?", (key,))
    if row:
        return str(row["value"])
    return default


def set_setting(key: str, value: str) -> None:
    execute(
        """
        INSERT INTO app_settings(key, value) VALUES(?, ?)
        ON CONFLICT(key) DO UPDATE SET value=excluded.value
        """,
        (key, value),
    )


def init_db(admin_email: str, default_admin_hash: str) -> None:
    """
    Initialize the database.
    - Create tables
    - Insert the default admin account if no admin exists
    - Force password change on first login
    """
    _create_tables()

    admin = fetch_one("SELECT id FROM admin_users LIMIT 1")
    if not admin:
        now = datetime.now(timezone.utc).isoformat(timespec="seconds")
        execute(
            "INSERT INTO admin_users(email, password_hash, created_at) VALUES(?,?,?)",
            (admin_email, default_admin_hash, now),
        )
        set_setting("force_password_change", "1")
        logger.info("Seeded default admin account %s", admin_email)
    else:
        if get_setting("force_password_change") is None:
            set_setting("force_password_change", "0")


def is_force_password_change() -> bool:
    return get_setting("force_password_change") == "1"


def clear_force_password_change() -> None:
    set_setting("force_password_change", "0")
