"""
config.py
Environment-driven settings (.env supported) and logging setup.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DB_FILE = Path(os.environ.get("KALIPUR_DB_FILE", Path(__file__).with_name("kalipur.db")))

ADMIN_ALIAS = "admin"
ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@kalipur.com")
ADMIN_DEFAULT_PASSWORD = os.environ.get("ADMIN_DEFAULT_PASSWORD", "admin123")

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or ""
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")

IMGBB_API_KEY = os.environ.get("IMGBB_API_KEY") or ""
IMGBB_UPLOAD_URL = "https://api.imgbb.com/1/upload"

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
