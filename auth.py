"""
auth.py
Admin authentication (bcrypt hashing, alias login, change password).
"""

from __future__ import annotations

import logging

import bcrypt

import config
import db

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "ভুল ইউজারনেম বা পাসওয়ার্ড!"


class AuthError(Exception):
    """Sign-in failed; the message never reveals why."""

    def __init__(self):
        super().__init__(LOGIN_FAILED_MESSAGE)


def _to_bcrypt_secret(password: str) -> bytes:
    """
    bcrypt only uses the first 72 BYTES of the password.
    We truncate to 72 bytes to avoid ValueError and to make behavior explicit.
    """
    pw = password.encode("utf-8")
    if len(pw) > 72:
        pw = pw[:72]
    return pw


def hash_password(password: str) -> str:
    secret = _to_bcrypt_secret(password)
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(secret, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_to_bcrypt_secret(password), password_hash.encode("utf-8"))


def resolve_email(username: str) -> str:
    """The "admin" alias maps to the configured admin email."""
    name = username.strip()
    if name.lower() == config.ADMIN_ALIAS:
        return config.ADMIN_EMAIL
    return name


def get_admin_by_email(email: str):
    return db.fetch_one("SELECT * FROM admin_users WHERE lower(email) = lower(?)", (email,))


def login(username: str, password: str) -> str:
    """
    Returns the signed-in email. Raises AuthError for any failure.
    """
    email = resolve_email(username)
    try:
        admin = get_admin_by_email(email)
        ok = bool(admin) and verify_password(password.strip(), admin["password_hash"])
    except Exception:
        logger.exception("Sign-in lookup failed for %s", email)
        raise AuthError()
    if not ok:
        logger.info("Rejected sign-in for %s", email)
        raise AuthError()
    logger.info("Admin %s signed in", admin["email"])
    return admin["email"]


def change_password(email: str, new_password: str) -> None:
    # same normalisation as login()
    db.execute(
        "UPDATE admin_users SET password_hash = ? WHERE email = ?",
        (hash_password(new_password.strip()), email),
    )
    db.clear_force_password_change()
    logger.info("Password changed for %s", email)
