import pytest

import auth
import config
import db


@pytest.fixture
def admin_db(tmp_path, monkeypatch):
    monkeypatch.setattr(db, "DB_FILE", tmp_path / "auth.db")
    db.init_db(config.ADMIN_EMAIL, auth.hash_password("secret123"))


def test_hash_and_verify():
    h = auth.hash_password("pässwörd")
    assert auth.verify_password("pässwörd", h)
    assert not auth.verify_password("password", h)


def test_long_passwords_truncated_to_72_bytes():
    h = auth.hash_password("x" * 100)
    assert auth.verify_password("x" * 72, h)


def test_admin_alias_resolves_to_configured_email():
    assert auth.resolve_email(" Admin ") == config.ADMIN_EMAIL
    assert auth.resolve_email("someone@example.com") == "someone@example.com"


def test_login_with_alias(admin_db):
    assert auth.login("admin", "secret123") == config.ADMIN_EMAIL


def test_wrong_password_and_unknown_user_get_same_message(admin_db):
    with pytest.raises(auth.AuthError) as wrong:
        auth.login("admin", "nope")
    with pytest.raises(auth.AuthError) as unknown:
        auth.login("ghost@example.com", "secret123")
    assert str(wrong.value) == str(unknown.value) == auth.LOGIN_FAILED_MESSAGE


def test_first_login_forces_password_change(admin_db):
    assert db.is_force_password_change()
    auth.change_password(config.ADMIN_EMAIL, "brand-new")
    assert not db.is_force_password_change()
    assert auth.login("admin", "brand-new") == config.ADMIN_EMAIL


def test_changed_password_matches_login_normalisation(admin_db):
    auth.change_password(config.ADMIN_EMAIL, " newpass1 ")
    assert auth.login("admin", " newpass1 ") == config.ADMIN_EMAIL
    assert auth.login("admin", "newpass1") == config.ADMIN_EMAIL
