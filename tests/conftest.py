import pytest

import db
import store


@pytest.fixture
def fresh_db(tmp_path, monkeypatch):
    monkeypatch.setattr(db, "DB_FILE", tmp_path / "test.db")
    db.init_db("admin@kalipur.com", "not-a-real-hash")
    monkeypatch.setattr(store, "_listeners", {name: [] for name in store.COLLECTIONS})
    return tmp_path / "test.db"
