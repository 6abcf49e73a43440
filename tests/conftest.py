from __future__ import annotations

import os
import sys

import pytest

# Ensure the app package is importable when tests change directories
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, BASE_DIR)

from app import cache, create_app, db  # noqa: E402
from app.models import Customer  # noqa: E402


@pytest.fixture
def app(tmp_path, monkeypatch):
    os.environ.setdefault("SECRET_KEY", "testsecret")
    monkeypatch.setenv("RATELIMIT_ENABLED", "false")
    monkeypatch.setenv("CACHE_TYPE", "SimpleCache")
    monkeypatch.delenv("DATABASE_URL", raising=False)

    # Ensure a clean database for each test within the temp directory
    db_path = tmp_path / "invoices.db"
    if db_path.exists():
        os.remove(db_path)
    monkeypatch.setenv("DATABASE_PATH", str(db_path))

    app = create_app([])
    app.config.update({"TESTING": True, "WTF_CSRF_ENABLED": False})

    with app.app_context():
        cache.clear()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def customer_id(app):
    with app.app_context():
        customer = Customer(name="Jane Doe", email="jane@example.com")
        db.session.add(customer)
        db.session.commit()
        return customer.id
