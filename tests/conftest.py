"""Shared test fixtures for todo-core."""

import sqlite3

import pytest

from todo_core.config import settings
from todo_core.db import SCHEMA_PATH, Core
from todo_core.main import create_app


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Use the minimum bcrypt work factor so tests stay fast."""
    monkeypatch.setattr(settings, "bcrypt_work_factor", 4)


@pytest.fixture
def test_db():
    """Create in-memory test database with schema."""
    db = sqlite3.connect(":memory:")
    db.row_factory = sqlite3.Row

    # Enable foreign key constraints (required for SQLite)
    db.execute("PRAGMA foreign_keys = ON")

    db.executescript(SCHEMA_PATH.read_text())
    db.commit()

    yield db

    db.close()


@pytest.fixture
def core(test_db):
    """Core bound to the in-memory test database."""
    return Core(test_db)


@pytest.fixture
def app(tmp_path):
    """Create an app backed by a fresh temp-file database.

    A file is used instead of :memory: because every Core opens its own
    connection.
    """
    app = create_app(str(tmp_path / "test.db"))
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def register_user(client):
    """Register a user through the API.

    Returns a function (email, password) -> token.
    """
    def _register(email: str, password: str = "TestPass123") -> str:
        response = client.post("/api/register", json={"email": email, "password": password})
        assert response.status_code == 200, response.get_json()
        return response.get_json()["token"]

    return _register


@pytest.fixture
def auth_headers(register_user):
    """Authorization headers for a freshly registered user."""
    token = register_user("alice@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(register_user):
    """Authorization headers for a second, unrelated user."""
    token = register_user("bob@example.com")
    return {"Authorization": f"Bearer {token}"}
