"""Shared test fixtures."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from middle.core.config import ConnectionStrings, ConnectionStringSettings
from middle.core.engine import Middle


@pytest.fixture
def fake_settings() -> ConnectionStringSettings:
    return ConnectionStringSettings(name="fake", connection_string="fake", provider="sqlite")


# --- Real SQLite database ---


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """SQLite database file with a populated users table."""
    path = tmp_path / "app.db"
    conn = sqlite3.connect(path)
    conn.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, "
        "email TEXT, score REAL, payload BLOB)"
    )
    conn.execute("INSERT INTO users (id, name, email, score) VALUES (1, 'Alice', 'alice@ex.com', 9.5)")
    conn.execute("INSERT INTO users (id, name, email, score) VALUES (2, 'Bob', NULL, 7.0)")
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def connection_strings(db_path: Path) -> ConnectionStrings:
    return ConnectionStrings.from_mapping(
        {"main": {"connection_string": str(db_path), "provider": "sqlite"}}
    )


@pytest.fixture
def db(connection_strings: ConnectionStrings) -> Middle:
    return Middle("main", connection_strings)


@pytest.fixture
def count_users(db_path: Path):
    """Count rows in users through an independent connection."""

    def _count() -> int:
        conn = sqlite3.connect(db_path)
        try:
            return conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
        finally:
            conn.close()

    return _count
