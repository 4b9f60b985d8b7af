"""Unit tests for Middle query execution."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass

import pytest

from middle.core.cursor import ResultCursor
from middle.core.engine import Middle
from middle.core.enums import DatabaseBackend
from middle.core.exceptions import EmptyResultError, ParameterBindingError
from middle.mapping.record import Record


@dataclass
class User:
    id: int = 0
    name: str = ""
    email: str | None = "unset"
    nickname: str = "none"


class TestMiddle:
    def test_backend_and_connection_string(self, db: Middle, db_path) -> None:
        assert db.backend is DatabaseBackend.SQLITE
        assert db.connection_string == str(db_path)

    def test_query_returns_lazy_cursor(self, db: Middle) -> None:
        cursor = db.query(User, "SELECT * FROM users ORDER BY id")
        assert isinstance(cursor, ResultCursor)
        users = list(cursor)
        assert [u.name for u in users] == ["Alice", "Bob"]

    def test_query_maps_null_to_none(self, db: Middle) -> None:
        bob = db.query_single(User, "SELECT id, name, email FROM users WHERE id = @0", 2)
        assert bob is not None
        assert bob.email is None
        assert bob.nickname == "none"

    def test_query_case_insensitive_columns(self, db: Middle) -> None:
        user = db.query_single(User, "SELECT id AS ID, name AS NAME FROM users WHERE id = @0", 1)
        assert user == User(id=1, name="Alice")

    def test_query_single_returns_none_on_zero_rows(self, db: Middle) -> None:
        assert db.query_single(User, "SELECT * FROM users WHERE id = @0", 999) is None

    def test_query_single_returns_first_of_many(self, db: Middle) -> None:
        user = db.query_single(User, "SELECT * FROM users ORDER BY id DESC")
        assert user is not None
        assert user.name == "Bob"

    def test_query_dynamic(self, db: Middle) -> None:
        rows = list(db.query_dynamic("SELECT id, name, email FROM users ORDER BY id"))
        assert all(isinstance(r, Record) for r in rows)
        assert rows[0] == {"id": 1, "name": "Alice", "email": "alice@ex.com"}
        assert rows[1].email is None
        assert list(rows[1].keys()) == ["id", "name", "email"]

    def test_query_single_dynamic(self, db: Middle) -> None:
        row = db.query_single_dynamic("SELECT name, score FROM users WHERE id = @0", 1)
        assert row.name == "Alice"
        assert row.score == 9.5

    def test_query_single_dynamic_raises_on_zero_rows(self, db: Middle) -> None:
        with pytest.raises(EmptyResultError):
            db.query_single_dynamic("SELECT * FROM users WHERE id = @0", 999)

    def test_positional_parameters(self, db: Middle) -> None:
        rows = list(
            db.query_dynamic(
                "SELECT id FROM users WHERE name = @1 OR id = @0 ORDER BY id", 1, "Bob"
            )
        )
        assert [r.id for r in rows] == [1, 2]

    def test_null_argument(self, db: Middle) -> None:
        rows = list(db.query_dynamic("SELECT id FROM users WHERE email IS @0", None))
        assert [r.id for r in rows] == [2]

    def test_guid_argument_stored_as_string(self, db: Middle) -> None:
        value = uuid.uuid4()
        db.execute("UPDATE users SET email = @0 WHERE id = @1", value, 1)
        row = db.query_single_dynamic("SELECT email FROM users WHERE id = @0", 1)
        assert row.email == str(value)

    def test_long_string_not_truncated(self, db: Middle) -> None:
        text = "x" * 5000
        db.execute("UPDATE users SET email = @0 WHERE id = @1", text, 1)
        row = db.query_single_dynamic("SELECT email FROM users WHERE id = @0", 1)
        assert len(row.email) == 5000

    def test_comments_and_backslashes_do_not_hide_placeholders(self, db: Middle) -> None:
        row = db.query_single_dynamic("SELECT 1 AS k -- the user's id\n, @0 AS v, 'x' AS q", 5)
        assert (row.k, row.v, row.q) == (1, 5, "x")
        row = db.query_single_dynamic("SELECT 'C:\\' AS p, @0 AS v, 'x' AS q", 5)
        assert (row.p, row.v, row.q) == ("C:\\", 5, "x")

    def test_missing_argument_raises(self, db: Middle) -> None:
        with pytest.raises(ParameterBindingError):
            db.query_single_dynamic("SELECT * FROM users WHERE id = @0")

    def test_nothing_runs_until_iterated(self, db: Middle) -> None:
        # Invalid SQL only fails once the cursor is advanced
        cursor = db.query_dynamic("SELECT * FROM missing_table")
        with pytest.raises(sqlite3.OperationalError, match="missing_table"):
            next(cursor)
        assert cursor.closed

    def test_build_command(self, db: Middle) -> None:
        cmd = db.build_command("SELECT @0", "a")
        assert cmd.parameters[0].name == "@0"
