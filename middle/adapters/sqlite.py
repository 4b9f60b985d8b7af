"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import sqlite3

from middle.core.command import Command
from middle.core.enums import DatabaseBackend
from middle.core.params import bind


class SqliteAdapter:
    """Synchronous SQLite adapter.

    The connection string is a database path, ``:memory:`` or a
    ``file:`` URI.
    """

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.SQLITE

    @property
    def paramstyle(self) -> str:
        return "qmark"

    def connect(self, connection_string: str) -> sqlite3.Connection:
        return sqlite3.connect(connection_string, uri=connection_string.startswith("file:"))

    def execute(self, connection: sqlite3.Connection, command: Command) -> sqlite3.Cursor:
        statement = bind(command, self.paramstyle)
        cursor = connection.cursor()
        if statement.parameters is None:
            cursor.execute(statement.sql)
        else:
            cursor.execute(statement.sql, statement.values)
        return cursor
