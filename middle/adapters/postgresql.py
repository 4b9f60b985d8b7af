"""PostgreSQL adapter using psycopg (v3+)."""

from __future__ import annotations

from typing import Any

from middle.core.command import Command
from middle.core.enums import DatabaseBackend
from middle.core.params import bind


class PostgresqlAdapter:
    """Synchronous PostgreSQL adapter.

    The connection string is a libpq conninfo (``host=... dbname=...``) or a
    ``postgresql://`` URI. PostgreSQL text has no length cap, so bounded and
    unbounded string parameters are sent the same way.
    """

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.POSTGRESQL

    @property
    def paramstyle(self) -> str:
        return "format"

    def connect(self, connection_string: str) -> Any:
        import psycopg

        return psycopg.connect(connection_string)

    def execute(self, connection: Any, command: Command) -> Any:
        statement = bind(command, self.paramstyle)
        cursor = connection.cursor()
        cursor.execute(statement.sql, statement.values)
        return cursor
