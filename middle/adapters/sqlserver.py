"""SQL Server adapter using pyodbc."""

from __future__ import annotations

from typing import Any

from middle.core.command import Command, Parameter
from middle.core.enums import DatabaseBackend, ParameterKind
from middle.core.params import bind

_STRING_KINDS = (ParameterKind.STRING, ParameterKind.TEXT)


def _input_sizes(parameters: tuple[Parameter, ...]) -> list[tuple[int, int, int] | None] | None:
    """Declare string parameters as nvarchar(4000) or nvarchar(max).

    Returns None when no parameter needs a declaration.
    """
    if not any(p.kind in _STRING_KINDS for p in parameters):
        return None

    import pyodbc

    sizes: list[tuple[int, int, int] | None] = []
    for p in parameters:
        if p.kind is ParameterKind.STRING:
            sizes.append((pyodbc.SQL_WVARCHAR, p.size or 0, 0))
        elif p.kind is ParameterKind.TEXT:
            sizes.append((pyodbc.SQL_WLONGVARCHAR, 0, 0))
        else:
            sizes.append(None)
    return sizes


class SqlServerAdapter:
    """Synchronous SQL Server adapter.

    The connection string is an ODBC connection string, e.g.
    ``DRIVER={ODBC Driver 18 for SQL Server};SERVER=host;DATABASE=app;...``.
    """

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.SQLSERVER

    @property
    def paramstyle(self) -> str:
        return "qmark"

    def connect(self, connection_string: str) -> Any:
        import pyodbc

        return pyodbc.connect(connection_string, autocommit=False)

    def execute(self, connection: Any, command: Command) -> Any:
        statement = bind(command, self.paramstyle)
        cursor = connection.cursor()
        if statement.parameters is None:
            cursor.execute(statement.sql)
            return cursor

        sizes = _input_sizes(statement.parameters)
        if sizes is not None:
            cursor.setinputsizes(sizes)
        cursor.execute(statement.sql, statement.values)
        return cursor
