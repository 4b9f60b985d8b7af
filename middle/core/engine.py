"""Query execution.

Middle resolves a named connection string once, then opens a fresh
connection for every query or transaction batch. Queries are written with
positional ``@N`` placeholders that line up one-to-one, in order, with the
arguments passed after the SQL text::

    db = Middle("main")
    user = db.query_single(User, "SELECT * FROM users WHERE id = @0", 42)
    for row in db.query_dynamic("SELECT * FROM users WHERE name LIKE @0", "A%"):
        ...

Driver errors are not wrapped; they reach the caller as raised by the driver.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from middle.core.command import Command, build_command
from middle.core.config import ConnectionStrings, ConnectionStringSettings
from middle.core.connection import Connector
from middle.core.cursor import ResultCursor
from middle.core.enums import DatabaseBackend
from middle.core.exceptions import EmptyResultError
from middle.core.transaction import Transaction
from middle.mapping.model import ModelMapper
from middle.mapping.record import Record, RecordMapper

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Middle:
    """Data-access helper bound to one named connection string.

    Args:
        connection_string_name: Logical name resolved through
            ``connection_strings``.
        connection_strings: Registry to resolve the name with. Defaults to
            ``ConnectionStrings.from_env()``.

    Raises:
        ConfigurationError: If the name is unknown.
        AdapterError: If no adapter can be loaded for the provider.
    """

    def __init__(
        self,
        connection_string_name: str,
        connection_strings: ConnectionStrings | None = None,
        *,
        adapter: Any = None,
    ) -> None:
        if connection_strings is None:
            connection_strings = ConnectionStrings.from_env()
        self._connector = Connector(connection_strings.get(connection_string_name), adapter)
        self._mappers: dict[type, ModelMapper[Any]] = {}

    @classmethod
    def from_config(
        cls,
        settings: ConnectionStringSettings,
        adapter: Any = None,
    ) -> Middle:
        """Create a Middle from a single ConnectionStringSettings.

        Args:
            settings: Connection string to bind to.
            adapter: Optional adapter instance overriding the provider default.
        """
        return cls(settings.name, ConnectionStrings([settings]), adapter=adapter)

    @property
    def connection_string(self) -> str:
        return self._connector.settings.connection_string

    @property
    def backend(self) -> DatabaseBackend:
        return self._connector.settings.provider

    def _mapper(self, model: type[T]) -> ModelMapper[T]:
        mapper = self._mappers.get(model)
        if mapper is None:
            mapper = self._mappers[model] = ModelMapper(model)
        return mapper

    def build_command(self, sql: str, *args: Any) -> Command:
        """Build a command binding ``args`` to ``@0 .. @N-1``."""
        return build_command(sql, *args)

    def query(self, model: type[T], sql: str, *args: Any) -> ResultCursor[T]:
        """Lazily map every row to a new ``model`` instance.

        Nothing is executed until the cursor is first iterated.
        """
        return ResultCursor(self._connector, build_command(sql, *args), self._mapper(model))

    def query_dynamic(self, sql: str, *args: Any) -> ResultCursor[Record]:
        """Lazily map every row to a Record."""
        return ResultCursor(self._connector, build_command(sql, *args), RecordMapper())

    def query_single(self, model: type[T], sql: str, *args: Any) -> T | None:
        """Return the first row as ``model``, or None if there are no rows."""
        return self.query(model, sql, *args).first()

    def query_single_dynamic(self, sql: str, *args: Any) -> Record:
        """Return the first row as a Record.

        Raises:
            EmptyResultError: If the query returns no rows.
        """
        record = self.query_dynamic(sql, *args).first()
        if record is None:
            raise EmptyResultError(sql)
        return record

    def execute(self, sql: str, *args: Any) -> int:
        """Execute one statement in its own transaction. Returns affected rows."""
        return self.transaction(build_command(sql, *args))[0]

    def transaction(self, *commands: Command) -> list[int]:
        """Execute commands in order inside one transaction.

        Returns the affected-row count of each command, in input order. On
        any failure the whole batch is rolled back and the original error is
        re-raised. The connection is always closed.
        """
        connection = self._connector.open()
        logger.debug("Running batch of %d command(s)", len(commands))
        with Transaction(connection, self._connector.adapter) as tx:
            return tx.run_batch(commands)
