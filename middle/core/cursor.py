"""Lazy, single-pass result cursors.

A ResultCursor does nothing until it is first advanced. It then opens its own
connection, executes the command and maps rows one at a time. The cursor and
the connection are closed as soon as the rows run out, mapping or the driver
fails, or the caller closes it (directly or by leaving a ``with`` block).
Once closed it stays closed: iterating again yields nothing.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from middle.core.command import Command
from middle.core.connection import Connector, close_quietly
from middle.mapping.plan import MappingPlan
from middle.mapping.protocol import Mapper

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResultCursor(Generic[T]):
    """Iterator over mapped rows that owns one connection."""

    def __init__(self, connector: Connector, command: Command, mapper: Mapper[T]) -> None:
        self._closed = False
        self._connector = connector
        self._command = command
        self._mapper = mapper
        self._connection: Any = None
        self._cursor: Any = None
        self._plan: MappingPlan | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def command(self) -> Command:
        return self._command

    def __iter__(self) -> ResultCursor[T]:
        return self

    def __next__(self) -> T:
        if self._closed:
            raise StopIteration
        try:
            if self._cursor is None:
                self._open()
            row = self._cursor.fetchone() if self._plan is not None else None
            if row is not None:
                return self._mapper.map_row(self._plan, row)  # type: ignore[arg-type]
        except BaseException:
            self.close()
            raise
        self.close()
        raise StopIteration

    def _open(self) -> None:
        self._connection = self._connector.open()
        logger.debug(
            "Executing query with %d parameter(s): %s",
            len(self._command.parameters),
            self._command.sql,
        )
        self._cursor = self._connector.adapter.execute(self._connection, self._command)
        if self._cursor.description is not None:
            columns = [desc[0] for desc in self._cursor.description]
            self._plan = self._mapper.compile(columns)

    def first(self) -> T | None:
        """Return the first mapped row (or None) and close the cursor."""
        with self:
            return next(self, None)

    def close(self) -> None:
        """Release the driver cursor and the connection. Idempotent."""
        if self._closed:
            return
        self._closed = True
        if self._cursor is not None:
            close_quietly(self._cursor)
            self._cursor = None
        if self._connection is not None:
            close_quietly(self._connection)
            self._connection = None
            logger.debug("Closed connection '%s'", self._connector.settings.name)

    def __enter__(self) -> ResultCursor[T]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()

    def __del__(self) -> None:
        if not getattr(self, "_closed", True):
            self.close()
