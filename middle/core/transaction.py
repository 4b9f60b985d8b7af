"""Transaction management.

A Transaction owns one connection for its whole life:

    open → ACTIVE → [execute]* → COMMITTED | ROLLED_BACK → closed

Used as a context manager it commits on success and rolls back on
exception; the connection is closed on exit either way. run_batch executes
an ordered list of commands all-or-nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from middle.core.command import Command
from middle.core.connection import close_quietly
from middle.core.exceptions import TransactionStateError

logger = logging.getLogger(__name__)


class _TxState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class Transaction:
    """Synchronous transaction context manager over one connection."""

    def __init__(self, connection: Any, adapter: Any) -> None:
        self._connection = connection
        self._adapter = adapter
        self._state = _TxState.IDLE
        self._closed = False

    @property
    def state(self) -> str:
        return self._state.value

    def __enter__(self) -> Transaction:
        self._state = _TxState.ACTIVE
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        try:
            if self._state == _TxState.ACTIVE:
                if exc_type is not None:
                    self.rollback()
                else:
                    self.commit()
        finally:
            self.close()

    def execute(self, command: Command) -> int:
        """Execute a command within this transaction, returning affected rows."""
        self._check_active()
        logger.debug(
            "Executing command with %d parameter(s): %s",
            len(command.parameters),
            command.sql,
        )
        cursor = self._adapter.execute(self._connection, command)
        try:
            return int(cursor.rowcount)
        finally:
            cursor.close()

    def run_batch(self, commands: Iterable[Command]) -> list[int]:
        """Execute commands in order and commit; roll back and re-raise on failure."""
        self._check_active()
        results: list[int] = []
        try:
            for command in commands:
                results.append(self.execute(command))
        except Exception:
            logger.warning("Command %d of batch failed, rolling back", len(results) + 1)
            try:
                self.rollback()
            except Exception:
                logger.exception("Rollback failed")
            raise
        self.commit()
        return results

    def commit(self) -> None:
        """Explicitly commit the transaction."""
        if self._state != _TxState.ACTIVE:
            raise TransactionStateError(self._state.value, "commit")
        self._connection.commit()
        self._state = _TxState.COMMITTED
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        """Explicitly roll back the transaction."""
        if self._state != _TxState.ACTIVE:
            raise TransactionStateError(self._state.value, "rollback")
        try:
            self._connection.rollback()
        finally:
            # a failed rollback is not retried; closing the connection discards the work
            self._state = _TxState.ROLLED_BACK
        logger.debug("Transaction rolled back")

    def close(self) -> None:
        """Close the underlying connection. Idempotent."""
        if not self._closed:
            self._closed = True
            close_quietly(self._connection)

    def _check_active(self) -> None:
        if self._state != _TxState.ACTIVE:
            raise TransactionStateError(self._state.value, "execute")
