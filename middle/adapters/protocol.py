"""Database adapter protocol.

Every adapter module MUST implement this protocol so that all backends
expose the same public contract through Middle.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from middle.core.command import Command
from middle.core.enums import DatabaseBackend


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def backend(self) -> DatabaseBackend:
        """The backend this adapter targets."""
        ...

    @property
    def paramstyle(self) -> str:
        """Placeholder style the driver expects: 'qmark' (?) or 'format' (%s)."""
        ...

    def connect(self, connection_string: str) -> Any:
        """Open a new physical connection with autocommit off."""
        ...

    def execute(self, connection: Any, command: Command) -> Any:
        """Bind and execute a command, returning the DB-API cursor."""
        ...
