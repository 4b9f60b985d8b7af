"""Adapter loading and per-call connections.

Connector resolves the adapter for a backend and opens exactly one physical
connection per query or transaction batch. There is no pooling: whatever
the driver itself does is all there is.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from middle.core.config import ConnectionStringSettings
from middle.core.enums import DatabaseBackend
from middle.core.exceptions import AdapterError

logger = logging.getLogger(__name__)

# Adapter module mapping: backend → (module_path, adapter_class)
_ADAPTER_MAP: dict[DatabaseBackend, tuple[str, str]] = {
    DatabaseBackend.SQLSERVER: ("middle.adapters.sqlserver", "SqlServerAdapter"),
    DatabaseBackend.POSTGRESQL: ("middle.adapters.postgresql", "PostgresqlAdapter"),
    DatabaseBackend.SQLITE: ("middle.adapters.sqlite", "SqliteAdapter"),
}


def load_adapter(backend: DatabaseBackend | str) -> Any:
    """Load the adapter for a backend or backend name."""
    try:
        backend = DatabaseBackend(backend)
    except ValueError:
        raise AdapterError(f"Unsupported database backend: {backend}") from None

    module_path, cls_name = _ADAPTER_MAP[backend]
    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{backend.value}': {e}") from e


class Connector:
    """Opens connections for one named connection string."""

    def __init__(self, settings: ConnectionStringSettings, adapter: Any = None) -> None:
        self.settings = settings
        self._adapter = adapter if adapter is not None else load_adapter(settings.provider)

    @property
    def adapter(self) -> Any:
        return self._adapter

    def open(self) -> Any:
        """Open a new connection. The caller owns it and must close it."""
        logger.debug("Opening %s connection '%s'", self.settings.provider.value, self.settings.name)
        return self._adapter.connect(self.settings.connection_string)


def close_quietly(resource: Any) -> None:
    """Close a cursor or connection, logging (not raising) close failures."""
    try:
        resource.close()
    except Exception:
        logger.warning("Failed to close %r", resource, exc_info=True)
