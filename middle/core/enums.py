"""Database backend and parameter kind enumerations."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLSERVER = "sqlserver"
    POSTGRESQL = "postgresql"
    SQLITE = "sqlite"


class ParameterKind(Enum):
    """How a bound argument is declared to the driver."""

    NULL = "null"
    STRING = "string"  # bounded, size 4000
    TEXT = "text"  # unbounded / large-object text
    INFERRED = "inferred"
