"""Middle exception hierarchy.

Only errors raised by middle itself live here. Driver exceptions
(``pyodbc.Error``, ``psycopg.Error``, ``sqlite3.Error``) reach the caller
unchanged.
"""

from __future__ import annotations


class MiddleError(Exception):
    """Base exception for all middle errors."""


# --- Configuration ---


class ConfigurationError(MiddleError):
    """Raised when a connection string cannot be resolved or is invalid."""


class UnknownConnectionStringError(ConfigurationError, KeyError):
    """Raised when no connection string is registered under a name."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"Unknown connection string '{name}' (known: {known})")

    def __str__(self) -> str:
        return str(self.args[0])


# --- Execution ---


class ExecutionError(MiddleError):
    """Base for query execution errors."""


class ParameterBindingError(ExecutionError):
    """Raised when a placeholder has no matching positional argument."""

    def __init__(self, placeholder: str, arg_count: int) -> None:
        self.placeholder = placeholder
        self.arg_count = arg_count
        super().__init__(
            f"Placeholder {placeholder} has no matching argument ({arg_count} supplied)"
        )


class EmptyResultError(ExecutionError):
    """Raised when a single-record query produces no rows."""

    def __init__(self, sql: str) -> None:
        self.sql = sql
        super().__init__(f"Query returned no rows: {sql!r}")


# --- Mapping ---


class MappingError(MiddleError):
    """Base for mapping errors."""


class DuplicateColumnError(MappingError):
    """Raised when a result set has two columns with the same name."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Duplicate column name '{column}' in result set")


# --- Transaction ---


class TransactionError(MiddleError):
    """Base for transaction errors."""


class TransactionStateError(TransactionError):
    """Raised on invalid transaction state transitions."""

    def __init__(self, current_state: str, attempted_action: str) -> None:
        self.current_state = current_state
        self.attempted_action = attempted_action
        super().__init__(f"Cannot {attempted_action} transaction in state '{current_state}'")


# --- Adapter ---


class AdapterError(MiddleError):
    """Raised when an adapter cannot be loaded for a backend."""
