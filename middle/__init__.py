"""Middle - thin typed data access over SQL Server and PostgreSQL drivers."""

from __future__ import annotations

import logging

from middle.core.command import Command, Parameter, build_command
from middle.core.config import ConnectionStrings, ConnectionStringSettings
from middle.core.connection import Connector, load_adapter
from middle.core.cursor import ResultCursor
from middle.core.engine import Middle
from middle.core.enums import DatabaseBackend, ParameterKind
from middle.core.exceptions import (
    AdapterError,
    ConfigurationError,
    DuplicateColumnError,
    EmptyResultError,
    ExecutionError,
    MappingError,
    MiddleError,
    ParameterBindingError,
    TransactionError,
    TransactionStateError,
    UnknownConnectionStringError,
)
from middle.core.transaction import Transaction
from middle.mapping.model import ModelMapper
from middle.mapping.record import Record, RecordMapper

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Engine
    "Middle",
    "ResultCursor",
    # Configuration
    "ConnectionStrings",
    "ConnectionStringSettings",
    "Connector",
    "load_adapter",
    # Commands
    "Command",
    "Parameter",
    "build_command",
    # Transaction
    "Transaction",
    # Mapping
    "ModelMapper",
    "RecordMapper",
    "Record",
    # Enums
    "DatabaseBackend",
    "ParameterKind",
    # Exceptions
    "MiddleError",
    "ConfigurationError",
    "UnknownConnectionStringError",
    "ExecutionError",
    "ParameterBindingError",
    "EmptyResultError",
    "MappingError",
    "DuplicateColumnError",
    "TransactionError",
    "TransactionStateError",
    "AdapterError",
]
