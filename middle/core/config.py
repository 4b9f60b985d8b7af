"""Connection string configuration.

ConnectionStringSettings is a Pydantic model for a single named connection
string. ConnectionStrings resolves logical names to settings and can be
loaded from a mapping, a TOML file or environment variables.

Environment convention (prefix defaults to ``MIDDLE_``)::

    MIDDLE_CONNSTR_MAIN="host=db.local dbname=app user=app"
    MIDDLE_PROVIDER_MAIN="postgresql"

TOML convention::

    [connection_strings.main]
    connection_string = "host=db.local dbname=app user=app"
    provider = "postgresql"
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from middle.core.enums import DatabaseBackend
from middle.core.exceptions import ConfigurationError, UnknownConnectionStringError


class ConnectionStringSettings(BaseModel):
    """A named connection string and the backend it targets."""

    model_config = ConfigDict(frozen=True)

    name: str
    connection_string: str
    provider: DatabaseBackend = DatabaseBackend.SQLSERVER

    @field_validator("name", "connection_string")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("provider", mode="before")
    @classmethod
    def _lower_provider(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


def _settings(name: str, values: Mapping[str, Any]) -> ConnectionStringSettings:
    try:
        return ConnectionStringSettings.model_validate({"name": name, **values})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid connection string '{name}': {e}") from e


class ConnectionStrings:
    """Registry of named connection strings.

    Lookup by name is case-insensitive. The registry is filled once at
    startup and then only read.
    """

    def __init__(self, entries: Iterable[ConnectionStringSettings] = ()) -> None:
        self._entries: dict[str, ConnectionStringSettings] = {}
        for entry in entries:
            self.add(entry)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> ConnectionStrings:
        """Build a registry from ``{name: connection_string}`` or
        ``{name: {"connection_string": ..., "provider": ...}}``.
        """
        entries = []
        for name, value in mapping.items():
            if isinstance(value, str):
                value = {"connection_string": value}
            entries.append(_settings(name, value))
        return cls(entries)

    @classmethod
    def from_file(cls, path: Path | str) -> ConnectionStrings:
        """Load the ``[connection_strings]`` table of a TOML file."""
        path = Path(path)
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Cannot read connection strings from {path}: {e}") from e

        section = data.get("connection_strings", {})
        if not isinstance(section, dict):
            raise ConfigurationError(f"'connection_strings' in {path} must be a table")
        return cls.from_mapping(section)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        prefix: str = "MIDDLE_",
    ) -> ConnectionStrings:
        """Collect ``<prefix>CONNSTR_<NAME>`` / ``<prefix>PROVIDER_<NAME>`` pairs."""
        if environ is None:
            environ = os.environ
        connstr_prefix = f"{prefix}CONNSTR_"
        provider_prefix = f"{prefix}PROVIDER_"

        entries = []
        for key, value in sorted(environ.items()):
            if not key.startswith(connstr_prefix):
                continue
            name = key.removeprefix(connstr_prefix).lower()
            values: dict[str, Any] = {"connection_string": value}
            provider = environ.get(provider_prefix + key.removeprefix(connstr_prefix))
            if provider is not None:
                values["provider"] = provider
            entries.append(_settings(name, values))
        return cls(entries)

    def add(self, settings: ConnectionStringSettings) -> None:
        """Register (or replace) a connection string."""
        self._entries[settings.name.casefold()] = settings

    def get(self, name: str) -> ConnectionStringSettings:
        """Resolve a connection string by name.

        Raises:
            UnknownConnectionStringError: If no entry matches ``name``.
        """
        try:
            return self._entries[name.casefold()]
        except KeyError:
            raise UnknownConnectionStringError(name, self.names) from None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._entries

    @property
    def names(self) -> list[str]:
        """Registered names, sorted alphabetically."""
        return sorted(entry.name for entry in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
