"""Parameterized commands.

A Command is SQL text plus an ordered tuple of Parameters. Parameter names
are positional: the first argument is ``@0``, the second ``@1`` and so on,
whatever the argument is called at the call site. SQL text must refer to
arguments through these ``@N`` placeholders::

    build_command("SELECT * FROM users WHERE id = @0 AND name = @1", 7, "Alice")

Binding policy:
    * ``None`` is bound as SQL null.
    * ``uuid.UUID`` is bound as its canonical string, declared as a bounded
      string of size 4000.
    * ``str`` is a bounded string of size 4000, or unbounded text when longer
      than 4000 UTF-16 code units (characters outside the Basic Multilingual
      Plane count twice). Values are never truncated.
    * Anything else is passed through for the driver to infer.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from middle.core.enums import ParameterKind

MAX_BOUNDED_STRING = 4000
UNBOUNDED_SIZE = -1


@dataclass(frozen=True)
class Parameter:
    """A single positional parameter."""

    name: str
    value: Any
    kind: ParameterKind
    size: int | None = None


@dataclass(frozen=True)
class Command:
    """SQL text with its bound parameters, ready for execution."""

    sql: str
    parameters: tuple[Parameter, ...] = ()


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def bind_parameter(index: int, item: Any) -> Parameter:
    """Bind one argument at a zero-based position."""
    name = f"@{index}"
    if item is None:
        return Parameter(name, None, ParameterKind.NULL)
    if isinstance(item, uuid.UUID):
        return Parameter(name, str(item), ParameterKind.STRING, MAX_BOUNDED_STRING)
    if isinstance(item, str):
        # nvarchar limits are counted in UTF-16 code units, not code points
        if _utf16_length(item) > MAX_BOUNDED_STRING:
            return Parameter(name, item, ParameterKind.TEXT, UNBOUNDED_SIZE)
        return Parameter(name, item, ParameterKind.STRING, MAX_BOUNDED_STRING)
    return Parameter(name, item, ParameterKind.INFERRED)


def build_command(sql: str, *args: Any) -> Command:
    """Build a Command binding ``args`` to ``@0 .. @N-1`` in order."""
    return Command(sql, tuple(bind_parameter(i, arg) for i, arg in enumerate(args)))
