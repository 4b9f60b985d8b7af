"""Positional placeholder translation.

Commands are written with ``@N`` placeholders. Drivers expect their own
paramstyle, so the SQL is rewritten before execution:

    qmark:  ``WHERE a = @1 AND b = @0``  ->  ``WHERE a = ? AND b = ?``
    format: ``WHERE a = @1 AND b = @0``  ->  ``WHERE a = %s AND b = %s``

Values are reordered to follow placeholder occurrences, so repeated and
out-of-order placeholders work with positional drivers. Quoted literals,
quoted identifiers, ``--`` and ``/* */`` comments and ``@@`` server
variables are left alone. Literals follow standard SQL quoting: a quote is
escaped by doubling it, and a backslash is an ordinary character.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from middle.core.command import Command, Parameter
from middle.core.exceptions import ParameterBindingError

# Matches @N but not @@N and not inside words (e.g. an email in code)
_PLACEHOLDER_PATTERN = re.compile(r"(?<![@\w])@(\d+)(?!\w)")

# Matches text that is never scanned for placeholders: single-quoted
# literals, double-quoted identifiers, line comments and block comments.
# An unterminated literal or comment runs to the end of the SQL.
_OPAQUE_PATTERN = re.compile(
    r"'(?:[^']|'')*(?:'|$)"
    r"|\"(?:[^\"]|\"\")*(?:\"|$)"
    r"|--[^\n]*"
    r"|/\*.*?(?:\*/|$)",
    re.DOTALL,
)

_MARKERS = {
    "qmark": "?",
    "format": "%s",
}


@dataclass(frozen=True)
class BoundStatement:
    """Driver-ready SQL and the parameters in placeholder order.

    ``parameters`` is None when the SQL has no placeholders, in which case
    the SQL is returned unchanged and must be executed without parameters.
    """

    sql: str
    parameters: tuple[Parameter, ...] | None

    @property
    def values(self) -> list[object] | None:
        if self.parameters is None:
            return None
        return [p.value for p in self.parameters]


def bind(command: Command, paramstyle: str) -> BoundStatement:
    """Translate a command's SQL and order its parameters for a driver."""
    sql, indices = _translate(command.sql, paramstyle)
    if not indices:
        return BoundStatement(command.sql, None)

    parameters = command.parameters
    ordered = []
    for index in indices:
        if index >= len(parameters):
            raise ParameterBindingError(f"@{index}", len(parameters))
        ordered.append(parameters[index])
    return BoundStatement(sql, tuple(ordered))


@lru_cache(maxsize=256)
def _translate(sql: str, paramstyle: str) -> tuple[str, tuple[int, ...]]:
    """Rewrite @N placeholders, returning the new SQL and the index sequence."""
    try:
        marker = _MARKERS[paramstyle]
    except KeyError:
        raise ValueError(f"Unsupported paramstyle: {paramstyle}") from None
    escape_percent = paramstyle == "format"

    indices: list[int] = []

    def _replace(match: re.Match[str]) -> str:
        indices.append(int(match.group(1)))
        return marker

    def _code(segment: str) -> str:
        if escape_percent:
            segment = segment.replace("%", "%%")
        return _PLACEHOLDER_PATTERN.sub(_replace, segment)

    parts: list[str] = []
    last_end = 0
    for match in _OPAQUE_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append(_code(sql[last_end:start]))
        # psycopg scans the whole query for %, literals and comments included
        opaque = match.group()
        parts.append(opaque.replace("%", "%%") if escape_percent else opaque)
        last_end = end
    if last_end < len(sql):
        parts.append(_code(sql[last_end:]))

    if not indices:
        return sql, ()
    return "".join(parts), tuple(indices)
