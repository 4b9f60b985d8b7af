"""Mapper protocol.

ResultCursor compiles a plan from the cursor's column names once, then
calls map_row for every fetched row.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar

from middle.mapping.plan import MappingPlan

T_co = TypeVar("T_co", covariant=True)


class Mapper(Protocol[T_co]):
    """Base mapper protocol."""

    def compile(self, columns: Sequence[str]) -> MappingPlan:
        """Build the column bindings for a result set."""
        ...

    def map_row(self, plan: MappingPlan, row: Sequence[Any]) -> T_co:
        """Map one positional row using a compiled plan."""
        ...
