"""Compiled mapping plans.

A plan is built once per result set from the cursor's column names and then
applied to every row. It is the explicit list of column-to-field bindings
that replaces per-row name matching.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldBinding:
    """Binds one result column to one target field."""

    column_index: int
    column_name: str
    field_name: str


@dataclass(frozen=True)
class MappingPlan:
    """Compiled bindings for a result set."""

    columns: tuple[str, ...]
    bindings: tuple[FieldBinding, ...]
