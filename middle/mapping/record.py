"""Dynamic records.

A Record is an ordered column-name → value mapping with attribute access,
for queries where declaring a target class is not worth it::

    row = db.query_single_dynamic("SELECT id, name FROM users WHERE id = @0", 1)
    row["name"] == row.name

Attribute access only reaches columns whose names are not already ``dict``
attributes. A column called ``items``, ``keys``, ``values``, ``get``,
``pop``, ``update`` (or any other dict method) must be read by key:
``row["items"]``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from middle.core.exceptions import DuplicateColumnError
from middle.mapping.plan import FieldBinding, MappingPlan


class Record(dict[str, Any]):
    """Ordered column → value mapping with attribute access.

    Item access always returns the column; attribute access returns the
    dict method for columns that shadow one.
    """

    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __repr__(self) -> str:
        return f"Record({dict.__repr__(self)})"


class RecordMapper:
    """Maps every column of a row into a Record, preserving column order."""

    def compile(self, columns: Sequence[str]) -> MappingPlan:
        seen: set[str] = set()
        for column in columns:
            if column in seen:
                raise DuplicateColumnError(column)
            seen.add(column)
        bindings = tuple(FieldBinding(i, c, c) for i, c in enumerate(columns))
        return MappingPlan(tuple(columns), bindings)

    def map_row(self, plan: MappingPlan, row: Sequence[Any]) -> Record:
        return Record(zip(plan.columns, row, strict=True))
