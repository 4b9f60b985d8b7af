"""Row-to-model mapper.

Supports dataclasses, Pydantic models, and plain classes, as long as the
target can be constructed without arguments. Columns are matched to fields
by case-insensitive name; unmatched fields keep their default value and
unmatched columns are ignored.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from middle.core.exceptions import MappingError
from middle.mapping.plan import FieldBinding, MappingPlan

T = TypeVar("T")


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        from pydantic import BaseModel

        return isinstance(cls, type) and issubclass(cls, BaseModel)
    except ImportError:
        return False


def _get_field_names(cls: type, default: Any) -> list[str]:
    """Extract settable public field names from a class."""
    # Pydantic model
    if hasattr(cls, "model_fields"):
        return list(cls.model_fields.keys())

    # Dataclass
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls) if f.init]

    # Plain class - annotations, instance attributes and settable properties
    names: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, "__annotations__", {}):
            names[name] = None
    for name in getattr(default, "__dict__", {}):
        names[name] = None
    for name in dir(cls):
        attr = getattr(cls, name, None)
        if isinstance(attr, property) and attr.fset is not None:
            names[name] = None
    return [name for name in names if not name.startswith("_")]


class ModelMapper(Generic[T]):
    """Maps result rows onto new default instances of ``target_class``.

    Args:
        target_class: Class constructible with no arguments.
        aliases: Optional column-name to field-name mapping, matched
            case-insensitively.

    Raises:
        MappingError: If ``target_class()`` fails or an alias names an
            unknown field.
    """

    def __init__(
        self,
        target_class: type[T],
        aliases: dict[str, str] | None = None,
    ) -> None:
        self._target_class = target_class
        self._is_pydantic = _is_pydantic_model(target_class)
        self._is_dataclass = dataclasses.is_dataclass(target_class)

        default = self._new_instance()
        self._fields = {name.casefold(): name for name in _get_field_names(target_class, default)}

        self._aliases: dict[str, str] = {}
        for column, field_name in (aliases or {}).items():
            try:
                self._aliases[column.casefold()] = self._fields[field_name.casefold()]
            except KeyError:
                raise MappingError(
                    f"Alias '{column}' targets unknown field '{field_name}' "
                    f"of {target_class.__name__}"
                ) from None

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    def _new_instance(self) -> T:
        try:
            return self._target_class()
        except (TypeError, ValueError) as e:
            raise MappingError(
                f"{self._target_class.__name__} must be constructible without arguments: {e}"
            ) from e

    def compile(self, columns: Sequence[str]) -> MappingPlan:
        """Bind each column to the field it names, if any."""
        bindings = []
        for index, column in enumerate(columns):
            key = column.casefold()
            field_name = self._aliases.get(key) or self._fields.get(key)
            if field_name is not None:
                bindings.append(FieldBinding(index, column, field_name))
        return MappingPlan(tuple(columns), tuple(bindings))

    def map_row(self, plan: MappingPlan, row: Sequence[Any]) -> T:
        """Create a default instance and set every bound field."""
        # Later columns overwrite earlier ones bound to the same field
        values = {b.field_name: row[b.column_index] for b in plan.bindings}

        if self._is_pydantic:
            return self._target_class.model_construct(**values)  # type: ignore[attr-defined, no-any-return]
        if self._is_dataclass:
            return self._target_class(**values)

        instance = self._new_instance()
        for name, value in values.items():
            setattr(instance, name, value)
        return instance
