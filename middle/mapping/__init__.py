"""Mapping layer - transform result rows into typed objects or records."""

from __future__ import annotations

from middle.mapping.model import ModelMapper
from middle.mapping.plan import FieldBinding, MappingPlan
from middle.mapping.record import Record, RecordMapper

__all__ = [
    "ModelMapper",
    "RecordMapper",
    "Record",
    "MappingPlan",
    "FieldBinding",
]
