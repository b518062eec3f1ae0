"""Shared typed models.

This module defines the immutable descriptor models used by the
identifier resolver and the entity store to inspect record types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldDescriptor:
    """Inspectable view of one record field.

    Attributes:
        name: Attribute name used for value extraction.
        annotation: Value stored under the burrow metadata namespace, if any.
        field_type: Resolved type hint, or the raw annotation when unresolvable.
    """

    name: str
    annotation: str | None
    field_type: Any


@dataclass(frozen=True)
class RecordDescriptor:
    """Inspectable view of a record type.

    Attributes:
        type_name: Storage namespace name, the class name.
        record_type: Record class being described.
        fields: Visible fields in declaration order, inherited fields first.
    """

    type_name: str
    record_type: type
    fields: tuple[FieldDescriptor, ...]

    def field_names(self) -> tuple[str, ...]:
        """Return field names in declaration order."""
        return tuple(field.name for field in self.fields)
