"""Identifier field resolution and canonical token rendering.

This module finds the single identifier field of a record type and renders
identifier values into the text tokens used as entity file names.
"""

from __future__ import annotations

from uuid import UUID

from core.constants import IDENTIFIER_NAME
from core.errors import (
    MultipleIdentifierFieldsError,
    NoIdentifierFieldError,
    UnsupportedIdentifierError,
)
from core.types import FieldDescriptor, RecordDescriptor


def resolve_identifier_field(descriptor: RecordDescriptor) -> FieldDescriptor:
    """Return the single field designated as the record identifier.

    A field qualifies when it is named ``ID`` or carries the ``ID``
    annotation under the burrow metadata namespace. A field qualifying
    both ways is counted once.

    Args:
        descriptor: Record type descriptor.

    Returns:
        The identifier field.

    Raises:
        NoIdentifierFieldError: If no field qualifies.
        MultipleIdentifierFieldsError: If two or more fields qualify.
    """
    matches = [field for field in descriptor.fields if is_identifier_field(field)]
    if not matches:
        raise NoIdentifierFieldError(
            f"Record type {descriptor.type_name} has no identifier field. "
            f"Name a field '{IDENTIFIER_NAME}' or declare it with id_field().",
            type_name=descriptor.type_name,
        )
    if len(matches) > 1:
        field_names = tuple(field.name for field in matches)
        raise MultipleIdentifierFieldsError(
            f"Record type {descriptor.type_name} has multiple identifier fields: "
            f"{', '.join(field_names)}. Keep exactly one identifier field.",
            type_name=descriptor.type_name,
            field_names=field_names,
        )
    return matches[0]


def is_identifier_field(field: FieldDescriptor) -> bool:
    """Return whether a field qualifies as an identifier by name or annotation."""
    return field.name == IDENTIFIER_NAME or field.annotation == IDENTIFIER_NAME


def render_identifier(value: object) -> str:
    """Render an identifier value as its canonical text token.

    Strings render verbatim, integers in base 10, and UUIDs in hyphenated
    lowercase form. An integer and its decimal string render identically.

    Args:
        value: Identifier value.

    Returns:
        Canonical text token.

    Raises:
        UnsupportedIdentifierError: If the value has no canonical rendering.
    """
    if isinstance(value, bool):
        raise UnsupportedIdentifierError(
            f"Unsupported identifier value {value!r}: booleans have no canonical token."
        )
    if isinstance(value, int):
        return str(int(value))
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, str):
        if not value:
            raise UnsupportedIdentifierError(
                "Unsupported identifier value: empty strings cannot address an entity."
            )
        return value
    raise UnsupportedIdentifierError(
        f"Unsupported identifier value {value!r} of type {type(value).__name__}. "
        "Use a string, integer, or UUID identifier."
    )
