"""Record type inspection.

This module turns dataclass record types into descriptors exposing each
field's name, burrow metadata annotation, and resolved type hint.
"""

from __future__ import annotations

from dataclasses import field, fields, is_dataclass
import inspect
import sys
from typing import Any, cast

from core.constants import IDENTIFIER_NAME, METADATA_NAMESPACE
from core.errors import InvalidValueKindError
from core.types import FieldDescriptor, RecordDescriptor


def id_field(**kwargs: Any) -> Any:
    """Declare a dataclass field as the record identifier.

    Accepts the same keyword arguments as ``dataclasses.field``. Existing
    metadata entries are preserved.

    Returns:
        A dataclass field annotated under the burrow metadata namespace.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[METADATA_NAMESPACE] = IDENTIFIER_NAME
    return field(metadata=metadata, **kwargs)


def is_record_type(candidate: object) -> bool:
    """Return whether candidate is a dataclass class."""
    return isinstance(candidate, type) and is_dataclass(candidate)


def is_record_instance(candidate: object) -> bool:
    """Return whether candidate is a dataclass instance."""
    return not isinstance(candidate, type) and is_dataclass(candidate)


def describe_record_type(record_type: object) -> RecordDescriptor:
    """Build a descriptor for a dataclass record type.

    Args:
        record_type: Record class to inspect.

    Returns:
        Descriptor with fields in declaration order.

    Raises:
        InvalidValueKindError: If record_type is not a dataclass class.
    """
    if not is_record_type(record_type):
        kind = type(record_type).__name__
        raise InvalidValueKindError(
            f"Cannot describe record type: expected a dataclass class, got {kind}. "
            "Declare records with @dataclass.",
            value_type=kind,
        )
    resolved_type = cast(type, record_type)
    descriptors = tuple(
        FieldDescriptor(
            name=record_field.name,
            annotation=_annotation_value(record_field.metadata),
            field_type=_resolve_field_type(resolved_type, record_field.name, record_field.type),
        )
        for record_field in fields(resolved_type)
    )
    return RecordDescriptor(
        type_name=resolved_type.__name__,
        record_type=resolved_type,
        fields=descriptors,
    )


def _annotation_value(metadata: Any) -> str | None:
    value = metadata.get(METADATA_NAMESPACE)
    return value if isinstance(value, str) else None


def _resolve_field_type(record_type: type, field_name: str, annotation: Any) -> Any:
    """Resolve one postponed annotation in the namespace of its declaring class.

    Unresolvable annotations are returned unchanged as strings.
    """
    if not isinstance(annotation, str):
        return annotation
    declaring_type = _declaring_type(record_type, field_name)
    module = sys.modules.get(declaring_type.__module__)
    global_namespace = dict(vars(module)) if module is not None else {}
    local_namespace = dict(vars(declaring_type))
    try:
        return eval(annotation, global_namespace, local_namespace)
    except (NameError, AttributeError, TypeError, SyntaxError):
        return annotation


def _declaring_type(record_type: type, field_name: str) -> type:
    for candidate in record_type.__mro__:
        if field_name in inspect.get_annotations(candidate):
            return candidate
    return record_type
