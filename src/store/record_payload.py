"""Shared payload conversion for dataclass records.

This module converts record instances to plain JSON-safe payloads and
rebuilds records from payloads using their resolved type hints.
It is reused by every record codec.
"""

from __future__ import annotations

from dataclasses import fields
from datetime import date, datetime
from enum import Enum
import types
from typing import Any, Union, get_args, get_origin
from uuid import UUID

from store.record_descriptor import describe_record_type, is_record_instance, is_record_type

_NONE_TYPE = type(None)


def record_to_payload(value: object) -> object:
    """Convert a record or field value into a plain payload.

    Args:
        value: Record instance or nested field value.

    Returns:
        Payload built from dicts, lists, strings, numbers, booleans and None.
    """
    if is_record_instance(value):
        return {
            record_field.name: record_to_payload(getattr(value, record_field.name))
            for record_field in fields(value)  # type: ignore[arg-type]
        }
    if isinstance(value, Enum):
        return record_to_payload(value.value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {_payload_key(key): record_to_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [record_to_payload(item) for item in value]
    return value


def record_from_payload(payload: object, record_type: type) -> Any:
    """Rebuild a record of record_type from a payload.

    Args:
        payload: Decoded payload mapping.
        record_type: Dataclass record class.

    Returns:
        New record instance.

    Raises:
        TypeError: If payload shape does not match the record type.
        ValueError: If a scalar payload cannot be converted.
    """
    return _from_payload(payload, record_type)


def _from_payload(payload: object, hint: Any) -> Any:
    if isinstance(hint, str):
        return _from_unresolved_payload(payload, hint)
    if hint is Any:
        return payload
    if is_record_type(hint):
        return _record_from_mapping(payload, hint)
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        return _from_union_payload(payload, get_args(hint))
    if origin is not None:
        return _from_generic_payload(payload, origin, get_args(hint))
    return _from_scalar_payload(payload, hint)


def _from_unresolved_payload(payload: object, hint: str) -> Any:
    # Structured payloads cannot be rebuilt without a resolvable type.
    if isinstance(payload, (dict, list)):
        raise TypeError(
            f"Cannot rebuild {type(payload).__name__} payload for unresolved annotation '{hint}'"
        )
    return payload


def _record_from_mapping(payload: object, record_type: type) -> Any:
    if not isinstance(payload, dict):
        raise TypeError(
            f"Expected object payload for {record_type.__name__}, got {type(payload).__name__}"
        )
    descriptor = describe_record_type(record_type)
    init_names = {record_field.name for record_field in fields(record_type) if record_field.init}
    arguments = {
        field.name: _from_payload(payload[field.name], field.field_type)
        for field in descriptor.fields
        if field.name in init_names and field.name in payload
    }
    return record_type(**arguments)


def _from_union_payload(payload: object, members: tuple[Any, ...]) -> Any:
    if payload is None and _NONE_TYPE in members:
        return None
    concrete = [member for member in members if member is not _NONE_TYPE]
    if len(concrete) == 1:
        return _from_payload(payload, concrete[0])
    return payload


def _from_generic_payload(payload: object, origin: Any, arguments: tuple[Any, ...]) -> Any:
    if origin is dict:
        if not isinstance(payload, dict):
            raise TypeError(f"Expected object payload, got {type(payload).__name__}")
        key_hint, value_hint = arguments if len(arguments) == 2 else (Any, Any)
        return {
            _from_payload(_typed_key(key, key_hint), key_hint): _from_payload(item, value_hint)
            for key, item in payload.items()
        }
    if origin in (list, tuple, set, frozenset):
        if not isinstance(payload, list):
            raise TypeError(f"Expected array payload, got {type(payload).__name__}")
        return origin(_sequence_items(payload, origin, arguments))
    return payload


def _sequence_items(payload: list[Any], origin: Any, arguments: tuple[Any, ...]) -> list[Any]:
    if origin is tuple and arguments and arguments[-1] is not Ellipsis:
        if len(arguments) != len(payload):
            raise ValueError(f"Expected {len(arguments)} tuple items, got {len(payload)}")
        return [_from_payload(item, hint) for item, hint in zip(payload, arguments)]
    item_hint = arguments[0] if arguments else Any
    return [_from_payload(item, item_hint) for item in payload]


def _from_scalar_payload(payload: object, hint: Any) -> Any:
    if not isinstance(hint, type):
        return payload
    if issubclass(hint, Enum):
        return hint(payload)
    if hint is UUID:
        return UUID(str(payload))
    if hint is datetime:
        return datetime.fromisoformat(str(payload))
    if hint is date:
        return date.fromisoformat(str(payload))
    if hint in (int, float, str, bool) and not _matches_scalar(payload, hint):
        raise TypeError(f"Expected {hint.__name__} payload, got {type(payload).__name__}")
    if hint is float:
        return float(payload)  # type: ignore[arg-type]
    return payload


def _matches_scalar(payload: object, hint: type) -> bool:
    if hint is int:
        return isinstance(payload, int) and not isinstance(payload, bool)
    if hint is float:
        return isinstance(payload, (int, float)) and not isinstance(payload, bool)
    return isinstance(payload, hint)


def _payload_key(key: object) -> object:
    if isinstance(key, Enum):
        return key.value
    if isinstance(key, UUID):
        return str(key)
    return key


def _typed_key(key: object, key_hint: Any) -> object:
    # JSON object keys are always strings.
    if key_hint is int and isinstance(key, str):
        return int(key)
    return key
