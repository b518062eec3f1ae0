"""Pluggable record serialization.

This module defines the codec contract used by the entity store and
ships JSON and YAML implementations over the shared record payloads.
"""

from __future__ import annotations

import json
from typing import Any, Protocol

from core.constants import DEFAULT_CODEC, SUPPORTED_CODECS, TEXT_ENCODING
from core.errors import BurrowConfigError, BurrowDependencyError
from store.record_payload import record_from_payload, record_to_payload


class RecordCodec(Protocol):
    """Serialization capability converting records to and from bytes."""

    name: str

    def encode(self, record: object) -> bytes: ...

    def decode(self, data: bytes, record_type: type) -> Any: ...


class JsonRecordCodec:
    """UTF-8 JSON codec keyed by dataclass field names."""

    name = "json"

    def encode(self, record: object) -> bytes:
        """Encode a record as an indented JSON object.

        Raises:
            TypeError: If a field value is not JSON serializable.
            ValueError: If a float field is NaN or infinite.
        """
        payload = record_to_payload(record)
        return (json.dumps(payload, indent=2, allow_nan=False) + "\n").encode(TEXT_ENCODING)

    def decode(self, data: bytes, record_type: type) -> Any:
        """Decode JSON bytes into a new record_type instance."""
        payload = json.loads(data.decode(TEXT_ENCODING))
        return record_from_payload(payload, record_type)


class YamlRecordCodec:
    """UTF-8 YAML codec keyed by dataclass field names."""

    name = "yaml"

    def encode(self, record: object) -> bytes:
        """Encode a record as a YAML mapping."""
        yaml = _import_yaml()
        payload = record_to_payload(record)
        return yaml.safe_dump(payload, sort_keys=False, allow_unicode=True).encode(TEXT_ENCODING)

    def decode(self, data: bytes, record_type: type) -> Any:
        """Decode YAML bytes into a new record_type instance."""
        yaml = _import_yaml()
        payload = yaml.safe_load(data.decode(TEXT_ENCODING))
        return record_from_payload(payload, record_type)


def build_codec(codec_name: str = DEFAULT_CODEC) -> RecordCodec:
    """Build a codec by name.

    Args:
        codec_name: One of the supported codec names.

    Returns:
        Codec instance.

    Raises:
        BurrowConfigError: If the codec name is unknown.
    """
    if codec_name == "json":
        return JsonRecordCodec()
    if codec_name == "yaml":
        return YamlRecordCodec()
    raise BurrowConfigError(
        f"Unsupported codec '{codec_name}'. Supported codecs: {', '.join(SUPPORTED_CODECS)}."
    )


def supported_codecs() -> tuple[str, ...]:
    """Return supported codec names."""
    return SUPPORTED_CODECS


def _import_yaml() -> Any:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise BurrowDependencyError(
            "YAML record encoding requires PyYAML. Install with 'pip install pyyaml'."
        ) from error
    return yaml
