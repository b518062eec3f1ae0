"""Public SDK surface for Burrow.

This module provides a stable import path for library users.
It re-exports the entity store, record helpers, codecs, and errors.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import BurrowConfig
from core.errors import (
    BurrowCodecError,
    BurrowConfigError,
    BurrowError,
    BurrowRecordError,
    BurrowStorageError,
    DecodingFailedError,
    EncodingFailedError,
    InvalidDestinationError,
    InvalidValueKindError,
    MultipleIdentifierFieldsError,
    NoIdentifierFieldError,
    NoSuchEntityError,
    StorageReadFailedError,
    StorageUnavailableError,
    StorageWriteFailedError,
    UnsupportedIdentifierError,
)
from store.entity_store import EntityStore
from store.record_codec import JsonRecordCodec, RecordCodec, YamlRecordCodec
from store.record_descriptor import id_field


def open_store(
    data_root: str | Path | None = None,
    codec: RecordCodec | None = None,
) -> EntityStore:
    """Open an entity store rooted at data_root.

    Args:
        data_root: Optional root directory overriding BURROW_DATA_ROOT.
        codec: Optional record codec, JSON when omitted.

    Returns:
        Entity store whose root directory exists.
    """
    config = BurrowConfig.from_env()
    if data_root is not None:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return EntityStore(config, codec=codec)


__all__ = [
    "BurrowCodecError",
    "BurrowConfig",
    "BurrowConfigError",
    "BurrowError",
    "BurrowRecordError",
    "BurrowStorageError",
    "DecodingFailedError",
    "EncodingFailedError",
    "EntityStore",
    "InvalidDestinationError",
    "InvalidValueKindError",
    "JsonRecordCodec",
    "MultipleIdentifierFieldsError",
    "NoIdentifierFieldError",
    "NoSuchEntityError",
    "RecordCodec",
    "StorageReadFailedError",
    "StorageUnavailableError",
    "StorageWriteFailedError",
    "UnsupportedIdentifierError",
    "YamlRecordCodec",
    "id_field",
    "open_store",
]
