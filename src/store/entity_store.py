"""Entity store for keyed record persistence.

This module maps (record type, identifier) pairs to files under the
data root and runs the encode/write and read/decode round trip.
"""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any

from core.config import BurrowConfig
from core.errors import (
    DecodingFailedError,
    EncodingFailedError,
    InvalidDestinationError,
    InvalidValueKindError,
    NoSuchEntityError,
    StorageReadFailedError,
    StorageUnavailableError,
    StorageWriteFailedError,
)
from core.logging_config import get_logger
from store.byte_store import ByteStore, LocalByteStore
from store.identifier import render_identifier, resolve_identifier_field
from store.record_codec import JsonRecordCodec, RecordCodec
from store.record_descriptor import describe_record_type, is_record_instance, is_record_type

_LOGGER = get_logger(__name__)


class EntityStore:
    """Single-record keyed blob store.

    Records are stored at ``<data_root>/<type name>/<identifier token>``.
    Each call re-derives its path and touches the byte store directly.
    """

    def __init__(
        self,
        config: BurrowConfig,
        codec: RecordCodec | None = None,
        byte_store: ByteStore | None = None,
    ) -> None:
        """Initialize the store and ensure its root directory exists.

        Args:
            config: Runtime configuration.
            codec: Optional record codec, JSON when omitted.
            byte_store: Optional byte store, local filesystem when omitted.

        Raises:
            StorageUnavailableError: If the root directory cannot be created.
        """
        self._root = config.data_root
        self._codec = codec or JsonRecordCodec()
        self._byte_store = byte_store or LocalByteStore()
        self._ensure_directory(self._root, operation="open")

    @property
    def root(self) -> Path:
        """Return the store root directory."""
        return self._root

    def entity_path(self, type_name: str, identifier: object) -> Path:
        """Return the storage path for a type name and identifier.

        Raises:
            UnsupportedIdentifierError: If identifier has no canonical token.
        """
        return self._root / type_name / render_identifier(identifier)

    def put(self, record: object) -> Path:
        """Persist a record, replacing any entity with the same identifier.

        Args:
            record: Dataclass record instance.

        Returns:
            Path of the written entity.

        Raises:
            InvalidValueKindError: If record is not a dataclass instance.
            NoIdentifierFieldError: If the record type has no identifier field.
            MultipleIdentifierFieldsError: If it has more than one.
            UnsupportedIdentifierError: If the identifier value cannot be rendered.
            EncodingFailedError: If the codec rejects the record.
            StorageUnavailableError: If the type directory cannot be created.
            StorageWriteFailedError: If the entity bytes cannot be written.
        """
        if not is_record_instance(record):
            kind = type(record).__name__
            raise InvalidValueKindError(
                f"Cannot put value of type {kind}: expected a dataclass record instance.",
                value_type=kind,
            )
        descriptor = describe_record_type(type(record))
        identifier_field = resolve_identifier_field(descriptor)
        identifier = getattr(record, identifier_field.name)
        entity_path = self.entity_path(descriptor.type_name, identifier)
        try:
            data = self._codec.encode(record)
        except Exception as error:
            raise EncodingFailedError(
                f"Failed to encode {descriptor.type_name} record with "
                f"{self._codec.name} codec: {error}"
            ) from error
        self._ensure_directory(entity_path.parent, operation="put")
        try:
            self._byte_store.write_bytes(entity_path, data)
        except OSError as error:
            raise StorageWriteFailedError(
                f"Failed to write entity at {entity_path}: {error}. "
                "Check directory permissions and free space.",
                path=entity_path,
            ) from error
        _LOGGER.info(
            "entity_written",
            type_name=descriptor.type_name,
            identifier=entity_path.name,
            path=str(entity_path),
            byte_count=len(data),
        )
        return entity_path

    def get_by_id(self, destination: Any, identifier: object) -> Any:
        """Load the entity of the destination's type with identifier.

        Args:
            destination: Dataclass record class, or a mutable record
                instance to populate in place.
            identifier: Identifier value, rendered like the one used by put.

        Returns:
            The decoded record, the populated destination when one was passed.

        Raises:
            InvalidDestinationError: If destination cannot receive a record.
            UnsupportedIdentifierError: If identifier cannot be rendered.
            NoSuchEntityError: If no entity is stored under the identifier.
            StorageReadFailedError: If the entity cannot be read.
            DecodingFailedError: If the codec rejects the stored bytes.
        """
        record_type = _destination_record_type(destination)
        entity_path = self.entity_path(record_type.__name__, identifier)
        data = self._read_entity(record_type.__name__, entity_path)
        try:
            record = self._codec.decode(data, record_type)
        except Exception as error:
            raise DecodingFailedError(
                f"Failed to decode {record_type.__name__} entity at {entity_path} with "
                f"{self._codec.name} codec: {error}",
                path=entity_path,
            ) from error
        if is_record_type(destination):
            return record
        for record_field in fields(record_type):
            setattr(destination, record_field.name, getattr(record, record_field.name))
        return destination

    def read_raw(self, type_name: str, identifier: object) -> bytes:
        """Return stored entity bytes without decoding them.

        Raises:
            NoSuchEntityError: If no entity is stored under the identifier.
            StorageReadFailedError: If the entity cannot be read.
        """
        return self._read_entity(type_name, self.entity_path(type_name, identifier))

    def _read_entity(self, type_name: str, entity_path: Path) -> bytes:
        try:
            data = self._byte_store.read_bytes(entity_path)
        except FileNotFoundError as error:
            _LOGGER.debug("entity_not_found", type_name=type_name, path=str(entity_path))
            raise NoSuchEntityError(
                f"No {type_name} entity with identifier '{entity_path.name}' "
                f"exists at {entity_path}.",
                type_name=type_name,
                identifier=entity_path.name,
                path=entity_path,
            ) from error
        except OSError as error:
            raise StorageReadFailedError(
                f"Failed to read entity at {entity_path}: {error}.",
                path=entity_path,
            ) from error
        _LOGGER.debug(
            "entity_read",
            type_name=type_name,
            identifier=entity_path.name,
            path=str(entity_path),
        )
        return data

    def _ensure_directory(self, directory: Path, operation: str) -> None:
        try:
            self._byte_store.ensure_directory(directory)
        except OSError as error:
            raise StorageUnavailableError(
                f"Failed to create storage directory {directory} during {operation}: {error}. "
                "Check that the data root is writable.",
                path=directory,
            ) from error


def _destination_record_type(destination: Any) -> type:
    """Return the record class a destination receives.

    Raises:
        InvalidDestinationError: If destination is neither a record class
            nor a mutable record instance.
    """
    if is_record_type(destination):
        return destination
    if is_record_instance(destination):
        record_type = type(destination)
        if record_type.__dataclass_params__.frozen:  # type: ignore[attr-defined]
            raise InvalidDestinationError(
                f"Cannot load into frozen {record_type.__name__} instance. "
                f"Pass the {record_type.__name__} class to receive a new record."
            )
        return record_type
    raise InvalidDestinationError(
        f"Invalid destination of type {type(destination).__name__}: "
        "expected a dataclass record class or a mutable record instance."
    )
