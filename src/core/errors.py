"""Burrow exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each failure kind carries the type, field, or path needed to diagnose it.
"""

from __future__ import annotations

from pathlib import Path


class BurrowError(Exception):
    """Base exception for all Burrow failures."""


class BurrowConfigError(BurrowError):
    """Raised for invalid runtime configuration."""


class BurrowDependencyError(BurrowError):
    """Raised when an optional runtime dependency is missing."""


class BurrowRecordError(BurrowError):
    """Raised when a record, record type, or identifier is malformed."""


class InvalidValueKindError(BurrowRecordError):
    """Raised when a value passed for storage is not a record instance."""

    def __init__(self, message: str, value_type: str) -> None:
        super().__init__(message)
        self.value_type = value_type


class NoIdentifierFieldError(BurrowRecordError):
    """Raised when a record type declares no identifier field."""

    def __init__(self, message: str, type_name: str) -> None:
        super().__init__(message)
        self.type_name = type_name


class MultipleIdentifierFieldsError(BurrowRecordError):
    """Raised when a record type declares more than one identifier field."""

    def __init__(self, message: str, type_name: str, field_names: tuple[str, ...]) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.field_names = field_names


class InvalidDestinationError(BurrowRecordError):
    """Raised when a read destination cannot receive a decoded record."""


class UnsupportedIdentifierError(BurrowRecordError):
    """Raised when an identifier value has no canonical text token."""


class BurrowCodecError(BurrowError):
    """Raised for record encoding and decoding failures."""


class EncodingFailedError(BurrowCodecError):
    """Raised when the codec rejects a record."""


class DecodingFailedError(BurrowCodecError):
    """Raised when the codec rejects stored bytes."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class BurrowStorageError(BurrowError):
    """Raised for byte store infrastructure failures."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class StorageUnavailableError(BurrowStorageError):
    """Raised when a storage directory cannot be created."""


class StorageWriteFailedError(BurrowStorageError):
    """Raised when entity bytes cannot be written."""


class StorageReadFailedError(BurrowStorageError):
    """Raised when entity bytes exist but cannot be read."""


class NoSuchEntityError(BurrowError):
    """Raised when no entity is stored for a type and identifier.

    This is the expected not-found outcome and is kept apart from
    BurrowStorageError so callers can branch on it directly.
    """

    def __init__(self, message: str, type_name: str, identifier: str, path: Path) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.identifier = identifier
        self.path = path
