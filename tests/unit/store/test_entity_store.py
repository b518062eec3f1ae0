"""Unit tests for entity store persistence."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

import pytest

from core.errors import (
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
from store.byte_store import LocalByteStore
from store.entity_store import EntityStore
from store.record_descriptor import id_field


@dataclass
class Widget:
    name: str
    num: int = id_field()
    value: float = 0.0


@dataclass
class Gadget:
    ID: int
    label: str


@dataclass(frozen=True)
class FrozenGadget:
    ID: int
    label: str


@dataclass
class Bad:
    a: int = id_field()
    b: int = id_field()


@dataclass
class Empty:
    x: int


@dataclass
class Document:
    ID: str
    body: str
    tags: list[str] = field(default_factory=list)


class _FailingByteStore(LocalByteStore):
    """Byte store that fails selected operations."""

    def __init__(self, fail_on: str, error: OSError) -> None:
        self._fail_on = fail_on
        self._error = error

    def ensure_directory(self, path: Path) -> None:
        if self._fail_on == "ensure_directory" and path.name != "store":
            raise self._error
        super().ensure_directory(path)

    def write_bytes(self, path: Path, data: bytes) -> None:
        if self._fail_on == "write_bytes":
            raise self._error
        super().write_bytes(path, data)

    def read_bytes(self, path: Path) -> bytes:
        if self._fail_on == "read_bytes":
            raise self._error
        return super().read_bytes(path)


class _RejectingCodec:
    """Codec that rejects every record."""

    name = "rejecting"

    def encode(self, record: object) -> bytes:
        raise TypeError("cannot encode")

    def decode(self, data: bytes, record_type: type) -> object:
        raise ValueError("cannot decode")


def test_store_creates_root_directory(burrow_config) -> None:
    """Opening a store should create its root directory."""
    EntityStore(burrow_config)

    assert burrow_config.data_root.is_dir()


def test_put_writes_entity_under_type_directory(burrow_config) -> None:
    """Entities should be stored at root/type/identifier."""
    store = EntityStore(burrow_config)

    entity_path = store.put(Widget(name="a", num=123, value=3.14))

    assert entity_path == burrow_config.data_root / "Widget" / "123"


def test_get_by_id_returns_written_record(burrow_config) -> None:
    """Reading by identifier should return an equal record."""
    store = EntityStore(burrow_config)
    store.put(Widget(name="a", num=123, value=3.14))

    loaded = store.get_by_id(Widget, 123)

    assert loaded == Widget(name="a", num=123, value=3.14)


def test_get_by_id_accepts_string_form_of_integer_id(burrow_config) -> None:
    """Integer and decimal string identifiers should address the same entity."""
    store = EntityStore(burrow_config)
    store.put(Widget(name="a", num=123, value=3.14))

    loaded = store.get_by_id(Widget, "123")

    assert loaded.num == 123


def test_get_by_id_populates_mutable_destination(burrow_config) -> None:
    """A record instance destination should be filled in place."""
    store = EntityStore(burrow_config)
    store.put(Gadget(ID=7, label="lamp"))
    destination = Gadget(ID=0, label="")

    returned = store.get_by_id(destination, 7)

    assert returned is destination and destination == Gadget(ID=7, label="lamp")


def test_put_overwrites_existing_entity(burrow_config) -> None:
    """Last write for an identifier should win."""
    store = EntityStore(burrow_config)
    store.put(Document(ID="doc", body="a much longer original body", tags=["x"]))
    store.put(Document(ID="doc", body="new"))

    loaded = store.get_by_id(Document, "doc")

    assert loaded == Document(ID="doc", body="new")


def test_colliding_identifiers_use_separate_namespaces(burrow_config) -> None:
    """Different record types sharing an identifier should not collide."""
    store = EntityStore(burrow_config)
    store.put(Widget(name="w", num=1))
    store.put(Gadget(ID=1, label="g"))

    loaded = (store.get_by_id(Widget, 1), store.get_by_id(Gadget, 1))

    assert loaded == (Widget(name="w", num=1), Gadget(ID=1, label="g"))


def test_get_by_id_raises_no_such_entity(burrow_config) -> None:
    """Unknown identifiers should report a distinct not-found error."""
    store = EntityStore(burrow_config)

    with pytest.raises(NoSuchEntityError) as error_info:
        store.get_by_id(Widget, 999)

    assert not isinstance(error_info.value, BurrowStorageError)


def test_get_by_id_not_found_names_path(burrow_config) -> None:
    """Not-found errors should carry the derived path."""
    store = EntityStore(burrow_config)

    with pytest.raises(NoSuchEntityError) as error_info:
        store.get_by_id(Gadget, 5)

    assert error_info.value.path == burrow_config.data_root / "Gadget" / "5"


@pytest.mark.parametrize("value", [42, "text", [1, 2], {"ID": 1}, None, Widget])
def test_put_rejects_non_record_values(burrow_config, value: object) -> None:
    """Only dataclass instances can be stored."""
    store = EntityStore(burrow_config)

    with pytest.raises(InvalidValueKindError):
        store.put(value)

    assert not (burrow_config.data_root / "Widget").exists()


def test_put_raises_for_multiple_identifier_fields(burrow_config) -> None:
    """Types with two annotated identifiers should be rejected."""
    store = EntityStore(burrow_config)

    with pytest.raises(MultipleIdentifierFieldsError):
        store.put(Bad(a=1, b=2))

    assert not (burrow_config.data_root / "Bad").exists()


def test_put_raises_for_missing_identifier_field(burrow_config) -> None:
    """Types without an identifier should be rejected."""
    store = EntityStore(burrow_config)

    with pytest.raises(NoIdentifierFieldError):
        store.put(Empty(x=1))

    assert not (burrow_config.data_root / "Empty").exists()


def test_put_raises_for_unsupported_identifier_value(burrow_config) -> None:
    """Float identifier values have no canonical token."""
    store = EntityStore(burrow_config)

    with pytest.raises(UnsupportedIdentifierError):
        store.put(Gadget(ID=1.5, label="x"))  # type: ignore[arg-type]

    assert True


@pytest.mark.parametrize("destination", [None, 5, "Widget", FrozenGadget(ID=1, label="x")])
def test_get_by_id_rejects_invalid_destination(burrow_config, destination: object) -> None:
    """Destinations must be record classes or mutable record instances."""
    store = EntityStore(burrow_config)
    store.put(Gadget(ID=1, label="x"))

    with pytest.raises(InvalidDestinationError):
        store.get_by_id(destination, 1)

    assert True


def test_get_by_id_accepts_frozen_record_class(burrow_config) -> None:
    """Frozen record classes can receive new records."""
    store = EntityStore(burrow_config)
    store.put(FrozenGadget(ID=3, label="frozen"))

    loaded = store.get_by_id(FrozenGadget, 3)

    assert loaded == FrozenGadget(ID=3, label="frozen")


def test_put_wraps_codec_failure(burrow_config) -> None:
    """Codec errors during put should surface as EncodingFailedError."""
    store = EntityStore(burrow_config, codec=_RejectingCodec())

    with pytest.raises(EncodingFailedError) as error_info:
        store.put(Gadget(ID=1, label="x"))

    assert isinstance(error_info.value.__cause__, TypeError)


def test_get_by_id_wraps_decoding_failure(burrow_config) -> None:
    """Corrupt stored bytes should surface as DecodingFailedError."""
    store = EntityStore(burrow_config)
    entity_path = store.put(Gadget(ID=1, label="x"))
    entity_path.write_bytes(b"{not json")

    with pytest.raises(DecodingFailedError) as error_info:
        store.get_by_id(Gadget, 1)

    assert error_info.value.path == entity_path


def test_get_by_id_wraps_shape_mismatch(burrow_config) -> None:
    """Bytes written for another shape should fail to decode."""
    store = EntityStore(burrow_config)
    (burrow_config.data_root / "Gadget").mkdir(parents=True)
    (burrow_config.data_root / "Gadget" / "1").write_bytes(b"[1, 2, 3]")

    with pytest.raises(DecodingFailedError):
        store.get_by_id(Gadget, 1)

    assert True


def test_put_maps_directory_failure_to_storage_unavailable(burrow_config) -> None:
    """Type directory creation failures should be infrastructure errors."""
    byte_store = _FailingByteStore("ensure_directory", PermissionError("denied"))
    store = EntityStore(burrow_config, byte_store=byte_store)

    with pytest.raises(StorageUnavailableError) as error_info:
        store.put(Gadget(ID=1, label="x"))

    assert error_info.value.path == burrow_config.data_root / "Gadget"


def test_put_maps_write_failure(burrow_config) -> None:
    """Write failures should surface as StorageWriteFailedError."""
    byte_store = _FailingByteStore("write_bytes", OSError("disk full"))
    store = EntityStore(burrow_config, byte_store=byte_store)

    with pytest.raises(StorageWriteFailedError):
        store.put(Gadget(ID=1, label="x"))

    assert True


def test_get_by_id_maps_read_failure(burrow_config) -> None:
    """Read failures other than absence should surface as StorageReadFailedError."""
    byte_store = _FailingByteStore("read_bytes", PermissionError("denied"))
    store = EntityStore(burrow_config, byte_store=byte_store)

    with pytest.raises(StorageReadFailedError):
        store.get_by_id(Gadget, 1)

    assert True


def test_get_by_id_maps_directory_at_entity_path_to_read_failure(burrow_config) -> None:
    """A directory at the entity path is a read fault, not a missing entity."""
    store = EntityStore(burrow_config)
    (burrow_config.data_root / "Gadget" / "1").mkdir(parents=True)

    with pytest.raises(StorageReadFailedError):
        store.get_by_id(Gadget, 1)

    assert True


def test_store_raises_when_root_cannot_be_created(tmp_path, burrow_config) -> None:
    """A root blocked by a regular file should be unavailable."""
    blocker = tmp_path / "blocker"
    blocker.write_text("file", encoding="utf-8")
    config = replace(burrow_config, data_root=blocker / "store")

    with pytest.raises(StorageUnavailableError):
        EntityStore(config)

    assert blocker.is_file()


def test_read_raw_returns_stored_bytes(burrow_config) -> None:
    """Raw reads should return exactly the written bytes."""
    store = EntityStore(burrow_config)
    entity_path = store.put(Gadget(ID=4, label="raw"))

    data = store.read_raw("Gadget", 4)

    assert data == entity_path.read_bytes()


def test_get_by_id_rejects_nested_record_with_unresolvable_type(burrow_config) -> None:
    """Nested records typed by function-local classes should not decode as dicts."""

    @dataclass
    class Part:
        x: int

    @dataclass
    class Assembly:
        ID: str
        part: Part

    store = EntityStore(burrow_config)
    store.put(Assembly(ID="a", part=Part(x=1)))

    with pytest.raises(DecodingFailedError):
        store.get_by_id(Assembly, "a")

    assert True
