"""Demo command wiring for Burrow CLI."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any

from core.config import BurrowConfig
from core.constants import DEFAULT_CODEC
from store.entity_store import EntityStore
from store.record_codec import build_codec, supported_codecs
from store.record_descriptor import id_field


@dataclass
class Widget:
    """Sample record keyed by its num field."""

    name: str
    num: int = id_field()
    value: float = 0.0


def add_demo_command(subparsers: Any) -> None:
    """Register demo subcommand."""
    parser = subparsers.add_parser(
        "demo",
        help="Store a sample Widget record and read it back by id",
    )
    parser.add_argument(
        "--codec",
        choices=supported_codecs(),
        default=DEFAULT_CODEC,
        help="Record codec",
    )


def run_demo_command(config: BurrowConfig, args: argparse.Namespace) -> int:
    """Put a sample record, load it back by identifier and print the result."""
    store = EntityStore(config, codec=build_codec(args.codec))
    entity_path = store.put(Widget(name="string", num=123, value=3.14))
    loaded = store.get_by_id(Widget, 123)
    print(f"path={entity_path}")
    print(f"record={loaded!r}")
    return 0
