"""Burrow CLI entry points.
This module exposes inspection and demo commands for an entity store.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.demo_command import add_demo_command, run_demo_command
from core.config import BurrowConfig
from core.constants import TEXT_ENCODING
from core.errors import BurrowRecordError, NoSuchEntityError
from store.entity_store import EntityStore


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="burrow", description="Burrow entity store CLI")
    parser.add_argument("--data-root", help="Override BURROW_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_show_command(subparsers)
    add_demo_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Burrow CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _build_config(args.data_root)
    if args.command == "show":
        return _run_show_command(config, args)
    if args.command == "demo":
        return run_demo_command(config, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(data_root: str | None) -> BurrowConfig:
    """Build config with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Runtime configuration.
    """
    config = BurrowConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return config


def _run_show_command(config: BurrowConfig, args: argparse.Namespace) -> int:
    """Handle show command.

    Args:
        config: Runtime configuration.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    store = EntityStore(config)
    try:
        data = store.read_raw(args.type_name, args.identifier)
    except NoSuchEntityError as error:
        print(f"not_found={error.path}")
        return 1
    except BurrowRecordError as error:
        print(f"invalid_identifier={error}")
        return 2
    _write_entity_bytes(data)
    return 0


def _write_entity_bytes(data: bytes) -> None:
    """Print entity bytes as text, or raw when they are not valid text."""
    try:
        text = data.decode(TEXT_ENCODING)
    except UnicodeDecodeError:
        sys.stdout.flush()
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    print(text, end="")


def _add_show_command(subparsers: Any) -> None:
    """Register show subcommand."""
    parser = subparsers.add_parser("show", help="Print the stored bytes of one entity")
    parser.add_argument("type_name", help="Record type name, the namespace directory")
    parser.add_argument("identifier", help="Identifier token of the entity")
