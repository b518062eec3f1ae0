"""Core constants used across Burrow modules.

This module centralizes storage layout and identifier conventions.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path("burrow")
DATA_ROOT_ENV_VAR = "BURROW_DATA_ROOT"
METADATA_NAMESPACE = "burrow"
IDENTIFIER_NAME = "ID"
TEXT_ENCODING = "utf-8"
SUPPORTED_CODECS = ("json", "yaml")
DEFAULT_CODEC = "json"
