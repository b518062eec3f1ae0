"""Runtime configuration model for Burrow.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DATA_ROOT_ENV_VAR, DEFAULT_DATA_ROOT
from core.errors import BurrowConfigError


@dataclass(frozen=True)
class BurrowConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Root directory holding one subdirectory per record type.
    """

    data_root: Path

    @classmethod
    def from_env(cls) -> "BurrowConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            BurrowConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv(DATA_ROOT_ENV_VAR, str(DEFAULT_DATA_ROOT))
        return cls(data_root=_parse_data_root(data_root_value))


def _parse_data_root(raw_value: str) -> Path:
    """Parse the data root environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Absolute data root path.

    Raises:
        BurrowConfigError: If value is blank.
    """
    if not raw_value.strip():
        raise BurrowConfigError(
            f"Invalid {DATA_ROOT_ENV_VAR} value: expected a directory path, got an empty string. "
            f"Unset {DATA_ROOT_ENV_VAR} to use the default '{DEFAULT_DATA_ROOT}'."
        )
    return Path(raw_value).expanduser().resolve()
