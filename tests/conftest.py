"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def burrow_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Return a config rooted in a per-test temporary directory."""
    from core.config import BurrowConfig

    monkeypatch.delenv("BURROW_DATA_ROOT", raising=False)
    return replace(BurrowConfig.from_env(), data_root=tmp_path / "store")
