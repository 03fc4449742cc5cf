"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from helpers import FakeParser, FakeUploader

from untis_export.models import Settings


@pytest.fixture
def export_dir(tmp_path: Path) -> Path:
    """Create an empty export directory."""
    directory = tmp_path / "export"
    directory.mkdir()
    return directory


@pytest.fixture
def make_settings(export_dir: Path) -> Callable[..., Settings]:
    """Factory for settings pointing at the export directory, without settle delay."""

    def factory(**overrides: Any) -> Settings:
        data: dict[str, Any] = {"html_path": str(export_dir), "threshold": 0}
        data.update(overrides)
        return Settings.model_validate(data)

    return factory


@pytest.fixture
def fake_parser() -> FakeParser:
    """Create a parser returning canned results."""
    return FakeParser()


@pytest.fixture
def fake_uploader() -> FakeUploader:
    """Create an uploader recording its calls."""
    return FakeUploader()
