"""Configuration management for untis-export."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from untis_export.models import Settings

CONFIG_ENV_VAR = "UNTIS_EXPORT_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".untis-export" / "config.yaml"


class ConfigError(Exception):
    """Error loading or accessing configuration."""


def get_config_path(path: str | Path | None = None) -> Path:
    """Resolve the settings file location.

    Checks in order of priority:
    1. Explicit path (CLI option)
    2. UNTIS_EXPORT_CONFIG environment variable
    3. ~/.untis-export/config.yaml

    Returns:
        Path to the settings file.
    """
    if path is not None:
        return Path(path).expanduser()

    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path).expanduser()

    return DEFAULT_CONFIG_PATH


def load_settings(path: str | Path) -> Settings:
    """Load and validate a settings file.

    JSON settings files are accepted as well, as JSON is a subset of YAML.

    Args:
        path: Path to the settings file.

    Returns:
        Validated settings.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        lines = [f"Invalid settings in {path}:"]
        for error in e.errors():
            loc = " → ".join(str(loc_part) for loc_part in error["loc"])
            lines.append(f"  {loc}: {error['msg']}")
        raise ConfigError("\n".join(lines)) from e


class SettingsProvider:
    """Holds the settings the export pipeline reads at the start of each run."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @property
    def settings(self) -> Settings:
        return self._settings

    def reload(self) -> Settings:
        """Return the current settings; static settings never change."""
        return self._settings


class FileSettingsProvider(SettingsProvider):
    """Settings backed by a file that can be reloaded without a restart."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(load_settings(self.path))

    def reload(self) -> Settings:
        """Re-read the settings file.

        Returns:
            The new settings.

        Raises:
            ConfigError: If the file became invalid; the previous settings stay active.
        """
        self._settings = load_settings(self.path)
        return self._settings
