"""Utility functions for the untis-export CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from untis_export.cli import console
from untis_export.config import ConfigError, FileSettingsProvider, get_config_path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_settings_provider(config: Path | None) -> FileSettingsProvider:
    """Load the settings file or exit with an error.

    Args:
        config: Explicit settings file, or None for the default location.

    Returns:
        A provider for the loaded settings.

    Raises:
        typer.Exit: If the settings cannot be loaded.
    """
    path = get_config_path(config)
    try:
        return FileSettingsProvider(path)
    except ConfigError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)


def setup_logging(debug: bool = False, log_file: Path | None = None) -> None:
    """Set up logging for the service.

    Args:
        debug: Enable debug logging.
        log_file: Optional file to log to instead of stderr.
    """
    level = logging.DEBUG if debug else logging.INFO
    handlers: list[logging.Handler] = []
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))
    else:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
