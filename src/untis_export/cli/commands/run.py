"""Run command for the untis-export CLI.

Starts the export service in the foreground and keeps it running until
SIGINT or SIGTERM.
"""

from __future__ import annotations

import logging
import signal
import threading
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from untis_export.cli import app, console
from untis_export.cli.utils import load_settings_provider, setup_logging
from untis_export.scheduler import ExportService

if TYPE_CHECKING:
    from types import FrameType

logger = logging.getLogger(__name__)


def setup_signal_handlers(stop_event: threading.Event) -> None:
    """Set up signal handlers for graceful shutdown."""

    def handle_signal(signum: int, frame: FrameType | None) -> None:
        logger.info(f"Received signal {signum}, shutting down...")
        stop_event.set()

    signal.signal(signal.SIGTERM, handle_signal)
    signal.signal(signal.SIGINT, handle_signal)


@app.command()
def run(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Settings file (default: $UNTIS_EXPORT_CONFIG or ~/.untis-export/config.yaml)",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Write logs to this file"),
) -> None:
    """Watch the export directory and publish on every change."""
    provider = load_settings_provider(config)
    settings = provider.settings
    setup_logging(debug or settings.debug, log_file)

    service = ExportService(provider)
    stop_event = threading.Event()
    setup_signal_handlers(stop_event)

    console.print(f"[cyan]▶[/] Watching [bold]{settings.html_path}[/]")
    if not settings.enabled:
        console.print("[yellow]![/] Service is disabled in the settings file")

    service.start()
    try:
        stop_event.wait()
    finally:
        service.stop()

    console.print("[green]✓[/] Stopped")
