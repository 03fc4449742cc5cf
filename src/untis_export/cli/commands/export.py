"""Export command for the untis-export CLI."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from untis_export.cli import app, console
from untis_export.cli.utils import load_settings_provider, setup_logging
from untis_export.engine import ExportCoordinator
from untis_export.parser import UntisHtmlParser
from untis_export.upload import HttpUploader


async def _no_delay(seconds: float) -> None:
    return None


@app.command()
def export(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Settings file (default: $UNTIS_EXPORT_CONFIG or ~/.untis-export/config.yaml)",
    ),
    no_delay: bool = typer.Option(
        False, "--no-delay", help="Skip the settle delay before reading files"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Write logs to this file"),
) -> None:
    """Publish the current export once, as if the directory had changed.

    Failures are logged; the exit code is 0 as long as the settings load.
    """
    provider = load_settings_provider(config)
    settings = provider.settings
    setup_logging(debug or settings.debug, log_file)

    coordinator = ExportCoordinator(
        settings_provider=provider,
        parser=UntisHtmlParser(),
        uploader=HttpUploader(settings_provider=provider),
        sleep=_no_delay if no_delay else asyncio.sleep,
    )

    console.print(f"[cyan]▶[/] Exporting [bold]{settings.html_path}[/]")
    asyncio.run(coordinator.handle_change())
    console.print("[green]✓[/] Done, see log for details")
