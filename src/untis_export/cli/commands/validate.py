"""Validate command for the untis-export CLI."""

from __future__ import annotations

from pathlib import Path

import typer

from untis_export.cli import app, console
from untis_export.config import ConfigError, get_config_path, load_settings


@app.command()
def validate(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Settings file (default: $UNTIS_EXPORT_CONFIG or ~/.untis-export/config.yaml)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed settings information",
    ),
) -> None:
    """Validate a settings file."""
    path = get_config_path(config)

    try:
        settings = load_settings(path)
    except ConfigError as e:
        console.print(f"[red]✗[/] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/] Settings [cyan]{path}[/] are valid")

    if verbose:
        untis = settings.untis
        console.print()
        console.print(f"  [dim]Enabled:[/] {settings.enabled}")
        console.print(f"  [dim]Export directory:[/] {settings.html_path}")
        console.print(f"  [dim]Threshold:[/] {settings.threshold}s")
        console.print(f"  [dim]Encoding:[/] {settings.encoding}")
        console.print(f"  [dim]Substitutions URL:[/] {settings.endpoint.substitutions or '(none)'}")
        console.print(f"  [dim]Infotexts URL:[/] {settings.endpoint.infotexts or '(none)'}")
        console.print(f"  [dim]Remove exams:[/] {untis.remove_exams}")
        console.print(f"  [dim]Type replacements:[/] {len(untis.type_replacements)}")
