"""untis-export CLI interface."""

import typer
from rich.console import Console

# CLI App
app = typer.Typer(
    name="untis-export",
    help="Publish Untis substitution exports to a remote endpoint.",
    no_args_is_help=True,
)

# Console for rich output
console = Console()

# Import commands to register them
from untis_export.cli.commands import export, run, validate  # noqa: E402, F401


@app.command()
def version() -> None:
    """Show untis-export version."""
    from untis_export import __version__

    console.print(f"untis-export v{__version__}")


if __name__ == "__main__":
    app()
