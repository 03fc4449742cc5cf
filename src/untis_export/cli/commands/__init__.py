"""CLI commands for untis-export."""

# Import command modules to register them with the app
# These imports have side effects (register commands via @app.command())
from untis_export.cli.commands import export, run, validate

__all__ = ["export", "run", "validate"]
