"""CLI command implementations for the countertops application."""

from countertops.cli.commands.validate import validate_command

__all__ = ["validate_command"]
