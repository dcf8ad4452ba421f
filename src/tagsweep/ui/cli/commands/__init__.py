"""Command execution package for CLI."""

from tagsweep.ui.cli.commands.clean import CleanCommand

__all__ = ["CleanCommand"]
