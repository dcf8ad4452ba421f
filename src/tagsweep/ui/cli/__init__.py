"""Command line interface package."""

from tagsweep.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
