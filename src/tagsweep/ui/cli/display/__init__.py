"""Display management for CLI interface."""

from tagsweep.ui.cli.display.result import ResultDisplay

__all__ = ["ResultDisplay"]
