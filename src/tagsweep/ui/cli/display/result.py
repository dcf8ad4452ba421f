"""src/tagsweep/ui/cli/display/result.py
What: Render the end-of-run summary for clean commands.
Why: Keep console output formatting consistent across the interface.
"""

from __future__ import annotations

from typing import final

from rich.console import Console

from tagsweep.application.services.clean_service import CleanOutcome

from .summary import render_album_summary, render_archive_summary, render_track_summary


@final
class ResultDisplay:
    """Handles result display in CLI."""

    console: Console

    def __init__(self, console: Console | None = None) -> None:
        """Initialize result display."""
        self.console = console or Console()

    def show_results(self, outcome: CleanOutcome, quiet: bool = False) -> None:
        """Display cleaning results.

        Args:
            outcome: Reports and archive results of the run.
            quiet: Whether to suppress non-error output.
        """
        if quiet:
            return

        render_track_summary(
            self.console,
            [result for report in outcome.reports for result in report.track_results],
        )
        render_album_summary(
            self.console,
            [group for report in outcome.reports for group in report.groups],
        )
        render_archive_summary(self.console, outcome.archive_results)
