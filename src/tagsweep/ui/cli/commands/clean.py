"""src/tagsweep/ui/cli/commands/clean.py
What: Execute clean runs via the CLI.
Why: Bridge parsed arguments with the application service and result display.
"""

from __future__ import annotations

from typing import final

from tagsweep.application.services.clean_service import (
    CleanLibraryService,
    CleanOutcome,
    CleanRequest,
)
from tagsweep.config.config import Config
from tagsweep.config.settings import CleaningSettings
from tagsweep.ui.cli.args.options import CleanArgs
from tagsweep.ui.cli.display.result import ResultDisplay


@final
class CleanCommand:
    """Command for cleaning a library or a directory of archives."""

    args: CleanArgs
    app: CleanLibraryService
    request: CleanRequest
    result_display: ResultDisplay

    def __init__(
        self,
        args: CleanArgs,
        *,
        app: CleanLibraryService | None = None,
        config: Config | None = None,
    ) -> None:
        """Initialize the command.

        Args:
            args: Command line arguments.
            app: Service override for tests.
            config: Configuration override for tests; loaded from disk otherwise.
        """
        self.args = args
        self.app = app or CleanLibraryService()
        configuration = config or Config.load()
        settings = CleaningSettings.from_config(
            configuration,
            jpeg_quality=args.quality,
            workers=args.workers,
        )
        self.request = CleanRequest(
            source=args.source_path,
            output=args.output_path,
            settings=settings,
            mode=args.mode,
            interactive=not args.batch,
            default_year=args.year,
            default_genre=args.genre,
            temp_dir=args.temp_dir,
        )
        self.result_display = ResultDisplay()

    def execute(self) -> CleanOutcome:
        """Run the clean and print the summary."""

        outcome = self.app.run(self.request)
        self.result_display.show_results(outcome, quiet=self.args.quiet)
        return outcome
