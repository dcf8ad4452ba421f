"""Application service for cleaning music libraries.

This layer centralizes construction of the cleaning runner and its adapters
so that UIs only describe what to clean, never how the pipeline is wired.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import final

from tagsweep.config.settings import CleaningSettings
from tagsweep.features.cleaning.adapters import (
    BatchDefaults,
    MutagenContainerOpener,
    PillowImageCodec,
    RichPromptDefaults,
)
from tagsweep.features.cleaning.usecases import (
    ArchiveResult,
    CleaningReport,
    CleaningRunner,
    process_archives,
)
from tagsweep.features.cleaning.usecases.ports import (
    DefaultValueProvider,
    ImageCodec,
    TagContainerOpener,
)


class CleanMode(StrEnum):
    """What SOURCE contains."""

    ARCHIVES = "archives"
    FILES = "files"


@dataclass(frozen=True)
class CleanRequest:
    """Input parameters for a cleaning run.

    Attributes:
        source: Library root (files mode) or directory of archives (archives mode).
        output: Root directory for the cleaned library.
        settings: Validated pipeline settings.
        mode: Whether ``source`` holds files or archives.
        interactive: Ask for missing album years and genres on the terminal.
        default_year: Year used for albums without one when not interactive.
        default_genre: Genre used for albums without one when not interactive.
        temp_dir: Parent directory for archive extraction (system default when ``None``).
    """

    source: Path
    output: Path
    settings: CleaningSettings
    mode: CleanMode = CleanMode.FILES
    interactive: bool = True
    default_year: int | None = None
    default_genre: str | None = None
    temp_dir: Path | None = None


@dataclass
class CleanOutcome:
    """Reports produced by one request, in processing order."""

    reports: list[CleaningReport]
    archive_results: list[ArchiveResult]

    @property
    def failed(self) -> int:
        failed_archives = sum(1 for result in self.archive_results if result.error_message)
        return failed_archives + sum(report.failed for report in self.reports)

    @property
    def succeeded(self) -> int:
        return sum(report.succeeded for report in self.reports)


@final
class CleanLibraryService:
    """Application service that wires and runs the cleaning pipeline."""

    def __init__(
        self,
        *,
        opener_factory: Callable[[], TagContainerOpener] | None = None,
        codec_factory: Callable[[], ImageCodec] | None = None,
        runner_factory: Callable[..., CleaningRunner] | None = None,
        prompt_factory: Callable[[], DefaultValueProvider] | None = None,
    ) -> None:
        """Create a service with overridable adapter factories for tests."""

        self._opener_factory: Callable[[], TagContainerOpener] = (
            opener_factory or MutagenContainerOpener
        )
        self._codec_factory: Callable[[], ImageCodec] = codec_factory or PillowImageCodec
        self._runner_factory: Callable[..., CleaningRunner] = runner_factory or CleaningRunner
        self._prompt_factory: Callable[[], DefaultValueProvider] = (
            prompt_factory or RichPromptDefaults
        )

    def build_defaults(self, request: CleanRequest) -> DefaultValueProvider:
        if request.interactive:
            return self._prompt_factory()
        return BatchDefaults(year=request.default_year, genre=request.default_genre)

    def build_runner(self, request: CleanRequest) -> CleaningRunner:
        """Build a ``CleaningRunner`` configured for ``request``."""

        return self._runner_factory(
            request.settings,
            self._opener_factory(),
            self._codec_factory(),
            self.build_defaults(request),
        )

    def run(self, request: CleanRequest) -> CleanOutcome:
        """Clean ``request.source`` into ``request.output``.

        Raises:
            ValueError: If ``request.source`` is not a directory.
        """

        if not request.source.is_dir():
            raise ValueError(f"Not a directory: {request.source}")

        runner = self.build_runner(request)
        if request.mode is CleanMode.FILES:
            return CleanOutcome(reports=[runner.run(request.source, request.output)], archive_results=[])

        archive_results = process_archives(
            request.source,
            request.output,
            runner,
            temp_dir=request.temp_dir,
        )
        reports = [result.report for result in archive_results if result.report is not None]
        return CleanOutcome(reports=reports, archive_results=archive_results)


__all__ = ["CleanMode", "CleanRequest", "CleanOutcome", "CleanLibraryService"]
