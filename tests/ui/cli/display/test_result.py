"""Tests for result display functionality."""

from io import StringIO
from pathlib import Path

from pytest_mock import MockerFixture
from rich.console import Console

from tagsweep.application.services.clean_service import CleanOutcome
from tagsweep.features.cleaning.usecases.archives import ArchiveResult
from tagsweep.features.cleaning.usecases.processing_types import (
    CleaningReport,
    CoverResult,
    CoverStatus,
    GroupResult,
    TrackResult,
)
from tagsweep.ui.cli.display.result import ResultDisplay


def _outcome() -> CleanOutcome:
    report = CleaningReport(
        source_root=Path("in"),
        target_root=Path("out"),
        groups=[
            GroupResult(
                artist="[unknown]",
                album="Album",
                directory=Path("out/[unknown]/Album"),
                cover=CoverResult(status=CoverStatus.MISSING),
                tracks=[
                    TrackResult(source_path=Path("in/a.mp3"), success=True),
                    TrackResult(source_path=Path("in/[b].mp3"), error_message="copy failed"),
                ],
            ),
            GroupResult(
                artist="Artist",
                album="Record",
                directory=Path("out/Artist/Record"),
                cover=CoverResult(
                    status=CoverStatus.ERROR,
                    target_path=Path("out/Artist/Record/cover.jpg"),
                    error_message="cannot encode",
                ),
                tracks=[TrackResult(source_path=Path("in/c.mp3"), success=True)],
            ),
        ],
    )
    return CleanOutcome(
        reports=[report],
        archive_results=[ArchiveResult(archive_path=Path("dl/bad.zip"), error_message="corrupt")],
    )


def test_show_results() -> None:
    """The summary lists counts, cover problems, and failed archives."""

    console = Console(file=StringIO(), width=200)

    ResultDisplay(console).show_results(_outcome(), quiet=False)

    text = console.file.getvalue()  # pyright: ignore[reportAttributeAccessIssue]
    assert "Total tracks processed: 3" in text
    assert "Successful: 2" in text
    assert "Failed: 1" in text
    assert "in/[b].mp3: copy failed" in text
    assert "Albums: 2 (covers written: 0, without cover: 1)" in text
    assert "Cover errors: 1" in text
    assert "cover out/Artist/Record/cover.jpg: cannot encode" in text
    assert "Archives failed: 1" in text
    assert "dl/bad.zip: corrupt" in text


def test_show_results_quiet(mocker: MockerFixture) -> None:
    """Quiet mode prints nothing."""

    console = mocker.Mock(spec=Console)

    ResultDisplay(console).show_results(_outcome(), quiet=True)

    console.print.assert_not_called()
