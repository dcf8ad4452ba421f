"""src/tagsweep/features/cleaning/usecases/processing_types.py
Where: Cleaning feature usecases layer.
What: Shared enums and dataclasses describing cleaning outcomes.
Why: Keep the runner lean by centralising result and event definitions.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Protocol


class ProcessingEvent(StrEnum):
    """Structured event identifiers for cleaning logs."""

    RUN_START = "cleaning.run.start"
    RUN_COMPLETE = "cleaning.run.complete"
    RUN_NO_FILES = "cleaning.run.no_files"
    TRACK_DISCOVERED = "cleaning.track.discovered"
    TRACK_UNREADABLE = "cleaning.track.unreadable"
    GROUP_START = "cleaning.group.start"
    GROUP_ERROR = "cleaning.group.error"
    COVER_WRITTEN = "cleaning.cover.written"
    COVER_MISSING = "cleaning.cover.missing"
    COVER_ERROR = "cleaning.cover.error"
    TRACK_SUCCESS = "cleaning.track.success"
    TRACK_ERROR = "cleaning.track.error"
    ARCHIVE_START = "cleaning.archive.start"
    ARCHIVE_ERROR = "cleaning.archive.error"


class ProcessLogger(Protocol):
    """Signature for structured processing log emitters."""

    def __call__(
        self,
        level: int,
        event: ProcessingEvent,
        message: str,
        *message_args: object,
        **context: object,
    ) -> None:
        ...


class CoverStatus(StrEnum):
    """Outcome of writing the standalone cover file for a group."""

    WRITTEN = "written"
    MISSING = "missing"
    ERROR = "error"


@dataclass
class TrackResult:
    """Result of cleaning one audio file."""

    source_path: Path
    target_path: Path | None = None
    success: bool = False
    error_message: str | None = None


@dataclass
class CoverResult:
    """Result of writing a group's standalone cover file."""

    status: CoverStatus
    target_path: Path | None = None
    origin: Path | None = None
    error_message: str | None = None


@dataclass
class GroupResult:
    """Outcome of one (artist, album) group, tracks in group order."""

    artist: str
    album: str
    directory: Path | None
    cover: CoverResult
    tracks: list[TrackResult] = field(default_factory=list)
    error_message: str | None = None

    @property
    def failed_tracks(self) -> list[TrackResult]:
        return [result for result in self.tracks if not result.success]


@dataclass
class CleaningReport:
    """Everything a cleaning run produced, in deterministic order."""

    source_root: Path
    target_root: Path
    groups: list[GroupResult] = field(default_factory=list)
    unreadable: list[TrackResult] = field(default_factory=list)

    @property
    def track_results(self) -> list[TrackResult]:
        """Unreadable tracks first, then every group's tracks in group order."""

        results = list(self.unreadable)
        for group in self.groups:
            results.extend(group.tracks)
        return results

    @property
    def succeeded(self) -> int:
        return sum(1 for result in self.track_results if result.success)

    @property
    def failed(self) -> int:
        return sum(1 for result in self.track_results if not result.success)

    @property
    def cover_failures(self) -> list[CoverResult]:
        return [group.cover for group in self.groups if group.cover.status is CoverStatus.ERROR]


@dataclass(slots=True)
class ProcessingLogContext:
    """Mutable bookkeeping for a cleaning run."""

    directory: Path
    total_tracks: int
    total_groups: int = 0
    start_time: float = field(default_factory=time.perf_counter)
    succeeded: int = 0
    failed: int = 0

    def record(self, result: TrackResult) -> None:
        if result.success:
            self.succeeded += 1
        else:
            self.failed += 1

    def duration_seconds(self) -> float:
        """Return the elapsed processing time in seconds."""

        return time.perf_counter() - self.start_time

    def summary_extra(self) -> dict[str, Any]:
        """Return a dictionary suitable for structured logging extras."""

        return {
            "directory": str(self.directory),
            "total_tracks": self.total_tracks,
            "total_groups": self.total_groups,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "duration_seconds": round(self.duration_seconds(), 4),
        }


def describe_error(exc: BaseException) -> str:
    """Return a user-facing message for ``exc``, falling back to its class name."""

    return str(exc) or type(exc).__name__


__all__ = [
    "ProcessingEvent",
    "ProcessLogger",
    "CoverStatus",
    "TrackResult",
    "CoverResult",
    "GroupResult",
    "CleaningReport",
    "ProcessingLogContext",
    "describe_error",
]
