"""src/tagsweep/features/cleaning/usecases/cleaning_runner.py
What: Orchestrate scan, discovery, grouping, cover selection, copy, and tag rewrite.
Why: Report every track, cover, and group outcome without letting one failure stop the run.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path

from tagsweep.config.settings import CleaningSettings
from tagsweep.platform.filesystem import copy_file, ensure_directory, write_bytes_file

from ..domain.errors import CleanerError, LibraryIOError, MissingFileExtensionError
from ..domain.models import Group, Track
from .cover_art import CoverArtSelector
from .discovery import discover_tracks
from .event_logging import log_processing
from .grouping import Grouper
from .naming import album_directory, destination_path
from .ports import DefaultValueProvider, ImageCodec, TagContainerOpener
from .processing_types import (
    CleaningReport,
    CoverResult,
    CoverStatus,
    GroupResult,
    ProcessingEvent,
    ProcessingLogContext,
    ProcessLogger,
    TrackResult,
    describe_error,
)
from .scanning import scan_library
from .tag_rewriter import RewriteRequest, TagRewriter


class CleaningRunner:
    """Clean one library root into an output root."""

    def __init__(
        self,
        settings: CleaningSettings,
        opener: TagContainerOpener,
        codec: ImageCodec,
        defaults: DefaultValueProvider | None = None,
        *,
        log: ProcessLogger = log_processing,
    ) -> None:
        self.settings: CleaningSettings = settings
        self.opener: TagContainerOpener = opener
        self.grouper: Grouper = Grouper(settings, defaults)
        self.cover_selector: CoverArtSelector = CoverArtSelector(codec, opener, settings.jpeg_quality)
        self.rewriter: TagRewriter = TagRewriter(opener)
        self.log: ProcessLogger = log

    def run(self, source_root: Path, output_root: Path) -> CleaningReport:
        """Clean every audio file under ``source_root``.

        Raises:
            ValueError: If ``source_root`` is not a directory.
        """

        scan = scan_library(source_root)
        report = CleaningReport(source_root=source_root, target_root=output_root)

        if not scan.audio_files:
            self.log(
                logging.WARNING,
                ProcessingEvent.RUN_NO_FILES,
                "No supported audio files found [path=%s]",
                source_root,
                directory=source_root,
                total_tracks=0,
            )
            return report

        discovery = discover_tracks(scan.audio_paths, source_root, self.opener, log=self.log)
        report.unreadable.extend(discovery.failures)
        groups = self.grouper.group(discovery.tracks, scan.images_by_directory())

        stats = ProcessingLogContext(
            directory=source_root,
            total_tracks=len(scan.audio_files),
            total_groups=len(groups),
        )
        for failure in discovery.failures:
            stats.record(failure)
        self.log(
            logging.INFO,
            ProcessingEvent.RUN_START,
            "Cleaning started [tracks=%d, groups=%d, path=%s]",
            stats.total_tracks,
            stats.total_groups,
            source_root,
            **stats.summary_extra(),
        )

        if self.settings.workers > 1 and len(groups) > 1:
            with ThreadPoolExecutor(max_workers=self.settings.workers) as executor:
                # map() yields in submission order, so reporting stays deterministic.
                for result in executor.map(lambda group: self.process_group(group, output_root), groups):
                    self._report_group(result, report, stats, output_root)
        else:
            for group in groups:
                self._report_group(self.process_group(group, output_root), report, stats, output_root)

        self.log(
            logging.INFO,
            ProcessingEvent.RUN_COMPLETE,
            "Cleaning finished [succeeded=%d, failed=%d, duration=%.2fs]",
            stats.succeeded,
            stats.failed,
            stats.duration_seconds(),
            **stats.summary_extra(),
        )
        return report

    def process_group(self, group: Group, output_root: Path) -> GroupResult:
        """Create the album directory, attach and write the cover, then clean each track in order."""

        directory = album_directory(output_root, group, self.settings)
        try:
            _ = ensure_directory(directory)
        except OSError as exc:
            message = describe_error(LibraryIOError("create directory", directory, exc))
            return GroupResult(
                artist=group.artist_key,
                album=group.album_key,
                directory=directory,
                cover=CoverResult(status=CoverStatus.ERROR, error_message=message),
                tracks=[
                    TrackResult(source_path=track.source_path, error_message=message)
                    for track in group.tracks
                ],
                error_message=message,
            )

        cover_path = directory / self.settings.cover_file_name
        try:
            cover = self.cover_selector.prepare(group)
        except (CleanerError, OSError) as exc:
            cover_result = CoverResult(
                status=CoverStatus.ERROR,
                target_path=cover_path,
                error_message=describe_error(exc),
            )
        else:
            if cover is None:
                cover_result = CoverResult(status=CoverStatus.MISSING, target_path=cover_path)
            else:
                group = replace(group, cover=cover)
                cover_result = self._write_cover(cover_path, cover.jpeg_bytes, cover.origin)

        tracks = [self.clean_track(track, group, directory) for track in group.tracks]
        return GroupResult(
            artist=group.artist_key,
            album=group.album_key,
            directory=directory,
            cover=cover_result,
            tracks=tracks,
        )

    def clean_track(
        self,
        track: Track,
        group: Group,
        directory: Path,
    ) -> TrackResult:
        """Copy one track to its destination and rewrite its tags, embedding ``group.cover``."""

        result = TrackResult(source_path=track.source_path)
        try:
            kind = track.container_kind
            if kind is None:
                raise MissingFileExtensionError(track.source_path)
            target = destination_path(directory, track, group.track_width, self.settings)
            result.target_path = target
            try:
                _ = copy_file(track.source_path, target)
            except OSError as exc:
                raise LibraryIOError("copy", track.source_path, exc) from exc

            self.rewriter.rewrite(
                RewriteRequest(
                    path=target,
                    kind=kind,
                    metadata=track.resolved,
                    total_tracks=group.total_track_count,
                    default_year=group.default_year,
                    default_genre=group.default_genre,
                    cover_jpeg=group.cover.jpeg_bytes if group.cover is not None else None,
                )
            )
        except CleanerError as exc:
            result.error_message = describe_error(exc)
            return result

        result.success = True
        return result

    @staticmethod
    def _write_cover(path: Path, data: bytes, origin: Path) -> CoverResult:
        try:
            _ = write_bytes_file(path, data)
        except OSError as exc:
            return CoverResult(
                status=CoverStatus.ERROR,
                target_path=path,
                origin=origin,
                error_message=describe_error(LibraryIOError("write", path, exc)),
            )
        return CoverResult(status=CoverStatus.WRITTEN, target_path=path, origin=origin)

    def _report_group(
        self,
        result: GroupResult,
        report: CleaningReport,
        stats: ProcessingLogContext,
        output_root: Path,
    ) -> None:
        report.groups.append(result)
        self.log(
            logging.INFO,
            ProcessingEvent.GROUP_START,
            "Album [artist=%s, album=%s, tracks=%d]",
            result.artist,
            result.album,
            len(result.tracks),
            artist=result.artist,
            album=result.album,
            total_tracks=len(result.tracks),
        )
        if result.error_message is not None:
            self.log(
                logging.ERROR,
                ProcessingEvent.GROUP_ERROR,
                "Cannot create album directory [path=%s]: %s",
                result.directory,
                result.error_message,
                target_path=result.directory,
                target_base_path=output_root,
                error_message=result.error_message,
            )

        cover = result.cover
        if result.error_message is None:
            cover_events = {
                CoverStatus.WRITTEN: (logging.INFO, ProcessingEvent.COVER_WRITTEN),
                CoverStatus.MISSING: (logging.WARNING, ProcessingEvent.COVER_MISSING),
                CoverStatus.ERROR: (logging.ERROR, ProcessingEvent.COVER_ERROR),
            }
            level, event = cover_events[cover.status]
            self.log(
                level,
                event,
                "Cover %s [path=%s, origin=%s]",
                cover.status.value,
                cover.target_path,
                cover.origin,
                target_path=cover.target_path,
                target_base_path=output_root,
                error_message=cover.error_message,
            )

        for track_result in result.tracks:
            stats.record(track_result)
            if track_result.success:
                self.log(
                    logging.INFO,
                    ProcessingEvent.TRACK_SUCCESS,
                    "Track cleaned [src=%s, dest=%s]",
                    track_result.source_path,
                    track_result.target_path,
                    source_path=track_result.source_path,
                    target_path=track_result.target_path,
                    target_base_path=output_root,
                )
            else:
                self.log(
                    logging.ERROR,
                    ProcessingEvent.TRACK_ERROR,
                    "Track failed [src=%s]: %s",
                    track_result.source_path,
                    track_result.error_message,
                    source_path=track_result.source_path,
                    target_path=track_result.target_path,
                    target_base_path=output_root,
                    error_message=track_result.error_message,
                )


__all__ = ["CleaningRunner"]
