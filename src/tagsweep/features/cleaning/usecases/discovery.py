"""src/tagsweep/features/cleaning/usecases/discovery.py
What: Turn audio paths into immutable ``Track`` records with resolved metadata.
Why: Resolve each track exactly once, before grouping, and isolate unreadable files.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..domain.errors import CleanerError
from ..domain.models import Track
from .event_logging import log_processing
from .extraction import infer_path_candidates, require_container_kind, resolve_metadata
from .ports import TagContainerOpener
from .processing_types import ProcessingEvent, ProcessLogger, TrackResult, describe_error


@dataclass(slots=True)
class DiscoveryResult:
    """Readable tracks in discovery order plus failures for the rest."""

    tracks: list[Track] = field(default_factory=list)
    failures: list[TrackResult] = field(default_factory=list)


def discover_track(path: Path, root: Path, opener: TagContainerOpener, index: int = 0) -> Track:
    """Resolve a single track.

    Raises:
        CleanerError: When the extension is missing or unsupported, or the container is unreadable.
    """

    kind = require_container_kind(path)
    candidates = infer_path_candidates(path, root)
    container = opener.open(path, kind)
    resolved = resolve_metadata(container.primary_tag(), candidates)
    return Track(source_path=path, container_kind=kind, resolved=resolved, discovery_index=index)


def discover_tracks(
    audio_paths: Iterable[Path],
    root: Path,
    opener: TagContainerOpener,
    *,
    log: ProcessLogger = log_processing,
) -> DiscoveryResult:
    """Resolve every path in order; failures are recorded and never raised."""

    result = DiscoveryResult()
    for index, path in enumerate(audio_paths):
        try:
            track = discover_track(path, root, opener, index)
        except (CleanerError, OSError) as exc:
            message = describe_error(exc)
            result.failures.append(TrackResult(source_path=path, error_message=message))
            log(
                logging.WARNING,
                ProcessingEvent.TRACK_UNREADABLE,
                "Cannot read track [path=%s]: %s",
                path,
                message,
                source_path=path,
                source_base_path=root,
                error_message=message,
            )
            continue

        result.tracks.append(track)
        log(
            logging.DEBUG,
            ProcessingEvent.TRACK_DISCOVERED,
            "Resolved track [path=%s, artist=%s, album=%s, number=%s, title=%s]",
            path,
            track.resolved.album_artist_name,
            track.resolved.album_title,
            track.resolved.track_number,
            track.resolved.track_title,
            source_path=path,
            source_base_path=root,
        )
    return result


__all__ = ["DiscoveryResult", "discover_track", "discover_tracks"]
