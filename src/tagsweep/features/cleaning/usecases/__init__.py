"""
Summary: Package exports for cleaning use cases.
Why: Provide one namespace for the pipeline stages and their result types.
"""

from . import extraction, ports
from .archives import ArchiveResult, extract_archive, find_archives, process_archives
from .cleaning_runner import CleaningRunner
from .cover_art import CoverArtSelector, SelectedCover
from .discovery import DiscoveryResult, discover_track, discover_tracks
from .grouping import Grouper
from .naming import album_directory, destination_path, track_file_name
from .processing_types import (
    CleaningReport,
    CoverResult,
    CoverStatus,
    GroupResult,
    ProcessingEvent,
    ProcessingLogContext,
    TrackResult,
)
from .scanning import LibraryScan, scan_library
from .tag_rewriter import RewriteRequest, TagRewriter

__all__ = [
    "extraction",
    "ports",
    "ArchiveResult",
    "extract_archive",
    "find_archives",
    "process_archives",
    "CleaningRunner",
    "CoverArtSelector",
    "SelectedCover",
    "DiscoveryResult",
    "discover_track",
    "discover_tracks",
    "Grouper",
    "album_directory",
    "destination_path",
    "track_file_name",
    "CleaningReport",
    "CoverResult",
    "CoverStatus",
    "GroupResult",
    "ProcessingEvent",
    "ProcessingLogContext",
    "TrackResult",
    "LibraryScan",
    "scan_library",
    "RewriteRequest",
    "TagRewriter",
]
