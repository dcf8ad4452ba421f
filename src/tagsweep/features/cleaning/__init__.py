# Where: tagsweep.features.cleaning.__init__
# What: Expose the cleaning pipeline, its adapters, and result types.
# Why: Provide a cohesive import surface for the application and UI layers.

from tagsweep.shared.track_metadata import ResolvedMetadata

from .adapters import BatchDefaults, MutagenContainerOpener, PillowImageCodec, RichPromptDefaults
from .domain import (
    ArchiveExtractionError,
    CleanerError,
    ContainerKind,
    Group,
    PathCandidates,
    Track,
)
from .usecases import (
    ArchiveResult,
    CleaningReport,
    CleaningRunner,
    CoverStatus,
    GroupResult,
    ProcessingEvent,
    TrackResult,
    process_archives,
)

__all__ = [
    "ResolvedMetadata",
    "BatchDefaults",
    "MutagenContainerOpener",
    "PillowImageCodec",
    "RichPromptDefaults",
    "ArchiveExtractionError",
    "CleanerError",
    "ContainerKind",
    "Group",
    "PathCandidates",
    "Track",
    "ArchiveResult",
    "CleaningReport",
    "CleaningRunner",
    "CoverStatus",
    "GroupResult",
    "ProcessingEvent",
    "TrackResult",
    "process_archives",
]
