"""Domain vocabulary for the cleaning feature."""

from .errors import (
    ArchiveExtractionError,
    CleanerError,
    ImageDecodeError,
    LibraryIOError,
    MissingFileExtensionError,
    TagFormatError,
    UnsupportedFileExtensionError,
)
from .models import (
    ContainerKind,
    Group,
    GroupCover,
    ImageFile,
    MediaFile,
    MediaKind,
    PathCandidates,
    PictureKind,
    TagField,
    TagGeneration,
    Track,
)

__all__ = [
    "ArchiveExtractionError",
    "CleanerError",
    "ImageDecodeError",
    "LibraryIOError",
    "MissingFileExtensionError",
    "TagFormatError",
    "UnsupportedFileExtensionError",
    "ContainerKind",
    "Group",
    "GroupCover",
    "ImageFile",
    "MediaFile",
    "MediaKind",
    "PathCandidates",
    "PictureKind",
    "TagField",
    "TagGeneration",
    "Track",
]
