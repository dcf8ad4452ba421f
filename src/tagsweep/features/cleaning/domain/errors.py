"""
Summary: Error hierarchy raised by the cleaning pipeline and its adapters.
Why: Let the runner catch per-item failures without swallowing programming errors.
"""

from __future__ import annotations

from pathlib import Path


class CleanerError(Exception):
    """Base class for failures that affect a single track, group, or archive."""


class LibraryIOError(CleanerError):
    """Raised when copying, reading, writing, or creating a directory fails."""

    def __init__(self, operation: str, path: Path, cause: OSError) -> None:
        reason = cause.strerror or str(cause) or type(cause).__name__
        super().__init__(f"{operation} failed for {path}: {reason}")
        self.operation: str = operation
        self.path: Path = path


class TagFormatError(CleanerError):
    """Raised when a tag container cannot be read, stripped, or saved."""


class MissingFileExtensionError(CleanerError):
    """Raised for audio paths without an extension to derive the container kind from."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"missing file extension: {path.name}")
        self.path: Path = path


class UnsupportedFileExtensionError(CleanerError):
    """Raised for audio paths whose extension maps to no supported container kind."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"unexpected file extension: {path.suffix}")
        self.path: Path = path


class ImageDecodeError(CleanerError):
    """Raised when an image cannot be decoded or re-encoded."""


class ArchiveExtractionError(CleanerError):
    """Raised when an archive cannot be opened or extracted."""


__all__ = [
    "CleanerError",
    "LibraryIOError",
    "TagFormatError",
    "MissingFileExtensionError",
    "UnsupportedFileExtensionError",
    "ImageDecodeError",
    "ArchiveExtractionError",
]
