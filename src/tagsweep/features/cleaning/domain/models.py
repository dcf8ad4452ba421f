"""
Summary: Value objects describing library files, tracks, and album groups.
Why: Give every pipeline stage one immutable vocabulary for the data it passes along.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from pathlib import Path

from tagsweep.shared.track_metadata import ResolvedMetadata


class ContainerKind(StrEnum):
    """Audio container formats whose tags can be rewritten."""

    MP3 = "mp3"
    FLAC = "flac"

    @property
    def extension(self) -> str:
        """File extension (without dot) used for output file names."""

        return self.value

    @classmethod
    def from_extension(cls, extension: str) -> ContainerKind | None:
        """Map a file extension (with or without leading dot) to a kind."""

        normalized = extension.lower().lstrip(".")
        try:
            return cls(normalized)
        except ValueError:
            return None


class MediaKind(StrEnum):
    """Coarse classification of files found in a library tree."""

    AUDIO = "audio"
    IMAGE = "image"
    OTHER = "other"


class TagGeneration(StrEnum):
    """Coexisting tag encodings inside one container."""

    MODERN = "modern"
    LEGACY = "legacy"


class TagField(StrEnum):
    """Semantic tag keys shared by every container adapter."""

    ALBUM_ARTIST = "album_artist"
    ARTIST = "artist"
    ALBUM = "album"
    YEAR = "year"
    TRACK_NUMBER = "track_number"
    TITLE = "title"
    GENRE = "genre"


class PictureKind(IntEnum):
    """Picture roles, numbered as in the ID3v2 APIC and FLAC PICTURE specs."""

    OTHER = 0
    COVER_FRONT = 3
    COVER_BACK = 4


@dataclass(frozen=True, slots=True)
class MediaFile:
    """A file found while scanning, tagged with its kind."""

    path: Path
    kind: MediaKind

    @property
    def directory(self) -> Path:
        return self.path.parent


@dataclass(frozen=True, slots=True)
class PathCandidates:
    """Metadata guesses derived only from directory and file names."""

    artist_from_grandparent_dir: str | None = None
    album_title_from_parent_dir: str | None = None
    album_year_from_parent_dir: int | None = None
    track_number_from_filename: int | None = None
    track_title_from_filename: str | None = None


@dataclass(frozen=True, slots=True)
class Track:
    """One audio file with its metadata resolved exactly once."""

    source_path: Path
    container_kind: ContainerKind | None
    resolved: ResolvedMetadata
    discovery_index: int = 0


@dataclass(frozen=True, slots=True)
class ImageFile:
    """A standalone image colocated with audio files."""

    path: Path
    dimensions: tuple[int, int] | None = None

    @property
    def is_square(self) -> bool:
        if self.dimensions is None:
            return False
        width, height = self.dimensions
        return width > 0 and width == height


@dataclass(frozen=True, slots=True)
class GroupCover:
    """Cover art chosen for a group, already re-encoded as JPEG."""

    jpeg_bytes: bytes
    origin: Path
    embedded: bool = False


@dataclass(frozen=True, slots=True)
class Group:
    """Tracks sharing one (album artist, album) key plus album-level derived values."""

    artist_key: str
    album_key: str
    tracks: tuple[Track, ...]
    default_year: int | None = None
    default_genre: str | None = None
    track_width: int = 2
    image_files: tuple[ImageFile, ...] = field(default_factory=tuple)
    cover: GroupCover | None = None

    @property
    def total_track_count(self) -> int:
        return len(self.tracks)

    @property
    def key(self) -> tuple[str, str]:
        return (self.artist_key, self.album_key)


__all__ = [
    "ContainerKind",
    "MediaKind",
    "TagGeneration",
    "TagField",
    "PictureKind",
    "MediaFile",
    "PathCandidates",
    "Track",
    "ImageFile",
    "GroupCover",
    "Group",
]
