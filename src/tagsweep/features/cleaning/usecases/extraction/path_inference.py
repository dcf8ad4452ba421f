"""Metadata candidates inferred from library naming conventions.

Where: src/tagsweep/features/cleaning/usecases/extraction/path_inference.py
What: Derive artist, album, year, track number, and title guesses from a track's path.
Why: Untagged files still carry ``Artist/Album (Year)/NN Title.ext`` structure worth using.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

from ...domain.errors import MissingFileExtensionError, UnsupportedFileExtensionError
from ...domain.models import ContainerKind, PathCandidates
from ._tag_utils import clean_text

__all__ = [
    "ALBUM_DIRECTORY_PATTERN",
    "TRACK_STEM_PATTERN",
    "infer_path_candidates",
    "parse_album_directory",
    "parse_track_stem",
    "infer_container_kind",
    "require_container_kind",
]

# "Album Title (1999)" or "Album Title 1999"
ALBUM_DIRECTORY_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(.+)\s\(?([0-9]{4})\)?$")
# "03 Title", "03. Title", "03 - Title", or just "Title"
TRACK_STEM_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?:([0-9]+)\.?(?:\s-\s|\s))?(.+)$")


def _inside_root(directory: Path, root: Path) -> bool:
    """True when ``directory`` lies strictly below ``root``."""

    return directory != root and directory.is_relative_to(root)


def parse_album_directory(name: str) -> tuple[str | None, int | None]:
    """Split an album directory name into (title, year); both ``None`` without a year suffix."""

    match = ALBUM_DIRECTORY_PATTERN.match(name.strip())
    if match is None:
        return None, None
    title = clean_text(match.group(1))
    if title is None:
        return None, None
    return title, int(match.group(2))


def parse_track_stem(stem: str) -> tuple[int | None, str | None]:
    """Split a file stem into (track number, title)."""

    trimmed = stem.strip()
    match = TRACK_STEM_PATTERN.match(trimmed)
    if match is None:
        return None, clean_text(trimmed)

    raw_number, raw_title = match.group(1), match.group(2)
    number: int | None = None
    if raw_number is not None:
        try:
            number = int(raw_number)
        except ValueError:
            number = None
    return number, clean_text(raw_title)


def infer_path_candidates(path: Path, root: Path) -> PathCandidates:
    """Return the naming-convention candidates for the track at ``path`` under ``root``."""

    album_directory = path.parent
    artist_directory = album_directory.parent

    artist: str | None = None
    if _inside_root(artist_directory, root):
        artist = clean_text(artist_directory.name)

    album_title: str | None = None
    album_year: int | None = None
    if _inside_root(album_directory, root):
        album_title, album_year = parse_album_directory(album_directory.name)

    track_number, track_title = parse_track_stem(path.stem)
    return PathCandidates(
        artist_from_grandparent_dir=artist,
        album_title_from_parent_dir=album_title,
        album_year_from_parent_dir=album_year,
        track_number_from_filename=track_number,
        track_title_from_filename=track_title,
    )


def infer_container_kind(path: Path) -> ContainerKind | None:
    """Container kind from the lowercased extension, ``None`` when missing or unknown."""

    if not path.suffix:
        return None
    return ContainerKind.from_extension(path.suffix)


def require_container_kind(path: Path) -> ContainerKind:
    """Like :func:`infer_container_kind` but raising the matching extension error."""

    if not path.suffix:
        raise MissingFileExtensionError(path)
    kind = ContainerKind.from_extension(path.suffix)
    if kind is None:
        raise UnsupportedFileExtensionError(path)
    return kind
