"""Partition resolved tracks into deterministic (artist, album) groups.

Where: src/tagsweep/features/cleaning/usecases/grouping.py
What: Key, sort, and annotate groups with totals, defaults, widths, and colocated images.
Why: Identical input must always yield identical group order and destination paths.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import TypeVar

from tagsweep.config.settings import CleaningSettings

from ..domain.models import Group, ImageFile, Track
from .ports import DefaultValueProvider

T = TypeVar("T")


def group_key(track: Track, settings: CleaningSettings) -> tuple[str, str]:
    """Return the (artist, album) key with placeholders for unresolved values."""

    resolved = track.resolved
    artist = resolved.album_artist_name or settings.unknown_artist_name
    album = resolved.album_title or settings.unknown_album_title
    return artist, album


def track_sort_key(track: Track) -> tuple[bool, int, int]:
    """Numbered tracks ascending, unnumbered after them, ties by discovery order."""

    number = track.resolved.track_number
    return (number is None, number or 0, track.discovery_index)


def track_number_width(total: int, minimum: int = 2) -> int:
    """Digits needed to zero-pad track numbers for a group of ``total`` tracks."""

    return max(minimum, len(str(total)))


def first_present(values: Iterable[T | None]) -> T | None:
    for value in values:
        if value is not None:
            return value
    return None


def colocated_images(
    tracks: Sequence[Track],
    images_by_directory: Mapping[Path, Sequence[Path]],
) -> tuple[ImageFile, ...]:
    """Images living in any directory that holds one of ``tracks``, in sorted order."""

    directories = sorted({track.source_path.parent for track in tracks})
    images: list[ImageFile] = []
    for directory in directories:
        images.extend(ImageFile(path=path) for path in images_by_directory.get(directory, ()))
    return tuple(images)


class Grouper:
    """Build sorted groups from resolved tracks."""

    def __init__(
        self,
        settings: CleaningSettings,
        defaults: DefaultValueProvider | None = None,
    ) -> None:
        self.settings: CleaningSettings = settings
        self.defaults: DefaultValueProvider | None = defaults

    def group(
        self,
        tracks: Iterable[Track],
        images_by_directory: Mapping[Path, Sequence[Path]] | None = None,
    ) -> list[Group]:
        """Partition ``tracks`` and return groups sorted lexicographically by key.

        The default-value provider is consulted in group order, and only for groups in
        which no track resolved a year (or genre) of its own.
        """

        partitions: defaultdict[tuple[str, str], list[Track]] = defaultdict(list)
        for track in tracks:
            partitions[group_key(track, self.settings)].append(track)

        groups: list[Group] = []
        for key in sorted(partitions):
            artist, album = key
            members = tuple(sorted(partitions[key], key=track_sort_key))
            default_year = first_present(track.resolved.year for track in members)
            default_genre = first_present(track.resolved.genre for track in members)
            if self.defaults is not None:
                if default_year is None:
                    default_year = self.defaults.ask_year(artist, album)
                if default_genre is None:
                    default_genre = self.defaults.ask_genre(artist, album)

            groups.append(
                Group(
                    artist_key=artist,
                    album_key=album,
                    tracks=members,
                    default_year=default_year,
                    default_genre=default_genre,
                    track_width=track_number_width(len(members), self.settings.min_track_width),
                    image_files=colocated_images(members, images_by_directory or {}),
                )
            )
        return groups


__all__ = [
    "Grouper",
    "group_key",
    "track_sort_key",
    "track_number_width",
    "first_present",
    "colocated_images",
]
