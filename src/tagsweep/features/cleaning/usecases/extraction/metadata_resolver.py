"""Per-field precedence merge of embedded tags and path candidates.

Where: src/tagsweep/features/cleaning/usecases/extraction/metadata_resolver.py
What: Resolve one ``ResolvedMetadata`` per track from its primary tag and ``PathCandidates``.
Why: Each field has a fixed, inspectable chain of pure sources; the first present value wins.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final, TypeVar

from tagsweep.shared.track_metadata import ResolvedMetadata

from ...domain.models import PathCandidates, TagField
from ..ports import TagView
from ._tag_utils import clean_text, parse_number, parse_year

__all__ = ["FIELD_SOURCES", "resolve_metadata"]

T = TypeVar("T")
Source = Callable[[TagView | None, PathCandidates], T | None]


def _embedded_text(field: TagField) -> Source[str]:
    def source(tag: TagView | None, _candidates: PathCandidates) -> str | None:
        return clean_text(tag.get(field)) if tag is not None else None

    source.__name__ = f"embedded_{field.value}"
    return source


def _embedded_year(tag: TagView | None, _candidates: PathCandidates) -> int | None:
    if tag is None:
        return None
    value = tag.get(TagField.YEAR)
    if isinstance(value, int) and not isinstance(value, bool):
        return value if value > 0 else None
    text = clean_text(value)
    return parse_year(text) if text else None


def _embedded_track_number(tag: TagView | None, _candidates: PathCandidates) -> int | None:
    return parse_number(tag.get(TagField.TRACK_NUMBER)) if tag is not None else None


def _path_artist(_tag: TagView | None, candidates: PathCandidates) -> str | None:
    return clean_text(candidates.artist_from_grandparent_dir)


def _path_album_title(_tag: TagView | None, candidates: PathCandidates) -> str | None:
    return clean_text(candidates.album_title_from_parent_dir)


def _path_album_year(_tag: TagView | None, candidates: PathCandidates) -> int | None:
    return candidates.album_year_from_parent_dir


def _path_track_number(_tag: TagView | None, candidates: PathCandidates) -> int | None:
    return candidates.track_number_from_filename


def _path_track_title(_tag: TagView | None, candidates: PathCandidates) -> str | None:
    return clean_text(candidates.track_title_from_filename)


_embedded_album_artist = _embedded_text(TagField.ALBUM_ARTIST)
_embedded_artist = _embedded_text(TagField.ARTIST)
_embedded_album = _embedded_text(TagField.ALBUM)
_embedded_title = _embedded_text(TagField.TITLE)
_embedded_genre = _embedded_text(TagField.GENRE)

FIELD_SOURCES: Final[dict[str, tuple[Source[object], ...]]] = {
    "album_artist_name": (_embedded_album_artist, _embedded_artist, _path_artist),
    "artist_name": (_embedded_artist, _embedded_album_artist, _path_artist),
    "album_title": (_embedded_album, _path_album_title),
    "year": (_embedded_year, _path_album_year),
    "track_number": (_embedded_track_number, _path_track_number),
    "track_title": (_embedded_title, _path_track_title),
    "genre": (_embedded_genre,),
}


def _first_present(
    sources: tuple[Source[object], ...],
    tag: TagView | None,
    candidates: PathCandidates,
) -> object | None:
    for source in sources:
        value = source(tag, candidates)
        if value is not None:
            return value
    return None


def resolve_metadata(tag: TagView | None, candidates: PathCandidates) -> ResolvedMetadata:
    """Resolve every field independently; ``tag`` is ``None`` for containers without a primary tag."""

    values = {
        name: _first_present(sources, tag, candidates) for name, sources in FIELD_SOURCES.items()
    }
    return ResolvedMetadata(**values)  # type: ignore[arg-type]
