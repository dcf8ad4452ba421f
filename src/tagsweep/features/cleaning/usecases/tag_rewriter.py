"""Strip-then-rebuild tag rewrite for a single destination file.

Where: src/tagsweep/features/cleaning/usecases/tag_rewriter.py
What: Remove every tag generation, then write fresh modern and legacy generations.
Why: Output tags depend only on resolved metadata, never on what the input carried.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from tagsweep.shared.track_metadata import ResolvedMetadata

from ..domain.models import ContainerKind, PictureKind, TagField, TagGeneration
from .ports import TagContainerOpener, WritableTag

# Legacy is stripped first, modern second.
REMOVAL_ORDER: Final[tuple[TagGeneration, ...]] = (TagGeneration.LEGACY, TagGeneration.MODERN)


@dataclass(frozen=True, slots=True)
class RewriteRequest:
    """Everything needed to rebuild one file's tags."""

    path: Path
    kind: ContainerKind
    metadata: ResolvedMetadata
    total_tracks: int
    default_year: int | None = None
    default_genre: str | None = None
    cover_jpeg: bytes | None = None

    @property
    def year(self) -> int | None:
        return self.metadata.year if self.metadata.year is not None else self.default_year

    @property
    def genre(self) -> str | None:
        return self.metadata.genre if self.metadata.genre is not None else self.default_genre


def populate(tag: WritableTag, request: RewriteRequest) -> None:
    """Set every present value on ``tag`` in the generation's native encoding."""

    metadata = request.metadata
    text_fields: tuple[tuple[TagField, str | None], ...] = (
        (TagField.ALBUM_ARTIST, metadata.album_artist_name),
        (TagField.ARTIST, metadata.artist_name),
        (TagField.ALBUM, metadata.album_title),
        (TagField.TITLE, metadata.track_title),
        (TagField.GENRE, request.genre),
    )
    for field, value in text_fields:
        if value is not None:
            tag.set_text(field, value)

    if request.year is not None:
        tag.set_year(request.year)
    if metadata.track_number is not None:
        tag.set_track(metadata.track_number, request.total_tracks)
    if request.cover_jpeg is not None:
        tag.push_picture(request.cover_jpeg, PictureKind.COVER_FRONT)


class TagRewriter:
    """Destructive read-modify-write of a container's tags."""

    def __init__(self, opener: TagContainerOpener) -> None:
        self.opener: TagContainerOpener = opener

    def rewrite(self, request: RewriteRequest) -> None:
        """Rewrite the tags of ``request.path`` in place.

        A failure after the modern generation was saved leaves the file partially
        rewritten; the error still propagates so the track is reported as failed.

        Raises:
            TagFormatError: When the container cannot be opened, stripped, or saved.
        """

        container = self.opener.open(request.path, request.kind)
        for generation in REMOVAL_ORDER:
            removable = container.remove(generation)
            if removable is not None:
                removable.remove_from(request.path)

        for generation in container.writable_generations:
            tag = container.insert(generation)
            populate(tag, request)
            tag.save_to(request.path)


__all__ = ["REMOVAL_ORDER", "RewriteRequest", "TagRewriter", "populate"]
