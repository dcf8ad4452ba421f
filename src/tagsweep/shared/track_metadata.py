# Where: tagsweep.shared.track_metadata
# What: Canonical resolved metadata record shared across features.
# Why: Centralize metadata representation for reuse and consistency.

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ResolvedMetadata:
    """Final per-track field values; ``None`` means the field could not be resolved."""

    album_artist_name: str | None = None
    artist_name: str | None = None
    album_title: str | None = None
    year: int | None = None
    track_number: int | None = None
    track_title: str | None = None
    genre: str | None = None


__all__ = ["ResolvedMetadata"]
