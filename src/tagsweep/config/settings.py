"""Where: src/tagsweep/config/settings.py
What: Validated runtime settings threaded through grouping and cleaning.
Why: Keep placeholder names and encoder quality explicit instead of module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Final

from tagsweep.config.config import (
    COVER_FILE_NAME_DEFAULT,
    JPEG_QUALITY_DEFAULT,
    UNKNOWN_ALBUM_TITLE_DEFAULT,
    UNKNOWN_ARTIST_NAME_DEFAULT,
    WORKERS_DEFAULT,
    Config,
)

JPEG_QUALITY_MIN: Final[int] = 1
JPEG_QUALITY_MAX: Final[int] = 99
MIN_TRACK_WIDTH: Final[int] = 2
TITLE_SEPARATOR_SUBSTITUTE: Final[str] = "-"
UNKNOWN_TITLE: Final[str] = "Unknown Title"


@dataclass(frozen=True, slots=True)
class CleaningSettings:
    """Values the cleaning pipeline needs, resolved once per run."""

    jpeg_quality: int = JPEG_QUALITY_DEFAULT
    unknown_artist_name: str = UNKNOWN_ARTIST_NAME_DEFAULT
    unknown_album_title: str = UNKNOWN_ALBUM_TITLE_DEFAULT
    cover_file_name: str = COVER_FILE_NAME_DEFAULT
    min_track_width: int = MIN_TRACK_WIDTH
    title_separator_substitute: str = TITLE_SEPARATOR_SUBSTITUTE
    unknown_title: str = UNKNOWN_TITLE
    workers: int = WORKERS_DEFAULT

    def __post_init__(self) -> None:
        if not JPEG_QUALITY_MIN <= self.jpeg_quality <= JPEG_QUALITY_MAX:
            raise ValueError(
                f"JPEG quality must be between {JPEG_QUALITY_MIN} and {JPEG_QUALITY_MAX}; "
                f"received {self.jpeg_quality}"
            )
        if self.workers < 1:
            raise ValueError(f"workers must be a positive integer; received {self.workers}")
        if not self.unknown_artist_name.strip() or not self.unknown_album_title.strip():
            raise ValueError("Unknown artist/album placeholders cannot be blank")

    @classmethod
    def from_config(cls, config: Config, **overrides: Any) -> CleaningSettings:
        """Build settings from persisted configuration, applying non-``None`` overrides."""

        settings = cls(
            jpeg_quality=config.jpeg_quality,
            unknown_artist_name=config.unknown_artist_name,
            unknown_album_title=config.unknown_album_title,
            cover_file_name=config.cover_file_name,
            workers=config.workers,
        )
        applied = {key: value for key, value in overrides.items() if value is not None}
        return replace(settings, **applied) if applied else settings


__all__ = [
    "CleaningSettings",
    "JPEG_QUALITY_MIN",
    "JPEG_QUALITY_MAX",
    "MIN_TRACK_WIDTH",
    "TITLE_SEPARATOR_SUBSTITUTE",
    "UNKNOWN_TITLE",
]
