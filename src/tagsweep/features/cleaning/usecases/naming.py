"""src/tagsweep/features/cleaning/usecases/naming.py
What: Compute album directories and ``NN Title.ext`` destination file names.
Why: Keep output naming pure so grouping determinism extends to destination paths.
"""

from __future__ import annotations

from pathlib import Path

from tagsweep.config.settings import CleaningSettings

from ..domain.errors import MissingFileExtensionError
from ..domain.models import Group, Track

PATH_SEPARATORS: tuple[str, ...] = ("/", "\\")


def sanitize_component(value: str, substitute: str) -> str:
    """Replace path separators so ``value`` stays a single path component."""

    for separator in PATH_SEPARATORS:
        value = value.replace(separator, substitute)
    value = value.strip()
    # "." and ".." would escape the album directory.
    if value in {".", ".."}:
        return value.replace(".", substitute)
    return value


def album_directory(output_root: Path, group: Group, settings: CleaningSettings) -> Path:
    substitute = settings.title_separator_substitute
    return (
        output_root
        / sanitize_component(group.artist_key, substitute)
        / sanitize_component(group.album_key, substitute)
    )


def track_file_name(track: Track, width: int, settings: CleaningSettings) -> str:
    """Return ``{zero-padded number} {title}.{ext}`` for ``track``.

    Unnumbered tracks get ``X`` repeated to the group width; untitled ones get the
    configured unknown title.
    """

    if track.container_kind is None:
        raise MissingFileExtensionError(track.source_path)

    number = track.resolved.track_number
    prefix = f"{number:0{width}d}" if number is not None else "X" * width
    title = sanitize_component(
        track.resolved.track_title or settings.unknown_title,
        settings.title_separator_substitute,
    ) or settings.unknown_title
    return f"{prefix} {title}.{track.container_kind.extension}"


def destination_path(directory: Path, track: Track, width: int, settings: CleaningSettings) -> Path:
    return directory / track_file_name(track, width, settings)


__all__ = ["sanitize_component", "album_directory", "track_file_name", "destination_path"]
