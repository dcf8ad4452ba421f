"""src/tagsweep/features/cleaning/usecases/scanning.py
What: Walk a library root and classify every file by extension.
Why: Give discovery and cover selection deterministic, pre-grouped inputs.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from ..domain.models import MediaFile, MediaKind

AUDIO_EXTENSIONS: Final[frozenset[str]] = frozenset({".mp3", ".flac"})
IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset({".png", ".jpg", ".jpeg"})


@dataclass(slots=True)
class LibraryScan:
    """Files found under ``root``, each list sorted by path."""

    root: Path
    audio_files: list[MediaFile] = field(default_factory=list)
    image_files: list[MediaFile] = field(default_factory=list)
    other_files: list[MediaFile] = field(default_factory=list)

    def images_by_directory(self) -> dict[Path, list[Path]]:
        """Map each directory to the images it directly contains, in sorted order."""

        grouped: defaultdict[Path, list[Path]] = defaultdict(list)
        for media_file in self.image_files:
            grouped[media_file.directory].append(media_file.path)
        return {directory: sorted(paths) for directory, paths in sorted(grouped.items())}

    @property
    def audio_paths(self) -> list[Path]:
        return [media_file.path for media_file in self.audio_files]


def classify(path: Path) -> MediaKind:
    """Classify ``path`` by its lowercased extension."""

    suffix = path.suffix.lower()
    if suffix in AUDIO_EXTENSIONS:
        return MediaKind.AUDIO
    if suffix in IMAGE_EXTENSIONS:
        return MediaKind.IMAGE
    return MediaKind.OTHER


def scan_library(root: Path) -> LibraryScan:
    """Recursively scan ``root`` and return its files classified by kind.

    Raises:
        ValueError: If ``root`` is not an existing directory.
    """

    if not root.is_dir():
        raise ValueError(f"Not a directory: {root}")

    scan = LibraryScan(root=root)
    buckets = {
        MediaKind.AUDIO: scan.audio_files,
        MediaKind.IMAGE: scan.image_files,
        MediaKind.OTHER: scan.other_files,
    }
    for path in sorted(root.rglob("*")):
        if path.is_dir():
            continue
        kind = classify(path)
        buckets[kind].append(MediaFile(path=path, kind=kind))
    return scan


__all__ = ["AUDIO_EXTENSIONS", "IMAGE_EXTENSIONS", "LibraryScan", "classify", "scan_library"]
