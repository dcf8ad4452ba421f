"""Cover-art selection for one album group.

Where: src/tagsweep/features/cleaning/usecases/cover_art.py
What: Pick at most one cover from colocated images or embedded pictures, then encode it once.
Why: Every track in a group, and the standalone cover file, share identical JPEG bytes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

from tagsweep.platform.logging import logger

from ..domain.errors import CleanerError
from ..domain.models import Group, GroupCover, ImageFile, Track
from .ports import DecodedImage, ImageCodec, TagContainerOpener

COVER_NAMES: Final[tuple[str, ...]] = ("cover", "front")

ImageRule = Callable[[Sequence[ImageFile], Sequence[Track]], ImageFile | None]


def _stem(image: ImageFile) -> str:
    return image.path.stem.lower()


def only_image(images: Sequence[ImageFile], _tracks: Sequence[Track]) -> ImageFile | None:
    """Rule 1: a single colocated image wins regardless of its name."""

    return images[0] if len(images) == 1 else None


def exact_cover_name(images: Sequence[ImageFile], _tracks: Sequence[Track]) -> ImageFile | None:
    """Rule 2: stem is exactly ``cover`` or ``front``."""

    return next((image for image in images if _stem(image) in COVER_NAMES), None)


def partial_cover_name(images: Sequence[ImageFile], _tracks: Sequence[Track]) -> ImageFile | None:
    """Rule 3: stem contains ``cover`` or ``front``."""

    return next(
        (image for image in images if any(name in _stem(image) for name in COVER_NAMES)),
        None,
    )


def album_title_name(images: Sequence[ImageFile], tracks: Sequence[Track]) -> ImageFile | None:
    """Rule 4: stem contains any track's album title; the last matching image wins."""

    titles = {
        track.resolved.album_title.lower() for track in tracks if track.resolved.album_title
    }
    if not titles:
        return None
    return next(
        (image for image in reversed(images) if any(title in _stem(image) for title in titles)),
        None,
    )


def largest_square(images: Sequence[ImageFile], _tracks: Sequence[Track]) -> ImageFile | None:
    """Rule 5: the widest square image; the first one wins on equal widths."""

    chosen: ImageFile | None = None
    largest = 0
    for image in images:
        if image.is_square and image.dimensions is not None and image.dimensions[0] > largest:
            chosen = image
            largest = image.dimensions[0]
    return chosen


IMAGE_RULES: Final[tuple[ImageRule, ...]] = (
    only_image,
    exact_cover_name,
    partial_cover_name,
    album_title_name,
    largest_square,
)


@dataclass(frozen=True, slots=True)
class SelectedCover:
    """A decoded cover image and where it came from."""

    image: DecodedImage
    origin: Path
    embedded: bool = False


class CoverArtSelector:
    """Apply the ordered cover heuristics and encode the winner."""

    def __init__(self, codec: ImageCodec, opener: TagContainerOpener, quality: int) -> None:
        self.codec: ImageCodec = codec
        self.opener: TagContainerOpener = opener
        self.quality: int = quality

    def with_dimensions(self, images: Sequence[ImageFile]) -> tuple[ImageFile, ...]:
        """Fill in missing dimensions; unreadable images keep ``None``."""

        return tuple(
            image
            if image.dimensions is not None
            else replace(image, dimensions=self.codec.probe_dimensions(image.path))
            for image in images
        )

    def choose_image_file(
        self,
        images: Sequence[ImageFile],
        tracks: Sequence[Track],
    ) -> ImageFile | None:
        """Return the colocated image picked by the first rule that yields one."""

        for rule in IMAGE_RULES[:-1]:
            chosen = rule(images, tracks)
            if chosen is not None:
                return chosen
        return largest_square(self.with_dimensions(images), tracks)

    def embedded_cover(self, tracks: Sequence[Track]) -> SelectedCover | None:
        """Rule 6: the first decodable front-cover picture in the tracks' primary tags."""

        for track in tracks:
            if track.container_kind is None:
                continue
            try:
                tag = self.opener.open(track.source_path, track.container_kind).primary_tag()
                data = tag.front_cover() if tag is not None else None
                if data is None:
                    continue
                image = self.codec.decode(data)
            except (CleanerError, OSError) as exc:
                logger.debug("Skipping embedded cover in %s: %s", track.source_path, exc)
                continue
            return SelectedCover(image=image, origin=track.source_path, embedded=True)
        return None

    def select(self, group: Group) -> SelectedCover | None:
        """Return the decoded cover for ``group``; ``None`` when nothing qualifies."""

        chosen = self.choose_image_file(group.image_files, group.tracks)
        if chosen is not None:
            try:
                return SelectedCover(image=self.codec.decode(chosen.path), origin=chosen.path)
            except (CleanerError, OSError) as exc:
                logger.debug("Cannot decode cover candidate %s: %s", chosen.path, exc)
        return self.embedded_cover(group.tracks)

    def prepare(self, group: Group) -> GroupCover | None:
        """Select and encode the group's cover once.

        Raises:
            ImageDecodeError: When the selected image cannot be encoded as JPEG.
        """

        selected = self.select(group)
        if selected is None:
            return None
        return GroupCover(
            jpeg_bytes=selected.image.encode_jpeg(self.quality),
            origin=selected.origin,
            embedded=selected.embedded,
        )


__all__ = [
    "COVER_NAMES",
    "IMAGE_RULES",
    "CoverArtSelector",
    "SelectedCover",
    "only_image",
    "exact_cover_name",
    "partial_cover_name",
    "album_title_name",
    "largest_square",
]
