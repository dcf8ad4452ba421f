"""Summary: Ports defining the tag container, image codec, and default-value services.
Why: Keep resolution, cover selection, and rewriting independent of mutagen and Pillow."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from ..domain.models import ContainerKind, PictureKind, TagField, TagGeneration


@runtime_checkable
class TagView(Protocol):
    """Read access to the primary tag of a container."""

    def get(self, field: TagField) -> str | int | None:
        """Return the raw value stored for ``field``, if any."""
        ...

    def front_cover(self) -> bytes | None:
        """Return the bytes of the first front-cover picture, if any."""
        ...


@runtime_checkable
class WritableTag(Protocol):
    """A freshly inserted tag generation being populated before saving."""

    def set_text(self, field: TagField, value: str) -> None:
        """Store a text value (artist, album, title, genre...)."""
        ...

    def set_year(self, year: int) -> None:
        """Store the year using the generation's native encoding."""
        ...

    def set_track(self, number: int, total: int) -> None:
        """Store the track position using the generation's native encoding."""
        ...

    def push_picture(self, data: bytes, picture_kind: PictureKind) -> None:
        """Embed a JPEG picture when the generation has a slot for it."""
        ...

    def save_to(self, path: Path) -> None:
        """Persist this generation into the container at ``path``."""
        ...


@runtime_checkable
class RemovableTag(Protocol):
    """Handle for an existing tag generation that can be stripped from disk."""

    def remove_from(self, path: Path) -> None:
        """Remove the generation from the container at ``path``."""
        ...


@runtime_checkable
class TaggedContainer(Protocol):
    """An opened audio container exposing its tag generations."""

    @property
    def writable_generations(self) -> tuple[TagGeneration, ...]:
        """Generations rebuilt for this container kind, in write order."""
        ...

    def primary_tag(self) -> TagView | None:
        """Return the authoritative tag, or ``None`` when the container has none."""
        ...

    def remove(self, generation: TagGeneration) -> RemovableTag | None:
        """Detach ``generation`` if present and return a handle to persist the removal."""
        ...

    def insert(self, generation: TagGeneration) -> WritableTag:
        """Insert an empty tag of ``generation``."""
        ...


@runtime_checkable
class TagContainerOpener(Protocol):
    """Factory opening tag containers by kind."""

    def open(self, path: Path, kind: ContainerKind) -> TaggedContainer:
        """Open ``path``; raises ``TagFormatError`` when it cannot be parsed."""
        ...


@runtime_checkable
class DecodedImage(Protocol):
    """A decoded raster image."""

    def dimensions(self) -> tuple[int, int]:
        ...

    def encode_jpeg(self, quality: int) -> bytes:
        ...


@runtime_checkable
class ImageCodec(Protocol):
    """Image decoding and probing service."""

    def decode(self, source: Path | bytes) -> DecodedImage:
        """Decode a file or in-memory image; raises ``ImageDecodeError``."""
        ...

    def probe_dimensions(self, path: Path) -> tuple[int, int] | None:
        """Read pixel dimensions without a full decode; ``None`` when unreadable."""
        ...


@runtime_checkable
class DefaultValueProvider(Protocol):
    """Supplies album defaults when no track in a group carries a value."""

    def ask_year(self, artist: str, album: str) -> int | None:
        ...

    def ask_genre(self, artist: str, album: str) -> str | None:
        ...


__all__ = [
    "TagView",
    "WritableTag",
    "RemovableTag",
    "TaggedContainer",
    "TagContainerOpener",
    "DecodedImage",
    "ImageCodec",
    "DefaultValueProvider",
]
