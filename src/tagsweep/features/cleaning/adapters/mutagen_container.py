"""Mutagen-backed tag containers for MP3 and FLAC files.

Where: src/tagsweep/features/cleaning/adapters/mutagen_container.py
What: Implement the tag container ports with ID3v2/ID3v1 and FLAC Vorbis comments.
Why: Keep every mutagen call, frame id, and error translation behind the ports.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import ClassVar, Final, override

from mutagen import MutagenError
from mutagen.flac import FLAC, Picture
from mutagen.id3 import (
    APIC,
    ID3,
    TALB,
    TCON,
    TDRC,
    TIT2,
    TPE1,
    TPE2,
    TRCK,
    TYER,
    ID3NoHeaderError,
    MakeID3v1,
    delete as delete_id3,
)
from mutagen.mp3 import MP3

from tagsweep.platform.logging import logger

from ..domain.errors import LibraryIOError, TagFormatError
from ..domain.models import ContainerKind, PictureKind, TagField, TagGeneration
from ..usecases.extraction._tag_utils import safe_get_first
from ..usecases.ports import RemovableTag, TaggedContainer, TagView, WritableTag

__all__ = [
    "MutagenContainerOpener",
    "Mp3Container",
    "FlacContainer",
    "Id3TagView",
    "VorbisTagView",
    "has_id3v1_trailer",
]

ID3V1_SIZE: Final[int] = 128
ID3V1_MARKER: Final[bytes] = b"TAG"
JPEG_MIME: Final[str] = "image/jpeg"
COVER_DESCRIPTION: Final[str] = "Cover"

_TEXT_FRAMES_V2: Final[dict[TagField, str]] = {
    TagField.ALBUM_ARTIST: "TPE2",
    TagField.ARTIST: "TPE1",
    TagField.ALBUM: "TALB",
    TagField.TITLE: "TIT2",
}
_FRAME_CLASSES: Final[dict[TagField, type]] = {
    TagField.ALBUM_ARTIST: TPE2,
    TagField.ARTIST: TPE1,
    TagField.ALBUM: TALB,
    TagField.TITLE: TIT2,
    TagField.GENRE: TCON,
}
_VORBIS_KEYS: Final[dict[TagField, str]] = {
    TagField.ALBUM_ARTIST: "albumartist",
    TagField.ARTIST: "artist",
    TagField.ALBUM: "album",
    TagField.TITLE: "title",
    TagField.GENRE: "genre",
    TagField.YEAR: "date",
    TagField.TRACK_NUMBER: "tracknumber",
}


@contextmanager
def _translate_errors(operation: str, path: Path) -> Iterator[None]:
    """Re-raise mutagen and OS failures as cleaner errors."""

    try:
        yield
    except MutagenError as exc:
        raise TagFormatError(f"{operation} failed for {path.name}: {exc}") from exc
    except OSError as exc:
        raise LibraryIOError(operation, path, exc) from exc


def has_id3v1_trailer(path: Path) -> bool:
    """True when the last 128 bytes of ``path`` form an ID3v1 tag."""

    with path.open("rb") as handle:
        _ = handle.seek(0, 2)
        if handle.tell() < ID3V1_SIZE:
            return False
        _ = handle.seek(-ID3V1_SIZE, 2)
        return handle.read(len(ID3V1_MARKER)) == ID3V1_MARKER


def _has_id3v2_header(path: Path) -> bool:
    try:
        _ = ID3(path, load_v1=False)
    except ID3NoHeaderError:
        return False
    return True


# ---------------------------------------------------------------------------
# Read views
# ---------------------------------------------------------------------------


class Id3TagView(TagView):
    """Primary ID3 tag (v2, or v1 upgraded by mutagen when no v2 exists)."""

    def __init__(self, tags: ID3) -> None:
        self.tags: ID3 = tags

    def _text(self, frame_id: str) -> str | None:
        frame = self.tags.get(frame_id)
        if frame is None or not frame.text:
            return None
        return str(frame.text[0])

    @override
    def get(self, field: TagField) -> str | int | None:
        if field in _TEXT_FRAMES_V2:
            return self._text(_TEXT_FRAMES_V2[field])
        if field is TagField.GENRE:
            frame = self.tags.get("TCON")
            if frame is None:
                return None
            return safe_get_first(frame.genres) or None
        if field is TagField.YEAR:
            return self._text("TDRC") or self._text("TYER")
        if field is TagField.TRACK_NUMBER:
            return self._text("TRCK")
        return None

    @override
    def front_cover(self) -> bytes | None:
        for frame in self.tags.getall("APIC"):
            if frame.type == PictureKind.COVER_FRONT:
                return bytes(frame.data)
        return None


class VorbisTagView(TagView):
    """FLAC Vorbis comment plus the file's PICTURE blocks."""

    def __init__(self, flac: FLAC) -> None:
        self.flac: FLAC = flac

    @override
    def get(self, field: TagField) -> str | int | None:
        tags = self.flac.tags
        if tags is None:
            return None
        values = tags.get(_VORBIS_KEYS[field]) or []
        return safe_get_first(list(values)) or None

    @override
    def front_cover(self) -> bytes | None:
        for picture in self.flac.pictures:
            if picture.type == PictureKind.COVER_FRONT:
                return bytes(picture.data)
        return None


# ---------------------------------------------------------------------------
# Removal handles
# ---------------------------------------------------------------------------


class _Id3v1Removal(RemovableTag):
    @override
    def remove_from(self, path: Path) -> None:
        with _translate_errors("remove ID3v1", path):
            delete_id3(path, delete_v1=True, delete_v2=False)


class _Id3v2Removal(RemovableTag):
    @override
    def remove_from(self, path: Path) -> None:
        with _translate_errors("remove ID3v2", path):
            delete_id3(path, delete_v1=False, delete_v2=True)


class _StrayId3Removal(RemovableTag):
    @override
    def remove_from(self, path: Path) -> None:
        with _translate_errors("remove ID3", path):
            delete_id3(path, delete_v1=True, delete_v2=True)


class _VorbisRemoval(RemovableTag):
    @override
    def remove_from(self, path: Path) -> None:
        with _translate_errors("remove Vorbis comment", path):
            flac = FLAC(path)
            flac.clear_pictures()
            if flac.tags is not None:
                flac.delete(path)
            else:
                flac.save(path)


# ---------------------------------------------------------------------------
# Writable generations
# ---------------------------------------------------------------------------


class Id3v2WritableTag(WritableTag):
    """Fresh ID3v2.4 tag."""

    def __init__(self) -> None:
        self.tags: ID3 = ID3()

    @override
    def set_text(self, field: TagField, value: str) -> None:
        frame_class = _FRAME_CLASSES.get(field)
        if frame_class is not None:
            self.tags.add(frame_class(encoding=3, text=[value]))

    @override
    def set_year(self, year: int) -> None:
        self.tags.add(TDRC(encoding=3, text=[str(year)]))

    @override
    def set_track(self, number: int, total: int) -> None:
        self.tags.add(TRCK(encoding=3, text=[f"{number}/{total}"]))

    @override
    def push_picture(self, data: bytes, picture_kind: PictureKind) -> None:
        self.tags.add(
            APIC(
                encoding=3,
                mime=JPEG_MIME,
                type=int(picture_kind),
                desc=COVER_DESCRIPTION,
                data=data,
            )
        )

    @override
    def save_to(self, path: Path) -> None:
        with _translate_errors("write ID3v2", path):
            # v1=0 leaves no ID3v1 behind; the legacy generation is appended separately.
            self.tags.save(path, v1=0, v2_version=4)


class Id3v1WritableTag(WritableTag):
    """Fresh ID3v1.1 trailer; no album-artist or picture slot, track without total."""

    LEGACY_FIELDS: ClassVar[frozenset[TagField]] = frozenset(
        {TagField.ARTIST, TagField.ALBUM, TagField.TITLE, TagField.GENRE}
    )

    def __init__(self) -> None:
        self.frames: ID3 = ID3()

    @override
    def set_text(self, field: TagField, value: str) -> None:
        if field in self.LEGACY_FIELDS:
            self.frames.add(_FRAME_CLASSES[field](encoding=0, text=[value]))

    @override
    def set_year(self, year: int) -> None:
        self.frames.add(TYER(encoding=0, text=[str(year)]))

    @override
    def set_track(self, number: int, total: int) -> None:
        self.frames.add(TRCK(encoding=0, text=[str(number)]))

    @override
    def push_picture(self, data: bytes, picture_kind: PictureKind) -> None:
        logger.debug("ID3v1 has no picture slot; skipping %d bytes", len(data))

    @override
    def save_to(self, path: Path) -> None:
        with _translate_errors("write ID3v1", path):
            trailer = MakeID3v1(self.frames)
            replace_existing = has_id3v1_trailer(path)
            with path.open("r+b") as handle:
                _ = handle.seek(-ID3V1_SIZE if replace_existing else 0, 2)
                _ = handle.write(trailer)
                _ = handle.truncate()


class VorbisWritableTag(WritableTag):
    """Fresh Vorbis comment and front-cover PICTURE block."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.pictures: list[Picture] = []

    @override
    def set_text(self, field: TagField, value: str) -> None:
        self.values[_VORBIS_KEYS[field]] = value

    @override
    def set_year(self, year: int) -> None:
        self.values[_VORBIS_KEYS[TagField.YEAR]] = str(year)

    @override
    def set_track(self, number: int, total: int) -> None:
        self.values[_VORBIS_KEYS[TagField.TRACK_NUMBER]] = f"{number}/{total}"

    @override
    def push_picture(self, data: bytes, picture_kind: PictureKind) -> None:
        picture = Picture()
        picture.type = int(picture_kind)
        picture.mime = JPEG_MIME
        picture.desc = COVER_DESCRIPTION
        picture.data = data
        self.pictures.append(picture)

    @override
    def save_to(self, path: Path) -> None:
        with _translate_errors("write Vorbis comment", path):
            flac = FLAC(path)
            if flac.tags is None:
                flac.add_tags()
            for key, value in self.values.items():
                flac.tags[key] = [value]
            for picture in self.pictures:
                flac.add_picture(picture)
            flac.save(path, deleteid3=True)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


class Mp3Container(TaggedContainer):
    """MP3 file: modern generation is ID3v2.4, legacy generation is ID3v1."""

    def __init__(self, path: Path, audio: MP3) -> None:
        self.path: Path = path
        self.audio: MP3 = audio

    @property
    @override
    def writable_generations(self) -> tuple[TagGeneration, ...]:
        return (TagGeneration.MODERN, TagGeneration.LEGACY)

    @override
    def primary_tag(self) -> TagView | None:
        tags = self.audio.tags
        return Id3TagView(tags) if tags is not None else None

    @override
    def remove(self, generation: TagGeneration) -> RemovableTag | None:
        with _translate_errors("inspect tags", self.path):
            if generation is TagGeneration.LEGACY:
                return _Id3v1Removal() if has_id3v1_trailer(self.path) else None
            return _Id3v2Removal() if _has_id3v2_header(self.path) else None

    @override
    def insert(self, generation: TagGeneration) -> WritableTag:
        if generation is TagGeneration.MODERN:
            return Id3v2WritableTag()
        return Id3v1WritableTag()


class FlacContainer(TaggedContainer):
    """FLAC file: modern generation is the Vorbis comment; stray ID3 is the legacy one."""

    def __init__(self, path: Path, audio: FLAC) -> None:
        self.path: Path = path
        self.audio: FLAC = audio

    @property
    @override
    def writable_generations(self) -> tuple[TagGeneration, ...]:
        return (TagGeneration.MODERN,)

    @override
    def primary_tag(self) -> TagView | None:
        if self.audio.tags is None and not self.audio.pictures:
            return None
        return VorbisTagView(self.audio)

    @override
    def remove(self, generation: TagGeneration) -> RemovableTag | None:
        with _translate_errors("inspect tags", self.path):
            if generation is TagGeneration.LEGACY:
                if has_id3v1_trailer(self.path) or _has_id3v2_header(self.path):
                    return _StrayId3Removal()
                return None
            flac = FLAC(self.path)
            if flac.tags is None and not flac.pictures:
                return None
            return _VorbisRemoval()

    @override
    def insert(self, generation: TagGeneration) -> WritableTag:
        if generation is not TagGeneration.MODERN:
            raise TagFormatError(f"FLAC has no writable {generation.value} tag generation")
        return VorbisWritableTag()


class MutagenContainerOpener:
    """Open MP3/FLAC files with mutagen."""

    def open(self, path: Path, kind: ContainerKind) -> TaggedContainer:
        with _translate_errors("read tags", path):
            if kind is ContainerKind.MP3:
                return Mp3Container(path, MP3(path))
            return FlacContainer(path, FLAC(path))
