"""Tests for the strip-then-rebuild tag rewrite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from mutagen.flac import FLAC, Picture
from mutagen.id3 import APIC, COMM, ID3, TIT2, TPE1

from tagsweep.features.cleaning.adapters import MutagenContainerOpener
from tagsweep.features.cleaning.adapters.mutagen_container import has_id3v1_trailer
from tagsweep.features.cleaning.domain import (
    ContainerKind,
    PictureKind,
    TagField,
    TagFormatError,
    TagGeneration,
)
from tagsweep.features.cleaning.usecases.tag_rewriter import RewriteRequest, TagRewriter, populate
from tagsweep.shared.track_metadata import ResolvedMetadata

METADATA = ResolvedMetadata(
    album_artist_name="The Band",
    artist_name="Singer",
    album_title="Album",
    year=2001,
    track_number=1,
    track_title="Intro",
    genre="Rock",
)
COVER = b"\xff\xd8jpeg-bytes\xff\xd9"


class RecordingTag:
    def __init__(self, generation: TagGeneration, calls: list[tuple[object, ...]]) -> None:
        self.generation = generation
        self.calls = calls

    def set_text(self, field: TagField, value: str) -> None:
        self.calls.append(("text", self.generation, field, value))

    def set_year(self, year: int) -> None:
        self.calls.append(("year", self.generation, year))

    def set_track(self, number: int, total: int) -> None:
        self.calls.append(("track", self.generation, number, total))

    def push_picture(self, data: bytes, picture_kind: PictureKind) -> None:
        self.calls.append(("picture", self.generation, picture_kind))

    def save_to(self, path: Path) -> None:
        self.calls.append(("save", self.generation))


class RecordingRemoval:
    def __init__(self, generation: TagGeneration, calls: list[tuple[object, ...]]) -> None:
        self.generation = generation
        self.calls = calls

    def remove_from(self, path: Path) -> None:
        self.calls.append(("remove", self.generation))


class RecordingContainer:
    def __init__(self, present: set[TagGeneration], generations: tuple[TagGeneration, ...]) -> None:
        self.present = present
        self.generations = generations
        self.calls: list[tuple[object, ...]] = []

    @property
    def writable_generations(self) -> tuple[TagGeneration, ...]:
        return self.generations

    def primary_tag(self) -> None:
        return None

    def remove(self, generation: TagGeneration) -> RecordingRemoval | None:
        if generation not in self.present:
            return None
        return RecordingRemoval(generation, self.calls)

    def insert(self, generation: TagGeneration) -> RecordingTag:
        self.calls.append(("insert", generation))
        return RecordingTag(generation, self.calls)


class FailingSaveTag(RecordingTag):
    def save_to(self, path: Path) -> None:
        self.calls.append(("save", self.generation))
        raise TagFormatError(f"cannot write {self.generation.value} tag")


class FailingLegacyContainer(RecordingContainer):
    def insert(self, generation: TagGeneration) -> RecordingTag:
        if generation is not TagGeneration.LEGACY:
            return super().insert(generation)
        self.calls.append(("insert", generation))
        return FailingSaveTag(generation, self.calls)


class StaticOpener:
    def __init__(self, container: RecordingContainer) -> None:
        self.container = container

    def open(self, path: Path, kind: ContainerKind) -> RecordingContainer:
        return self.container


def _request(path: Path, kind: ContainerKind = ContainerKind.MP3, **overrides: object) -> RewriteRequest:
    fields: dict[str, object] = {
        "path": path,
        "kind": kind,
        "metadata": METADATA,
        "total_tracks": 12,
        "cover_jpeg": COVER,
    }
    fields.update(overrides)
    return RewriteRequest(**fields)  # pyright: ignore[reportArgumentType]


def test_rewrite_removes_legacy_then_modern_before_writing() -> None:
    legacy, modern = TagGeneration.LEGACY, TagGeneration.MODERN
    container = RecordingContainer({legacy, modern}, (modern, legacy))

    TagRewriter(StaticOpener(container)).rewrite(_request(Path("x.mp3")))

    structural = [call for call in container.calls if call[0] in {"remove", "insert", "save"}]
    assert structural == [
        ("remove", legacy),
        ("remove", modern),
        ("insert", modern),
        ("save", modern),
        ("insert", legacy),
        ("save", legacy),
    ]


def test_rewrite_skips_absent_generations() -> None:
    container = RecordingContainer(set(), (TagGeneration.MODERN,))

    TagRewriter(StaticOpener(container)).rewrite(_request(Path("x.flac"), ContainerKind.FLAC))

    assert not [call for call in container.calls if call[0] == "remove"]


def test_legacy_save_failure_propagates_after_modern_was_saved() -> None:
    legacy, modern = TagGeneration.LEGACY, TagGeneration.MODERN
    container = FailingLegacyContainer({legacy, modern}, (modern, legacy))

    with pytest.raises(TagFormatError, match="cannot write legacy tag"):
        TagRewriter(StaticOpener(container)).rewrite(_request(Path("x.mp3")))

    saves = [call for call in container.calls if call[0] == "save"]
    assert saves == [("save", modern), ("save", legacy)]


def test_populate_falls_back_to_group_defaults() -> None:
    calls: list[tuple[object, ...]] = []
    tag = RecordingTag(TagGeneration.MODERN, calls)
    request = _request(
        Path("x.mp3"),
        metadata=ResolvedMetadata(track_title="Only Title"),
        default_year=1999,
        default_genre="Jazz",
        cover_jpeg=None,
    )

    populate(tag, request)

    assert calls == [
        ("text", TagGeneration.MODERN, TagField.TITLE, "Only Title"),
        ("text", TagGeneration.MODERN, TagField.GENRE, "Jazz"),
        ("year", TagGeneration.MODERN, 1999),
    ]


def test_track_value_prefers_own_year_over_default() -> None:
    request = _request(Path("x.mp3"), default_year=1990, default_genre="Pop")

    assert request.year == 2001
    assert request.genre == "Rock"


def test_mp3_rewrite_replaces_all_prior_tags(tmp_path: Path, write_mp3: Callable[..., Path]) -> None:
    path = write_mp3(tmp_path / "song.mp3")
    stale = ID3()
    stale.add(TPE1(encoding=3, text=["Old Artist"]))
    stale.add(TIT2(encoding=3, text=["Stale"]))
    stale.add(COMM(encoding=3, lang="eng", desc="", text=["ripped by someone"]))
    stale.add(APIC(encoding=3, mime="image/png", type=3, desc="old", data=b"old-picture"))
    stale.save(path, v1=2)
    assert has_id3v1_trailer(path)

    TagRewriter(MutagenContainerOpener()).rewrite(_request(path))

    tags = ID3(path, load_v1=False)
    assert tags.version == (2, 4, 0)
    assert str(tags["TPE2"]) == "The Band"
    assert str(tags["TPE1"]) == "Singer"
    assert str(tags["TALB"]) == "Album"
    assert str(tags["TIT2"]) == "Intro"
    assert tags["TCON"].genres == ["Rock"]
    assert str(tags["TDRC"]) == "2001"
    assert str(tags["TRCK"]) == "1/12"
    assert tags.getall("COMM") == []
    pictures = tags.getall("APIC")
    assert len(pictures) == 1
    assert pictures[0].data == COVER
    assert pictures[0].type == PictureKind.COVER_FRONT
    assert pictures[0].mime == "image/jpeg"

    data = path.read_bytes()
    trailer = data[-128:]
    assert trailer.startswith(b"TAG")
    assert trailer[3:33].rstrip(b"\x00") == b"Intro"
    assert trailer[33:63].rstrip(b"\x00") == b"Singer"
    assert trailer[93:97] == b"2001"
    # ID3v1.1 stores the track number in the last comment byte.
    assert trailer[126] == 1
    assert data.count(b"TAG") == 1


def test_mp3_rewrite_is_idempotent(tmp_path: Path, write_mp3: Callable[..., Path]) -> None:
    path = write_mp3(tmp_path / "song.mp3")
    rewriter = TagRewriter(MutagenContainerOpener())

    rewriter.rewrite(_request(path))
    first = path.read_bytes()
    rewriter.rewrite(_request(path))

    assert path.read_bytes() == first


def test_flac_rewrite_replaces_comment_and_pictures(
    tmp_path: Path,
    write_flac: Callable[[Path], Path],
) -> None:
    path = write_flac(tmp_path / "song.flac")
    stale = FLAC(path)
    stale.add_tags()
    stale.tags["comment"] = ["old comment"]  # pyright: ignore[reportOptionalSubscript]
    stale.tags["artist"] = ["Old Artist"]  # pyright: ignore[reportOptionalSubscript]
    old_picture = Picture()
    old_picture.type = 3
    old_picture.mime = "image/png"
    old_picture.data = b"old-picture"
    stale.add_picture(old_picture)
    stale.save()

    TagRewriter(MutagenContainerOpener()).rewrite(_request(path, ContainerKind.FLAC))

    flac = FLAC(path)
    assert flac.tags is not None
    assert flac.tags["albumartist"] == ["The Band"]
    assert flac.tags["artist"] == ["Singer"]
    assert flac.tags["album"] == ["Album"]
    assert flac.tags["title"] == ["Intro"]
    assert flac.tags["genre"] == ["Rock"]
    assert flac.tags["date"] == ["2001"]
    assert flac.tags["tracknumber"] == ["1/12"]
    assert "comment" not in flac.tags
    assert len(flac.pictures) == 1
    assert flac.pictures[0].data == COVER
    assert flac.pictures[0].type == PictureKind.COVER_FRONT


def test_rewrite_of_corrupt_file_raises_tag_format_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.flac"
    _ = path.write_bytes(b"definitely not flac")

    with pytest.raises(TagFormatError):
        TagRewriter(MutagenContainerOpener()).rewrite(_request(path, ContainerKind.FLAC))
