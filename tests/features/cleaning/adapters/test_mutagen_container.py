"""Tests for the mutagen-backed tag containers."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from mutagen.flac import FLAC, Picture
from mutagen.id3 import APIC, ID3, TCON, TDRC, TPE1, TPE2, TRCK, TYER

from tagsweep.features.cleaning.adapters.mutagen_container import (
    FlacContainer,
    Mp3Container,
    MutagenContainerOpener,
    has_id3v1_trailer,
)
from tagsweep.features.cleaning.domain import (
    ContainerKind,
    PictureKind,
    TagField,
    TagFormatError,
    TagGeneration,
)


@pytest.fixture
def opener() -> MutagenContainerOpener:
    return MutagenContainerOpener()


def test_opener_returns_container_per_kind(
    tmp_path: Path,
    write_mp3: Callable[..., Path],
    write_flac: Callable[[Path], Path],
    opener: MutagenContainerOpener,
) -> None:
    mp3 = opener.open(write_mp3(tmp_path / "a.mp3"), ContainerKind.MP3)
    flac = opener.open(write_flac(tmp_path / "a.flac"), ContainerKind.FLAC)

    assert isinstance(mp3, Mp3Container)
    assert mp3.writable_generations == (TagGeneration.MODERN, TagGeneration.LEGACY)
    assert isinstance(flac, FlacContainer)
    assert flac.writable_generations == (TagGeneration.MODERN,)


def test_untagged_files_have_no_primary_tag(
    tmp_path: Path,
    write_mp3: Callable[..., Path],
    write_flac: Callable[[Path], Path],
    opener: MutagenContainerOpener,
) -> None:
    assert opener.open(write_mp3(tmp_path / "a.mp3"), ContainerKind.MP3).primary_tag() is None
    assert opener.open(write_flac(tmp_path / "a.flac"), ContainerKind.FLAC).primary_tag() is None


def test_opening_garbage_raises_tag_format_error(tmp_path: Path, opener: MutagenContainerOpener) -> None:
    path = tmp_path / "junk.mp3"
    _ = path.write_bytes(b"junk")

    with pytest.raises(TagFormatError):
        _ = opener.open(path, ContainerKind.MP3)


def test_id3_view_reads_frames(
    tmp_path: Path,
    write_mp3: Callable[..., Path],
    opener: MutagenContainerOpener,
) -> None:
    path = write_mp3(tmp_path / "a.mp3")
    tags = ID3()
    tags.add(TPE2(encoding=3, text=["Album Artist"]))
    tags.add(TPE1(encoding=3, text=["Track Artist"]))
    tags.add(TCON(encoding=3, text=["(17)"]))
    tags.add(TDRC(encoding=3, text=["1998-04-01"]))
    tags.add(TRCK(encoding=3, text=["4/10"]))
    tags.add(APIC(encoding=3, mime="image/png", type=4, desc="back", data=b"back"))
    tags.add(APIC(encoding=3, mime="image/png", type=3, desc="front", data=b"front"))
    tags.save(path)

    view = opener.open(path, ContainerKind.MP3).primary_tag()

    assert view is not None
    assert view.get(TagField.ALBUM_ARTIST) == "Album Artist"
    assert view.get(TagField.ARTIST) == "Track Artist"
    assert view.get(TagField.ALBUM) is None
    assert view.get(TagField.GENRE) == "Rock"
    assert view.get(TagField.YEAR) == "1998-04-01"
    assert view.get(TagField.TRACK_NUMBER) == "4/10"
    assert view.front_cover() == b"front"


def test_id3_view_falls_back_to_tyer(
    tmp_path: Path,
    write_mp3: Callable[..., Path],
    opener: MutagenContainerOpener,
) -> None:
    path = write_mp3(tmp_path / "a.mp3")
    tags = ID3()
    tags.add(TYER(encoding=3, text=["1987"]))
    tags.save(path, v2_version=3)

    view = opener.open(path, ContainerKind.MP3).primary_tag()

    assert view is not None
    assert str(view.get(TagField.YEAR)).startswith("1987")


def test_vorbis_view_reads_comments_and_pictures(
    tmp_path: Path,
    write_flac: Callable[[Path], Path],
    opener: MutagenContainerOpener,
) -> None:
    path = write_flac(tmp_path / "a.flac")
    flac = FLAC(path)
    flac.add_tags()
    flac.tags["ALBUMARTIST"] = ["Band"]  # pyright: ignore[reportOptionalSubscript]
    flac.tags["TRACKNUMBER"] = ["7"]  # pyright: ignore[reportOptionalSubscript]
    picture = Picture()
    picture.type = 3
    picture.mime = "image/png"
    picture.data = b"front"
    flac.add_picture(picture)
    flac.save()

    view = opener.open(path, ContainerKind.FLAC).primary_tag()

    assert view is not None
    assert view.get(TagField.ALBUM_ARTIST) == "Band"
    assert view.get(TagField.TRACK_NUMBER) == "7"
    assert view.get(TagField.GENRE) is None
    assert view.front_cover() == b"front"


def test_mp3_remove_reports_only_present_generations(
    tmp_path: Path,
    write_mp3: Callable[..., Path],
    opener: MutagenContainerOpener,
) -> None:
    path = write_mp3(tmp_path / "a.mp3")
    container = opener.open(path, ContainerKind.MP3)

    assert container.remove(TagGeneration.LEGACY) is None
    assert container.remove(TagGeneration.MODERN) is None


def test_id3v1_trailer_is_replaced_not_duplicated(
    tmp_path: Path,
    write_mp3: Callable[..., Path],
    opener: MutagenContainerOpener,
) -> None:
    path = write_mp3(tmp_path / "a.mp3")
    container = opener.open(path, ContainerKind.MP3)

    first = container.insert(TagGeneration.LEGACY)
    first.set_text(TagField.TITLE, "First")
    first.save_to(path)
    second = container.insert(TagGeneration.LEGACY)
    second.set_text(TagField.TITLE, "Second")
    second.save_to(path)

    data = path.read_bytes()
    assert has_id3v1_trailer(path)
    assert data.count(b"TAG") == 1
    assert data[-125:-95].rstrip(b"\x00") == b"Second"


def test_flac_cannot_insert_legacy_generation(
    tmp_path: Path,
    write_flac: Callable[[Path], Path],
    opener: MutagenContainerOpener,
) -> None:
    container = opener.open(write_flac(tmp_path / "a.flac"), ContainerKind.FLAC)

    with pytest.raises(TagFormatError):
        _ = container.insert(TagGeneration.LEGACY)


def test_flac_stray_id3_is_removed(
    tmp_path: Path,
    write_flac: Callable[[Path], Path],
    opener: MutagenContainerOpener,
) -> None:
    path = write_flac(tmp_path / "a.flac")
    stray = ID3()
    stray.add(TPE1(encoding=3, text=["Stray"]))
    stray.save(path)
    container = opener.open(path, ContainerKind.FLAC)

    removal = container.remove(TagGeneration.LEGACY)
    assert removal is not None
    removal.remove_from(path)

    assert path.read_bytes().startswith(b"fLaC")


def test_legacy_picture_is_skipped(
    tmp_path: Path,
    write_mp3: Callable[..., Path],
    opener: MutagenContainerOpener,
) -> None:
    path = write_mp3(tmp_path / "a.mp3")
    tag = opener.open(path, ContainerKind.MP3).insert(TagGeneration.LEGACY)

    tag.push_picture(b"\xff\xd8", PictureKind.COVER_FRONT)
    tag.save_to(path)

    assert path.stat().st_size == 20 * 417 + 128
