"""Tests for naming-convention inference.

Where: tests/features/cleaning/usecases/extraction/test_path_inference.py
What: Pin album-directory, file-stem, and root-boundary behaviour.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tagsweep.features.cleaning.domain import (
    ContainerKind,
    MissingFileExtensionError,
    PathCandidates,
    UnsupportedFileExtensionError,
)
from tagsweep.features.cleaning.usecases.extraction import (
    infer_container_kind,
    infer_path_candidates,
    parse_album_directory,
    parse_track_stem,
    require_container_kind,
)

ROOT = Path("/library")


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Abbey Road (1969)", ("Abbey Road", 1969)),
        ("Abbey Road 1969", ("Abbey Road", 1969)),
        ("Abbey Road", (None, None)),
        ("  Abbey Road (1969)  ", ("Abbey Road", 1969)),
        ("1969", (None, None)),
        ("Live 19690", (None, None)),
    ],
)
def test_parse_album_directory(name: str, expected: tuple[str | None, int | None]) -> None:
    assert parse_album_directory(name) == expected


@pytest.mark.parametrize(
    ("stem", "expected"),
    [
        ("03 Come Together", (3, "Come Together")),
        ("03. Come Together", (3, "Come Together")),
        ("03 - Come Together", (3, "Come Together")),
        ("Come Together", (None, "Come Together")),
        ("1999", (None, "1999")),
        ("12 ", (None, "12")),
    ],
)
def test_parse_track_stem(stem: str, expected: tuple[int | None, str | None]) -> None:
    assert parse_track_stem(stem) == expected


def test_infer_path_candidates_full_layout() -> None:
    path = ROOT / "The Beatles" / "Abbey Road (1969)" / "01 Come Together.mp3"

    candidates = infer_path_candidates(path, ROOT)

    assert candidates == PathCandidates(
        artist_from_grandparent_dir="The Beatles",
        album_title_from_parent_dir="Abbey Road",
        album_year_from_parent_dir=1969,
        track_number_from_filename=1,
        track_title_from_filename="Come Together",
    )


def test_artist_absent_when_grandparent_is_root() -> None:
    path = ROOT / "Abbey Road (1969)" / "01 Come Together.mp3"

    candidates = infer_path_candidates(path, ROOT)

    assert candidates.artist_from_grandparent_dir is None
    assert candidates.album_title_from_parent_dir == "Abbey Road"


def test_album_absent_when_parent_is_root() -> None:
    path = ROOT / "01 Come Together.mp3"

    candidates = infer_path_candidates(path, ROOT)

    assert candidates.artist_from_grandparent_dir is None
    assert candidates.album_title_from_parent_dir is None
    assert candidates.album_year_from_parent_dir is None
    assert candidates.track_number_from_filename == 1


def test_album_without_year_yields_no_album_candidates() -> None:
    path = ROOT / "Artist" / "Album" / "Intro.flac"

    candidates = infer_path_candidates(path, ROOT)

    assert candidates.artist_from_grandparent_dir == "Artist"
    assert candidates.album_title_from_parent_dir is None
    assert candidates.album_year_from_parent_dir is None
    assert candidates.track_number_from_filename is None
    assert candidates.track_title_from_filename == "Intro"


def test_container_kind_from_extension_is_case_insensitive() -> None:
    assert infer_container_kind(Path("a/01 Song.MP3")) is ContainerKind.MP3
    assert infer_container_kind(Path("a/01 Song.flac")) is ContainerKind.FLAC
    assert infer_container_kind(Path("a/01 Song.ogg")) is None
    assert infer_container_kind(Path("a/README")) is None


def test_require_container_kind_raises_specific_errors() -> None:
    with pytest.raises(MissingFileExtensionError):
        _ = require_container_kind(Path("a/README"))
    with pytest.raises(UnsupportedFileExtensionError):
        _ = require_container_kind(Path("a/01 Song.ogg"))
