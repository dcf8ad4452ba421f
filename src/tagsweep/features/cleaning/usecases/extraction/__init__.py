"""Path inference and metadata resolution helpers."""

from __future__ import annotations

from .metadata_resolver import FIELD_SOURCES, resolve_metadata
from .path_inference import (
    infer_container_kind,
    infer_path_candidates,
    parse_album_directory,
    parse_track_stem,
    require_container_kind,
)

__all__ = [
    "FIELD_SOURCES",
    "resolve_metadata",
    "infer_container_kind",
    "infer_path_candidates",
    "parse_album_directory",
    "parse_track_stem",
    "require_container_kind",
]
