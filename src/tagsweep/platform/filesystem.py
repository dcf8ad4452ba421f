"""Summary: Filesystem helpers shared by the cleaning runner and CLI.
Why: Keep directory creation idempotent and safe for concurrent callers."""

from __future__ import annotations

import shutil
from pathlib import Path


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and its parents if needed; repeated or concurrent calls are harmless."""

    path.mkdir(parents=True, exist_ok=True)
    return path


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    return ensure_directory(path.parent)


def copy_file(source: Path, destination: Path) -> Path:
    """Copy file contents and permission bits, overwriting ``destination``."""

    _ = ensure_parent_directory(destination)
    _ = shutil.copyfile(source, destination)
    shutil.copymode(source, destination)
    return destination


def write_bytes_file(path: Path, data: bytes) -> Path:
    """Write ``data`` to ``path``, creating parent directories first."""

    _ = ensure_parent_directory(path)
    _ = path.write_bytes(data)
    return path


__all__ = ["ensure_directory", "ensure_parent_directory", "copy_file", "write_bytes_file"]
