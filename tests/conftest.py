"""Shared pytest fixtures: minimal audio containers, images, and isolated config."""

from __future__ import annotations

import struct
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from PIL import Image

# One MPEG-1 Layer III frame: 128 kbps, 44.1 kHz, no padding -> 417 bytes.
MP3_FRAME = b"\xff\xfb\x90\x00" + b"\x00" * 413

# STREAMINFO: 4096-sample blocks, 44.1 kHz, 2 channels, 16 bits, unknown length.
_STREAMINFO = (
    struct.pack(">HH", 4096, 4096)
    + b"\x00" * 6
    + ((44100 << 44) | (1 << 41) | (15 << 36)).to_bytes(8, "big")
    + b"\x00" * 16
)
FLAC_BYTES = b"fLaC" + b"\x80\x00\x00\x22" + _STREAMINFO


@pytest.fixture
def write_mp3() -> Callable[[Path], Path]:
    """Return a factory writing a tagless, parseable MP3 file."""

    def _write(path: Path, frames: int = 20) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_bytes(MP3_FRAME * frames)
        return path

    return _write


@pytest.fixture
def write_flac() -> Callable[[Path], Path]:
    """Return a factory writing a tagless, parseable FLAC file."""

    def _write(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_bytes(FLAC_BYTES)
        return path

    return _write


@pytest.fixture
def write_image() -> Callable[..., Path]:
    """Return a factory writing a solid-colour image; the format follows the suffix."""

    def _write(path: Path, size: tuple[int, int] = (8, 8), color: str = "red") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color).save(path)
        return path

    return _write


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    """Return a factory producing encoded image bytes."""

    def _encode(size: tuple[int, int] = (8, 8), color: str = "blue", fmt: str = "PNG") -> bytes:
        from io import BytesIO

        buffer = BytesIO()
        Image.new("RGB", size, color).save(buffer, format=fmt)
        return buffer.getvalue()

    return _encode


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point configuration at a temporary file and reset the cached singleton."""

    import tagsweep.config.config as config_module

    config_file = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("TAGSWEEP_CONFIG_FILE", str(config_file))

    original_instance = config_module.Config._instance  # pyright: ignore[reportPrivateUsage]
    original_loaded_from = config_module.Config._loaded_from  # pyright: ignore[reportPrivateUsage]
    config_module.Config._instance = None  # pyright: ignore[reportPrivateUsage]
    config_module.Config._loaded_from = None  # pyright: ignore[reportPrivateUsage]
    try:
        yield config_file
    finally:
        config_module.Config._instance = original_instance  # pyright: ignore[reportPrivateUsage]
        config_module.Config._loaded_from = original_loaded_from  # pyright: ignore[reportPrivateUsage]
