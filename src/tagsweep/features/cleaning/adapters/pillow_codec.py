"""src/tagsweep/features/cleaning/adapters/pillow_codec.py
What: ImageCodec implementation on top of Pillow.
Why: Decode any supported image once and re-encode it as baseline JPEG."""

from __future__ import annotations

import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ..domain.errors import ImageDecodeError
from ..usecases.ports import DecodedImage, ImageCodec

_JPEG_MODES: frozenset[str] = frozenset({"RGB", "L", "CMYK"})


class PillowImage(DecodedImage):
    """Decoded Pillow image."""

    def __init__(self, image: Image.Image) -> None:
        self.image: Image.Image = image

    def dimensions(self) -> tuple[int, int]:
        return self.image.size

    def encode_jpeg(self, quality: int) -> bytes:
        image = self.image if self.image.mode in _JPEG_MODES else self.image.convert("RGB")
        buffer = io.BytesIO()
        try:
            image.save(buffer, format="JPEG", quality=quality)
        except (OSError, ValueError) as exc:
            raise ImageDecodeError(f"cannot encode JPEG: {exc}") from exc
        return buffer.getvalue()


class PillowImageCodec(ImageCodec):
    """Adapter decoding files or bytes with Pillow."""

    def decode(self, source: Path | bytes) -> DecodedImage:
        label = source.name if isinstance(source, Path) else f"{len(source)} bytes"
        fp = io.BytesIO(source) if isinstance(source, bytes) else source
        try:
            with Image.open(fp) as image:
                image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            raise ImageDecodeError(f"cannot decode image {label}: {exc}") from exc
        return PillowImage(image)

    def probe_dimensions(self, path: Path) -> tuple[int, int] | None:
        # Image.open only parses the header; pixels are not decoded here.
        try:
            with Image.open(path) as image:
                return image.size
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError):
            return None


__all__ = ["PillowImage", "PillowImageCodec"]
