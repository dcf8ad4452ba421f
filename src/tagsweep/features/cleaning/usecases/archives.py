"""src/tagsweep/features/cleaning/usecases/archives.py
What: Extract each archive under a directory into a temporary library root and clean it.
Why: Downloads often arrive as one zip per album; cleaning should not need a manual unpack.
"""

from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Final

from ..domain.errors import ArchiveExtractionError
from .cleaning_runner import CleaningRunner
from .event_logging import log_processing
from .processing_types import CleaningReport, ProcessingEvent, ProcessLogger, describe_error

ARCHIVE_EXTENSIONS: Final[frozenset[str]] = frozenset({".zip", ".rar"})
TEMP_DIR_PREFIX: Final[str] = "tagsweep-"
_UTF8_FILENAME_FLAG: Final[int] = 0x800


@dataclass
class ArchiveResult:
    """Outcome of extracting and cleaning one archive."""

    archive_path: Path
    report: CleaningReport | None = None
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.error_message is None and (self.report is None or self.report.failed == 0)


def find_archives(source: Path) -> list[Path]:
    """Archives directly inside ``source`` (not recursive), sorted by path."""

    if not source.is_dir():
        raise ValueError(f"Not a directory: {source}")
    return sorted(
        path
        for path in source.iterdir()
        if path.is_file() and path.suffix.lower() in ARCHIVE_EXTENSIONS
    )


def _normalized_name(info: zipfile.ZipInfo) -> str:
    """Repair legacy cp437 member names that were really UTF-8 or Latin-1."""

    if info.flag_bits & _UTF8_FILENAME_FLAG:
        return info.filename
    try:
        return info.filename.encode("cp437").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        try:
            return info.filename.encode("cp437").decode("latin1")
        except (UnicodeEncodeError, UnicodeDecodeError):
            return info.filename


def extract_archive(archive_path: Path, destination: Path) -> list[Path]:
    """Extract ``archive_path`` into ``destination`` and return the extracted paths.

    Raises:
        ArchiveExtractionError: For unsupported formats and unreadable or corrupt archives.
    """

    if archive_path.suffix.lower() != ".zip":
        raise ArchiveExtractionError(f"unsupported archive format: {archive_path.suffix}")

    extracted: list[Path] = []
    try:
        with zipfile.ZipFile(archive_path, "r") as archive:
            for info in archive.infolist():
                info.filename = _normalized_name(info)
                extracted.append(Path(archive.extract(info, destination)))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as exc:
        raise ArchiveExtractionError(f"cannot extract {archive_path.name}: {exc}") from exc
    return extracted


def process_archives(
    source: Path,
    output: Path,
    runner: CleaningRunner,
    *,
    temp_dir: Path | None = None,
    log: ProcessLogger = log_processing,
) -> list[ArchiveResult]:
    """Extract and clean every archive under ``source`` into ``output``, one at a time."""

    results: list[ArchiveResult] = []
    for archive_path in find_archives(source):
        log(
            logging.INFO,
            ProcessingEvent.ARCHIVE_START,
            "Extracting archive [path=%s]",
            archive_path,
            source_path=archive_path,
            source_base_path=source,
        )
        result = ArchiveResult(archive_path=archive_path)
        with TemporaryDirectory(prefix=TEMP_DIR_PREFIX, dir=temp_dir) as extracted_root:
            try:
                _ = extract_archive(archive_path, Path(extracted_root))
            except ArchiveExtractionError as exc:
                result.error_message = describe_error(exc)
                log(
                    logging.ERROR,
                    ProcessingEvent.ARCHIVE_ERROR,
                    "Archive extraction failed [path=%s]: %s",
                    archive_path,
                    result.error_message,
                    source_path=archive_path,
                    source_base_path=source,
                    error_message=result.error_message,
                )
            else:
                result.report = runner.run(Path(extracted_root), output)
        results.append(result)
    return results


__all__ = [
    "ARCHIVE_EXTENSIONS",
    "ArchiveResult",
    "extract_archive",
    "find_archives",
    "process_archives",
]
