"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Configure the ``tagsweep`` logger with a Rich console and a rotating event log file.
Why: Console lines stay short while the file keeps the ``processing_event`` id of each record.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Final, override

from rich.console import Console

from tagsweep.config.paths import default_log_file

from .handlers import CleaningRichHandler


DEFAULT_LOG_FILE: Final[Path] = default_log_file()
LOG_FILE_MAX_BYTES: Final[int] = 10 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 5


class ProcessingEventFormatter(logging.Formatter):
    """File formatter that prefixes cleaning records with their event id."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(event_tag)s%(message)s")

    @override
    def format(self, record: logging.LogRecord) -> str:
        event = getattr(record, "processing_event", None)
        record.event_tag = f"[{event}] " if event else ""
        return super().format(record)


def console_level_for(quiet: bool, verbose: bool) -> int:
    """Map the CLI verbosity flags to a console log level; ``quiet`` wins."""

    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.INFO


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Replace the handlers of the ``tagsweep`` logger.

    Args:
        log_file: Rotating log destination; ``None`` logs to the console only.
        console_level: Threshold for the Rich console handler.
        file_level: Threshold for the file handler.
    """

    logger = logging.getLogger("tagsweep")
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = CleaningRichHandler(console=Console(soft_wrap=True, stderr=True))
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        resolved_log_file = Path(log_file).expanduser().resolve()
        os.makedirs(resolved_log_file.parent, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            resolved_log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(ProcessingEventFormatter())
        logger.addHandler(file_handler)

    return logger


logger: Final[logging.Logger] = setup_logger(log_file=DEFAULT_LOG_FILE)


__all__ = [
    "DEFAULT_LOG_FILE",
    "ProcessingEventFormatter",
    "console_level_for",
    "setup_logger",
    "logger",
]
