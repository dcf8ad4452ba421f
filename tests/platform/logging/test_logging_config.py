"""Tests for logger bootstrap and the event-tagging file formatter."""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterator
from pathlib import Path

import pytest

from tagsweep.platform.logging import (
    CleaningRichHandler,
    ProcessingEventFormatter,
    console_level_for,
    setup_logger,
)


@pytest.fixture
def restore_handlers() -> Iterator[None]:
    app_logger = logging.getLogger("tagsweep")
    saved = list(app_logger.handlers)
    yield
    for handler in list(app_logger.handlers):
        if handler not in saved:
            handler.close()
    app_logger.handlers[:] = saved


def _record(message: str, **extras: object) -> logging.LogRecord:
    record = logging.LogRecord("tagsweep", logging.INFO, "test", 0, message, (), None)
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_formatter_prefixes_processing_event() -> None:
    line = ProcessingEventFormatter().format(
        _record("Copied track", processing_event="cleaning.track.success")
    )

    assert line.endswith("INFO - [cleaning.track.success] Copied track")


def test_formatter_leaves_plain_records_untagged() -> None:
    line = ProcessingEventFormatter().format(_record("Plain message"))

    assert line.endswith("INFO - Plain message")


@pytest.mark.parametrize(
    ("quiet", "verbose", "level"),
    [
        (False, False, logging.INFO),
        (False, True, logging.DEBUG),
        (True, False, logging.ERROR),
        (True, True, logging.ERROR),
    ],
)
def test_console_level_for_flags(quiet: bool, verbose: bool, level: int) -> None:
    assert console_level_for(quiet=quiet, verbose=verbose) == level


@pytest.mark.usefixtures("restore_handlers")
def test_setup_logger_writes_tagged_records_to_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "tagsweep.log"

    app_logger = setup_logger(log_file=log_file, console_level=logging.ERROR)
    app_logger.info("Album done", extra={"processing_event": "cleaning.group.start"})
    for handler in app_logger.handlers:
        handler.flush()

    console_handler, file_handler = app_logger.handlers
    assert isinstance(console_handler, CleaningRichHandler)
    assert console_handler.level == logging.ERROR
    assert isinstance(file_handler, logging.handlers.RotatingFileHandler)
    assert "[cleaning.group.start] Album done" in log_file.read_text(encoding="utf-8")


@pytest.mark.usefixtures("restore_handlers")
def test_setup_logger_without_file_is_console_only() -> None:
    app_logger = setup_logger(log_file=None)

    assert len(app_logger.handlers) == 1
    assert isinstance(app_logger.handlers[0], CleaningRichHandler)
