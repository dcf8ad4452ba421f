"""src/tagsweep/features/cleaning/usecases/event_logging.py
What: Default structured emitter for cleaning events.
Why: Every stage logs through one callable that attaches the event id and context extras.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from tagsweep.platform.logging import logger

from .processing_types import ProcessingEvent


def log_processing(
    level: int,
    event: ProcessingEvent,
    message: str,
    *message_args: object,
    **context: Any,
) -> None:
    """Log ``message`` with ``processing_event`` and stringified path extras."""

    extra: dict[str, Any] = {"processing_event": event.value}
    for key, value in context.items():
        extra[key] = str(value) if isinstance(value, Path) else value
    logger.log(level, message, *message_args, extra=extra, stacklevel=2)


__all__ = ["log_processing"]
