"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export configured logger, setup helpers, and the Rich event handler.
Why: Provide a single canonical import path for every layer.
"""

from __future__ import annotations

from .config import DEFAULT_LOG_FILE, ProcessingEventFormatter, console_level_for, logger, setup_logger
from .handlers import CleaningRichHandler

__all__ = [
    "DEFAULT_LOG_FILE",
    "CleaningRichHandler",
    "ProcessingEventFormatter",
    "console_level_for",
    "logger",
    "setup_logger",
]
