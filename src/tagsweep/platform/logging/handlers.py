"""Rich console handler rendering structured cleaning events.

Where: platform/logging/handlers.py
What: Turn ``processing_event`` log records into compact coloured status lines.
Why: Keep console formatting out of the pipeline, which only emits events.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class CleaningRichHandler(RichHandler):
    """Rich handler that renders cleaning events as status lines."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "cleaning.run.start": ("Library", "yellow"),
        "cleaning.run.complete": ("Finished", "green"),
        "cleaning.run.no_files": ("Library", "yellow"),
        "cleaning.track.discovered": ("Found", "blue"),
        "cleaning.track.unreadable": ("Skipped", "red"),
        "cleaning.group.start": ("Album", "cyan"),
        "cleaning.group.error": ("Album", "red"),
        "cleaning.cover.written": ("Cover", "green"),
        "cleaning.cover.missing": ("Cover", "red"),
        "cleaning.cover.error": ("Cover", "red"),
        "cleaning.track.success": ("Track", "green"),
        "cleaning.track.error": ("Track", "red"),
        "cleaning.archive.start": ("Archive", "yellow"),
        "cleaning.archive.error": ("Archive", "red"),
    }
    _STATUS_LABELS: ClassVar[dict[str, str]] = {
        "cleaning.group.error": "ERROR",
        "cleaning.cover.written": "OK",
        "cleaning.cover.missing": "MISSING",
        "cleaning.cover.error": "ERROR",
        "cleaning.track.success": "OK",
        "cleaning.track.error": "ERROR",
        "cleaning.track.unreadable": "ERROR",
        "cleaning.archive.error": "ERROR",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Format a path relative to ``base`` when possible, truncating long prefixes."""

        pure_path = self._to_pure_path(path)
        base_path = self._to_pure_path(base) if base else None

        display_path: PurePath = pure_path
        if base_path is not None and pure_path.is_relative_to(base_path):
            relative_path = pure_path.relative_to(base_path)
            if str(relative_path) not in {"", "."}:
                display_path = relative_path

        separator = "\\" if isinstance(display_path, PureWindowsPath) else "/"
        anchor = display_path.anchor
        body_parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display_string = anchor if anchor and not truncated else ""
        if truncated:
            display_string += "…" + separator
        display_string += separator.join(body_parts)

        text = Text()
        for char in display_string or ".":
            color = "magenta" if char in {separator, "…"} else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        """Return a platform-aware ``PurePath`` for the given raw string."""

        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _render_cleaning_event(self, record: logging.LogRecord) -> Text | None:
        """Render structured cleaning events with dedicated styling."""

        event = getattr(record, "processing_event", None)
        if not isinstance(event, str):
            return None

        label, color = self._EVENT_STYLES.get(event, ("Info", "blue"))
        indent = "  " if event.startswith(("cleaning.cover", "cleaning.track.success", "cleaning.track.error")) else " "

        text = Text(indent)
        _ = text.append(f"{label} ", style=Style(color=color, bold=True))

        if event == "cleaning.group.start":
            artist = getattr(record, "artist", None)
            album = getattr(record, "album", None)
            _ = text.append(str(artist or ""), style=Style(color="bright_blue", bold=True))
            _ = text.append(" / ")
            _ = text.append(str(album or ""), style=Style(color="bright_cyan", bold=True))
            total = getattr(record, "total_tracks", None)
            if isinstance(total, int):
                _ = text.append(f" [{total} tracks]")
        elif event in {"cleaning.run.start", "cleaning.run.complete", "cleaning.run.no_files"}:
            directory = getattr(record, "directory", None)
            if directory:
                _ = text.append_text(self._format_path(str(directory)))
            metrics: list[str] = []
            for key in ("total_tracks", "total_groups", "succeeded", "failed"):
                value = getattr(record, key, None)
                if isinstance(value, int):
                    metrics.append(f"{key.replace('_', ' ')}={value}")
            duration = getattr(record, "duration_seconds", None)
            if isinstance(duration, (int, float)):
                metrics.append(f"duration={duration:.2f}s")
            if metrics:
                _ = text.append(" [" + ", ".join(metrics) + "]")
        else:
            target_path = getattr(record, "target_path", None)
            source_path = getattr(record, "source_path", None)
            shown = target_path or source_path
            if shown:
                base = getattr(
                    record,
                    "target_base_path" if target_path else "source_base_path",
                    None,
                )
                _ = text.append_text(self._format_path(str(shown), base=base))

        status = self._STATUS_LABELS.get(event)
        if status is not None:
            status_color = "bright_green" if status == "OK" else "bright_red"
            _ = text.append(f" {status}", style=Style(color=status_color, bold=True))

        error_message = getattr(record, "error_message", None)
        if error_message:
            _ = text.append(f" {error_message}", style=Style(color="red"))
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for cleaning events."""

        cleaning_text = self._render_cleaning_event(record)
        if cleaning_text is not None:
            return cleaning_text
        return super().render_message(record, message)


__all__ = ["CleaningRichHandler"]
