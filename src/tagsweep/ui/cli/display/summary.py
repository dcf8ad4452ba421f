"""Rendering helpers for the end-of-run cleaning summary.

Where: ui/cli/display/summary.py
What: Count track, album cover, and archive outcomes and list each failure once.
Why: Group-level problems (cover errors, broken archives) do not show up as track failures.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from tagsweep.features.cleaning import ArchiveResult, CoverStatus, GroupResult, TrackResult


def _failure_line(subject: str, message: str | None) -> str:
    return f"[red]  • {escape(subject)}: {escape(message or 'unknown error')}[/red]"


def render_track_summary(console: Console, results: Sequence[TrackResult]) -> None:
    """Print track totals and one line per failed track."""

    failures = [result for result in results if not result.success]

    console.print("\n[bold]Cleaning Summary:[/bold]")
    console.print(f"Total tracks processed: {len(results)}")
    console.print(f"[green]Successful: {len(results) - len(failures)}[/green]")
    if not failures:
        return

    console.print(f"[red]Failed: {len(failures)}[/red]")
    for result in failures:
        console.print(_failure_line(str(result.source_path), result.error_message))


def render_album_summary(console: Console, groups: Sequence[GroupResult]) -> None:
    """Print album and cover counts, then every album whose cover could not be written.

    An album whose directory could not be created has no cover path; it is listed
    by its ``artist / album`` key instead.
    """

    written = sum(1 for group in groups if group.cover.status is CoverStatus.WRITTEN)
    missing = sum(1 for group in groups if group.cover.status is CoverStatus.MISSING)
    errors = [group for group in groups if group.cover.status is CoverStatus.ERROR]

    console.print(f"Albums: {len(groups)} (covers written: {written}, without cover: {missing})")
    if not errors:
        return

    console.print(f"[red]Cover errors: {len(errors)}[/red]")
    for group in errors:
        subject = (
            str(group.cover.target_path)
            if group.cover.target_path is not None
            else f"{group.artist} / {group.album}"
        )
        console.print(_failure_line(f"cover {subject}", group.cover.error_message))


def render_archive_summary(console: Console, results: Sequence[ArchiveResult]) -> None:
    """Print archive totals; archives that could not be extracted are listed."""

    if not results:
        return

    broken = [result for result in results if result.error_message is not None]
    console.print(f"Archives: {len(results)}")
    if not broken:
        return

    console.print(f"[red]Archives failed: {len(broken)}[/red]")
    for result in broken:
        console.print(_failure_line(str(result.archive_path), result.error_message))


__all__ = ["render_track_summary", "render_album_summary", "render_archive_summary"]
