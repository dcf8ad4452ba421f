"""
Summary: Default-value providers for album year and genre.
Why: The grouper asks through a port; interactive and batch runs plug in different answers.
"""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from ..usecases.ports import DefaultValueProvider


class RichPromptDefaults(DefaultValueProvider):
    """Ask on the terminal; a blank answer means no value."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()

    def _ask(self, label: str) -> str:
        return Prompt.ask(
            f"   [bold bright_red]{label}[/bold bright_red]>",
            console=self.console,
            default="",
            show_default=False,
        ).strip()

    def ask_year(self, artist: str, album: str) -> int | None:
        self.console.print(f"  [bright_blue]{escape(artist)}[/bright_blue] / [bright_cyan]{escape(album)}[/bright_cyan] has no year")
        while True:
            answer = self._ask("Year")
            if not answer:
                return None
            if answer.isdecimal():
                return int(answer)
            self.console.print(f"        [red]invalid year: {escape(answer)}[/red]")

    def ask_genre(self, artist: str, album: str) -> str | None:
        self.console.print(f"  [bright_blue]{escape(artist)}[/bright_blue] / [bright_cyan]{escape(album)}[/bright_cyan] has no genre")
        return self._ask("Genre") or None


@dataclass(frozen=True, slots=True)
class BatchDefaults(DefaultValueProvider):
    """Non-interactive provider returning fixed values (``None`` by default)."""

    year: int | None = None
    genre: str | None = None

    def ask_year(self, artist: str, album: str) -> int | None:
        return self.year

    def ask_genre(self, artist: str, album: str) -> str | None:
        return self.genre


__all__ = ["RichPromptDefaults", "BatchDefaults"]
