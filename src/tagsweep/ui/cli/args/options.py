"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from tagsweep.application.services.clean_service import CleanMode


@final
@dataclass(slots=True)
class CleanArgs:
    """Command line arguments for the ``clean`` subcommand."""

    command: Literal["clean"]
    source_path: Path
    output_path: Path
    mode: CleanMode
    quality: int | None
    batch: bool
    year: int | None
    genre: str | None
    workers: int | None
    temp_dir: Path | None
    verbose: bool
    quiet: bool


CLIArgs = CleanArgs

__all__ = ["CLIArgs", "CleanArgs"]
