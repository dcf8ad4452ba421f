"""Command line argument parser."""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from tagsweep.application.services.clean_service import CleanMode
from tagsweep.config.config import Config
from tagsweep.config.settings import JPEG_QUALITY_MAX, JPEG_QUALITY_MIN
from tagsweep.platform.logging import DEFAULT_LOG_FILE, console_level_for, logger, setup_logger
from tagsweep.ui.cli.args.options import CLIArgs, CleanArgs


def _quality(value: str) -> int:
    """argparse type for the JPEG quality factor."""

    try:
        quality = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid quality: {value!r}") from None
    if not JPEG_QUALITY_MIN <= quality <= JPEG_QUALITY_MAX:
        raise argparse.ArgumentTypeError(
            f"quality must be between {JPEG_QUALITY_MIN} and {JPEG_QUALITY_MAX}"
        )
    return quality


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError("value must be a positive integer")
    return number


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            description="tagsweep - rebuild a messy music collection into a cleanly tagged library.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        clean_parser = subparsers.add_parser(
            "clean",
            help="Copy, retag, and rename every track under SOURCE into OUTPUT",
        )
        _ = clean_parser.add_argument(
            "source_path",
            type=str,
            help="Directory to process",
            metavar="SOURCE",
        )
        _ = clean_parser.add_argument(
            "output_path",
            type=str,
            help="Output directory",
            metavar="OUTPUT",
        )
        _ = clean_parser.add_argument(
            "-m",
            "--mode",
            type=CleanMode,
            choices=list(CleanMode),
            default=CleanMode.ARCHIVES,
            help="Process every archive directly in SOURCE, or every file below it (default: archives)",
        )
        _ = clean_parser.add_argument(
            "-q",
            "--quality",
            type=_quality,
            help=f"JPEG quality for cover art, {JPEG_QUALITY_MIN}-{JPEG_QUALITY_MAX} (default from config)",
        )
        _ = clean_parser.add_argument(
            "--batch",
            action="store_true",
            help="Never prompt for missing album years or genres",
        )
        _ = clean_parser.add_argument(
            "--year",
            type=_positive_int,
            help="Year for albums without one (implies --batch)",
        )
        _ = clean_parser.add_argument(
            "--genre",
            type=str,
            help="Genre for albums without one (implies --batch)",
        )
        _ = clean_parser.add_argument(
            "--workers",
            type=_positive_int,
            help="Number of albums processed concurrently (default from config)",
        )
        _ = clean_parser.add_argument(
            "-t",
            "--temp-dir",
            type=str,
            help="Directory for temporary archive extraction (default: system temporary directory)",
            metavar="TEMP_DIR",
        )
        verbosity = clean_parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed processing information",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            Args: Processed command line arguments.

        Raises:
            SystemExit: If required paths don't exist or other validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        log_level = console_level_for(
            quiet=bool(getattr(parsed_args, "quiet", False)),
            verbose=bool(getattr(parsed_args, "verbose", False)),
        )

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command
        if command == "clean":
            return ArgumentParser._process_clean(parsed_args)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _process_clean(parsed_args: argparse.Namespace) -> CleanArgs:
        source_path = Path(parsed_args.source_path)
        if not source_path.exists():
            logger.error("Path '%s' does not exist", source_path)
            sys.exit(1)
        if not source_path.is_dir():
            logger.error("Path '%s' is not a directory", source_path)
            sys.exit(1)

        temp_dir = Path(parsed_args.temp_dir) if parsed_args.temp_dir else None
        if temp_dir is not None and not temp_dir.is_dir():
            logger.error("Temporary directory does not exist: %s", temp_dir)
            sys.exit(1)

        genre = parsed_args.genre.strip() if parsed_args.genre else None
        batch = bool(parsed_args.batch) or parsed_args.year is not None or bool(genre)

        return CleanArgs(
            command="clean",
            source_path=source_path,
            output_path=Path(parsed_args.output_path),
            mode=parsed_args.mode,
            quality=parsed_args.quality,
            batch=batch,
            year=parsed_args.year,
            genre=genre or None,
            workers=parsed_args.workers,
            temp_dir=temp_dir,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )
