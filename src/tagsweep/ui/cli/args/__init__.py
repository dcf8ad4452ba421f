"""Command line argument handling package."""

from tagsweep.ui.cli.args.parser import ArgumentParser
from tagsweep.ui.cli.args.options import CLIArgs, CleanArgs

__all__ = ["ArgumentParser", "CLIArgs", "CleanArgs"]
