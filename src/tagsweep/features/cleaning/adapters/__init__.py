"""
Summary: Package marker for cleaning adapters.
Why: Keep adapter exports together for easy discovery.
"""

from .default_values import BatchDefaults, RichPromptDefaults
from .mutagen_container import FlacContainer, Mp3Container, MutagenContainerOpener
from .pillow_codec import PillowImage, PillowImageCodec

__all__ = [
    "BatchDefaults",
    "RichPromptDefaults",
    "FlacContainer",
    "Mp3Container",
    "MutagenContainerOpener",
    "PillowImage",
    "PillowImageCodec",
]
