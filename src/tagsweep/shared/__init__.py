# Where: tagsweep.shared.__init__
# What: Provide a concise import surface for shared dataclasses.
# Why: Encourage consistent reuse of shared helpers across features.

"""Shared cross-cutting dataclasses exposed at the package level."""

from .track_metadata import ResolvedMetadata

__all__ = ["ResolvedMetadata"]
