#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration objects for document-level and per-block highlighting."""

from srclight.options.base import CloneFrozenMixin
from srclight.options.highlight import DocumentOptions, HighlightOptions

__all__ = [
    "CloneFrozenMixin",
    "DocumentOptions",
    "HighlightOptions",
]
