#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Highlighter adapters and the process-wide registry.

Built-in adapters are registered once, explicitly, when this package is
imported:

==============  ==============  =================
name            aliases         highlighting
==============  ==============  =================
pygments                        server-side
highlightjs     highlight.js    pass-through
prettify                        pass-through
html-pipeline                   pass-through
==============  ==============  =================
"""

from srclight.highlighters.base import BaseHighlighter, wrap_source
from srclight.highlighters.highlightjs import HighlightJsHighlighter
from srclight.highlighters.html_pipeline import HtmlPipelineHighlighter
from srclight.highlighters.prettify import PrettifyHighlighter
from srclight.highlighters.pygments import PygmentsHighlighter
from srclight.highlighters.registry import HighlighterDescriptor, HighlighterRegistry

BUILTIN_HIGHLIGHTERS: tuple[type[BaseHighlighter], ...] = (
    PygmentsHighlighter,
    HighlightJsHighlighter,
    PrettifyHighlighter,
    HtmlPipelineHighlighter,
)


def register_builtin_highlighters(registry: HighlighterRegistry) -> None:
    """Register the adapters that ship with srclight on ``registry``."""
    for highlighter_class in BUILTIN_HIGHLIGHTERS:
        registry.register(highlighter_class.name, highlighter_class.aliases, highlighter_class())


highlighter_registry = HighlighterRegistry()
register_builtin_highlighters(highlighter_registry)

__all__ = [
    "BUILTIN_HIGHLIGHTERS",
    "BaseHighlighter",
    "HighlightJsHighlighter",
    "HighlighterDescriptor",
    "HighlighterRegistry",
    "HtmlPipelineHighlighter",
    "PrettifyHighlighter",
    "PygmentsHighlighter",
    "highlighter_registry",
    "register_builtin_highlighters",
    "wrap_source",
]
