#  Copyright (c) 2025 Tom Villani, Ph.D.
"""srclight - syntax highlighting for source listings.

srclight turns source blocks into highlighted HTML (or DocBook) while
keeping callout marks, passthrough placeholders, line numbers and line
emphasis intact across any highlighter.

Highlighters are looked up by name in a registry. Pygments highlights on
the server; highlight.js, prettify and html-pipeline are pass-through
adapters that emit the container and the assets a client-side library
needs.

Examples
--------
Highlight a snippet:

    >>> from srclight import highlight
    >>> html = highlight("puts 'hi' # <1>", "ruby", block_attributes={"linenums": ""})

Convert every block of a document and collect its stylesheet:

    >>> from srclight import SourceBlock, convert_blocks
    >>> result = convert_blocks(
    ...     [SourceBlock.from_text("x = 1", "python")],
    ...     attributes={"source-highlighter": "pygments"},
    ... )
    >>> page_footer = result.footer

"""

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "srclight requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from srclight.api import ConversionResult, convert_blocks, highlight, render_standalone
from srclight.blocks import RenderedFragment, SourceBlock
from srclight.constants import SafeMode
from srclight.converter import SourceBlockConverter
from srclight.document import DocumentContext
from srclight.exceptions import (
    CalloutRestorationError,
    DependencyError,
    HighlighterError,
    LineRangeError,
    RenderingError,
    SrclightError,
    UnsupportedOperationError,
    ValidationError,
)
from srclight.highlighters import BaseHighlighter, HighlighterRegistry, highlighter_registry
from srclight.options import DocumentOptions, HighlightOptions
from srclight.ranges import parse_line_ranges

__all__ = [
    "__version__",
    # API
    "ConversionResult",
    "convert_blocks",
    "highlight",
    "render_standalone",
    # Model
    "SourceBlock",
    "RenderedFragment",
    "SafeMode",
    "DocumentContext",
    "SourceBlockConverter",
    "DocumentOptions",
    "HighlightOptions",
    "parse_line_ranges",
    # Highlighters
    "BaseHighlighter",
    "HighlighterRegistry",
    "highlighter_registry",
    # Exceptions
    "SrclightError",
    "ValidationError",
    "LineRangeError",
    "HighlighterError",
    "UnsupportedOperationError",
    "RenderingError",
    "CalloutRestorationError",
    "DependencyError",
]
