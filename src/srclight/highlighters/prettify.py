#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/highlighters/prettify.py
"""Client-side highlighting with Google Prettify."""

from __future__ import annotations

from typing import TYPE_CHECKING

from srclight.blocks import SourceBlock
from srclight.constants import DocinfoLocation, PRETTIFY_DEFAULT_THEME, PRETTIFY_VERSION
from srclight.highlighters.base import BaseHighlighter, validate_docinfo_location
from srclight.utils.html_utils import escape_html

if TYPE_CHECKING:
    from srclight.options import DocumentOptions, HighlightOptions

_ABSOLUTE_URL_PREFIXES = ("http://", "https://")


class PrettifyHighlighter(BaseHighlighter):
    """Pass-through adapter for Prettify.

    Numbered blocks get the ``linenums`` class (``linenums:N`` when the
    block sets a starting line number) so Prettify numbers them itself.
    """

    name = "prettify"
    pre_class = "prettyprint"

    def supports_highlighting(self) -> bool:
        return False

    def pre_classes(self, block: SourceBlock, options: HighlightOptions) -> list[str]:
        classes = super().pre_classes(block, options)
        if options.numbered:
            classes.append(f"linenums:{options.start}" if block.has_start else "linenums")
        return classes

    def base_url(self, options: DocumentOptions) -> str:
        default = f"{options.cdn_base_url}/prettify/{PRETTIFY_VERSION}"
        return (options.attribute("prettifydir") or default).rstrip("/")

    def docinfo(self, location: DocinfoLocation, options: DocumentOptions) -> str:
        validate_docinfo_location(location)
        base_url = self.base_url(options)
        if location == "head":
            theme = options.attribute("prettify-theme") or PRETTIFY_DEFAULT_THEME
            href = theme if theme.startswith(_ABSOLUTE_URL_PREFIXES) else f"{base_url}/{theme}.min.css"
            return f'<link rel="stylesheet" href="{escape_html(href)}">'
        return f'<script src="{escape_html(base_url)}/run_prettify.min.js"></script>'
