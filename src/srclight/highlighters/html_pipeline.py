#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/highlighters/html_pipeline.py
"""Pass-through adapter for HTML pipelines that highlight after conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from srclight.blocks import SourceBlock
from srclight.highlighters.base import BaseHighlighter

if TYPE_CHECKING:
    from srclight.options import HighlightOptions


class HtmlPipelineHighlighter(BaseHighlighter):
    """Expose the language as a ``lang`` attribute on ``pre``.

    Downstream filters (such as the syntax highlight filter of an HTML
    pipeline) read the language from that attribute.
    """

    name = "html-pipeline"

    def supports_highlighting(self) -> bool:
        return False

    def pre_attributes(
        self, block: SourceBlock, language: Optional[str], options: HighlightOptions
    ) -> dict[str, Optional[str]]:
        return {"lang": language or None}
