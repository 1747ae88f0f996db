#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/highlighters/highlightjs.py
"""Client-side highlighting with highlight.js.

The adapter does not tokenize anything. It marks the container so the
browser library can find it and injects the library, its theme and the
initialization script into the document.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from srclight.constants import DocinfoLocation, HIGHLIGHT_JS_DEFAULT_THEME, HIGHLIGHT_JS_VERSION
from srclight.highlighters.base import BaseHighlighter, validate_docinfo_location
from srclight.utils.html_utils import escape_html

if TYPE_CHECKING:
    from srclight.options import DocumentOptions, HighlightOptions

logger = logging.getLogger(__name__)

_INIT_SCRIPT = """<script>
if (!hljs.initHighlighting.called) {
  hljs.initHighlighting.called = true
  ;[].slice.call(document.querySelectorAll('pre.highlight > code[data-lang]')).forEach(function (el) { hljs.highlightBlock(el) })
}
</script>"""


class HighlightJsHighlighter(BaseHighlighter):
    """Pass-through adapter for highlight.js.

    Document attributes
    -------------------
    highlightjsdir
        Base URL of the library; defaults to the CDN.
    highlightjs-theme
        Theme stylesheet name (default ``github``).
    highlightjs-languages
        Comma-separated extra language bundles to load.

    """

    name = "highlightjs"
    aliases = ("highlight.js",)
    pre_class = "highlightjs"

    def supports_highlighting(self) -> bool:
        return False

    def code_classes(self, language: Optional[str], options: HighlightOptions) -> list[str]:
        return ["hljs"]

    def base_url(self, options: DocumentOptions) -> str:
        default = f"{options.cdn_base_url}/highlight.js/{HIGHLIGHT_JS_VERSION}"
        return (options.attribute("highlightjsdir") or default).rstrip("/")

    def docinfo(self, location: DocinfoLocation, options: DocumentOptions) -> str:
        validate_docinfo_location(location)
        base_url = escape_html(self.base_url(options))
        if location == "head":
            theme = escape_html(options.attribute("highlightjs-theme") or HIGHLIGHT_JS_DEFAULT_THEME)
            return f'<link rel="stylesheet" href="{base_url}/styles/{theme}.min.css">'

        scripts = [f'<script src="{base_url}/highlight.min.js"></script>']
        languages = options.attribute("highlightjs-languages") or ""
        for language in (lang.strip() for lang in languages.split(",")):
            if language:
                scripts.append(f'<script src="{base_url}/languages/{escape_html(language)}.min.js"></script>')
        scripts.append(_INIT_SCRIPT)
        return "\n".join(scripts)
