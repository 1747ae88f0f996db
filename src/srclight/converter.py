#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/converter.py
"""Convert source blocks to HTML or DocBook.

For a highlighting adapter a block goes through these stages:

1. the shield replaces callout marks and placeholders with sentinels
2. the adapter formats the shielded text
3. sentinels are restored to callout bubbles and placeholders
4. line numbers and line emphasis are laid out
5. the adapter wraps the body in its container

Pass-through adapters and documents without a (known) highlighter skip the
formatting and layout stages: the text is only escaped, callouts are still
rendered, and the container carries the standard language classes.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import parse_qsl

from srclight.blocks import RenderedFragment, SourceBlock
from srclight.constants import DocinfoLocation
from srclight.document import DocumentContext
from srclight.exceptions import RenderingError
from srclight.highlighters.base import GENERIC_PRE_CLASS, wrap_source
from srclight.linenums import LineNumberFormatter
from srclight.options import HighlightOptions
from srclight.ranges import parse_line_ranges
from srclight.restoration import CalloutRenderer, restore_annotations
from srclight.shield import ShieldedSource, shield_source
from srclight.utils.html_utils import escape_html, escape_text

logger = logging.getLogger(__name__)


def split_language(language: Optional[str]) -> tuple[Optional[str], tuple[tuple[str, str], ...]]:
    """Split ``name?key=value&key2=value2`` into the language name and its options.

    Examples
    --------
    >>> split_language("console?prompt=$> ")
    ('console', (('prompt', '$> '),))
    >>> split_language("ruby")
    ('ruby', ())

    """
    if not language or "?" not in language:
        return language, ()
    name, _, query = language.partition("?")
    return name or None, tuple(parse_qsl(query, keep_blank_values=True))


class SourceBlockConverter:
    """Convert the source blocks of one document.

    Parameters
    ----------
    context : DocumentContext
        Per-document state: resolved options, highlighter and stylesheets

    Examples
    --------
    >>> context = DocumentContext.create({"source-highlighter": "pygments"})
    >>> converter = SourceBlockConverter(context)
    >>> html = converter.convert(SourceBlock.from_text("puts 1 # <1>", "ruby"))
    >>> footer = converter.docinfo("footer")

    """

    def __init__(self, context: DocumentContext):
        """Initialize the converter with its document context."""
        self.context = context

    @property
    def highlights(self) -> bool:
        """Whether blocks are tokenized by a server-side highlighter."""
        adapter = self.context.adapter
        return adapter is not None and adapter.supports_highlighting()

    def language(self, block: SourceBlock) -> Optional[str]:
        """Language name of the block, without options."""
        return split_language(self._language_spec(block))[0]

    def _language_spec(self, block: SourceBlock) -> Optional[str]:
        return block.language or self.context.options.source_language

    def highlight_options(self, block: SourceBlock) -> HighlightOptions:
        """Build the per-block configuration handed to the adapter.

        The ``highlight`` range is only parsed when a server-side highlighter
        will use it.

        Raises
        ------
        LineRangeError
            If the block's highlight range is malformed

        """
        document = self.context.options
        highlight_lines: frozenset[int] = frozenset()
        if self.highlights and block.highlight:
            highlight_lines = parse_line_ranges(block.highlight, block.line_count)

        return HighlightOptions(
            style=document.style,
            css_mode=document.css_mode,
            linenums_mode=document.linenums_mode,
            numbered=block.numbered or document.source_linenums,
            start=block.start,
            highlight_lines=highlight_lines,
            nowrap=block.nowrap or not document.prewrap,
            mixed=block.mixed,
            language_options=split_language(self._language_spec(block))[1],
        )

    def _callout_renderer(self, shielded: ShieldedSource) -> CalloutRenderer:
        list_index = self.context.next_callout_list_index() if shielded.callout_marks else 0
        return CalloutRenderer.for_document(self.context.options, list_index=list_index)

    def _escaped_body(self, block: SourceBlock) -> str:
        shielded = shield_source(block, preserve_placeholders=True)
        fragment = RenderedFragment.from_lines(escape_text(line) for line in shielded.lines)
        return restore_annotations(fragment, shielded, self._callout_renderer(shielded)).content

    def _highlighted_body(self, block: SourceBlock, language: Optional[str], options: HighlightOptions) -> str:
        adapter = self.context.adapter
        assert adapter is not None
        name = adapter.registered_name

        shielded = shield_source(block, preserve_placeholders=adapter.preserves_placeholders)
        fragment = adapter.format(block, shielded.text, language, options)
        restored = restore_annotations(fragment, shielded, self._callout_renderer(shielded), highlighter_name=name)
        if not block.lines:
            return ""

        lines = restored.lines
        if len(lines) != block.line_count:
            raise RenderingError(
                f"Highlighter '{name}' returned {len(lines)} line(s) for a block of {block.line_count}",
                rendering_stage="line_numbering",
            )
        mode = options.linenums_mode if options.numbered else None
        return LineNumberFormatter(mode, options.start, options.highlight_lines).format(lines)

    def convert_source(self, block: SourceBlock) -> str:
        """Render the ``pre`` element (HTML) or listing element (DocBook) of a block.

        Parameters
        ----------
        block : SourceBlock
            Block to convert

        Returns
        -------
        str
            Markup for the block's source

        Raises
        ------
        LineRangeError
            If the block's highlight range is malformed
        CalloutRestorationError
            If the highlighter destroyed or duplicated a sentinel
        DependencyError
            If the highlighter's engine is not installed

        """
        if self.context.options.backend == "docbook5":
            return self._convert_docbook(block)

        adapter = self.context.adapter
        language = self.language(block)
        options = self.highlight_options(block)

        if adapter is None:
            pre_classes = [GENERIC_PRE_CLASS, "nowrap"] if options.nowrap else [GENERIC_PRE_CLASS]
            return wrap_source(
                self._escaped_body(block), language, pre_classes=pre_classes, mark_missing_language=False
            )

        if adapter.supports_highlighting():
            body = self._highlighted_body(block, language, options)
            self.context.stylesheets.track(options)
        else:
            body = self._escaped_body(block)
        return adapter.wrap(block, body, language, options)

    def _convert_docbook(self, block: SourceBlock) -> str:
        body = self._escaped_body(block)
        language = self.language(block)
        if not language:
            return f"<screen>{body}</screen>"

        numbered = block.numbered or self.context.options.source_linenums
        attributes = f' language="{escape_html(language)}"'
        attributes += f' linenumbering="{"numbered" if numbered else "unnumbered"}"'
        if numbered and block.has_start:
            attributes += f' startinglinenumber="{block.start}"'
        return f"<programlisting{attributes}>{body}</programlisting>"

    def render_listing(self, block: SourceBlock, content: str) -> str:
        """Wrap converted source in the listing block markup.

        The block title is inserted as given; it is expected to have been
        converted by the document model already.
        """
        if self.context.options.backend == "docbook5":
            if not block.title:
                return content
            id_attr = f' xml:id="{escape_html(block.id)}"' if block.id else ""
            return f"<formalpara{id_attr}>\n<title>{block.title}</title>\n<para>\n{content}\n</para>\n</formalpara>"

        id_attr = f' id="{escape_html(block.id)}"' if block.id else ""
        classes = " ".join(c for c in ("listingblock", block.role) if c)
        parts = [f'<div{id_attr} class="{escape_html(classes)}">']
        if block.title:
            parts.append(f'<div class="title">{block.title}</div>')
        parts.extend(['<div class="content">', content, "</div>", "</div>"])
        return "\n".join(parts)

    def convert(self, block: SourceBlock) -> str:
        """Convert a block to complete listing markup."""
        return self.render_listing(block, self.convert_source(block))

    def docinfo(self, location: DocinfoLocation) -> str:
        """Document-level assets for ``location`` (``head`` or ``footer``)."""
        return self.context.stylesheets.docinfo(location)
