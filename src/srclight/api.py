"""The major exported API functions for source block conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/srclight/api.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from srclight.blocks import SourceBlock
from srclight.constants import (
    ATTR_HIGHLIGHTER_STYLE,
    ATTR_SOURCE_HIGHLIGHTER,
    DEFAULT_BACKEND,
    DEFAULT_SAFE_MODE,
    Backend,
    SafeMode,
)
from srclight.converter import SourceBlockConverter
from srclight.document import DocumentContext
from srclight.highlighters.registry import HighlighterRegistry
from srclight.utils.decorators import debug_timer
from srclight.utils.html_utils import escape_html

logger = logging.getLogger(__name__)

Attributes = Mapping[str, Optional[str]]


@dataclass
class ConversionResult:
    """Output of converting the source blocks of one document.

    Attributes
    ----------
    blocks : list of str
        Markup for each block, in input order
    head : str
        Assets to place in the document head
    footer : str
        Assets to place before the end of the document body
    context : DocumentContext
        The document context, for access to resolved options and stylesheets

    """

    blocks: list[str]
    head: str
    footer: str
    context: DocumentContext

    @property
    def body(self) -> str:
        return "\n".join(self.blocks)

    def write_stylesheets(self, to_dir: Union[str, Path]) -> list[Path]:
        """Write the stylesheets linked from ``footer`` (see ``linkcss``) into ``to_dir``."""
        return self.context.stylesheets.write_stylesheets(to_dir)


def convert_blocks(
    blocks: Iterable[SourceBlock],
    *,
    attributes: Optional[Attributes] = None,
    trusted_attributes: Optional[Attributes] = None,
    safe_mode: SafeMode | int = DEFAULT_SAFE_MODE,
    backend: Backend = DEFAULT_BACKEND,
    registry: Optional[HighlighterRegistry] = None,
    listing: bool = True,
) -> ConversionResult:
    """Convert the source blocks of one document.

    Parameters
    ----------
    blocks : iterable of SourceBlock
        Blocks in document order
    attributes : Mapping, optional
        Attributes declared by the document. ``source-highlighter`` is
        ignored when ``safe_mode`` is at or above ``SafeMode.SERVER``.
    trusted_attributes : Mapping, optional
        Attributes set by the calling application; never gated
    safe_mode : SafeMode or int, default SafeMode.SAFE
        Security level of the conversion
    backend : {"html5", "docbook5"}, default "html5"
        Output backend
    registry : HighlighterRegistry, optional
        Registry to resolve the highlighter from; defaults to the
        process-wide registry
    listing : bool, default True
        Wrap each block in listing block markup (title, id, role)

    Returns
    -------
    ConversionResult
        Block markup and document-level assets

    Raises
    ------
    LineRangeError
        If a block's highlight range is malformed
    CalloutRestorationError
        If a highlighter destroyed or duplicated a sentinel
    DependencyError
        If the highlighter's engine is not installed

    Examples
    --------
    >>> result = convert_blocks(
    ...     [SourceBlock.from_text("print('hi')  # <1>", "python")],
    ...     attributes={"source-highlighter": "pygments"},
    ... )
    >>> html = result.body + result.footer

    """
    context = DocumentContext.create(
        attributes,
        safe_mode=safe_mode,
        trusted_attributes=trusted_attributes,
        backend=backend,
        registry=registry,
    )
    converter = SourceBlockConverter(context)

    rendered = []
    with debug_timer(logger, f"Converting source blocks ({context.highlighter_name or 'no highlighter'})"):
        for block in blocks:
            rendered.append(converter.convert(block) if listing else converter.convert_source(block))

    return ConversionResult(
        blocks=rendered,
        head=converter.docinfo("head"),
        footer=converter.docinfo("footer"),
        context=context,
    )


def highlight(
    source: Union[str, SourceBlock],
    language: Optional[str] = None,
    *,
    highlighter: Optional[str] = "pygments",
    style: Optional[str] = None,
    attributes: Optional[Attributes] = None,
    block_attributes: Optional[Attributes] = None,
    options: Iterable[str] = (),
    listing: bool = False,
) -> str:
    """Highlight a single piece of source code.

    The highlighter and style are chosen by the caller and are therefore
    trusted. The result does not include document-level assets; use
    :func:`convert_blocks` to obtain stylesheets and scripts.

    Parameters
    ----------
    source : str or SourceBlock
        Source text or a prepared block
    language : str, optional
        Language tag (ignored when ``source`` is a SourceBlock)
    highlighter : str or None, default "pygments"
        Highlighter name; None renders escaped text only
    style : str, optional
        Highlighter style name
    attributes : Mapping, optional
        Further document attributes (e.g. ``pygments-css: style``)
    block_attributes : Mapping, optional
        Block attributes (``start``, ``highlight``, ``linenums``, ...)
    options : iterable of str
        Block options (``linenums``, ``nowrap``, ``mixed``)
    listing : bool, default False
        Wrap the result in listing block markup

    Returns
    -------
    str
        The ``pre`` element (or listing block) for the source

    Examples
    --------
    >>> html = highlight("x = 1", "python", block_attributes={"highlight": "1"})

    """
    block = (
        source
        if isinstance(source, SourceBlock)
        else SourceBlock.from_text(source, language, attributes=block_attributes, options=options)
    )
    trusted: dict[str, Optional[str]] = dict(attributes or {})
    if highlighter:
        trusted[ATTR_SOURCE_HIGHLIGHTER] = highlighter
        if style:
            trusted[ATTR_HIGHLIGHTER_STYLE.format(name=highlighter)] = style

    context = DocumentContext.create(trusted_attributes=trusted, safe_mode=SafeMode.UNSAFE)
    converter = SourceBlockConverter(context)
    return converter.convert(block) if listing else converter.convert_source(block)


def render_standalone(result: ConversionResult, title: str = "") -> str:
    """Render converted blocks as a complete HTML page.

    Parameters
    ----------
    result : ConversionResult
        Output of :func:`convert_blocks` (html5 backend)
    title : str, default ""
        Page title; escaped

    Returns
    -------
    str
        The HTML document

    """
    head_parts = ['<meta charset="UTF-8">', f"<title>{escape_html(title)}</title>"]
    if result.head:
        head_parts.append(result.head)
    body_parts = [result.body]
    if result.footer:
        body_parts.append(result.footer)

    head = "\n".join(head_parts)
    body = "\n".join(body_parts)
    return f"<!DOCTYPE html>\n<html>\n<head>\n{head}\n</head>\n<body>\n{body}\n</body>\n</html>\n"
