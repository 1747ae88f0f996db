#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/restoration.py
"""Swap sentinels in rendered output back for callout bubbles and placeholders.

Sentinels survive escaping and token markup intact, so each one is located
with a literal substring search. Every sentinel must occur exactly once; any
other count means the engine split, dropped or duplicated it, and the
conversion fails with ``CalloutRestorationError`` instead of producing
corrupt output.
"""

from __future__ import annotations

import logging
from typing import Optional

from srclight.blocks import Callout, CalloutMark, RenderedFragment
from srclight.constants import (
    CALLOUT_DOCBOOK_TEMPLATE,
    CALLOUT_FONT_TEMPLATE,
    CALLOUT_HTML_TEMPLATE,
    CALLOUT_IMAGE_TEMPLATE,
    DEFAULT_BACKEND,
    DEFAULT_ICONSDIR,
    DEFAULT_ICONTYPE,
    Backend,
)
from srclight.exceptions import CalloutRestorationError, RenderingError
from srclight.options import DocumentOptions
from srclight.shield import ShieldedSource
from srclight.utils.html_utils import escape_html, escape_text

logger = logging.getLogger(__name__)


class CalloutRenderer:
    """Render callout bubbles for one block.

    Parameters
    ----------
    backend : {"html5", "docbook5"}, default "html5"
        Output backend
    icons : str or None, default None
        Value of the ``icons`` document attribute. ``"font"`` renders icon
        font glyphs, any other set value renders images, None renders text.
    iconsdir : str
        Directory holding the ``callouts/`` images
    icontype : str
        Image file extension
    list_index : int, default 1
        Position of the block's callout list in the document, used for
        DocBook ``co`` identifiers (``CO{list_index}-{n}``)

    """

    def __init__(
        self,
        backend: Backend = DEFAULT_BACKEND,
        icons: Optional[str] = None,
        iconsdir: str = DEFAULT_ICONSDIR,
        icontype: str = DEFAULT_ICONTYPE,
        list_index: int = 1,
    ):
        """Initialize the renderer."""
        self.backend = backend
        self.icons = icons
        self.iconsdir = iconsdir.rstrip("/")
        self.icontype = icontype
        self.list_index = list_index
        self._rendered = 0

    @classmethod
    def for_document(cls, options: DocumentOptions, list_index: int = 1) -> "CalloutRenderer":
        return cls(
            backend=options.backend,
            icons=options.icons,
            iconsdir=options.iconsdir,
            icontype=options.icontype,
            list_index=list_index,
        )

    def render_callout(self, callout: Callout) -> str:
        """Render a single bubble."""
        self._rendered += 1
        number = callout.number

        if self.backend == "docbook5":
            return CALLOUT_DOCBOOK_TEMPLATE.format(id=f"CO{self.list_index}-{self._rendered}")
        if self.icons == "font":
            return CALLOUT_FONT_TEMPLATE.format(number=number)
        if self.icons is not None:
            src = escape_html(f"{self.iconsdir}/callouts/{number}.{self.icontype}")
            return CALLOUT_IMAGE_TEMPLATE.format(src=src, number=number)
        bubble = CALLOUT_HTML_TEMPLATE.format(number=number)
        if callout.xml:
            return f"&lt;!--{bubble}--&gt;"
        return f"{escape_text(callout.guard or '')}{bubble}"

    def render_mark(self, mark: CalloutMark) -> str:
        """Render all bubbles of a line, separated by single spaces."""
        return " ".join(self.render_callout(callout) for callout in mark.callouts)

    @property
    def rendered_count(self) -> int:
        """Number of bubbles rendered so far."""
        return self._rendered


def restore_annotations(
    fragment: RenderedFragment,
    shielded: ShieldedSource,
    renderer: CalloutRenderer,
    *,
    highlighter_name: Optional[str] = None,
) -> RenderedFragment:
    """Replace every sentinel in ``fragment`` with the markup it stands for.

    Parameters
    ----------
    fragment : RenderedFragment
        Output of the adapter (or of plain escaping)
    shielded : ShieldedSource
        The shielded source the fragment was produced from
    renderer : CalloutRenderer
        Renders callout bubbles
    highlighter_name : str, optional
        Name of the adapter, for error messages

    Returns
    -------
    RenderedFragment
        Restored fragment with the same newline placement as the input

    Raises
    ------
    CalloutRestorationError
        If a sentinel does not occur exactly once
    RenderingError
        If restoration changed the number of lines

    """
    if not shielded.sentinels:
        return fragment

    content = fragment.content
    newlines = content.count("\n")
    for sentinel in shielded.sentinels:
        matches = content.count(sentinel.token)
        if matches != 1:
            raise CalloutRestorationError(sentinel.token, matches, highlighter_name=highlighter_name)
        annotation = sentinel.annotation
        if isinstance(annotation, CalloutMark):
            replacement = renderer.render_mark(annotation)
        else:
            replacement = annotation.text
        content = content.replace(sentinel.token, replacement, 1)

    if content.count("\n") != newlines:
        raise RenderingError(
            f"Restoring annotations changed the line structure ({newlines} -> {content.count(chr(10))} newlines)",
            rendering_stage="callout_restoration",
        )

    logger.debug(f"Restored {len(shielded.sentinels)} sentinel(s), {renderer.rendered_count} callout bubble(s)")
    return RenderedFragment(content, trailing_newline=fragment.trailing_newline)
