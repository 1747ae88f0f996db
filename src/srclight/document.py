#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/document.py
"""Per-document state and the highlighter security gate.

A document may pick its own highlighter only while the conversion runs
below the security threshold. ``gate_attributes`` is applied once, before
anything else reads the attributes; at or above the threshold the
``source-highlighter`` attribute is removed without any signal and the
registry is never consulted. Attributes supplied by the calling application
are trusted and applied after the gate.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping, Optional

from srclight.constants import (
    ATTR_SOURCE_HIGHLIGHTER,
    DEFAULT_BACKEND,
    DEFAULT_SAFE_MODE,
    DEFAULT_SECURITY_THRESHOLD,
    Backend,
    SafeMode,
)
from srclight.highlighters import highlighter_registry
from srclight.highlighters.base import BaseHighlighter
from srclight.options import DocumentOptions
from srclight.stylesheets import StylesheetManager

if TYPE_CHECKING:
    from srclight.highlighters.registry import HighlighterRegistry

logger = logging.getLogger(__name__)

__all__ = ["DocumentContext", "SafeMode", "gate_attributes"]


def gate_attributes(
    attributes: Mapping[str, Optional[str]],
    safe_mode: SafeMode | int,
    *,
    threshold: SafeMode | int = DEFAULT_SECURITY_THRESHOLD,
) -> dict[str, Optional[str]]:
    """Return document attributes as the rest of the pipeline may see them.

    Parameters
    ----------
    attributes : Mapping[str, str or None]
        Attributes declared by the document
    safe_mode : SafeMode or int
        Security level of the conversion
    threshold : SafeMode or int, default SafeMode.SERVER
        Level at and above which a document may not choose a highlighter

    Returns
    -------
    dict
        A copy of ``attributes``, without ``source-highlighter`` when gated

    """
    gated = dict(attributes)
    if safe_mode >= threshold:
        gated.pop(ATTR_SOURCE_HIGHLIGHTER, None)
    return gated


class DocumentContext:
    """State shared by the source blocks of one document.

    Build instances with :meth:`create`. A context is not thread-safe; use
    one per conversion.

    Parameters
    ----------
    options : DocumentOptions
        Resolved document settings
    adapter : BaseHighlighter or None
        Resolved highlighter, or None when blocks are not highlighted

    """

    def __init__(self, options: DocumentOptions, adapter: Optional[BaseHighlighter] = None):
        """Initialize the context."""
        self.options = options
        self.adapter = adapter
        self.stylesheets = StylesheetManager(adapter, options)
        self._callout_lists = 0

    @classmethod
    def create(
        cls,
        attributes: Optional[Mapping[str, Optional[str]]] = None,
        *,
        safe_mode: SafeMode | int = DEFAULT_SAFE_MODE,
        trusted_attributes: Optional[Mapping[str, Optional[str]]] = None,
        backend: Backend = DEFAULT_BACKEND,
        registry: Optional[HighlighterRegistry] = None,
        security_threshold: SafeMode | int = DEFAULT_SECURITY_THRESHOLD,
    ) -> "DocumentContext":
        """Gate the document attributes and resolve the highlighter.

        Parameters
        ----------
        attributes : Mapping, optional
            Attributes declared by the document (untrusted)
        safe_mode : SafeMode or int, default SafeMode.SAFE
            Security level of the conversion
        trusted_attributes : Mapping, optional
            Attributes set by the calling application; applied after the gate
        backend : {"html5", "docbook5"}, default "html5"
            Output backend. DocBook output is never highlighted.
        registry : HighlighterRegistry, optional
            Registry to resolve the highlighter from; defaults to the
            process-wide registry
        security_threshold : SafeMode or int, default SafeMode.SERVER
            Gate threshold

        Returns
        -------
        DocumentContext
            New context for one document

        """
        effective = gate_attributes(attributes or {}, safe_mode, threshold=security_threshold)
        if trusted_attributes:
            effective.update(trusted_attributes)

        requested = (effective.get(ATTR_SOURCE_HIGHLIGHTER) or "").strip()
        adapter = None
        if requested and backend == "html5":
            adapter = (registry if registry is not None else highlighter_registry).resolve(requested)
            if adapter is None:
                logger.info(f"Highlighter '{requested}' is not available; blocks will not be highlighted")
            else:
                logger.debug(f"Using highlighter '{adapter.registered_name}'")

        options = DocumentOptions.from_attributes(
            effective,
            backend=backend,
            safe_mode=SafeMode(safe_mode),
            highlighter_key=adapter.registered_name if adapter is not None else None,
        )

        return cls(options, adapter)

    @property
    def highlighter_name(self) -> Optional[str]:
        return self.adapter.registered_name if self.adapter is not None else None

    def next_callout_list_index(self) -> int:
        """Allocate the index of the next block's callout list."""
        self._callout_lists += 1
        return self._callout_lists
