#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/highlighters/base.py
"""Capability contract shared by every highlighter adapter.

An adapter either highlights (``supports_highlighting()`` is true and
``format`` turns shielded source text into token markup) or is a
pass-through that only contributes the structural container and the
document-level assets a client-side highlighter needs.

Callers must check ``supports_highlighting()`` before calling ``format``;
the default ``format`` raises ``UnsupportedOperationError``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Mapping, Optional, Sequence

from srclight.blocks import RenderedFragment, SourceBlock
from srclight.constants import DOCINFO_LOCATIONS, DocinfoLocation
from srclight.exceptions import UnsupportedOperationError, ValidationError
from srclight.utils.html_utils import format_attributes

if TYPE_CHECKING:
    from srclight.options import DocumentOptions, HighlightOptions

logger = logging.getLogger(__name__)

GENERIC_PRE_CLASS = "highlight"
NO_LANGUAGE = "none"


def wrap_source(
    content: str,
    language: Optional[str],
    *,
    pre_classes: Sequence[str] = (GENERIC_PRE_CLASS,),
    pre_attributes: Optional[Mapping[str, Optional[str]]] = None,
    code_classes: Sequence[str] = (),
    mark_missing_language: bool = True,
) -> str:
    """Wrap rendered lines in the ``<pre><code>`` container.

    Parameters
    ----------
    content : str
        Markup for the block body; inserted verbatim.
    language : str or None
        Language tag. Sets ``class="language-{lang}"`` and ``data-lang`` on the
        code element, or ``class="language-none"`` without ``data-lang`` when empty.
    pre_classes : sequence of str
        Classes of the ``pre`` element, in order.
    pre_attributes : Mapping, optional
        Further ``pre`` attributes, written after ``class``.
    code_classes : sequence of str
        Classes appended after the language class on the ``code`` element.
    mark_missing_language : bool, default True
        Whether a block without language gets ``class="language-none"``;
        when False its code element carries no language class at all.

    Returns
    -------
    str
        The container markup

    """
    pre_attrs: dict[str, Optional[str]] = {"class": " ".join(c for c in pre_classes if c) or None}
    pre_attrs.update(pre_attributes or {})

    if language:
        language_class = f"language-{language}"
    else:
        language_class = f"language-{NO_LANGUAGE}" if mark_missing_language else ""
    code_attrs: dict[str, Optional[str]] = {
        "class": " ".join(c for c in (language_class, *code_classes) if c) or None,
        "data-lang": language or None,
    }
    return f"<pre{format_attributes(pre_attrs)}><code{format_attributes(code_attrs)}>{content}</code></pre>"


class BaseHighlighter(ABC):
    """Abstract base class for highlighter adapters.

    Subclasses set ``name`` and ``aliases`` for registration and override
    the hooks they need. Adapters must be stateless: one instance serves
    every document converted in the process.

    Parameters
    ----------
    name : str, optional
        Name the adapter was registered under; defaults to the class ``name``.

    Attributes
    ----------
    name : str
        Registered name
    aliases : tuple of str
        Alternative names accepted by the registry
    pre_class : str or None
        Highlighter-specific class placed before ``highlight`` on ``pre``
    preserves_placeholders : bool
        Whether passthrough placeholders survive this adapter untouched, so
        the shield can leave them in the text

    """

    name: ClassVar[str] = ""
    aliases: ClassVar[tuple[str, ...]] = ()
    pre_class: ClassVar[Optional[str]] = None
    preserves_placeholders: ClassVar[bool] = False

    def __init__(self, name: Optional[str] = None):
        """Initialize the adapter with the name it is registered under."""
        self._name = name or type(self).name

    @property
    def registered_name(self) -> str:
        return self._name

    @abstractmethod
    def supports_highlighting(self) -> bool:
        """Whether ``format`` may be called.

        Returns
        -------
        bool
            False for pass-through adapters

        """

    def format(
        self,
        block: SourceBlock,
        source: str,
        language: Optional[str],
        options: HighlightOptions,
    ) -> RenderedFragment:
        """Highlight shielded source text.

        Parameters
        ----------
        block : SourceBlock
            The block being converted (read-only)
        source : str
            Shielded text, lines joined by ``\\n``
        language : str or None
            Language tag, possibly empty
        options : HighlightOptions
            Per-block configuration

        Returns
        -------
        RenderedFragment
            One line of markup per source line

        Raises
        ------
        UnsupportedOperationError
            Always, unless overridden by a highlighting adapter

        """
        raise UnsupportedOperationError(self.registered_name)

    def pre_classes(self, block: SourceBlock, options: HighlightOptions) -> list[str]:
        classes = [self.pre_class or "", GENERIC_PRE_CLASS]
        if options.nowrap:
            classes.append("nowrap")
        return [c for c in classes if c]

    def pre_attributes(
        self, block: SourceBlock, language: Optional[str], options: HighlightOptions
    ) -> dict[str, Optional[str]]:
        return {}

    def code_classes(self, language: Optional[str], options: HighlightOptions) -> list[str]:
        return []

    def wrap(
        self,
        block: SourceBlock,
        content: str,
        language: Optional[str],
        options: HighlightOptions,
    ) -> str:
        """Wrap block markup in the structural container.

        Parameters
        ----------
        block : SourceBlock
            The block being converted
        content : str
            Body markup (highlighted or escaped lines, line numbers included)
        language : str or None
            Language tag
        options : HighlightOptions
            Per-block configuration

        Returns
        -------
        str
            ``<pre>`` element with the adapter's classes and a ``<code>`` child

        """
        return wrap_source(
            content,
            language,
            pre_classes=self.pre_classes(block, options),
            pre_attributes=self.pre_attributes(block, language, options),
            code_classes=self.code_classes(language, options),
        )

    def docinfo(self, location: DocinfoLocation, options: DocumentOptions) -> str:
        """Markup to inject once per document at ``location``.

        Parameters
        ----------
        location : {"head", "footer"}
            Where the markup goes
        options : DocumentOptions
            Document settings

        Returns
        -------
        str
            Markup, or an empty string when nothing is needed

        """
        validate_docinfo_location(location)
        return ""

    def requires_stylesheet(self, options: HighlightOptions) -> bool:
        """Whether blocks rendered with ``options`` depend on a document stylesheet."""
        return False

    def default_style(self) -> Optional[str]:
        return None

    def read_stylesheet(self, style: Optional[str] = None) -> Optional[str]:
        """Return CSS for ``style``, or the default style's CSS when it is unknown.

        Adapters without stylesheets return None.
        """
        return None

    def stylesheet_basename(self, style: Optional[str] = None) -> str:
        return f"{self.registered_name}-{style or self.default_style() or 'default'}.css"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.registered_name!r})"


def validate_docinfo_location(location: str) -> None:
    if location not in DOCINFO_LOCATIONS:
        raise ValidationError(
            f"Invalid docinfo location: {location!r}. Must be one of {DOCINFO_LOCATIONS}",
            parameter_name="location",
            parameter_value=location,
        )
