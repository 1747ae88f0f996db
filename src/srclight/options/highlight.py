#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for document-level and per-block highlighting.

``DocumentOptions`` is built once per document from the (already gated)
document attributes. ``HighlightOptions`` is the per-block configuration bag
handed to highlighter adapters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from srclight.constants import (
    ATTR_CDN_BASE_URL,
    ATTR_HIGHLIGHTER_CSS,
    ATTR_HIGHLIGHTER_LINENUMS_MODE,
    ATTR_HIGHLIGHTER_STYLE,
    ATTR_ICONS,
    ATTR_ICONSDIR,
    ATTR_ICONTYPE,
    ATTR_LINKCSS,
    ATTR_PREWRAP,
    ATTR_SOURCE_HIGHLIGHTER,
    ATTR_SOURCE_LANGUAGE,
    ATTR_SOURCE_LINENUMS_OPTION,
    ATTR_STYLESDIR,
    BACKENDS,
    CSS_MODES,
    DEFAULT_BACKEND,
    DEFAULT_CDN_BASE_URL,
    DEFAULT_CSS_MODE,
    DEFAULT_ICONSDIR,
    DEFAULT_ICONTYPE,
    DEFAULT_LINENUMS_MODE,
    DEFAULT_SAFE_MODE,
    DEFAULT_START_LINE_NUMBER,
    DEFAULT_STYLESDIR,
    LINENUMS_MODES,
    Backend,
    CssMode,
    LinenumsMode,
    SafeMode,
)
from srclight.options.base import CloneFrozenMixin

logger = logging.getLogger(__name__)


def _is_set(attributes: Mapping[str, Optional[str]], name: str) -> bool:
    return name in attributes and attributes[name] is not None


def _highlighter_attribute(
    attributes: Mapping[str, Optional[str]], template: str, names: tuple[str, ...]
) -> tuple[Optional[str], str]:
    """Return the value and key of the first ``template`` attribute set for any of ``names``."""
    for name in names:
        key = template.format(name=name)
        if _is_set(attributes, key):
            return attributes[key], key
    return None, template.format(name=names[0])


def _choice(value: Optional[str], choices: tuple[str, ...], default: str, attribute: str) -> str:
    if value is None or value == "":
        return default
    normalized = value.strip().lower()
    if normalized not in choices:
        logger.warning(f"Ignoring unknown value {value!r} for attribute '{attribute}'; using '{default}'")
        return default
    return normalized


@dataclass(frozen=True)
class HighlightOptions(CloneFrozenMixin):
    """Per-block configuration passed to a highlighter adapter.

    Parameters
    ----------
    style : str or None, default None
        Style name requested for the highlighter (e.g., "monokai"); None means
        the adapter's default style.
    css_mode : {"class", "style", "inline"}, default "class"
        Whether token styles are emitted as CSS classes backed by a document
        stylesheet ("class") or as inline ``style`` attributes.
    linenums_mode : {"table", "inline"}, default "table"
        Layout of line numbers when the block is numbered.
    numbered : bool, default False
        Whether line numbers are shown for the block.
    start : int, default 1
        Displayed number of the first source line.
    highlight_lines : frozenset of int, default empty
        1-based source line indices selected for emphasis.
    nowrap : bool, default False
        Whether the container disables line wrapping.
    mixed : bool, default False
        Whether the block mixes host markup with the language (disables
        start-inline lexing for languages such as PHP).
    language_options : tuple of (str, str), default empty
        Options given after the language name (``console?prompt=$> ``),
        passed to the lexer by adapters that support them.

    """

    style: Optional[str] = field(
        default=None,
        metadata={"help": "Highlighter style name", "importance": "core"},
    )
    css_mode: CssMode = field(
        default=DEFAULT_CSS_MODE,
        metadata={"help": "How token styles are emitted", "choices": list(CSS_MODES), "importance": "core"},
    )
    linenums_mode: LinenumsMode = field(
        default=DEFAULT_LINENUMS_MODE,
        metadata={"help": "Layout of line numbers", "choices": list(LINENUMS_MODES), "importance": "core"},
    )
    numbered: bool = field(
        default=False,
        metadata={"help": "Show line numbers", "importance": "core"},
    )
    start: int = field(
        default=DEFAULT_START_LINE_NUMBER,
        metadata={"help": "Displayed number of the first line", "type": int, "importance": "advanced"},
    )
    highlight_lines: frozenset[int] = field(
        default_factory=frozenset,
        metadata={"help": "Source line indices to emphasize", "importance": "advanced"},
    )
    nowrap: bool = field(
        default=False,
        metadata={"help": "Disable line wrapping in the container", "importance": "advanced"},
    )
    mixed: bool = field(
        default=False,
        metadata={"help": "Source mixes host markup with the language", "importance": "advanced"},
    )
    language_options: tuple[tuple[str, str], ...] = field(
        default=(),
        metadata={"help": "Lexer options given after the language name", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate field values.

        Raises
        ------
        ValueError
            If a mode is not recognised or the start line is below 1.

        """
        if self.css_mode not in CSS_MODES:
            raise ValueError(f"css_mode must be one of {CSS_MODES}, got {self.css_mode!r}")
        if self.linenums_mode not in LINENUMS_MODES:
            raise ValueError(f"linenums_mode must be one of {LINENUMS_MODES}, got {self.linenums_mode!r}")
        if self.start < 1:
            raise ValueError(f"start must be at least 1, got {self.start}")

    @property
    def inline_styles(self) -> bool:
        """Whether token styles are written inline rather than as classes."""
        return self.css_mode != "class"


@dataclass(frozen=True)
class DocumentOptions(CloneFrozenMixin):
    """Document-level settings resolved from document attributes.

    Build instances with :meth:`from_attributes`; the attributes passed in
    must already have gone through the security gate.

    Parameters
    ----------
    highlighter : str or None
        Requested highlighter name, or None when no highlighter is configured.
    backend : {"html5", "docbook5"}
        Output backend.
    safe_mode : SafeMode
        Security level of the conversion.
    style, css_mode, linenums_mode
        Highlighter-specific attributes (``{name}-style``, ``{name}-css``,
        ``{name}-linenums-mode``).
    source_language : str or None
        Default language for blocks that declare none.
    source_linenums : bool
        Number every block, as if each had the ``linenums`` option.
    linkcss : bool
        Link stylesheets instead of embedding them.
    stylesdir : str
        Directory (or URL) that linked stylesheets are referenced from.
    prewrap : bool
        Whether code wraps; when unset containers get the ``nowrap`` class.
    icons, iconsdir, icontype
        Callout icon settings.
    cdn_base_url : str
        Base URL for assets loaded by client-side highlighters.
    attributes : Mapping
        Read-only view of all document attributes, for adapter-specific lookups.

    """

    highlighter: Optional[str] = None
    backend: Backend = DEFAULT_BACKEND
    safe_mode: SafeMode = DEFAULT_SAFE_MODE
    style: Optional[str] = None
    css_mode: CssMode = DEFAULT_CSS_MODE
    linenums_mode: LinenumsMode = DEFAULT_LINENUMS_MODE
    source_language: Optional[str] = None
    source_linenums: bool = False
    linkcss: bool = False
    stylesdir: str = DEFAULT_STYLESDIR
    prewrap: bool = True
    icons: Optional[str] = None
    iconsdir: str = DEFAULT_ICONSDIR
    icontype: str = DEFAULT_ICONTYPE
    cdn_base_url: str = DEFAULT_CDN_BASE_URL
    attributes: Mapping[str, Optional[str]] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate the backend and modes.

        Raises
        ------
        ValueError
            If the backend or a mode is not recognised.

        """
        if self.backend not in BACKENDS:
            raise ValueError(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if self.css_mode not in CSS_MODES:
            raise ValueError(f"css_mode must be one of {CSS_MODES}, got {self.css_mode!r}")
        if self.linenums_mode not in LINENUMS_MODES:
            raise ValueError(f"linenums_mode must be one of {LINENUMS_MODES}, got {self.linenums_mode!r}")

    @classmethod
    def from_attributes(
        cls,
        attributes: Mapping[str, Optional[str]],
        *,
        backend: Backend = DEFAULT_BACKEND,
        safe_mode: SafeMode = DEFAULT_SAFE_MODE,
        highlighter_key: Optional[str] = None,
    ) -> "DocumentOptions":
        """Resolve document options from an attribute mapping.

        An attribute counts as set when it is present with a value other than
        None. Unknown CSS or line number modes fall back to the defaults with
        a warning.

        Parameters
        ----------
        attributes : Mapping[str, str or None]
            Gated document attributes
        backend : {"html5", "docbook5"}, default "html5"
            Output backend
        safe_mode : SafeMode, default SafeMode.SAFE
            Security level of the conversion
        highlighter_key : str, optional
            Registered name of the resolved highlighter. ``{name}-style``,
            ``{name}-css`` and ``{name}-linenums-mode`` are looked up under
            this name first, then under the lower-cased and the original
            spelling of ``source-highlighter``.

        Returns
        -------
        DocumentOptions
            Resolved options

        """
        highlighter = attributes.get(ATTR_SOURCE_HIGHLIGHTER) or None
        if highlighter is not None:
            highlighter = highlighter.strip() or None

        style = None
        css_mode: str = DEFAULT_CSS_MODE
        linenums_mode: str = DEFAULT_LINENUMS_MODE
        if highlighter:
            names = tuple(dict.fromkeys(n for n in (highlighter_key, highlighter.lower(), highlighter) if n))
            style = _highlighter_attribute(attributes, ATTR_HIGHLIGHTER_STYLE, names)[0] or None
            css_value, css_attr = _highlighter_attribute(attributes, ATTR_HIGHLIGHTER_CSS, names)
            css_mode = _choice(css_value, CSS_MODES, DEFAULT_CSS_MODE, css_attr)
            linenums_value, linenums_attr = _highlighter_attribute(attributes, ATTR_HIGHLIGHTER_LINENUMS_MODE, names)
            linenums_mode = _choice(linenums_value, LINENUMS_MODES, DEFAULT_LINENUMS_MODE, linenums_attr)

        return cls(
            highlighter=highlighter,
            backend=backend,
            safe_mode=SafeMode(safe_mode),
            style=style,
            css_mode=css_mode,  # type: ignore[arg-type]
            linenums_mode=linenums_mode,  # type: ignore[arg-type]
            source_language=attributes.get(ATTR_SOURCE_LANGUAGE) or None,
            source_linenums=_is_set(attributes, ATTR_SOURCE_LINENUMS_OPTION),
            linkcss=_is_set(attributes, ATTR_LINKCSS),
            stylesdir=attributes.get(ATTR_STYLESDIR) or DEFAULT_STYLESDIR,
            prewrap=attributes.get(ATTR_PREWRAP, "") is not None,
            icons=attributes.get(ATTR_ICONS) if _is_set(attributes, ATTR_ICONS) else None,
            iconsdir=attributes.get(ATTR_ICONSDIR) or DEFAULT_ICONSDIR,
            icontype=attributes.get(ATTR_ICONTYPE) or DEFAULT_ICONTYPE,
            cdn_base_url=(attributes.get(ATTR_CDN_BASE_URL) or DEFAULT_CDN_BASE_URL).rstrip("/"),
            attributes=MappingProxyType(dict(attributes)),
        )

    def attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return a document attribute value, or ``default`` when it is unset."""
        value = self.attributes.get(name)
        return default if value is None else value

    def has_attribute(self, name: str) -> bool:
        """Whether a document attribute is set."""
        return _is_set(self.attributes, name)
