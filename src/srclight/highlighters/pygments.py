#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/highlighters/pygments.py
"""Server-side highlighting with Pygments.

Tokens are rendered by ``HtmlFormatter`` without its own wrapper; the
container, line numbers and line emphasis are added by srclight. Token
classes carry the ``tok-`` prefix and the stylesheet is generated for the
``pre.pygments`` selector so several styles can never leak into unrelated
``pre`` elements.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Optional

from srclight.blocks import RenderedFragment, SourceBlock
from srclight.constants import (
    DEPS_PYGMENTS,
    PYGMENTS_BASE_SELECTOR,
    PYGMENTS_DEFAULT_STYLE,
    PYGMENTS_TOKEN_CLASS_PREFIX,
)
from srclight.highlighters.base import BaseHighlighter
from srclight.utils.decorators import debug_timer, requires_dependencies
from srclight.utils.packages import is_package_available

if TYPE_CHECKING:
    from srclight.options import HighlightOptions

logger = logging.getLogger(__name__)

_BASE_STYLE_PATTERN = re.compile(r"^" + re.escape(PYGMENTS_BASE_SELECTOR) + r" +\{([^}]+?)\}", re.MULTILINE)

# Lexers that expect an opening tag unless told to start inside the language
_START_INLINE_LANGUAGES = frozenset({"php"})

# Options the line structure depends on; language options cannot override them
_FIXED_LEXER_OPTIONS = {"stripnl": False, "ensurenl": True}


@lru_cache(maxsize=None)
def _available_styles() -> frozenset[str]:
    from pygments.styles import get_all_styles

    return frozenset(get_all_styles())


def resolve_style(style: Optional[str]) -> str:
    """Return ``style`` if Pygments knows it, otherwise the default style name."""
    if style and style in _available_styles():
        return style
    if style:
        logger.debug(f"Unknown Pygments style '{style}', using '{PYGMENTS_DEFAULT_STYLE}'")
    return PYGMENTS_DEFAULT_STYLE


@lru_cache(maxsize=None)
def _stylesheet(style: str) -> str:
    from pygments.formatters import HtmlFormatter

    formatter = HtmlFormatter(style=style, classprefix=PYGMENTS_TOKEN_CLASS_PREFIX)
    css = formatter.get_style_defs(PYGMENTS_BASE_SELECTOR)
    # Drop the generic rules Pygments emits for bare pre and line number cells
    first = css.find(PYGMENTS_BASE_SELECTOR)
    return css[first:] if first > 0 else css


@lru_cache(maxsize=None)
def _base_style(style: str) -> str:
    match = _BASE_STYLE_PATTERN.search(_stylesheet(style))
    return match.group(1).strip() if match else ""


class PygmentsHighlighter(BaseHighlighter):
    """Adapter for the Pygments highlighting library.

    Supported style names are whatever ``pygments.styles.get_all_styles()``
    reports; unknown names fall back to ``default``.

    CSS modes
    ---------
    class
        Token classes, backed by a stylesheet the document embeds or links.
    style, inline
        Inline ``style`` attributes on every token and the base rule of the
        style on the ``pre`` element; no stylesheet is needed.

    """

    name = "pygments"
    pre_class = "pygments"

    def supports_highlighting(self) -> bool:
        return is_package_available("pygments")

    def default_style(self) -> str:
        return PYGMENTS_DEFAULT_STYLE

    def _lexer(self, language: Optional[str], options: HighlightOptions) -> Any:
        from pygments.lexers import get_lexer_by_name
        from pygments.lexers.shell import ShellSessionBaseLexer
        from pygments.lexers.special import TextLexer
        from pygments.util import ClassNotFound

        if not language:
            return TextLexer(**_FIXED_LEXER_OPTIONS)
        lexer_options: dict[str, Any] = {**dict(options.language_options), **_FIXED_LEXER_OPTIONS}
        if language.lower() in _START_INLINE_LANGUAGES and not options.mixed:
            lexer_options.setdefault("startinline", True)
        try:
            lexer = get_lexer_by_name(language, **lexer_options)
        except ClassNotFound:
            logger.debug(f"No Pygments lexer for language '{language}', using plain text")
            return TextLexer(**_FIXED_LEXER_OPTIONS)

        prompt = lexer_options.get("prompt")
        if prompt and isinstance(lexer, ShellSessionBaseLexer):
            # Session lexers find prompts with a class-level pattern; this one is per block
            lexer._ps1rgx = re.compile(rf"^({re.escape(prompt)})(.*\n?)")
        return lexer

    @requires_dependencies("pygments", DEPS_PYGMENTS)
    def format(
        self,
        block: SourceBlock,
        source: str,
        language: Optional[str],
        options: HighlightOptions,
    ) -> RenderedFragment:
        """Highlight shielded source text with Pygments.

        Returns an empty fragment for a block without lines. Otherwise the
        fragment ends with a newline, as Pygments terminates the last line.
        """
        if not block.lines:
            return RenderedFragment.empty()

        from pygments import highlight
        from pygments.formatters import HtmlFormatter

        style = resolve_style(options.style)
        formatter = HtmlFormatter(
            nowrap=True,
            classprefix=PYGMENTS_TOKEN_CLASS_PREFIX,
            noclasses=options.inline_styles,
            style=style,
        )
        with debug_timer(logger, f"Highlighting {block.line_count} line(s) as {language or 'text'} (pygments)"):
            # Terminate the last line so a trailing empty line is not taken for the terminator
            result = highlight(f"{source}\n", self._lexer(language, options), formatter)
        return RenderedFragment(result, trailing_newline=result.endswith("\n"))

    def pre_attributes(
        self, block: SourceBlock, language: Optional[str], options: HighlightOptions
    ) -> dict[str, Optional[str]]:
        if not options.inline_styles:
            return {}
        base_style = self.base_style(options.style)
        return {"style": base_style} if base_style else {}

    def requires_stylesheet(self, options: HighlightOptions) -> bool:
        return not options.inline_styles

    @requires_dependencies("pygments", DEPS_PYGMENTS)
    def read_stylesheet(self, style: Optional[str] = None) -> str:
        """Return the stylesheet for ``style`` scoped to ``pre.pygments``.

        Unknown or missing style names return the ``default`` stylesheet.
        Results are cached for the life of the process.
        """
        return _stylesheet(resolve_style(style))

    @requires_dependencies("pygments", DEPS_PYGMENTS)
    def base_style(self, style: Optional[str] = None) -> str:
        """Declarations of the ``pre.pygments`` rule for ``style`` (colors, background)."""
        return _base_style(resolve_style(style))
