#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/blocks.py
"""Value types passed between the stages of source block conversion.

A ``SourceBlock`` is produced by the document parser and borrowed read-only.
The shield turns its callout marks and passthrough placeholders into
``Sentinel`` tokens, the adapter returns a ``RenderedFragment`` and the
restoration stage swaps the sentinels back for rendered annotations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

from srclight.constants import (
    BLOCK_ATTR_HIGHLIGHT,
    BLOCK_ATTR_LANGUAGE,
    BLOCK_ATTR_LINE_COMMENT,
    BLOCK_ATTR_LINENUMS,
    BLOCK_ATTR_START,
    BLOCK_OPTION_LINENUMS,
    BLOCK_OPTION_MIXED,
    BLOCK_OPTION_NOWRAP,
    DEFAULT_START_LINE_NUMBER,
)

logger = logging.getLogger(__name__)

LineHighlightSet = frozenset
"""1-based source line indices selected for emphasis (``frozenset[int]``)."""


@dataclass(frozen=True)
class SourceBlock:
    """A literal source block as handed over by the document parser.

    Parameters
    ----------
    lines : tuple of str
        Raw source lines, without line terminators.
    language : str or None, default None
        Language tag declared on the block.
    attributes : Mapping[str, str or None], optional
        Resolved block attributes (``start``, ``highlight``, ``linenums``,
        ``line-comment``, ...). A key mapped to None is treated as unset.
    options : frozenset of str, optional
        Block options such as ``linenums``, ``nowrap`` and ``mixed``.
    callouts : bool, default True
        Whether callout substitution is active for this block.
    id, title, role : str or None
        Identifier, title and role of the enclosing listing.

    """

    lines: tuple[str, ...] = ()
    language: Optional[str] = None
    attributes: Mapping[str, Optional[str]] = field(default_factory=lambda: MappingProxyType({}))
    options: frozenset[str] = frozenset()
    callouts: bool = True
    id: Optional[str] = None
    title: Optional[str] = None
    role: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalize container types so the block stays immutable."""
        object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "options", frozenset(self.options))
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if self.language is None:
            language = self.attributes.get(BLOCK_ATTR_LANGUAGE)
            if language:
                object.__setattr__(self, "language", language)

    @classmethod
    def from_text(
        cls,
        text: str,
        language: Optional[str] = None,
        *,
        attributes: Optional[Mapping[str, Optional[str]]] = None,
        options: Iterable[str] = (),
        callouts: bool = True,
        id: Optional[str] = None,
        title: Optional[str] = None,
        role: Optional[str] = None,
    ) -> "SourceBlock":
        """Build a block from a string of source text.

        Line endings are normalized to ``\\n``. A single trailing line
        terminator does not start a new line, so ``"a\\nb\\n"`` has two lines
        and ``""`` has none.

        Parameters
        ----------
        text : str
            Source text
        language : str, optional
            Language tag
        attributes : Mapping, optional
            Block attributes
        options : iterable of str, optional
            Block options
        callouts : bool, default True
            Whether callout substitution is active
        id, title, role : str, optional
            Listing metadata

        Returns
        -------
        SourceBlock
            The new block

        """
        normalized = text.replace("\r\n", "\n")
        if normalized.endswith("\n"):
            normalized = normalized[:-1]
        lines = tuple(normalized.split("\n")) if text else ()
        return cls(
            lines=lines,
            language=language,
            attributes=attributes or {},
            options=frozenset(options),
            callouts=callouts,
            id=id,
            title=title,
            role=role,
        )

    @property
    def source(self) -> str:
        """The block text, lines joined with ``\\n`` and no trailing newline."""
        return "\n".join(self.lines)

    @property
    def line_count(self) -> int:
        """Number of source lines."""
        return len(self.lines)

    def has_option(self, name: str) -> bool:
        """Whether the block carries the named option."""
        return name in self.options

    def attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return a block attribute value, or ``default`` when it is unset."""
        value = self.attributes.get(name)
        return default if value is None else value

    @property
    def numbered(self) -> bool:
        """Whether line numbering was requested on the block."""
        return self.has_option(BLOCK_OPTION_LINENUMS) or self.attributes.get(BLOCK_ATTR_LINENUMS) is not None

    @property
    def nowrap(self) -> bool:
        return self.has_option(BLOCK_OPTION_NOWRAP)

    @property
    def mixed(self) -> bool:
        return self.has_option(BLOCK_OPTION_MIXED)

    @property
    def has_start(self) -> bool:
        """Whether the block sets an explicit starting line number."""
        return self.attributes.get(BLOCK_ATTR_START) is not None

    @property
    def start(self) -> int:
        """Displayed number of the first line.

        Values below 1 clamp to 1; a value that is not an integer is ignored
        with a warning.
        """
        value = self.attributes.get(BLOCK_ATTR_START)
        if value is None:
            return DEFAULT_START_LINE_NUMBER
        try:
            start = int(str(value).strip())
        except ValueError:
            logger.warning(f"Ignoring non-numeric start attribute {value!r} on source block")
            return DEFAULT_START_LINE_NUMBER
        return max(start, 1)

    @property
    def highlight(self) -> Optional[str]:
        """The highlight range specification, if any."""
        return self.attributes.get(BLOCK_ATTR_HIGHLIGHT)

    @property
    def line_comment(self) -> Optional[str]:
        """Custom callout guard; an empty string disables guards, None means the defaults."""
        return self.attributes.get(BLOCK_ATTR_LINE_COMMENT)


@dataclass(frozen=True)
class Callout:
    """One callout number and the guard that preceded it in the source.

    Parameters
    ----------
    number : int
        The callout number after auto-numbering was resolved.
    guard : str or None
        Line comment prefix written before the mark, including its trailing
        space when there was one (e.g. ``"# "``).
    xml : bool, default False
        Whether the mark used the XML comment form ``<!--N-->``.

    """

    number: int
    guard: Optional[str] = None
    xml: bool = False


@dataclass(frozen=True)
class CalloutMark:
    """All callouts attached to one source line.

    Parameters
    ----------
    line : int
        1-based source line index.
    column : int
        Offset in the shielded line where the sentinel was inserted.
    callouts : tuple of Callout
        Callouts in the order they appear on the line.

    """

    line: int
    column: int
    callouts: tuple[Callout, ...]

    @property
    def numbers(self) -> tuple[int, ...]:
        return tuple(callout.number for callout in self.callouts)


@dataclass(frozen=True)
class Placeholder:
    """A passthrough placeholder token found in the source.

    Parameters
    ----------
    text : str
        The placeholder exactly as it appeared (delimiters included).
    line : int
        1-based source line index.
    column : int
        Offset in the shielded line where the sentinel was inserted.

    """

    text: str
    line: int
    column: int


Annotation = Union[CalloutMark, Placeholder]


@dataclass(frozen=True)
class Sentinel:
    """Opaque token standing in for an annotation while an adapter runs."""

    token: str
    annotation: Annotation

    @property
    def is_callout(self) -> bool:
        return isinstance(self.annotation, CalloutMark)


@dataclass(frozen=True)
class RenderedFragment:
    """Markup produced for a block's lines.

    Parameters
    ----------
    content : str
        The markup. Lines are separated by ``\\n``.
    trailing_newline : bool, default False
        Whether ``content`` ends with a line terminator after the last line.

    """

    content: str
    trailing_newline: bool = False

    @property
    def lines(self) -> list[str]:
        """Markup for each source line.

        A fragment for a block without lines is empty and has no line
        structure; callers handle zero-line blocks before asking for lines.
        """
        lines = self.content.split("\n")
        if self.trailing_newline and lines and lines[-1] == "":
            lines.pop()
        return lines

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "RenderedFragment":
        return cls("\n".join(lines), trailing_newline=False)

    @classmethod
    def empty(cls) -> "RenderedFragment":
        return cls("", trailing_newline=False)
