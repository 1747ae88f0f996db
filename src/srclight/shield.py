#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/shield.py
"""Replace callout marks and passthrough placeholders with sentinel tokens.

Highlighting engines know nothing about callouts, so before the source is
handed to one every annotation is swapped for a sentinel:

``SRCLT`` + nonce + kind + index + ``Z``

The nonce is eight random upper-case letters, regenerated until the prefix
does not occur in the source. The kind is ``C`` for a callout mark and ``P``
for a placeholder. The index is written in the letters ``A`` to ``Y``
(``A`` is 0, ``BA`` is 25). Every character is an upper-case ASCII letter:
HTML escaping leaves the sentinel alone, and lexers that split words from
numbers (JSON, HCL, Turtle) still read it as one identifier. The ``Z``
terminator never occurs in an index, so ``...CBZ`` is not a substring of
``...CBAZ``.

Callout syntax
--------------
A callout is ``<N>``, ``<.>`` (auto-numbered) or ``<!--N-->``, optionally
preceded by a line comment guard (``//``, ``#``, ``--`` or ``;;`` plus one
optional space, or the block's ``line-comment`` attribute) and optionally
escaped with a backslash. Marks are only recognised at the end of a line,
where nothing but further marks (separated by at most one space) follows.

All marks of a line become one ``CalloutMark`` and one sentinel, placed
where the first mark (or its guard) started. Whitespace before it is kept;
separating spaces between marks are dropped.
"""

from __future__ import annotations

import logging
import re
import secrets
import string
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from srclight.blocks import Callout, CalloutMark, Placeholder, Sentinel, SourceBlock
from srclight.constants import (
    DEFAULT_CALLOUT_GUARDS,
    PASS_END,
    PASS_START,
    SENTINEL_INDEX_DIGITS,
    SENTINEL_KIND_CALLOUT,
    SENTINEL_KIND_PLACEHOLDER,
    SENTINEL_NONCE_LENGTH,
    SENTINEL_PREFIX,
    SENTINEL_TERMINATOR,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(re.escape(PASS_START) + r"(\d+)" + re.escape(PASS_END))

_MARK_BODY = r"\\?<(?:!--(?:\d+|\.)--|(?:\d+|\.))>"


@dataclass(frozen=True)
class CalloutPatterns:
    """Compiled expressions for one callout guard configuration."""

    run: re.Pattern[str]
    mark: re.Pattern[str]


@lru_cache(maxsize=32)
def callout_patterns(line_comment: Optional[str] = None) -> CalloutPatterns:
    """Build the callout expressions for a block's ``line-comment`` setting.

    Parameters
    ----------
    line_comment : str or None
        None selects the default guards; an empty string disables guards;
        any other value is the only guard accepted.

    Returns
    -------
    CalloutPatterns
        ``run`` matches the trailing run of marks on a line, ``mark`` matches
        one mark inside that run.

    """
    if line_comment is None:
        guards = "|".join(re.escape(guard) for guard in DEFAULT_CALLOUT_GUARDS)
    else:
        guards = re.escape(line_comment.strip())

    guard = rf"(?:(?:{guards}) ?)?" if guards else ""
    single = guard + _MARK_BODY
    run = re.compile(rf"{single}(?: ?{single})*$")
    mark = re.compile(rf"(?P<space> ?)(?P<guard>{guard})(?P<escape>\\)?<(?P<xml>!--)?(?P<number>\d+|\.)(?(xml)--)>")
    return CalloutPatterns(run=run, mark=mark)


@dataclass(frozen=True)
class ShieldedSource:
    """Source lines with every annotation replaced by a sentinel.

    Attributes
    ----------
    lines : tuple of str
        Shielded lines, one per source line
    sentinels : tuple of Sentinel
        Sentinels in insertion order
    nonce : str
        Random part shared by this block's sentinels

    """

    lines: tuple[str, ...]
    sentinels: tuple[Sentinel, ...]
    nonce: str

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def callout_marks(self) -> tuple[CalloutMark, ...]:
        return tuple(s.annotation for s in self.sentinels if isinstance(s.annotation, CalloutMark))

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        return tuple(s.annotation for s in self.sentinels if isinstance(s.annotation, Placeholder))

    @property
    def callout_count(self) -> int:
        return sum(len(mark.callouts) for mark in self.callout_marks)


def encode_index(index: int) -> str:
    """Write a sentinel index with the letters ``A`` to ``Y``.

    >>> encode_index(0), encode_index(24), encode_index(25)
    ('A', 'Y', 'BA')
    """
    base = len(SENTINEL_INDEX_DIGITS)
    digits = SENTINEL_INDEX_DIGITS[index % base]
    while index >= base:
        index //= base
        digits = SENTINEL_INDEX_DIGITS[index % base] + digits
    return digits


def generate_nonce(source: str) -> str:
    """Return a nonce whose sentinel prefix does not occur in ``source``."""
    while True:
        nonce = "".join(secrets.choice(string.ascii_uppercase) for _ in range(SENTINEL_NONCE_LENGTH))
        if f"{SENTINEL_PREFIX}{nonce}" not in source:
            return nonce


class _Shield:
    def __init__(self, nonce: str, preserve_placeholders: bool):
        self.prefix = f"{SENTINEL_PREFIX}{nonce}"
        self.preserve_placeholders = preserve_placeholders
        self.sentinels: list[Sentinel] = []
        self.autonum = 0

    def token(self, kind: str) -> str:
        return f"{self.prefix}{kind}{encode_index(len(self.sentinels))}{SENTINEL_TERMINATOR}"

    def placeholders(self, text: str, line_number: int, offset: int) -> str:
        """Shield placeholders in ``text``, which starts at ``offset`` of the shielded line."""
        if self.preserve_placeholders or PASS_START not in text:
            return text

        parts: list[str] = []
        position = 0
        column = offset
        for match in PLACEHOLDER_PATTERN.finditer(text):
            literal = text[position : match.start()]
            parts.append(literal)
            column += len(literal)
            token = self.token(SENTINEL_KIND_PLACEHOLDER)
            self.sentinels.append(Sentinel(token, Placeholder(match.group(0), line_number, column)))
            parts.append(token)
            column += len(token)
            position = match.end()
        parts.append(text[position:])
        return "".join(parts)

    def callouts(self, line: str, line_number: int, patterns: CalloutPatterns) -> str:
        run = patterns.run.search(line)
        if run is None:
            return self.placeholders(line, line_number, 0)

        shielded = self.placeholders(line[: run.start()], line_number, 0)
        callouts: list[Callout] = []
        trailing: list[str] = []
        column: Optional[int] = None
        for mark in patterns.mark.finditer(line, run.start()):
            if mark.group("escape"):
                # Escaped marks stay as text without the backslash
                literal = mark.group("space") + mark.group("guard") + line[mark.end("escape") : mark.end()]
                if column is None:
                    shielded += literal
                else:
                    trailing.append(literal)
                continue
            if column is None:
                column = len(shielded)
            callouts.append(self.callout(mark))

        if column is None:
            return shielded

        token = self.token(SENTINEL_KIND_CALLOUT)
        self.sentinels.append(Sentinel(token, CalloutMark(line_number, column, tuple(callouts))))
        return shielded + token + "".join(trailing)

    def callout(self, mark: re.Match[str]) -> Callout:
        number_text = mark.group("number")
        if number_text == ".":
            self.autonum += 1
            number = self.autonum
        else:
            number = int(number_text)
        if mark.group("xml"):
            return Callout(number=number, guard=None, xml=True)
        return Callout(number=number, guard=mark.group("guard") or None)


def shield_source(
    block: SourceBlock,
    *,
    preserve_placeholders: bool = False,
    nonce: Optional[str] = None,
) -> ShieldedSource:
    """Replace annotations in ``block`` with sentinels.

    Parameters
    ----------
    block : SourceBlock
        Block to shield. Callout marks are only extracted when
        ``block.callouts`` is set.
    preserve_placeholders : bool, default False
        Leave passthrough placeholders in the text (for adapters that do not
        mangle them, and for output that is only escaped).
    nonce : str, optional
        Fixed nonce; a random one is generated when omitted.

    Returns
    -------
    ShieldedSource
        The shielded lines and their sentinels; the line count always equals
        ``block.line_count``.

    Examples
    --------
    >>> shielded = shield_source(SourceBlock.from_text("puts 1 # <1>"), nonce="QWERTYUI")
    >>> shielded.lines
    ('puts 1 SRCLTQWERTYUICAZ',)

    """
    if nonce is None:
        nonce = generate_nonce(block.source)
    shield = _Shield(nonce, preserve_placeholders)
    patterns = callout_patterns(block.line_comment) if block.callouts else None

    lines: list[str] = []
    for line_number, line in enumerate(block.lines, start=1):
        if patterns is not None and ">" in line:
            lines.append(shield.callouts(line, line_number, patterns))
        else:
            lines.append(shield.placeholders(line, line_number, 0))

    result = ShieldedSource(lines=tuple(lines), sentinels=tuple(shield.sentinels), nonce=nonce)
    if result.sentinels:
        logger.debug(
            f"Shielded {len(result.callout_marks)} callout mark(s) and "
            f"{len(result.placeholders)} placeholder(s) in {block.line_count} line(s)"
        )
    return result
