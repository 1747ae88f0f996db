#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/ranges.py
"""Parser for the line selection mini-language used by the ``highlight`` attribute.

A specification is a list of terms separated by ``,`` or ``;``:

- ``N`` selects a single line
- ``A-B`` or ``A..B`` selects an inclusive range
- ``A..`` or ``A-`` selects from A to the last line
- a leading ``!`` turns any of the above into an exclusion

Terms are applied left to right, so an exclusion only removes lines that
earlier terms selected and a later term can select them again.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from srclight.exceptions import LineRangeError

logger = logging.getLogger(__name__)

_TERM_SEPARATOR = re.compile(r"[,;]")
_TERM_PATTERN = re.compile(r"^(?P<exclude>!)?(?P<start>\d+)(?:(?P<op>\.\.|-)(?P<end>\d+)?)?$")
_WHITESPACE = re.compile(r"\s+")


def _term_lines(term: str, spec: str, line_count: int) -> tuple[bool, range]:
    term = term.strip()
    match = _TERM_PATTERN.match(_WHITESPACE.sub("", term))
    if match is None:
        raise LineRangeError(f"Invalid line range term {term!r} in {spec!r}", term=term, parameter_value=spec)

    start = int(match.group("start"))
    if match.group("op") is None:
        end = start
    elif match.group("end") is None:
        end = line_count
    else:
        end = int(match.group("end"))
        if end < start:
            raise LineRangeError(
                f"Line range {term!r} in {spec!r} ends before it starts", term=term, parameter_value=spec
            )

    if start < 1 or (match.group("end") is not None and end < 1):
        raise LineRangeError(f"Line numbers start at 1; got {term!r} in {spec!r}", term=term, parameter_value=spec)

    return match.group("exclude") is not None, range(max(start, 1), min(end, line_count) + 1)


def parse_line_ranges(spec: Optional[str], line_count: int) -> frozenset[int]:
    """Parse a line selection specification into a set of 1-based line indices.

    Parameters
    ----------
    spec : str or None
        The specification, e.g. ``"1,4-6"`` or ``"1;4..;!7"``. None or an
        empty string selects nothing.
    line_count : int
        Number of lines in the block; the result is clipped to ``1..line_count``.

    Returns
    -------
    frozenset of int
        Selected line indices, relative to the block (never to displayed numbers)

    Raises
    ------
    LineRangeError
        If a term is not a number, a range or an exclusion of either, if it
        refers to line 0, or if a range ends before it starts.

    Examples
    --------
    >>> sorted(parse_line_ranges("1,4-6", 10))
    [1, 4, 5, 6]
    >>> sorted(parse_line_ranges("1;4..;!7", 6))
    [1, 4, 5, 6]
    >>> sorted(parse_line_ranges("1..5;!2..4;3", 10))
    [1, 3, 5]

    """
    if not spec:
        return frozenset()

    selected: set[int] = set()
    for term in _TERM_SEPARATOR.split(spec):
        if not term.strip():
            continue
        exclude, lines = _term_lines(term, spec, line_count)
        if exclude:
            selected.difference_update(lines)
        else:
            selected.update(lines)

    logger.debug(f"Line selection {spec!r} over {line_count} lines -> {sorted(selected)}")
    return frozenset(selected)
