#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/linenums.py
"""Line numbers and line emphasis for highlighted blocks.

The formatter works on one markup string per source line and knows nothing
about the engine that produced it. Emphasized lines are selected by 1-based
source index; the starting line number only affects the numbers displayed,
and this module is the only place where one is turned into the other.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from srclight.constants import DEFAULT_START_LINE_NUMBER, LINENUMS_MODES, LinenumsMode

logger = logging.getLogger(__name__)

TABLE_OPEN = '<table class="linenotable"><tbody><tr><td class="linenos gl"><pre class="lineno">'
TABLE_MIDDLE = '</pre></td><td class="code"><pre>'
TABLE_CLOSE = "</pre></td></tr></tbody></table>"


class LineNumberFormatter:
    """Lay out rendered lines with optional numbering and emphasis.

    Parameters
    ----------
    mode : {"table", "inline"} or None, default None
        ``table`` puts numbers in a separate gutter column, ``inline`` writes
        them in front of each line, None disables numbering.
    start : int, default 1
        Displayed number of the first line.
    highlight_lines : frozenset of int, optional
        1-based source indices of lines to emphasize.

    Examples
    --------
    >>> LineNumberFormatter("table", start=9).format(["a", "b"])
    '<table class="linenotable"><tbody><tr><td class="linenos gl"><pre class="lineno"> 9\\n10\\n</pre></td><td class="code"><pre>a\\nb\\n</pre></td></tr></tbody></table>'

    """

    def __init__(
        self,
        mode: Optional[LinenumsMode] = None,
        start: int = DEFAULT_START_LINE_NUMBER,
        highlight_lines: frozenset[int] = frozenset(),
    ):
        """Initialize the formatter."""
        if mode is not None and mode not in LINENUMS_MODES:
            raise ValueError(f"mode must be one of {LINENUMS_MODES} or None, got {mode!r}")
        if start < 1:
            raise ValueError(f"start must be at least 1, got {start}")
        self.mode = mode
        self.start = start
        self.highlight_lines = frozenset(highlight_lines)

    def display_number(self, index: int) -> int:
        """Displayed number for a 1-based source line index."""
        return self.start + index - 1

    def _emphasize(self, index: int, line: str, terminate: bool) -> str:
        if index in self.highlight_lines:
            return f'<span class="hll">{line}\n</span>'
        return f"{line}\n" if terminate else line

    def format(self, lines: Sequence[str]) -> str:
        """Render the block body.

        Parameters
        ----------
        lines : sequence of str
            Markup for each source line, without terminators

        Returns
        -------
        str
            Body markup; empty for a block without lines

        """
        if not lines:
            return ""

        count = len(lines)
        width = len(str(self.display_number(count)))

        if self.mode == "table":
            gutter = []
            for index in range(1, count + 1):
                number = f"{self.display_number(index):>{width}}"
                if index in self.highlight_lines:
                    number = f'<strong class="highlighted">{number}</strong>'
                gutter.append(f"{number}\n")
            code = "".join(self._emphasize(index, line, True) for index, line in enumerate(lines, start=1))
            return f"{TABLE_OPEN}{''.join(gutter)}{TABLE_MIDDLE}{code}{TABLE_CLOSE}"

        if self.mode == "inline":
            lines = [
                f'<span class="lineno">{self.display_number(index):>{width}} </span>{line}'
                for index, line in enumerate(lines, start=1)
            ]

        return "".join(self._emphasize(index, line, index < count) for index, line in enumerate(lines, start=1))
