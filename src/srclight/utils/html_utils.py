"""HTML-related utility helpers."""

from __future__ import annotations

from html import escape as _html_escape
from typing import Mapping, Optional


def escape_html(text: str, *, enabled: bool = True, quote: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return _html_escape(text, quote=quote)


def escape_text(text: str) -> str:
    """Escape character data (``&``, ``<`` and ``>`` only).

    Quotes are left alone so that escaped source text reads the same as what
    a highlighting engine produces for text outside attribute values.
    """
    return _html_escape(text, quote=False)


def format_attributes(attributes: Mapping[str, Optional[str]]) -> str:
    """Render an attribute mapping as a string of ``name="value"`` pairs.

    Attributes whose value is None are skipped. Values are escaped; the
    returned string starts with a space unless it is empty.

    Examples
    --------
        >>> format_attributes({"class": "highlight", "lang": None, "data-lang": "a&b"})
        ' class="highlight" data-lang="a&amp;b"'

    """
    parts = [f' {name}="{escape_html(value)}"' for name, value in attributes.items() if value is not None]
    return "".join(parts)
