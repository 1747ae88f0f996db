#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/srclight/stylesheets.py
"""Per-document stylesheet and asset resolution.

One ``StylesheetManager`` lives for the duration of a document conversion.
It records which styles the converted blocks depend on and turns that into
docinfo markup: the adapter's own head/footer assets plus, for adapters that
emit CSS classes, either an embedded ``<style>`` element or a link to an
external stylesheet. Linking never reads the stylesheet.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from srclight.constants import DocinfoLocation
from srclight.exceptions import OutputWriteError
from srclight.highlighters.base import validate_docinfo_location
from srclight.utils.html_utils import escape_html

if TYPE_CHECKING:
    from srclight.highlighters.base import BaseHighlighter
    from srclight.options import DocumentOptions, HighlightOptions

logger = logging.getLogger(__name__)

# Stylesheets for class-based token markup are placed with the other footer assets
STYLESHEET_LOCATION: DocinfoLocation = "footer"


class StylesheetManager:
    """Track and emit the stylesheets a document needs.

    Parameters
    ----------
    adapter : BaseHighlighter or None
        The document's highlighter; None when the document is not highlighted.
    options : DocumentOptions
        Document settings (``linkcss``, ``stylesdir``, ...)

    """

    def __init__(self, adapter: Optional[BaseHighlighter], options: DocumentOptions):
        """Initialize an empty manager for one document."""
        self.adapter = adapter
        self.options = options
        self._cache: dict[Optional[str], Optional[str]] = {}
        self._styles: dict[Optional[str], None] = {}

    @property
    def styles(self) -> list[Optional[str]]:
        """Requested style names, in the order blocks first needed them."""
        return list(self._styles)

    @property
    def requires_stylesheet(self) -> bool:
        return bool(self._styles)

    def track(self, options: HighlightOptions) -> None:
        """Record the stylesheet needed by a block rendered with ``options``."""
        if self.adapter is not None and self.adapter.requires_stylesheet(options):
            if options.style not in self._styles:
                logger.debug(f"Block requires {self.adapter.registered_name} style '{options.style or 'default'}'")
            self._styles.setdefault(options.style, None)

    def stylesheet(self, style: Optional[str] = None) -> Optional[str]:
        """Return CSS for ``style``, querying the adapter at most once per style.

        Unknown style names resolve to the adapter's default style.
        """
        if self.adapter is None:
            return None
        if style not in self._cache:
            self._cache[style] = self.adapter.read_stylesheet(style)
        return self._cache[style]

    def stylesheet_href(self, style: Optional[str] = None) -> str:
        if self.adapter is None:
            raise ValueError("Document has no highlighter; there is no stylesheet to link")
        basename = self.adapter.stylesheet_basename(style)
        stylesdir = self.options.stylesdir.rstrip("/")
        return f"{stylesdir}/{basename}" if stylesdir else basename

    def docinfo(self, location: DocinfoLocation) -> str:
        """Return the markup to inject at ``location``.

        Parameters
        ----------
        location : {"head", "footer"}
            Injection point

        Returns
        -------
        str
            Adapter assets followed by the required stylesheets, one element
            per line; empty when nothing is needed.

        """
        validate_docinfo_location(location)
        if self.adapter is None:
            return ""

        parts = []
        adapter_docinfo = self.adapter.docinfo(location, self.options)
        if adapter_docinfo:
            parts.append(adapter_docinfo)

        if location == STYLESHEET_LOCATION:
            for style in self._styles:
                if self.options.linkcss:
                    parts.append(f'<link rel="stylesheet" href="{escape_html(self.stylesheet_href(style))}">')
                else:
                    css = self.stylesheet(style)
                    if css:
                        parts.append(f"<style>\n{css.rstrip()}\n</style>")

        return "\n".join(parts)

    def write_stylesheets(self, to_dir: Union[str, Path]) -> list[Path]:
        """Write every required stylesheet into ``to_dir``.

        Parameters
        ----------
        to_dir : str or Path
            Target directory; created when missing.

        Returns
        -------
        list of Path
            Paths of the written files

        Raises
        ------
        OutputWriteError
            If a directory or file cannot be written

        """
        if self.adapter is None or not self._styles:
            return []

        target_dir = Path(to_dir)
        written = []
        for style in self._styles:
            css = self.stylesheet(style)
            if not css:
                continue
            path = target_dir / self.adapter.stylesheet_basename(style)
            try:
                target_dir.mkdir(parents=True, exist_ok=True)
                path.write_text(css if css.endswith("\n") else f"{css}\n", encoding="utf-8")
            except OSError as e:
                raise OutputWriteError(str(path), original_error=e) from e
            logger.info(f"Wrote stylesheet {path}")
            written.append(path)
        return written
