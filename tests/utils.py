"""Test utilities for the srclight test suite.

Helpers for temporary directories and for taking rendered HTML apart with
BeautifulSoup.
"""

import shutil
import tempfile
from pathlib import Path

from bs4 import BeautifulSoup


def create_test_temp_dir() -> Path:
    """Create a temporary directory for a test."""
    return Path(tempfile.mkdtemp(prefix="srclight_test_"))


def cleanup_test_dir(path: Path) -> None:
    """Remove a directory created by :func:`create_test_temp_dir`."""
    shutil.rmtree(path, ignore_errors=True)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def code_lines(html: str) -> list[str]:
    """Return the markup of each line inside the ``code`` element."""
    start = html.index(">", html.index("<code")) + 1
    end = html.rindex("</code>")
    return html[start:end].split("\n")


def conum_texts(html: str) -> list[str]:
    """Return the text of every callout bubble, in document order."""
    return [b.get_text() for b in parse_html(html).select("b.conum")]


def assert_well_formed_pre(html: str) -> None:
    """Assert ``html`` is a single ``pre`` element with one ``code`` child."""
    soup = parse_html(html)
    pre_elements = soup.find_all("pre", recursive=False)
    assert len(pre_elements) == 1, f"Expected one top-level pre element in {html!r}"
    assert pre_elements[0].find("code", recursive=False) is not None
