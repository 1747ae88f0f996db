"""Unit tests for the Pygments adapter."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from unittest.mock import patch

import pytest

from srclight.blocks import SourceBlock
from srclight.exceptions import DependencyError
from srclight.highlighters.pygments import PygmentsHighlighter, resolve_style
from srclight.options import HighlightOptions
from utils import parse_html


def _format(text, language="python", **options):
    block = SourceBlock.from_text(text, language)
    return PygmentsHighlighter().format(block, block.source, language, HighlightOptions(**options))


@pytest.mark.unit
class TestPygmentsFormat:
    """Test tokenization of shielded source."""

    def test_supports_highlighting(self):
        assert PygmentsHighlighter().supports_highlighting() is True

    def test_tokens_use_prefixed_classes(self):
        fragment = _format("def hello():\n    return 1")

        assert fragment.trailing_newline is True
        assert fragment.lines[0].startswith('<span class="tok-k">def</span>')
        assert len(fragment.lines) == 2

    def test_trailing_empty_line_is_kept(self):
        block = SourceBlock.from_text("x = 1\n\n", "python")
        fragment = PygmentsHighlighter().format(block, block.source, "python", HighlightOptions())

        assert block.line_count == 2
        assert len(fragment.lines) == 2
        assert fragment.lines[1] == ""

    def test_empty_block_returns_empty_fragment(self):
        fragment = _format("")

        assert fragment.content == ""
        assert fragment.trailing_newline is False

    def test_unknown_language_is_plain_text(self):
        fragment = _format("a < b", "not-a-language")
        assert fragment.content == "a &lt; b\n"

    def test_missing_language_is_plain_text(self):
        assert _format("x", None).content == "x\n"

    def test_inline_styles(self):
        fragment = _format("def f(): pass", css_mode="inline")
        spans = parse_html(fragment.content).find_all("span")

        assert spans
        assert all(span.get("style") for span in spans)
        assert "class=" not in fragment.content

    def test_sentinel_survives_as_one_token(self):
        token = "SRCLTQWERTYUICAZ"
        fragment = _format(f"x = 1  {token}")
        assert fragment.content.count(token) == 1

    @pytest.mark.parametrize(
        "language,text",
        [
            ("json", '{"name": "srclight" SRCLTQWERTYUICAZ}'),
            ("terraform", 'name = "srclight" SRCLTQWERTYUICAZ'),
        ],
    )
    def test_sentinel_survives_lexers_that_split_numbers(self, language, text):
        fragment = _format(text, language)
        assert fragment.content.count("SRCLTQWERTYUICAZ") == 1

    def test_php_starts_inline_unless_mixed(self):
        adapter = PygmentsHighlighter()

        assert adapter._lexer("php", HighlightOptions()).startinline is True
        assert adapter._lexer("php", HighlightOptions(mixed=True)).startinline is False

    def test_missing_dependency_raises(self):
        block = SourceBlock.from_text("x", "python")
        with patch("importlib.import_module", side_effect=ImportError("no pygments")):
            with pytest.raises(DependencyError, match="pygments"):
                PygmentsHighlighter().format(block, block.source, "python", HighlightOptions())


@pytest.mark.unit
class TestPygmentsStylesheets:
    """Test style resolution and generated CSS."""

    def test_unknown_style_falls_back_to_default(self):
        adapter = PygmentsHighlighter()

        assert resolve_style("no-such-style") == "default"
        assert adapter.read_stylesheet("no-such-style") == adapter.read_stylesheet("default")
        assert adapter.read_stylesheet(None) == adapter.read_stylesheet("default")

    def test_known_style(self):
        assert resolve_style("monokai") == "monokai"
        assert PygmentsHighlighter().read_stylesheet("monokai") != PygmentsHighlighter().read_stylesheet()

    def test_stylesheet_is_scoped(self):
        css = PygmentsHighlighter().read_stylesheet()

        assert css.startswith("pre.pygments")
        assert "pre.pygments .tok-k" in css

    def test_base_style(self):
        assert "background" in PygmentsHighlighter().base_style("default")

    def test_requires_stylesheet_only_for_classes(self):
        adapter = PygmentsHighlighter()

        assert adapter.requires_stylesheet(HighlightOptions()) is True
        assert adapter.requires_stylesheet(HighlightOptions(css_mode="style")) is False

    def test_inline_mode_styles_container(self):
        adapter = PygmentsHighlighter()
        block = SourceBlock.from_text("x", "python")

        assert adapter.pre_attributes(block, "python", HighlightOptions()) == {}
        assert "background" in adapter.pre_attributes(block, "python", HighlightOptions(css_mode="inline"))["style"]

    def test_stylesheet_basename(self):
        adapter = PygmentsHighlighter()

        assert adapter.stylesheet_basename() == "pygments-default.css"
        assert adapter.stylesheet_basename("monokai") == "pygments-monokai.css"
