"""Unit tests for the source block converter."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import pytest

from srclight.blocks import RenderedFragment, SourceBlock
from srclight.constants import PASS_END, PASS_START
from srclight.converter import SourceBlockConverter, split_language
from srclight.document import DocumentContext
from srclight.exceptions import LineRangeError, RenderingError
from srclight.highlighters.base import BaseHighlighter
from utils import assert_well_formed_pre, parse_html


def _converter(registry, backend="html5", **attributes):
    return SourceBlockConverter(DocumentContext.create(attributes, backend=backend, registry=registry))


class _LineEatingHighlighter(BaseHighlighter):
    name = "line-eater"

    def supports_highlighting(self) -> bool:
        return True

    def format(self, block, source, language, options):
        return RenderedFragment(source.replace("\n", " "), trailing_newline=False)


@pytest.mark.unit
class TestHtmlConversion:
    """Test HTML output for each adapter kind."""

    def test_pygments_container(self, registry):
        converter = _converter(registry, **{"source-highlighter": "pygments"})
        html = converter.convert_source(SourceBlock.from_text("puts 1", "ruby"))

        assert_well_formed_pre(html)
        assert html.startswith('<pre class="pygments highlight"><code class="language-ruby" data-lang="ruby">')
        assert html.endswith("</code></pre>")
        assert "\n" not in html

    def test_highlight_range_is_parsed_for_pygments(self, registry):
        converter = _converter(registry, **{"source-highlighter": "pygments"})
        block = SourceBlock.from_text("a\nb\nc", "text", attributes={"highlight": "2"})

        html = converter.convert_source(block)

        assert [span.get_text() for span in parse_html(html).select("span.hll")] == ["b\n"]

    def test_malformed_range_propagates(self, registry):
        converter = _converter(registry, **{"source-highlighter": "pygments"})
        block = SourceBlock.from_text("a\nb", "text", attributes={"highlight": "1,x"})

        with pytest.raises(LineRangeError) as exc_info:
            converter.convert_source(block)

        assert exc_info.value.term == "x"

    @pytest.mark.parametrize("attributes", [{}, {"source-highlighter": "prettify"}])
    def test_range_is_ignored_without_server_side_highlighting(self, registry, attributes):
        converter = _converter(registry, **attributes)
        block = SourceBlock.from_text("a\nb", "text", attributes={"highlight": "1,x"})

        html = converter.convert_source(block)

        assert "hll" not in html

    def test_no_highlighter_renders_plain_text(self, registry):
        converter = _converter(registry)
        html = converter.convert_source(SourceBlock.from_text("a < b # <1>", "ruby"))

        assert html == (
            '<pre class="highlight"><code class="language-ruby" data-lang="ruby">'
            'a &lt; b # <b class="conum">(1)</b></code></pre>'
        )

    def test_no_highlighter_and_no_language(self, registry):
        html = _converter(registry).convert_source(SourceBlock.from_text("x"))
        assert html == '<pre class="highlight"><code>x</code></pre>'

    def test_unknown_highlighter_renders_plain_text(self, registry):
        converter = _converter(registry, **{"source-highlighter": "coderay"})
        html = converter.convert_source(SourceBlock.from_text("x", "ruby"))

        assert html == '<pre class="highlight"><code class="language-ruby" data-lang="ruby">x</code></pre>'

    def test_pass_through_escapes_and_renders_callouts(self, registry):
        converter = _converter(registry, **{"source-highlighter": "highlight.js"})
        block = SourceBlock.from_text("a < b // <1>", "java", options=["linenums"])

        html = converter.convert_source(block)

        assert html == (
            '<pre class="highlightjs highlight"><code class="language-java hljs" data-lang="java">'
            'a &lt; b // <b class="conum">(1)</b></code></pre>'
        )

    def test_nowrap_option_and_prewrap_attribute(self, registry):
        converter = _converter(registry, **{"source-highlighter": "pygments"})
        html = converter.convert_source(SourceBlock.from_text("x", "text", options=["nowrap"]))
        assert html.startswith('<pre class="pygments highlight nowrap">')

        converter = _converter(registry, **{"source-highlighter": "pygments", "prewrap": None})
        html = converter.convert_source(SourceBlock.from_text("x", "text"))
        assert html.startswith('<pre class="pygments highlight nowrap">')

    def test_source_language_default(self, registry):
        converter = _converter(registry, **{"source-language": "python"})
        assert 'data-lang="python"' in converter.convert_source(SourceBlock.from_text("x"))

    def test_source_linenums_option(self, registry):
        converter = _converter(registry, **{"source-highlighter": "pygments", "source-linenums-option": ""})
        html = converter.convert_source(SourceBlock.from_text("x", "text"))
        assert '<table class="linenotable">' in html

    def test_language_options_reach_the_lexer(self, registry):
        converter = _converter(registry, **{"source-highlighter": "pygments"})
        block = SourceBlock.from_text("$> srclight --version", "console?prompt=$> ")

        soup = parse_html(converter.convert_source(block))
        code = soup.find("code")

        assert code["data-lang"] == "console"
        assert code["class"] == ["language-console"]
        assert soup.select_one("span.tok-gp").get_text() == "$> "

    def test_language_options_are_dropped_by_pass_through_adapters(self, registry):
        converter = _converter(registry, **{"source-highlighter": "highlight.js"})
        html = converter.convert_source(SourceBlock.from_text("$ ls", "console?prompt=$"))

        assert '<code class="language-console hljs" data-lang="console">' in html
        assert "?" not in html

    def test_table_layout_sits_inside_the_container(self, registry):
        converter = _converter(registry, **{"source-highlighter": "pygments"})
        block = SourceBlock.from_text("puts 1\nputs 2", "ruby", attributes={"start": "5"}, options=["linenums"])

        soup = parse_html(converter.convert_source(block))

        assert len(soup.select("pre.pygments > code > table.linenotable")) == 1
        assert soup.select_one("table.linenotable td.linenos pre.lineno").get_text() == "5\n6\n"
        assert len(soup.select("table.linenotable td.code pre:not([class])")) == 1

    def test_table_layout_with_inline_styles_styles_only_the_container(self, registry):
        converter = _converter(registry, **{"source-highlighter": "pygments", "pygments-css": "inline"})
        block = SourceBlock.from_text("puts 1", "ruby", options=["linenums"])

        soup = parse_html(converter.convert_source(block))

        assert len(soup.find_all("pre")) == 3
        assert len(soup.select("pre:not([style])")) == 2
        assert soup.find("pre").get("style")

    def test_placeholders_survive_highlighting(self, registry):
        converter = _converter(registry, **{"source-highlighter": "pygments"})
        placeholder = f"{PASS_START}0{PASS_END}"

        html = converter.convert_source(SourceBlock.from_text(f"x = {placeholder}", "python"))

        assert html.count(placeholder) == 1

    def test_line_count_mismatch_raises(self, registry):
        registry.register("line-eater", (), _LineEatingHighlighter())
        converter = _converter(registry, **{"source-highlighter": "line-eater"})

        with pytest.raises(RenderingError, match="returned 1 line"):
            converter.convert_source(SourceBlock.from_text("a\nb", "text"))

    def test_stylesheet_tracked_only_when_highlighting(self, registry):
        converter = _converter(registry, **{"source-highlighter": "pygments"})
        assert converter.docinfo("footer") == ""

        converter.convert_source(SourceBlock.from_text("x", "text"))
        assert converter.docinfo("footer").startswith("<style>\npre.pygments")


@pytest.mark.unit
class TestDocBookConversion:
    """Test DocBook output."""

    def test_programlisting(self, registry):
        converter = _converter(registry, backend="docbook5", **{"source-highlighter": "pygments"})
        xml = converter.convert_source(SourceBlock.from_text("a < b # <1>", "ruby"))

        assert xml == (
            '<programlisting language="ruby" linenumbering="unnumbered">a &lt; b <co xml:id="CO1-1"/></programlisting>'
        )

    def test_numbered_with_start(self, registry):
        converter = _converter(registry, backend="docbook5")
        block = SourceBlock.from_text("x", "ruby", attributes={"start": "3"}, options=["linenums"])

        xml = converter.convert_source(block)

        assert 'linenumbering="numbered"' in xml
        assert 'startinglinenumber="3"' in xml

    def test_start_without_numbering_is_omitted(self, registry):
        converter = _converter(registry, backend="docbook5")
        block = SourceBlock.from_text("x", "ruby", attributes={"start": "3"})
        assert "startinglinenumber" not in converter.convert_source(block)

    def test_screen_without_language(self, registry):
        converter = _converter(registry, backend="docbook5")
        assert converter.convert_source(SourceBlock.from_text("ls -l")) == "<screen>ls -l</screen>"

    def test_callout_lists_are_numbered_per_block(self, registry):
        converter = _converter(registry, backend="docbook5")
        converter.convert_source(SourceBlock.from_text("plain", "ruby"))
        converter.convert_source(SourceBlock.from_text("a # <1>", "ruby"))
        xml = converter.convert_source(SourceBlock.from_text("b # <1> <2>", "ruby"))

        assert '<co xml:id="CO2-1"/> <co xml:id="CO2-2"/>' in xml

    def test_formalpara_for_titled_block(self, registry):
        converter = _converter(registry, backend="docbook5")
        block = SourceBlock.from_text("x", "ruby", id="ex", title="Example")

        assert converter.convert(block) == (
            '<formalpara xml:id="ex">\n<title>Example</title>\n<para>\n'
            '<programlisting language="ruby" linenumbering="unnumbered">x</programlisting>\n'
            "</para>\n</formalpara>"
        )


@pytest.mark.unit
class TestListingBlock:
    """Test the HTML listing wrapper."""

    def test_listing_markup(self, registry):
        converter = _converter(registry)
        block = SourceBlock.from_text("x", "ruby", id="ex", title="Example", role="wide")

        assert converter.convert(block) == (
            '<div id="ex" class="listingblock wide">\n'
            '<div class="title">Example</div>\n'
            '<div class="content">\n'
            '<pre class="highlight"><code class="language-ruby" data-lang="ruby">x</code></pre>\n'
            "</div>\n"
            "</div>"
        )

    def test_minimal_listing(self, registry):
        html = _converter(registry).convert(SourceBlock.from_text("x"))
        assert html.startswith('<div class="listingblock">\n<div class="content">\n<pre')


@pytest.mark.unit
class TestSplitLanguage:
    """Test separating language options from the language name."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, (None, ())),
            ("ruby", ("ruby", ())),
            ("console?prompt=$> ", ("console", (("prompt", "$> "),))),
            ("php?startinline=false&mixed", ("php", (("startinline", "false"), ("mixed", "")))),
            ("?prompt=%", (None, (("prompt", "%"),))),
        ],
    )
    def test_split(self, value, expected):
        assert split_language(value) == expected
