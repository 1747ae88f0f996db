"""Unit tests for line numbering and line emphasis."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import pytest

from srclight.linenums import TABLE_CLOSE, TABLE_MIDDLE, TABLE_OPEN, LineNumberFormatter


@pytest.mark.unit
class TestUnnumbered:
    """Test output without line numbers."""

    def test_lines_joined_without_trailing_newline(self):
        assert LineNumberFormatter().format(["a", "b", "c"]) == "a\nb\nc"

    def test_emphasized_line(self):
        formatter = LineNumberFormatter(highlight_lines=frozenset({2}))
        assert formatter.format(["a", "b", "c"]) == 'a\n<span class="hll">b\n</span>c'

    def test_emphasized_last_line_keeps_its_terminator_inside_span(self):
        formatter = LineNumberFormatter(highlight_lines=frozenset({2}))
        assert formatter.format(["a", "b"]) == 'a\n<span class="hll">b\n</span>'

    def test_empty_block(self):
        assert LineNumberFormatter("table").format([]) == ""
        assert LineNumberFormatter().format([]) == ""


@pytest.mark.unit
class TestTableMode:
    """Test the gutter table layout."""

    def test_start_offset_pads_numbers(self):
        body = LineNumberFormatter("table", start=9).format(["a", "b"])
        assert body == f"{TABLE_OPEN} 9\n10\n{TABLE_MIDDLE}a\nb\n{TABLE_CLOSE}"

    def test_emphasis_uses_source_index_not_displayed_number(self):
        formatter = LineNumberFormatter("table", start=9, highlight_lines=frozenset({1}))
        body = formatter.format(["a", "b"])

        assert '<strong class="highlighted"> 9</strong>\n10\n' in body
        assert f'{TABLE_MIDDLE}<span class="hll">a\n</span>b\n' in body

    def test_selection_beyond_block_is_ignored(self):
        formatter = LineNumberFormatter("table", highlight_lines=frozenset({5}))
        assert "hll" not in formatter.format(["a"])


@pytest.mark.unit
class TestInlineMode:
    """Test numbers written in front of each line."""

    def test_inline_numbers(self):
        body = LineNumberFormatter("inline").format(["a", "b"])
        assert body == '<span class="lineno">1 </span>a\n<span class="lineno">2 </span>b'

    def test_inline_width_follows_last_displayed_number(self):
        body = LineNumberFormatter("inline", start=99).format(["a", "b"])
        assert body.startswith('<span class="lineno"> 99 </span>a\n<span class="lineno">100 </span>b')

    def test_inline_emphasis_wraps_number(self):
        formatter = LineNumberFormatter("inline", highlight_lines=frozenset({1}))
        assert formatter.format(["a"]) == '<span class="hll"><span class="lineno">1 </span>a\n</span>'


@pytest.mark.unit
class TestValidation:
    """Test constructor validation."""

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            LineNumberFormatter("gutter")

    def test_start_below_one(self):
        with pytest.raises(ValueError):
            LineNumberFormatter("table", start=0)

    def test_display_number(self):
        assert LineNumberFormatter("table", start=5).display_number(3) == 7
