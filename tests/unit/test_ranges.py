"""Unit tests for the line selection parser."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import pytest
from hypothesis import given
from hypothesis import strategies as st

from srclight.exceptions import LineRangeError, ValidationError
from srclight.ranges import parse_line_ranges


@pytest.mark.unit
class TestParseLineRanges:
    """Test parsing of the highlight attribute."""

    def test_empty_specification_selects_nothing(self):
        assert parse_line_ranges(None, 10) == frozenset()
        assert parse_line_ranges("", 10) == frozenset()

    def test_single_lines_and_ranges(self):
        assert parse_line_ranges("1,4-6", 10) == {1, 4, 5, 6}

    def test_dot_range_syntax(self):
        assert parse_line_ranges("2..3", 10) == {2, 3}

    def test_open_ended_range_runs_to_last_line(self):
        assert parse_line_ranges("4..", 6) == {4, 5, 6}
        assert parse_line_ranges("4-", 6) == {4, 5, 6}

    def test_semicolon_and_comma_are_equivalent(self):
        assert parse_line_ranges("1;3;5", 10) == parse_line_ranges("1,3,5", 10)

    def test_exclusion_removes_earlier_selection(self):
        assert parse_line_ranges("1;4..;!7", 10) == {1, 4, 5, 6, 8, 9, 10}

    def test_exclusion_of_unselected_line_is_noop(self):
        assert parse_line_ranges("1;4..;!7", 6) == {1, 4, 5, 6}

    def test_terms_apply_left_to_right(self):
        """A later term can select a line an earlier exclusion removed."""
        assert parse_line_ranges("1..5;!2..4;3", 10) == {1, 3, 5}
        assert parse_line_ranges("3;1..5;!2..4", 10) == {1, 5}

    def test_result_is_clipped_to_line_count(self):
        assert parse_line_ranges("2..20", 4) == {2, 3, 4}
        assert parse_line_ranges("7", 4) == frozenset()

    def test_whitespace_and_empty_terms_are_ignored(self):
        assert parse_line_ranges(" 1 , ,2 - 3 ;", 10) == {1, 2, 3}

    @pytest.mark.parametrize("spec,term", [("1,abc", "abc"), ("x..3", "x..3"), ("1,2-a", "2-a"), ("!", "!")])
    def test_malformed_term_raises_with_term(self, spec, term):
        with pytest.raises(LineRangeError) as exc_info:
            parse_line_ranges(spec, 10)

        assert exc_info.value.term == term
        assert exc_info.value.parameter_value == spec

    def test_line_zero_is_rejected(self):
        with pytest.raises(LineRangeError) as exc_info:
            parse_line_ranges("0", 10)
        assert exc_info.value.term == "0"

    def test_reversed_range_is_rejected(self):
        with pytest.raises(LineRangeError, match="ends before it starts"):
            parse_line_ranges("5-2", 10)

    def test_range_error_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            parse_line_ranges("nope", 3)

    @given(st.integers(min_value=1, max_value=50), st.integers(min_value=0, max_value=60))
    def test_selection_never_leaves_block(self, start, line_count):
        """Whatever is selected lies within 1..line_count."""
        selected = parse_line_ranges(f"{start}..", line_count)
        assert all(1 <= line <= line_count for line in selected)
        assert selected == frozenset(range(start, line_count + 1))
