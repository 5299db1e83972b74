"""Tests for FocusViewBuilder."""

import pytest

from logfocus.core.errors import InvalidPatternError
from logfocus.core.focus import FocusViewBuilder
from logfocus.models.filter_def import LogFilter


def make_filter(pattern, shown=True, highlighted=True):
    return LogFilter(pattern=pattern, color="#00ff00", highlighted=highlighted, shown=shown)


class TestBuild:
    """Tests for focus view derivation."""

    def test_keeps_matching_lines_in_order(self):
        builder = FocusViewBuilder()
        lines = ["a", "b ERROR", "c", "d ERROR"]

        result = builder.build(lines, [make_filter("ERROR")])

        assert result == ["b ERROR", "d ERROR"]

    def test_no_shown_filters_gives_empty_view(self):
        builder = FocusViewBuilder()
        lines = ["a", "b ERROR", "c", "d ERROR"]

        assert builder.build(lines, [make_filter("ERROR", shown=False)]) == []
        assert builder.build(lines, []) == []

    def test_union_of_shown_filters(self):
        builder = FocusViewBuilder()
        lines = ["INFO a", "WARN b", "ERROR c", "DEBUG d"]
        filters = [make_filter("ERROR"), make_filter("WARN"), make_filter("DEBUG", shown=False)]

        assert builder.build(lines, filters) == ["WARN b", "ERROR c"]

    def test_line_matching_two_filters_kept_once(self):
        builder = FocusViewBuilder()
        lines = ["ERROR disk", "INFO"]
        filters = [make_filter("ERROR"), make_filter("disk")]
        assert builder.build(lines, filters) == ["ERROR disk"]

    def test_duplicate_lines_kept(self):
        builder = FocusViewBuilder()
        lines = ["ERROR", "ERROR", "INFO"]
        assert builder.build(lines, [make_filter("ERROR")]) == ["ERROR", "ERROR"]

    def test_highlight_flag_irrelevant(self):
        builder = FocusViewBuilder()
        assert builder.build(["ERROR"], [make_filter("ERROR", highlighted=False)]) == ["ERROR"]

    def test_invalid_shown_pattern(self):
        builder = FocusViewBuilder()
        with pytest.raises(InvalidPatternError):
            builder.build(["a"], [make_filter("")])


class TestStats:
    """Tests for focus view statistics."""

    def test_stats(self):
        builder = FocusViewBuilder()
        lines = ["INFO a", "WARN b", "ERROR c", "ERROR d"]
        filters = [make_filter("ERROR"), make_filter("WARN", shown=False)]

        stats = builder.stats(lines, filters)

        assert stats.total_lines == 4
        assert stats.shown_lines == 2
        assert stats.shown_percentage == 50.0
        assert stats.per_filter == {0: 2, 1: 1}

    def test_stats_empty_text(self):
        builder = FocusViewBuilder()
        stats = builder.stats([], [make_filter("ERROR")])
        assert stats.total_lines == 0
        assert stats.shown_percentage == 0.0
