"""Tests for HighlightProjector."""

import pytest

from logfocus.core.errors import InvalidPatternError
from logfocus.core.highlight import HighlightProjector, LineMark, style_name
from logfocus.models.filter_def import LogFilter

LINES = [
    "INFO start",
    "ERROR disk full",
    "WARN slow",
    "ERROR write failed",
]


def make_filter(pattern, color="#ff0000", highlighted=True, shown=True):
    return LogFilter(pattern=pattern, color=color, highlighted=highlighted, shown=shown)


class TestApply:
    """Tests for computing marks."""

    def test_marks_for_highlighted_filters(self):
        projector = HighlightProjector()
        filters = [make_filter("ERROR"), make_filter("WARN")]

        marks = projector.apply(LINES, filters)

        assert marks == {
            LineMark(0, 2),
            LineMark(0, 4),
            LineMark(1, 3),
        }

    def test_marks_are_plain_tuples(self):
        projector = HighlightProjector()
        marks = projector.apply(LINES, [make_filter("WARN")])
        assert marks == {(0, 3)}

    def test_unhighlighted_filters_skipped(self):
        projector = HighlightProjector()
        filters = [make_filter("ERROR", highlighted=False), make_filter("WARN")]
        assert projector.apply(LINES, filters) == {LineMark(1, 3)}

    def test_shown_flag_irrelevant(self):
        projector = HighlightProjector()
        filters = [make_filter("WARN", shown=False)]
        assert projector.apply(LINES, filters) == {LineMark(0, 3)}

    def test_deterministic(self):
        projector = HighlightProjector()
        filters = [make_filter("ERROR"), make_filter("INFO|WARN")]
        assert projector.apply(LINES, filters) == projector.apply(LINES, filters)

    def test_empty_text(self):
        projector = HighlightProjector()
        assert projector.apply([], [make_filter("ERROR")]) == set()

    def test_invalid_highlighted_pattern(self):
        projector = HighlightProjector()
        with pytest.raises(InvalidPatternError):
            projector.apply(LINES, [make_filter("")])

    def test_keys_must_be_parallel(self):
        projector = HighlightProjector()
        with pytest.raises(ValueError):
            projector.apply(LINES, [make_filter("ERROR")], keys=["a", "b"])


class TestSurface:
    """Tests for the handles pushed to a rendering surface."""

    def test_styles_and_marks(self, surface):
        projector = HighlightProjector(surface)
        filters = [make_filter("ERROR", "#ff0000"), make_filter("WARN", "#ffff00")]

        projector.apply(LINES, filters, keys=["k1", "k2"])

        assert surface.styles == {
            style_name("k1"): "#ff0000",
            style_name("k2"): "#ffff00",
        }
        assert sorted(surface.marks.values()) == [
            (style_name("k1"), [2, 4]),
            (style_name("k2"), [3]),
        ]
        assert set(projector.handles) == {"k1", "k2"}

    def test_no_handle_without_matches(self, surface):
        projector = HighlightProjector(surface)
        projector.apply(LINES, [make_filter("FATAL")], keys=["k1"])
        assert surface.marks == {}
        assert projector.handles == {}

    def test_apply_clears_previous_marks(self, surface):
        projector = HighlightProjector(surface)
        projector.apply(LINES, [make_filter("ERROR"), make_filter("WARN")], keys=["k1", "k2"])

        # Filter k1 removed, k2 no longer highlighted
        projector.apply(LINES, [make_filter("WARN", highlighted=False)], keys=["k2"])

        assert surface.marks == {}
        assert sorted(surface.disposed) == [1, 2]
        assert projector.handles == {}

    def test_clear_is_idempotent(self, surface):
        projector = HighlightProjector(surface)
        projector.apply(LINES, [make_filter("ERROR")], keys=["k1"])

        projector.clear()
        projector.clear()

        assert surface.disposed == [1]
        assert surface.marks == {}

    def test_clear_without_surface(self):
        projector = HighlightProjector()
        projector.clear()
        assert projector.handles == {}

    def test_invalid_pattern_leaves_no_markers(self, surface):
        projector = HighlightProjector(surface)
        projector.apply(LINES, [make_filter("ERROR")], keys=["k1"])

        with pytest.raises(InvalidPatternError):
            projector.apply(LINES, [make_filter("ERROR"), make_filter("(")], keys=["k1", "k2"])

        assert surface.marks == {}

    def test_default_keys_are_positions(self, surface):
        projector = HighlightProjector(surface)
        projector.apply(LINES, [make_filter("INFO"), make_filter("WARN")])
        assert set(projector.handles) == {"0", "1"}
