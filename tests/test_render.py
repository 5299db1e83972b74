"""Tests for LineStyleMap."""

from logfocus.core.highlight import HighlightProjector
from logfocus.models.filter_def import LogFilter
from logfocus.render import LineStyleMap


def test_mark_and_lookup():
    surface = LineStyleMap()
    surface.define_style("error", "#ff0000")
    surface.mark_lines("error", [2, 4])

    assert surface.color_for_line(2) == "#ff0000"
    assert surface.color_for_line(3) is None
    assert surface.rich_style_for_line(4) == "on #ff0000"
    assert surface.rich_style_for_line(1) == ""


def test_dispose():
    surface = LineStyleMap()
    surface.define_style("error", "#ff0000")
    handle = surface.mark_lines("error", [1])

    surface.dispose(handle)
    surface.dispose(handle)

    assert len(surface) == 0
    assert surface.color_for_line(1) is None


def test_handles_are_distinct():
    surface = LineStyleMap()
    assert surface.mark_lines("a", [1]) != surface.mark_lines("b", [1])


def test_first_filter_decides_color():
    surface = LineStyleMap()
    projector = HighlightProjector(surface)
    filters = [
        LogFilter(pattern="disk", color="#111111"),
        LogFilter(pattern="ERROR", color="#222222"),
    ]

    projector.apply(["ERROR disk full", "ERROR other"], filters, keys=["a", "b"])

    assert surface.color_for_line(1) == "#111111"
    assert surface.color_for_line(2) == "#222222"


def test_unhighlighted_filter_gives_way():
    surface = LineStyleMap()
    projector = HighlightProjector(surface)
    filters = [
        LogFilter(pattern="disk", color="#111111", highlighted=False),
        LogFilter(pattern="ERROR", color="#222222"),
    ]

    projector.apply(["ERROR disk full"], filters)

    assert surface.color_for_line(1) == "#222222"


def test_dispose_drops_unused_style():
    surface = LineStyleMap()
    surface.define_style("error", "#ff0000")
    surface.define_style("warn", "#ffff00")
    first = surface.mark_lines("error", [1])
    second = surface.mark_lines("error", [2])
    warn = surface.mark_lines("warn", [3])

    surface.dispose(first)
    assert "error" in surface.styles

    surface.dispose(second)
    surface.dispose(warn)
    assert surface.styles == {}


def test_styles_do_not_accumulate_across_passes():
    surface = LineStyleMap()
    projector = HighlightProjector(surface)
    filters = [LogFilter(pattern="ERROR", color="#ff0000")]

    for i in range(5):
        projector.apply(["ERROR"], filters, keys=[f"key{i}"])

    assert list(surface.styles) == ["logfocus-key4"]
