"""HighlightProjector: decides which lines get which highlight.

The projector computes the set of (filter index, line number) marks for the
highlighted filters and, when a rendering surface is attached, pushes them
to it and keeps the returned handles so the next pass can remove them.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, NamedTuple, Optional, Sequence

from logfocus.core.host import RenderSurface
from logfocus.core.match import MatchEngine
from logfocus.models.filter_def import LogFilter

logger = logging.getLogger(__name__)

STYLE_PREFIX = "logfocus-"


class LineMark(NamedTuple):
    """One highlighted line: the filter index and the 1-based line number."""

    filter_index: int
    line_number: int


def style_name(key: str) -> str:
    """Return the surface style name used for the filter with this key."""
    return f"{STYLE_PREFIX}{key}"


class HighlightProjector:
    """Projects highlighted filters onto lines of text.

    Handles are keyed by each filter's stable key (from
    ``FilterStore.keys()``); without keys, positions are used.
    """

    def __init__(
        self,
        surface: Optional[RenderSurface] = None,
        engine: Optional[MatchEngine] = None,
    ) -> None:
        self.surface = surface
        self.engine = engine or MatchEngine()
        self._handles: dict[str, Any] = {}

    @property
    def handles(self) -> Mapping[str, Any]:
        return dict(self._handles)

    def compute(
        self,
        lines: Sequence[str],
        filters: Sequence[LogFilter],
    ) -> dict[int, list[int]]:
        """Map each highlighted filter's index to its matching line numbers.

        Raises:
            InvalidPatternError: If a highlighted filter's pattern is invalid.
        """
        result: dict[int, list[int]] = {}
        for index, filt in enumerate(filters):
            if not filt.highlighted:
                continue
            compiled = self.engine.compile(filt.pattern)
            result[index] = [
                number for number, line in enumerate(lines, start=1)
                if compiled.search(line)
            ]
        return result

    def apply(
        self,
        lines: Sequence[str],
        filters: Sequence[LogFilter],
        keys: Optional[Sequence[str]] = None,
    ) -> set[LineMark]:
        """Replace the current highlights with those for lines and filters.

        Args:
            lines: The document, one string per line.
            filters: Filters in list order.
            keys: Stable keys parallel to filters.

        Returns:
            Every (filter index, line number) pair that should be marked.

        Raises:
            InvalidPatternError: If a highlighted filter's pattern is invalid.
                Previous highlights are cleared and none are applied.
        """
        if keys is None:
            keys = [str(i) for i in range(len(filters))]
        elif len(keys) != len(filters):
            raise ValueError("keys must be parallel to filters")

        self.clear()
        by_filter = self.compute(lines, filters)

        marks = {
            LineMark(index, number)
            for index, numbers in by_filter.items()
            for number in numbers
        }

        if self.surface is not None:
            for index, numbers in by_filter.items():
                if not numbers:
                    continue
                style = style_name(keys[index])
                self.surface.define_style(style, filters[index].color)
                self._handles[keys[index]] = self.surface.mark_lines(style, numbers)

        logger.debug(
            "Applied %d highlights from %d filters", len(marks), len(by_filter)
        )
        return marks

    def clear(self) -> None:
        """Dispose every marker placed by the last ``apply``."""
        handles, self._handles = self._handles, {}
        if self.surface is None:
            return
        for handle in handles.values():
            self.surface.dispose(handle)
