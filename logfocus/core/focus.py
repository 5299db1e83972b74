"""FocusViewBuilder: derive the focus view of a document.

The focus view keeps, in their original order, the lines matched by at
least one shown filter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from logfocus.core.match import MatchEngine
from logfocus.models.filter_def import LogFilter


@dataclass
class FocusStats:
    """Statistics about a focus view.

    Attributes:
        total_lines: Number of lines in the document.
        shown_lines: Number of lines kept by the focus view.
        shown_percentage: Percentage of lines kept (0.0-100.0).
        per_filter: Dict mapping filter indices to their matching line counts.
    """

    total_lines: int
    shown_lines: int
    shown_percentage: float
    per_filter: dict[int, int] = field(default_factory=dict)


class FocusViewBuilder:
    """Builds focus views with a shared MatchEngine."""

    def __init__(self, engine: Optional[MatchEngine] = None) -> None:
        self.engine = engine or MatchEngine()

    def build(self, lines: Sequence[str], filters: Sequence[LogFilter]) -> list[str]:
        """Return the lines kept by the shown filters.

        An empty list means nothing matched; it is not an error.

        Raises:
            InvalidPatternError: If a shown filter's pattern is invalid.
        """
        return [line for line in lines if self.engine.matches_any_shown(line, filters)]

    def stats(self, lines: Sequence[str], filters: Sequence[LogFilter]) -> FocusStats:
        """Calculate statistics about the focus view.

        Per-filter counts cover every filter, shown or not, so a hidden
        filter still reports what it would contribute.

        Raises:
            InvalidPatternError: If any filter's pattern is invalid.
        """
        per_filter: dict[int, int] = {}
        for index, filt in enumerate(filters):
            compiled = self.engine.compile(filt.pattern)
            per_filter[index] = sum(1 for line in lines if compiled.search(line))

        total = len(lines)
        shown = len(self.build(lines, filters))
        percentage = (shown / total) * 100.0 if total else 0.0

        return FocusStats(
            total_lines=total,
            shown_lines=shown,
            shown_percentage=percentage,
            per_filter=per_filter,
        )
