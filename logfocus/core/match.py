"""MatchEngine for testing log lines against filters.

Patterns are Python regular expressions searched for anywhere in a line,
case-sensitively unless the pattern sets its own flags (e.g. ``(?i)``).
"""

from __future__ import annotations

import re
from typing import Iterable, Literal, Optional, Sequence

from logfocus.core.errors import InvalidPatternError
from logfocus.models.filter_def import LogFilter

FlagName = Literal["highlighted", "shown"]


class MatchEngine:
    """Engine for matching lines against filter patterns.

    Compiled patterns are cached for the lifetime of the engine. An empty
    pattern is rejected rather than matching every line.
    """

    def __init__(self) -> None:
        self._compiled: dict[str, re.Pattern[str]] = {}

    def compile(self, pattern: str) -> re.Pattern[str]:
        """Compile a filter pattern.

        Raises:
            InvalidPatternError: If the pattern is empty or not a valid regex.
        """
        compiled = self._compiled.get(pattern)
        if compiled is not None:
            return compiled
        if not pattern:
            raise InvalidPatternError(pattern)
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise InvalidPatternError(pattern, str(e)) from e
        self._compiled[pattern] = compiled
        return compiled

    def retain(self, patterns: Iterable[str]) -> None:
        """Drop cached compilations of every pattern not in patterns."""
        keep = set(patterns)
        for pattern in list(self._compiled):
            if pattern not in keep:
                del self._compiled[pattern]

    @property
    def cached_patterns(self) -> list[str]:
        return list(self._compiled)

    def matches(self, line: str, filt: LogFilter) -> bool:
        """Return True if the filter's pattern occurs anywhere in line."""
        return self.compile(filt.pattern).search(line) is not None

    def matches_any_shown(self, line: str, filters: Sequence[LogFilter]) -> bool:
        """Return True if at least one shown filter matches line.

        Filters are tried in list order and hidden filters are skipped
        without compiling them.
        """
        return any(filt.shown and self.matches(line, filt) for filt in filters)

    def matching_indices(
        self,
        line: str,
        filters: Sequence[LogFilter],
        *,
        only: Optional[FlagName] = None,
    ) -> list[int]:
        """Return the indices of the filters matching line.

        Args:
            line: The line to test.
            filters: Filters in list order.
            only: Restrict to filters with this flag set.

        Returns:
            Matching filter indices in ascending order.
        """
        return [
            i for i, filt in enumerate(filters)
            if (only is None or getattr(filt, only)) and self.matches(line, filt)
        ]
