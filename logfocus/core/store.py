"""FilterStore: the ordered, capacity-bounded list of filters.

Filters are addressed by their 0-based position. Removing a filter shifts
every later filter down by one. Internally each filter is paired with a
stable key that follows it through edits and shifts, so bookkeeping keyed
on filters (highlight handles) never points at the wrong one.
"""

from __future__ import annotations

import logging
import re
import threading
import uuid
from typing import Iterable, Optional

from pydantic import ValidationError

from logfocus.core.config import DEFAULT_MAX_FILTERS
from logfocus.core.errors import (
    CapacityExceededError,
    FilterNotFoundError,
    InvalidColorError,
    InvalidPatternError,
)
from logfocus.models.filter_def import LogFilter, is_valid_color, random_color

logger = logging.getLogger(__name__)


def _new_key() -> str:
    return uuid.uuid4().hex


class FilterStore:
    """In-memory owner of the filter list.

    All operations hold one re-entrant lock, so a store shared by a
    concurrent host sees at most one mutation at a time. Readers get
    copies; mutating a returned filter never changes the store.

    Example:
        store = FilterStore(max_filters=20)
        index = store.add("ERROR", "#ff0000")
        store.toggle_shown(index)
        for filt in store.list():
            print(filt.pattern, filt.shown)
    """

    def __init__(
        self,
        max_filters: int = DEFAULT_MAX_FILTERS,
        filters: Optional[Iterable[LogFilter]] = None,
    ) -> None:
        if max_filters < 1:
            raise ValueError("max_filters must be a positive integer")
        self.max_filters = max_filters
        self.lock = threading.RLock()
        self._filters: list[LogFilter] = []
        self._keys: list[str] = []
        if filters is not None:
            self.replace(filters)

    def __len__(self) -> int:
        with self.lock:
            return len(self._filters)

    def _check_index(self, index: int) -> None:
        # Negative indices are not positions in the list
        if not 0 <= index < len(self._filters):
            raise FilterNotFoundError(index, len(self._filters))

    def add(self, pattern: str, color: Optional[str] = None) -> int:
        """Append a new filter with both flags enabled.

        Args:
            pattern: Regex pattern; must be non-empty and compile.
            color: ``#RRGGBB`` color, or None for a random one.

        Returns:
            Index of the new filter (the end of the list).

        Raises:
            CapacityExceededError: If the store already holds max_filters.
            InvalidPatternError: If the pattern is empty or not a valid regex.
            InvalidColorError: If a color is given but malformed.
        """
        with self.lock:
            if len(self._filters) >= self.max_filters:
                raise CapacityExceededError(self.max_filters)
            if not pattern:
                raise InvalidPatternError(pattern)
            try:
                re.compile(pattern)
            except re.error as e:
                raise InvalidPatternError(pattern, str(e)) from e
            if color is not None and not is_valid_color(color):
                raise InvalidColorError(color)

            filt = LogFilter(
                pattern=pattern,
                color=color if color is not None else random_color(),
                highlighted=True,
                shown=True,
            )
            self._filters.append(filt)
            self._keys.append(_new_key())
            logger.debug("Added filter %d: %r (%s)", len(self._filters) - 1, pattern, filt.color)
            return len(self._filters) - 1

    def edit(self, index: int, pattern: str, color: Optional[str] = None) -> None:
        """Replace a filter's pattern, and its color when one is given.

        The highlighted and shown flags are left as they are.

        Raises:
            FilterNotFoundError: If index is out of range.
            InvalidColorError: If a color is given but malformed.
            InvalidPatternError: If the pattern is not a string.
        """
        with self.lock:
            self._check_index(index)
            if color is not None and not is_valid_color(color):
                raise InvalidColorError(color)
            updated = self._filters[index].model_copy()
            # validate_assignment applies the strict field types
            try:
                updated.pattern = pattern
            except ValidationError as e:
                raise InvalidPatternError(pattern, "pattern must be a string") from e
            if color is not None:
                updated.color = color
            self._filters[index] = updated
            logger.debug("Edited filter %d: %r", index, pattern)

    def remove(self, index: int) -> LogFilter:
        """Remove the filter at index, shifting later filters down.

        Returns:
            The removed filter.

        Raises:
            FilterNotFoundError: If index is out of range.
        """
        with self.lock:
            self._check_index(index)
            del self._keys[index]
            removed = self._filters.pop(index)
            logger.debug("Removed filter %d: %r", index, removed.pattern)
            return removed

    def toggle_highlighted(self, index: int) -> bool:
        """Flip the highlighted flag and return its new value."""
        with self.lock:
            self._check_index(index)
            filt = self._filters[index]
            filt.highlighted = not filt.highlighted
            return filt.highlighted

    def toggle_shown(self, index: int) -> bool:
        """Flip the shown flag and return its new value."""
        with self.lock:
            self._check_index(index)
            filt = self._filters[index]
            filt.shown = not filt.shown
            return filt.shown

    def get(self, index: int) -> LogFilter:
        """Return a copy of the filter at index."""
        with self.lock:
            self._check_index(index)
            return self._filters[index].model_copy()

    def key(self, index: int) -> str:
        """Return the stable key of the filter at index."""
        with self.lock:
            self._check_index(index)
            return self._keys[index]

    def keys(self) -> list[str]:
        """Return the stable keys, in list order."""
        with self.lock:
            return list(self._keys)

    def list(self) -> list[LogFilter]:
        """Return a snapshot of the filters, in list order."""
        with self.lock:
            return [filt.model_copy() for filt in self._filters]

    def replace(self, filters: Iterable[LogFilter]) -> None:
        """Replace the whole list, e.g. after an import.

        Every filter gets a fresh key.

        Raises:
            CapacityExceededError: If there are more than max_filters.
        """
        new_filters = [filt.model_copy() for filt in filters]

        with self.lock:
            if len(new_filters) > self.max_filters:
                raise CapacityExceededError(self.max_filters)
            self._filters = new_filters
            self._keys = [_new_key() for _ in new_filters]
            logger.debug("Replaced filter list (%d filters)", len(new_filters))

    def clear(self) -> None:
        """Remove every filter."""
        with self.lock:
            self._filters = []
            self._keys = []
