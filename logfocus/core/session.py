"""FilterSession: the command surface shared by every logfocus host.

Each user command maps onto one method. Methods never raise logfocus
errors; they report the outcome through the host's notification sink and
return a result that is None (or False) when the command did not take
effect.

Filters are addressed by 1-based number here, as users see them; the
store underneath uses 0-based indices.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from logfocus.core.config import Config
from logfocus.core.errors import (
    FilterNotFoundError,
    FilterParseError,
    LogFocusError,
)
from logfocus.core.focus import FocusStats, FocusViewBuilder
from logfocus.core.highlight import HighlightProjector, LineMark
from logfocus.core.host import NotificationSink, RenderSurface, TextSource
from logfocus.core.match import MatchEngine
from logfocus.core.persistence import FilterFile
from logfocus.core.store import FilterStore
from logfocus.models.filter_def import LogFilter

logger = logging.getLogger(__name__)

FOCUS_VIEW_TITLE = "LogFocusMode"


class FilterSession:
    """Owns the filter store and the components that read it.

    Example:
        session = FilterSession(config, notifier)
        session.import_filters()
        session.add_filter("ERROR", "#ff0000")
        marks = session.on_text_changed(lines)
        session.export_filters()
    """

    def __init__(
        self,
        config: Config,
        notifier: NotificationSink,
        surface: Optional[RenderSurface] = None,
        source: Optional[TextSource] = None,
    ) -> None:
        self.config = config
        self.notifier = notifier
        self.source = source
        self.store = FilterStore(max_filters=config.max_filters)
        self.filter_file = FilterFile(config.filters_file)
        self.engine = MatchEngine()
        self.projector = HighlightProjector(surface, engine=self.engine)
        self.builder = FocusViewBuilder(self.engine)
        self._lines: list[str] = []

    # -- Reporting -----------------------------------------------------------

    def _info(self, message: str) -> None:
        self.notifier.notify(message, "information")

    def _report(self, error: LogFocusError, number: Optional[int] = None) -> None:
        if isinstance(error, FilterNotFoundError) and number is not None:
            message = f"Filter not found: {number}"
        else:
            message = str(error)
        logger.debug("Command failed: %s", message)
        self.notifier.notify(message, error.severity)

    # -- Filter commands -----------------------------------------------------

    def list_filters(self) -> list[LogFilter]:
        return self.store.list()

    def add_filter(self, pattern: str, color: Optional[str] = None) -> Optional[int]:
        """Add a filter; return its 1-based number."""
        try:
            index = self.store.add(pattern, color)
        except LogFocusError as e:
            self._report(e)
            return None
        self._info(f"Added new filter: {pattern}")
        self._refresh()
        return index + 1

    def edit_filter(self, number: int, pattern: str, color: Optional[str] = None) -> bool:
        try:
            self.store.edit(number - 1, pattern, color)
        except LogFocusError as e:
            self._report(e, number)
            return False
        self._info(f"Edited filter: {pattern}")
        self._refresh()
        return True

    def remove_filter(self, number: int) -> bool:
        try:
            self.store.remove(number - 1)
        except LogFocusError as e:
            self._report(e, number)
            return False
        self._info(f"Removed filter at index: {number}")
        self._refresh()
        return True

    def toggle_highlight(self, number: int) -> Optional[bool]:
        """Flip a filter's highlighted flag; return the new value."""
        try:
            value = self.store.toggle_highlighted(number - 1)
        except LogFocusError as e:
            self._report(e, number)
            return None
        self._info(f"Highlight {'on' if value else 'off'} for filter {number}")
        self._refresh()
        return value

    def toggle_show(self, number: int) -> Optional[bool]:
        """Flip a filter's shown flag; return the new value."""
        try:
            value = self.store.toggle_shown(number - 1)
        except LogFocusError as e:
            self._report(e, number)
            return None
        self._info(f"Show {'on' if value else 'off'} for filter {number}")
        return value

    # -- Persistence ---------------------------------------------------------

    def export_filters(self, path: Optional[Path] = None) -> bool:
        """Save the filters to the configured file, or to path."""
        filter_file = FilterFile(path) if path is not None else self.filter_file
        with self.store.lock:
            filters = self.store.list()
            try:
                filter_file.save(filters)
            except LogFocusError as e:
                self._report(e)
                return False
        self._info(f"Saved {len(filters)} filters.")
        return True

    def import_filters(self, path: Optional[Path] = None) -> bool:
        """Replace the filters with those in the configured file, or in path.

        A missing file imports no filters. A file that does not parse is
        reported, the session falls back to no filters, and False is
        returned. A file that cannot be read, or holds more than
        max_filters entries, leaves the filters as they were.
        """
        filter_file = FilterFile(path) if path is not None else self.filter_file
        parsed = True
        with self.store.lock:
            try:
                filters = filter_file.load()
            except FilterParseError as e:
                self._report(e)
                self.notifier.notify("Starting with empty filters.", "warning")
                filters = []
                parsed = False
            except LogFocusError as e:
                self._report(e)
                return False

            try:
                self.store.replace(filters)
            except LogFocusError as e:
                self._report(e)
                return False

        if parsed:
            self._info(f"Loaded {len(filters)} filters.")
        self._refresh()
        return parsed

    # -- Text events ---------------------------------------------------------

    def on_text_changed(self, lines: Sequence[str]) -> set[LineMark]:
        """Re-apply highlights to new visible text."""
        self._lines = list(lines)
        return self._refresh()

    def on_exit(self) -> None:
        """Remove every highlight marker."""
        self.projector.clear()

    def _refresh(self) -> set[LineMark]:
        with self.store.lock:
            filters = self.store.list()
            keys = self.store.keys()
        self.engine.retain(filt.pattern for filt in filters)
        try:
            return self.projector.apply(self._lines, filters, keys)
        except LogFocusError as e:
            self._report(e)
            return set()

    # -- Focus view ----------------------------------------------------------

    def focus(self, lines: Optional[Sequence[str]] = None) -> Optional[list[str]]:
        """Build the focus view of lines (default: the last text seen).

        Returns:
            The kept lines; an empty list when nothing matches (reported at
            info level); None if a filter pattern is invalid.
        """
        if lines is None:
            lines = self._lines
        try:
            focused = self.builder.build(lines, self.store.list())
        except LogFocusError as e:
            self._report(e)
            return None
        if not focused:
            self._info("No lines match the current filters.")
        return focused

    def show_focus_view(self) -> bool:
        """Replace the host's visible text with the focus view."""
        if self.source is None:
            raise RuntimeError("show_focus_view requires a text source")
        focused = self.focus(self.source.get_lines())
        if not focused:
            return False
        self.source.show_derived(focused, FOCUS_VIEW_TITLE)
        return True

    def stats(self, lines: Optional[Sequence[str]] = None) -> Optional[FocusStats]:
        if lines is None:
            lines = self._lines
        try:
            return self.builder.stats(lines, self.store.list())
        except LogFocusError as e:
            self._report(e)
            return None
