"""Filter list widget for logfocus TUI."""

from __future__ import annotations

from typing import Sequence

from rich.text import Text
from textual.binding import Binding
from textual.widgets import DataTable

from logfocus.models.filter_def import LogFilter

CHECK = "✓"
CROSS = "✗"


def _flag(value: bool) -> Text:
    return Text(CHECK, style="green") if value else Text(CROSS, style="dim")


class FilterTable(DataTable):
    """Table of filters, one row per filter, numbered from 1.

    The cursor row is the selected filter that edit, remove and the
    toggle actions apply to.
    """

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
    ]

    COLUMNS = [
        ("number", "#", 3),
        ("color", "Color", 9),
        ("highlighted", "H", 1),
        ("shown", "S", 1),
        ("pattern", "Pattern", 20),
    ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.cursor_type = "row"
        self._count = 0

    def on_mount(self) -> None:
        for key, label, width in self.COLUMNS:
            self.add_column(label, key=key, width=width)

    @property
    def selected_number(self) -> int | None:
        """1-based number of the selected filter, or None when empty."""
        if self._count == 0:
            return None
        return min(self.cursor_row, self._count - 1) + 1

    def set_filters(self, filters: Sequence[LogFilter]) -> None:
        """Replace the rows, keeping the cursor where it was if possible."""
        prev_row = self.cursor_row
        self.clear()
        for number, filt in enumerate(filters, start=1):
            self.add_row(
                str(number),
                Text.assemble(("  ", f"on {filt.color}"), f" {filt.color[1:]}"),
                _flag(filt.highlighted),
                _flag(filt.shown),
                Text(filt.pattern),
                key=str(number),
            )
        self._count = len(filters)
        if filters:
            self.move_cursor(row=min(prev_row, len(filters) - 1))
