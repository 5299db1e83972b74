"""Textual widgets for logfocus TUI."""

from logfocus.tui.widgets.filter_modal import FilterModal
from logfocus.tui.widgets.filter_table import FilterTable
from logfocus.tui.widgets.footer import LogFocusFooter

__all__ = [
    "FilterModal",
    "FilterTable",
    "LogFocusFooter",
]
