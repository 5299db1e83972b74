"""Footer widget for logfocus TUI.

Textual's built-in Footer ignores ANSI transparency, so the footer is
built from Static widgets: key hints on the left, a status text on the
right.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import HorizontalGroup
from textual.widget import Widget
from textual.widgets import Static


class LogFocusFooter(Widget):
    """Footer displaying keybinding hints and a status text.

    Args:
        bindings: List of (key, label) tuples to display.
        status: Initial status text.
    """

    DEFAULT_CSS = """
    LogFocusFooter {
        dock: bottom;
        height: 1;
        background: transparent;
    }

    LogFocusFooter > HorizontalGroup {
        background: transparent;
        height: 1;
    }

    LogFocusFooter .footer-key {
        color: $primary;
        text-style: bold;
        width: auto;
    }

    LogFocusFooter .footer-label {
        color: $text;
        width: auto;
        padding: 0 1 0 0;
    }

    LogFocusFooter #footer-status {
        width: 1fr;
        content-align: right middle;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        bindings: list[tuple[str, str]] | None = None,
        status: str = "",
        *args,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self._bindings = bindings or []
        self._status = status

    @property
    def status(self) -> str:
        return self._status

    def compose(self) -> ComposeResult:
        with HorizontalGroup():
            for key, label in self._bindings:
                yield Static(f" {key} ", classes="footer-key", markup=False)
                yield Static(label, classes="footer-label", markup=False)
            yield Static(self._status, id="footer-status", markup=False)

    def set_status(self, status: str) -> None:
        """Replace the status text."""
        self._status = status
        if self.is_mounted:
            self.query_one("#footer-status", Static).update(status)
