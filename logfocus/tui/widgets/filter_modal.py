"""Filter modal for logfocus TUI.

This module provides the modal dialog used to add a filter or edit an
existing one.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from logfocus.models.filter_def import is_valid_color


class FilterModal(ModalScreen[dict | None]):
    """Modal screen for entering a filter's pattern and color.

    On Apply: dismisses with {"pattern": str, "color": str | None}; an
    empty color field gives None (random color on add, unchanged on edit).
    On Cancel/Escape: dismisses with None.
    """

    DEFAULT_CSS = """
    FilterModal {
        align: center middle;
    }

    #filter-modal-container {
        width: 64;
        height: auto;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    #filter-modal-title {
        text-style: bold;
        width: 100%;
        content-align: center middle;
        margin-bottom: 1;
    }

    .section-label {
        margin-top: 1;
        color: $text-muted;
        text-style: bold;
    }

    #filter-modal-error {
        color: $error;
        height: auto;
    }

    #filter-modal-buttons {
        margin-top: 1;
        height: 3;
        align: center middle;
    }

    #filter-modal-buttons Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(
        self,
        title: str = "Add Filter",
        pattern: str = "",
        color: str = "",
        *args,
        **kwargs,
    ):
        """Initialize the filter modal.

        Args:
            title: Dialog title.
            pattern: Pattern to pre-populate.
            color: Color to pre-populate.
        """
        super().__init__(*args, **kwargs)
        self._title = title
        self._pattern = pattern
        self._color = color

    def compose(self) -> ComposeResult:
        """Create the modal layout."""
        with Vertical(id="filter-modal-container"):
            yield Static(self._title, id="filter-modal-title", markup=False)

            yield Label("Pattern (regex)", classes="section-label")
            yield Input(
                value=self._pattern,
                placeholder="e.g. ERROR|FATAL",
                id="filter-pattern-input",
            )

            yield Label("Color", classes="section-label")
            yield Input(
                value=self._color,
                placeholder="#RRGGBB (blank for default)",
                id="filter-color-input",
            )

            yield Static("", id="filter-modal-error", markup=False)

            with Horizontal(id="filter-modal-buttons"):
                yield Button("Apply", variant="primary", id="btn-apply")
                yield Button("Cancel", variant="default", id="btn-cancel")

    def on_mount(self) -> None:
        self.query_one("#filter-pattern-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "btn-apply":
            self._apply()
        elif event.button.id == "btn-cancel":
            self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._apply()

    def action_cancel(self) -> None:
        """Handle escape key."""
        self.dismiss(None)

    def validate(self, pattern: str, color: str) -> str | None:
        """Return an error message for the entered values, or None."""
        if not pattern:
            return "Pattern is required."
        if color and not is_valid_color(color):
            return f"Invalid color {color!r}: expected #RRGGBB"
        return None

    def _apply(self) -> None:
        """Collect the entered values and dismiss with them."""
        pattern = self.query_one("#filter-pattern-input", Input).value
        color = self.query_one("#filter-color-input", Input).value.strip()

        error = self.validate(pattern, color)
        if error:
            self.query_one("#filter-modal-error", Static).update(error)
            return

        self.dismiss({
            "pattern": pattern,
            "color": color or None,
        })
