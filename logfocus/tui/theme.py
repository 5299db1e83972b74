"""Color theme for the logfocus TUI.

The palette stays neutral so that filter colors, which are arbitrary user
choices, remain the most visible thing on screen. The one accent the theme
adds is ``$focus-mode``, used for the header while the focus view replaces
the log.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from textual.app import App
    from textual.theme import Theme

THEME_NAME = "logfocus-dark"

# CSS variables the app's stylesheet uses on top of Textual's own
THEME_VARIABLES = {
    "focus-mode": "#E0AF68",
}


def build_theme() -> Theme:
    from textual.theme import Theme

    return Theme(
        name=THEME_NAME,
        primary="#7AA2F7",
        secondary="#9AA5CE",
        accent="#BB9AF7",
        foreground="#C0CAF5",
        success="#9ECE6A",
        warning="#E0AF68",
        error="#F7768E",
        surface="#24283B",
        panel="#2F3549",
        dark=True,
        variables=dict(THEME_VARIABLES),
    )


def register_theme(app: App, transparent: bool = True) -> None:
    """Register and activate the logfocus theme.

    Args:
        app: The Textual application to register the theme on.
        transparent: If True, enable ANSI transparency so the
            terminal background shows through.
    """
    app.register_theme(build_theme())
    app.theme = THEME_NAME
    if transparent:
        app.ansi_color = True
