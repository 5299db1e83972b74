"""Interfaces between the filter engine and the application hosting it.

A host (the CLI, the TUI, or an editor integration) implements these
protocols; the engine only ever talks to them.
"""

from __future__ import annotations

from typing import Any, Literal, Protocol, Sequence

# Textual's notification severities, reused by every host.
Severity = Literal["information", "warning", "error"]


class TextSource(Protocol):
    """The document the filters are applied to."""

    def get_lines(self) -> list[str]:
        """Return all lines of the active document."""
        ...

    def show_derived(self, lines: Sequence[str], title: str) -> None:
        """Replace the visible content with a derived, read-only document."""
        ...


class RenderSurface(Protocol):
    """Where highlight markers are drawn."""

    def define_style(self, name: str, color: str) -> None:
        """Define (or redefine) a named style with a background color."""
        ...

    def mark_lines(self, style: str, line_numbers: Sequence[int]) -> Any:
        """Mark 1-based lines with a named style and return a handle."""
        ...

    def dispose(self, handle: Any) -> None:
        """Remove the marker identified by ``handle``."""
        ...


class NotificationSink(Protocol):
    """Reports the outcome of a command to the user."""

    def notify(self, message: str, severity: Severity = "information") -> None:
        ...
