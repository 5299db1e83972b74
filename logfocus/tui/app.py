"""Main TUI application for logfocus.

The app hosts the filter engine the way a text editor would: it owns the
document (the log file), draws highlight markers over it, shows the focus
view in place of the document, and reports command outcomes as Textual
notifications.

Layout: header / filters + log / footer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import DataTable, Static

from logfocus.core.config import Config
from logfocus.core.host import Severity
from logfocus.core.session import FilterSession
from logfocus.render import LineStyleMap
from logfocus.tui.theme import THEME_VARIABLES, register_theme
from logfocus.tui.widgets.filter_modal import FilterModal
from logfocus.tui.widgets.filter_table import FilterTable
from logfocus.tui.widgets.footer import LogFocusFooter


class AppNotifier:
    """NotificationSink forwarding to ``App.notify``.

    Messages are escaped because filter patterns routinely contain
    square brackets.
    """

    def __init__(self, app) -> None:
        self.app = app

    def notify(self, message: str, severity: Severity = "information") -> None:
        self.app.notify(escape(message), severity=severity)


class LogViewer(DataTable):
    """Widget for displaying log lines with their highlight backgrounds."""

    BINDINGS = [
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("g", "scroll_top", "Top", show=False),
        Binding("G", "scroll_bottom", "Bottom", show=False),
    ]

    LINE_COL_WIDTH = 7

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.cursor_type = "row"
        self.show_header = False

    def on_mount(self) -> None:
        self.add_column("Line", key="line", width=self.LINE_COL_WIDTH)
        self.add_column("Text", key="text")

    def set_lines(self, lines: Sequence[str], surface: LineStyleMap) -> None:
        """Replace the rows with lines, styled from the surface's marks."""
        prev_row = self.cursor_row
        self.clear()
        for number, line in enumerate(lines, start=1):
            self.add_row(
                Text(str(number), style="dim"),
                Text(line, style=surface.rich_style_for_line(number)),
                key=str(number),
            )
        if lines:
            self.move_cursor(row=min(prev_row, len(lines) - 1))

    def action_scroll_top(self) -> None:
        self.move_cursor(row=0)

    def action_scroll_bottom(self) -> None:
        if self.row_count > 0:
            self.move_cursor(row=self.row_count - 1)


class LogFocusApp(App):
    """Interactive log viewer driven by a FilterSession.

    Attributes:
        log_file: Path to the log file being viewed.
        session: The filter session; its store holds the filters.
    """

    CSS = """
    #header {
        height: 1;
        padding: 0 1;
        text-style: bold;
        color: $primary;
    }

    #header.-focus-mode {
        color: $focus-mode;
    }

    #main {
        height: 1fr;
    }

    .panel {
        border: round $panel;
        height: 100%;
    }

    .panel:focus-within {
        border: round $primary;
    }

    #filters-panel {
        width: 48;
    }

    #log-panel {
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("a", "add_filter", "Add", show=False),
        Binding("e", "edit_filter", "Edit", show=False),
        Binding("d", "remove_filter", "Remove", show=False),
        Binding("h", "toggle_highlight", "Highlight", show=False),
        Binding("s", "toggle_show", "Show", show=False),
        Binding("f", "focus_mode", "Focus", show=False),
        Binding("x", "export_filters", "Export", show=False),
        Binding("i", "import_filters", "Import", show=False),
        Binding("tab", "toggle_panel", "Switch Panel", show=False),
    ]

    FOOTER_BINDINGS = [
        ("q", "Quit"),
        ("a", "Add"),
        ("e", "Edit"),
        ("d", "Remove"),
        ("h", "Highlight"),
        ("s", "Show"),
        ("f", "Focus"),
        ("x", "Export"),
        ("i", "Import"),
        ("Tab", "Panel"),
    ]

    def __init__(
        self,
        config: Config,
        log_file: Path | None = None,
        lines: list[str] | None = None,
        *args,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.log_file = log_file
        self.config = config
        self._lines: list[str] = list(lines) if lines is not None else []
        self._view_lines: list[str] | None = None
        self._view_title = ""
        self.surface = LineStyleMap()
        self.session = FilterSession(
            config,
            AppNotifier(self),
            surface=self.surface,
            source=self,
        )

        # Widget refs (set in on_mount)
        self._header: Static | None = None
        self._filter_table: FilterTable | None = None
        self._log_viewer: LogViewer | None = None
        self._footer: LogFocusFooter | None = None

    def get_theme_variable_defaults(self) -> dict[str, str]:
        # Available before on_mount registers the theme
        return dict(THEME_VARIABLES)

    # -- Properties ----------------------------------------------------------

    @property
    def focus_mode(self) -> bool:
        return self._view_lines is not None

    @property
    def displayed_lines(self) -> list[str]:
        """The lines currently on screen: the focus view or the document."""
        if self._view_lines is not None:
            return self._view_lines
        return self._lines

    # -- TextSource ----------------------------------------------------------

    def get_lines(self) -> list[str]:
        return list(self._lines)

    def show_derived(self, lines: Sequence[str], title: str) -> None:
        self._view_lines = list(lines)
        self._view_title = title
        self._text_changed()

    # -- Compose & Mount -----------------------------------------------------

    def compose(self) -> ComposeResult:
        yield Static(self._header_text(), id="header", markup=False)
        with Horizontal(id="main"):
            with Vertical(id="filters-panel", classes="panel"):
                yield FilterTable(id="filter-table")
            with Vertical(id="log-panel", classes="panel"):
                yield LogViewer(id="log-viewer")
        yield LogFocusFooter(bindings=self.FOOTER_BINDINGS, id="footer")

    def on_mount(self) -> None:
        """Apply theme, load the log and the saved filters."""
        register_theme(self)

        self._header = self.query_one("#header", Static)
        self._filter_table = self.query_one("#filter-table", FilterTable)
        self._log_viewer = self.query_one("#log-viewer", LogViewer)
        self._footer = self.query_one("#footer", LogFocusFooter)

        self.query_one("#filters-panel").border_title = "Filters"
        self.query_one("#log-panel").border_title = "Log"

        if self.log_file and not self._lines:
            self._lines = self.log_file.read_text(
                encoding="utf-8", errors="replace"
            ).splitlines()

        self.session.import_filters()
        self._text_changed()
        self._log_viewer.focus()

    def on_unmount(self) -> None:
        self.session.on_exit()

    # -- Display -------------------------------------------------------------

    def _header_text(self) -> str:
        name = self.log_file.name if self.log_file else "logfocus"
        if self.focus_mode:
            return f"logfocus — {name} [{self._view_title}]"
        return f"logfocus — {name}"

    def _text_changed(self) -> None:
        """Re-apply highlights to what is on screen and redraw."""
        self.session.on_text_changed(self.displayed_lines)
        self._refresh_view()

    def _refresh_view(self) -> None:
        """Redraw filters, log lines, header and status."""
        filters = self.session.list_filters()
        lines = self.displayed_lines

        if self._filter_table:
            self._filter_table.set_filters(filters)
        if self._log_viewer:
            with self.batch_update():
                self._log_viewer.set_lines(lines, self.surface)
        if self._header:
            self._header.update(self._header_text())
            self._header.set_class(self.focus_mode, "-focus-mode")
        if self._footer:
            self._footer.set_status(
                f"{len(filters)}/{self.config.max_filters} filters  "
                f"{len(lines)}/{len(self._lines)} lines"
            )

    def _selected_number(self) -> int | None:
        number = self._filter_table.selected_number if self._filter_table else None
        if number is None:
            self.notify("No filter selected.", severity="warning")
        return number

    # -- Actions -------------------------------------------------------------

    def action_add_filter(self) -> None:
        self.push_screen(FilterModal("Add Filter"), callback=self._on_add_result)

    def _on_add_result(self, result: dict | None) -> None:
        if result is None:
            return
        if self.session.add_filter(result["pattern"], result["color"]) is not None:
            self._refresh_view()

    def action_edit_filter(self) -> None:
        number = self._selected_number()
        if number is None:
            return
        filt = self.session.store.get(number - 1)
        self.push_screen(
            FilterModal(f"Edit Filter {number}", pattern=filt.pattern, color=filt.color),
            callback=lambda result: self._on_edit_result(number, result),
        )

    def _on_edit_result(self, number: int, result: dict | None) -> None:
        if result is None:
            return
        if self.session.edit_filter(number, result["pattern"], result["color"]):
            self._refresh_view()

    def action_remove_filter(self) -> None:
        number = self._selected_number()
        if number is not None and self.session.remove_filter(number):
            self._refresh_view()

    def action_toggle_highlight(self) -> None:
        number = self._selected_number()
        if number is not None and self.session.toggle_highlight(number) is not None:
            self._refresh_view()

    def action_toggle_show(self) -> None:
        number = self._selected_number()
        if number is not None and self.session.toggle_show(number) is not None:
            self._refresh_view()

    def action_focus_mode(self) -> None:
        """Switch between the focus view and the full document."""
        if self.focus_mode:
            self._view_lines = None
            self._text_changed()
        else:
            self.session.show_focus_view()

    def action_export_filters(self) -> None:
        self.session.export_filters()

    def action_import_filters(self) -> None:
        self.session.import_filters()
        self._refresh_view()

    def action_toggle_panel(self) -> None:
        """Move keyboard focus between the filter list and the log."""
        if self._filter_table and self._log_viewer:
            if self._filter_table.has_focus:
                self._log_viewer.focus()
            else:
                self._filter_table.focus()


def run_tui(config: Config, log_file: Path | None = None) -> None:
    """Run the TUI application.

    Args:
        config: Loaded configuration.
        log_file: Path to the log file to view.
    """
    app = LogFocusApp(config=config, log_file=log_file)
    app.run()
