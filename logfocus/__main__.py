"""Entry point for logfocus CLI."""

import logging
from dataclasses import dataclass
from pathlib import Path

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from logfocus.core.config import Config, ConfigError, ConfigLoader
from logfocus.core.errors import LogFocusError
from logfocus.core.host import Severity
from logfocus.core.session import FilterSession
from logfocus.render import LineStyleMap

click.rich_click.TEXT_MARKUP = "rich"
click.rich_click.SHOW_ARGUMENTS = True

_SEVERITY_PREFIX = {
    "warning": ("Warning: ", "yellow"),
    "error": ("Error: ", "red"),
}


class ConsoleNotifier:
    """NotificationSink printing to a Rich console.

    Messages are printed without markup, since filter patterns routinely
    contain square brackets.
    """

    def __init__(self, console: Console) -> None:
        self.console = console

    def notify(self, message: str, severity: Severity = "information") -> None:
        prefix = _SEVERITY_PREFIX.get(severity)
        text = Text.assemble(prefix, message) if prefix else Text(message)
        self.console.print(text, soft_wrap=True)


@dataclass
class CliState:
    """Objects shared by every subcommand."""

    config: Config
    console: Console
    err_console: Console


def _read_lines(path: str) -> list[str]:
    """Read a log file as a list of lines without line terminators."""
    return Path(path).read_text(encoding="utf-8", errors="replace").splitlines()


def _new_session(ctx: click.Context, surface=None) -> FilterSession:
    state: CliState = ctx.obj
    return FilterSession(state.config, ConsoleNotifier(state.err_console), surface=surface)


def _load_session(ctx: click.Context, surface=None) -> FilterSession:
    """Create a session holding the filters from the configured file.

    A filters file that cannot be read or parsed aborts the command, so a
    following save never overwrites it.
    """
    state: CliState = ctx.obj
    session = _new_session(ctx, surface)
    try:
        session.store.replace(session.filter_file.load())
    except LogFocusError as e:
        state.err_console.print(Text.assemble(("Error: ", "red"), str(e)), soft_wrap=True)
        ctx.exit(1)
    return session


def _save_or_exit(ctx: click.Context, session: FilterSession) -> None:
    if not session.export_filters():
        ctx.exit(1)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
)
@click.option("--version", is_flag=True, help="Show version and exit.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Extra TOML config file, applied after the discovered ones."
)
@click.option(
    "--filters-file",
    type=click.Path(dir_okay=False),
    help="Filters JSON file (overrides [filters] file)."
)
@click.option(
    "--max-filters",
    type=int,
    help="Maximum number of filters (overrides [filters] max_filters)."
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    version: bool,
    config_path: str | None,
    filters_file: str | None,
    max_filters: int | None,
    verbose: bool,
) -> None:
    """logfocus - highlight and focus log files with regex filters.

    Filters are numbered from 1 in the order they were added.
    """
    if version:
        from logfocus import __version__
        click.echo(f"logfocus {__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return

    _configure_logging(verbose)
    console = Console()
    err_console = Console(stderr=True)

    try:
        config = ConfigLoader().load_merged(
            extra=Path(config_path) if config_path else None
        )
        config = config.with_overrides(
            filters_file=Path(filters_file) if filters_file else None,
            max_filters=max_filters,
        )
    except (ConfigError, FileNotFoundError) as e:
        err_console.print(Text.assemble(("Error: ", "red"), str(e)), soft_wrap=True)
        ctx.exit(1)

    ctx.obj = CliState(config=config, console=console, err_console=err_console)


@cli.command("add")
@click.argument("pattern")
@click.option("--color", type=str, help="Highlight color as #RRGGBB (random if omitted).")
@click.pass_context
def add_cmd(ctx: click.Context, pattern: str, color: str | None) -> None:
    """Add a filter matching PATTERN."""
    session = _load_session(ctx)
    if session.add_filter(pattern, color) is None:
        ctx.exit(1)
    _save_or_exit(ctx, session)


@cli.command("edit")
@click.argument("index", type=int)
@click.argument("pattern")
@click.option("--color", type=str, help="New highlight color as #RRGGBB (kept if omitted).")
@click.pass_context
def edit_cmd(ctx: click.Context, index: int, pattern: str, color: str | None) -> None:
    """Change the pattern (and optionally the color) of filter INDEX."""
    session = _load_session(ctx)
    if not session.edit_filter(index, pattern, color):
        ctx.exit(1)
    _save_or_exit(ctx, session)


@cli.command("remove")
@click.argument("index", type=int)
@click.pass_context
def remove_cmd(ctx: click.Context, index: int) -> None:
    """Remove filter INDEX; later filters move up by one."""
    session = _load_session(ctx)
    if not session.remove_filter(index):
        ctx.exit(1)
    _save_or_exit(ctx, session)


@cli.command("toggle-highlight")
@click.argument("index", type=int)
@click.pass_context
def toggle_highlight_cmd(ctx: click.Context, index: int) -> None:
    """Turn highlighting of filter INDEX on or off."""
    session = _load_session(ctx)
    if session.toggle_highlight(index) is None:
        ctx.exit(1)
    _save_or_exit(ctx, session)


@cli.command("toggle-show")
@click.argument("index", type=int)
@click.pass_context
def toggle_show_cmd(ctx: click.Context, index: int) -> None:
    """Include or exclude filter INDEX from the focus view."""
    session = _load_session(ctx)
    if session.toggle_show(index) is None:
        ctx.exit(1)
    _save_or_exit(ctx, session)


@cli.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List the filters."""
    state: CliState = ctx.obj
    session = _load_session(ctx)
    filters = session.list_filters()

    if not filters:
        state.console.print("[yellow]No filters defined.[/yellow]")
        return

    table = Table(title=f"Filters ({len(filters)}/{state.config.max_filters})")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Color", no_wrap=True)
    table.add_column("Highlight", justify="center")
    table.add_column("Show", justify="center")
    table.add_column("Pattern")

    for number, filt in enumerate(filters, start=1):
        table.add_row(
            str(number),
            Text.assemble(("  ", f"on {filt.color}"), f" {filt.color}"),
            "[green]✓[/green]" if filt.highlighted else "[dim]✗[/dim]",
            "[green]✓[/green]" if filt.shown else "[dim]✗[/dim]",
            Text(filt.pattern),
        )

    state.console.print(table)


@cli.command("export")
@click.argument("dest", required=False, type=click.Path(dir_okay=False))
@click.pass_context
def export_cmd(ctx: click.Context, dest: str | None) -> None:
    """Write the filters to DEST (default: the configured filters file)."""
    session = _load_session(ctx)
    if not session.export_filters(Path(dest) if dest else None):
        ctx.exit(1)


@cli.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_cmd(ctx: click.Context, source: str) -> None:
    """Replace the filters with those in SOURCE and save them."""
    session = _new_session(ctx)
    if not session.import_filters(Path(source)):
        ctx.exit(1)
    _save_or_exit(ctx, session)


@cli.command("focus")
@click.argument("logfile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the focus view to this file instead of stdout."
)
@click.option("--stats", is_flag=True, help="Show how many lines each filter matches.")
@click.pass_context
def focus_cmd(ctx: click.Context, logfile: str, output: str | None, stats: bool) -> None:
    """Print only the lines of LOGFILE matched by a shown filter."""
    state: CliState = ctx.obj
    session = _load_session(ctx)
    lines = _read_lines(logfile)

    focused = session.focus(lines)
    if focused is None:
        ctx.exit(1)

    if focused:
        if output:
            output_path = Path(output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text("\n".join(focused) + "\n", encoding="utf-8")
        else:
            # Raw output so the view can be piped
            for line in focused:
                click.echo(line)

    if stats:
        focus_stats = session.stats(lines)
        if focus_stats is None:
            ctx.exit(1)
        table = Table(title="Focus View")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Show", justify="center")
        table.add_column("Lines", justify="right")
        table.add_column("Pattern")
        for index, filt in enumerate(session.list_filters()):
            table.add_row(
                str(index + 1),
                "[green]✓[/green]" if filt.shown else "[dim]✗[/dim]",
                str(focus_stats.per_filter.get(index, 0)),
                Text(filt.pattern),
            )
        state.err_console.print(table)
        state.err_console.print(
            f"Shown: {focus_stats.shown_lines}/{focus_stats.total_lines} lines "
            f"({focus_stats.shown_percentage:.1f}%)"
        )


@cli.command("highlight")
@click.argument("logfile", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def highlight_cmd(ctx: click.Context, logfile: str) -> None:
    """Print LOGFILE with lines colored by the highlighted filters."""
    state: CliState = ctx.obj
    surface = LineStyleMap()
    session = _load_session(ctx, surface=surface)
    lines = _read_lines(logfile)

    session.on_text_changed(lines)
    for number, line in enumerate(lines, start=1):
        state.console.print(
            Text(line, style=surface.rich_style_for_line(number)),
            soft_wrap=True,
        )
    session.on_exit()


@cli.command("view")
@click.argument("logfile", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def view_cmd(ctx: click.Context, logfile: str) -> None:
    """Open LOGFILE in the interactive viewer."""
    from logfocus.tui import run_tui

    state: CliState = ctx.obj
    run_tui(log_file=Path(logfile), config=state.config)


if __name__ == "__main__":
    cli()
