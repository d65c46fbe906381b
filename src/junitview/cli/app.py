"""Main Typer CLI application for junitview."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from junitview import __version__
from junitview.cli.formatters import build_suite_table, format_summary_json
from junitview.config import Settings, get_settings
from junitview.core.exceptions import NoReportsFoundError, SourceNotFoundError
from junitview.logging import configure_logging, get_logger
from junitview.navigation.navigator import Navigator
from junitview.reports.report_set import ReportSet
from junitview.sources import discover_sources, read_sources
from junitview.tui.browser import run_browser
from junitview.tui.renderer import BrowserRenderer

app = typer.Typer(
    name="junitview",
    help="Browse JUnit XML test reports in the terminal",
    no_args_is_help=True,
)

logger = get_logger(__name__)

PathArgument = Annotated[
    Path,
    typer.Argument(help="Path to a JUnit XML file or a directory containing XML files"),
]
GlobOption = Annotated[
    str | None,
    typer.Option("--glob", help="File pattern used for directories (default: *.xml)"),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option("--log-level", help="Log level for stderr diagnostics"),
]


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"junitview {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Browse JUnit XML test reports in the terminal."""


def _setup(log_level: str | None) -> Settings:
    settings = get_settings()
    configure_logging(
        log_level=log_level or settings.log_level,
        json_format=settings.log_json_format,
    )
    return settings


def load_report_set(path: Path, pattern: str, settings: Settings, err: Console) -> ReportSet:
    """Discover and parse report files, exiting on unrecoverable startup errors."""
    try:
        files = discover_sources(path, pattern)
    except (SourceNotFoundError, NoReportsFoundError) as e:
        err.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    report_set = ReportSet.load(read_sources(files), max_workers=settings.max_workers)
    logger.info("report set ready", path=str(path), reports=len(report_set))
    return report_set


def _print_failures(report_set: ReportSet, err: Console) -> None:
    for failure in report_set.failures:
        name, reason = escape(failure.source_name), escape(failure.reason)
        err.print(f"[yellow]Warning:[/yellow] could not load {name}: {reason}")


@app.command()
def browse(
    path: PathArgument,
    glob: GlobOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Open the interactive report browser.

    Keys: j/k or arrows move, g/G jump, Enter opens, Esc goes back,
    Tab/Shift-Tab switch files, q quits.
    """
    settings = _setup(log_level)
    err = Console(stderr=True)
    report_set = load_report_set(path, glob or settings.file_glob, settings, err)

    navigator = Navigator(report_set, page_size=settings.page_size)
    run_browser(navigator, renderer=BrowserRenderer())

    _print_failures(report_set, err)
    raise typer.Exit(code=1 if report_set.is_empty else 0)


@app.command()
def summary(
    path: PathArgument,
    output_format: Annotated[
        str,
        typer.Option("-f", "--output-format", help="Output format (text, json)"),
    ] = "text",
    glob: GlobOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Print the suites of every report without entering the browser."""
    settings = _setup(log_level)
    err = Console(stderr=True)
    report_set = load_report_set(path, glob or settings.file_glob, settings, err)

    if output_format == "json":
        typer.echo(format_summary_json(report_set))
    else:
        console = Console()
        for report in report_set:
            console.print(build_suite_table(report))
        console.print(BrowserRenderer.render_totals(report_set.totals))
        _print_failures(report_set, err)

    raise typer.Exit(code=1 if report_set.is_empty else 0)
