"""Interactive event loop: render, read a key, dispatch, repeat."""

from __future__ import annotations

from collections.abc import Callable

import click
from rich.console import Console

from junitview.navigation.navigator import Navigator
from junitview.tui.keys import read_command
from junitview.tui.renderer import BrowserRenderer


def run_browser(
    navigator: Navigator,
    console: Console | None = None,
    getchar: Callable[[], str] = click.getchar,
    renderer: BrowserRenderer | None = None,
) -> None:
    """Drive the navigator from key presses until it is told to quit.

    Args:
        navigator: Holds the report set and the navigation state.
        console: Console to draw on; the alternate screen is used when it is a terminal.
        getchar: Blocking single-key reader.
        renderer: Renderer for snapshots.
    """
    console = console or Console()
    renderer = renderer or BrowserRenderer()

    with console.screen(hide_cursor=True) as screen:
        while not navigator.should_quit:
            screen.update(renderer.render(navigator.snapshot(), console.size.height))
            command = read_command(getchar)
            if command is not None:
                navigator.dispatch(command)
