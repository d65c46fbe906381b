"""Key bindings for the browser.

Keys arrive as the strings returned by ``click.getchar``: printable
characters, control characters, or raw escape sequences for special keys
(ANSI on POSIX, ``\\xe0``/``\\x00`` prefixed scan codes on Windows).
"""

from __future__ import annotations

from collections.abc import Callable

import click

from junitview.navigation.state import Command

KEY_BINDINGS: dict[str, Command] = {
    # quit
    "q": Command.QUIT,
    "\x03": Command.QUIT,  # Ctrl-C
    "\x04": Command.QUIT,  # Ctrl-D
    # move
    "j": Command.MOVE_DOWN,
    "\x1b[B": Command.MOVE_DOWN,
    "\xe0P": Command.MOVE_DOWN,
    "\x00P": Command.MOVE_DOWN,
    "k": Command.MOVE_UP,
    "\x1b[A": Command.MOVE_UP,
    "\xe0H": Command.MOVE_UP,
    "\x00H": Command.MOVE_UP,
    # jump
    "g": Command.JUMP_FIRST,
    "\x1b[H": Command.JUMP_FIRST,
    "\x1b[1~": Command.JUMP_FIRST,
    "\x1bOH": Command.JUMP_FIRST,
    "\xe0G": Command.JUMP_FIRST,
    "G": Command.JUMP_LAST,
    "\x1b[F": Command.JUMP_LAST,
    "\x1b[4~": Command.JUMP_LAST,
    "\x1bOF": Command.JUMP_LAST,
    "\xe0O": Command.JUMP_LAST,
    # page
    "\x1b[6~": Command.PAGE_DOWN,
    "\xe0Q": Command.PAGE_DOWN,
    "\x1b[5~": Command.PAGE_UP,
    "\xe0I": Command.PAGE_UP,
    # drill down
    "\r": Command.ENTER,
    "\n": Command.ENTER,
    "l": Command.ENTER,
    "\x1b[C": Command.ENTER,
    "\xe0M": Command.ENTER,
    # drill up
    "\x1b": Command.BACK,
    "h": Command.BACK,
    "\x1b[D": Command.BACK,
    "\xe0K": Command.BACK,
    "\x7f": Command.BACK,
    "\x08": Command.BACK,
    # files
    "\t": Command.NEXT_FILE,
    "\x1b[Z": Command.PREV_FILE,
}


def command_for_key(key: str) -> Command | None:
    """Map a key to its command; unbound keys map to None."""
    return KEY_BINDINGS.get(key)


def read_command(getchar: Callable[[], str] = click.getchar) -> Command | None:
    """Block for one key press and translate it.

    Ctrl-C and Ctrl-D, which click raises as exceptions in raw mode, are
    turned into ``Command.QUIT``.
    """
    try:
        key = getchar()
    except (KeyboardInterrupt, EOFError):
        return Command.QUIT
    return command_for_key(key)
