"""Browse command - interactive closure breakdown."""

from __future__ import annotations

from typing import Callable

import click
from rich.console import Console
from rich.live import Live

from ..models import SortMetric
from ..navigator import (
    ASCEND,
    DESCEND,
    JUMP_END,
    JUMP_START,
    PAGE_SIZE,
    QUIT,
    TOGGLE_FULL_PATH,
    Command,
    Navigator,
)
from .render import render_view

ESCAPE = "\x1b"
CTRL_B = "\x02"
CTRL_D = "\x04"
CTRL_F = "\x06"
CTRL_U = "\x15"

# POSIX escape sequences first, then the Windows console scan codes
# click.getchar reports with a "\xe0" or "\x00" prefix.
_ARROWS = {
    "up": ("\x1b[A", "\x1bOA", "\xe0H", "\x00H"),
    "down": ("\x1b[B", "\x1bOB", "\xe0P", "\x00P"),
    "right": ("\x1b[C", "\x1bOC", "\xe0M", "\x00M"),
    "left": ("\x1b[D", "\x1bOD", "\xe0K", "\x00K"),
    "page_up": ("\x1b[5~", "\xe0I", "\x00I"),
    "page_down": ("\x1b[6~", "\xe0Q", "\x00Q"),
}


def _build_keymap() -> dict[str, Command]:
    keymap: dict[str, Command] = {
        "q": QUIT,
        ESCAPE: QUIT,
        "h": ASCEND,
        "l": DESCEND,
        "\r": DESCEND,
        "\n": DESCEND,
        "k": Command.move(-1),
        "j": Command.move(1),
        "g": JUMP_START,
        "G": JUMP_END,
        "f": TOGGLE_FULL_PATH,
        CTRL_D: Command.move(PAGE_SIZE),
        CTRL_F: Command.move(PAGE_SIZE),
        CTRL_U: Command.move(-PAGE_SIZE),
        CTRL_B: Command.move(-PAGE_SIZE),
    }
    for metric in SortMetric:
        keymap[metric.hotkey] = Command.sort_by(metric)

    by_arrow = {
        "up": Command.move(-1),
        "down": Command.move(1),
        "right": DESCEND,
        "left": ASCEND,
        "page_up": Command.move(-PAGE_SIZE),
        "page_down": Command.move(PAGE_SIZE),
    }
    for arrow, sequences in _ARROWS.items():
        for seq in sequences:
            keymap[seq] = by_arrow[arrow]
    return keymap


KEYMAP = _build_keymap()


def command_for_key(key: str) -> Command | None:
    """Translate a key as returned by click.getchar; None if unbound."""
    return KEYMAP.get(key)


def read_key() -> str:
    """Block for one key press."""
    try:
        return click.getchar()
    except EOFError:
        # click.getchar turns ctrl-d into EOFError on POSIX.
        return CTRL_D
    except KeyboardInterrupt:
        return ESCAPE


def run_browse(
    navigator: Navigator,
    *,
    console: Console | None = None,
    read_key: Callable[[], str] = read_key,
) -> None:
    """
    Run the render/read/dispatch loop until the navigator quits.

    Draws on the alternate screen and restores the terminal on exit.
    """
    console = console or Console()

    with Live(console=console, screen=True, auto_refresh=False, transient=True) as live:
        while navigator.running:
            live.update(render_view(navigator, height=console.size.height), refresh=True)
            command = command_for_key(read_key())
            if command is not None:
                navigator.dispatch(command)
