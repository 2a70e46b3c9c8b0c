import io

import pytest
from rich.console import Console

from dunix.commands.browse import CTRL_D, CTRL_U, ESCAPE, command_for_key, run_browse
from dunix.commands.render import render_view, show_size, visible_window
from dunix.models import SortMetric
from dunix.navigator import ASCEND, DESCEND, JUMP_END, QUIT, Command, Navigator


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0  B"),
        (1, "1  B"),
        (999, "999  B"),
        (1000, "1000  B"),
        (1023, "1023  B"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (226560, "221 KB"),
        (5 * 1024**3, "5 GB"),
        (1000 * 1024, "1000 KB"),
        (3 * 1024**5, "3072 TB"),
    ],
)
def test_show_size(size: int, expected: str) -> None:
    assert show_size(size) == expected


def test_visible_window_keeps_cursor_in_view() -> None:
    assert visible_window(0, 5, 10) == (0, 5)
    assert visible_window(0, 100, 10) == (0, 10)
    assert visible_window(50, 100, 10) == (45, 55)
    assert visible_window(99, 100, 10) == (90, 100)
    assert visible_window(3, 100, 0) == (3, 4)


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("q", QUIT),
        (ESCAPE, QUIT),
        ("h", ASCEND),
        ("\x1b[D", ASCEND),
        ("l", DESCEND),
        ("\r", DESCEND),
        ("\x1b[C", DESCEND),
        ("k", Command.move(-1)),
        ("\x1b[A", Command.move(-1)),
        ("j", Command.move(1)),
        ("\xe0P", Command.move(1)),
        ("G", JUMP_END),
        (CTRL_D, Command.move(10)),
        (CTRL_U, Command.move(-10)),
        ("\x1b[5~", Command.move(-10)),
        ("n", Command.sort_by(SortMetric.NAR)),
        ("i", Command.sort_by(SortMetric.REMOVAL_IMPACT)),
        ("r", Command.sort_by(SortMetric.REFERENCES)),
        ("R", Command.sort_by(SortMetric.REFERRERS)),
    ],
)
def test_key_bindings(key: str, expected: Command) -> None:
    assert command_for_key(key) == expected


def test_unbound_keys_are_ignored() -> None:
    assert command_for_key("x") is None
    assert command_for_key("\x1b[Z") is None


def _console() -> Console:
    return Console(file=io.StringIO(), width=120, height=40, color_system=None, force_terminal=False)


def test_render_view_shows_breadcrumb_and_rows(make_graph, shared_layout) -> None:
    nav = Navigator(make_graph(shared_layout).root, sort_metric=SortMetric.CLOSURE)
    nav.dispatch(DESCEND)
    console = _console()

    console.print(render_view(nav, height=40))
    out = console.file.getvalue()

    assert "dunix" in out
    assert "root → c" in out
    assert "removal impact" in out
    assert "b" in out
    assert "5  B" in out


def test_render_view_marks_shared_crumbs(make_graph, shared_layout) -> None:
    nav = Navigator(make_graph(shared_layout).root)
    nav.dispatch(DESCEND)
    nav.dispatch(DESCEND)
    console = _console()

    console.print(render_view(nav))

    assert "⇉ b" in console.file.getvalue()
    assert "no references" in console.file.getvalue()


def test_run_browse_applies_keys_until_quit(make_graph, store_path, shared_layout) -> None:
    nav = Navigator(make_graph(shared_layout).root, sort_metric=SortMetric.NAR)
    keys = iter(["j", "x", "l", "l", "h", "q", "j"])

    run_browse(nav, console=_console(), read_key=lambda: next(keys))

    assert nav.running is False
    assert [v.path for v in nav.breadcrumb] == [store_path("root"), store_path("a")]
    # The key after "q" is never read.
    assert next(keys) == "j"
