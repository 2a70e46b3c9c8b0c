"""Rich renderables for the navigator state."""

from __future__ import annotations

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from ..models import SortMetric
from ..navigator import Navigator

_UNITS = (" B", "KB", "MB", "GB", "TB")

# Panel borders, breadcrumb, rule, and the table's borders and header.
CHROME_LINES = 8


def show_size(size: int) -> str:
    """Human readable byte count, three significant digits without exponents."""
    if size <= 0:
        return "0  B"
    base = 0
    while base < len(_UNITS) - 1 and size >= 1024 ** (base + 1):
        base += 1
    value = size / 1024 ** base
    if value >= 100:
        return f"{value:.0f} {_UNITS[base]}"
    return f"{value:.3g} {_UNITS[base]}"


def visible_window(cursor: int, total: int, capacity: int) -> tuple[int, int]:
    """Slice bounds of the rows to draw so the cursor stays on screen."""
    if capacity <= 0:
        capacity = 1
    if total <= capacity:
        return 0, total
    start = min(max(cursor - capacity // 2, 0), total - capacity)
    return start, start + capacity


def metric_header(metric: SortMetric, active: bool) -> Text:
    """Column header with the metric's hotkey highlighted."""
    label = metric.label
    idx = label.lower().find(metric.hotkey.lower())
    header = Text(label[:idx])
    header.append(metric.hotkey, style="yellow")
    header.append(label[idx + 1:])
    if active:
        header.stylize("underline")
    return header


def render_breadcrumb(navigator: Navigator) -> Text:
    line = Text()
    for i, crumb in enumerate(navigator.crumbs()):
        if i > 0:
            if crumb.shared:
                line.append(" ⇉ ", style="red")
            else:
                line.append(" → ", style="green")
        line.append(crumb.name)
    return line


def render_table(
    navigator: Navigator,
    *,
    height: int | None = None,
    highlight_cursor: bool = True,
) -> Table:
    table = Table(box=box.SQUARE, expand=True, header_style="bold")
    table.add_column("name", ratio=1, no_wrap=True, overflow="ellipsis")
    for metric in SortMetric:
        table.add_column(
            metric_header(metric, metric is navigator.sort_metric),
            justify="right",
            no_wrap=True,
        )

    rows = navigator.rows()
    start, end = 0, len(rows)
    if height is not None:
        start, end = visible_window(navigator.cursor, len(rows), height - CHROME_LINES)

    for index in range(start, end):
        row = rows[index]
        style = "on blue" if highlight_cursor and index == navigator.cursor else None
        table.add_row(
            row.name,
            show_size(row.nar_size),
            show_size(row.closure_size),
            show_size(row.removal_impact),
            str(row.references),
            str(row.referrers),
            style=style,
        )

    if not rows:
        table.caption = "no references"
    return table


def render_view(
    navigator: Navigator,
    *,
    height: int | None = None,
    highlight_cursor: bool = True,
) -> Panel:
    """The whole screen: breadcrumb over the reference table."""
    return Panel(
        Group(
            render_breadcrumb(navigator),
            Rule(style="dim"),
            render_table(navigator, height=height, highlight_cursor=highlight_cursor),
        ),
        title="dunix",
        expand=True,
    )
