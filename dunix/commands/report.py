"""Report command - one-shot breakdown of the root path."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

from rich.console import Console

from ..closure import closure_size, removal_impact
from ..models import Vertex
from ..navigator import Navigator
from ..store import path_name
from .render import render_view


def _reference_entry(navigator: Navigator, vertex: Vertex) -> dict[str, Any]:
    row = asdict(navigator.row(vertex))
    row["name"] = path_name(vertex.path)
    return {"path": vertex.path, **row}


def report_payload(navigator: Navigator) -> dict[str, Any]:
    """JSON-ready summary of the root and its sorted direct references.

    Paths are always full store paths and names always short, whatever the
    display mode.
    """
    root = navigator.root
    return {
        "path": root.path,
        "name": path_name(root.path),
        "nar_size": root.nar_size,
        "closure_size": closure_size(root),
        "removal_impact": removal_impact(root),
        "sort": navigator.sort_metric.value,
        "references": [_reference_entry(navigator, v) for v in navigator.children()],
    }


def run_report(navigator: Navigator, *, fmt: str = "text", console: Console | None = None) -> int:
    """Print the root's breakdown once. Returns the exit code."""
    if fmt == "json":
        print(json.dumps(report_payload(navigator), indent=2))
        return 0

    console = console or Console()
    console.print(render_view(navigator, highlight_cursor=False))
    return 0
