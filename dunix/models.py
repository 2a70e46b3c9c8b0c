"""Data models for closure vertices and store path info."""

from dataclasses import dataclass, field
from enum import Enum


class SortMetric(str, Enum):
    """Metrics a vertex's references can be ordered by.

    Members are declared in column order, so `column` doubles as the index of
    the metric among the table's metric columns.
    """

    NAR = "nar"
    CLOSURE = "closure"
    REMOVAL_IMPACT = "removal-impact"
    REFERENCES = "references"
    REFERRERS = "referrers"

    @property
    def column(self) -> int:
        return list(SortMetric).index(self)

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def hotkey(self) -> str:
        return _HOTKEYS[self]


_LABELS = {
    SortMetric.NAR: "nar size",
    SortMetric.CLOSURE: "closure size",
    SortMetric.REMOVAL_IMPACT: "removal impact",
    SortMetric.REFERENCES: "references",
    SortMetric.REFERRERS: "referrers",
}

_HOTKEYS = {
    SortMetric.NAR: "n",
    SortMetric.CLOSURE: "c",
    SortMetric.REMOVAL_IMPACT: "i",
    SortMetric.REFERENCES: "r",
    SortMetric.REFERRERS: "R",
}


@dataclass(frozen=True)
class PathInfo:
    """What the store knows about a single path."""

    nar_size: int
    references: tuple[str, ...] = ()


@dataclass(eq=False)
class Vertex:
    """A store path in the closure graph.

    Vertices compare and hash by identity; the graph registry guarantees one
    vertex per store path.
    """

    path: str
    nar_size: int = 0  # set once the store has been queried
    references: list["Vertex"] = field(default_factory=list)  # paths this one refers to
    referrers: list["Vertex"] = field(default_factory=list)  # paths that refer to this one

    sorted_by: SortMetric | None = None
    cursor: int = 0

    closure_size_cache: int | None = field(default=None, repr=False)
    removal_impact_cache: int | None = field(default=None, repr=False)

    def __repr__(self) -> str:
        return f"Vertex({self.path!r}, nar_size={self.nar_size})"

    def shift_cursor(self, by: int) -> None:
        """Move the cursor by `by`, clamped to the reference list."""
        if not self.references:
            return
        self.cursor = max(0, min(self.cursor + by, len(self.references) - 1))
