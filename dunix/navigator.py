"""Navigation through a closure graph.

The navigator holds the breadcrumb from the root to the vertex being viewed.
Each vertex keeps its own cursor, so going back into a vertex restores the
previous selection. Every command is total: one whose precondition does not
hold leaves the state untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .closure import closure_size, removal_impact, sorted_references
from .models import SortMetric, Vertex
from .store import format_path

PAGE_SIZE = 10


class Action(str, Enum):
    DESCEND = "descend"
    ASCEND = "ascend"
    MOVE_CURSOR = "move_cursor"
    JUMP_START = "jump_start"
    JUMP_END = "jump_end"
    SET_SORT_METRIC = "set_sort_metric"
    TOGGLE_FULL_PATH = "toggle_full_path"
    QUIT = "quit"


@dataclass(frozen=True)
class Command:
    action: Action
    delta: int = 0
    metric: SortMetric | None = None

    @classmethod
    def move(cls, delta: int) -> "Command":
        return cls(Action.MOVE_CURSOR, delta=delta)

    @classmethod
    def sort_by(cls, metric: SortMetric) -> "Command":
        return cls(Action.SET_SORT_METRIC, metric=metric)


DESCEND = Command(Action.DESCEND)
ASCEND = Command(Action.ASCEND)
JUMP_START = Command(Action.JUMP_START)
JUMP_END = Command(Action.JUMP_END)
TOGGLE_FULL_PATH = Command(Action.TOGGLE_FULL_PATH)
QUIT = Command(Action.QUIT)


@dataclass(frozen=True)
class ReferenceRow:
    """One table row describing a direct reference."""

    name: str
    nar_size: int
    closure_size: int
    removal_impact: int
    references: int
    referrers: int


@dataclass(frozen=True)
class Crumb:
    name: str
    shared: bool  # reached from more than one referrer


class Navigator:
    def __init__(
        self,
        root: Vertex,
        *,
        sort_metric: SortMetric = SortMetric.REMOVAL_IMPACT,
        full_path: bool = False,
    ) -> None:
        self.breadcrumb: list[Vertex] = [root]
        self.sort_metric = sort_metric
        self.full_path = full_path
        self.running = True

    @property
    def root(self) -> Vertex:
        return self.breadcrumb[0]

    @property
    def current(self) -> Vertex:
        return self.breadcrumb[-1]

    @property
    def cursor(self) -> int:
        return self.current.cursor

    @property
    def sort_column(self) -> int:
        return self.sort_metric.column

    def children(self) -> list[Vertex]:
        """The current vertex's references in display order."""
        return sorted_references(self.current, self.sort_metric)

    def selected(self) -> Vertex | None:
        children = self.children()
        if not children:
            return None
        return children[self.current.cursor]

    def format(self, vertex: Vertex) -> str:
        return format_path(vertex.path, self.full_path)

    def row(self, vertex: Vertex) -> ReferenceRow:
        return ReferenceRow(
            name=self.format(vertex),
            nar_size=vertex.nar_size,
            closure_size=closure_size(vertex),
            removal_impact=removal_impact(vertex),
            references=len(vertex.references),
            referrers=len(vertex.referrers),
        )

    def rows(self) -> list[ReferenceRow]:
        return [self.row(v) for v in self.children()]

    def crumbs(self) -> list[Crumb]:
        return [
            Crumb(name=self.format(v), shared=i > 0 and len(v.referrers) > 1)
            for i, v in enumerate(self.breadcrumb)
        ]

    # Transitions

    def descend(self) -> bool:
        selected = self.selected()
        if selected is None:
            return False
        self.breadcrumb.append(selected)
        return True

    def ascend(self) -> bool:
        if len(self.breadcrumb) <= 1:
            return False
        self.breadcrumb.pop()
        return True

    def move_cursor(self, delta: int) -> bool:
        before = self.current.cursor
        self.current.shift_cursor(delta)
        return self.current.cursor != before

    def jump_start(self) -> bool:
        return self.move_cursor(-len(self.current.references))

    def jump_end(self) -> bool:
        return self.move_cursor(len(self.current.references))

    def set_sort_metric(self, metric: SortMetric) -> bool:
        if metric is self.sort_metric:
            return False
        self.sort_metric = metric
        return True

    def toggle_full_path(self) -> bool:
        self.full_path = not self.full_path
        return True

    def quit(self) -> bool:
        self.running = False
        return True

    def dispatch(self, command: Command) -> bool:
        """Apply a command. Returns whether anything changed."""
        action = command.action
        if action is Action.DESCEND:
            return self.descend()
        if action is Action.ASCEND:
            return self.ascend()
        if action is Action.MOVE_CURSOR:
            return self.move_cursor(command.delta)
        if action is Action.JUMP_START:
            return self.jump_start()
        if action is Action.JUMP_END:
            return self.jump_end()
        if action is Action.SET_SORT_METRIC:
            if command.metric is None:
                return False
            return self.set_sort_metric(command.metric)
        if action is Action.TOGGLE_FULL_PATH:
            return self.toggle_full_path()
        if action is Action.QUIT:
            return self.quit()
        return False
