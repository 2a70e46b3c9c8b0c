"""Closure graph construction."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable

from ..models import Vertex
from ..store import Store

logger = logging.getLogger(__name__)


@dataclass
class ClosureGraph:
    """The closure of a root store path.

    `vertices` is the only owner of the graph's vertices; reference and
    referrer lists point back into it.
    """

    root: Vertex
    vertices: dict[str, Vertex] = field(default_factory=dict)  # store path -> Vertex

    @classmethod
    def build(
        cls,
        store: Store,
        name: str,
        on_visit: Callable[[int, str], None] | None = None,
    ) -> "ClosureGraph":
        """Resolve `name` and query the store for everything it references.

        Breadth-first, one `query_info` per distinct path. Store errors
        propagate and no graph is returned.
        """
        root_path = store.resolve(name)
        logger.debug("resolved %s to %s", name, root_path)

        root = Vertex(root_path)
        graph = cls(root=root, vertices={root_path: root})

        queue = deque([root_path])
        visited = 0

        while queue:
            path = queue.popleft()
            vertex = graph.vertices[path]
            info = store.query_info(path)
            vertex.nar_size = info.nar_size
            visited += 1
            logger.debug("queried %s: nar size %d, %d references", path, info.nar_size, len(info.references))
            if on_visit is not None:
                on_visit(visited, path)

            for ref_path in info.references:
                if ref_path == path:
                    continue

                existing = graph.vertices.get(ref_path)
                if existing is not None:
                    existing.referrers.append(vertex)
                    vertex.references.append(existing)
                    continue

                ref = Vertex(ref_path, referrers=[vertex])
                graph.vertices[ref_path] = ref
                vertex.references.append(ref)
                queue.append(ref_path)

        logger.info(
            "closure of %s: %d paths, %d references",
            root_path,
            len(graph.vertices),
            graph.edge_count,
        )
        return graph

    def __len__(self) -> int:
        return len(self.vertices)

    def __contains__(self, path: object) -> bool:
        return path in self.vertices

    def get(self, path: str) -> Vertex | None:
        return self.vertices.get(path)

    @property
    def edge_count(self) -> int:
        return sum(len(v.references) for v in self.vertices.values())

    def release(self) -> None:
        """Drop every vertex at once."""
        for vertex in self.vertices.values():
            vertex.references.clear()
            vertex.referrers.clear()
        self.vertices.clear()


def build_closure(
    store: Store,
    name: str,
    on_visit: Callable[[int, str], None] | None = None,
) -> ClosureGraph:
    """Build the closure graph of `name` from `store`."""
    return ClosureGraph.build(store, name, on_visit=on_visit)
