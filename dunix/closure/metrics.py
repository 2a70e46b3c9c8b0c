"""Derived size metrics over an already-built closure graph."""

from __future__ import annotations

from collections import deque

from ..models import Vertex


def reachable(start: Vertex) -> list[Vertex]:
    """Get every vertex reachable from start via references, start included.

    Each vertex appears once, in breadth-first order.
    """
    seen = {start}
    order = [start]
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for ref in current.references:
            if ref in seen:
                continue
            seen.add(ref)
            order.append(ref)
            queue.append(ref)

    return order


def closure_size(vertex: Vertex) -> int:
    """Sum of nar sizes over the vertex's closure."""
    if vertex.closure_size_cache is None:
        vertex.closure_size_cache = sum(v.nar_size for v in reachable(vertex))
    return vertex.closure_size_cache


def removal_impact(vertex: Vertex) -> int:
    """Space freed from the root's closure if the vertex's parent dropped it.

    Zero when something else still refers to the vertex. Otherwise the vertex's
    own size plus every closure member that is only referred to from inside
    the closure.
    """
    if vertex.removal_impact_cache is not None:
        return vertex.removal_impact_cache

    if len(vertex.referrers) > 1:
        vertex.removal_impact_cache = 0
        return 0

    closure = reachable(vertex)
    members = set(closure)

    # The vertex's own referrer lies outside its closure, so it is counted
    # here rather than in the loop.
    impact = vertex.nar_size
    for member in closure:
        if member is vertex:
            continue
        if all(referrer in members for referrer in member.referrers):
            impact += member.nar_size

    vertex.removal_impact_cache = impact
    return impact
