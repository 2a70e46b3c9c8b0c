"""Ordering of a vertex's references by a size metric."""

from __future__ import annotations

from typing import Callable

from ..models import SortMetric, Vertex
from .metrics import closure_size, removal_impact


def _removal_impact_key(v: Vertex) -> tuple[int, int]:
    # Zero impact is common, so nar size breaks ties.
    return (removal_impact(v), v.nar_size)


SORT_KEYS: dict[SortMetric, Callable[[Vertex], object]] = {
    SortMetric.NAR: lambda v: v.nar_size,
    SortMetric.CLOSURE: closure_size,
    SortMetric.REMOVAL_IMPACT: _removal_impact_key,
    SortMetric.REFERENCES: lambda v: len(v.references),
    SortMetric.REFERRERS: lambda v: len(v.referrers),
}


def metric_value(vertex: Vertex, metric: SortMetric) -> object:
    """The key a vertex is ordered by under `metric`."""
    return SORT_KEYS[metric](vertex)


def sorted_references(vertex: Vertex, metric: SortMetric) -> list[Vertex]:
    """Order the vertex's references by `metric`, largest first.

    Sorts `vertex.references` in place and returns it. The sort is stable and
    skipped entirely when the list is already ordered by the same metric.
    """
    if vertex.sorted_by is metric:
        return vertex.references

    vertex.references.sort(key=SORT_KEYS[metric], reverse=True)
    vertex.sorted_by = metric
    return vertex.references
