"""Closure graph engine: construction, size metrics and ordering."""

from .graph import ClosureGraph, build_closure
from .metrics import closure_size, reachable, removal_impact
from .sort import metric_value, sorted_references

__all__ = [
    "ClosureGraph",
    "build_closure",
    "closure_size",
    "reachable",
    "removal_impact",
    "metric_value",
    "sorted_references",
]
