"""Pytest configuration and fixtures."""

import hashlib
from typing import Callable

import pytest

from dunix.closure import ClosureGraph, build_closure
from dunix.models import PathInfo
from dunix.store import DEFAULT_STORE_DIR, SnapshotStore

# name -> (nar size, names of direct references)
Layout = dict[str, tuple[int, list[str]]]


def _store_path(name: str) -> str:
    digest = hashlib.sha256(name.encode("utf-8")).hexdigest()[:32]
    return f"{DEFAULT_STORE_DIR}/{digest}-{name}"


def _make_store(layout: Layout) -> SnapshotStore:
    return SnapshotStore(
        {
            _store_path(name): PathInfo(nar_size=size, references=tuple(_store_path(r) for r in refs))
            for name, (size, refs) in layout.items()
        }
    )


class RecordingStore:
    """Wraps a store and records every info query."""

    def __init__(self, inner: SnapshotStore):
        self.inner = inner
        self.queries: list[str] = []

    def resolve(self, name: str) -> str:
        return self.inner.resolve(name)

    def query_info(self, path: str) -> PathInfo:
        self.queries.append(path)
        return self.inner.query_info(path)


@pytest.fixture
def store_path() -> Callable[[str], str]:
    """Store path for a short package name."""
    return _store_path


@pytest.fixture
def make_store() -> Callable[[Layout], SnapshotStore]:
    return _make_store


@pytest.fixture
def make_graph() -> Callable[..., ClosureGraph]:
    """Build a closure graph from a layout, rooted at `root`."""

    def _make(layout: Layout, root: str = "root") -> ClosureGraph:
        return build_closure(_make_store(layout), _store_path(root))

    return _make


@pytest.fixture
def chain_layout() -> Layout:
    """root -> a (10) -> b (5)."""
    return {
        "root": (0, ["a"]),
        "a": (10, ["b"]),
        "b": (5, []),
    }


@pytest.fixture
def shared_layout() -> Layout:
    """root -> {a, c}; a -> b; c -> b."""
    return {
        "root": (1, ["a", "c"]),
        "a": (10, ["b"]),
        "c": (20, ["b"]),
        "b": (5, []),
    }


@pytest.fixture
def wide_layout() -> Layout:
    """A root with many leaf references of distinct sizes."""
    leaves = {f"leaf{i:02d}": (100 + i, []) for i in range(25)}
    return {"root": (1, list(leaves)), **leaves}
