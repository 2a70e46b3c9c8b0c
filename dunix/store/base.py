"""Store protocol and store path helpers."""

from __future__ import annotations

import os
import posixpath
from typing import Protocol

from ..models import PathInfo

DEFAULT_STORE_DIR = "/nix/store"

# Length of the base-32 digest that prefixes every store path basename.
HASH_LENGTH = 32


class Store(Protocol):
    """Where closure information comes from."""

    def resolve(self, name: str) -> str:
        """Map a user-supplied name to a canonical store path.

        Raises ResolutionError if the name does not denote a valid path.
        """
        ...

    def query_info(self, path: str) -> PathInfo:
        """Return the nar size and direct references of a store path.

        Raises StoreQueryError if the store cannot answer.
        """
        ...


def to_store_path(path: str, store_dir: str = DEFAULT_STORE_DIR) -> str | None:
    """Truncate a path inside the store to its top-level store path.

    `/nix/store/abc-foo/bin/foo` becomes `/nix/store/abc-foo`. Returns None
    for paths outside the store.
    """
    store_dir = store_dir.rstrip("/")
    normalized = posixpath.normpath(path)
    prefix = store_dir + "/"
    if not normalized.startswith(prefix):
        return None
    rest = normalized[len(prefix):]
    top = rest.split("/", 1)[0]
    if not top or top in (".", ".."):
        return None
    return prefix + top


def follow_links(name: str, store_dir: str = DEFAULT_STORE_DIR) -> str | None:
    """Follow symlinks from `name` (e.g. `./result`) into the store."""
    candidate = os.path.abspath(name)
    store_path = to_store_path(candidate, store_dir)
    if store_path is not None:
        return store_path
    return to_store_path(os.path.realpath(candidate), store_dir)


def path_name(path: str) -> str:
    """The human part of a store path: `/nix/store/<hash>-hello-2.12` -> `hello-2.12`."""
    base = posixpath.basename(path.rstrip("/"))
    digest, sep, name = base.partition("-")
    if sep and name and len(digest) == HASH_LENGTH:
        return name
    return base


def format_path(path: str, full_path: bool) -> str:
    return path if full_path else path_name(path)
