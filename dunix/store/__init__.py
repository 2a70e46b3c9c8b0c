"""Sources of store path information."""

from .base import (
    DEFAULT_STORE_DIR,
    Store,
    follow_links,
    format_path,
    path_name,
    to_store_path,
)
from .nix import NixStore, NixStoreConfig
from .snapshot import SnapshotStore

__all__ = [
    "DEFAULT_STORE_DIR",
    "Store",
    "follow_links",
    "format_path",
    "path_name",
    "to_store_path",
    "NixStore",
    "NixStoreConfig",
    "SnapshotStore",
]
