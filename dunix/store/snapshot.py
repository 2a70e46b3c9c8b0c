"""
Store snapshots loaded from `nix path-info --json --recursive` output.

Both JSON layouts Nix has produced are accepted:

    [{"path": "/nix/store/...", "narSize": 123, "references": [...]}, ...]

    {"/nix/store/...": {"narSize": 123, "references": [...]}, ...}

In the keyed layout an invalid path maps to null.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import ResolutionError, StoreQueryError
from ..models import PathInfo
from .base import DEFAULT_STORE_DIR, follow_links, path_name


def _parse_entry(path: str, raw: Any) -> PathInfo | None:
    if raw is None or not isinstance(raw, dict):
        return None
    if raw.get("valid") is False:
        return None

    nar_size = raw.get("narSize", 0)
    if not isinstance(nar_size, int) or nar_size < 0:
        raise ValueError(f"{path}: narSize must be a non-negative integer")

    references = raw.get("references", [])
    if not isinstance(references, list) or not all(isinstance(r, str) for r in references):
        raise ValueError(f"{path}: references must be a list of paths")

    return PathInfo(nar_size=nar_size, references=tuple(references))


class SnapshotStore:
    """Store answering from an in-memory table of path infos."""

    def __init__(
        self,
        infos: dict[str, PathInfo | None],
        store_dir: str = DEFAULT_STORE_DIR,
    ) -> None:
        self._infos = dict(infos)
        self.store_dir = store_dir.rstrip("/")

    @classmethod
    def from_json(cls, path: Path, store_dir: str = DEFAULT_STORE_DIR) -> "SnapshotStore":
        """Load a snapshot file. Raises ValueError on malformed content."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: not valid JSON ({e})") from e
        except UnicodeDecodeError as e:
            raise ValueError(f"{path}: not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise ValueError(f"cannot read {path}: {e.strerror or e}") from e
        return cls.from_data(data, store_dir=store_dir)

    @classmethod
    def from_data(cls, data: Any, store_dir: str = DEFAULT_STORE_DIR) -> "SnapshotStore":
        infos: dict[str, PathInfo | None] = {}
        if isinstance(data, list):
            for raw in data:
                if not isinstance(raw, dict) or not isinstance(raw.get("path"), str):
                    raise ValueError("every entry needs a 'path' string")
                infos[raw["path"]] = _parse_entry(raw["path"], raw)
        elif isinstance(data, dict):
            for key, raw in data.items():
                infos[key] = _parse_entry(key, raw)
        else:
            raise ValueError("expected a JSON list or object")
        return cls(infos, store_dir=store_dir)

    def __len__(self) -> int:
        return len(self._infos)

    def resolve(self, name: str) -> str:
        if name in self._infos:
            return self._checked(name, name)

        linked = follow_links(name, self.store_dir)
        if linked is not None and linked in self._infos:
            return self._checked(name, linked)

        by_basename = f"{self.store_dir}/{name}"
        if by_basename in self._infos:
            return self._checked(name, by_basename)

        matches = [p for p in self._infos if path_name(p) == name]
        if len(matches) == 1:
            return self._checked(name, matches[0])
        if len(matches) > 1:
            raise ResolutionError(name, f"ambiguous, matches {len(matches)} paths")

        raise ResolutionError(name, "not in snapshot")

    def _checked(self, name: str, path: str) -> str:
        if self._infos[path] is None:
            raise ResolutionError(name, f"{path} is not valid")
        return path

    def query_info(self, path: str) -> PathInfo:
        if path not in self._infos:
            raise StoreQueryError(path, "not in snapshot")
        info = self._infos[path]
        if info is None:
            raise StoreQueryError(path, "path is not valid")
        return info
