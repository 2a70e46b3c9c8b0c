"""Live Nix store access through the `nix-store` command."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

from ..errors import ResolutionError, StoreQueryError
from ..models import PathInfo
from .base import DEFAULT_STORE_DIR, follow_links

logger = logging.getLogger(__name__)


class _CommandFailed(Exception):
    pass


@dataclass(frozen=True)
class NixStoreConfig:
    store_dir: str = DEFAULT_STORE_DIR
    nix_store: str = "nix-store"


class NixStore:
    """Store backed by the local Nix store.

    Each `query_info` runs `nix-store --query` twice, once for the nar size
    and once for the references.
    """

    def __init__(self, cfg: NixStoreConfig | None = None) -> None:
        self._cfg = cfg or NixStoreConfig()

    def _run(self, *args: str) -> str:
        cmd = [self._cfg.nix_store, *args]
        logger.debug("running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise _CommandFailed(f"cannot run {self._cfg.nix_store}: {e}") from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            raise _CommandFailed(detail)
        return result.stdout

    def resolve(self, name: str) -> str:
        store_path = follow_links(name, self._cfg.store_dir)
        if store_path is None:
            raise ResolutionError(name, f"path is not in {self._cfg.store_dir}")

        try:
            self._run("--check-validity", store_path)
        except _CommandFailed as e:
            raise ResolutionError(name, str(e)) from e
        return store_path

    def query_info(self, path: str) -> PathInfo:
        try:
            size_out = self._run("--query", "--size", path)
            refs_out = self._run("--query", "--references", path)
        except _CommandFailed as e:
            raise StoreQueryError(path, str(e)) from e

        try:
            nar_size = int(size_out.strip())
        except ValueError as e:
            raise StoreQueryError(path, f"unexpected size output {size_out.strip()!r}") from e

        references = tuple(line.strip() for line in refs_out.splitlines() if line.strip())
        return PathInfo(nar_size=nar_size, references=references)
