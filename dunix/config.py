"""Optional TOML configuration.

    sort = "closure"
    full_path = true
    store_dir = "/nix/store"
    nix_store = "nix-store"

Command-line options win over the file; unknown keys are ignored.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .models import SortMetric
from .store import DEFAULT_STORE_DIR


@dataclass(frozen=True)
class Config:
    sort: SortMetric = SortMetric.REMOVAL_IMPACT
    full_path: bool = False
    store_dir: str = DEFAULT_STORE_DIR
    nix_store: str = "nix-store"


def default_config_path() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "dunix" / "config.toml"


def parse_sort_metric(value: str) -> SortMetric:
    """Accept metric names with either dashes or underscores, any case."""
    normalized = value.strip().lower().replace("_", "-")
    try:
        return SortMetric(normalized)
    except ValueError:
        choices = ", ".join(m.value for m in SortMetric)
        raise ConfigError(f"unknown sort metric '{value}' (expected one of: {choices})") from None


def _expect(data: dict[str, Any], key: str, kind: type, path: Path) -> Any:
    value = data[key]
    if not isinstance(value, kind):
        raise ConfigError(f"{path}: '{key}' must be a {kind.__name__}")
    return value


def load_config(path: Path | None = None) -> Config:
    """
    Load configuration from `path`, or the default location.

    A missing default file yields the defaults; an explicitly given file must
    exist.
    """
    import tomllib

    explicit = path is not None
    path = path or default_config_path()
    if not path.exists():
        if explicit:
            raise ConfigError(f"config file '{path}' does not exist")
        return Config()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path}: not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise ConfigError(f"cannot read config file '{path}': {e.strerror or e}") from e

    defaults = Config()
    sort = defaults.sort
    if "sort" in data:
        sort = parse_sort_metric(_expect(data, "sort", str, path))

    full_path = _expect(data, "full_path", bool, path) if "full_path" in data else defaults.full_path
    store_dir = _expect(data, "store_dir", str, path) if "store_dir" in data else defaults.store_dir
    nix_store = _expect(data, "nix_store", str, path) if "nix_store" in data else defaults.nix_store

    return Config(sort=sort, full_path=full_path, store_dir=store_dir, nix_store=nix_store)
