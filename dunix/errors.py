"""Exceptions raised while resolving, querying or configuring."""

from __future__ import annotations


class DunixError(Exception):
    """Base class for errors reported to the user."""


class ResolutionError(DunixError):
    """A name does not denote a valid store path."""

    def __init__(self, name: str, reason: str | None = None):
        self.name = name
        self.reason = reason
        message = f"'{name}' is not a valid store path"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StoreQueryError(DunixError):
    """The store could not describe a path reachable from the root."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot query info for '{path}': {reason}")


class ConfigError(DunixError):
    """The configuration file is malformed."""
