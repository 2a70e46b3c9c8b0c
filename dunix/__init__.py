"""dunix - disk usage breakdowns for Nix store paths."""

__version__ = "0.1.0"
