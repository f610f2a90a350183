"""Exceptions raised for unrecoverable setup failures."""

from __future__ import annotations

from pathlib import Path

__all__ = ["ProtonUsageError", "SteamConfigError", "SteamHomeNotFoundError"]


class ProtonUsageError(Exception):
    """Base class for errors that abort a report."""


class SteamHomeNotFoundError(ProtonUsageError):
    """Raised when no Steam home directory can be located."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        if path is None:
            super().__init__("Couldn't find Steam directory")
        else:
            super().__init__(f"Steam directory '{path}' does not exist")


class SteamConfigError(ProtonUsageError):
    """Raised when a required Steam file cannot be read."""

    def __init__(self, path: Path, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Couldn't open file '{path}': {error.strerror or error}")
