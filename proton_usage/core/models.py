"""Shared data types for Steam app identifiers and install states.

Defines the id aliases used across the parsers, the closed InstallState
enum, and the immutable records produced by the builders and the
name resolution pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

__all__ = [
    "AppId",
    "DEFAULT_COMPAT_TOOL_APP_ID",
    "InstallState",
    "ResolvedApp",
    "SteamId64",
    "UserId",
    "unknown_app_name",
]

AppId: TypeAlias = int
UserId: TypeAlias = int
SteamId64: TypeAlias = int

# Steam stores the global default compatibility tool under app id 0
DEFAULT_COMPAT_TOOL_APP_ID: AppId = 0


class InstallState(Enum):
    """Install state of an app as reported by registry.vdf."""

    NOT_INSTALLED = "Not Installed"
    INSTALLED = "Installed"
    SHORTCUT = "Shortcut"
    UNKNOWN = "Unknown Install State"

    @classmethod
    def from_registry_value(cls, value: str) -> InstallState:
        """Classifies a raw ``installed`` value from registry.vdf.

        Args:
            value: Raw value string, e.g. "0" or "1".

        Returns:
            NOT_INSTALLED for "0", INSTALLED for "1", UNKNOWN otherwise.
        """
        if value == "0":
            return cls.NOT_INSTALLED
        if value == "1":
            return cls.INSTALLED
        return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


def unknown_app_name(app_id: AppId) -> str:
    """Placeholder name for an app no data source could name."""
    return f"Unknown (Id: {app_id})"


@dataclass(frozen=True)
class ResolvedApp:
    """An app ready for display in a report.

    Attributes:
        app_id: Steam app id (or shortcut id).
        display_name: Name from a data source, or the unknown placeholder.
        install_state: Install state shown next to the name.
    """

    app_id: AppId
    display_name: str
    install_state: InstallState = InstallState.UNKNOWN
