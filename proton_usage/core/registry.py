"""Install state and names of apps from Steam's registry.vdf.

The relevant part of registry.vdf looks like::

    "apps"
    {
        "12345"
        {
            "installed"     "1"
            "Updating"      "0"
            "Running"       "0"
            "name"          "Some Game"
        }
    }

Not every app carries a ``name`` key, which is why names are also looked
up in other files later on.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from proton_usage.core.models import AppId, InstallState
from proton_usage.core.text_vdf import KeyHandler, parse_vdf_keys

__all__ = ["Registry", "RegistryEntry", "parse_registry"]

logger = logging.getLogger("protonusage.registry")

SECTION = "apps"


@dataclass(frozen=True)
class RegistryEntry:
    """Registry data of a single app.

    Attributes:
        name: App name, if registry.vdf has one.
        install_state: Parsed ``installed`` value; UNKNOWN until seen.
    """

    name: str | None = None
    install_state: InstallState = InstallState.UNKNOWN


@dataclass(frozen=True)
class Registry:
    """Read-only view of the apps section of registry.vdf."""

    entries: Mapping[AppId, RegistryEntry] = field(default_factory=lambda: MappingProxyType({}))

    def get(self, app_id: AppId) -> RegistryEntry | None:
        return self.entries.get(app_id)

    def __contains__(self, app_id: object) -> bool:
        return app_id in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def app_is_installed(self, app_id: AppId) -> bool:
        entry = self.entries.get(app_id)
        return entry is not None and entry.install_state is InstallState.INSTALLED

    def app_names(self) -> dict[AppId, str]:
        """Returns the names of all apps that have one."""
        return {app_id: entry.name for app_id, entry in self.entries.items() if entry.name}


def _parse_installed(value: str, app_id: AppId, entries: dict[AppId, RegistryEntry]) -> None:
    entry = entries.get(app_id, RegistryEntry())
    entries[app_id] = dataclasses.replace(entry, install_state=InstallState.from_registry_value(value))


def _parse_name(name: str, app_id: AppId, entries: dict[AppId, RegistryEntry]) -> None:
    entry = entries.get(app_id, RegistryEntry())
    entries[app_id] = dataclasses.replace(entry, name=name)


_HANDLERS: dict[str, KeyHandler[dict[AppId, RegistryEntry]]] = {
    "installed": _parse_installed,
    "name": _parse_name,
}


def parse_registry(config_lines: Iterable[str], app_ids: Collection[AppId] | None = None) -> Registry:
    """Parses install states and names from registry.vdf.

    Args:
        config_lines: Lines of registry.vdf.
        app_ids: If given, only these apps are recorded.

    Returns:
        The parsed registry; empty if the apps section is missing.
    """
    entries = parse_vdf_keys(SECTION, config_lines, _HANDLERS, {}, whitelist=app_ids)
    logger.debug("Found %d app(s) in registry", len(entries))
    return Registry(MappingProxyType(entries))
