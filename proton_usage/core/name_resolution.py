"""Tiered lookup of app names across Steam's data sources.

No single file knows the name of every app: registry.vdf only names some
apps, the appinfo cache may be stale or missing, and non-Steam shortcuts
only appear in per-user shortcut files. Sources are therefore asked in a
fixed order, each one only for the ids that are still unnamed:

1. registry.vdf
2. appcache/appinfo.vdf
3. userdata/<id>/config/shortcuts.vdf
4. optionally, a remote lookup such as the Steam Store
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TypeAlias

from proton_usage.core import app_info, shortcuts
from proton_usage.core.models import AppId, unknown_app_name
from proton_usage.core.registry import Registry
from proton_usage.core.userdata import APP_INFO_PATH

__all__ = [
    "APP_INFO_SOURCE",
    "NameLookup",
    "NameSource",
    "REGISTRY_SOURCE",
    "REMOTE_SOURCE",
    "ResolvedNames",
    "SHORTCUTS_SOURCE",
    "default_name_sources",
    "resolve_app_names",
]

logger = logging.getLogger("protonusage.name_resolution")

REGISTRY_SOURCE = "registry"
APP_INFO_SOURCE = "appinfo"
SHORTCUTS_SOURCE = "shortcuts"
REMOTE_SOURCE = "remote"

# lookup(unresolved ids) -> names found
NameLookup: TypeAlias = Callable[[frozenset[AppId]], Mapping[AppId, str]]


@dataclass(frozen=True)
class NameSource:
    """One tier of the name lookup.

    Attributes:
        label: Short name used in logs and in ResolvedNames.sources.
        lookup: Callable receiving the ids still unresolved.
    """

    label: str
    lookup: NameLookup


@dataclass(frozen=True)
class ResolvedNames:
    """Result of a name lookup.

    Attributes:
        names: App id to name for every resolved id.
        sources: App id to the label of the tier that named it.
        unresolved: Requested ids no tier could name.
    """

    names: Mapping[AppId, str] = field(default_factory=lambda: MappingProxyType({}))
    sources: Mapping[AppId, str] = field(default_factory=lambda: MappingProxyType({}))
    unresolved: frozenset[AppId] = frozenset()

    def display_name(self, app_id: AppId) -> str:
        """Returns the resolved name, or the ``Unknown (Id: <id>)`` placeholder."""
        return self.names.get(app_id) or unknown_app_name(app_id)

    def resolved_by(self, app_id: AppId) -> str | None:
        return self.sources.get(app_id)


def resolve_app_names(app_ids: Iterable[AppId], sources: Sequence[NameSource]) -> ResolvedNames:
    """Resolves app names by asking each source in turn.

    A source is only asked for ids no earlier source could name, and no
    source is asked once every id is named. Names returned for ids that
    were not asked for are ignored.

    Args:
        app_ids: Ids that need a name.
        sources: Tiers in priority order.

    Returns:
        The resolved names and the ids that stayed unresolved.
    """
    remaining = set(app_ids)
    requested = len(remaining)
    names: dict[AppId, str] = {}
    resolved_by: dict[AppId, str] = {}

    for source in sources:
        if not remaining:
            logger.debug("All names resolved, skipping %s", source.label)
            continue

        found = source.lookup(frozenset(remaining))
        accepted = {app_id: name for app_id, name in found.items() if app_id in remaining and name}
        logger.debug("Found %d name(s) from %s", len(accepted), source.label)

        names.update(accepted)
        resolved_by.update(dict.fromkeys(accepted, source.label))
        remaining.difference_update(accepted)

    for app_id in sorted(remaining):
        logger.info("%d is possibly a deleted shortcut", app_id)

    logger.debug("Resolved %d of %d name(s)", len(names), requested)
    return ResolvedNames(
        names=MappingProxyType(names),
        sources=MappingProxyType(resolved_by),
        unresolved=frozenset(remaining),
    )


def default_name_sources(
    steam_home: Path,
    registry: Registry,
    name_lookup: Callable[[Iterable[AppId]], Mapping[AppId, str]] | None = None,
) -> list[NameSource]:
    """Builds the standard tiers for a Steam home directory.

    Args:
        steam_home: Steam home directory.
        registry: Already parsed registry.vdf.
        name_lookup: Optional remote lookup used as the last tier,
            e.g. ``SteamStoreClient.fetch_app_names``.

    Returns:
        The tiers in priority order.
    """
    registry_names = registry.app_names()
    app_info_path = steam_home / APP_INFO_PATH

    sources = [
        NameSource(REGISTRY_SOURCE, lambda ids: {i: registry_names[i] for i in ids if i in registry_names}),
        NameSource(APP_INFO_SOURCE, lambda ids: app_info.parse_names(app_info_path, sorted(ids))),
        NameSource(SHORTCUTS_SOURCE, lambda ids: shortcuts.parse_names(steam_home, sorted(ids))),
    ]
    if name_lookup is not None:
        sources.append(NameSource(REMOTE_SOURCE, lambda ids: name_lookup(sorted(ids))))

    return sources
