"""Assembling and rendering the plain-text reports.

Both reports are blocks of a header line followed by indented app lines::

    Proton 7.0
      Some Game
      Other Game (Not Installed)

Launch option reports are grouped by account and append the options to
each app line.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from proton_usage.core.compat_tool import CompatToolMapping
from proton_usage.core.models import AppId, InstallState, ResolvedApp
from proton_usage.core.name_resolution import SHORTCUTS_SOURCE, ResolvedNames
from proton_usage.core.registry import Registry
from proton_usage.core.steam_account import SteamAccount

__all__ = [
    "CompatToolReport",
    "LaunchOptionRow",
    "LaunchOptionsReport",
    "build_compat_tool_report",
    "build_launch_options_report",
    "format_app",
    "resolve_app",
    "unescape_launch_options",
]

INDENT = "  "


def resolve_app(app_id: AppId, names: ResolvedNames, registry: Registry) -> ResolvedApp:
    """Combines the resolved name and install state of an app.

    Installed apps stay plain even when only a shortcuts file names them.
    Other apps named from a shortcuts file are reported as shortcuts.
    Otherwise the registry state is used, or UNKNOWN if the registry has
    no entry.
    """
    if registry.app_is_installed(app_id):
        state = InstallState.INSTALLED
    elif names.resolved_by(app_id) == SHORTCUTS_SOURCE:
        state = InstallState.SHORTCUT
    else:
        entry = registry.get(app_id)
        state = entry.install_state if entry is not None else InstallState.UNKNOWN

    return ResolvedApp(app_id=app_id, display_name=names.display_name(app_id), install_state=state)


def format_app(app: ResolvedApp) -> str:
    """Formats an app name, annotated with its state unless installed."""
    if app.install_state is InstallState.INSTALLED:
        return app.display_name
    return f"{app.display_name} ({app.install_state})"


def unescape_launch_options(options: str) -> str:
    """Turns Valve's escaped quotes (``\\"``) back into plain quotes."""
    return options.replace('\\"', '"')


@dataclass(frozen=True)
class CompatToolReport:
    """Apps grouped by compatibility tool, tools in lexicographic order."""

    groups: Mapping[str, tuple[ResolvedApp, ...]] = field(default_factory=lambda: MappingProxyType({}))

    def render(self) -> str:
        lines = []
        for tool, apps in self.groups.items():
            lines.append(tool)
            lines.extend(INDENT + format_app(app) for app in apps)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class LaunchOptionRow:
    """A single app and its raw launch options."""

    app: ResolvedApp
    options: str

    def render(self) -> str:
        return f"{format_app(self.app)}: {unescape_launch_options(self.options)}"


@dataclass(frozen=True)
class LaunchOptionsReport:
    """Launch options grouped by account display name."""

    groups: Mapping[str, tuple[LaunchOptionRow, ...]] = field(default_factory=lambda: MappingProxyType({}))

    def render(self) -> str:
        lines = []
        for display_name, rows in self.groups.items():
            lines.append(display_name)
            lines.extend(INDENT + row.render() for row in rows)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()


def build_compat_tool_report(
    mapping: CompatToolMapping,
    names: ResolvedNames,
    registry: Registry,
) -> CompatToolReport:
    """Builds the compatibility tool report.

    Args:
        mapping: Tool name to app ids.
        names: Result of the name lookup for the mapped ids.
        registry: Parsed registry.vdf for install states.

    Returns:
        The report, tools sorted by name and apps in file order.
    """
    groups = {
        tool: tuple(resolve_app(app_id, names, registry) for app_id in app_ids)
        for tool, app_ids in sorted(mapping.items())
    }
    return CompatToolReport(MappingProxyType(groups))


def build_launch_options_report(
    accounts: Iterable[tuple[SteamAccount, Mapping[AppId, str]]],
    names: ResolvedNames,
    registry: Registry,
) -> LaunchOptionsReport:
    """Builds the launch options report.

    Accounts without launch options are left out. Accounts sharing a
    display name are merged into one group.

    Args:
        accounts: Each account with its app id to launch options mapping.
        names: Result of the name lookup for all app ids.
        registry: Parsed registry.vdf for install states.

    Returns:
        The report, groups sorted case-insensitively by display name.
    """
    grouped: dict[str, list[LaunchOptionRow]] = {}
    for account, options in accounts:
        rows = [
            LaunchOptionRow(app=resolve_app(app_id, names, registry), options=value)
            for app_id, value in options.items()
        ]
        if rows:
            grouped.setdefault(account.display_name, []).extend(rows)

    groups = {name: tuple(grouped[name]) for name in sorted(grouped, key=lambda n: (n.lower(), n))}
    return LaunchOptionsReport(MappingProxyType(groups))
