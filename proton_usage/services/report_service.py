"""Building the compatibility tool and launch option reports.

Reads the Steam files below a Steam home directory, resolves app names
through the tiered lookup and returns ready-to-render reports.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path

from proton_usage.core.compat_tool import parse_compat_tool_mapping
from proton_usage.core.local_config import parse_launch_options_mapping
from proton_usage.core.login_users import get_display_name
from proton_usage.core.models import AppId
from proton_usage.core.name_resolution import default_name_sources, resolve_app_names
from proton_usage.core.registry import Registry, parse_registry
from proton_usage.core.report import (
    CompatToolReport,
    LaunchOptionsReport,
    build_compat_tool_report,
    build_launch_options_report,
)
from proton_usage.core.steam_account import SteamAccount
from proton_usage.core.userdata import COMPAT_TOOL_CONFIG_PATH, REGISTRY_PATH, open_text_config

__all__ = ["NameLookupFn", "parse_launch_options", "parse_steam_config"]

logger = logging.getLogger("protonusage.report_service")

NameLookupFn = Callable[[Iterable[AppId]], Mapping[AppId, str]]


def _load_registry(steam_home: Path, app_ids: Iterable[AppId]) -> Registry:
    registry_path = steam_home / REGISTRY_PATH
    logger.debug("Parsing %s", registry_path)
    registry = parse_registry(open_text_config(registry_path), set(app_ids))
    logger.debug("Found %d name(s) from registry.vdf", len(registry.app_names()))
    return registry


def parse_steam_config(steam_home: Path, name_lookup: NameLookupFn | None = None) -> CompatToolReport:
    """Builds the report of which apps use which compatibility tool.

    Args:
        steam_home: Steam home directory, e.g. ``~/.steam``.
        name_lookup: Optional remote lookup for names no local file has.

    Returns:
        The compatibility tool report.

    Raises:
        SteamConfigError: If config.vdf or registry.vdf cannot be read.
    """
    config_path = steam_home / COMPAT_TOOL_CONFIG_PATH
    logger.debug("Parsing %s", config_path)
    tool_mapping = parse_compat_tool_mapping(open_text_config(config_path))
    app_ids = tool_mapping.app_ids()

    registry = _load_registry(steam_home, app_ids)
    names = resolve_app_names(app_ids, default_name_sources(steam_home, registry, name_lookup))

    return build_compat_tool_report(tool_mapping, names, registry)


def parse_launch_options(steam_home: Path, name_lookup: NameLookupFn | None = None) -> LaunchOptionsReport:
    """Builds the report of launch options per local account.

    Args:
        steam_home: Steam home directory, e.g. ``~/.steam``.
        name_lookup: Optional remote lookup for names no local file has.

    Returns:
        The launch options report.

    Raises:
        SteamConfigError: If registry.vdf cannot be read.
    """
    user_options = parse_launch_options_mapping(steam_home)

    accounts = []
    for user in user_options:
        steam_id_64 = user.steam_id_64
        account = SteamAccount(
            account_id=user.user_id,
            steam_id_64=steam_id_64,
            display_name=get_display_name(steam_home, steam_id_64),
        )
        accounts.append((account, user.options))

    app_ids = list(dict.fromkeys(app_id for user in user_options for app_id in user.options))

    registry = _load_registry(steam_home, app_ids)
    names = resolve_app_names(app_ids, default_name_sources(steam_home, registry, name_lookup))

    return build_launch_options_report(accounts, names, registry)
