"""Per-user launch options from Steam's localconfig.vdf.

Each account has a ``config/localconfig.vdf`` in its userdata folder whose
``apps`` section holds, among other things, the launch options typed into
an app's properties dialog. Values are kept exactly as stored, so embedded
quotes stay escaped as ``\\"``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from proton_usage.core.errors import SteamConfigError
from proton_usage.core.models import DEFAULT_COMPAT_TOOL_APP_ID, AppId, SteamId64, UserId
from proton_usage.core.steam_account import account_id_to_steam_id_64
from proton_usage.core.text_vdf import KeyHandler, parse_vdf_keys
from proton_usage.core.userdata import get_userdata_files, open_text_config

__all__ = ["LOCAL_CONFIG_PATH", "UserLaunchOptions", "parse_launch_options", "parse_launch_options_mapping"]

logger = logging.getLogger("protonusage.local_config")

SECTION = "apps"
LOCAL_CONFIG_PATH = Path("config/localconfig.vdf")


@dataclass(frozen=True)
class UserLaunchOptions:
    """Launch options configured by one local account.

    Attributes:
        user_id: Account id from the userdata folder name.
        options: App id to raw launch option string, in file order.
    """

    user_id: UserId
    options: Mapping[AppId, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def steam_id_64(self) -> SteamId64:
        return account_id_to_steam_id_64(self.user_id)


def _parse_launch_option(options: str, app_id: AppId, result: dict[AppId, str]) -> None:
    if app_id != DEFAULT_COMPAT_TOOL_APP_ID:
        result[app_id] = options


_HANDLERS: dict[str, KeyHandler[dict[AppId, str]]] = {"LaunchOptions": _parse_launch_option}


def parse_launch_options(config_lines: Iterable[str]) -> Mapping[AppId, str]:
    """Parses the launch options from one localconfig.vdf.

    Args:
        config_lines: Lines of localconfig.vdf.

    Returns:
        Read-only mapping of app id to launch options.
    """
    return MappingProxyType(parse_vdf_keys(SECTION, config_lines, _HANDLERS, {}))


def parse_launch_options_mapping(steam_home: Path) -> list[UserLaunchOptions]:
    """Collects the launch options of every local account.

    Accounts whose localconfig.vdf cannot be read are skipped.

    Args:
        steam_home: Steam home directory.

    Returns:
        Launch options per account, in ascending account id order.
    """
    result = []
    for userdata_file in get_userdata_files(steam_home, LOCAL_CONFIG_PATH):
        try:
            config_lines = open_text_config(userdata_file.path)
        except SteamConfigError as e:
            logger.warning("%s", e)
            continue

        options = parse_launch_options(config_lines)
        logger.debug("Found %d launch option(s) for user %d", len(options), userdata_file.user_id)
        result.append(UserLaunchOptions(user_id=userdata_file.user_id, options=options))

    return result
