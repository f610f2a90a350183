"""Locating and reading files inside a Steam home directory.

Each local account has a folder under ``userdata`` named after its 32-bit
account id. Per-user files such as shortcuts.vdf and localconfig.vdf live
below ``<userdata>/<account id>/config/``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from proton_usage.core.errors import SteamConfigError
from proton_usage.core.models import UserId

__all__ = [
    "APP_INFO_PATH",
    "COMPAT_TOOL_CONFIG_PATH",
    "LOGIN_USERS_PATH",
    "MAX_ACCOUNT_ID",
    "REGISTRY_PATH",
    "USERDATA_PATH",
    "UserdataFile",
    "get_userdata_files",
    "open_text_config",
]

logger = logging.getLogger("protonusage.userdata")

COMPAT_TOOL_CONFIG_PATH = Path("root/config/config.vdf")
LOGIN_USERS_PATH = Path("root/config/loginusers.vdf")
APP_INFO_PATH = Path("root/appcache/appinfo.vdf")
USERDATA_PATH = Path("root/userdata")
REGISTRY_PATH = Path("registry.vdf")

# Account ids are 32-bit
MAX_ACCOUNT_ID = 0xFFFFFFFF


@dataclass(frozen=True)
class UserdataFile:
    """A per-user file and the account it belongs to.

    Attributes:
        user_id: Account id taken from the userdata folder name.
        path: Path to the file (it may not exist).
    """

    user_id: UserId
    path: Path


def open_text_config(path: Path) -> list[str]:
    """Reads a text VDF file into lines.

    Args:
        path: File to read.

    Returns:
        The file's lines without line endings.

    Raises:
        SteamConfigError: If the file cannot be read.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read().splitlines()
    except OSError as e:
        raise SteamConfigError(path, e) from e


def get_userdata_files(steam_home: Path, relative_path: str | Path) -> list[UserdataFile]:
    """Lists a per-user file for every account folder in userdata.

    Folders whose name is not a number, the invalid account id 0 and ids
    too large for 32 bits are skipped. Accounts are returned in ascending
    id order.

    Args:
        steam_home: Steam home directory.
        relative_path: Path of the file inside an account folder,
            e.g. "config/shortcuts.vdf".

    Returns:
        One entry per account folder, whether or not the file exists.
    """
    userdata_path = steam_home / USERDATA_PATH
    if not userdata_path.is_dir():
        logger.warning("No userdata directory found at %s", userdata_path)
        return []

    files = []
    for account_dir in userdata_path.iterdir():
        if not account_dir.is_dir() or not (account_dir.name.isascii() and account_dir.name.isdigit()):
            continue
        user_id = int(account_dir.name)
        if user_id == 0 or user_id > MAX_ACCOUNT_ID:
            continue
        files.append(UserdataFile(user_id=user_id, path=account_dir / relative_path))

    files.sort(key=lambda f: f.user_id)
    logger.debug("Found %d userdata folder(s) in %s", len(files), userdata_path)
    return files
