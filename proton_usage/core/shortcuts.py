"""Names of non-Steam game shortcuts (userdata/<id>/config/shortcuts.vdf).

Shortcuts added through "Add a Non-Steam Game" have no store entry, so
their names only exist in the shortcuts file of the account that created
them. Older clients wrote the name key as ``AppName``, newer ones as
``appname``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from proton_usage.core.binary_vdf import parse_names_from_bin_vdf
from proton_usage.core.models import AppId
from proton_usage.core.userdata import get_userdata_files

__all__ = ["POSSIBLE_KEYS", "SHORTCUTS_PATH", "parse_names"]

logger = logging.getLogger("protonusage.shortcuts")

POSSIBLE_KEYS: tuple[str, ...] = ("appname", "AppName")
SHORTCUTS_PATH = Path("config/shortcuts.vdf")


def parse_names(steam_home: Path, app_ids: Iterable[AppId]) -> dict[AppId, str]:
    """Looks up shortcut names in the shortcuts.vdf of every account.

    Args:
        steam_home: Steam home directory.
        app_ids: Shortcut ids to look up.

    Returns:
        Dict mapping shortcut id to name. If several accounts know the
        same id, the account with the highest id wins.
    """
    wanted = list(app_ids)
    result: dict[AppId, str] = {}

    for userdata_file in get_userdata_files(steam_home, SHORTCUTS_PATH):
        try:
            contents = userdata_file.path.read_bytes()
        except OSError as e:
            logger.info("Failed to parse names from '%s': %s", userdata_file.path, e)
            continue

        names = parse_names_from_bin_vdf(contents, POSSIBLE_KEYS, wanted)
        logger.debug("Found %d shortcut name(s) for user %d", len(names), userdata_file.user_id)
        result.update(names)

    return result
