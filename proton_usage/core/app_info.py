"""App names from Steam's binary app info cache (appcache/appinfo.vdf)."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from proton_usage.core.binary_vdf import parse_names_from_bin_vdf
from proton_usage.core.models import AppId

__all__ = ["POSSIBLE_KEYS", "parse_names"]

logger = logging.getLogger("protonusage.app_info")

POSSIBLE_KEYS: tuple[str, ...] = ("name",)


def parse_names(file_path: Path, app_ids: Iterable[AppId]) -> dict[AppId, str]:
    """Looks up app names in appinfo.vdf.

    A missing or unreadable cache is not an error; it just yields no names.

    Args:
        file_path: Path to appinfo.vdf.
        app_ids: Ids to look up.

    Returns:
        Dict mapping app id to name for the ids that were found.
    """
    try:
        contents = file_path.read_bytes()
    except OSError as e:
        logger.info("Failed to read '%s': %s", file_path, e)
        return {}

    return parse_names_from_bin_vdf(contents, POSSIBLE_KEYS, app_ids)
