"""Marker-based name scanner for Steam's binary VDF files.

appinfo.vdf and shortcuts.vdf both contain records of the form::

    <tag>appid\\x00<u32 little-endian><tag><key>\\x00<value>\\x00 ...

Only the name of each record is needed, so instead of decoding the whole
nested structure the scanner looks for the ``appid`` marker of every wanted
id and reads the first name key that follows it.
"""

from __future__ import annotations

import logging
import struct
from collections.abc import Iterable, Sequence

from proton_usage.core.models import AppId

__all__ = [
    "BIN_END",
    "BIN_INT32",
    "BIN_NONE",
    "BIN_STRING",
    "app_id_marker",
    "parse_names_from_bin_vdf",
]

logger = logging.getLogger("protonusage.binary_vdf")

# -- Type tag constants --

BIN_NONE = b"\x00"
BIN_STRING = b"\x01"
BIN_INT32 = b"\x02"
BIN_END = b"\x08"

_APP_ID_KEY = b"appid\x00"
_NUL = b"\x00"


def app_id_marker(app_id: AppId) -> bytes:
    """Builds the byte pattern that starts the record of an app id.

    Ids are stored as 32-bit integers, so larger ids are truncated and
    can never match a record.

    Args:
        app_id: Steam app id or shortcut id.

    Returns:
        ``b"appid\\x00"`` followed by the id as little-endian u32.
    """
    return _APP_ID_KEY + struct.pack("<I", app_id & 0xFFFFFFFF)


def _read_cstring(data: bytes, start: int) -> str:
    """Reads a NUL-terminated UTF-8 string, replacing invalid bytes."""
    end = data.find(_NUL, start)
    if end == -1:
        end = len(data)
    return data[start:end].decode("utf-8", errors="replace")


def parse_names_from_bin_vdf(
    data: bytes,
    possible_keys: Sequence[str],
    app_ids: Iterable[AppId],
) -> dict[AppId, str]:
    """Finds the names of the given app ids in a binary VDF buffer.

    For each id the leftmost record marker is used. The first key of
    ``possible_keys`` found after it wins, which allows case variants such
    as ``["appname", "AppName"]``.

    Args:
        data: Raw file contents.
        possible_keys: Name keys to try, in priority order.
        app_ids: Ids to look up; no other ids are reported.

    Returns:
        Dict mapping app id to name for every id that was found.
    """
    key_markers = [key.encode("utf-8") + _NUL for key in possible_keys]
    names: dict[AppId, str] = {}

    for app_id in app_ids:
        marker = app_id_marker(app_id)
        pos = data.find(marker)
        if pos == -1:
            continue

        # Skip the type tag of the entry that follows the id
        start = pos + len(marker) + 1

        for key_marker in key_markers:
            key_pos = data.find(key_marker, start)
            if key_pos != -1:
                names[app_id] = _read_cstring(data, key_pos + len(key_marker))
                break
        else:
            logger.debug("App %d has no name key in record", app_id)

    return names
