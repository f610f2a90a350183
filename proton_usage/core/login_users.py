"""Persona names of local accounts from Steam's loginusers.vdf.

Expected layout::

    "users"
    {
        "<SteamID64>"
        {
            "AccountName"   "login"
            "PersonaName"   "Display Name"
            ...
        }
    }
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import vdf

from proton_usage.core.errors import SteamConfigError
from proton_usage.core.models import SteamId64
from proton_usage.core.userdata import LOGIN_USERS_PATH, open_text_config

__all__ = ["get_display_name", "parse_display_name", "parse_persona_names"]

logger = logging.getLogger("protonusage.login_users")


def parse_persona_names(content: str) -> dict[SteamId64, str]:
    """Parses loginusers.vdf content into SteamID64 -> persona name.

    Args:
        content: Text of loginusers.vdf.

    Returns:
        Persona names of all users that have one. Empty if the content
        cannot be parsed.
    """
    try:
        data: dict[str, Any] = vdf.loads(content)
    except SyntaxError as e:
        logger.warning("Couldn't parse loginusers.vdf: %s", e)
        return {}

    users = next((value for key, value in data.items() if key.lower() == "users"), {})
    if not isinstance(users, dict):
        return {}

    names: dict[SteamId64, str] = {}
    for steam_id, user_data in users.items():
        if not steam_id.isdigit() or not isinstance(user_data, dict):
            continue
        persona = next((v for k, v in user_data.items() if k.lower() == "personaname"), None)
        if isinstance(persona, str) and persona:
            names[int(steam_id)] = persona

    return names


def parse_display_name(steam_id_64: SteamId64, content: str) -> str:
    """Returns the persona name of a user, falling back to the id."""
    return parse_persona_names(content).get(steam_id_64, str(steam_id_64))


def get_display_name(steam_home: Path, steam_id_64: SteamId64) -> str:
    """Looks up the display name of a local account.

    Args:
        steam_home: Steam home directory.
        steam_id_64: The account's 64-bit Steam ID.

    Returns:
        The persona name, or the SteamID64 as text if it is unknown.
    """
    try:
        lines = open_text_config(steam_home / LOGIN_USERS_PATH)
    except SteamConfigError as e:
        logger.warning("%s", e)
        return str(steam_id_64)

    return parse_display_name(steam_id_64, "\n".join(lines))
