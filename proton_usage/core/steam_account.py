"""
Steam Account data structure.

This module defines the SteamAccount dataclass which represents a local Steam
user account, plus the conversions between the short account id (the
userdata folder name) and the 64-bit SteamID.
"""

from __future__ import annotations

from dataclasses import dataclass

from proton_usage.core.models import SteamId64, UserId

__all__ = ["SteamAccount", "STEAM_ID_BASE", "account_id_to_steam_id_64", "steam_id_64_to_account_id"]

# Universe 1 (public), account type 1 (individual), instance 1 (desktop)
STEAM_ID_BASE = 0x0110000100000000


def account_id_to_steam_id_64(account_id: UserId) -> SteamId64:
    """Convert Account ID (32-bit) to SteamID64.

    The lowest bit of the account id is the "Y" part of the textual
    ``STEAM_X:Y:Z`` form and the remaining bits are "Z".

    Args:
        account_id: The short Steam account ID (from userdata folder)

    Returns:
        The 64-bit Steam ID
    """
    y = account_id & 1
    z = (account_id - y) // 2
    return z * 2 + STEAM_ID_BASE + y


def steam_id_64_to_account_id(steam_id_64: SteamId64) -> UserId:
    """Convert SteamID64 back to Account ID (32-bit).

    Args:
        steam_id_64: The 64-bit Steam ID

    Returns:
        The short Steam account ID
    """
    return steam_id_64 & 0xFFFFFFFF


@dataclass(frozen=True)
class SteamAccount:
    """Represents a local Steam user account.

    Attributes:
        account_id: The short Steam account ID (from userdata folder name)
        steam_id_64: The 64-bit Steam ID
        display_name: The persona name from loginusers.vdf, or the SteamID64
    """

    account_id: UserId
    steam_id_64: SteamId64
    display_name: str

    def __str__(self) -> str:
        """String representation showing account ID and display name."""
        return f"{self.account_id} ({self.display_name})"
