from __future__ import annotations

__all__: list[str] = ["SteamStoreClient"]

from proton_usage.integrations.steam_store import SteamStoreClient
