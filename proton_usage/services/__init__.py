from __future__ import annotations

from proton_usage.services.report_service import parse_launch_options, parse_steam_config

__all__: list[str] = [
    "parse_launch_options",
    "parse_steam_config",
]
