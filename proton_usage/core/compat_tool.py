"""Compatibility tool assignments from Steam's config.vdf.

Expects a config.vdf in the form of::

    "CompatToolMapping"
    {
        "<app id>"
        {
            "name"      "<tool name>"
            "config"    ""
            "priority"  "250"
        }
        ...
    }

App id 0 holds the global default tool and is not part of the mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from proton_usage.core.models import DEFAULT_COMPAT_TOOL_APP_ID, AppId
from proton_usage.core.text_vdf import KeyHandler, parse_vdf_keys

__all__ = ["CompatToolMapping", "parse_compat_tool_mapping"]

logger = logging.getLogger("protonusage.compat_tool")

SECTION = "CompatToolMapping"


@dataclass(frozen=True)
class CompatToolMapping:
    """Tool name to the app ids using it, in file order.

    Attributes:
        tools: Read-only mapping of tool name to app ids.
    """

    tools: Mapping[str, tuple[AppId, ...]] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, tools: Mapping[str, Iterable[AppId]]) -> CompatToolMapping:
        """Builds a mapping, dropping the default tool id and empty tools.

        Args:
            tools: Tool name to app ids.

        Returns:
            A new CompatToolMapping.
        """
        cleaned: dict[str, tuple[AppId, ...]] = {}
        for tool, app_ids in tools.items():
            ids = tuple(app_id for app_id in app_ids if app_id != DEFAULT_COMPAT_TOOL_APP_ID)
            if ids:
                cleaned[tool] = ids
        return cls(MappingProxyType(cleaned))

    def app_ids(self) -> list[AppId]:
        """Returns every mapped app id once, in first-seen order."""
        return list(dict.fromkeys(app_id for ids in self.tools.values() for app_id in ids))

    def items(self) -> Iterator[tuple[str, tuple[AppId, ...]]]:
        return iter(self.tools.items())

    def __len__(self) -> int:
        return len(self.tools)


def _parse_tool_name(name: str, app_id: AppId, tools_by_app: dict[AppId, str]) -> None:
    # Re-insert so a repeated id takes the position of its last occurrence
    tools_by_app.pop(app_id, None)
    tools_by_app[app_id] = name


_HANDLERS: dict[str, KeyHandler[dict[AppId, str]]] = {"name": _parse_tool_name}


def parse_compat_tool_mapping(config_lines: Iterable[str]) -> CompatToolMapping:
    """Parses the CompatToolMapping section of config.vdf.

    Args:
        config_lines: Lines of config.vdf.

    Returns:
        The tool mapping; empty if the section is missing.
    """
    tools_by_app = parse_vdf_keys(SECTION, config_lines, _HANDLERS, {})

    grouped: dict[str, list[AppId]] = {}
    for app_id, tool in tools_by_app.items():
        grouped.setdefault(tool, []).append(app_id)

    mapping = CompatToolMapping.from_dict(grouped)
    logger.debug("Found %d compatibility tool(s) for %d app(s)", len(mapping), len(mapping.app_ids()))
    return mapping
