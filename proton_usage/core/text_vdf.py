"""Line-oriented key scanner for Steam's text VDF files.

Steam's text configs (config.vdf, registry.vdf, localconfig.vdf) are large,
but only a handful of keys inside one section are interesting. Instead of
building the whole tree, ``parse_vdf_keys`` walks the lines of a single
section, tracks brace depth and the app id block it is in, and hands each
monitored key to a callback that folds it into a caller-owned accumulator.

Expected shape::

    "apps"
    {
        "12345"
        {
            "installed"     "1"
            "name"          "Some Game"
        }
    }
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Collection, Iterable, Mapping
from typing import TypeAlias, TypeVar

from proton_usage.core.models import AppId

__all__ = ["KeyHandler", "parse_app_id", "parse_vdf_keys", "quoted_tokens"]

logger = logging.getLogger("protonusage.text_vdf")

T = TypeVar("T")

# handler(value, app_id, accumulator)
KeyHandler: TypeAlias = Callable[[str, AppId, T], None]

_MAX_APP_ID = 2**64 - 1

# A quoted token; backslash escapes are kept as part of the token
_TOKEN_PATTERN = re.compile(r'"((?:\\.|[^\\"])*)"')


def quoted_tokens(line: str) -> list[str]:
    """Returns the quoted tokens of a VDF line without unescaping them.

    Args:
        line: A single VDF line, e.g. ``"LaunchOptions"  "-foo \\"bar\\""``.

    Returns:
        The raw token contents in order of appearance.
    """
    return _TOKEN_PATTERN.findall(line)


def parse_app_id(line: str) -> AppId | None:
    """Parses a block header line such as ``"12345"`` into an app id.

    Args:
        line: A trimmed VDF line.

    Returns:
        The id, or None if the line is not a plain unsigned 64-bit number.
    """
    token = line.strip('"')
    if not token.isascii() or not token.isdigit():
        return None
    value = int(token)
    return value if value <= _MAX_APP_ID else None


def parse_vdf_keys(
    section: str,
    lines: Iterable[str],
    handlers: Mapping[str, KeyHandler[T]],
    accumulator: T,
    whitelist: Collection[AppId] | None = None,
) -> T:
    """Folds the monitored keys of one VDF section into an accumulator.

    Section and key names match case-insensitively. A handler only fires
    for keys inside an app id block and only when the value is non-empty.
    Values are passed verbatim, escaped quotes included.

    Args:
        section: Name of the section to scan, e.g. "CompatToolMapping".
        lines: Lines of the VDF file.
        handlers: Key name to callback table.
        accumulator: Value passed to every callback; returned at the end.
        whitelist: If given, only these app ids are tracked.

    Returns:
        The accumulator. Untouched if the section does not exist.
    """
    target = f'"{section}"'.lower()
    table = {key.lower(): handler for key, handler in handlers.items()}
    it = iter(lines)

    for line in it:
        if line.strip().lower() == target:
            break
    else:
        logger.debug("Section %s not found", section)
        return accumulator

    # Opening brace of the section itself
    next(it, None)

    depth = 0
    app_id: AppId | None = None

    for raw in it:
        line = raw.strip()

        if line == "{":
            depth += 1
            continue

        if line == "}":
            depth -= 1
            app_id = None
            if depth < 0:
                break
            continue

        candidate = parse_app_id(line)
        if candidate is not None:
            app_id = candidate if whitelist is None or candidate in whitelist else None
            continue

        if app_id is None:
            continue

        tokens = quoted_tokens(line)
        if len(tokens) < 2:
            continue

        handler = table.get(tokens[0].lower())
        if handler is not None and tokens[1]:
            handler(tokens[1], app_id, accumulator)

    return accumulator
