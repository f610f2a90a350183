# tests/conftest.py
import struct
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from proton_usage.core.binary_vdf import BIN_END, BIN_INT32, BIN_NONE, BIN_STRING

# Account 1880504 <-> SteamID64 76561197962146232
USER_ID = 1880504
STEAM_ID_64 = 76561197962146232
SHORTCUT_ID = 2583605614


def vdf_lines(text: str) -> list[str]:
    """Split an indented VDF snippet into lines."""
    return textwrap.dedent(text).strip("\n").splitlines()


def make_bin_record(app_id: int, key: str, name: str, index: int = 0) -> bytes:
    """One binary VDF entry with an appid and a name field."""
    return (
        BIN_NONE
        + str(index).encode() + b"\x00"
        + BIN_INT32 + b"appid\x00" + struct.pack("<I", app_id)
        + BIN_STRING + key.encode() + b"\x00" + name.encode() + b"\x00"
        + BIN_STRING + b"exe\x00" + b'"/usr/bin/true"\x00'
        + BIN_END
    )


def make_shortcuts_file(*records: bytes) -> bytes:
    """Wrap records into a shortcuts.vdf buffer."""
    return BIN_NONE + b"shortcuts\x00" + b"".join(records) + BIN_END + BIN_END


@pytest.fixture
def bin_record() -> Callable[..., bytes]:
    """Builder for binary VDF records."""
    return make_bin_record


@pytest.fixture
def shortcuts_file() -> Callable[..., bytes]:
    """Builder for shortcuts.vdf buffers."""
    return make_shortcuts_file


@pytest.fixture
def lines() -> Callable[[str], list[str]]:
    """Helper turning an indented VDF snippet into lines."""
    return vdf_lines


COMPAT_TOOL_CONFIG = """
"InstallConfigStore"
{
	"Software"
	{
		"Valve"
		{
			"Steam"
			{
				"CompatToolMapping"
				{
					"0"
					{
						"name"		"proton_8"
						"config"		""
						"priority"		"75"
					}
					"100"
					{
						"name"		"Proton 7.0"
						"config"		""
						"priority"		"250"
					}
					"200"
					{
						"name"		"Proton Experimental"
						"config"		""
						"priority"		"250"
					}
					"2583605614"
					{
						"name"		"Proton Experimental"
						"config"		""
						"priority"		"250"
					}
					"400"
					{
						"name"		"Proton Experimental"
						"config"		""
						"priority"		"250"
					}
				}
			}
		}
	}
}
"""

REGISTRY = """
"Registry"
{
	"HKCU"
	{
		"Software"
		{
			"Valve"
			{
				"Steam"
				{
					"language"		"english"
					"apps"
					{
						"100"
						{
							"installed"		"1"
							"Updating"		"0"
							"Running"		"0"
							"name"		"Registry Game"
						}
						"200"
						{
							"installed"		"0"
							"Updating"		"0"
							"Running"		"0"
						}
						"300"
						{
							"installed"		"1"
							"name"		"Unrelated Game"
						}
					}
				}
			}
		}
	}
}
"""

LOCAL_CONFIG = r"""
"UserLocalConfigStore"
{
	"Software"
	{
		"Valve"
		{
			"Steam"
			{
				"apps"
				{
					"0"
					{
						"LaunchOptions"		"-ignored"
					}
					"100"
					{
						"LaunchOptions"		"PROTON_LOG=1 %command% -arg \"0\""
					}
					"200"
					{
						"LastPlayed"		"1650000000"
						"LaunchOptions"		"-novid"
					}
					"300"
					{
						"LaunchOptions"		""
					}
				}
			}
		}
	}
}
"""

LOGIN_USERS = """
"users"
{
	"76561197962146232"
	{
		"AccountName"		"player"
		"PersonaName"		"Player One"
		"RememberPassword"		"1"
		"mostrecent"		"1"
		"Timestamp"		"1650000000"
	}
}
"""


@pytest.fixture
def steam_home(tmp_path: Path) -> Path:
    """A minimal Steam home directory with every file the reports read."""
    home = tmp_path / ".steam"
    config_dir = home / "root" / "config"
    config_dir.mkdir(parents=True)
    (config_dir / "config.vdf").write_text(COMPAT_TOOL_CONFIG.lstrip("\n"), encoding="utf-8")
    (config_dir / "loginusers.vdf").write_text(LOGIN_USERS.lstrip("\n"), encoding="utf-8")
    (home / "registry.vdf").write_text(REGISTRY.lstrip("\n"), encoding="utf-8")

    appcache = home / "root" / "appcache"
    appcache.mkdir(parents=True)
    (appcache / "appinfo.vdf").write_bytes(b"\x28\x44\x56\x07" + make_bin_record(200, "name", "AppInfo Game"))

    user_config = home / "root" / "userdata" / str(USER_ID) / "config"
    user_config.mkdir(parents=True)
    (user_config / "shortcuts.vdf").write_bytes(
        make_shortcuts_file(make_bin_record(SHORTCUT_ID, "appname", "My Shortcut"))
    )
    (user_config / "localconfig.vdf").write_text(LOCAL_CONFIG.lstrip("\n"), encoding="utf-8")

    return home
