"""End-to-end tests for the report service over a temporary Steam home."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from proton_usage.core.errors import SteamConfigError
from proton_usage.core.userdata import COMPAT_TOOL_CONFIG_PATH, LOGIN_USERS_PATH, REGISTRY_PATH
from proton_usage.services.report_service import parse_launch_options, parse_steam_config

EXPECTED_COMPAT_TOOLS = (
    "Proton 7.0\n"
    "  Registry Game\n"
    "Proton Experimental\n"
    "  AppInfo Game (Not Installed)\n"
    "  My Shortcut (Shortcut)\n"
    "  Unknown (Id: 400) (Unknown Install State)"
)

EXPECTED_LAUNCH_OPTIONS = (
    "Player One\n"
    '  Registry Game: PROTON_LOG=1 %command% -arg "0"\n'
    "  AppInfo Game (Not Installed): -novid"
)


class TestParseSteamConfig:
    """Tests for parse_steam_config()."""

    def test_full_report(self, steam_home: Path) -> None:
        report = parse_steam_config(steam_home)
        assert report.render() == EXPECTED_COMPAT_TOOLS

    def test_default_tool_entry_is_not_reported(self, steam_home: Path) -> None:
        report = parse_steam_config(steam_home)
        assert "proton_8" not in report.groups
        assert all(app.app_id != 0 for apps in report.groups.values() for app in apps)

    def test_remote_lookup_only_gets_unresolved_ids(self, steam_home: Path) -> None:
        calls: list[list[int]] = []

        def lookup(ids):
            calls.append(list(ids))
            return {400: "Store Game"}

        report = parse_steam_config(steam_home, lookup)

        assert calls == [[400]]
        assert report.render().endswith("  Store Game (Unknown Install State)")

    def test_missing_config_is_fatal(self, steam_home: Path) -> None:
        (steam_home / COMPAT_TOOL_CONFIG_PATH).unlink()
        with pytest.raises(SteamConfigError, match="config.vdf"):
            parse_steam_config(steam_home)

    def test_missing_registry_is_fatal(self, steam_home: Path) -> None:
        (steam_home / REGISTRY_PATH).unlink()
        with pytest.raises(SteamConfigError, match="registry.vdf"):
            parse_steam_config(steam_home)

    def test_missing_appinfo_and_shortcuts_are_not_fatal(self, steam_home: Path) -> None:
        (steam_home / "root" / "appcache" / "appinfo.vdf").unlink()
        (steam_home / "root" / "userdata" / "1880504" / "config" / "shortcuts.vdf").unlink()

        report = parse_steam_config(steam_home)

        assert report.render() == (
            "Proton 7.0\n"
            "  Registry Game\n"
            "Proton Experimental\n"
            "  Unknown (Id: 200) (Not Installed)\n"
            "  Unknown (Id: 2583605614) (Unknown Install State)\n"
            "  Unknown (Id: 400) (Unknown Install State)"
        )


class TestParseLaunchOptions:
    """Tests for parse_launch_options()."""

    def test_full_report(self, steam_home: Path) -> None:
        report = parse_launch_options(steam_home)
        assert report.render() == EXPECTED_LAUNCH_OPTIONS

    def test_missing_login_users_uses_steam_id(self, steam_home: Path) -> None:
        (steam_home / LOGIN_USERS_PATH).unlink()

        report = parse_launch_options(steam_home)

        assert list(report.groups) == ["76561197962146232"]

    def test_missing_registry_is_fatal(self, steam_home: Path) -> None:
        (steam_home / REGISTRY_PATH).unlink()
        with pytest.raises(SteamConfigError):
            parse_launch_options(steam_home)

    def test_no_userdata_gives_empty_report(self, steam_home: Path) -> None:
        shutil.rmtree(steam_home / "root" / "userdata")

        report = parse_launch_options(steam_home)

        assert report.render() == ""
