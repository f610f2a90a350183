"""Tests for the tiered app name lookup."""

from __future__ import annotations

from pathlib import Path

import pytest

from proton_usage.core.name_resolution import (
    APP_INFO_SOURCE,
    REGISTRY_SOURCE,
    REMOTE_SOURCE,
    SHORTCUTS_SOURCE,
    NameSource,
    ResolvedNames,
    default_name_sources,
    resolve_app_names,
)
from proton_usage.core.registry import Registry, RegistryEntry


class _Tier:
    """Stub source recording the ids it was asked for."""

    def __init__(self, label: str, names: dict[int, str]) -> None:
        self.label = label
        self.names = names
        self.calls: list[frozenset[int]] = []

    def lookup(self, ids: frozenset[int]) -> dict[int, str]:
        self.calls.append(ids)
        return {i: n for i, n in self.names.items() if i in ids}

    @property
    def source(self) -> NameSource:
        return NameSource(self.label, self.lookup)


class TestResolveAppNames:
    """Tests for resolve_app_names()."""

    def test_later_tiers_only_get_unresolved_ids(self) -> None:
        first = _Tier("first", {1: "One"})
        second = _Tier("second", {1: "Shadowed", 2: "Two"})
        third = _Tier("third", {3: "Three"})

        result = resolve_app_names([1, 2, 3], [first.source, second.source, third.source])

        assert first.calls == [frozenset({1, 2, 3})]
        assert second.calls == [frozenset({2, 3})]
        assert third.calls == [frozenset({3})]
        assert dict(result.names) == {1: "One", 2: "Two", 3: "Three"}
        assert result.unresolved == frozenset()

    def test_stops_asking_once_everything_is_named(self) -> None:
        first = _Tier("first", {1: "One", 2: "Two"})
        second = _Tier("second", {})

        resolve_app_names([1, 2], [first.source, second.source])

        assert second.calls == []

    def test_no_ids_asks_no_tier(self) -> None:
        tier = _Tier("only", {1: "One"})
        result = resolve_app_names([], [tier.source])
        assert tier.calls == []
        assert dict(result.names) == {}

    def test_unrequested_ids_are_discarded(self) -> None:
        greedy = NameSource("greedy", lambda ids: {1: "One", 99: "Extra"})
        result = resolve_app_names([1], [greedy])
        assert dict(result.names) == {1: "One"}

    def test_empty_names_do_not_count(self) -> None:
        first = _Tier("first", {1: ""})
        second = _Tier("second", {1: "One"})
        result = resolve_app_names([1], [first.source, second.source])
        assert result.names[1] == "One"
        assert result.resolved_by(1) == "second"

    def test_records_source_of_each_name(self) -> None:
        first = _Tier("first", {1: "One"})
        second = _Tier("second", {2: "Two"})
        result = resolve_app_names([1, 2], [first.source, second.source])
        assert dict(result.sources) == {1: "first", 2: "second"}

    def test_unresolved_ids_get_placeholder(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level("INFO", logger="protonusage")

        result = resolve_app_names([400], [_Tier("first", {}).source])

        assert result.unresolved == frozenset({400})
        assert result.display_name(400) == "Unknown (Id: 400)"
        assert result.resolved_by(400) is None
        assert "400 is possibly a deleted shortcut" in caplog.text


class TestResolvedNames:
    """Tests for the ResolvedNames record."""

    def test_names_are_read_only(self) -> None:
        result = resolve_app_names([1], [NameSource("a", lambda ids: {1: "One"})])
        with pytest.raises(TypeError):
            result.names[2] = "Two"  # type: ignore[index]

    def test_empty_default(self) -> None:
        assert ResolvedNames().display_name(5) == "Unknown (Id: 5)"


class TestDefaultNameSources:
    """Tests for default_name_sources()."""

    def test_tier_order(self, steam_home: Path) -> None:
        sources = default_name_sources(steam_home, Registry(), name_lookup=lambda ids: {})
        assert [s.label for s in sources] == [REGISTRY_SOURCE, APP_INFO_SOURCE, SHORTCUTS_SOURCE, REMOTE_SOURCE]

    def test_remote_tier_is_optional(self, steam_home: Path) -> None:
        sources = default_name_sources(steam_home, Registry())
        assert REMOTE_SOURCE not in [s.label for s in sources]

    def test_partial_registry_coverage(self, steam_home: Path) -> None:
        """Registry names one app; the rest come from appinfo and shortcuts."""
        registry = Registry({100: RegistryEntry(name="Registry Game")})
        remote_calls: list[list[int]] = []

        def remote(ids):
            remote_calls.append(list(ids))
            return {400: "Store Game"}

        result = resolve_app_names(
            [100, 200, 2583605614, 400],
            default_name_sources(steam_home, registry, remote),
        )

        assert dict(result.names) == {
            100: "Registry Game",
            200: "AppInfo Game",
            2583605614: "My Shortcut",
            400: "Store Game",
        }
        assert dict(result.sources) == {
            100: REGISTRY_SOURCE,
            200: APP_INFO_SOURCE,
            2583605614: SHORTCUTS_SOURCE,
            400: REMOTE_SOURCE,
        }
        assert remote_calls == [[400]]

    def test_missing_appinfo_is_not_fatal(self, steam_home: Path) -> None:
        (steam_home / "root" / "appcache" / "appinfo.vdf").unlink()

        result = resolve_app_names([200], default_name_sources(steam_home, Registry()))

        assert result.unresolved == frozenset({200})
