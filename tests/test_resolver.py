# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for engine resolution strategies and memoisation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from helpers.fakes import FakeStrategy, bundled_pair

from lintbridge.config import Settings
from lintbridge.engine import (
    BundledStrategy,
    EngineResolver,
    EngineSource,
    NodeEngineFactory,
    ProjectLocalStrategy,
    ResolutionError,
    default_strategies,
    read_installation,
)


def _install(base: Path, version: str = "8.57.0", *, with_bin: bool = True) -> Path:
    install_dir = base / "node_modules" / "eslint"
    (install_dir / "bin").mkdir(parents=True)
    (install_dir / "package.json").write_text(json.dumps({"name": "eslint", "version": version}), encoding="utf-8")
    if with_bin:
        (install_dir / "bin" / "eslint.js").write_text("// cli\n", encoding="utf-8")
    return install_dir


def test_read_installation_returns_version(tmp_path: Path) -> None:
    install_dir = _install(tmp_path, "9.4.0")

    assert read_installation(install_dir) == "9.4.0"


@pytest.mark.parametrize(
    "setup",
    ["missing", "no-bin", "bad-version"],
)
def test_read_installation_rejects_unusable_directories(tmp_path: Path, setup: str) -> None:
    install_dir = tmp_path / "node_modules" / "eslint"
    if setup == "no-bin":
        install_dir = _install(tmp_path, with_bin=False)
    elif setup == "bad-version":
        install_dir = _install(tmp_path, "not a version")

    with pytest.raises(ResolutionError):
        read_installation(install_dir)


def test_project_local_installation_wins(tmp_path: Path) -> None:
    project = tmp_path / "project"
    install_dir = _install(project, "8.50.0")
    _install(tmp_path / "bundled" / "eslint8", "8.57.0")
    settings = Settings(bundle_dir=tmp_path / "bundled")
    resolver = EngineResolver(lambda: settings)

    resolved = resolver.resolve(str(project))

    assert resolved is not None
    assert resolved.source is EngineSource.PROJECT_LOCAL
    assert resolved.version == "8.50.0"
    assert resolved.location == install_dir
    assert isinstance(resolved.factory, NodeEngineFactory)


def test_bundled_primary_used_without_local_install(tmp_path: Path) -> None:
    _install(tmp_path / "bundled" / "eslint8", "8.57.0")
    _install(tmp_path / "bundled" / "eslint9", "9.4.0")
    settings = Settings(bundle_dir=tmp_path / "bundled")
    resolver = EngineResolver(lambda: settings)

    resolved = resolver.resolve(str(tmp_path / "project"))

    assert resolved is not None
    assert resolved.source is EngineSource.BUNDLED_PRIMARY
    assert resolved.describe() == "bundled-primary v8.57.0"


def test_resolution_is_memoised_including_none() -> None:
    local, primary, secondary = bundled_pair()
    primary.available = False
    secondary.available = False
    resolver = EngineResolver(Settings, [local, primary, secondary])

    assert resolver.resolve("/project") is None
    assert resolver.resolve("/project") is None

    assert resolver.is_resolved("/project")
    assert local.calls == ["/project"]
    assert primary.calls == ["/project"]
    assert secondary.calls == ["/project"]


def test_resolution_returns_same_handle_until_reset() -> None:
    local, primary, secondary = bundled_pair()
    resolver = EngineResolver(Settings, [local, primary, secondary])

    first = resolver.resolve("/project")
    second = resolver.resolve("/project")
    resolver.reset()
    third = resolver.resolve("/project")

    assert first is second
    assert first is not None and first.source is EngineSource.BUNDLED_PRIMARY
    assert third == first
    assert len(primary.calls) == 2
    assert secondary.calls == []


def test_builtin_disabled_skips_bundled_versions() -> None:
    local, primary, secondary = bundled_pair()
    settings = Settings(use_builtin=False)
    resolver = EngineResolver(lambda: settings, [local, primary, secondary])

    assert resolver.resolve("/project") is None
    assert primary.calls == []
    assert secondary.calls == []


@pytest.mark.parametrize("root", [None, ""])
def test_missing_root_skips_project_local(tmp_path: Path, root: str | None) -> None:
    _install(tmp_path / "bundled" / "eslint9", "9.4.0")
    settings = Settings(bundle_dir=tmp_path / "bundled")
    resolver = EngineResolver(lambda: settings)

    resolved = resolver.resolve(root)

    assert resolved is not None
    assert resolved.source is EngineSource.BUNDLED_SECONDARY


def test_failing_strategy_never_raises() -> None:
    class ExplodingStrategy(FakeStrategy):
        def locate(self, project_root, settings):  # type: ignore[override]
            raise RuntimeError("boom")

    resolver = EngineResolver(Settings, [ExplodingStrategy(EngineSource.PROJECT_LOCAL)])

    assert resolver.resolve("/project") is None


def test_alternate_swaps_bundled_versions() -> None:
    local, primary, secondary = bundled_pair()
    resolver = EngineResolver(Settings, [local, primary, secondary])

    from_primary = resolver.alternate("/project", EngineSource.BUNDLED_PRIMARY)
    from_secondary = resolver.alternate("/project", EngineSource.BUNDLED_SECONDARY)

    assert from_primary is not None and from_primary.source is EngineSource.BUNDLED_SECONDARY
    assert from_secondary is not None and from_secondary.source is EngineSource.BUNDLED_PRIMARY
    assert resolver.alternate("/project", EngineSource.PROJECT_LOCAL) is None


def test_alternate_is_memoised_and_forgotten_per_root() -> None:
    local, primary, secondary = bundled_pair()
    resolver = EngineResolver(Settings, [local, primary, secondary])

    resolver.alternate("/a", EngineSource.BUNDLED_PRIMARY)
    resolver.alternate("/a", EngineSource.BUNDLED_PRIMARY)
    resolver.alternate("/b", EngineSource.BUNDLED_PRIMARY)
    resolver.forget("/a")
    resolver.alternate("/a", EngineSource.BUNDLED_PRIMARY)

    assert secondary.calls == ["/a", "/b", "/a"]


def test_alternate_respects_builtin_setting() -> None:
    local, primary, secondary = bundled_pair()
    settings = Settings(use_builtin=False)
    resolver = EngineResolver(lambda: settings, [local, primary, secondary])

    assert resolver.alternate("/project", EngineSource.BUNDLED_PRIMARY) is None


def test_default_strategy_order() -> None:
    strategies = default_strategies()

    assert [strategy.source for strategy in strategies] == [
        EngineSource.PROJECT_LOCAL,
        EngineSource.BUNDLED_PRIMARY,
        EngineSource.BUNDLED_SECONDARY,
    ]
    assert isinstance(strategies[0], ProjectLocalStrategy)
    assert [strategy.bundle_name for strategy in strategies[1:] if isinstance(strategy, BundledStrategy)] == [
        "eslint8",
        "eslint9",
    ]
