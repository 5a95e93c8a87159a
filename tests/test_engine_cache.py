# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the per-root engine cache."""

from __future__ import annotations

import asyncio
from pathlib import Path

from helpers.fakes import FakeStrategy, bundled_pair

from lintbridge.config import Settings
from lintbridge.engine import EngineCache, EngineResolver, EngineSource


def _cache(strategies, settings: Settings | None = None) -> EngineCache:
    current = settings if settings is not None else Settings()
    return EngineCache(EngineResolver(lambda: current, strategies), lambda: current)


def test_concurrent_first_requests_share_one_construction() -> None:
    local, primary, secondary = bundled_pair()
    cache = _cache([local, primary, secondary])

    async def scenario():
        return await asyncio.gather(*(cache.get("/project") for _ in range(5)))

    entries = asyncio.run(scenario())

    assert len(primary.factory.instances) == 1
    assert all(entry is entries[0] for entry in entries)
    assert entries[0] is not None and entries[0].source is EngineSource.BUNDLED_PRIMARY


def test_entries_are_per_root_and_invalidated() -> None:
    local, primary, secondary = bundled_pair()
    cache = _cache([local, primary, secondary])

    async def scenario():
        first = await cache.get("/a")
        await cache.get("/b")
        again = await cache.get("/a")
        cache.invalidate()
        rebuilt = await cache.get("/a")
        return first, again, rebuilt

    first, again, rebuilt = asyncio.run(scenario())

    assert first is again
    assert rebuilt is not first
    assert len(primary.factory.instances) == 3
    assert len(cache) == 1


def test_missing_engine_is_cached_as_none() -> None:
    local = FakeStrategy(EngineSource.PROJECT_LOCAL, available=False)
    cache = _cache([local])

    async def scenario():
        return await cache.get("/project"), await cache.get("/project")

    assert asyncio.run(scenario()) == (None, None)
    assert local.calls == ["/project"]
    assert cache.resolved("/project") is None


def test_invalidate_root_only_drops_that_root() -> None:
    local, primary, secondary = bundled_pair()
    cache = _cache([local, primary, secondary])

    async def scenario():
        await cache.get("/a")
        await cache.get("/b")
        cache.invalidate_root("/a")

    asyncio.run(scenario())

    assert cache.peek("/a") is None
    assert cache.peek("/b") is not None


def test_engine_options_follow_settings(tmp_path: Path) -> None:
    local, primary, secondary = bundled_pair()
    settings = Settings(
        rule_paths=("rules",),
        override_config_file="config/eslint.json",
        allow_inline_config=False,
        report_unused_disable_directives="warn",
        engine_timeout=5,
    )
    cache = _cache([local, primary, secondary], settings)
    root = str(tmp_path)

    entry = asyncio.run(cache.get(root))

    assert entry is not None
    options = entry.engine.options
    assert options.cwd == root
    assert options.rule_paths == (str(tmp_path / "rules"),)
    assert options.override_config_file == str(tmp_path / "config" / "eslint.json")
    assert options.allow_inline_config is False
    assert options.report_unused_disable_directives == "warn"
    assert options.timeout == 5


def test_alternate_is_not_cached_until_promoted() -> None:
    local, primary, secondary = bundled_pair()
    cache = _cache([local, primary, secondary])

    async def scenario():
        original = await cache.get("/project")
        alternate = await cache.alternate("/project", EngineSource.BUNDLED_PRIMARY)
        before = cache.peek("/project")
        assert alternate is not None
        cache.promote("/project", alternate)
        return original, alternate, before

    original, alternate, before = asyncio.run(scenario())

    assert before is original
    assert cache.peek("/project") is alternate
    assert cache.resolved("/project").source is EngineSource.BUNDLED_SECONDARY


def test_failed_construction_behaves_like_missing_engine() -> None:
    local, primary, secondary = bundled_pair()

    def broken(options):
        raise RuntimeError("cannot load")

    primary.factory = broken  # type: ignore[assignment]
    cache = _cache([local, primary, secondary])

    assert asyncio.run(cache.get("/project")) is None


def test_invalidation_during_construction_discards_result() -> None:
    local, primary, secondary = bundled_pair()
    cache = _cache([local, primary, secondary])

    async def scenario():
        pending = asyncio.ensure_future(cache.get("/project"))
        await asyncio.sleep(0)
        cache.invalidate()
        after = await cache.get("/project")
        stale = await pending
        again = await cache.get("/project")
        return stale, after, again

    stale, after, again = asyncio.run(scenario())

    assert stale is not None and after is not None
    assert after is not stale
    assert after is again
    assert cache.peek("/project") is after
    assert len(primary.factory.instances) == 2


def test_root_invalidation_during_construction_detaches_it() -> None:
    local, primary, secondary = bundled_pair()
    cache = _cache([local, primary, secondary])

    async def scenario():
        pending = asyncio.ensure_future(cache.get("/a"))
        other = asyncio.ensure_future(cache.get("/b"))
        await asyncio.sleep(0)
        cache.invalidate_root("/a")
        after = await cache.get("/a")
        stale = await pending
        return stale, after, await other

    stale, after, other = asyncio.run(scenario())

    assert after is not stale
    assert cache.peek("/a") is after
    assert cache.peek("/b") is other
