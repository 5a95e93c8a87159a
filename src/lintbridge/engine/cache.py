# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Per-root cache of constructed engine instances."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from ..config.settings import Settings
from ..logging import get_logger
from .base import Engine, EngineOptions, EngineSource, ResolvedEngine
from .resolver import EngineResolver, root_key

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CachedEngine:
    """Engine instance together with the resolution that produced it."""

    resolved: ResolvedEngine
    engine: Engine

    @property
    def source(self) -> EngineSource:
        """Return the source of the underlying installation."""

        return self.resolved.source


class EngineCache:
    """Construct at most one engine per project root between invalidations.

    Concurrent first requests for the same root await a single pending
    future instead of constructing duplicate instances. An invalidation
    while a construction is in flight detaches that construction: its
    result reaches only the callers already waiting and is never stored.
    """

    def __init__(self, resolver: EngineResolver, settings: Callable[[], Settings]) -> None:
        self._resolver = resolver
        self._settings = settings
        self._entries: dict[str, CachedEngine | None] = {}
        self._pending: dict[str, asyncio.Future[CachedEngine | None]] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        """Return a counter bumped by every invalidation."""

        return self._generation

    @property
    def resolver(self) -> EngineResolver:
        """Return the resolver backing the cache."""

        return self._resolver

    def __len__(self) -> int:
        return len(self._entries)

    def peek(self, project_root: str | None) -> CachedEngine | None:
        """Return the cached entry for ``project_root`` without constructing one."""

        return self._entries.get(root_key(project_root))

    def resolved(self, project_root: str | None) -> ResolvedEngine | None:
        """Return the resolution backing the cached engine of ``project_root``."""

        entry = self.peek(project_root)
        return entry.resolved if entry is not None else None

    async def get(self, project_root: str | None) -> CachedEngine | None:
        """Return the engine for ``project_root``, constructing it on first use.

        Args:
            project_root: Workspace root the engine is bound to.

        Returns:
            CachedEngine | None: Cached engine, or ``None`` when the root has none.
        """

        key = root_key(project_root)
        if key in self._entries:
            return self._entries[key]
        pending = self._pending.get(key)
        if pending is not None:
            return await asyncio.shield(pending)

        loop = asyncio.get_running_loop()
        future: asyncio.Future[CachedEngine | None] = loop.create_future()
        self._pending[key] = future
        generation = self._generation
        try:
            resolved = await asyncio.to_thread(self._resolver.resolve, project_root)
            entry = self._construct(resolved, project_root)
            if generation == self._generation:
                self._entries[key] = entry
            future.set_result(entry)
            return entry
        finally:
            if self._pending.get(key) is future:
                del self._pending[key]
            if not future.done():
                future.set_result(None)

    async def alternate(self, project_root: str | None, source: EngineSource) -> CachedEngine | None:
        """Construct the fallback engine used after ``source`` found no configuration.

        The instance is not cached; :meth:`promote` stores it once it has
        proven usable.

        Args:
            project_root: Root being linted.
            source: Source of the engine that failed.

        Returns:
            CachedEngine | None: Alternate engine or ``None`` when none exists.
        """

        resolved = await asyncio.to_thread(self._resolver.alternate, project_root, source)
        return self._construct(resolved, project_root)

    def promote(self, project_root: str | None, entry: CachedEngine) -> None:
        """Make ``entry`` the cached engine for ``project_root``."""

        LOGGER.debug("Promoting %s for %s", entry.resolved.describe(), project_root or "<none>")
        self._entries[root_key(project_root)] = entry

    def invalidate(self) -> None:
        """Drop every cached engine and memoised resolution."""

        self._generation += 1
        self._entries.clear()
        self._pending.clear()
        self._resolver.reset()

    def invalidate_root(self, project_root: str | None) -> None:
        """Drop the cached engine and resolution of one root."""

        self._generation += 1
        key = root_key(project_root)
        self._entries.pop(key, None)
        self._pending.pop(key, None)
        self._resolver.forget(project_root)

    def _construct(self, resolved: ResolvedEngine | None, project_root: str | None) -> CachedEngine | None:
        if resolved is None:
            return None
        options = EngineOptions.from_settings(self._settings(), project_root)
        try:
            engine = resolved.create(options)
        except Exception as exc:  # noqa: BLE001 - a broken installation behaves like a missing one
            LOGGER.debug("Failed to construct %s: %s", resolved.describe(), exc)
            return None
        return CachedEngine(resolved=resolved, engine=engine)


__all__ = ["CachedEngine", "EngineCache"]
