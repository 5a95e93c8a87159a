# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide which ESLint installation serves each project root.

Resolution walks a priority-ordered list of strategies: the project's own
``node_modules/eslint`` first, then the bundled versions in order. The
outcome for every root, including "nothing found", is memoised until
:meth:`EngineResolver.reset` is called.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from pathlib import Path
from threading import Lock
from typing import Final

from packaging.version import InvalidVersion, Version

from ..config.settings import Settings
from ..errors import LintBridgeError
from ..logging import get_logger
from .base import EngineFactory, EngineSource, ResolvedEngine
from .node import ESLINT_BIN, NodeEngineFactory

LOGGER = get_logger(__name__)

PACKAGE_DIR: Final[str] = "eslint"
DEPENDENCY_DIR: Final[str] = "node_modules"
PRIMARY_BUNDLE: Final[str] = "eslint8"
SECONDARY_BUNDLE: Final[str] = "eslint9"

FactoryBuilder = Callable[[Path, str], EngineFactory]
SettingsProvider = Callable[[], Settings]


class ResolutionError(LintBridgeError):
    """Raised by a strategy when its installation cannot be used."""


def read_installation(install_dir: Path) -> str:
    """Return the normalised version of the ESLint installed at ``install_dir``.

    Args:
        install_dir: Directory expected to contain ``package.json`` and the
            CLI entry point.

    Returns:
        str: Version declared by ``package.json``.

    Raises:
        ResolutionError: If the directory does not hold a usable installation.
    """

    manifest = install_dir / "package.json"
    if not manifest.is_file():
        raise ResolutionError(f"No eslint installation at {install_dir}")
    if not (install_dir / ESLINT_BIN).is_file():
        raise ResolutionError(f"Missing {ESLINT_BIN} in {install_dir}")
    try:
        payload = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ResolutionError(f"Unreadable {manifest}: {exc}") from exc
    raw = payload.get("version") if isinstance(payload, dict) else None
    if not isinstance(raw, str):
        raise ResolutionError(f"{manifest} does not declare a version")
    try:
        return str(Version(raw))
    except InvalidVersion as exc:
        raise ResolutionError(f"{manifest} declares invalid version '{raw}'") from exc


class EngineStrategy(ABC):
    """One way of locating an engine installation."""

    source: EngineSource

    @abstractmethod
    def locate(self, project_root: str | None, settings: Settings) -> ResolvedEngine:
        """Return the engine this strategy provides for ``project_root``.

        Raises:
            ResolutionError: If the strategy cannot provide an engine.
        """


class InstalledEngineStrategy(EngineStrategy):
    """Shared logic for strategies backed by an on-disk installation."""

    def __init__(self, factory_builder: FactoryBuilder = NodeEngineFactory) -> None:
        self._factory_builder = factory_builder

    @abstractmethod
    def install_dir(self, project_root: str | None, settings: Settings) -> Path:
        """Return the directory the installation is expected in."""

    def locate(self, project_root: str | None, settings: Settings) -> ResolvedEngine:
        install_dir = self.install_dir(project_root, settings)
        version = read_installation(install_dir)
        return ResolvedEngine(
            factory=self._factory_builder(install_dir, version),
            version=version,
            source=self.source,
            location=install_dir,
        )


class ProjectLocalStrategy(InstalledEngineStrategy):
    """ESLint installed in the project's own dependency directory."""

    source = EngineSource.PROJECT_LOCAL

    def install_dir(self, project_root: str | None, settings: Settings) -> Path:
        if not project_root:
            raise ResolutionError("No project root to search")
        return Path(project_root) / DEPENDENCY_DIR / PACKAGE_DIR


class BundledStrategy(InstalledEngineStrategy):
    """ESLint version shipped in the bundle directory."""

    def __init__(
        self,
        bundle_name: str,
        source: EngineSource,
        factory_builder: FactoryBuilder = NodeEngineFactory,
    ) -> None:
        super().__init__(factory_builder)
        self.bundle_name = bundle_name
        self.source = source

    def install_dir(self, project_root: str | None, settings: Settings) -> Path:
        return settings.bundle_dir / self.bundle_name / DEPENDENCY_DIR / PACKAGE_DIR


def default_strategies(factory_builder: FactoryBuilder = NodeEngineFactory) -> list[EngineStrategy]:
    """Return the built-in strategies in priority order."""

    return [
        ProjectLocalStrategy(factory_builder),
        BundledStrategy(PRIMARY_BUNDLE, EngineSource.BUNDLED_PRIMARY, factory_builder),
        BundledStrategy(SECONDARY_BUNDLE, EngineSource.BUNDLED_SECONDARY, factory_builder),
    ]


def root_key(project_root: str | None) -> str:
    """Return the cache key used for ``project_root`` (``""`` when absent)."""

    return project_root or ""


class EngineResolver:
    """Memoised, never-raising engine resolution per project root."""

    def __init__(
        self,
        settings: SettingsProvider,
        strategies: Sequence[EngineStrategy] | None = None,
    ) -> None:
        self._settings = settings
        self._strategies: tuple[EngineStrategy, ...] = tuple(
            strategies if strategies is not None else default_strategies()
        )
        self._memo: dict[str, ResolvedEngine | None] = {}
        self._alternates: dict[tuple[str, EngineSource], ResolvedEngine | None] = {}
        self._lock = Lock()

    def is_resolved(self, project_root: str | None) -> bool:
        """Return ``True`` when ``project_root`` has a memoised outcome."""

        with self._lock:
            return root_key(project_root) in self._memo

    def resolve(self, project_root: str | None) -> ResolvedEngine | None:
        """Return the engine for ``project_root`` or ``None`` when unavailable.

        Args:
            project_root: Workspace root; empty or ``None`` skips the
                project-local lookup.

        Returns:
            ResolvedEngine | None: Memoised outcome of the first successful strategy.
        """

        key = root_key(project_root)
        with self._lock:
            if key in self._memo:
                return self._memo[key]
            LOGGER.debug("Project: %s", project_root or "<none>")
            settings = self._settings()
            result: ResolvedEngine | None = None
            for strategy in self._strategies:
                if strategy.source.is_bundled and not settings.use_builtin:
                    LOGGER.debug("Bundled fallback disabled; skipping %s", strategy.source.value)
                    continue
                result = self._attempt(strategy, project_root, settings)
                if result is not None:
                    break
            if result is None:
                LOGGER.debug("No ESLint available for %s", project_root or "<none>")
            self._memo[key] = result
            return result

    def alternate(self, project_root: str | None, source: EngineSource) -> ResolvedEngine | None:
        """Return the bundled engine to retry with after ``source`` found no configuration.

        The alternate is the next bundled strategy after ``source`` in
        priority order, wrapping around, so the primary and secondary
        versions stand in for each other. Project-local engines have no
        alternate.

        Args:
            project_root: Root being linted.
            source: Source of the engine that reported missing configuration.

        Returns:
            ResolvedEngine | None: The alternate engine, or ``None``.
        """

        if not source.is_bundled:
            return None
        key = (root_key(project_root), source)
        with self._lock:
            if key in self._alternates:
                return self._alternates[key]
            settings = self._settings()
            result: ResolvedEngine | None = None
            if settings.use_builtin:
                bundled = [strategy for strategy in self._strategies if strategy.source.is_bundled]
                sources = [strategy.source for strategy in bundled]
                if source in sources and len(bundled) > 1:
                    candidate = bundled[(sources.index(source) + 1) % len(bundled)]
                    result = self._attempt(candidate, project_root, settings)
            self._alternates[key] = result
            return result

    def forget(self, project_root: str | None) -> None:
        """Drop memoised outcomes for one root."""

        key = root_key(project_root)
        with self._lock:
            self._memo.pop(key, None)
            for alternate_key in [entry for entry in self._alternates if entry[0] == key]:
                del self._alternates[alternate_key]

    def reset(self) -> None:
        """Drop every memoised outcome."""

        with self._lock:
            self._memo.clear()
            self._alternates.clear()
        LOGGER.debug("Cache cleared")

    @staticmethod
    def _attempt(
        strategy: EngineStrategy,
        project_root: str | None,
        settings: Settings,
    ) -> ResolvedEngine | None:
        try:
            resolved = strategy.locate(project_root, settings)
        except ResolutionError as exc:
            LOGGER.debug("%s ESLint not found: %s", strategy.source.value, exc)
            return None
        except Exception as exc:  # noqa: BLE001 - resolution degrades to "no engine" on any fault
            LOGGER.debug("%s ESLint failed to load: %s", strategy.source.value, exc)
            return None
        LOGGER.debug("Using %s ESLint v%s", resolved.source.value, resolved.version)
        if resolved.location is not None:
            LOGGER.debug("Path: %s", resolved.location)
        return resolved


__all__ = [
    "BundledStrategy",
    "EngineResolver",
    "EngineStrategy",
    "InstalledEngineStrategy",
    "PRIMARY_BUNDLE",
    "ProjectLocalStrategy",
    "ResolutionError",
    "SECONDARY_BUNDLE",
    "default_strategies",
    "read_installation",
    "root_key",
]
