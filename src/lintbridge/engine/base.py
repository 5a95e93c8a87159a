# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Engine capability protocol and the records describing a resolved engine.

The lint engine is an opaque collaborator: it is constructed with an
:class:`EngineOptions` record and exposes three coroutines mirroring the
ESLint Node API (``lintText``, ``lintFiles`` and ``isPathIgnored``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ..config.settings import Settings
from ..models import LintResult


class EngineSource(str, Enum):
    """Where a resolved engine installation comes from."""

    PROJECT_LOCAL = "project-local"
    BUNDLED_PRIMARY = "bundled-primary"
    BUNDLED_SECONDARY = "bundled-secondary"

    @property
    def is_bundled(self) -> bool:
        """Return ``True`` for the fallback versions shipped with lintbridge."""

        return self is not EngineSource.PROJECT_LOCAL


class EngineOptions(BaseModel):
    """Constructor options handed to a new engine instance."""

    model_config = ConfigDict(frozen=True)

    cwd: str | None = None
    allow_inline_config: bool = True
    extends: tuple[str, ...] = Field(default_factory=tuple)
    override_config_file: str | None = None
    report_unused_disable_directives: str | None = None
    rule_paths: tuple[str, ...] = Field(default_factory=tuple)
    use_eslintrc: bool = True
    timeout: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings, project_root: str | None) -> EngineOptions:
        """Build options for ``project_root`` from the observed settings.

        Relative ``override_config_file`` and ``rule_paths`` entries are
        anchored at the project root. ``cwd`` defaults to the root itself.

        Args:
            settings: Current user settings.
            project_root: Root the engine instance is bound to.

        Returns:
            EngineOptions: Immutable option record.
        """

        base = Path(project_root) if project_root else None
        return cls(
            cwd=settings.cwd or project_root or None,
            allow_inline_config=settings.allow_inline_config,
            extends=settings.extends,
            override_config_file=_anchor(settings.override_config_file, base),
            report_unused_disable_directives=settings.report_unused_disable_directives,
            rule_paths=tuple(path for path in (_anchor(item, base) for item in settings.rule_paths) if path),
            use_eslintrc=settings.use_eslintrc,
            timeout=settings.engine_timeout,
        )


def _anchor(value: str | None, base: Path | None) -> str | None:
    if not value:
        return None
    path = Path(value).expanduser()
    if path.is_absolute() or base is None:
        return str(path)
    return str(base / path)


@runtime_checkable
class Engine(Protocol):
    """Constructed engine bound to one project root."""

    async def lint_text(self, text: str, *, file_path: str | None = None) -> list[LintResult]:
        """Lint ``text`` as if it were the content of ``file_path``."""

        raise NotImplementedError

    async def lint_files(self, *patterns: str) -> list[LintResult]:
        """Lint files on disk matching ``patterns``."""

        raise NotImplementedError

    async def is_path_ignored(self, file_path: str) -> bool:
        """Return ``True`` when the engine's ignore rules exclude ``file_path``."""

        raise NotImplementedError


class EngineFactory(Protocol):
    """Callable constructing an :class:`Engine` from options."""

    def __call__(self, options: EngineOptions) -> Engine:
        """Return a new engine instance."""

        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class ResolvedEngine:
    """Outcome of engine resolution for one project root.

    Attributes:
        factory: Constructor bound to the resolved installation.
        version: Version string declared by the installation.
        source: Which resolution strategy produced the engine.
        location: Installation directory, when one exists on disk.
    """

    factory: EngineFactory
    version: str
    source: EngineSource
    location: Path | None = None

    def create(self, options: EngineOptions) -> Engine:
        """Construct an engine instance with ``options``."""

        return self.factory(options)

    def describe(self) -> str:
        """Return a short human-readable label, e.g. ``bundled-primary v8.57.0``."""

        return f"{self.source.value} v{self.version}"


__all__ = ["Engine", "EngineFactory", "EngineOptions", "EngineSource", "ResolvedEngine"]
