# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Single-file execution pipeline.

A run moves through named stages. The transition table below is the only
place retries are allowed: ``ALTERNATE`` can be entered once per run, so at
most two engine versions are tried for a single file.

    CHECK_NO_CONFIG -> ACQUIRE -> LINT -> CLASSIFY -> ALTERNATE -> LINT -> CLASSIFY
           |              |          |         |            |
           +--------------+----------+---------+------------+--> DONE
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, MutableSet
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from .engine.cache import CachedEngine, EngineCache
from .engine.errors import FailureKind, classify_failure, failure_text
from .engine.resolver import root_key
from .logging import get_logger
from .models import LintReport

LOGGER = get_logger(__name__)

MAX_ENGINE_ATTEMPTS: Final[int] = 2


class Stage(str, Enum):
    """Named stages of a pipeline run."""

    CHECK_NO_CONFIG = "check-no-config"
    ACQUIRE = "acquire"
    LINT = "lint"
    CLASSIFY = "classify"
    ALTERNATE = "alternate"
    DONE = "done"


TRANSITIONS: Final[dict[Stage, frozenset[Stage]]] = {
    Stage.CHECK_NO_CONFIG: frozenset({Stage.ACQUIRE, Stage.DONE}),
    Stage.ACQUIRE: frozenset({Stage.LINT, Stage.DONE}),
    Stage.LINT: frozenset({Stage.CLASSIFY, Stage.DONE}),
    Stage.CLASSIFY: frozenset({Stage.ALTERNATE, Stage.DONE}),
    Stage.ALTERNATE: frozenset({Stage.LINT, Stage.DONE}),
    Stage.DONE: frozenset(),
}


class TransitionError(RuntimeError):
    """Raised when a stage handler requests a transition the table forbids."""


@dataclass(slots=True)
class PipelineRun:
    """Mutable state of one :meth:`ExecutionPipeline.exec` call."""

    file_path: str
    text: str
    project_root: str | None
    handle: CachedEngine | None = None
    attempts: int = 0
    alternates: int = 0
    promote: bool = False
    generation: int = 0
    error: BaseException | None = None
    report: LintReport = field(default_factory=LintReport.empty)


class ExecutionPipeline:
    """Lint one file through the cached engine of its project root."""

    def __init__(self, cache: EngineCache, no_config: MutableSet[str]) -> None:
        self._cache = cache
        self._no_config = no_config
        self._handlers: dict[Stage, Callable[[PipelineRun], Awaitable[Stage]]] = {
            Stage.CHECK_NO_CONFIG: self._check_no_config,
            Stage.ACQUIRE: self._acquire,
            Stage.LINT: self._lint,
            Stage.CLASSIFY: self._classify,
            Stage.ALTERNATE: self._alternate,
        }

    def is_unconfigured(self, project_root: str | None) -> bool:
        """Return ``True`` when ``project_root`` is known to lack configuration."""

        return root_key(project_root) in self._no_config

    async def exec(self, file_path: str, text: str, project_root: str | None) -> LintReport:
        """Lint ``text`` as ``file_path`` and return the engine's report.

        Never raises: a missing engine or configuration yields an empty
        report and any other failure yields a single synthetic error message
        on line 1.

        Args:
            file_path: Path the text belongs to.
            text: Current document content.
            project_root: Root whose engine performs the lint.

        Returns:
            LintReport: Report for the file.
        """

        run = PipelineRun(file_path=file_path, text=text, project_root=project_root)
        try:
            await self._drive(run)
        except Exception as exc:  # noqa: BLE001 - lint failures must not interrupt editing
            LOGGER.debug("Pipeline failed for %s: %s", file_path, exc)
            return LintReport.from_error(exc)
        return run.report

    async def _drive(self, run: PipelineRun) -> None:
        stage = Stage.CHECK_NO_CONFIG
        while stage is not Stage.DONE:
            next_stage = await self._handlers[stage](run)
            if next_stage not in TRANSITIONS[stage]:
                raise TransitionError(f"Illegal transition {stage.value} -> {next_stage.value}")
            stage = next_stage

    async def _check_no_config(self, run: PipelineRun) -> Stage:
        run.generation = self._cache.generation
        if self.is_unconfigured(run.project_root):
            return Stage.DONE
        return Stage.ACQUIRE

    async def _acquire(self, run: PipelineRun) -> Stage:
        run.handle = await self._cache.get(run.project_root)
        if run.handle is None:
            return Stage.DONE
        return Stage.LINT

    async def _lint(self, run: PipelineRun) -> Stage:
        handle = _require_handle(run)
        run.attempts += 1
        try:
            results = await handle.engine.lint_text(run.text, file_path=run.file_path)
        except Exception as exc:  # noqa: BLE001 - classified in the next stage
            run.error = exc
            return Stage.CLASSIFY
        run.report = LintReport(results=tuple(results))
        if run.promote and self._is_current(run):
            self._cache.promote(run.project_root, handle)
        return Stage.DONE

    async def _classify(self, run: PipelineRun) -> Stage:
        handle = _require_handle(run)
        if run.error is None:
            raise TransitionError("Classification reached without an engine failure")
        kind = classify_failure(run.error)
        if kind is not FailureKind.NO_CONFIG:
            LOGGER.debug("ESLint error for %s: %s", run.file_path, run.error)
            run.report = LintReport.from_error(failure_text(run.error))
            return Stage.DONE
        if handle.source.is_bundled and run.alternates == 0 and run.attempts < MAX_ENGINE_ATTEMPTS:
            return Stage.ALTERNATE
        self._mark_unconfigured(run)
        return Stage.DONE

    async def _alternate(self, run: PipelineRun) -> Stage:
        handle = _require_handle(run)
        run.alternates += 1
        alternate = await self._cache.alternate(run.project_root, handle.source)
        if alternate is None:
            self._mark_unconfigured(run)
            return Stage.DONE
        LOGGER.debug(
            "No configuration found with %s; retrying with %s",
            handle.resolved.describe(),
            alternate.resolved.describe(),
        )
        run.handle = alternate
        run.promote = True
        run.error = None
        return Stage.LINT

    def _is_current(self, run: PipelineRun) -> bool:
        return run.generation == self._cache.generation

    def _mark_unconfigured(self, run: PipelineRun) -> None:
        run.report = LintReport.empty()
        # A reset while the engine ran makes this outcome stale.
        if not self._is_current(run):
            LOGGER.debug("Discarding stale no-configuration result for %s", run.project_root or "<none>")
            return
        LOGGER.debug("No ESLint configuration for %s", run.project_root or "<none>")
        self._no_config.add(root_key(run.project_root))


def _require_handle(run: PipelineRun) -> CachedEngine:
    if run.handle is None:
        raise TransitionError(f"No engine acquired for {run.file_path}")
    return run.handle


__all__ = ["ExecutionPipeline", "MAX_ENGINE_ATTEMPTS", "PipelineRun", "Stage", "TRANSITIONS", "TransitionError"]
