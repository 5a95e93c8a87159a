# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Linter provider invoked by the host for every edit of an open document."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .engine.cache import EngineCache
from .host import TextDocument, Workspace
from .logging import get_logger
from .models import Diagnostic
from .pipeline import ExecutionPipeline
from .translate import translate

LOGGER = get_logger(__name__)


class LinterProvider:
    """Capability object handed to the host's linter registry."""

    name = "ESLint"
    scope = "file"
    lints_on_change = True

    def __init__(
        self,
        workspace: Workspace,
        cache: EngineCache,
        pipeline: ExecutionPipeline,
        grammar_scopes: Callable[[], Sequence[str]],
    ) -> None:
        self._workspace = workspace
        self._cache = cache
        self._pipeline = pipeline
        self._grammar_scopes = grammar_scopes

    @property
    def grammar_scopes(self) -> list[str]:
        """Return the grammar scopes currently configured for linting."""

        return list(self._grammar_scopes())

    async def lint(self, document: TextDocument) -> list[Diagnostic] | None:
        """Return diagnostics for ``document``.

        Only documents open in the workspace are linted, so a file is never
        checked against the configuration of a project it no longer belongs
        to; other documents yield ``None``.

        Args:
            document: Document that changed.

        Returns:
            list[Diagnostic] | None: Diagnostics, ``[]`` when the file is
            outside every project, has no engine or is ignored.
        """

        if not any(candidate is document for candidate in self._workspace.open_documents()):
            return None
        file_path = document.path
        if not file_path:
            return []
        project_root = self._workspace.project_root_for(file_path)
        if not project_root or self._pipeline.is_unconfigured(project_root):
            return []
        handle = await self._cache.get(project_root)
        if handle is None:
            return []
        try:
            ignored = await handle.engine.is_path_ignored(file_path)
        except Exception as exc:  # noqa: BLE001 - a failed ignore check falls through to linting
            LOGGER.debug("Ignore check failed for %s: %s", file_path, exc)
            ignored = False
        if ignored:
            return []
        report = await self._pipeline.exec(file_path, document.text(), project_root)
        return [translate(document, message) for message in report.messages]


__all__ = ["LinterProvider"]
