# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project-wide scan of every workspace root from disk."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .engine.cache import EngineCache
from .engine.errors import FailureKind, classify_failure, failure_text
from .host import DiagnosticSink, Notifier, Workspace
from .logging import get_logger
from .models import Diagnostic
from .translate import translate_scan_message

LOGGER = get_logger(__name__)

SCAN_FAILED_TITLE = "ESLint project scan failed"


class ProjectScanner:
    """Lint every project root with the engine's file scan and publish the result.

    Calls made while a scan is running return immediately instead of queuing
    behind it. Results never fall back to alternate engine versions; a root
    without configuration is skipped.
    """

    def __init__(self, workspace: Workspace, cache: EngineCache, notifier: Notifier) -> None:
        self._workspace = workspace
        self._cache = cache
        self._notifier = notifier
        self._sink: DiagnosticSink | None = None
        self._messages: list[Diagnostic] = []
        self.scanning = False

    @property
    def messages(self) -> tuple[Diagnostic, ...]:
        """Return the diagnostics most recently delivered to the sink."""

        return tuple(self._messages)

    def register(self, sink: DiagnosticSink) -> None:
        """Store the sink receiving project diagnostics."""

        self._sink = sink

    async def run_scan(self) -> Sequence[Diagnostic] | None:
        """Scan every workspace root and replace the sink's diagnostics.

        Returns:
            Sequence[Diagnostic] | None: Delivered diagnostics, or ``None`` when
            the scan was skipped or aborted.
        """

        if self._sink is None or self.scanning:
            return None
        self.scanning = True
        try:
            roots = list(self._workspace.project_paths())
            if not roots:
                return None
            collected: list[Diagnostic] = []
            for root in roots:
                collected.extend(await self._scan_root(root))
            self._messages = collected
            self._sink.set_all_messages(tuple(collected), show_project_view=True)
            return tuple(collected)
        except Exception as exc:  # noqa: BLE001 - a scan never propagates into the host
            LOGGER.debug("Project scan failed: %s", exc)
            return None
        finally:
            self.scanning = False

    async def _scan_root(self, root: str) -> list[Diagnostic]:
        handle = await self._cache.get(root)
        if handle is None:
            LOGGER.debug("Skipping project (no ESLint): %s", root)
            return []
        try:
            results = await handle.engine.lint_files(root)
        except Exception as exc:  # noqa: BLE001 - reported per root, scanning continues
            if classify_failure(exc) is FailureKind.NO_CONFIG:
                LOGGER.debug("Skipping project (no configuration): %s", root)
                return []
            LOGGER.debug("Project scan error for %s: %s", root, exc)
            self._notifier.add_warning(SCAN_FAILED_TITLE, detail=failure_text(exc))
            return []
        return [
            translate_scan_message(result.file_path, message)
            for result in results
            for message in result.messages
        ]

    def forget(self, file_path: str | None) -> bool:
        """Drop scan diagnostics of ``file_path`` and re-deliver the remainder.

        Args:
            file_path: File whose project diagnostics should disappear, usually
                because it was opened and the file linter now covers it.

        Returns:
            bool: ``True`` when diagnostics were removed.
        """

        if not file_path or self._sink is None:
            return False
        target = _normalise(file_path)
        remaining = [item for item in self._messages if _normalise(item.location.file) != target]
        if len(remaining) == len(self._messages):
            return False
        self._messages = remaining
        self._sink.set_all_messages(tuple(remaining), show_project_view=True)
        return True

    def dispose(self) -> None:
        """Forget the sink and the last delivered diagnostics."""

        self._messages = []
        self._sink = None


def _normalise(path: str | None) -> str:
    if not path:
        return ""
    return str(Path(path).expanduser().resolve(strict=False))


__all__ = ["ProjectScanner", "SCAN_FAILED_TITLE"]
