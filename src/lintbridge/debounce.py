# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Coalesce bursts of re-lint requests into a single pass."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Final

from .host import Workspace
from .logging import get_logger

LOGGER = get_logger(__name__)

RELINT_DELAY_SECONDS: Final[float] = 2.5


class RelintDebouncer:
    """Hold at most one pending re-lint timer; each trigger replaces the last."""

    def __init__(
        self,
        workspace: Workspace,
        *,
        delay: float = RELINT_DELAY_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._workspace = workspace
        self._delay = delay
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        """Return ``True`` while a re-lint is scheduled."""

        return self._handle is not None

    def bind(self, loop: asyncio.AbstractEventLoop | None) -> None:
        """Use ``loop`` for timers requested outside a running event loop."""

        self._loop = loop

    def trigger(self, grammar_scopes: Iterable[str]) -> None:
        """Schedule a re-lint of open documents in ``grammar_scopes``.

        Any previously scheduled re-lint is cancelled. Without an event loop
        the re-lint runs immediately.
        """

        self.cancel()
        scopes = frozenset(grammar_scopes)
        loop = self._current_loop()
        if loop is None:
            self._fire(scopes)
            return
        self._handle = loop.call_later(self._delay, self._fire, scopes)

    def cancel(self) -> None:
        """Drop the pending re-lint, if any."""

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _current_loop(self) -> asyncio.AbstractEventLoop | None:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            if self._loop is not None and not self._loop.is_closed():
                return self._loop
            return None

    def _fire(self, scopes: frozenset[str]) -> None:
        self._handle = None
        documents = [document for document in self._workspace.open_documents() if document.grammar in scopes]
        LOGGER.debug("Re-linting %d open document(s)", len(documents))
        for document in documents:
            self._workspace.request_lint(document)


__all__ = ["RELINT_DELAY_SECONDS", "RelintDebouncer"]
