# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Composition root owning every piece of process-lifetime lint state.

A :class:`LintService` owns the engine resolver and cache, the set of
roots known to lack configuration, the re-lint debouncer, the execution
pipeline and the project scanner. Independent instances share nothing, so
tests can run several side by side.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Final

from .config.settings import ENGINE_KEYS, Settings
from .config.store import ConfigStore
from .debounce import RELINT_DELAY_SECONDS, RelintDebouncer
from .engine.cache import EngineCache
from .engine.resolver import EngineResolver, EngineStrategy
from .errors import LintBridgeError
from .host import CompositeDisposable, Notifier, TextDocument, Workspace
from .logging import configure_debug_logging, get_logger
from .pipeline import ExecutionPipeline
from .provider import LinterProvider
from .scanner import ProjectScanner

LOGGER = get_logger(__name__)

RELOAD_COMMAND: Final[str] = "reload"
LINT_PROJECT_COMMAND: Final[str] = "lint-project"

CommandHandler = Callable[[], Awaitable[Any] | None]


class LintService:
    """Long-lived service wiring configuration changes to cache resets and re-lints."""

    def __init__(
        self,
        workspace: Workspace,
        notifier: Notifier,
        config: ConfigStore | None = None,
        *,
        strategies: Sequence[EngineStrategy] | None = None,
        relint_delay: float = RELINT_DELAY_SECONDS,
    ) -> None:
        self.workspace = workspace
        self.config = config if config is not None else ConfigStore()
        self.no_config: set[str] = set()
        self.resolver = EngineResolver(self._current_settings, strategies)
        self.cache = EngineCache(self.resolver, self._current_settings)
        self.pipeline = ExecutionPipeline(self.cache, self.no_config)
        self.scanner = ProjectScanner(workspace, self.cache, notifier)
        self.debouncer = RelintDebouncer(workspace, delay=relint_delay)
        self.provider = LinterProvider(workspace, self.cache, self.pipeline, self._grammar_scopes)
        self._subscriptions: CompositeDisposable | None = None

    @property
    def settings(self) -> Settings:
        """Return the current settings snapshot."""

        return self.config.settings

    @property
    def active(self) -> bool:
        """Return ``True`` between :meth:`init` and :meth:`dispose`."""

        return self._subscriptions is not None

    @property
    def commands(self) -> dict[str, CommandHandler]:
        """Return the commands the host should register."""

        return {
            RELOAD_COMMAND: self.reload,
            LINT_PROJECT_COMMAND: self.scanner.run_scan,
        }

    def init(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Subscribe to configuration and project changes.

        Args:
            loop: Event loop used for re-lint timers scheduled from callbacks
                that run outside the loop.
        """

        if self._subscriptions is not None:
            return
        self.debouncer.bind(loop)
        subscriptions = CompositeDisposable()
        subscriptions.add(
            self.config.observe("debug", configure_debug_logging),
            self.config.observe("grammar_scopes", self.debouncer.trigger),
            self.workspace.on_did_change_paths(self._trigger_reset),
            *(self.config.on_did_change(key, self._trigger_reset) for key in ENGINE_KEYS),
        )
        self._subscriptions = subscriptions

    def reset(self) -> None:
        """Clear cached engines and the no-configuration set together."""

        self.cache.invalidate()
        self.no_config.clear()

    def reload(self) -> None:
        """Handle the ``reload`` command: reset caches and re-lint open documents."""

        self.reset()
        self.debouncer.trigger(self.settings.grammar_scopes)

    async def run_command(self, name: str) -> Any:
        """Invoke the command registered as ``name``.

        Raises:
            LintBridgeError: If no command is registered under ``name``.
        """

        handler = self.commands.get(name)
        if handler is None:
            raise LintBridgeError(f"Unknown command '{name}'")
        outcome = handler()
        if inspect.isawaitable(outcome):
            return await outcome
        return outcome

    def on_document_opened(self, document: TextDocument) -> None:
        """Drop project-scan diagnostics of a newly opened document when configured to."""

        if self.settings.delete_on_open:
            self.scanner.forget(document.path)

    def provide_linter(self) -> LinterProvider:
        """Return the linter provider capability."""

        return self.provider

    def provide_project_scan(self) -> ProjectScanner:
        """Return the project scan capability."""

        return self.scanner

    def dispose(self) -> None:
        """Tear down subscriptions, pending timers and caches."""

        if self._subscriptions is not None:
            self._subscriptions.dispose()
            self._subscriptions = None
        self.debouncer.cancel()
        self.scanner.dispose()
        self.reset()

    def _trigger_reset(self, _value: Any = None) -> None:
        LOGGER.debug("Configuration changed; resetting engines")
        self.reset()
        self.debouncer.trigger(self.settings.grammar_scopes)

    def _current_settings(self) -> Settings:
        return self.config.settings

    def _grammar_scopes(self) -> Sequence[str]:
        return self.settings.grammar_scopes


__all__ = ["LINT_PROJECT_COMMAND", "LintService", "RELOAD_COMMAND"]
