# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Interfaces of the host editor consumed by the lint core."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from .models import Diagnostic, Point


@runtime_checkable
class TextBuffer(Protocol):
    """Read-only view over the text of a document."""

    def line_count(self) -> int:
        """Return the number of lines held by the buffer."""

        raise NotImplementedError

    def line_for_row(self, row: int) -> str | None:
        """Return the text of ``row`` or ``None`` when out of range."""

        raise NotImplementedError

    def line_length(self, row: int) -> int:
        """Return the length of ``row`` excluding the line terminator."""

        raise NotImplementedError

    def position_for_character_index(self, index: int) -> Point:
        """Return the ``(row, column)`` of character offset ``index``."""

        raise NotImplementedError


@runtime_checkable
class TextDocument(Protocol):
    """Editor-side document the linter reads from."""

    @property
    def path(self) -> str | None:
        """Return the file system path backing the document."""

        raise NotImplementedError

    @property
    def grammar(self) -> str:
        """Return the grammar scope of the document (e.g. ``source.js``)."""

        raise NotImplementedError

    @property
    def buffer(self) -> TextBuffer:
        """Return the buffer holding the document text."""

        raise NotImplementedError

    def text(self) -> str:
        """Return the full text of the document."""

        raise NotImplementedError


@runtime_checkable
class Workspace(Protocol):
    """Project membership and open-document enumeration."""

    def project_paths(self) -> Sequence[str]:
        """Return the workspace project roots."""

        raise NotImplementedError

    def project_root_for(self, path: str | None) -> str | None:
        """Return the project root containing ``path``, if any."""

        raise NotImplementedError

    def open_documents(self) -> Sequence[TextDocument]:
        """Return documents currently open in the editor."""

        raise NotImplementedError

    def request_lint(self, document: TextDocument) -> None:
        """Ask the host to lint ``document`` again."""

        raise NotImplementedError

    def on_did_change_paths(self, callback: Callable[[Sequence[str]], None]) -> Disposable:
        """Invoke ``callback`` whenever the set of project roots changes."""

        raise NotImplementedError


@runtime_checkable
class Notifier(Protocol):
    """User-visible, non-blocking notifications."""

    def add_warning(self, title: str, *, detail: str = "") -> None:
        """Show a dismissable warning."""

        raise NotImplementedError


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receiver of project-wide diagnostics (indie linter delegate)."""

    def set_all_messages(self, messages: Sequence[Diagnostic], *, show_project_view: bool = True) -> None:
        """Replace every diagnostic previously delivered by the scanner."""

        raise NotImplementedError


class Disposable:
    """Handle that runs a teardown callback exactly once."""

    def __init__(self, callback: Callable[[], Any] | None = None) -> None:
        self._callback = callback
        self.disposed = False

    def dispose(self) -> None:
        """Run the teardown callback unless already disposed."""

        if self.disposed:
            return
        self.disposed = True
        if self._callback is not None:
            self._callback()


class CompositeDisposable(Disposable):
    """Group of disposables torn down together."""

    def __init__(self, *items: Disposable) -> None:
        super().__init__()
        self._items: list[Disposable] = list(items)

    def add(self, *items: Disposable) -> None:
        """Track ``items``; disposes them immediately when already disposed."""

        if self.disposed:
            for item in items:
                item.dispose()
            return
        self._items.extend(items)

    def dispose(self) -> None:
        if self.disposed:
            return
        self.disposed = True
        items, self._items = self._items, []
        for item in items:
            item.dispose()


class Emitter:
    """Minimal synchronous event emitter."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[[Any], None]]] = {}

    def on(self, event: str, handler: Callable[[Any], None]) -> Disposable:
        """Subscribe ``handler`` to ``event``.

        Args:
            event: Event name.
            handler: Callable receiving the emitted value.

        Returns:
            Disposable: Handle removing the subscription.
        """

        self._handlers.setdefault(event, []).append(handler)
        return Disposable(lambda: self._remove(event, handler))

    def emit(self, event: str, value: Any = None) -> None:
        """Invoke every handler subscribed to ``event`` with ``value``."""

        for handler in list(self._handlers.get(event, ())):
            handler(value)

    def _remove(self, event: str, handler: Callable[[Any], None]) -> None:
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def dispose(self) -> None:
        """Drop every subscription."""

        self._handlers.clear()


__all__ = [
    "CompositeDisposable",
    "DiagnosticSink",
    "Disposable",
    "Emitter",
    "Notifier",
    "TextBuffer",
    "TextDocument",
    "Workspace",
]
