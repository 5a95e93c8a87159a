# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File-system backed host used outside an editor (CLI, scripting, tests)."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Final

from .host import Disposable, Emitter
from .logging import get_logger, warn
from .models import Diagnostic, Point

LOGGER = get_logger(__name__)

GRAMMAR_BY_SUFFIX: Final[dict[str, str]] = {
    ".js": "source.js",
    ".cjs": "source.js",
    ".mjs": "source.js",
    ".jsx": "source.js.jsx",
    ".ts": "source.ts",
    ".cts": "source.ts",
    ".mts": "source.ts",
    ".tsx": "source.tsx",
    ".vue": "text.html.vue",
}
PLAIN_TEXT_GRAMMAR: Final[str] = "text.plain"
PATHS_CHANGED: Final[str] = "did-change-paths"


def grammar_for(path: str | Path) -> str:
    """Return the grammar scope conventionally used for ``path``'s suffix."""

    return GRAMMAR_BY_SUFFIX.get(Path(path).suffix.lower(), PLAIN_TEXT_GRAMMAR)


class StringBuffer:
    """Immutable :class:`~lintbridge.host.TextBuffer` over a string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._lines = text.split("\n")
        self._offsets: list[int] = []
        offset = 0
        for line in self._lines:
            self._offsets.append(offset)
            offset += len(line) + 1

    def line_count(self) -> int:
        return len(self._lines)

    def line_for_row(self, row: int) -> str | None:
        if 0 <= row < len(self._lines):
            return self._lines[row].removesuffix("\r")
        return None

    def line_length(self, row: int) -> int:
        line = self.line_for_row(row)
        return len(line) if line is not None else 0

    def position_for_character_index(self, index: int) -> Point:
        """Return the ``(row, column)`` of ``index``, clamped to the text bounds."""

        bounded = min(max(index, 0), len(self._text))
        row = bisect_right(self._offsets, bounded) - 1
        column = min(bounded - self._offsets[row], self.line_length(row))
        return row, column


class FileDocument:
    """Document whose text is read from disk unless supplied explicitly."""

    def __init__(self, path: str | Path, text: str | None = None, *, grammar: str | None = None) -> None:
        self._path = str(Path(path).expanduser().resolve(strict=False))
        self._text = text if text is not None else Path(self._path).read_text(encoding="utf-8")
        self._grammar = grammar or grammar_for(self._path)
        self._buffer = StringBuffer(self._text)

    @property
    def path(self) -> str | None:
        return self._path

    @property
    def grammar(self) -> str:
        return self._grammar

    @property
    def buffer(self) -> StringBuffer:
        return self._buffer

    def text(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"FileDocument({self._path!r})"


class LocalWorkspace:
    """Workspace made of explicit project roots and explicitly opened documents."""

    def __init__(self, roots: Iterable[str | Path] = (), documents: Iterable[FileDocument] = ()) -> None:
        self._roots = [_absolute(root) for root in roots]
        self._documents: list[FileDocument] = list(documents)
        self._emitter = Emitter()
        self.lint_requests: list[FileDocument] = []

    def project_paths(self) -> Sequence[str]:
        return tuple(self._roots)

    def set_project_paths(self, roots: Iterable[str | Path]) -> None:
        """Replace the project roots and notify subscribers."""

        self._roots = [_absolute(root) for root in roots]
        self._emitter.emit(PATHS_CHANGED, tuple(self._roots))

    def project_root_for(self, path: str | None) -> str | None:
        """Return the deepest project root containing ``path``."""

        if not path:
            return None
        target = Path(_absolute(path))
        candidates = [root for root in self._roots if target == Path(root) or Path(root) in target.parents]
        if not candidates:
            return None
        return max(candidates, key=len)

    def open(self, document: FileDocument) -> FileDocument:
        """Add ``document`` to the open documents."""

        if document not in self._documents:
            self._documents.append(document)
        return document

    def close(self, document: FileDocument) -> None:
        """Remove ``document`` from the open documents."""

        if document in self._documents:
            self._documents.remove(document)

    def open_documents(self) -> Sequence[FileDocument]:
        return tuple(self._documents)

    def request_lint(self, document: FileDocument) -> None:
        self.lint_requests.append(document)

    def on_did_change_paths(self, callback: Callable[[Sequence[str]], None]) -> Disposable:
        return self._emitter.on(PATHS_CHANGED, callback)


class ConsoleNotifier:
    """Notifier printing warnings to the terminal."""

    def __init__(self) -> None:
        self.warnings: list[tuple[str, str]] = []

    def add_warning(self, title: str, *, detail: str = "") -> None:
        self.warnings.append((title, detail))
        warn(f"{title}: {detail}" if detail else title)


class CollectingSink:
    """Diagnostic sink that keeps the last delivered set."""

    def __init__(self) -> None:
        self.messages: tuple[Diagnostic, ...] = ()
        self.deliveries = 0

    def set_all_messages(self, messages: Sequence[Diagnostic], *, show_project_view: bool = True) -> None:
        self.messages = tuple(messages)
        self.deliveries += 1
        LOGGER.debug("Received %d project diagnostic(s)", len(self.messages))


def _absolute(path: str | Path) -> str:
    return str(Path(path).expanduser().resolve(strict=False))


__all__ = [
    "CollectingSink",
    "ConsoleNotifier",
    "FileDocument",
    "LocalWorkspace",
    "StringBuffer",
    "grammar_for",
]
