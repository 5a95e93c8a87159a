# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``lintbridge lint``: lint individual files through the linter provider."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ...filesystem import FileDocument
from ...models import Diagnostic
from ..options import BUILTIN_OPTION, DEBUG_OPTION, FILES_ARGUMENT, JSON_OPTION, ROOT_OPTION, resolve_root
from ..shared import CLIContext, CLIError, build_context, has_errors, register_command, render_diagnostics


async def _lint_documents(context: CLIContext, documents: Sequence[FileDocument]) -> list[Diagnostic]:
    provider = context.service.provide_linter()
    collected: list[Diagnostic] = []
    for document in documents:
        diagnostics = await provider.lint(document)
        collected.extend(diagnostics or ())
    return collected


def run_lint(
    files: Sequence[Path],
    root: Path,
    *,
    use_builtin: bool | None = None,
    debug: bool | None = None,
    as_json: bool = False,
    console: Console | None = None,
) -> int:
    """Lint ``files`` as documents open in a workspace rooted at ``root``.

    Args:
        files: Files to lint.
        root: Project root used for engine resolution and configuration.
        use_builtin: Optional override of the bundled-fallback setting.
        debug: Optional override of the debug setting.
        as_json: Emit JSON instead of a table.
        console: Optional ``rich`` console for output rendering.

    Returns:
        int: ``1`` when any error diagnostic was reported, ``0`` otherwise.
    """

    console = console or Console()
    try:
        context = build_context([root], config_root=root, use_builtin=use_builtin, debug=debug)
    except CLIError as exc:
        console.print(Panel(f"[red]{exc}[/red]", border_style="red"))
        return exc.exit_code
    try:
        documents = [context.workspace.open(FileDocument(path)) for path in files]
        diagnostics = asyncio.run(_lint_documents(context, documents))
    finally:
        context.service.dispose()
    render_diagnostics(console, diagnostics, as_json=as_json)
    return 1 if has_errors(diagnostics) else 0


def lint_command(
    files: FILES_ARGUMENT,
    root: ROOT_OPTION = None,
    use_builtin: BUILTIN_OPTION = None,
    debug: DEBUG_OPTION = None,
    as_json: JSON_OPTION = False,
) -> None:
    """Lint FILES with the ESLint installation chosen for the project."""

    raise typer.Exit(
        code=run_lint(files, resolve_root(root), use_builtin=use_builtin, debug=debug, as_json=as_json),
    )


def register(app: typer.Typer) -> None:
    """Register the ``lint`` command on ``app``."""

    register_command(app, lint_command, name="lint")


__all__ = ["lint_command", "register", "run_lint"]
