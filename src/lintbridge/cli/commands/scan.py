# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``lintbridge scan``: run a project-wide scan of one or more roots."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ...filesystem import CollectingSink
from ...service import LINT_PROJECT_COMMAND
from ..options import BUILTIN_OPTION, DEBUG_OPTION, JSON_OPTION, ROOTS_ARGUMENT, resolve_root
from ..shared import CLIError, build_context, has_errors, register_command, render_diagnostics


def run_scan(
    roots: Sequence[Path],
    *,
    use_builtin: bool | None = None,
    debug: bool | None = None,
    as_json: bool = False,
    console: Console | None = None,
) -> int:
    """Scan every root in ``roots`` and render the collected diagnostics.

    Configuration is read from the first root.

    Returns:
        int: ``1`` when error diagnostics were found, ``2`` for configuration
        problems, ``0`` otherwise.
    """

    console = console or Console()
    try:
        context = build_context(roots, config_root=roots[0], use_builtin=use_builtin, debug=debug)
    except CLIError as exc:
        console.print(Panel(f"[red]{exc}[/red]", border_style="red"))
        return exc.exit_code
    sink = CollectingSink()
    context.service.provide_project_scan().register(sink)
    try:
        asyncio.run(context.service.run_command(LINT_PROJECT_COMMAND))
        diagnostics = sink.messages
    finally:
        context.service.dispose()
    render_diagnostics(console, diagnostics, as_json=as_json)
    return 1 if has_errors(diagnostics) else 0


def scan_command(
    roots: ROOTS_ARGUMENT = None,
    use_builtin: BUILTIN_OPTION = None,
    debug: DEBUG_OPTION = None,
    as_json: JSON_OPTION = False,
) -> None:
    """Lint every file of the given project ROOTS (default: the current directory)."""

    targets = [resolve_root(root) for root in roots] if roots else [resolve_root(None)]
    raise typer.Exit(code=run_scan(targets, use_builtin=use_builtin, debug=debug, as_json=as_json))


def register(app: typer.Typer) -> None:
    """Register the ``scan`` command on ``app``."""

    register_command(app, scan_command, name="scan")


__all__ = ["register", "run_scan", "scan_command"]
