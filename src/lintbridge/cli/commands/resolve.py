# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``lintbridge resolve``: show which ESLint installation serves a project."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..options import BUILTIN_OPTION, DEBUG_OPTION, ROOT_OPTION, resolve_root
from ..shared import CLIError, build_context, register_command


def run_resolve(
    root: Path,
    *,
    use_builtin: bool | None = None,
    debug: bool | None = None,
    console: Console | None = None,
) -> int:
    """Resolve the engine for ``root`` and print where it came from.

    Returns:
        int: ``0`` when an engine was found, ``1`` otherwise.
    """

    console = console or Console()
    try:
        context = build_context([root], config_root=root, use_builtin=use_builtin, debug=debug)
    except CLIError as exc:
        console.print(Panel(f"[red]{exc}[/red]", border_style="red"))
        return exc.exit_code
    try:
        resolved = context.service.resolver.resolve(str(root))
        bundle_dir = context.service.settings.bundle_dir
    finally:
        context.service.dispose()
    if resolved is None:
        console.print(Panel(f"[red]No ESLint installation available for {root}[/red]", border_style="red"))
        return 1
    table = Table(show_header=False, box=None)
    table.add_row("Project", str(root))
    table.add_row("Source", resolved.source.value)
    table.add_row("Version", resolved.version)
    table.add_row("Location", str(resolved.location) if resolved.location else "-")
    table.add_row("Bundle directory", str(bundle_dir))
    console.print(Panel(table, title="ESLint"))
    return 0


def resolve_command(
    root: ROOT_OPTION = None,
    use_builtin: BUILTIN_OPTION = None,
    debug: DEBUG_OPTION = None,
) -> None:
    """Show the ESLint installation chosen for the project."""

    raise typer.Exit(code=run_resolve(resolve_root(root), use_builtin=use_builtin, debug=debug))


def register(app: typer.Typer) -> None:
    """Register the ``resolve`` command on ``app``."""

    register_command(app, resolve_command, name="resolve")


__all__ = ["register", "resolve_command", "run_resolve"]
