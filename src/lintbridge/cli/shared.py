# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (service wiring, errors, rendering)."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from ..config import ConfigStore, load_settings
from ..errors import ConfigError
from ..filesystem import ConsoleNotifier, LocalWorkspace
from ..models import Diagnostic
from ..service import LintService
from ..severity import Severity


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLIContext:
    """Service and host objects built for one CLI invocation."""

    service: LintService
    workspace: LocalWorkspace
    notifier: ConsoleNotifier


CommandCallable = Callable[..., Any]


def register_command(
    app: typer.Typer,
    callback: CommandCallable,
    *,
    name: str | None = None,
    help_text: str | None = None,
) -> CommandCallable:
    """Register ``callback`` on ``app`` with consistent metadata handling.

    Args:
        app: Typer application receiving the command registration.
        callback: Command callable to register.
        name: Optional explicit command name.
        help_text: Help text shown in CLI usage output.

    Returns:
        CommandCallable: The registered callback.
    """

    return app.command(name=name, help=help_text)(callback)


def build_context(
    roots: Sequence[Path],
    *,
    config_root: Path,
    use_builtin: bool | None = None,
    debug: bool | None = None,
) -> CLIContext:
    """Load settings for ``config_root`` and wire a service over ``roots``.

    Args:
        roots: Project roots the workspace consists of.
        config_root: Directory whose configuration files are read.
        use_builtin: Optional override of the ``use_builtin`` setting.
        debug: Optional override of the ``debug`` setting.

    Returns:
        CLIContext: Initialised service with its host objects.

    Raises:
        CLIError: If the configuration is invalid.
    """

    try:
        settings = load_settings(config_root, overrides={"use_builtin": use_builtin, "debug": debug})
    except ConfigError as exc:
        raise CLIError(f"Invalid configuration: {exc}", exit_code=2) from exc
    workspace = LocalWorkspace(roots)
    notifier = ConsoleNotifier()
    service = LintService(workspace, notifier, ConfigStore(settings))
    service.init()
    return CLIContext(service=service, workspace=workspace, notifier=notifier)


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    """Return ``True`` when any diagnostic is error level."""

    return any(item.severity is Severity.ERROR for item in diagnostics)


def diagnostics_payload(diagnostics: Iterable[Diagnostic]) -> list[dict[str, Any]]:
    """Return JSON-serialisable representations of ``diagnostics``."""

    return [item.model_dump(mode="json") for item in diagnostics]


def render_diagnostics(console: Console, diagnostics: Sequence[Diagnostic], *, as_json: bool = False) -> None:
    """Print ``diagnostics`` as a table, or as JSON when requested.

    Rows and columns are shown 1-indexed, as editors display them.
    """

    if as_json:
        console.out(json.dumps(diagnostics_payload(diagnostics), indent=2), highlight=False)
        return
    if not diagnostics:
        console.print("[green]No problems found.[/green]")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("File")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Severity")
    table.add_column("Message")
    for item in diagnostics:
        (row, column), _ = item.location.position
        style = "red" if item.severity is Severity.ERROR else "yellow"
        table.add_row(
            item.location.file or "-",
            str(row + 1),
            str(column + 1),
            f"[{style}]{item.severity.value}[/{style}]",
            item.excerpt,
        )
    console.print(table)


__all__ = [
    "CLIContext",
    "CLIError",
    "build_context",
    "diagnostics_payload",
    "has_errors",
    "register_command",
    "render_diagnostics",
]
