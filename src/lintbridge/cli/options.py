# SPDX-License-Identifier: MIT
"""Typer parameter declarations shared by the CLI commands.

Defaults live in the command signatures; the aliases only carry the
parameter declarations.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

ROOT_OPTION = Annotated[
    Path | None,
    typer.Option("--root", "-r", help="Project root (defaults to the current directory)."),
]
BUILTIN_OPTION = Annotated[
    bool | None,
    typer.Option(
        "--builtin/--no-builtin",
        help="Allow falling back to the bundled ESLint versions.",
        show_default=False,
    ),
]
DEBUG_OPTION = Annotated[
    bool | None,
    typer.Option("--debug/--no-debug", help="Trace resolution and execution on stderr.", show_default=False),
]
JSON_OPTION = Annotated[
    bool,
    typer.Option("--json", help="Emit diagnostics as JSON."),
]
FILES_ARGUMENT = Annotated[
    list[Path],
    typer.Argument(exists=True, dir_okay=False, resolve_path=True, help="Files to lint."),
]
ROOTS_ARGUMENT = Annotated[
    list[Path] | None,
    typer.Argument(file_okay=False, resolve_path=True, help="Project roots to scan."),
]


def resolve_root(root: Path | None) -> Path:
    """Return ``root`` as an absolute path, defaulting to the working directory."""

    return (root or Path.cwd()).expanduser().resolve()


__all__ = [
    "BUILTIN_OPTION",
    "DEBUG_OPTION",
    "FILES_ARGUMENT",
    "JSON_OPTION",
    "ROOTS_ARGUMENT",
    "ROOT_OPTION",
    "resolve_root",
]
