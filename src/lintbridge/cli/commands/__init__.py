# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

import typer

from . import lint, resolve, scan

__all__ = ["register_commands"]


def register_commands(app: typer.Typer) -> None:
    """Register the built-in CLI commands on ``app``."""

    lint.register(app)
    scan.register(app)
    resolve.register(app)
