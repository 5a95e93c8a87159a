# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Debug tracing and user-facing logging helpers."""

from __future__ import annotations

import logging
from typing import Final

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from .console import detect_tty, get_console_manager

PACKAGE_LOGGER_NAME: Final[str] = "lintbridge"
_HANDLER_MARKER: Final[str] = "_lintbridge_handler"


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the package namespace.

    Args:
        name: Dotted module name, usually ``__name__``.

    Returns:
        logging.Logger: Logger whose records are gated by the ``debug`` setting.
    """

    if name == PACKAGE_LOGGER_NAME or name.startswith(f"{PACKAGE_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{name}")


def configure_debug_logging(enabled: bool) -> None:
    """Toggle debug tracing for every ``lintbridge`` logger.

    When enabled, records are rendered on stderr through a Rich handler that
    prefixes each line with the package name. When disabled, only warnings
    and above propagate.

    Args:
        enabled: Value of the ``debug`` setting.
    """

    root = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not any(getattr(handler, _HANDLER_MARKER, False) for handler in root.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter(f"[{PACKAGE_LOGGER_NAME}] %(message)s"))
        setattr(handler, _HANDLER_MARKER, True)
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(logging.DEBUG if enabled else logging.WARNING)


def _print_line(msg: str, *, style: str | None, use_color: bool | None = None) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=False)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def warn(msg: str, *, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(msg, style="yellow", use_color=use_color)


__all__ = [
    "PACKAGE_LOGGER_NAME",
    "configure_debug_logging",
    "get_logger",
    "warn",
]
