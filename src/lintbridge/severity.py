# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final

ESLINT_WARNING_LEVEL: Final[int] = 1
ESLINT_ERROR_LEVEL: Final[int] = 2


class Severity(str, Enum):
    """Severity levels understood by the diagnostics presentation layer."""

    ERROR = "error"
    WARNING = "warning"


def severity_from_level(level: int | None) -> Severity:
    """Map an ESLint numeric severity onto :class:`Severity`.

    Only level ``1`` is a warning; every other value, including a missing
    level, is reported as an error.

    Args:
        level: Numeric severity reported by the engine.

    Returns:
        Severity: Normalised severity.
    """

    if level == ESLINT_WARNING_LEVEL:
        return Severity.WARNING
    return Severity.ERROR


__all__ = ["ESLINT_ERROR_LEVEL", "ESLINT_WARNING_LEVEL", "Severity", "severity_from_level"]
