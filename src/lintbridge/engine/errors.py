# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Classification of engine failures.

The engine reports every failure as free text, so distinguishing "no
configuration found" from a genuine fault relies on message heuristics.
Every such heuristic lives in :func:`classify_failure`; the signatures track
ESLint 8 and 9 wording and may need updating for later releases.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

from ..errors import EngineError, EngineTimeoutError


class FailureKind(str, Enum):
    """Failure categories the execution layer reacts to."""

    NO_CONFIG = "no-config"
    TIMEOUT = "timeout"
    OTHER = "other"


NO_CONFIG_SIGNATURES: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"No ESLint configuration found", re.IGNORECASE),
    re.compile(r"no-config-found"),
    re.compile(r"couldn't find a configuration file", re.IGNORECASE),
    re.compile(r"couldn't find an eslint\.config\.\(?[a-z|]+\)? file", re.IGNORECASE),
)


def failure_text(error: BaseException) -> str:
    """Return the text searched for failure signatures.

    Args:
        error: Exception raised by an engine call.

    Returns:
        str: The exception message followed by any captured stderr.
    """

    parts = [str(error)]
    if isinstance(error, EngineError) and error.stderr and error.stderr not in parts[0]:
        parts.append(error.stderr)
    return "\n".join(part for part in parts if part)


def classify_failure(error: BaseException) -> FailureKind:
    """Map an engine exception to a :class:`FailureKind`.

    Args:
        error: Exception raised by an engine call.

    Returns:
        FailureKind: ``NO_CONFIG`` when the text matches a known missing
        configuration signature, ``TIMEOUT`` for timeouts, else ``OTHER``.
    """

    if isinstance(error, EngineTimeoutError):
        return FailureKind.TIMEOUT
    text = failure_text(error)
    if any(pattern.search(text) for pattern in NO_CONFIG_SIGNATURES):
        return FailureKind.NO_CONFIG
    return FailureKind.OTHER


__all__ = ["NO_CONFIG_SIGNATURES", "FailureKind", "classify_failure", "failure_text"]
