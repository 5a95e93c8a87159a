# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across lintbridge."""

from __future__ import annotations

from collections.abc import Sequence


class LintBridgeError(Exception):
    """Base class for errors raised by lintbridge."""


class ConfigError(LintBridgeError):
    """Raised when configuration input is invalid."""


class EngineError(LintBridgeError):
    """Raised when an engine invocation fails or produces unusable output."""

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


class EngineTimeoutError(EngineError):
    """Raised when an engine call exceeds the configured timeout."""


__all__ = ["ConfigError", "EngineError", "EngineTimeoutError", "LintBridgeError"]
