# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lintbridge package."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .severity import ESLINT_ERROR_LEVEL, Severity

Point = tuple[int, int]
Position = tuple[Point, Point]


class LintFix(BaseModel):
    """Autofix attached to an engine message, expressed in character offsets."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    range: tuple[int, int]
    text: str = ""


class LintMessage(BaseModel):
    """Single message as produced by the lint engine (1-indexed coordinates)."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    line: int | None = None
    column: int | None = None
    end_line: int | None = Field(default=None, alias="endLine")
    end_column: int | None = Field(default=None, alias="endColumn")
    message: str = ""
    rule_id: str | None = Field(default=None, alias="ruleId")
    severity: int = ESLINT_ERROR_LEVEL
    fatal: bool = False
    fix: LintFix | None = None


class LintResult(BaseModel):
    """Messages reported by the engine for one file."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    file_path: str | None = Field(default=None, alias="filePath")
    messages: tuple[LintMessage, ...] = Field(default_factory=tuple)


class LintReport(BaseModel):
    """Outcome of one execution pipeline run."""

    model_config = ConfigDict(frozen=True)

    results: tuple[LintResult, ...] = Field(default_factory=tuple)

    @classmethod
    def empty(cls) -> LintReport:
        """Return the report used whenever linting is skipped.

        Returns:
            LintReport: Report holding one result without messages.
        """

        return cls(results=(LintResult(),))

    @classmethod
    def from_error(cls, error: BaseException | str) -> LintReport:
        """Return a report carrying ``error`` as a single synthetic message.

        Args:
            error: Failure raised while linting.

        Returns:
            LintReport: Report with one error-level message at line 1.
        """

        message = LintMessage(line=1, message=str(error), rule_id="error", severity=ESLINT_ERROR_LEVEL)
        return cls(results=(LintResult(messages=(message,)),))

    @classmethod
    def from_payload(cls, payload: Any) -> LintReport:
        """Build a report from the engine's JSON result list.

        Args:
            payload: Decoded JSON array of per-file results.

        Returns:
            LintReport: Validated report; non-mapping entries are dropped.
        """

        items = payload if isinstance(payload, Sequence) and not isinstance(payload, (str, bytes)) else []
        return cls(results=tuple(LintResult.model_validate(item) for item in items if isinstance(item, dict)))

    @property
    def messages(self) -> tuple[LintMessage, ...]:
        """Return messages of the first result, the single-file view."""

        if not self.results:
            return ()
        return self.results[0].messages


class Solution(BaseModel):
    """Replacement offered to the user for a diagnostic."""

    model_config = ConfigDict(frozen=True)

    position: Position
    replace_with: str


class Location(BaseModel):
    """File and 0-indexed range a diagnostic refers to."""

    model_config = ConfigDict(frozen=True)

    file: str | None
    position: Position


class Diagnostic(BaseModel):
    """Host-agnostic diagnostic handed to the presentation layer."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    excerpt: str
    location: Location
    solutions: tuple[Solution, ...] = Field(default_factory=tuple)


__all__ = [
    "Diagnostic",
    "LintFix",
    "LintMessage",
    "LintReport",
    "LintResult",
    "Location",
    "Point",
    "Position",
    "Solution",
]
