# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate engine messages into host-agnostic diagnostics."""

from __future__ import annotations

from typing import Final

from .coords import clamp_row, map_range
from .host import TextDocument
from .models import Diagnostic, LintMessage, Location, Position, Solution
from .severity import severity_from_level

FATAL_RULE_LABEL: Final[str] = "fatal"


def format_excerpt(message: LintMessage) -> str:
    """Return ``"<ruleId>: <message>"``, using ``fatal`` for parse errors."""

    return f"{message.rule_id or FATAL_RULE_LABEL}: {message.message}"


def translate(document: TextDocument, message: LintMessage) -> Diagnostic:
    """Convert ``message`` into a :class:`Diagnostic` for ``document``.

    Engine columns are 1-indexed. A column pointing past the end of its line
    (e.g. a missing trailing newline) is pinned to the line length instead of
    wrapping onto the next line.

    Args:
        document: Document the message was produced for.
        message: Raw engine message.

    Returns:
        Diagnostic: Diagnostic with a clamped range and an optional fix.
    """

    buffer = document.buffer
    row = (message.line or 1) - 1
    column = message.column or 1
    line_length = buffer.line_length(clamp_row(buffer, row))
    start_column = line_length + 1 if column - 1 > line_length else column
    end_line = message.end_line - 1 if message.end_line is not None else None
    end_column = message.end_column - 1 if message.end_column is not None else None
    position = map_range(buffer, row, start_column - 1, end_line, end_column)

    solutions: tuple[Solution, ...] = ()
    if message.fix is not None:
        fix_start, fix_end = message.fix.range
        fix_position: Position = (
            buffer.position_for_character_index(fix_start),
            buffer.position_for_character_index(fix_end),
        )
        solutions = (Solution(position=fix_position, replace_with=message.fix.text),)

    return Diagnostic(
        severity=severity_from_level(message.severity),
        excerpt=format_excerpt(message),
        location=Location(file=document.path, position=position),
        solutions=solutions,
    )


def translate_scan_message(file_path: str | None, message: LintMessage) -> Diagnostic:
    """Convert a project-scan message without access to an editor buffer.

    Args:
        file_path: File reported by the engine for the message.
        message: Raw engine message.

    Returns:
        Diagnostic: Diagnostic whose range is the engine's own end position,
        or a point range when none is reported.
    """

    start_row = max(0, (message.line or 1) - 1)
    start_col = max(0, (message.column or 1) - 1)
    if message.end_line is not None and message.end_column is not None:
        end = (max(0, message.end_line - 1), max(0, message.end_column - 1))
    else:
        end = (start_row, start_col)
    return Diagnostic(
        severity=severity_from_level(message.severity),
        excerpt=format_excerpt(message),
        location=Location(file=file_path, position=((start_row, start_col), end)),
    )


__all__ = ["FATAL_RULE_LABEL", "format_excerpt", "translate", "translate_scan_message"]
