# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Conversion of engine positions into clamped editor ranges."""

from __future__ import annotations

from .host import TextBuffer
from .models import Position


def clamp_row(buffer: TextBuffer, row: int) -> int:
    """Return ``row`` bounded to ``[0, line_count - 1]``."""

    last_row = max(buffer.line_count() - 1, 0)
    return min(max(row, 0), last_row)


def clamp_column(buffer: TextBuffer, row: int, column: int | None) -> int:
    """Return ``column`` bounded to ``[0, length of row]``.

    ``row`` must already be clamped. A missing or negative column maps to 0.
    """

    line_length = buffer.line_length(row)
    if column is None or column < 0:
        return 0
    return min(column, line_length)


def map_range(
    buffer: TextBuffer,
    line: int,
    column: int | None = None,
    end_line: int | None = None,
    end_column: int | None = None,
) -> Position:
    """Return a 0-indexed ``((row, col), (row, col))`` range inside ``buffer``.

    The start line is clamped to the buffer and the start column to the
    line's length. When both ``end_line`` and ``end_column`` are supplied they
    are used after the same clamping; otherwise the range extends to the end
    of the start line, because some engine messages carry no end position.

    Args:
        buffer: Buffer providing line count and line lengths.
        line: 0-indexed start line.
        column: 0-indexed start column.
        end_line: Optional 0-indexed end line.
        end_column: Optional 0-indexed end column.

    Returns:
        Position: Closed range suitable for the host editor.
    """

    row = clamp_row(buffer, line)
    start = (row, clamp_column(buffer, row, column))
    if end_line is not None and end_column is not None:
        end_row = clamp_row(buffer, end_line)
        return start, (end_row, clamp_column(buffer, end_row, end_column))
    return start, (row, buffer.line_length(row))


__all__ = ["clamp_column", "clamp_row", "map_range"]
