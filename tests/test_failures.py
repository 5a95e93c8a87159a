# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for engine failure classification and report models."""

from __future__ import annotations

import pytest

from lintbridge.engine import FailureKind, classify_failure
from lintbridge.engine.errors import failure_text
from lintbridge.errors import EngineError, EngineTimeoutError
from lintbridge.models import LintReport


@pytest.mark.parametrize(
    "text",
    [
        "No ESLint configuration found in /home/me/project/src.",
        "ESLint couldn't find a configuration file. To set up a configuration file for this project, run:",
        "ESLint couldn't find an eslint.config.(js|mjs|cjs) file.",
        "Error: no-config-found",
    ],
)
def test_missing_configuration_signatures(text: str) -> None:
    assert classify_failure(EngineError("ESLint failed", stderr=text)) is FailureKind.NO_CONFIG
    assert classify_failure(RuntimeError(text)) is FailureKind.NO_CONFIG


def test_other_failures() -> None:
    assert classify_failure(EngineError("Cannot find module 'eslint-plugin-vue'")) is FailureKind.OTHER
    assert classify_failure(EngineTimeoutError("slow")) is FailureKind.TIMEOUT


def test_failure_text_appends_stderr_once() -> None:
    assert failure_text(EngineError("boom", stderr="details")) == "boom\ndetails"
    assert failure_text(EngineError("boom: details", stderr="details")) == "boom: details"
    assert failure_text(ValueError("plain")) == "plain"


def test_report_helpers() -> None:
    assert LintReport.empty().messages == ()
    assert len(LintReport.empty().results) == 1
    (synthetic,) = LintReport.from_error("engine crashed").messages
    assert (synthetic.line, synthetic.rule_id, synthetic.severity) == (1, "error", 2)
    assert synthetic.message == "engine crashed"


def test_report_from_payload_drops_non_mappings() -> None:
    report = LintReport.from_payload(
        [
            {"filePath": "/p/a.js", "messages": [{"line": 2, "column": 3, "endLine": 2, "endColumn": 5}]},
            "junk",
        ],
    )

    assert len(report.results) == 1
    assert report.messages[0].end_column == 5
    assert LintReport.from_payload({"not": "a list"}).results == ()
