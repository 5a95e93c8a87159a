# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""ESLint engine resolution, caching and execution for interactive editors."""

from __future__ import annotations

from .config import ConfigStore, Settings, load_settings
from .models import Diagnostic, LintMessage, LintReport, LintResult
from .service import LintService

__all__ = [
    "ConfigStore",
    "Diagnostic",
    "LintMessage",
    "LintReport",
    "LintResult",
    "LintService",
    "Settings",
    "load_settings",
]

__version__ = "0.3.0"
