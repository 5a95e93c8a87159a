# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings model describing every option lintbridge observes."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

BUNDLE_DIR_ENV: Final[str] = "LINTBRIDGE_BUNDLE_DIR"

DEFAULT_GRAMMAR_SCOPES: Final[tuple[str, ...]] = (
    "source.js",
    "source.jsx",
    "source.js.jsx",
    "source.flow",
    "source.babel",
    "source.js-semantic",
    "source.ts",
    "source.tsx",
)

# Options whose change requires every cached engine instance to be rebuilt.
ENGINE_KEYS: Final[tuple[str, ...]] = (
    "extends",
    "use_eslintrc",
    "override_config_file",
    "cwd",
    "rule_paths",
    "allow_inline_config",
    "report_unused_disable_directives",
    "use_builtin",
    "bundle_dir",
    "engine_timeout",
)


def default_bundle_dir() -> Path:
    """Return where bundled engine versions are installed.

    Returns:
        Path: ``$LINTBRIDGE_BUNDLE_DIR`` when set, else a per-user cache folder.
    """

    override = os.environ.get(BUNDLE_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".cache" / "lintbridge" / "bundled"


class Settings(BaseModel):
    """User-facing configuration values."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    grammar_scopes: tuple[str, ...] = DEFAULT_GRAMMAR_SCOPES
    use_builtin: bool = True
    delete_on_open: bool = False
    debug: bool = False
    extends: tuple[str, ...] = Field(default_factory=tuple)
    use_eslintrc: bool = True
    override_config_file: str | None = None
    cwd: str | None = None
    rule_paths: tuple[str, ...] = Field(default_factory=tuple)
    allow_inline_config: bool = True
    report_unused_disable_directives: str | None = None
    bundle_dir: Path = Field(default_factory=default_bundle_dir)
    engine_timeout: float | None = None

    @field_validator("report_unused_disable_directives")
    @classmethod
    def _check_directive_level(cls, value: str | None) -> str | None:
        """Accept only the severities the engine understands."""
        if value is None or value == "":
            return None
        lowered = value.lower()
        if lowered not in {"off", "warn", "error"}:
            raise ValueError("report_unused_disable_directives must be 'off', 'warn' or 'error'")
        return lowered

    @field_validator("engine_timeout")
    @classmethod
    def _check_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("engine_timeout must be positive")
        return value


__all__ = ["BUNDLE_DIR_ENV", "DEFAULT_GRAMMAR_SCOPES", "ENGINE_KEYS", "Settings", "default_bundle_dir"]
