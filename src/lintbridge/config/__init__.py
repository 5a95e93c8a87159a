# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models, loading and change observation."""

from __future__ import annotations

from .loader import PyProjectConfigSource, TomlConfigSource, load_settings
from .settings import DEFAULT_GRAMMAR_SCOPES, ENGINE_KEYS, Settings
from .store import ConfigStore

__all__ = [
    "DEFAULT_GRAMMAR_SCOPES",
    "ENGINE_KEYS",
    "ConfigStore",
    "PyProjectConfigSource",
    "Settings",
    "TomlConfigSource",
    "load_settings",
]
