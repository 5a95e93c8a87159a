# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Engine resolution, construction and caching."""

from __future__ import annotations

from .base import Engine, EngineFactory, EngineOptions, EngineSource, ResolvedEngine
from .cache import CachedEngine, EngineCache
from .errors import FailureKind, classify_failure
from .node import NodeEngineFactory, NodeESLint
from .resolver import (
    BundledStrategy,
    EngineResolver,
    EngineStrategy,
    ProjectLocalStrategy,
    ResolutionError,
    default_strategies,
    read_installation,
)

__all__ = [
    "BundledStrategy",
    "CachedEngine",
    "Engine",
    "EngineCache",
    "EngineFactory",
    "EngineOptions",
    "EngineResolver",
    "EngineSource",
    "EngineStrategy",
    "FailureKind",
    "NodeESLint",
    "NodeEngineFactory",
    "ProjectLocalStrategy",
    "ResolutionError",
    "ResolvedEngine",
    "classify_failure",
    "default_strategies",
    "read_installation",
]
