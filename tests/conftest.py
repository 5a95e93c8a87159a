# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from lintbridge.config import ConfigStore, Settings
from lintbridge.filesystem import CollectingSink, ConsoleNotifier, LocalWorkspace


@pytest.fixture(autouse=True)
def isolated_bundle_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default bundle directory at an empty temporary folder."""

    bundle_dir = tmp_path / "bundled"
    monkeypatch.setenv("LINTBRIDGE_BUNDLE_DIR", str(bundle_dir))
    return bundle_dir


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Leave the package logger at its default level between tests."""

    yield
    logging.getLogger("lintbridge").setLevel(logging.WARNING)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture
def workspace(project_root: Path) -> LocalWorkspace:
    return LocalWorkspace([project_root])


@pytest.fixture
def notifier() -> ConsoleNotifier:
    return ConsoleNotifier()


@pytest.fixture
def sink() -> CollectingSink:
    return CollectingSink()


@pytest.fixture
def config_store(isolated_bundle_dir: Path) -> ConfigStore:
    return ConfigStore(Settings(bundle_dir=isolated_bundle_dir))
