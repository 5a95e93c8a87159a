# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Load :class:`Settings` from ``pyproject.toml`` and ``.lintbridge.toml``."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..errors import ConfigError
from .settings import Settings

PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintbridge"
PROJECT_CONFIG_NAME: Final[str] = ".lintbridge.toml"


class TomlConfigSource:
    """Read a settings fragment from a TOML document."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.name = str(path)

    def load(self) -> Mapping[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            with self.path.open("rb") as handle:
                data = tomllib.load(handle)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Unable to read configuration at {self.path}: {exc}") from exc
        return _normalise_keys(self._select(data), base_dir=self.path.parent)

    def _select(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        return data

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read settings from ``[tool.lintbridge]`` within ``pyproject.toml``."""

    def _select(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        tool_section = data.get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return section

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


def _normalise_keys(fragment: Mapping[str, Any], *, base_dir: Path) -> dict[str, Any]:
    """Return ``fragment`` with dashed keys converted and paths anchored.

    Args:
        fragment: Raw table read from TOML.
        base_dir: Directory of the file the fragment came from.

    Returns:
        dict[str, Any]: Keys matching :class:`Settings` field names.
    """

    result = {str(key).replace("-", "_"): value for key, value in fragment.items()}
    bundle_dir = result.get("bundle_dir")
    if isinstance(bundle_dir, str):
        candidate = Path(bundle_dir).expanduser()
        result["bundle_dir"] = candidate if candidate.is_absolute() else base_dir / candidate
    return result


def default_sources(root: Path) -> list[TomlConfigSource]:
    """Return configuration sources for ``root`` in precedence order (last wins)."""

    return [
        PyProjectConfigSource(root / "pyproject.toml"),
        TomlConfigSource(root / PROJECT_CONFIG_NAME),
    ]


def load_settings(
    root: Path | None = None,
    *,
    sources: Sequence[TomlConfigSource] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Merge configuration sources into a validated :class:`Settings`.

    Args:
        root: Directory searched for configuration files; defaults to the CWD.
        sources: Explicit sources replacing the default discovery.
        overrides: Values applied after every source (e.g. CLI flags).

    Returns:
        Settings: Fully merged settings.

    Raises:
        ConfigError: If a source cannot be read or a value is invalid.
    """

    active = list(sources) if sources is not None else default_sources((root or Path.cwd()).resolve())
    merged: dict[str, Any] = {}
    for source in active:
        merged.update(source.load())
    if overrides:
        merged.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "PROJECT_CONFIG_NAME",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "default_sources",
    "load_settings",
]
