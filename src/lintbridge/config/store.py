# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Observable configuration store mirroring the host's config API."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from ..errors import ConfigError
from ..host import Disposable
from .settings import Settings

ChangeCallback = Callable[[Any], None]


class ConfigStore:
    """Hold :class:`Settings` and notify subscribers when values change."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings if settings is not None else Settings()
        self._listeners: dict[str, list[ChangeCallback]] = {}

    @property
    def settings(self) -> Settings:
        """Return the current settings snapshot."""

        return self._settings

    def get(self, key: str) -> Any:
        """Return the value of ``key``.

        Raises:
            ConfigError: If ``key`` is not a known setting.
        """

        self._require_key(key)
        return getattr(self._settings, key)

    def set(self, key: str, value: Any) -> None:
        """Assign ``value`` to ``key`` and notify subscribers on change.

        Args:
            key: Setting name.
            value: New value, validated against :class:`Settings`.

        Raises:
            ConfigError: If the key is unknown or the value is invalid.
        """

        self.update({key: value})

    def update(self, values: Mapping[str, Any]) -> None:
        """Assign several settings at once, notifying after all are applied."""

        for key in values:
            self._require_key(key)
        previous = self._settings
        try:
            updated = Settings.model_validate({**previous.model_dump(), **dict(values)})
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
        self._settings = updated
        for key in values:
            old_value = getattr(previous, key)
            new_value = getattr(updated, key)
            if old_value != new_value:
                self._notify(key, new_value)

    def observe(self, key: str, callback: ChangeCallback) -> Disposable:
        """Invoke ``callback`` now and whenever ``key`` changes."""

        disposable = self.on_did_change(key, callback)
        callback(self.get(key))
        return disposable

    def on_did_change(self, key: str, callback: ChangeCallback) -> Disposable:
        """Invoke ``callback`` whenever ``key`` changes."""

        self._require_key(key)
        self._listeners.setdefault(key, []).append(callback)
        return Disposable(lambda: self._unsubscribe(key, callback))

    def _notify(self, key: str, value: Any) -> None:
        for callback in list(self._listeners.get(key, ())):
            callback(value)

    def _unsubscribe(self, key: str, callback: ChangeCallback) -> None:
        listeners = self._listeners.get(key)
        if listeners and callback in listeners:
            listeners.remove(callback)

    @staticmethod
    def _require_key(key: str) -> None:
        if key not in Settings.model_fields:
            raise ConfigError(f"Unknown setting '{key}'")


__all__ = ["ConfigStore"]
