# -*- coding: utf-8 -*-
"""
conf

Runtime configuration utilities for the multiselect field package.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from threading import RLock
from typing import Callable, Mapping


@dataclass
class MultiselectSettings:
    """Container for field configuration derived from environment variables."""

    options_cache_ttl: float | None = None
    options_cache_enabled: bool = True
    strict_json: bool = False
    component: str = "multiselect-field"

    def __post_init__(self) -> None:
        """Normalize a non-positive TTL to the never-expiring default."""
        if self.options_cache_ttl is not None and self.options_cache_ttl <= 0:
            self.options_cache_ttl = None
        self.component = self.component.strip() or "multiselect-field"

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        prefix: str = "MULTISELECT_",
    ) -> "MultiselectSettings":
        """Build a settings instance from environment variables."""
        source = env if env is not None else os.environ
        data = {key[len(prefix) :]: value for key, value in source.items() if key.startswith(prefix)}
        return cls(
            options_cache_ttl=cls._to_float(data.get("OPTIONS_CACHE_TTL")),
            options_cache_enabled=cls._to_bool(
                data.get("OPTIONS_CACHE_ENABLED"), default=True
            ),
            strict_json=cls._to_bool(data.get("STRICT_JSON")),
            component=data.get("COMPONENT") or "multiselect-field",
        )

    @staticmethod
    def _to_float(value: str | None) -> float | None:
        """Return a float parsed from ``value`` or ``None`` when conversion fails."""
        if value is None or not value.strip():
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _to_bool(value: str | None, *, default: bool = False) -> bool:
        """Return a boolean parsed from ``value`` with a ``default`` fallback."""

        if value is None:
            return default
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        return default


class SettingsManager:
    """Central storage for the active ``MultiselectSettings`` instance."""

    def __init__(self, initial: MultiselectSettings | None = None) -> None:
        """Prepare storage with an optional preconfigured ``initial`` settings."""

        self._lock = RLock()
        self._settings = initial
        self._callbacks: list[Callable[[MultiselectSettings], None]] = []

    def configure(self, settings: MultiselectSettings) -> None:
        """Install a new settings instance and notify observers."""
        with self._lock:
            self._settings = settings
            for callback in list(self._callbacks):
                callback(settings)

    def current(self) -> MultiselectSettings:
        """Return the active settings, lazily initializing from the environment."""
        with self._lock:
            if self._settings is None:
                self._settings = MultiselectSettings.from_env()
            return self._settings

    def reset(self) -> MultiselectSettings:
        """Re-read the environment and notify observers of the fresh settings."""
        settings = MultiselectSettings.from_env()
        self.configure(settings)
        return settings

    def register(self, callback: Callable[[MultiselectSettings], None]) -> None:
        """Register a callback invoked whenever settings change."""
        with self._lock:
            self._callbacks.append(callback)

    def unregister(self, callback: Callable[[MultiselectSettings], None]) -> None:
        """Remove a previously registered settings change callback if present."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)


_settings_manager = SettingsManager()


def configure(settings: MultiselectSettings) -> None:
    """Public entry point to install application specific settings."""
    _settings_manager.configure(settings)


def current_settings() -> MultiselectSettings:
    """Return the active settings instance used by multiselect components."""
    return _settings_manager.current()


def reset_settings() -> MultiselectSettings:
    """Discard configured settings in favour of the environment defaults."""
    return _settings_manager.reset()


def register_settings_observer(callback: Callable[[MultiselectSettings], None]) -> None:
    """Subscribe to configuration changes for global singletons."""
    _settings_manager.register(callback)


def unregister_settings_observer(callback: Callable[[MultiselectSettings], None]) -> None:
    """Cancel a subscription created by ``register_settings_observer``."""
    _settings_manager.unregister(callback)


__all__ = [
    "MultiselectSettings",
    "SettingsManager",
    "configure",
    "current_settings",
    "register_settings_observer",
    "reset_settings",
    "unregister_settings_observer",
]


# The End
