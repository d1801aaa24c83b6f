# -*- coding: utf-8 -*-
"""
cache

In-memory cache of related-model options used by belongs-to-many fields.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com

Entries are keyed by the related model's identity. Without a TTL an entry
lives until it is invalidated explicitly, so rows added to the related table
after the first lookup stay invisible until then. Configure
``options_cache_ttl`` or call :meth:`OptionsCache.invalidate` from the code
that writes the related rows.
"""

from __future__ import annotations

import inspect
import logging
import time
from threading import RLock
from typing import Any, Awaitable, Callable, Hashable

from ..conf import MultiselectSettings, current_settings, register_settings_observer

logger = logging.getLogger(__name__)

OptionPairs = list[tuple[Any, Any]]


def model_identity(model: Any) -> str:
    """Return a stable cache key for a model class or instance."""
    cls = model if isinstance(model, type) else type(model)
    return f"{cls.__module__}.{cls.__qualname__}"


class OptionsCache:
    """Read-through cache of ``(primary key, label)`` pairs per model."""

    def __init__(
        self,
        *,
        ttl: float | None = None,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Create an empty cache; ``ttl`` is in seconds, ``None`` never expires."""
        self._lock = RLock()
        self._entries: dict[Hashable, tuple[OptionPairs, float | None]] = {}
        self._clock = clock
        self.ttl = ttl
        self.enabled = enabled

    @classmethod
    def from_settings(cls, settings: MultiselectSettings) -> "OptionsCache":
        """Build a cache honouring the TTL and toggle from ``settings``."""
        return cls(ttl=settings.options_cache_ttl, enabled=settings.options_cache_enabled)

    def apply_settings(self, settings: MultiselectSettings) -> None:
        """Adopt new settings; existing entries keep their original expiry."""
        with self._lock:
            self.ttl = settings.options_cache_ttl
            self.enabled = settings.options_cache_enabled
            if not self.enabled:
                self._entries.clear()

    def get(self, key: Hashable) -> OptionPairs | None:
        """Return cached pairs for ``key`` or ``None`` on a miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            pairs, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                return None
            return list(pairs)

    def set(self, key: Hashable, pairs: OptionPairs) -> None:
        """Store ``pairs`` for ``key``; a concurrent writer simply overwrites."""
        if not self.enabled:
            return
        with self._lock:
            expires_at = None if self.ttl is None else self._clock() + self.ttl
            self._entries[key] = (list(pairs), expires_at)

    def invalidate(self, key: Hashable | None = None) -> int:
        """Drop ``key`` or, when omitted, every entry. Return the count removed."""
        with self._lock:
            if key is None:
                removed = len(self._entries)
                self._entries.clear()
                return removed
            return 1 if self._entries.pop(key, None) is not None else 0

    async def get_or_load(
        self,
        key: Hashable,
        loader: Callable[[], OptionPairs | Awaitable[OptionPairs]],
    ) -> OptionPairs:
        """Return cached pairs or populate the entry from ``loader``."""
        cached = self.get(key)
        if cached is not None:
            logger.debug("Options cache hit for %s", key)
            return cached
        logger.debug("Options cache miss for %s", key)
        pairs = loader()
        if inspect.isawaitable(pairs):
            pairs = await pairs
        pairs = list(pairs)
        self.set(key, pairs)
        return pairs

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_default_cache: OptionsCache | None = None
_default_lock = RLock()


def default_options_cache() -> OptionsCache:
    """Return the process-wide cache, created from the active settings."""
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            _default_cache = OptionsCache.from_settings(current_settings())
            register_settings_observer(_default_cache.apply_settings)
        return _default_cache


__all__ = ["OptionsCache", "default_options_cache", "model_identity"]


# The End
