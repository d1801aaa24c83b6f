# -*- coding: utf-8 -*-
"""
registry

Field registry.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations
from typing import Any, Dict, Type

from .base import BaseField


class FieldRegistry:
    def __init__(self) -> None:
        self._by_key: Dict[str, Type[BaseField]] = {}

    def register(self, key: str):
        """Decorator to register a field class by key."""
        def _decorator(cls: Type[BaseField]) -> Type[BaseField]:
            cls.key = key
            self._by_key[key] = cls
            return cls
        return _decorator

    def get(self, key: str) -> Type[BaseField] | None:
        return self._by_key.get(key)

    def create(self, key: str, name: str, *args: Any, **kwargs: Any) -> BaseField:
        """Instantiate the field registered under ``key``."""
        cls = self.get(key)
        if cls is None:
            raise KeyError(f"Unknown field type: {key}")
        return cls(name, *args, **kwargs)

    def keys(self) -> list[str]:
        return list(self._by_key)

registry = FieldRegistry()

# The End
