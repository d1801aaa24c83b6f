# -*- coding: utf-8 -*-
"""
requests

Request wrapper exposing submitted field values by name.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any, Mapping

from fastapi import Request

from .core.values import data_get


class FieldRequest:
    """Read-only view over a submitted payload.

    ``input`` accepts dotted (or arrow) paths into nested payloads while
    ``get`` only looks at top-level keys. Both return ``default`` when the
    value is absent.
    """

    def __init__(self, payload: Mapping[str, Any] | None = None) -> None:
        self._payload: dict[str, Any] = dict(payload or {})

    @classmethod
    async def from_request(cls, request: Request) -> "FieldRequest":
        """Build a wrapper from a JSON or form encoded FastAPI request."""
        content_type = request.headers.get("content-type", "")
        if content_type.startswith("application/json"):
            body = await request.json()
            return cls(body if isinstance(body, Mapping) else {})
        form = await request.form()
        payload: dict[str, Any] = {}
        for key in form.keys():
            name = key[:-2] if key.endswith("[]") else key
            values = form.getlist(key)
            payload[name] = values if key.endswith("[]") or len(values) > 1 else values[0]
        return cls(payload)

    def input(self, name: str, default: Any = None) -> Any:
        value = data_get(self._payload, name)
        return default if value is None else value

    def get(self, name: str, default: Any = None) -> Any:
        value = self._payload.get(name)
        return default if value is None else value

    def has(self, name: str) -> bool:
        return data_get(self._payload, name) is not None

    def all(self) -> dict[str, Any]:
        return dict(self._payload)


__all__ = ["FieldRequest"]


# The End
