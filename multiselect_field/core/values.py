# -*- coding: utf-8 -*-
"""
values

Conversion helpers between wire selections and stored model attributes.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from typing import Any

from ..conf import current_settings
from .exceptions import StoredValueDecodeError

logger = logging.getLogger(__name__)

_MISSING = object()


def normalize_path(path: str) -> str:
    """Convert arrow separators (``meta->tags``) to dotted paths."""
    return path.replace("->", ".")


def _step(target: Any, segment: str) -> Any:
    if isinstance(target, Mapping):
        return target.get(segment, _MISSING)
    if isinstance(target, Sequence) and not isinstance(target, (str, bytes)):
        try:
            return target[int(segment)]
        except (ValueError, IndexError):
            return _MISSING
    return getattr(target, segment, _MISSING)


def data_get(target: Any, path: str, default: Any = None) -> Any:
    """Resolve ``path`` against nested mappings, sequences and attributes."""
    current = target
    for segment in normalize_path(path).split("."):
        if current is None:
            return default
        current = _step(current, segment)
        if current is _MISSING:
            return default
    return current


def data_set(target: Any, path: str, value: Any) -> None:
    """Assign ``value`` at ``path``, creating intermediate dictionaries."""
    *parents, leaf = normalize_path(path).split(".")
    current = target
    for segment in parents:
        nested = _step(current, segment)
        if nested is _MISSING or nested is None:
            nested = {}
            _assign(current, segment, nested)
        current = nested
    _assign(current, leaf, value)


def _assign(target: Any, key: str, value: Any) -> None:
    if isinstance(target, MutableMapping):
        target[key] = value
    else:
        setattr(target, key, value)


def decode_stored_value(value: Any, *, strict: bool | None = None) -> Any:
    """Decode JSON text, returning ``None`` for malformed input.

    With ``strict`` enabled (defaults to the ``strict_json`` setting) a
    malformed value raises :class:`StoredValueDecodeError` instead.
    """
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if strict is None:
        strict = current_settings().strict_json
    try:
        return json.loads(value)
    except (TypeError, ValueError) as exc:
        if strict:
            raise StoredValueDecodeError(value, str(exc)) from exc
        logger.warning("Ignoring stored value that is not valid JSON: %r", value)
        return None


def coerce_selection(value: Any, *, strict: bool | None = None) -> Any:
    """Turn a stored attribute into a selection list or structure."""
    if value is None:
        return None
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    if isinstance(value, (str, bytes, bytearray)):
        return decode_stored_value(value, strict=strict)
    if isinstance(value, Iterable):
        return list(value)
    return decode_stored_value(str(value), strict=strict)


def encode_selection(value: Any) -> str:
    """Serialize a selection as compact JSON text."""
    return json.dumps(value, default=str, ensure_ascii=False)


def flatten_once(items: Iterable[Any]) -> list[Any]:
    """Expand nested lists and tuples by a single level."""
    flat: list[Any] = []
    for item in items:
        if isinstance(item, (list, tuple)):
            flat.extend(item)
        else:
            flat.append(item)
    return flat


def pluck(items: Iterable[Any], key: str) -> list[Any]:
    """Return ``key`` from every mapping or object in ``items``."""
    return [data_get(item, key) for item in items]


__all__ = [
    "coerce_selection",
    "data_get",
    "data_set",
    "decode_stored_value",
    "encode_selection",
    "flatten_once",
    "normalize_path",
    "pluck",
]


# The End
