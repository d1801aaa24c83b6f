# -*- coding: utf-8 -*-
"""
options

Normalization of option inputs into the structures rendered by the field.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com

Options arrive either as a flat mapping of ``value -> label`` or as a mapping
of ``value -> record`` where each record carries a ``group`` key. Flat input
becomes a list of ``{"label", "value"}`` dictionaries; grouped input becomes a
list of ``{"label", "values"}`` groups in first-seen order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Callable, Union

from ..schema.descriptors import Option, OptionGroup

OptionsInput = Union[
    Mapping[Any, Any],
    Iterable[tuple[Any, Any]],
    Callable[[], Any],
    None,
]


def _items(options: OptionsInput) -> list[tuple[Any, Any]]:
    """Return ``(value, label)`` pairs, evaluating callables once."""
    if callable(options):
        options = options()
    if options is None:
        return []
    if isinstance(options, Mapping):
        return list(options.items())
    return [(value, label) for value, label in options]


def is_grouped(options: OptionsInput) -> bool:
    """Return ``True`` when any label is a record instead of a plain label."""
    return any(isinstance(label, Mapping) for _value, label in _items(options))


def flat_options(options: OptionsInput) -> list[dict[str, Any]]:
    """Project ``(value, label)`` pairs to option dictionaries."""
    return [
        Option(label=label, value=value).model_dump()
        for value, label in _items(options)
    ]


def grouped_options(options: OptionsInput) -> list[dict[str, Any]]:
    """Partition option records by their ``group`` key.

    Each record is merged with its key under ``value`` unless the record
    already defines one. Records without a group land in the ``""`` group,
    and so do plain labels mixed into grouped input.
    """
    groups: dict[Any, list[Option]] = {}
    for key, record in _items(options):
        if not isinstance(record, Mapping):
            record = {"label": record}
        merged = {"value": key, **record}
        group = merged.get("group")
        if group is None:
            group = ""
        groups.setdefault(group, []).append(
            Option(label=merged.get("label"), value=merged["value"])
        )
    return [
        OptionGroup(label=label, values=values).model_dump()
        for label, values in groups.items()
    ]


def normalize_options(options: OptionsInput) -> list[dict[str, Any]]:
    """Detect the input shape and normalize it accordingly."""
    items = _items(options)
    if is_grouped(items):
        return grouped_options(items)
    return flat_options(items)


__all__ = [
    "OptionsInput",
    "flat_options",
    "grouped_options",
    "is_grouped",
    "normalize_options",
]


# The End
