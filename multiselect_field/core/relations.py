# -*- coding: utf-8 -*-
"""
relations

Many-to-many capability checks, post-save hooks and related listings.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com

A relation attribute qualifies for syncing when it holds (or a zero-argument
relation method returns) either a Tortoise ``ManyToManyRelation`` or any
object implementing :class:`ManyToManyAssociation`. Anything else is a wiring
mistake and raises a :class:`FieldConfigurationError` subclass before any
write is attempted.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Protocol, runtime_checkable

from tortoise.fields.relational import ManyToManyRelation

from ..adapters import tortoise as tortoise_adapter
from .exceptions import (
    FieldConfigurationError,
    RelationCapabilityError,
    RelationNotFoundError,
)
from .values import data_get

logger = logging.getLogger(__name__)

_MISSING = object()


@runtime_checkable
class ManyToManyAssociation(Protocol):
    """Relation whose member set can be replaced by a list of keys."""

    def sync(self, keys: Iterable[Any]) -> Any:
        """Attach ``keys`` and detach every other member."""


def _as_association(relation: Any) -> ManyToManyAssociation | None:
    if isinstance(relation, ManyToManyRelation):
        return tortoise_adapter.TortoiseManyToManyAssociation(relation)
    if isinstance(relation, ManyToManyAssociation):
        return relation
    return None


def resolve_association(model: Any, attribute: str) -> ManyToManyAssociation:
    """Return the many-to-many association exposed by ``model.attribute``.

    Raises:
        RelationNotFoundError: The attribute is missing or is a plain value.
        RelationCapabilityError: The relation cannot sync its members.
    """
    relation = getattr(model, attribute, _MISSING)
    if relation is _MISSING:
        error: FieldConfigurationError = RelationNotFoundError(model, attribute)
        logger.error("%s", error)
        raise error

    association = _as_association(relation)
    if association is not None:
        return association

    if callable(relation) and not isinstance(relation, type):
        relation = relation()
        association = _as_association(relation)
        if association is None:
            error = RelationCapabilityError(model, attribute)
            logger.error("%s", error)
            raise error
        return association

    if tortoise_adapter.is_relation_like(relation):
        error = RelationCapabilityError(model, attribute)
    else:
        error = RelationNotFoundError(model, attribute)
    logger.error("%s", error)
    raise error


async def sync_relation(model: Any, attribute: str, keys: Iterable[Any]) -> None:
    """Replace the members of ``model.attribute`` with ``keys``."""
    association = resolve_association(model, attribute)
    result = association.sync(list(keys))
    if inspect.isawaitable(result):
        await result


def on_saved(model: Any, callback: Callable[[Any], Any]) -> None:
    """Register ``callback`` to run after ``model`` is saved.

    Objects exposing their own ``on_saved`` method take precedence; Tortoise
    instances are hooked through the ``post_save`` signal.
    """
    register = getattr(model, "on_saved", None)
    if callable(register):
        register(callback)
        return
    if tortoise_adapter.is_model_instance(model):
        tortoise_adapter.on_saved(model, callback)
        return
    message = f"{type(model).__name__} does not support post-save hooks."
    logger.error(message)
    raise FieldConfigurationError(message)


def related_members(value: Any) -> list[Any]:
    """Return the members of a relation value as a plain list."""
    if value is None:
        return []
    fetched = tortoise_adapter.related_objects(value)
    if fetched is not None:
        return fetched
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, (str, bytes)):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return [value]


def primary_key_attr(model: Any) -> str:
    """Return the primary key attribute name of a model class or instance."""
    if tortoise_adapter.is_model_class(model) or tortoise_adapter.is_model_instance(model):
        return tortoise_adapter.pk_attr(model)
    return str(getattr(model, "pk_attr", "id"))


async def list_related(model: Any, key: str, label: str) -> list[tuple[Any, Any]]:
    """Return every instance of ``model`` projected to ``(key, label)``."""
    if tortoise_adapter.is_model_class(model):
        return await tortoise_adapter.fetch_option_pairs(model, key, label)
    loader = getattr(model, "all", None)
    if not callable(loader):
        message = f"{getattr(model, '__name__', model)!s} cannot list its instances."
        logger.error(message)
        raise FieldConfigurationError(message)
    items = loader()
    if inspect.isawaitable(items):
        items = await items
    return [(data_get(item, key), data_get(item, label)) for item in items]


__all__ = [
    "ManyToManyAssociation",
    "list_related",
    "on_saved",
    "primary_key_attr",
    "related_members",
    "resolve_association",
    "sync_relation",
]


# The End
