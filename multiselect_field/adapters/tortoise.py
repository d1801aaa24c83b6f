# -*- coding: utf-8 -*-
"""
tortoise

Tortoise ORM bindings for belongs-to-many fields.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Iterable

from tortoise.fields.relational import ManyToManyRelation, ReverseRelation
from tortoise.models import Model
from tortoise.queryset import QuerySet
from tortoise.signals import post_save

logger = logging.getLogger(__name__)

SavedCallback = Callable[[Model], Any]

_PENDING_ATTR = "_multiselect_saved_callbacks"


def is_model_class(obj: Any) -> bool:
    """Return ``True`` when ``obj`` is a Tortoise model class."""
    return isinstance(obj, type) and issubclass(obj, Model)


def is_model_instance(obj: Any) -> bool:
    """Return ``True`` when ``obj`` is a Tortoise model instance."""
    return isinstance(obj, Model)


def is_relation_like(obj: Any) -> bool:
    """Return ``True`` for ORM relation values that cannot sync members."""
    return isinstance(obj, (ReverseRelation, Model, QuerySet))


def pk_attr(model: type[Model] | Model) -> str:
    """Return the primary key attribute name of ``model``."""
    return model._meta.pk_attr


async def fetch_option_pairs(model: type[Model], key: str, label: str) -> list[tuple[Any, Any]]:
    """Load every row of ``model`` projected to ``(key, label)`` pairs."""
    rows = await model.all().values_list(key, label)
    return [(row[0], row[1]) for row in rows]


def related_objects(value: Any) -> list[Any] | None:
    """Return fetched members of a reverse or many-to-many relation.

    ``None`` means ``value`` is not a Tortoise relation; an unfetched relation
    yields an empty list.
    """
    if not isinstance(value, ReverseRelation):
        return None
    if not value._fetched:
        return []
    return list(value.related_objects)


async def fetch_related(instance: Model, attribute: str) -> None:
    """Load ``attribute`` on a saved ``instance`` so it can be iterated."""
    if instance.pk is None:
        return
    await instance.fetch_related(attribute)


class TortoiseManyToManyAssociation:
    """Reconcile the member set of a Tortoise many-to-many relation."""

    def __init__(self, relation: ManyToManyRelation) -> None:
        self.relation = relation
        self.remote_model: type[Model] = relation.remote_model

    def _to_python(self, keys: Iterable[Any]) -> list[Any]:
        """Convert submitted keys to the pk type, skipping unconvertible ones."""
        converted: list[Any] = []
        for key in keys:
            try:
                converted.append(self.remote_model._meta.pk.to_python_value(key))
            except (TypeError, ValueError):
                logger.debug(
                    "Skipping invalid %s key %r during sync",
                    self.remote_model.__name__,
                    key,
                )
        return converted

    async def keys(self) -> list[Any]:
        """Return primary keys currently linked through the junction table."""
        return [obj.pk for obj in await self.relation.all()]

    async def sync(self, keys: Iterable[Any]) -> None:
        """Replace the member set with exactly ``keys``.

        Keys absent from ``keys`` are detached, new keys are attached and
        existing links are left untouched.
        """
        wanted = list(dict.fromkeys(self._to_python(keys)))
        current = await self.keys()
        wanted_set = set(wanted)
        current_set = set(current)

        detach = [key for key in current if key not in wanted_set]
        attach = [key for key in wanted if key not in current_set]

        if detach:
            objs = await self.remote_model.filter(pk__in=detach)
            await self.relation.remove(*objs)
        if attach:
            objs = await self.remote_model.filter(pk__in=attach)
            missing = len(attach) - len(objs)
            if missing:
                logger.debug(
                    "Skipping %d unknown %s keys during sync",
                    missing,
                    self.remote_model.__name__,
                )
            if objs:
                await self.relation.add(*objs)
        logger.debug(
            "Synced %s: %d attached, %d detached",
            self.remote_model.__name__,
            len(attach),
            len(detach),
        )


async def _run_saved_callbacks(
    sender: type[Model],
    instance: Model,
    created: bool,
    using_db: Any,
    update_fields: Any,
) -> None:
    callbacks: list[SavedCallback] = getattr(instance, _PENDING_ATTR, None) or []
    if not callbacks:
        return
    setattr(instance, _PENDING_ATTR, [])
    failure: BaseException | None = None
    for callback in callbacks:
        try:
            result = callback(instance)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            logger.error(
                "Post-save callback %r failed for %s", callback, sender.__name__
            )
            if failure is None:
                failure = exc
    if failure is not None:
        raise failure


_hooked_models: set[type[Model]] = set()


def on_saved(instance: Model, callback: SavedCallback) -> None:
    """Run ``callback`` once, after the next successful save of ``instance``."""
    model_cls = type(instance)
    if model_cls not in _hooked_models:
        post_save(model_cls)(_run_saved_callbacks)
        _hooked_models.add(model_cls)
    pending = getattr(instance, _PENDING_ATTR, None)
    if pending is None:
        pending = []
        setattr(instance, _PENDING_ATTR, pending)
    pending.append(callback)


__all__ = [
    "TortoiseManyToManyAssociation",
    "fetch_option_pairs",
    "fetch_related",
    "is_model_class",
    "is_model_instance",
    "is_relation_like",
    "on_saved",
    "pk_attr",
    "related_objects",
]


# The End
