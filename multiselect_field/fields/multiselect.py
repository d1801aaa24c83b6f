# -*- coding: utf-8 -*-
"""Multiselect Field

Multi-select, single-select and tag input backed by vue-multiselect.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com

Configuration is accumulated in ``meta`` through chained setters and sent to
the frontend unchanged. Values are stored as a JSON array by default, as a
scalar with ``single_select()``, or untouched with ``save_as_json()`` when the
column already holds structured JSON.

``belongs_to_many()`` switches the field to a many-to-many relation: options
come from every row of the related model and the selection is synced through
the junction table after the parent model is saved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from ..adapters import tortoise as tortoise_adapter
from ..conf import current_settings
from ..core.cache import OptionsCache, default_options_cache, model_identity
from ..core.options import (
    OptionsInput,
    flat_options,
    grouped_options,
    normalize_options,
)
from ..core.relations import (
    list_related,
    on_saved,
    primary_key_attr,
    related_members,
    sync_relation,
)
from ..core.values import (
    coerce_selection,
    data_get,
    data_set,
    decode_stored_value,
    encode_selection,
    flatten_once,
    pluck,
)
from ..schema.descriptors import FieldMeta
from .base import BaseField
from .registry import registry


logger = logging.getLogger(__name__)

PageResponseCallback = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class BelongsToManyConfig:
    """Related model wiring for ``Multiselect.belongs_to_many``."""

    model: Any
    key: str
    label: str
    cache: OptionsCache

    @property
    def cache_key(self) -> str:
        return model_identity(self.model)


@registry.register("multiselect")
class Multiselect(BaseField):
    """Select one or many values from a fixed or related option list.

    Example::

        Multiselect("colors").options({10: "Red", 20: "Blue"}).max(2)
    """

    def __init__(
        self,
        name: str,
        attribute: str | None = None,
        *,
        label: str | None = None,
    ) -> None:
        super().__init__(name, attribute, label=label)
        self.component = current_settings().component
        self.store_as_json = False
        self.page_response_resolve_callback: PageResponseCallback | None = None
        self.relation: BelongsToManyConfig | None = None

    @property
    def is_single_select(self) -> bool:
        return bool(self.meta.get("singleSelect", False))

    # ----------------- options -----------------

    def options(self, options: OptionsInput = None) -> "Multiselect":
        """Set the selectable options.

        ``options`` maps values to labels, or values to records carrying
        ``label`` and ``group`` keys for grouped options. A callable is
        evaluated once, immediately.
        """
        return self.with_meta({"options": normalize_options(options)})

    def flat_options(self, options: OptionsInput) -> "Multiselect":
        """Set plain ``value -> label`` options without shape detection."""
        return self.with_meta({"options": flat_options(options)})

    def grouped_options(self, options: OptionsInput) -> "Multiselect":
        """Set ``value -> record`` options grouped by the ``group`` key."""
        return self.with_meta({"options": grouped_options(options)})

    # ----------------- presentation -----------------

    def save_as_json(self, save_as_json: bool = True) -> "Multiselect":
        """Store the selection as-is, for columns with a native JSON type."""
        self.store_as_json = save_as_json
        return self

    def max(self, max: int) -> "Multiselect":
        """Set the max number of options the user can select."""
        return self.with_meta({"max": max})

    def placeholder(self, placeholder: str) -> "Multiselect":
        return self.with_meta({"placeholder": placeholder})

    def options_limit(self, options_limit: int) -> "Multiselect":
        """Set the maximum number of options displayed at once."""
        return self.with_meta({"optionsLimit": options_limit})

    def reorderable(self, reorderable: bool = True) -> "Multiselect":
        return self.with_meta({"reorderable": reorderable})

    def single_select(self, single_select: bool = True) -> "Multiselect":
        """Save a single scalar value instead of a list."""
        return self.with_meta({"singleSelect": single_select})

    def taggable(self, taggable: bool = True) -> "Multiselect":
        return self.with_meta({"taggable": taggable})

    def group_select(self, group_select: bool = True) -> "Multiselect":
        """Allow selecting a whole option group at once."""
        return self.with_meta({"groupSelect": group_select})

    def depends_on(self, other_field_name: str) -> "Multiselect":
        """Filter options by the current value of another field."""
        return self.with_meta({"dependsOn": other_field_name})

    def depends_on_options(self, options: dict[Any, Any]) -> "Multiselect":
        """Map each value of the other field to its option list."""
        return self.with_meta({"dependsOnOptions": options})

    def depends_on_max(self, max_options: dict[Any, Any]) -> "Multiselect":
        """Map each value of the other field to a selection limit."""
        return self.with_meta({"dependsOnMax": max_options})

    def build_meta(self) -> FieldMeta:
        """Return a validated, immutable snapshot of the metadata bag."""
        return FieldMeta.model_validate(self.meta)

    # ----------------- values -----------------

    def resolve_attribute(self, resource: Any, attribute: str) -> Any:
        """Read the stored selection, decoding JSON text unless stored raw.

        In belongs-to-many mode the relation value is returned untouched and
        the resolve callback reduces it to primary keys. Options are refreshed
        only from a warm cache; await ``prefetch()`` (or use
        ``resolve_for_display()``) to load them on a cold cache.
        """
        value = data_get(resource, attribute)
        if self.relation is not None:
            return value
        if self.store_as_json or self.is_single_select:
            return value
        return coerce_selection(value)

    def fill_attribute_from_request(
        self, request: Any, request_attribute: str, model: Any, attribute: str
    ) -> None:
        value = request.input(request_attribute)

        if self.is_single_select:
            data_set(model, attribute, value)
        elif self.store_as_json or value is None:
            data_set(model, attribute, value)
        else:
            data_set(model, attribute, encode_selection(value))

    def resolve_response_value(self, value: Any, template_model: Any) -> Any:
        """Decode a stored value for a page response.

        A callback registered with ``resolve_for_page_response_using``
        receives the decoded value and ``template_model`` and its result is
        returned instead. A missing value always resolves to ``None``.
        """
        if value is None:
            return None
        parsed = value if self.store_as_json else decode_stored_value(value)
        if self.page_response_resolve_callback is not None:
            return self.page_response_resolve_callback(parsed, template_model)
        return parsed

    def resolve_for_page_response_using(
        self, callback: PageResponseCallback
    ) -> "Multiselect":
        self.page_response_resolve_callback = callback
        return self

    # ----------------- belongs-to-many -----------------

    def belongs_to_many(
        self,
        resource: Any,
        label: str | None = None,
        *,
        cache: OptionsCache | None = None,
    ) -> "Multiselect":
        """Manage a many-to-many relation instead of a plain attribute.

        Args:
            resource: Related Tortoise model, or a resource exposing ``model``
                and optionally ``title``.
            label: Related attribute shown as the option label. Defaults to
                ``resource.title`` and then to the primary key.
            cache: Options cache; the process-wide cache when omitted.
        """
        if tortoise_adapter.is_model_class(resource):
            model = resource
        else:
            model = getattr(resource, "model", resource)
        key = primary_key_attr(model)
        label = label or getattr(resource, "title", None) or key

        self.relation = BelongsToManyConfig(
            model=model,
            key=key,
            label=label,
            cache=cache if cache is not None else default_options_cache(),
        )
        self.resolve_using(self._resolve_related_keys)
        self.fill_using(self._fill_relation)
        return self

    async def prefetch(self, resource: Any | None = None) -> None:
        """Load related options and the current members of ``resource``."""
        relation = self.relation
        if relation is None:
            return
        pairs = await relation.cache.get_or_load(
            relation.cache_key,
            lambda: list_related(relation.model, relation.key, relation.label),
        )
        self.options(pairs)
        if tortoise_adapter.is_model_instance(resource):
            await tortoise_adapter.fetch_related(resource, self.attribute)

    def _resolve_related_keys(self, value: Any, resource: Any, attribute: str) -> list[Any]:
        relation = self.relation
        assert relation is not None
        cached = relation.cache.get(relation.cache_key)
        if cached is not None:
            self.options(cached)
        members = flatten_once(related_members(value))
        return pluck(members, relation.key)

    def _fill_relation(
        self, request: Any, model: Any, request_attribute: str, attribute: str
    ) -> None:
        async def _sync(saved: Any) -> None:
            keys = request.get(attribute)
            if keys is None:
                keys = []
            elif not isinstance(keys, (list, tuple, set)):
                keys = [keys]
            logger.debug("Syncing %s.%s", type(saved).__name__, attribute)
            await sync_relation(saved, attribute, keys)

        on_saved(model, _sync)


# The End
