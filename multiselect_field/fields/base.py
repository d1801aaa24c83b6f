# -*- coding: utf-8 -*-
"""
base

Base field class.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# fields/base.py
from __future__ import annotations
from typing import Any, Callable, Dict

from ..core.values import data_get, data_set


ResolveCallback = Callable[[Any, Any, str], Any]
FillCallback = Callable[[Any, Any, str, str], Any]


class BaseField:
    """
    Base Field Class

    A field binds a form input to a model attribute. It carries a metadata
    bag for the rendering layer and drives two conversions:

    * ``resolve`` reads the attribute from a resource for display;
    * ``fill`` writes the submitted value back onto a model.

    Both can be replaced with ``resolve_using`` / ``fill_using``.
    """
    key: str = "base"
    component: str = "text-field"

    def __init__(
        self,
        name: str,
        attribute: str | None = None,
        *,
        label: str | None = None,
    ) -> None:
        self.name = name
        self.attribute = attribute or name
        self.label = label
        self.meta: dict[str, Any] = {}
        self.value: Any = None
        self.resolve_callback: ResolveCallback | None = None
        self.fill_callback: FillCallback | None = None

    def get_title(self) -> str:
        if self.label:
            return self.label
        name = self.name.replace("_", " ")
        return name[:1].upper() + name[1:]

    # === Metadata ===
    def with_meta(self, patch: Dict[str, Any]) -> "BaseField":
        """Merge ``patch`` into the metadata bag and return the field."""
        self.meta = {**self.meta, **patch}
        return self

    def resolve_using(self, callback: ResolveCallback) -> "BaseField":
        """Post-process resolved values with ``callback(value, resource, attribute)``."""
        self.resolve_callback = callback
        return self

    def fill_using(self, callback: FillCallback) -> "BaseField":
        """Replace filling with ``callback(request, model, request_attribute, attribute)``."""
        self.fill_callback = callback
        return self

    # === Read path ===
    async def prefetch(self, resource: Any | None = None) -> None:
        """Stub for asynchronous data preparation before resolving."""
        return None

    def resolve(self, resource: Any, attribute: str | None = None) -> Any:
        """Resolve the display value from ``resource`` and remember it."""
        attribute = attribute or self.attribute
        value = self.resolve_attribute(resource, attribute)
        if self.resolve_callback is not None:
            value = self.resolve_callback(value, resource, attribute)
        self.value = value
        return value

    async def resolve_for_display(self, resource: Any, attribute: str | None = None) -> Any:
        """Prefetch remote data, then resolve ``resource``."""
        await self.prefetch(resource)
        return self.resolve(resource, attribute)

    def resolve_attribute(self, resource: Any, attribute: str) -> Any:
        return data_get(resource, attribute)

    # === Write path ===
    def fill(
        self,
        request: Any,
        model: Any,
        attribute: str | None = None,
        request_attribute: str | None = None,
    ) -> Any:
        """Stage the submitted value on ``model``; persisting is up to the caller."""
        attribute = attribute or self.attribute
        request_attribute = request_attribute or self.attribute
        if self.fill_callback is not None:
            return self.fill_callback(request, model, request_attribute, attribute)
        return self.fill_attribute_from_request(
            request, request_attribute, model, attribute
        )

    def fill_attribute_from_request(
        self, request: Any, request_attribute: str, model: Any, attribute: str
    ) -> None:
        data_set(model, attribute, request.input(request_attribute))

    # === Serialization ===
    def json_serialize(self) -> Dict[str, Any]:
        """Payload consumed by the frontend component."""
        return {
            "component": self.component,
            "name": self.get_title(),
            "attribute": self.attribute,
            "value": self.value,
            **self.meta,
        }

# The End
