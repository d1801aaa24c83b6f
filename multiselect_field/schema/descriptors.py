# -*- coding: utf-8 -*-
"""
descriptors

Option and metadata descriptors consumed by the rendering layer.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations
from typing import Any
from pydantic import BaseModel, ConfigDict, Field as PField


class Option(BaseModel):
    """Single selectable value and its display label."""
    model_config = ConfigDict(extra="forbid")

    label: Any = None
    value: Any = None


class OptionGroup(BaseModel):
    """Named group of options rendered under a shared header."""
    model_config = ConfigDict(extra="forbid")

    label: Any = ""
    values: list[Option] = PField(default_factory=list)


class FieldMeta(BaseModel):
    """Immutable snapshot of the metadata bag carried by a field.

    Keys use the camelCase names expected by the frontend component, while
    attributes follow Python naming. Keys the field does not recognize are
    preserved as extra attributes so custom ``with_meta`` patches survive.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    options: list[Option | OptionGroup] = PField(default_factory=list)
    max: int | None = None
    placeholder: str | None = None
    options_limit: int | None = PField(default=None, alias="optionsLimit")
    reorderable: bool = False
    single_select: bool = PField(default=False, alias="singleSelect")
    taggable: bool = False
    group_select: bool = PField(default=False, alias="groupSelect")
    depends_on: str | None = PField(default=None, alias="dependsOn")
    depends_on_options: dict[Any, Any] | None = PField(
        default=None, alias="dependsOnOptions"
    )
    depends_on_max: dict[Any, Any] | None = PField(default=None, alias="dependsOnMax")

    def to_payload(self) -> dict[str, Any]:
        """Return the wire representation with camelCase keys."""
        return self.model_dump(by_alias=True, exclude_none=True)

# The End
