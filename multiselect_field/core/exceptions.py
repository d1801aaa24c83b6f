# -*- coding: utf-8 -*-
"""
exceptions

Custom exceptions raised by the multiselect field.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import Any


class MultiselectError(Exception):
    """Base class for multiselect-specific exceptions."""


class FieldConfigurationError(MultiselectError):
    """Raised when a field is wired to a model incorrectly."""


class RelationError(FieldConfigurationError):
    """Base class for misconfigured many-to-many relations."""

    def __init__(self, model: Any, attribute: str, detail: str) -> None:
        self.model = model
        self.attribute = attribute
        self.model_name = _model_name(model)
        super().__init__(f"{self.model_name}.{attribute} {detail}")


class RelationNotFoundError(RelationError):
    """Raised when the attribute does not hold or return a relation."""

    def __init__(self, model: Any, attribute: str) -> None:
        super().__init__(model, attribute, "must be a relation method.")


class RelationCapabilityError(RelationError):
    """Raised when the relation cannot sync its member set."""

    def __init__(self, model: Any, attribute: str) -> None:
        super().__init__(
            model,
            attribute,
            "does not appear to model a many-to-many relation.",
        )


class StoredValueDecodeError(MultiselectError, ValueError):
    """Raised in strict mode when a stored value is not valid JSON."""

    def __init__(self, value: Any, reason: str) -> None:
        self.value = value
        super().__init__(f"Stored value {value!r} is not valid JSON: {reason}")


def _model_name(model: Any) -> str:
    cls = model if isinstance(model, type) else type(model)
    return cls.__name__


__all__ = [
    "MultiselectError",
    "FieldConfigurationError",
    "RelationError",
    "RelationNotFoundError",
    "RelationCapabilityError",
    "StoredValueDecodeError",
]


# The End
