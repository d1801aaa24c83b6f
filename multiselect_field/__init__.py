# -*- coding: utf-8 -*-
"""
multiselect_field

Multi-select form field for the FreeAdmin panel.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .conf import MultiselectSettings, configure, current_settings
from .core.cache import OptionsCache, default_options_cache
from .core.exceptions import (
    FieldConfigurationError,
    MultiselectError,
    RelationCapabilityError,
    RelationNotFoundError,
    StoredValueDecodeError,
)
from .core.relations import ManyToManyAssociation
from .fields import BaseField, Multiselect, registry
from .requests import FieldRequest

__version__ = "0.1.0"

__all__ = [
    "BaseField",
    "FieldConfigurationError",
    "FieldRequest",
    "ManyToManyAssociation",
    "Multiselect",
    "MultiselectError",
    "MultiselectSettings",
    "OptionsCache",
    "RelationCapabilityError",
    "RelationNotFoundError",
    "StoredValueDecodeError",
    "configure",
    "current_settings",
    "default_options_cache",
    "registry",
]

# The End
