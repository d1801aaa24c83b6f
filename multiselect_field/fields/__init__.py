# -*- coding: utf-8 -*-
"""
__init__

Form fields and their registry.

Version: 0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# fields/__init__.py
from __future__ import annotations

from .base import BaseField
from .registry import registry

__all__ = ["BaseField", "Multiselect", "registry"]

# Import built-in fields so they register themselves:
from .multiselect import Multiselect  # noqa: F401,E402

# The End
