# -*- coding: utf-8 -*-
"""
schema

Descriptors shared between the field and the rendering layer.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .descriptors import FieldMeta, Option, OptionGroup

__all__ = ["FieldMeta", "Option", "OptionGroup"]

# The End
