# -*- coding: utf-8 -*-
"""
adapters

ORM adapters used by relation-backed fields.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from .tortoise import TortoiseManyToManyAssociation

__all__ = ["TortoiseManyToManyAssociation"]

# The End
