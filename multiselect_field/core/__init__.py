# -*- coding: utf-8 -*-
"""
core

Options normalization, value conversion and relation helpers.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

# The End
