# File: utils/__init__.py
"""Pure Python utilities for Household Dashboard.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed in this module.

Submodules:
    - dt_utils: Timezone configuration, calendar-day arithmetic, parsing, labels
    - math_utils: Amount rounding, coercion, percentages

Usage:
    from .utils import dt_utils
    from .utils.math_utils import round_amount
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
