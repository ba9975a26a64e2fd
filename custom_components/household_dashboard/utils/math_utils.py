# File: utils/math_utils.py
"""Math and calculation utilities for Household Dashboard.

Pure Python math functions with ZERO Home Assistant dependencies.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.

Functions:
    - round_amount: Consistent rounding for money and points totals
    - to_number: Lenient numeric coercion for backend amount fields
    - calculate_percentage: Completion percentage calculations
    - format_currency: "$1,234.50" display string
    - seconds_to_hours: Uptime conversion for the health display
"""

from __future__ import annotations

import logging
from typing import Any

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

DATA_FLOAT_PRECISION = 2
SECONDS_PER_HOUR = 3600


# ==============================================================================
# Amount Arithmetic
# ==============================================================================


def round_amount(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a money or points value to the configured precision.

    Examples:
        round_amount(10.456) → 10.46
        round_amount(0.1 + 0.2) → 0.3
    """
    return round(value, precision)


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce a backend numeric field to float.

    The backend sends amounts as JSON numbers but older records carry them
    as strings. Anything unparseable becomes `default`.

    Examples:
        to_number(42) → 42.0
        to_number("19.99") → 19.99
        to_number(None) → 0.0
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            _LOGGER.debug("Non-numeric amount value: %s", value)
    return default


def calculate_percentage(current: float, target: float) -> float:
    """Calculate progress percentage, clamped to 0-100.

    Returns 0.0 when target is zero or negative.

    Examples:
        calculate_percentage(3, 4) → 75.0
        calculate_percentage(0, 0) → 0.0
    """
    if target <= 0:
        return 0.0
    return round_amount(min(max(current / target * 100, 0.0), 100.0), 1)


def format_currency(value: float, symbol: str = "$") -> str:
    """Format an amount for display.

    Examples:
        format_currency(1234.5) → "$1,234.50"
    """
    return f"{symbol}{value:,.2f}"


def seconds_to_hours(seconds: float) -> int:
    """Convert an uptime in seconds to whole hours (floor)."""
    if seconds <= 0:
        return 0
    return int(seconds // SECONDS_PER_HOUR)
