#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

from decimal import Decimal
from typing import Optional, Any


def safe_float(value: Optional[Any], default: Optional[float] = 0.0) -> Optional[float]:
    """
    Safely convert value to float.

    Args:
        value: Value to convert (can be Decimal, int, float, or None).
        default: Default value if conversion fails or value is None.

    Returns:
        Float value.
    """
    if value is None:
        return default

    if isinstance(value, Decimal):
        return float(value)

    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def format_amount(value: float) -> str:
    """Render a currency amount without a trailing '.0' for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def format_budget_range(budget_min: Optional[float], budget_max: Optional[float]) -> str:
    """
    Human-readable budget range for search criteria.

    Both bounds must be set and non-zero; otherwise the range is unspecified.
    """
    if not budget_min or not budget_max:
        return "Budget not specified"
    return f"${format_amount(budget_min)} - ${format_amount(budget_max)}"
