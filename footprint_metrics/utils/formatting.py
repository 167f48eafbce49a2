"""Display formatting helpers shared by the summary table and popups."""

from __future__ import annotations

import math

from footprint_metrics.core.constants import PLACEHOLDER


def is_finite_number(value: object) -> bool:
    """True for finite ``int``/``float`` values (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def format_number(value: object, digits: int) -> str:
    """Format *value* with grouping separators and exactly *digits* decimals.

    Non-numeric or non-finite values render as the ``"-"`` placeholder.

    >>> format_number(1234567.891, 2)
    '1,234,567.89'
    """
    if not is_finite_number(value):
        return PLACEHOLDER
    return f"{float(value):,.{digits}f}"  # type: ignore[arg-type]
