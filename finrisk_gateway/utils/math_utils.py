"""Numeric helpers shared by ratio and trend calculations"""

import math
from typing import Optional


def safe_divide(numerator: float, denominator: float) -> Optional[float]:
    """Divide, returning None instead of inf/NaN when the denominator is zero or the result is not finite"""
    if denominator == 0:
        return None
    value = numerator / denominator
    if not math.isfinite(value):
        return None
    return value


def pct_change(old: float, new: float) -> Optional[float]:
    """
    Return (new - old) / old as a fraction.

    Uses the signed prior value as the base, matching how the
    year-over-year rules are written. None when old is zero.
    """
    return safe_divide(new - old, old)
