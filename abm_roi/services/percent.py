"""Shared numeric guards used by every engine."""

from __future__ import annotations

import math

ONE_HUNDRED = 100.0


def to_decimal(value: float) -> float:
    """Convert a percentage (``35``) to a fraction (``0.35``)."""
    return value / ONE_HUNDRED


def floor_zero(value: float) -> float:
    """Clamp *value* to ``>= 0``.  Non-finite values (NaN, ±inf) become 0."""
    if value is None or not math.isfinite(value):
        return 0.0
    return max(0.0, float(value))


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    """Clamp *value* to [lo, hi]."""
    return max(lo, min(hi, value))
