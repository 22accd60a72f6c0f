"""In-market rate derivation.

Converts a point-in-time in-market share (e.g. the 95:5 rule's 5%) into the
cumulative share of a list that enters a buying cycle at least once during
the programme's active window, using a constant monthly hazard:

    window  = max(0, duration - ramp)
    hazard  = min(0.99, point_in_time_share / max(1, buying_window))
    derived = 1 - (1 - hazard) ** window
"""

from __future__ import annotations

import math
from typing import Optional

from .. import config
from ..constants import MAX_MONTHLY_HAZARD, MIN_BUYING_WINDOW_MONTHS
from .percent import ONE_HUNDRED, clamp


def _finite_or_zero(value: float) -> float:
    return value if value is not None and math.isfinite(value) else 0.0


def derive_in_market_share(
    duration_months: float,
    ramp_months: float,
    buying_window_months: Optional[float] = None,
    point_in_time_share: Optional[float] = None,
) -> float:
    """Return the derived in-market share as a fraction in [0, 1].

    A window of zero or less (ramp consumes the whole programme) and a
    zero point-in-time share both yield 0.
    """
    if buying_window_months is None:
        buying_window_months = config.DEFAULT_BUYING_WINDOW_MONTHS
    if point_in_time_share is None:
        point_in_time_share = config.DEFAULT_POINT_IN_TIME_SHARE

    window_months = max(0.0, _finite_or_zero(duration_months)) - max(
        0.0, _finite_or_zero(ramp_months)
    )
    if window_months <= 0:
        return 0.0

    active_window = max(MIN_BUYING_WINDOW_MONTHS, _finite_or_zero(buying_window_months))
    share = clamp(_finite_or_zero(point_in_time_share))
    if share == 0:
        return 0.0

    monthly_hazard = min(MAX_MONTHLY_HAZARD, share / active_window)
    derived = 1 - (1 - monthly_hazard) ** window_months
    if not math.isfinite(derived):
        return 0.0
    return clamp(derived)


def derive_in_market_rate(
    duration_months: float,
    ramp_months: float,
    buying_window_months: Optional[float] = None,
    point_in_time_share: Optional[float] = None,
    ceiling: Optional[float] = None,
) -> float:
    """Derived in-market rate as a percentage, capped at the policy ceiling.

    The ceiling (default ``ABM_IN_MARKET_CEILING``, 70) keeps the auto
    value inside the range the market inputs accept.
    """
    cap = config.IN_MARKET_RATE_CEILING if ceiling is None else ceiling
    share = derive_in_market_share(
        duration_months,
        ramp_months,
        buying_window_months=buying_window_months,
        point_in_time_share=point_in_time_share,
    )
    return min(max(0.0, cap), share * ONE_HUNDRED)
