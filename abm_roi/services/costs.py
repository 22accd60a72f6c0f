"""Programme cost totals shared by the coverage and incremental engines."""

from __future__ import annotations

from ..schemas.scenario_schema import ProgrammeCosts
from .percent import floor_zero


def sum_programme_costs(costs: ProgrammeCosts) -> float:
    """Total programme investment.

    The six categories are summed; the single-field override is used only
    when that sum is zero and the override is positive.
    """
    categories_total = floor_zero(sum(costs.categories()))
    override = floor_zero(costs.total_override) if costs.total_override is not None else 0.0
    if categories_total <= 0 and override > 0:
        return override
    return categories_total
