"""Incremental Engine — ABM versus baseline, and the programme financials.

Every ratio returns ``None`` rather than 0 or infinity when its
denominator (or a contributor) is not positive: "not computable" is a
different answer from "computed as zero".
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from ..constants import ALIGNMENT_MULTIPLIERS
from ..schemas.result_schema import AbmOutputs, BaselineOutputs, IncrementalOutputs
from ..schemas.scenario_schema import (
    AlignmentInputs,
    MarketFunnelInputs,
    ProgrammeCosts,
    ProgrammeSettings,
)
from .costs import sum_programme_costs
from .percent import floor_zero, to_decimal

logger = logging.getLogger(__name__)


def calculate_roi(incremental_gross_profit: float, total_cost: float) -> Optional[float]:
    if total_cost <= 0:
        return None
    return (incremental_gross_profit - total_cost) / total_cost


def calculate_gross_romi(incremental_gross_profit: float, total_cost: float) -> Optional[float]:
    if total_cost <= 0:
        return None
    return incremental_gross_profit / total_cost


def calculate_break_even_wins(
    total_cost: float,
    acv: float,
    contribution_margin: float,
) -> Optional[int]:
    """Wins needed for ABM gross profit to recoup *total_cost*."""
    gross_profit_per_win = acv * to_decimal(contribution_margin)
    if total_cost <= 0 or gross_profit_per_win <= 0:
        return None
    wins = total_cost / gross_profit_per_win
    # a vanishingly small per-win profit overflows to inf
    if not math.isfinite(wins):
        return None
    return int(math.ceil(wins))


def calculate_velocity_factor(
    baseline_cycle_months: float,
    abm_cycle_months: float,
    alignment_velocity: float = 1.0,
) -> Optional[float]:
    """Deal-speed acceleration: baseline cycle / ABM cycle."""
    if abm_cycle_months <= 0:
        return None
    return (baseline_cycle_months / abm_cycle_months) * alignment_velocity


def calculate_payback_months(
    duration_months: float,
    incremental_gross_profit: float,
    total_cost: float,
    velocity_factor: Optional[float],
) -> Optional[float]:
    """Months for velocity-adjusted monthly incremental profit to repay the cost."""
    if incremental_gross_profit <= 0 or total_cost <= 0 or duration_months <= 0:
        return None
    if velocity_factor is None or velocity_factor <= 0:
        return None

    incremental_per_month = incremental_gross_profit / duration_months
    if incremental_per_month <= 0:
        return None

    months = total_cost / (incremental_per_month * velocity_factor)
    if not math.isfinite(months):
        return None
    return months


def calculate_incremental(
    programme: ProgrammeSettings,
    market: MarketFunnelInputs,
    baseline: BaselineOutputs,
    abm: AbmOutputs,
    costs: ProgrammeCosts,
    alignment: Optional[AlignmentInputs] = None,
) -> IncrementalOutputs:
    """Compare the ABM scenario against baseline and derive ROI, payback etc.

    Parameters
    ----------
    programme : ProgrammeSettings
        Duration spreads incremental profit into a monthly figure.
    market : MarketFunnelInputs
        Contribution margin and the two sales-cycle lengths.
    baseline, abm : BaselineOutputs, AbmOutputs
        Outputs of the baseline and ABM engines.
    costs : ProgrammeCosts
        Investment to measure returns against.
    alignment : AlignmentInputs, optional
        Scales the velocity factor; standard (1.0) when omitted.
    """
    multipliers = ALIGNMENT_MULTIPLIERS[alignment.level if alignment else "standard"]
    total_cost = sum_programme_costs(costs)

    incremental_revenue = floor_zero(abm.revenue - baseline.revenue)
    incremental_gross_profit = floor_zero(abm.gross_profit - baseline.gross_profit)
    incremental_wins = floor_zero(abm.expected_wins - baseline.expected_wins)

    velocity_factor = calculate_velocity_factor(
        market.sales_cycle_months_baseline,
        market.sales_cycle_months_abm,
        multipliers.velocity,
    )

    result = IncrementalOutputs(
        total_cost=total_cost,
        incremental_revenue=incremental_revenue,
        incremental_gross_profit=incremental_gross_profit,
        incremental_wins=incremental_wins,
        profit_after_spend=abm.gross_profit - total_cost,
        roi=calculate_roi(incremental_gross_profit, total_cost),
        gross_romi=calculate_gross_romi(incremental_gross_profit, total_cost),
        break_even_wins=calculate_break_even_wins(
            total_cost, abm.acv, market.contribution_margin
        ),
        velocity_factor=velocity_factor,
        payback_months=calculate_payback_months(
            programme.duration_months,
            incremental_gross_profit,
            total_cost,
            velocity_factor,
        ),
    )

    logger.debug(
        "[INCREMENTAL] cost=%.2f inc_gp=%.2f roi=%s payback=%s",
        total_cost, incremental_gross_profit, result.roi, result.payback_months,
    )
    return result
