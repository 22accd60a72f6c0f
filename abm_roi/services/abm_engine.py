"""ABM Engine.

Uplifts apply only to the treated accounts; the untreated remainder keeps
performing at baseline rates, and the two subsets are recombined.

  treated    = baseline funnel on treated_accounts
  untreated  = baseline - treated            (per metric, floored at 0)
  k_opp      = intensity * alignment.opportunity
  k_win      = intensity * alignment.win
  opps'      = treated.opps * (1 + opp_uplift% * k_opp)
  win_rate'  = clamp(0, 1, baseline_win% + win_uplift_pp% * k_win)
  acv'       = baseline_acv * (1 + acv_uplift% * intensity)
  abm.X      = untreated.X + treated'.X

With every account treated and standard alignment this collapses to the
uplift formulas applied directly to the whole baseline.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..constants import ALIGNMENT_MULTIPLIERS
from ..schemas.result_schema import AbmOutputs, BaselineOutputs, CoverageOutputs
from ..schemas.scenario_schema import AlignmentInputs, MarketFunnelInputs, UpliftInputs
from .baseline_engine import calculate_baseline
from .percent import clamp, floor_zero, to_decimal

logger = logging.getLogger(__name__)

_EMPTY_BASELINE = BaselineOutputs(
    in_market_accounts=0.0,
    qualified_opps=0.0,
    expected_wins=0.0,
    revenue=0.0,
    gross_profit=0.0,
)


def split_baseline(
    market: MarketFunnelInputs,
    baseline: BaselineOutputs,
    treated_accounts: int,
) -> tuple[BaselineOutputs, BaselineOutputs]:
    """Partition *baseline* into (treated, untreated) subsets.

    The treated subset is the baseline funnel re-run on ``treated_accounts``;
    the untreated subset is the per-metric remainder, floored at zero.
    """
    if treated_accounts > 0:
        treated = calculate_baseline(market.model_copy(update={"target_accounts": treated_accounts}))
    else:
        treated = _EMPTY_BASELINE

    untreated = BaselineOutputs(
        in_market_accounts=floor_zero(baseline.in_market_accounts - treated.in_market_accounts),
        qualified_opps=floor_zero(baseline.qualified_opps - treated.qualified_opps),
        expected_wins=floor_zero(baseline.expected_wins - treated.expected_wins),
        revenue=floor_zero(baseline.revenue - treated.revenue),
        gross_profit=floor_zero(baseline.gross_profit - treated.gross_profit),
    )
    return treated, untreated


def effective_win_rate(baseline_win_rate: float, win_rate_uplift: float, scale: float) -> float:
    """Baseline win rate plus the scaled percentage-point uplift, as a probability."""
    return clamp(to_decimal(baseline_win_rate + win_rate_uplift * scale))


def calculate_abm(
    market: MarketFunnelInputs,
    baseline: BaselineOutputs,
    uplifts: UpliftInputs,
    coverage: CoverageOutputs,
    alignment: Optional[AlignmentInputs] = None,
) -> AbmOutputs:
    """Compute the ABM scenario by blending treated and untreated accounts.

    Parameters
    ----------
    market : MarketFunnelInputs
        Baseline rates shared by both subsets.
    baseline : BaselineOutputs
        Whole-list baseline from ``calculate_baseline``.
    uplifts : UpliftInputs
        Ceiling uplifts before scaling.
    coverage : CoverageOutputs
        Treated-account count and intensity factor.
    alignment : AlignmentInputs, optional
        Scales opportunity and win uplifts; standard (1.0) when omitted.
    """
    multipliers = ALIGNMENT_MULTIPLIERS[alignment.level if alignment else "standard"]
    intensity = clamp(floor_zero(coverage.intensity_factor))

    treated, untreated = split_baseline(market, baseline, coverage.treated_accounts)

    opportunity_uplift = to_decimal(uplifts.opportunity_rate_uplift) * intensity * multipliers.opportunity
    qualified_opps_treated = floor_zero(treated.qualified_opps * (1 + opportunity_uplift))

    win_rate = effective_win_rate(
        market.baseline_win_rate,
        uplifts.win_rate_uplift,
        intensity * multipliers.win,
    )
    expected_wins_treated = floor_zero(qualified_opps_treated * win_rate)

    acv_uplift = to_decimal(uplifts.acv_uplift) * intensity
    treated_acv = floor_zero(market.baseline_acv * (1 + acv_uplift))
    revenue_treated = floor_zero(expected_wins_treated * treated_acv)
    gross_profit_treated = floor_zero(revenue_treated * to_decimal(market.contribution_margin))

    acv = treated_acv if coverage.treated_accounts > 0 else floor_zero(market.baseline_acv)

    logger.debug(
        "[ABM] treated=%d intensity=%.3f win_rate=%.4f treated_acv=%.2f",
        coverage.treated_accounts, intensity, win_rate, treated_acv,
    )

    return AbmOutputs(
        qualified_opps=floor_zero(untreated.qualified_opps + qualified_opps_treated),
        expected_wins=floor_zero(untreated.expected_wins + expected_wins_treated),
        acv=acv,
        revenue=floor_zero(untreated.revenue + revenue_treated),
        gross_profit=floor_zero(untreated.gross_profit + gross_profit_treated),
    )
