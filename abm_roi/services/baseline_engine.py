"""Baseline Engine — the funnel with no ABM influence.

  in_market_accounts = target_accounts * in_market_rate%
  qualified_opps     = in_market_accounts * qualified_opps_per_account
  expected_wins      = qualified_opps * baseline_win_rate%
  revenue            = expected_wins * baseline_acv
  gross_profit       = revenue * contribution_margin%

No rounding: fractional accounts and wins are valid intermediate values.
"""

from __future__ import annotations

from ..schemas.result_schema import BaselineOutputs
from ..schemas.scenario_schema import MarketFunnelInputs
from .percent import floor_zero, to_decimal


def calculate_baseline(market: MarketFunnelInputs) -> BaselineOutputs:
    """Compute baseline funnel volumes and economics for *market*."""
    in_market_accounts = floor_zero(market.target_accounts * to_decimal(market.in_market_rate))
    qualified_opps = floor_zero(in_market_accounts * market.qualified_opps_per_account)
    expected_wins = floor_zero(qualified_opps * to_decimal(market.baseline_win_rate))
    revenue = floor_zero(expected_wins * market.baseline_acv)
    gross_profit = floor_zero(revenue * to_decimal(market.contribution_margin))

    return BaselineOutputs(
        in_market_accounts=in_market_accounts,
        qualified_opps=qualified_opps,
        expected_wins=expected_wins,
        revenue=revenue,
        gross_profit=gross_profit,
    )
