"""Coverage Engine.

Decides how many target accounts receive the full ABM motion and how
concentrated that motion is, from the tier benchmark table and the
programme budget.

  variable_pot      = (1 - F) * total_cost
  auto_min_budget   = max(variable_pot / S, alpha * ACV)
  sweet_spot        = user max_treated_accounts if > 0 else S, capped at targets
  coverage_rate     = min(1, sweet_spot / target_accounts)
  treated_accounts  = floor(target_accounts * coverage_rate)
  intensity         = coverage_rate ** gamma

Rules
-----
- NO I/O
- NO validation — inputs are assumed to have passed the scenario schemas
- Pure deterministic math; zero targets produce an all-zero result
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..constants import TIER_BENCHMARKS, TierBenchmark
from ..schemas.result_schema import CoverageOutputs, SweetSpotRange
from ..schemas.scenario_schema import CoverageSettings, MarketFunnelInputs, ProgrammeCosts
from .costs import sum_programme_costs
from .percent import floor_zero

logger = logging.getLogger(__name__)


@dataclass
class TierDefaults:
    """Tier benchmark figures resolved against a concrete budget and ACV."""

    tier: str
    sweet_spot: float
    sweet_spot_range: tuple[float, float]
    fixed_cost_share: float
    alpha: float
    gamma: float
    variable_pot: float
    min_budget_display: float
    min_budget_floor: float
    min_budget: float
    coverage_rate: float
    intensity: float


def compute_tier_defaults(
    tier: str,
    total_cost: float,
    acv: float,
    target_accounts: float,
    tier_table: Optional[dict[str, TierBenchmark]] = None,
) -> TierDefaults:
    """Resolve the tier benchmark for a given budget, ACV and list size.

    ``min_budget`` is the larger of the budget-derived figure and the
    ACV-proportional floor, so high-value accounts are never recommended
    an unrealistically cheap treatment.
    """
    bench = (tier_table or TIER_BENCHMARKS)[tier]
    variable_pot = floor_zero((1 - bench.fixed_cost_share) * total_cost)
    sweet_spot = floor_zero(bench.sweet_spot)

    min_budget_display = variable_pot / (sweet_spot if sweet_spot > 0 else 1)
    min_budget_floor = floor_zero(bench.alpha * acv)
    min_budget = max(min_budget_display, min_budget_floor)

    if target_accounts <= 0:
        coverage_rate = 0.0
        intensity = 0.0
    else:
        coverage_rate = min(1.0, sweet_spot / max(1.0, target_accounts))
        intensity = coverage_rate ** bench.gamma if coverage_rate > 0 else 0.0

    return TierDefaults(
        tier=tier,
        sweet_spot=sweet_spot,
        sweet_spot_range=(bench.range_min, bench.range_max),
        fixed_cost_share=bench.fixed_cost_share,
        alpha=bench.alpha,
        gamma=bench.gamma,
        variable_pot=variable_pot,
        min_budget_display=min_budget_display,
        min_budget_floor=min_budget_floor,
        min_budget=min_budget,
        coverage_rate=coverage_rate,
        intensity=intensity,
    )


def _binding_constraint(budget_limited: bool, capacity_limited: bool) -> str:
    if budget_limited and capacity_limited:
        return "balanced"
    if budget_limited:
        return "budget"
    if capacity_limited:
        return "capacity"
    return "none"


def resolve_coverage(
    market: MarketFunnelInputs,
    costs: ProgrammeCosts,
    settings: CoverageSettings,
    tier_table: Optional[dict[str, TierBenchmark]] = None,
) -> CoverageOutputs:
    """Compute treated accounts, coverage rate and intensity for a scenario.

    Parameters
    ----------
    market : MarketFunnelInputs
        Supplies the target-account count and baseline ACV.
    costs : ProgrammeCosts
        Total cost drives the variable budget pot.
    settings : CoverageSettings
        Tier plus optional overrides (0 = tier default).
    tier_table : dict, optional
        Alternative calibration; defaults to ``TIER_BENCHMARKS``.

    Returns
    -------
    CoverageOutputs
        Budget- and capacity-treatable counts are each capped at the
        target count; the smaller side is flagged limiting, and a tie
        flags both (``binding_constraint == "balanced"``).
    """
    table = tier_table or TIER_BENCHMARKS
    bench = table[settings.tier]
    total_cost = sum_programme_costs(costs)
    target_accounts = floor_zero(market.target_accounts)

    if target_accounts <= 0:
        logger.debug("[COVERAGE] No target accounts — returning empty coverage")
        return CoverageOutputs(
            target_accounts=target_accounts,
            treated_accounts=0,
            coverage_rate=0.0,
            intensity_factor=0.0,
            budget_treatable_accounts=0.0,
            capacity_treatable_accounts=0.0,
            effective_budget_per_account=None,
            budget_limited=False,
            capacity_limited=False,
            binding_constraint="none",
            abm_tier=settings.tier,
            default_sweet_spot=floor_zero(bench.sweet_spot),
            sweet_spot_range=SweetSpotRange(min=bench.range_min, max=bench.range_max),
            effective_sweet_spot=0.0,
            auto_min_budget_per_account=0.0,
            min_budget_floor=0.0,
            applied_min_budget_per_account=0.0,
            variable_pot=0.0,
            tier_fixed_cost_share=bench.fixed_cost_share,
            intensity_exponent_applied=(
                settings.intensity_exponent if settings.intensity_exponent > 0 else bench.gamma
            ),
        )

    tier_defaults = compute_tier_defaults(
        settings.tier,
        total_cost,
        floor_zero(market.baseline_acv),
        target_accounts,
        tier_table=table,
    )

    requested_sweet_spot = (
        settings.max_treated_accounts
        if settings.max_treated_accounts > 0
        else tier_defaults.sweet_spot
    )
    safe_sweet_spot = floor_zero(requested_sweet_spot)
    effective_sweet_spot = min(safe_sweet_spot, target_accounts)

    applied_min_budget = (
        settings.min_budget_per_account
        if settings.min_budget_per_account > 0
        else tier_defaults.min_budget
    )
    applied_gamma = (
        settings.intensity_exponent if settings.intensity_exponent > 0 else tier_defaults.gamma
    )

    coverage_rate = min(1.0, effective_sweet_spot / target_accounts)
    # floor(min(S, T)) == floor(T * min(1, S / T)) without the float round trip
    treated_accounts = int(math.floor(effective_sweet_spot))
    intensity_factor = coverage_rate ** applied_gamma if coverage_rate > 0 else 0.0

    budget_treatable_raw = (
        tier_defaults.variable_pot / applied_min_budget
        if applied_min_budget > 0
        else math.inf
    )
    budget_treatable = floor_zero(min(budget_treatable_raw, target_accounts))

    capacity_treatable_raw = safe_sweet_spot if safe_sweet_spot > 0 else math.inf
    capacity_treatable = floor_zero(min(capacity_treatable_raw, target_accounts))

    budget_limited = (
        math.isfinite(budget_treatable_raw)
        and budget_treatable < target_accounts
        and budget_treatable <= capacity_treatable
    )
    capacity_limited = (
        math.isfinite(capacity_treatable_raw)
        and capacity_treatable < target_accounts
        and capacity_treatable <= budget_treatable
    )

    effective_budget_per_account = (
        tier_defaults.variable_pot / treated_accounts if treated_accounts > 0 else None
    )

    logger.debug(
        "[COVERAGE] tier=%s targets=%.1f treated=%d coverage=%.3f intensity=%.3f "
        "budget_limited=%s capacity_limited=%s",
        settings.tier, target_accounts, treated_accounts, coverage_rate,
        intensity_factor, budget_limited, capacity_limited,
    )

    return CoverageOutputs(
        target_accounts=target_accounts,
        treated_accounts=treated_accounts,
        coverage_rate=coverage_rate,
        intensity_factor=intensity_factor,
        budget_treatable_accounts=budget_treatable,
        capacity_treatable_accounts=capacity_treatable,
        effective_budget_per_account=effective_budget_per_account,
        budget_limited=budget_limited,
        capacity_limited=capacity_limited,
        binding_constraint=_binding_constraint(budget_limited, capacity_limited),
        abm_tier=settings.tier,
        default_sweet_spot=tier_defaults.sweet_spot,
        sweet_spot_range=SweetSpotRange(
            min=tier_defaults.sweet_spot_range[0],
            max=tier_defaults.sweet_spot_range[1],
        ),
        effective_sweet_spot=effective_sweet_spot,
        auto_min_budget_per_account=tier_defaults.min_budget,
        min_budget_floor=tier_defaults.min_budget_floor,
        applied_min_budget_per_account=applied_min_budget,
        variable_pot=tier_defaults.variable_pot,
        tier_fixed_cost_share=tier_defaults.fixed_cost_share,
        intensity_exponent_applied=applied_gamma,
    )
