"""Centralized calibration constants for the ABM ROI engine.

Calibration tables for tier benchmarks, alignment multipliers, scenario
presets and input limits. Tier and alignment keys match the ``Literal``
types in ``schemas.scenario_schema``. Reused by:
  - Coverage engine (tier benchmarks)
  - ABM / incremental engines (alignment multipliers)
  - Scenario schemas (field limits, presets, tier setup defaults)

The numbers are product calibration, not algorithmic requirements. Engines
accept an alternative table where it matters (see ``resolve_coverage``).
"""

from __future__ import annotations

from dataclasses import dataclass


# ── ABM tiers ───────────────────────────────────────────────────────────
TIER_ONE_TO_ONE = "1to1"
TIER_ONE_TO_FEW = "1toFew"
TIER_ONE_TO_MANY = "1toMany"


@dataclass(frozen=True)
class TierBenchmark:
    """Benchmark calibration for one ABM tier.

    sweet_spot        default number of accounts worked intensively (S)
    fixed_cost_share  share of total cost not spent per account (F)
    alpha             minimum budget per account as a fraction of ACV
    gamma             intensity exponent applied to the coverage rate
    range_min/max     recommended sweet-spot band
    """

    sweet_spot: float
    fixed_cost_share: float
    alpha: float
    gamma: float
    range_min: float
    range_max: float


TIER_BENCHMARKS: dict[str, TierBenchmark] = {
    TIER_ONE_TO_ONE: TierBenchmark(
        sweet_spot=5, fixed_cost_share=0.45, alpha=0.015, gamma=0.8,
        range_min=3, range_max=8,
    ),
    TIER_ONE_TO_FEW: TierBenchmark(
        sweet_spot=20, fixed_cost_share=0.35, alpha=0.007, gamma=0.8,
        range_min=12, range_max=30,
    ),
    TIER_ONE_TO_MANY: TierBenchmark(
        sweet_spot=75, fixed_cost_share=0.25, alpha=0.002, gamma=0.8,
        range_min=50, range_max=150,
    ),
}

DEFAULT_INTENSITY_EXPONENT: float = 0.8

# Starting values the setup flow applies when a tier is picked.
TIER_SETUP_DEFAULTS: dict[str, dict[str, float]] = {
    TIER_ONE_TO_ONE: {"target_accounts": 4, "qualified_opps_per_account": 1.2},
    TIER_ONE_TO_FEW: {"target_accounts": 20, "qualified_opps_per_account": 0.6},
    TIER_ONE_TO_MANY: {"target_accounts": 100, "qualified_opps_per_account": 0.4},
}

# ── Sales & marketing alignment ─────────────────────────────────────────
@dataclass(frozen=True)
class AlignmentMultipliers:
    opportunity: float
    win: float
    velocity: float


ALIGNMENT_MULTIPLIERS: dict[str, AlignmentMultipliers] = {
    "poor": AlignmentMultipliers(opportunity=0.8, win=0.85, velocity=0.9),
    "standard": AlignmentMultipliers(opportunity=1.0, win=1.0, velocity=1.0),
    "excellent": AlignmentMultipliers(opportunity=1.15, win=1.15, velocity=1.2),
}

# ── Uplift presets ──────────────────────────────────────────────────────
# in_market_rate is optional per preset; None leaves the current rate alone.
SCENARIO_PRESETS: dict[str, dict[str, float]] = {
    "conservative": {
        "win_rate_uplift": 4,
        "acv_uplift": 6,
        "opportunity_rate_uplift": 10,
        "in_market_rate": 25,
    },
    "expected": {
        "win_rate_uplift": 8,
        "acv_uplift": 15,
        "opportunity_rate_uplift": 20,
        "in_market_rate": 35,
    },
    "stretch": {
        "win_rate_uplift": 12,
        "acv_uplift": 25,
        "opportunity_rate_uplift": 35,
        "in_market_rate": 45,
    },
}

# ── In-market derivation ────────────────────────────────────────────────
MIN_BUYING_WINDOW_MONTHS: float = 1.0
MAX_MONTHLY_HAZARD: float = 0.99

# ── Input limits (validation layer) ─────────────────────────────────────
MAX_PROGRAMME_MONTHS: float = 24
MAX_TARGET_ACCOUNTS: float = 2000
MAX_IN_MARKET_RATE: float = 70
MAX_QUALIFIED_OPPS_PER_ACCOUNT: float = 3
MAX_BASELINE_WIN_RATE: float = 60
MAX_CONTRIBUTION_MARGIN: float = 95
MAX_SALES_CYCLE_MONTHS: float = 24
MAX_WIN_RATE_UPLIFT: float = 20
MIN_ACV_UPLIFT: float = -30
MAX_ACV_UPLIFT: float = 100
MAX_OPPORTUNITY_RATE_UPLIFT: float = 100
MIN_SENSITIVITY_RESOLUTION: int = 3
MAX_SENSITIVITY_RESOLUTION: int = 11
