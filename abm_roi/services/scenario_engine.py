"""Scenario Engine — runs the full pipeline for one validated input value.

coverage → baseline → abm → incremental, each stage consuming the previous
stage's output. Pure: the same inputs always give an equal result.
"""

from __future__ import annotations

from typing import Optional

from ..constants import SCENARIO_PRESETS, TIER_SETUP_DEFAULTS, TierBenchmark
from ..schemas.result_schema import ScenarioOutputs, ScenarioResult
from ..schemas.scenario_schema import ScenarioInputs
from .abm_engine import calculate_abm
from .baseline_engine import calculate_baseline
from .coverage_engine import resolve_coverage
from .incremental_engine import calculate_incremental


def calculate_scenario(
    inputs: ScenarioInputs,
    tier_table: Optional[dict[str, TierBenchmark]] = None,
) -> ScenarioResult:
    """Compute baseline, ABM, incremental and coverage outputs for *inputs*."""
    coverage = resolve_coverage(inputs.market, inputs.costs, inputs.coverage, tier_table=tier_table)
    baseline = calculate_baseline(inputs.market)
    abm = calculate_abm(inputs.market, baseline, inputs.uplifts, coverage, inputs.alignment)
    incremental = calculate_incremental(
        inputs.programme,
        inputs.market,
        baseline,
        abm,
        inputs.costs,
        inputs.alignment,
    )

    return ScenarioResult(
        inputs=inputs,
        outputs=ScenarioOutputs(
            baseline=baseline,
            abm=abm,
            incremental=incremental,
            coverage=coverage,
        ),
        guardrails=[],
    )


def apply_preset(inputs: ScenarioInputs, preset: str) -> ScenarioInputs:
    """Return a copy of *inputs* with a named uplift preset applied.

    Raises ``KeyError`` for an unknown preset name.
    """
    values = SCENARIO_PRESETS[preset]
    uplifts = inputs.uplifts.model_copy(
        update={
            "win_rate_uplift": values["win_rate_uplift"],
            "acv_uplift": values["acv_uplift"],
            "opportunity_rate_uplift": values["opportunity_rate_uplift"],
        }
    )
    update = {"uplifts": uplifts}
    if values.get("in_market_rate") is not None:
        update["market"] = inputs.market.model_copy(
            update={"in_market_rate": values["in_market_rate"]}
        )
    return inputs.model_copy(update=update)


def apply_tier_defaults(inputs: ScenarioInputs, tier: str) -> ScenarioInputs:
    """Return a copy of *inputs* switched to *tier* with its starting list size.

    Raises ``KeyError`` for an unknown tier.
    """
    defaults = TIER_SETUP_DEFAULTS[tier]
    market = inputs.market.model_copy(
        update={
            "target_accounts": defaults["target_accounts"],
            "qualified_opps_per_account": defaults["qualified_opps_per_account"],
        }
    )
    coverage = inputs.coverage.model_copy(update={"tier": tier})
    return inputs.model_copy(update={"market": market, "coverage": coverage})
