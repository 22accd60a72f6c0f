from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .scenario_schema import AbmTier, ScenarioInputs

BindingConstraint = Literal["budget", "capacity", "balanced", "none"]


class SweetSpotRange(BaseModel):
    min: float = Field(..., ge=0.0)
    max: float = Field(..., ge=0.0)

    class Config:
        frozen = True


class CoverageOutputs(BaseModel):
    """How many accounts receive the full ABM motion, and how intensely.

    Produced by the Coverage Engine from market inputs, programme costs
    and the tier benchmark table.
    """

    target_accounts: float = Field(..., ge=0.0)
    treated_accounts: int = Field(
        ...,
        ge=0,
        description="floor(target_accounts * coverage_rate)",
    )
    coverage_rate: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="min(1, effective_sweet_spot / target_accounts)",
    )
    intensity_factor: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="coverage_rate ** intensity_exponent_applied",
    )
    budget_treatable_accounts: float = Field(..., ge=0.0)
    capacity_treatable_accounts: float = Field(..., ge=0.0)
    effective_budget_per_account: Optional[float] = Field(
        default=None,
        description="variable_pot / treated_accounts, null when nothing is treated",
    )
    budget_limited: bool
    capacity_limited: bool
    binding_constraint: BindingConstraint
    abm_tier: AbmTier
    default_sweet_spot: float = Field(..., ge=0.0)
    sweet_spot_range: SweetSpotRange
    effective_sweet_spot: float = Field(..., ge=0.0)
    auto_min_budget_per_account: float = Field(..., ge=0.0)
    min_budget_floor: float = Field(
        ...,
        ge=0.0,
        description="alpha * ACV — lower bound on the automatic per-account budget",
    )
    applied_min_budget_per_account: float = Field(..., ge=0.0)
    variable_pot: float = Field(
        ...,
        ge=0.0,
        description="(1 - fixed_cost_share) * total programme cost",
    )
    tier_fixed_cost_share: float = Field(..., ge=0.0, le=1.0)
    intensity_exponent_applied: float = Field(..., gt=0.0)

    class Config:
        frozen = True


class BaselineOutputs(BaseModel):
    """Funnel results with no ABM influence."""

    in_market_accounts: float = Field(..., ge=0.0)
    qualified_opps: float = Field(..., ge=0.0)
    expected_wins: float = Field(..., ge=0.0)
    revenue: float = Field(..., ge=0.0)
    gross_profit: float = Field(..., ge=0.0)

    class Config:
        frozen = True


class AbmOutputs(BaseModel):
    """Funnel results with uplifts applied to the treated accounts only."""

    qualified_opps: float = Field(..., ge=0.0)
    expected_wins: float = Field(..., ge=0.0)
    acv: float = Field(
        ...,
        ge=0.0,
        description="Treated ACV when any account is treated, else baseline ACV",
    )
    revenue: float = Field(..., ge=0.0)
    gross_profit: float = Field(..., ge=0.0)

    class Config:
        frozen = True


class IncrementalOutputs(BaseModel):
    """ABM-versus-baseline comparison and programme financials.

    Ratios are ``None`` when their denominator is not positive.
    """

    total_cost: float = Field(..., ge=0.0)
    incremental_revenue: float = Field(..., ge=0.0)
    incremental_gross_profit: float = Field(..., ge=0.0)
    incremental_wins: float = Field(..., ge=0.0)
    profit_after_spend: float = Field(
        ...,
        description="ABM gross profit minus total cost (signed)",
    )
    roi: Optional[float] = Field(
        default=None,
        description="(incremental_gross_profit - total_cost) / total_cost",
    )
    gross_romi: Optional[float] = Field(
        default=None,
        description="incremental_gross_profit / total_cost",
    )
    break_even_wins: Optional[int] = Field(
        default=None,
        ge=0,
        description="ceil(total_cost / (abm.acv * contribution_margin))",
    )
    velocity_factor: Optional[float] = Field(
        default=None,
        description="Baseline cycle / ABM cycle, scaled by alignment",
    )
    payback_months: Optional[float] = Field(
        default=None,
        description="total_cost / (monthly incremental gross profit * velocity_factor)",
    )

    class Config:
        frozen = True


class ScenarioOutputs(BaseModel):
    baseline: BaselineOutputs
    abm: AbmOutputs
    incremental: IncrementalOutputs
    coverage: CoverageOutputs

    class Config:
        frozen = True


class Guardrail(BaseModel):
    """An advisory note attached to a scenario result. Reserved."""

    section: Literal["programme", "market", "uplifts", "costs", "coverage", "sensitivity"]
    field: str
    level: Literal["info", "warning", "error"]
    message: str

    class Config:
        frozen = True


class ScenarioResult(BaseModel):
    """Inputs, every derived output, and the (currently empty) guardrail list."""

    inputs: ScenarioInputs
    outputs: ScenarioOutputs
    guardrails: List[Guardrail] = Field(default_factory=list)

    class Config:
        frozen = True
