"""Scenario input schemas.

These models are the validation layer in front of the engines: range
checks live on the fields, cross-field rules in ``model_validator`` hooks.
Engines assume they only ever receive instances that passed through here.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..constants import (
    DEFAULT_INTENSITY_EXPONENT,
    MAX_ACV_UPLIFT,
    MAX_BASELINE_WIN_RATE,
    MAX_CONTRIBUTION_MARGIN,
    MAX_IN_MARKET_RATE,
    MAX_OPPORTUNITY_RATE_UPLIFT,
    MAX_PROGRAMME_MONTHS,
    MAX_QUALIFIED_OPPS_PER_ACCOUNT,
    MAX_SALES_CYCLE_MONTHS,
    MAX_SENSITIVITY_RESOLUTION,
    MAX_TARGET_ACCOUNTS,
    MAX_WIN_RATE_UPLIFT,
    MIN_ACV_UPLIFT,
    MIN_SENSITIVITY_RESOLUTION,
)

CurrencyCode = Literal["GBP", "USD", "EUR"]
AbmTier = Literal["1to1", "1toFew", "1toMany"]
AlignmentLevel = Literal["poor", "standard", "excellent"]


class ProgrammeSettings(BaseModel):
    """Programme framing: how long it runs and how results are displayed."""

    duration_months: float = Field(..., ge=0, le=MAX_PROGRAMME_MONTHS)
    ramp_months: float = Field(..., ge=0, le=MAX_PROGRAMME_MONTHS)
    currency: CurrencyCode = Field(default="GBP")
    number_format_locale: str = Field(default="en-GB", min_length=2)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_ramp(self) -> "ProgrammeSettings":
        if self.ramp_months > self.duration_months:
            raise ValueError("Ramp-up must be less than or equal to duration.")
        return self


class MarketFunnelInputs(BaseModel):
    """Target list and baseline funnel assumptions. Rates are percentages."""

    target_accounts: float = Field(..., ge=0, le=MAX_TARGET_ACCOUNTS)
    in_market_rate: float = Field(..., ge=0, le=MAX_IN_MARKET_RATE)
    qualified_opps_per_account: float = Field(..., ge=0, le=MAX_QUALIFIED_OPPS_PER_ACCOUNT)
    baseline_win_rate: float = Field(..., ge=0, le=MAX_BASELINE_WIN_RATE)
    baseline_acv: float = Field(..., ge=0)
    contribution_margin: float = Field(..., ge=0, le=MAX_CONTRIBUTION_MARGIN)
    sales_cycle_months_baseline: float = Field(..., ge=0, le=MAX_SALES_CYCLE_MONTHS)
    sales_cycle_months_abm: float = Field(..., ge=0, le=MAX_SALES_CYCLE_MONTHS)

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_cycles(self) -> "MarketFunnelInputs":
        if self.sales_cycle_months_abm > self.sales_cycle_months_baseline:
            raise ValueError("ABM cycle must be <= baseline cycle.")
        return self


class UpliftInputs(BaseModel):
    """Ceiling uplift assumptions, before intensity and alignment scaling.

    ``win_rate_uplift`` is in percentage points; the other two are percent.
    """

    win_rate_uplift: float = Field(..., ge=0, le=MAX_WIN_RATE_UPLIFT)
    acv_uplift: float = Field(..., ge=MIN_ACV_UPLIFT, le=MAX_ACV_UPLIFT)
    opportunity_rate_uplift: float = Field(..., ge=0, le=MAX_OPPORTUNITY_RATE_UPLIFT)

    class Config:
        frozen = True


class ProgrammeCosts(BaseModel):
    """Programme investment by category, with an optional single-field total."""

    people: float = Field(default=0, ge=0)
    media: float = Field(default=0, ge=0)
    data_tech: float = Field(default=0, ge=0)
    content: float = Field(default=0, ge=0)
    agency: float = Field(default=0, ge=0)
    other: float = Field(default=0, ge=0)
    total_override: Optional[float] = Field(
        default=None,
        ge=0,
        description="Used only when every category is zero",
    )

    class Config:
        frozen = True

    @field_validator("total_override", mode="before")
    @classmethod
    def blank_override_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def check_investment(self) -> "ProgrammeCosts":
        if (self.total_override or 0) > 0:
            return self
        if any(value > 0 for value in self.categories()):
            return self
        raise ValueError(
            "Provide a total investment or populate at least one cost category."
        )

    def categories(self) -> list[float]:
        return [self.people, self.media, self.data_tech, self.content, self.agency, self.other]


class CoverageSettings(BaseModel):
    """Tier selection plus optional overrides of the tier benchmarks.

    Zero means "use the tier default" for the budget and sweet-spot fields.
    """

    tier: AbmTier = Field(default="1toFew")
    min_budget_per_account: float = Field(default=0, ge=0)
    max_treated_accounts: float = Field(default=0, ge=0)
    intensity_exponent: float = Field(default=DEFAULT_INTENSITY_EXPONENT, ge=0.1, le=2)

    class Config:
        frozen = True


class AlignmentInputs(BaseModel):
    level: AlignmentLevel = Field(default="standard")

    class Config:
        frozen = True


class SensitivityConfig(BaseModel):
    """Axes of the ROI sensitivity grid.

    ``resolution`` is an interpolation hint for presentation code and is
    not read by the engines.
    """

    in_market_range: List[float] = Field(..., min_length=1)
    win_rate_uplift_range: List[float] = Field(..., min_length=1)
    resolution: Optional[int] = Field(
        default=None,
        ge=MIN_SENSITIVITY_RESOLUTION,
        le=MAX_SENSITIVITY_RESOLUTION,
    )

    class Config:
        frozen = True

    @field_validator("in_market_range", "win_rate_uplift_range")
    @classmethod
    def check_range_values(cls, v: List[float]) -> List[float]:
        for value in v:
            if value < 0 or value > 100:
                raise ValueError("Sensitivity values must be between 0 and 100.")
        return v


class ScenarioInputs(BaseModel):
    """Complete, validated input value consumed by the scenario engine."""

    programme: ProgrammeSettings
    market: MarketFunnelInputs
    uplifts: UpliftInputs
    costs: ProgrammeCosts
    coverage: CoverageSettings = Field(default_factory=CoverageSettings)
    alignment: AlignmentInputs = Field(default_factory=AlignmentInputs)
    sensitivity: SensitivityConfig

    class Config:
        frozen = True


DEFAULT_SCENARIO = ScenarioInputs.model_validate(
    {
        "programme": {
            "duration_months": 12,
            "ramp_months": 3,
            "currency": "GBP",
            "number_format_locale": "en-GB",
        },
        "market": {
            "target_accounts": 150,
            "in_market_rate": 35,
            "qualified_opps_per_account": 1,
            "baseline_win_rate": 22,
            "baseline_acv": 65_000,
            "contribution_margin": 55,
            "sales_cycle_months_baseline": 9,
            "sales_cycle_months_abm": 6,
        },
        "uplifts": {
            "win_rate_uplift": 12,
            "acv_uplift": 18,
            "opportunity_rate_uplift": 25,
        },
        "costs": {
            "people": 220_000,
            "media": 90_000,
            "data_tech": 45_000,
            "content": 60_000,
            "agency": 40_000,
            "other": 15_000,
        },
        "coverage": {
            "tier": "1toFew",
            "min_budget_per_account": 0,
            "max_treated_accounts": 0,
            "intensity_exponent": 0.8,
        },
        "alignment": {"level": "standard"},
        "sensitivity": {
            "in_market_range": [25, 35, 45],
            "win_rate_uplift_range": [5, 10, 15],
            "resolution": 5,
        },
    }
)
