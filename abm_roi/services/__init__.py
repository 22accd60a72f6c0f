from .percent import floor_zero, to_decimal
from .in_market import derive_in_market_rate, derive_in_market_share
from .costs import sum_programme_costs
from .coverage_engine import compute_tier_defaults, resolve_coverage
from .baseline_engine import calculate_baseline
from .abm_engine import calculate_abm, split_baseline
from .incremental_engine import calculate_incremental
from .scenario_engine import apply_preset, apply_tier_defaults, calculate_scenario
from .sensitivity_engine import build_sensitivity_grid
from .scenario_service import evaluate_scenario, validate_scenario

__all__ = [
    "floor_zero",
    "to_decimal",
    "derive_in_market_share",
    "derive_in_market_rate",
    "compute_tier_defaults",
    "resolve_coverage",
    "calculate_baseline",
    "calculate_abm",
    "split_baseline",
    "calculate_incremental",
    "sum_programme_costs",
    "calculate_scenario",
    "apply_preset",
    "apply_tier_defaults",
    "build_sensitivity_grid",
    "evaluate_scenario",
    "validate_scenario",
]
