"""Planning-stage ROI estimator for account-based-marketing programmes."""

from .schemas import DEFAULT_SCENARIO, ScenarioInputs, ScenarioResult
from .services import (
    build_sensitivity_grid,
    calculate_scenario,
    evaluate_scenario,
    validate_scenario,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SCENARIO",
    "ScenarioInputs",
    "ScenarioResult",
    "build_sensitivity_grid",
    "calculate_scenario",
    "evaluate_scenario",
    "validate_scenario",
]
