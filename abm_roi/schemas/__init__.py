# Schemas package
from .scenario_schema import (
    DEFAULT_SCENARIO,
    AlignmentInputs,
    CoverageSettings,
    MarketFunnelInputs,
    ProgrammeCosts,
    ProgrammeSettings,
    ScenarioInputs,
    SensitivityConfig,
    UpliftInputs,
)
from .result_schema import (
    AbmOutputs,
    BaselineOutputs,
    CoverageOutputs,
    Guardrail,
    IncrementalOutputs,
    ScenarioOutputs,
    ScenarioResult,
)
from .sensitivity_schema import SensitivityCell, SensitivityGrid
from .evaluation_schema import ScenarioEvaluation

__all__ = [
    "DEFAULT_SCENARIO",
    "ProgrammeSettings",
    "MarketFunnelInputs",
    "UpliftInputs",
    "ProgrammeCosts",
    "CoverageSettings",
    "AlignmentInputs",
    "SensitivityConfig",
    "ScenarioInputs",
    "CoverageOutputs",
    "BaselineOutputs",
    "AbmOutputs",
    "IncrementalOutputs",
    "ScenarioOutputs",
    "Guardrail",
    "ScenarioResult",
    "SensitivityCell",
    "SensitivityGrid",
    "ScenarioEvaluation",
]
