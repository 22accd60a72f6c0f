from typing import List, Optional

from pydantic import BaseModel, Field

from .result_schema import ScenarioResult
from .sensitivity_schema import SensitivityCell


class ScenarioEvaluation(BaseModel):
    """Envelope returned by the boundary service.

    ``success`` is False only when the payload failed validation; in that
    case ``result`` and ``sensitivity_grid`` are null and ``errors`` lists
    one readable message per failed rule.
    """

    success: bool = Field(
        default=True,
        description="Whether the payload validated and the scenario was computed",
    )
    result: Optional[ScenarioResult] = Field(
        default=None,
        description="Full scenario result",
    )
    sensitivity_grid: Optional[List[List[SensitivityCell]]] = Field(
        default=None,
        description="ROI grid over in-market rate (rows) x win-rate uplift (columns)",
    )
    errors: List[str] = Field(
        default_factory=list,
        description="Validation errors as 'section.field: message'",
    )

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "result": None,
                "sensitivity_grid": None,
                "errors": [
                    "market: Value error, ABM cycle must be <= baseline cycle."
                ],
            }
        }
