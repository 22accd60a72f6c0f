"""Scenario boundary service.

The single entry point presentation code calls with a raw payload: validate
it, run the scenario and the sensitivity grid, and hand back an envelope.
Invalid payloads produce ``success=False`` with readable errors instead of
an exception.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ..schemas.evaluation_schema import ScenarioEvaluation
from ..schemas.scenario_schema import ScenarioInputs
from ..timing import StepTimer
from .scenario_engine import calculate_scenario
from .sensitivity_engine import build_sensitivity_grid

logger = logging.getLogger(__name__)


def validate_scenario(payload: Mapping[str, Any]) -> ScenarioInputs:
    """Validate *payload* into ``ScenarioInputs``.

    Raises pydantic's ``ValidationError`` when any range or cross-field
    rule fails.
    """
    return ScenarioInputs.model_validate(payload)


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Render each pydantic error as ``"section.field: message"``."""
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def evaluate_scenario(
    payload: Mapping[str, Any],
    include_sensitivity: bool = True,
    max_workers: Optional[int] = None,
) -> ScenarioEvaluation:
    """Validate *payload* and compute its result and sensitivity grid."""
    timer = StepTimer("scenario")

    try:
        with timer.step("validate"):
            inputs = validate_scenario(payload)
    except ValidationError as exc:
        errors = format_validation_errors(exc)
        logger.warning("[SCENARIO] Payload rejected with %d error(s): %s", len(errors), "; ".join(errors))
        return ScenarioEvaluation(success=False, errors=errors)

    with timer.step("calculate"):
        result = calculate_scenario(inputs)

    grid = None
    if include_sensitivity:
        with timer.step("sensitivity"):
            grid = build_sensitivity_grid(inputs, max_workers=max_workers)

    timer.summary()
    return ScenarioEvaluation(success=True, result=result, sensitivity_grid=grid)
