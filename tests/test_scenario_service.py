"""Boundary service tests — payload validation, envelope, logging and timing."""

import os
import sys

# Ensure the package is importable without installation
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

import pytest
from pydantic import ValidationError

from abm_roi import config
from abm_roi.schemas import DEFAULT_SCENARIO
from abm_roi.services.scenario_engine import calculate_scenario
from abm_roi.services.scenario_service import (
    evaluate_scenario,
    format_validation_errors,
    validate_scenario,
)
from abm_roi.timing import StepTimer, sync_timer


def _payload(**sections):
    data = DEFAULT_SCENARIO.model_dump()
    for name, values in sections.items():
        data[name] = {**data[name], **values}
    return data


@pytest.fixture(autouse=True)
def reset_log_level():
    """Restore the package logger level after each test."""
    package_logger = logging.getLogger("abm_roi")
    previous = package_logger.level
    yield
    package_logger.setLevel(previous)


# ===================================================================== #
#  evaluate_scenario                                                     #
# ===================================================================== #

class TestEvaluateScenario:
    def test_valid_payload(self):
        evaluation = evaluate_scenario(DEFAULT_SCENARIO.model_dump(), max_workers=1)
        assert evaluation.success is True
        assert evaluation.errors == []
        assert evaluation.result == calculate_scenario(DEFAULT_SCENARIO)
        assert len(evaluation.sensitivity_grid) == 3
        assert all(len(row) == 3 for row in evaluation.sensitivity_grid)

    def test_invalid_payload_returns_errors(self):
        evaluation = evaluate_scenario(_payload(market={"sales_cycle_months_abm": 12}))
        assert evaluation.success is False
        assert evaluation.result is None
        assert evaluation.sensitivity_grid is None
        assert any("ABM cycle" in error for error in evaluation.errors)

    def test_rejection_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="abm_roi"):
            evaluate_scenario(_payload(programme={"ramp_months": 20}))
        assert "[SCENARIO]" in caplog.text
        assert "Ramp-up" in caplog.text

    def test_without_sensitivity(self):
        evaluation = evaluate_scenario(DEFAULT_SCENARIO.model_dump(), include_sensitivity=False)
        assert evaluation.success is True
        assert evaluation.sensitivity_grid is None

    def test_envelope_serialises(self):
        evaluation = evaluate_scenario(DEFAULT_SCENARIO.model_dump(), max_workers=1)
        data = evaluation.model_dump()
        assert data["result"]["guardrails"] == []
        assert data["result"]["outputs"]["coverage"]["abm_tier"] == "1toFew"


class TestValidateScenario:
    def test_returns_inputs(self):
        assert validate_scenario(DEFAULT_SCENARIO.model_dump()) == DEFAULT_SCENARIO

    def test_raises_on_invalid(self):
        with pytest.raises(ValidationError):
            validate_scenario(_payload(uplifts={"win_rate_uplift": 50}))

    def test_error_location_format(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_scenario(_payload(market={"in_market_rate": 90}))
        errors = format_validation_errors(exc_info.value)
        assert len(errors) == 1
        assert errors[0].startswith("market.in_market_rate: ")

    def test_missing_section(self):
        data = DEFAULT_SCENARIO.model_dump()
        del data["uplifts"]
        with pytest.raises(ValidationError) as exc_info:
            validate_scenario(data)
        assert format_validation_errors(exc_info.value)[0].startswith("uplifts: ")


# ===================================================================== #
#  Logging & timing                                                      #
# ===================================================================== #

class TestConfigureLogging:
    def test_explicit_level(self):
        config.configure_logging("debug")
        assert logging.getLogger("abm_roi").level == logging.DEBUG

    def test_unknown_level_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="abm_roi.config"):
            config.configure_logging("chatty")
        assert logging.getLogger("abm_roi").level == logging.WARNING
        assert "Unknown log level" in caplog.text


class TestTiming:
    def test_sync_timer_logs_start_and_end(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="abm_roi.timing"):
            with sync_timer("sensitivity", "GRID 3x3"):
                pass
        assert "[TIMING] sensitivity: GRID 3x3 START" in caplog.text
        assert "[TIMING] sensitivity: GRID 3x3 END" in caplog.text

    def test_step_timer_records_steps(self, caplog):
        timer = StepTimer("scenario")
        with caplog.at_level(logging.DEBUG, logger="abm_roi.timing"):
            with timer.step("calculate"):
                pass
            total = timer.summary()
        assert "calculate" in timer.steps
        assert total >= timer.steps["calculate"]
        assert "[TIMING] scenario: TOTAL" in caplog.text
        assert "calculate=" in caplog.text

    def test_evaluation_emits_step_timings(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="abm_roi"):
            evaluate_scenario(DEFAULT_SCENARIO.model_dump(), max_workers=1)
        assert "[TIMING] scenario: validate" in caplog.text
        assert "[TIMING] scenario: sensitivity" in caplog.text
