"""Scenario pipeline, presets and sensitivity grid tests."""

import os
import sys

# Ensure the package is importable without installation
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from abm_roi.schemas import DEFAULT_SCENARIO, ProgrammeCosts
from abm_roi.services.scenario_engine import (
    apply_preset,
    apply_tier_defaults,
    calculate_scenario,
)
from abm_roi.services.sensitivity_engine import build_sensitivity_grid, calculate_cell


def _full_coverage_inputs():
    coverage = DEFAULT_SCENARIO.coverage.model_copy(update={"max_treated_accounts": 150})
    return DEFAULT_SCENARIO.model_copy(update={"coverage": coverage})


def _with(inputs, in_market_rate, win_rate_uplift):
    return inputs.model_copy(
        update={
            "market": inputs.market.model_copy(update={"in_market_rate": in_market_rate}),
            "uplifts": inputs.uplifts.model_copy(update={"win_rate_uplift": win_rate_uplift}),
        }
    )


class TestCalculateScenario:
    def test_bundles_inputs_and_outputs(self):
        result = calculate_scenario(DEFAULT_SCENARIO)
        assert result.inputs == DEFAULT_SCENARIO
        assert result.guardrails == []
        assert result.outputs.coverage.treated_accounts == 20
        assert result.outputs.incremental.incremental_revenue > 0

    def test_reference_scenario_at_full_intensity(self):
        outputs = calculate_scenario(_full_coverage_inputs()).outputs
        assert outputs.baseline.in_market_accounts == pytest.approx(52.5)
        assert outputs.baseline.revenue == pytest.approx(750_750)
        assert outputs.baseline.gross_profit == pytest.approx(412_912.5)
        assert outputs.abm.revenue == pytest.approx(1_711_368.75)
        assert outputs.incremental.roi == pytest.approx(0.1241, abs=1e-4)
        assert outputs.incremental.break_even_wins == 12
        assert outputs.incremental.payback_months == pytest.approx(7.12, abs=1e-2)

    def test_deterministic(self):
        assert calculate_scenario(DEFAULT_SCENARIO) == calculate_scenario(DEFAULT_SCENARIO)

    def test_zero_cost_scenario(self):
        costs = ProgrammeCosts.model_construct(
            people=0, media=0, data_tech=0, content=0, agency=0, other=0, total_override=None
        )
        inputs = DEFAULT_SCENARIO.model_copy(update={"costs": costs})
        incremental = calculate_scenario(inputs).outputs.incremental
        assert incremental.roi is None
        assert incremental.gross_romi is None
        assert incremental.break_even_wins is None
        assert incremental.payback_months is None

    def test_zero_targets(self):
        market = DEFAULT_SCENARIO.market.model_copy(update={"target_accounts": 0})
        outputs = calculate_scenario(DEFAULT_SCENARIO.model_copy(update={"market": market})).outputs
        assert outputs.coverage.treated_accounts == 0
        assert outputs.abm.revenue == 0.0
        assert outputs.incremental.roi == pytest.approx(-1.0)


class TestPresets:
    def test_apply_preset(self):
        inputs = apply_preset(DEFAULT_SCENARIO, "conservative")
        assert inputs.uplifts.win_rate_uplift == 4
        assert inputs.uplifts.acv_uplift == 6
        assert inputs.uplifts.opportunity_rate_uplift == 10
        assert inputs.market.in_market_rate == 25
        # original value is untouched
        assert DEFAULT_SCENARIO.uplifts.win_rate_uplift == 12

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            apply_preset(DEFAULT_SCENARIO, "moonshot")

    def test_apply_tier_defaults(self):
        inputs = apply_tier_defaults(DEFAULT_SCENARIO, "1to1")
        assert inputs.coverage.tier == "1to1"
        assert inputs.market.target_accounts == 4
        assert inputs.market.qualified_opps_per_account == 1.2
        assert calculate_scenario(inputs).outputs.coverage.treated_accounts == 4


class TestSensitivityGrid:
    def test_dimensions_and_axes(self):
        grid = build_sensitivity_grid(DEFAULT_SCENARIO, max_workers=1)
        assert len(grid) == 3
        assert all(len(row) == 3 for row in grid)
        assert [row[0].in_market_rate for row in grid] == [25, 35, 45]
        assert [cell.win_rate_uplift for cell in grid[0]] == [5, 10, 15]

    def test_cell_matches_manual_recompute(self):
        grid = build_sensitivity_grid(DEFAULT_SCENARIO, max_workers=1)
        ranges = DEFAULT_SCENARIO.sensitivity
        for i, in_market_rate in enumerate(ranges.in_market_range):
            for j, win_rate_uplift in enumerate(ranges.win_rate_uplift_range):
                manual = calculate_scenario(_with(DEFAULT_SCENARIO, in_market_rate, win_rate_uplift))
                assert grid[i][j].roi == manual.outputs.incremental.roi

    def test_parallel_matches_sequential(self):
        sequential = build_sensitivity_grid(DEFAULT_SCENARIO, max_workers=1)
        parallel = build_sensitivity_grid(DEFAULT_SCENARIO, max_workers=4)
        assert parallel == sequential

    def test_roi_rises_with_win_uplift(self):
        grid = build_sensitivity_grid(_full_coverage_inputs(), max_workers=1)
        for row in grid:
            rois = [cell.roi for cell in row]
            assert rois == sorted(rois)

    def test_cell_values_outside_market_limits(self):
        # grid ranges accept up to 100% even though market input caps at 70%
        cell = calculate_cell(DEFAULT_SCENARIO, 90, 15)
        assert cell.in_market_rate == 90
        assert cell.roi is not None

    def test_zero_cost_grid_is_all_null(self):
        costs = ProgrammeCosts.model_construct(
            people=0, media=0, data_tech=0, content=0, agency=0, other=0, total_override=None
        )
        inputs = DEFAULT_SCENARIO.model_copy(update={"costs": costs})
        grid = build_sensitivity_grid(inputs, max_workers=1)
        assert all(cell.roi is None for row in grid for cell in row)
