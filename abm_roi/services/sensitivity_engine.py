"""Sensitivity Engine.

Re-runs the full scenario pipeline for every (in-market rate, win-rate
uplift) pair of the configured ranges and records the ROI of each.
Cells are independent, so they may be computed on a thread pool; the
grid is identical either way.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .. import config
from ..schemas.scenario_schema import ScenarioInputs
from ..schemas.sensitivity_schema import SensitivityCell, SensitivityGrid
from ..timing import sync_timer
from .scenario_engine import calculate_scenario

logger = logging.getLogger(__name__)


def calculate_cell(
    inputs: ScenarioInputs,
    in_market_rate: float,
    win_rate_uplift: float,
) -> SensitivityCell:
    """ROI of *inputs* with only the two grid fields substituted."""
    scenario = inputs.model_copy(
        update={
            "market": inputs.market.model_copy(update={"in_market_rate": in_market_rate}),
            "uplifts": inputs.uplifts.model_copy(update={"win_rate_uplift": win_rate_uplift}),
        }
    )
    result = calculate_scenario(scenario)
    return SensitivityCell(
        in_market_rate=in_market_rate,
        win_rate_uplift=win_rate_uplift,
        roi=result.outputs.incremental.roi,
    )


def build_sensitivity_grid(
    inputs: ScenarioInputs,
    max_workers: Optional[int] = None,
) -> SensitivityGrid:
    """Build the ROI grid: rows follow ``in_market_range``, columns
    ``win_rate_uplift_range``.

    ``max_workers`` defaults to ``ABM_SENSITIVITY_WORKERS``; 1 computes the
    cells sequentially.
    """
    rows = list(inputs.sensitivity.in_market_range)
    columns = list(inputs.sensitivity.win_rate_uplift_range)
    workers = config.SENSITIVITY_WORKERS if max_workers is None else max(1, max_workers)

    with sync_timer("sensitivity", f"GRID {len(rows)}x{len(columns)}"):
        if workers == 1:
            return [
                [calculate_cell(inputs, in_market_rate, win_rate_uplift) for win_rate_uplift in columns]
                for in_market_rate in rows
            ]

        logger.debug("[SENSITIVITY] Computing %d cells on %d workers", len(rows) * len(columns), workers)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                [
                    executor.submit(calculate_cell, inputs, in_market_rate, win_rate_uplift)
                    for win_rate_uplift in columns
                ]
                for in_market_rate in rows
            ]
            return [[future.result() for future in row] for row in futures]
