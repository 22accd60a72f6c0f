from typing import List, Optional

from pydantic import BaseModel, Field


class SensitivityCell(BaseModel):
    """ROI for one (in-market rate, win-rate uplift) pair."""

    in_market_rate: float
    win_rate_uplift: float
    roi: Optional[float] = Field(
        default=None,
        description="Null when the programme has no cost to measure against",
    )

    class Config:
        frozen = True


# Rows follow in_market_range, columns follow win_rate_uplift_range.
SensitivityGrid = List[List[SensitivityCell]]
