"""
Margin, discount and ROI API endpoints.

Margin, discount and ROI solving accept any two of their related values;
omitted fields are unknown.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List, Optional

from fincalc.calculations import discount, margin, roi

router = APIRouter()


class MarginRequest(BaseModel):
    cost: Optional[float] = None
    revenue: Optional[float] = None
    margin: Optional[float] = None
    profit: Optional[float] = None


@router.post("/margin")
async def calculate_margin(inputs: MarginRequest):
    return margin.calculate_margin(margin.from_known(**inputs.model_dump()))


class DiscountRequest(BaseModel):
    original_price: Optional[float] = None
    discount_percent: Optional[float] = None
    discount_amount: Optional[float] = None
    final_price: Optional[float] = None
    mode: discount.DiscountMode = discount.DiscountMode.percent


@router.post("/discount")
async def calculate_discount(inputs: DiscountRequest):
    return discount.calculate_discount(discount.from_known(**inputs.model_dump()))


class ROIRequest(BaseModel):
    initial_investment: float
    final_value: float
    investment_period: float
    period_type: roi.PeriodType = roi.PeriodType.years
    additional_costs: float = 0.0
    additional_gains: float = 0.0
    inflation_rate: Optional[float] = None

    # Years to project forward at the annualized ROI
    projection_years: int = 0


@router.post("/roi")
async def calculate_roi(inputs: ROIRequest):
    """ROI over a holding period, with an optional growth projection."""
    fields = inputs.model_dump(exclude={"projection_years"})
    result = roi.calculate_roi(roi.ROIInput(**fields))

    projection = []
    if inputs.projection_years > 0:
        projection = roi.project_growth(
            result.total_invested, result.annualized_roi, inputs.projection_years
        )
    return {"result": result, "projection": projection}


class ROISolveRequest(BaseModel):
    amount_invested: Optional[float] = None
    amount_returned: Optional[float] = None
    roi: Optional[float] = None


@router.post("/roi/solve")
async def solve_roi(inputs: ROISolveRequest):
    """Solve for the missing one of amount invested, amount returned and ROI."""
    return roi.solve_roi(roi.from_known(**inputs.model_dump()))


class ScenarioRequest(BaseModel):
    name: str
    initial_investment: float
    final_value: float
    period: float
    period_type: roi.PeriodType = roi.PeriodType.years
    additional_costs: float = 0.0
    additional_gains: float = 0.0


class CompareRequest(BaseModel):
    scenarios: List[ScenarioRequest]


@router.post("/roi/compare")
async def compare_roi(inputs: CompareRequest):
    """Rank investment scenarios by annualized ROI."""
    return roi.compare_scenarios(
        [roi.InvestmentScenario(**s.model_dump()) for s in inputs.scenarios]
    )
