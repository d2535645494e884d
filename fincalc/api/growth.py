"""
Interest, investment and annuity growth API endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import Optional

from fincalc.calculations import annuity, growth, investment
from fincalc.calculations.frequency import Frequency

router = APIRouter()


class SimpleInterestRequest(BaseModel):
    principal: float
    annual_rate: float
    years: float
    months: float = 0


@router.post("/simple-interest")
async def calculate_simple_interest(inputs: SimpleInterestRequest):
    return growth.calculate_simple_interest(
        inputs.principal, inputs.annual_rate, inputs.years, inputs.months
    )


class CompoundInterestRequest(BaseModel):
    """Input for compound interest; contribution is per compounding period."""

    principal: float
    annual_rate: float
    years: float
    contribution: float = 0.0
    compounding: Frequency = Frequency.monthly
    payment_at_beginning: bool = False
    contributions_per_year: Optional[int] = None
    inflation_rate: float = 0.0


@router.post("/compound-interest")
async def calculate_compound_interest(inputs: CompoundInterestRequest):
    return growth.calculate_compound_interest(
        growth.CompoundInterestInput(**inputs.model_dump())
    )


class InvestmentRequest(BaseModel):
    starting_amount: float
    contribution: float = 0.0
    years: float
    annual_rate: float
    contribution_frequency: Frequency = Frequency.monthly
    compounding: Frequency = Frequency.annually
    payment_at_beginning: bool = False


@router.post("/investment")
async def calculate_investment(inputs: InvestmentRequest):
    """Grow a starting amount with contributions on their own schedule."""
    return investment.calculate_investment(
        investment.InvestmentInput(**inputs.model_dump())
    )


class AnnuityRequest(BaseModel):
    starting_principal: float
    annual_rate: float
    years: float
    monthly_addition: float = 0.0
    annual_addition: float = 0.0
    payment_at_beginning: bool = False


@router.post("/annuity")
async def calculate_annuity(inputs: AnnuityRequest):
    """Accumulation phase of an annuity, compounded monthly."""
    return annuity.calculate_annuity_accumulation(
        annuity.AnnuityAccumulationInput(**inputs.model_dump())
    )


class AnnuityPayoutRequest(BaseModel):
    """
    Payout phase of an annuity.

    Give `years` for the level payout over a fixed length, or
    `payout_amount` for how long a fixed payout lasts.
    """

    principal: float
    annual_rate: float
    frequency: Frequency = Frequency.monthly
    years: Optional[float] = None
    payout_amount: Optional[float] = None


@router.post("/annuity-payout")
async def calculate_annuity_payout(inputs: AnnuityPayoutRequest):
    if inputs.payout_amount is not None:
        return annuity.calculate_payout_duration(
            inputs.principal, inputs.annual_rate, inputs.payout_amount, inputs.frequency
        )
    return annuity.calculate_annuity_payout(
        inputs.principal, inputs.annual_rate, inputs.years or 0, inputs.frequency
    )
