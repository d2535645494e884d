"""
Tax calculation API endpoints.
"""

from dataclasses import asdict

from fastapi import APIRouter
from pydantic import BaseModel
from typing import Optional

from fincalc.calculations import marriage_tax
from fincalc.calculations.tax_tables import FilingStatus
from fincalc.config import get_settings
from fincalc.formatting import marriage_tax_recommendation

router = APIRouter()
settings = get_settings()


class ItemizedDeductionsRequest(BaseModel):
    mortgage_interest: float = 0.0
    charitable_donations: float = 0.0
    state_local_taxes: float = 0.0
    medical_expenses: float = 0.0
    other_deductions: float = 0.0


class PersonRequest(BaseModel):
    salary: float
    interest_dividends: float = 0.0
    short_term_gains: float = 0.0
    long_term_gains: float = 0.0
    retirement_401k: float = 0.0
    health_insurance: float = 0.0
    other_pre_tax_deductions: float = 0.0
    filing_status: FilingStatus = FilingStatus.single
    itemized_deductions: Optional[ItemizedDeductionsRequest] = None

    def to_input(self) -> marriage_tax.PersonInput:
        fields = self.model_dump(exclude={"itemized_deductions"})
        itemized = None
        if self.itemized_deductions is not None:
            itemized = marriage_tax.ItemizedDeductions(**self.itemized_deductions.model_dump())
        return marriage_tax.PersonInput(itemized_deductions=itemized, **fields)


class MarriageTaxRequest(BaseModel):
    person1: PersonRequest
    person2: PersonRequest
    dependents: int = 0
    use_standard_deduction: bool = True
    state_local_tax_rate: float = 0.0
    tax_year: Optional[int] = None


@router.post("/marriage-tax")
async def calculate_marriage_tax(inputs: MarriageTaxRequest):
    """Compare two people's taxes filed separately and jointly."""
    result = marriage_tax.calculate_marriage_tax(
        marriage_tax.MarriageTaxInput(
            person1=inputs.person1.to_input(),
            person2=inputs.person2.to_input(),
            dependents=inputs.dependents,
            use_standard_deduction=inputs.use_standard_deduction,
            state_local_tax_rate=inputs.state_local_tax_rate,
            tax_year=inputs.tax_year or settings.default_tax_year,
        )
    )
    return {**asdict(result), "recommendation": marriage_tax_recommendation(result)}
