"""
Loan and cash flow calculation API endpoints.

These endpoints accept inputs and return calculated results. Calculation
errors propagate to the application's CalculationError handler.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List, Optional
from datetime import date

from fincalc.calculations import amortization, auto_lease, cash_back, irr, tvm
from fincalc.calculations.frequency import Frequency, periods_per_year
from fincalc.config import get_settings

router = APIRouter()
settings = get_settings()


class TVMRequest(BaseModel):
    """Input for the TVM solver; the value of `solve_for` is ignored."""

    solve_for: tvm.SolveFor
    n: float = 0.0
    iy: float = 0.0
    pv: float = 0.0
    pmt: float = 0.0
    fv: float = 0.0
    py: int = 1
    cy: int = 1
    payment_at_beginning: bool = False

    # Amortize the solved values as a loan
    include_schedule: bool = False
    start_date: Optional[date] = None


@router.post("/tvm")
async def calculate_tvm(inputs: TVMRequest):
    """Solve for the unknown time-value-of-money variable."""
    result = tvm.solve(
        tvm.TVMInput(
            solve_for=inputs.solve_for,
            n=inputs.n,
            iy=inputs.iy,
            pv=inputs.pv,
            pmt=inputs.pmt,
            fv=inputs.fv,
            py=inputs.py,
            cy=inputs.cy,
            payment_at_beginning=inputs.payment_at_beginning,
        ),
        tolerance=settings.solver_tolerance,
        max_iterations=settings.solver_max_iterations,
    )

    schedule = None
    if inputs.include_schedule:
        schedule = tvm.amortization_from_tvm(result, start_date=inputs.start_date)

    return {"result": result, "schedule": schedule}


class AmortizationRequest(BaseModel):
    """Input for amortization calculation."""

    principal: float
    annual_rate: float  # Percent
    years: float
    frequency: Frequency = Frequency.monthly
    payment_at_beginning: bool = False
    start_date: Optional[date] = None


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationRequest):
    """Generate loan amortization schedule."""
    per_year = periods_per_year(inputs.frequency)
    schedule = amortization.generate_amortization_schedule(
        principal=inputs.principal,
        periodic_rate=inputs.annual_rate / 100 / per_year,
        period_count=round(inputs.years * per_year),
        payment_at_beginning=inputs.payment_at_beginning,
        start_date=inputs.start_date,
        frequency=inputs.frequency,
    )

    return {
        "payment": schedule[0].payment if schedule else 0.0,
        "schedule": schedule,
        "yearly": amortization.summarize_yearly(schedule, per_year),
        "total_interest": amortization.calculate_total_interest(schedule),
        "total_principal": amortization.calculate_total_principal(schedule),
    }


class IRRInput(BaseModel):
    """Input for IRR calculation."""

    cash_flows: List[float]
    dates: Optional[List[date]] = None
    finance_rate: Optional[float] = None  # Percent, for MIRR
    reinvestment_rate: Optional[float] = None  # Percent, for MIRR


class IRRResponse(BaseModel):
    """Response with IRR calculation."""

    irr: float
    multiple: float
    profit: float
    npv_at_10_percent: float
    mirr: Optional[float] = None
    payback_period: Optional[float] = None


@router.post("/irr", response_model=IRRResponse)
async def calculate_irr_endpoint(inputs: IRRInput):
    """Calculate IRR for given cash flows, XIRR when dates are given."""
    if inputs.dates:
        irr_val = irr.calculate_xirr(
            inputs.cash_flows,
            inputs.dates,
            tolerance=settings.solver_tolerance,
            max_iterations=settings.solver_max_iterations,
        )
        return IRRResponse(
            irr=irr_val,
            multiple=irr.calculate_multiple(inputs.cash_flows),
            profit=irr.calculate_profit(inputs.cash_flows),
            npv_at_10_percent=irr.calculate_xnpv(inputs.cash_flows, inputs.dates, 0.10),
        )

    analysis = irr.analyze_cash_flows(
        inputs.cash_flows,
        finance_rate=inputs.finance_rate,
        reinvestment_rate=inputs.reinvestment_rate,
        tolerance=settings.solver_tolerance,
        max_iterations=settings.solver_max_iterations,
    )
    return IRRResponse(
        irr=analysis.irr / 100,
        multiple=analysis.multiple,
        profit=analysis.profit,
        npv_at_10_percent=irr.calculate_npv(inputs.cash_flows, 0.10),
        mirr=analysis.mirr / 100 if analysis.mirr is not None else None,
        payback_period=analysis.payback_period,
    )


class CashBackRequest(BaseModel):
    purchase_price: float
    cash_back: float
    standard_rate: float
    reduced_rate: float
    loan_term_months: int
    down_payment: float = 0.0


@router.post("/cash-back")
async def calculate_cash_back(inputs: CashBackRequest):
    """Compare a cash back rebate against low-interest financing."""
    return cash_back.compare_cash_back(cash_back.CashBackInput(**inputs.model_dump()))


class AutoLeaseRequest(BaseModel):
    msrp: float
    negotiated_price: float
    lease_term: int
    interest_rate: float
    residual_percent: float
    down_payment: float = 0.0
    trade_in_value: float = 0.0
    amount_owed_on_trade_in: float = 0.0
    sales_tax_rate: float = 0.0
    fees: float = 0.0


@router.post("/auto-lease")
async def calculate_auto_lease(inputs: AutoLeaseRequest):
    """Calculate a monthly auto lease payment."""
    return auto_lease.calculate_auto_lease(auto_lease.AutoLeaseInput(**inputs.model_dump()))
