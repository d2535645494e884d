"""
IRR and NPV Calculations

Implements NPV, IRR, XIRR and MIRR, matching Excel's NPV/IRR/XIRR/MIRR
functions, plus payback period and equity multiple. IRR and XIRR use
Newton-Raphson with a bisection fallback.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

import numpy as np

from fincalc.calculations.errors import InvalidInputError, raise_if_errors
from fincalc.calculations.solvers import MAX_ITERATIONS, TOLERANCE, find_root

DEFAULT_GUESS = 0.1
RATE_LOWER_BOUND = -0.99
RATE_UPPER_BOUND = 10.0


@dataclass(frozen=True)
class CashFlowDetail:
    period: int
    amount: float
    discounted_value: float  # Present value at the IRR
    cumulative_cash_flow: float


@dataclass(frozen=True)
class CashFlowAnalysis:
    irr: float  # Percent
    npv_at_zero: float
    total_investment: float
    total_returns: float
    profit: float
    multiple: float
    payback_period: Optional[float]
    mirr: Optional[float] = None  # Percent
    schedule: List[CashFlowDetail] = field(default_factory=list)


def calculate_npv(cash_flows: List[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of cash flows.

    Args:
        cash_flows: Array of cash flows (negative = outflow, positive = inflow),
            the first at period 0
        discount_rate: Discount rate per period (e.g., 0.10 for 10%)

    Returns:
        NPV value
    """
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows))
    return float(np.sum(flows / (1 + discount_rate) ** periods))


def _npv_derivative(cash_flows: List[float], rate: float) -> float:
    """Calculate derivative of NPV with respect to rate (for Newton-Raphson)."""
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows))
    return float(-np.sum(periods * flows / (1 + rate) ** (periods + 1)))


def _validate_flows(cash_flows: List[float]) -> None:
    errors = []
    if len(cash_flows) < 2:
        errors.append("At least 2 cash flows required")
    if not any(cf > 0 for cf in cash_flows) or not any(cf < 0 for cf in cash_flows):
        errors.append("Cash flows must contain both positive and negative values")
    raise_if_errors(errors)


def calculate_irr(
    cash_flows: List[float],
    guess: float = DEFAULT_GUESS,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """
    Calculate IRR (Internal Rate of Return).

    Matches Excel's IRR() function behavior for periodic cash flows.

    Args:
        cash_flows: Array of periodic cash flows
        guess: Initial guess for rate (default 0.1 = 10%)

    Returns:
        IRR per period as decimal (e.g., 0.15 for 15%)

    Raises:
        InvalidInputError: If the cash flows cannot have an IRR
        ConvergenceError: If IRR cannot be calculated
    """
    _validate_flows(cash_flows)

    return find_root(
        lambda r: calculate_npv(cash_flows, r),
        lambda r: _npv_derivative(cash_flows, r),
        guess,
        RATE_LOWER_BOUND,
        RATE_UPPER_BOUND,
        tolerance=tolerance,
        max_iterations=max_iterations,
        scale=max(abs(cf) for cf in cash_flows),
    )


def _year_fractions(dates: List[date]) -> np.ndarray:
    base_date = dates[0]
    return np.array([(d - base_date).days / 365.0 for d in dates])


def calculate_xnpv(
    cash_flows: List[float], dates: List[date], discount_rate: float
) -> float:
    """Calculate XNPV (NPV with specific dates)."""
    if len(cash_flows) != len(dates):
        raise InvalidInputError("Cash flows and dates arrays must have same length")

    years = _year_fractions(dates)
    flows = np.asarray(cash_flows, dtype=float)
    return float(np.sum(flows / (1 + discount_rate) ** years))


def _xnpv_derivative(
    cash_flows: List[float], dates: List[date], rate: float
) -> float:
    """Calculate derivative of XNPV with respect to rate."""
    years = _year_fractions(dates)
    flows = np.asarray(cash_flows, dtype=float)
    return float(-np.sum(years * flows / (1 + rate) ** (years + 1)))


def calculate_xirr(
    cash_flows: List[float],
    dates: List[date],
    guess: float = DEFAULT_GUESS,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> float:
    """
    Calculate XIRR (IRR with specific dates).

    Matches Excel's XIRR() function behavior for irregular cash flows.

    Args:
        cash_flows: Array of cash flows
        dates: Array of dates corresponding to each cash flow
        guess: Initial guess for rate (default 0.1 = 10%)

    Returns:
        Annual IRR as decimal

    Raises:
        InvalidInputError: If the inputs cannot have an XIRR
        ConvergenceError: If XIRR cannot be calculated
    """
    if len(cash_flows) != len(dates):
        raise InvalidInputError("Cash flows and dates arrays must have same length")
    _validate_flows(cash_flows)

    return find_root(
        lambda r: calculate_xnpv(cash_flows, dates, r),
        lambda r: _xnpv_derivative(cash_flows, dates, r),
        guess,
        RATE_LOWER_BOUND,
        RATE_UPPER_BOUND,
        tolerance=tolerance,
        max_iterations=max_iterations,
        scale=max(abs(cf) for cf in cash_flows),
    )


def calculate_mirr(
    cash_flows: List[float], finance_rate: float, reinvestment_rate: float
) -> float:
    """
    Calculate MIRR (Modified Internal Rate of Return).

    Outflows are discounted to period 0 at the finance rate and inflows
    compounded to the last period at the reinvestment rate:

        MIRR = (FV of inflows / PV of outflows)^(1/n) - 1

    Args:
        cash_flows: Array of periodic cash flows
        finance_rate: Rate paid on outflows, as decimal
        reinvestment_rate: Rate earned on inflows, as decimal

    Returns:
        MIRR per period as decimal
    """
    _validate_flows(cash_flows)
    if finance_rate <= -1 or reinvestment_rate <= -1:
        raise InvalidInputError("Finance and reinvestment rates must be greater than -100%")

    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(len(flows))
    n = len(flows) - 1

    outflows = np.where(flows < 0, -flows, 0.0)
    inflows = np.where(flows > 0, flows, 0.0)
    pv_outflows = float(np.sum(outflows / (1 + finance_rate) ** periods))
    fv_inflows = float(np.sum(inflows * (1 + reinvestment_rate) ** (n - periods)))

    return (fv_inflows / pv_outflows) ** (1 / n) - 1


def calculate_payback_period(
    cash_flows: List[float], discount_rate: float = 0.0
) -> Optional[float]:
    """
    Period at which cumulative cash flow first turns non-negative.

    The crossing period is interpolated linearly. With a discount rate the
    discounted payback period is returned instead.

    Returns:
        Fractional period, or None if the flows never pay back
    """
    cumulative = 0.0
    for period, cf in enumerate(cash_flows):
        value = cf / (1 + discount_rate) ** period
        previous = cumulative
        cumulative += value
        if cumulative >= 0:
            if previous < 0 and value != 0:
                return period - 1 + abs(previous) / value
            return float(period)
    return None


def calculate_multiple(cash_flows: List[float]) -> float:
    """
    Calculate equity multiple.

    Args:
        cash_flows: Array of cash flows (investments are negative)

    Returns:
        Multiple (e.g., 2.0 = 2.0x return)
    """
    total_inflows = sum(cf for cf in cash_flows if cf > 0)
    total_outflows = abs(sum(cf for cf in cash_flows if cf < 0))

    if total_outflows == 0:
        raise InvalidInputError("No investment (outflows) found")

    return total_inflows / total_outflows


def calculate_profit(cash_flows: List[float]) -> float:
    """Calculate profit (total inflows minus total outflows)."""
    return sum(cash_flows)


def analyze_cash_flows(
    cash_flows: List[float],
    finance_rate: Optional[float] = None,
    reinvestment_rate: Optional[float] = None,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> CashFlowAnalysis:
    """
    Full IRR report for a periodic cash flow series.

    Rates are percentages here. MIRR is only reported when both the
    finance and reinvestment rates are given.
    """
    irr = calculate_irr(cash_flows, tolerance=tolerance, max_iterations=max_iterations)

    mirr = None
    if finance_rate is not None and reinvestment_rate is not None:
        mirr = calculate_mirr(cash_flows, finance_rate / 100, reinvestment_rate / 100) * 100

    schedule = []
    cumulative = 0.0
    for period, cf in enumerate(cash_flows):
        cumulative += cf
        schedule.append(
            CashFlowDetail(
                period=period,
                amount=cf,
                discounted_value=cf / (1 + irr) ** period,
                cumulative_cash_flow=cumulative,
            )
        )

    total_investment = abs(sum(cf for cf in cash_flows if cf < 0))
    total_returns = sum(cf for cf in cash_flows if cf > 0)

    return CashFlowAnalysis(
        irr=irr * 100,
        npv_at_zero=calculate_profit(cash_flows),
        total_investment=total_investment,
        total_returns=total_returns,
        profit=total_returns - total_investment,
        multiple=calculate_multiple(cash_flows),
        payback_period=calculate_payback_period(cash_flows),
        mirr=mirr,
        schedule=schedule,
    )


def periodic_to_annual_irr(periodic_irr: float, periods_per_year: int = 12) -> float:
    """Convert a per-period IRR to an annual IRR."""
    return ((1 + periodic_irr) ** periods_per_year) - 1


def annual_to_periodic_irr(annual_irr: float, periods_per_year: int = 12) -> float:
    """Convert an annual IRR to a per-period IRR."""
    return ((1 + annual_irr) ** (1 / periods_per_year)) - 1
