"""
Time Value of Money Solver

Solves the standard five-variable TVM equation for whichever of
N, I/Y, PV, PMT or FV is unknown:

    PV * (1 + i)^N + PMT * (1 + i*b) * [((1 + i)^N - 1) / i] + FV = 0

where i is the effective rate per payment period and b is 1 for payments
at the beginning of each period, 0 otherwise. Cash flows are signed:
money paid out is negative, money received is positive.

PV, PMT and FV have closed forms, N has a logarithmic closed form, and
I/Y is found numerically (Newton-Raphson with a bisection fallback).
"""

import enum
import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Union

from fincalc.calculations.amortization import (
    AmortizationRow,
    generate_amortization_schedule,
)
from fincalc.calculations.errors import (
    RESULT_TOO_LARGE,
    DomainError,
    InvalidInputError,
    check_finite,
    raise_if_errors,
)
from fincalc.calculations.frequency import PERIODS_PER_YEAR
from fincalc.calculations.solvers import MAX_ITERATIONS, TOLERANCE, find_root

logger = logging.getLogger(__name__)

# Per-period rate search interval for I/Y
RATE_LOWER_BOUND = -0.99
RATE_UPPER_BOUND = 10.0

# Below this magnitude the annuity factor uses its series expansion
SMALL_RATE = 1e-10


class SolveFor(str, enum.Enum):
    n = "N"
    iy = "IY"
    pv = "PV"
    pmt = "PMT"
    fv = "FV"


@dataclass(frozen=True)
class TVMInput:
    """
    One TVM problem. The field named by `solve_for` is ignored.

    iy is the nominal annual rate in percent, compounded cy times a year.
    py is the number of payments per year.
    """

    solve_for: Union[str, SolveFor]
    n: float = 0.0
    iy: float = 0.0
    pv: float = 0.0
    pmt: float = 0.0
    fv: float = 0.0
    py: int = 1
    cy: int = 1
    payment_at_beginning: bool = False


@dataclass(frozen=True)
class TVMResult:
    n: float
    iy: float
    pv: float
    pmt: float
    fv: float
    py: int
    cy: int
    payment_at_beginning: bool
    periodic_rate: float  # Effective rate per payment period, decimal


def effective_rate(iy: float, py: int, cy: int) -> float:
    """
    Effective interest rate per payment period.

    Args:
        iy: Nominal annual rate as percent
        py: Payments per year
        cy: Compounding periods per year

    Returns:
        (IY/100)/PY when PY == CY, otherwise (1 + (IY/100)/CY)^(CY/PY) - 1
    """
    if py == cy:
        return iy / 100 / py
    return (1 + iy / 100 / cy) ** (cy / py) - 1


def nominal_rate(periodic_rate: float, py: int, cy: int) -> float:
    """Inverse of effective_rate: the nominal annual rate in percent."""
    if py == cy:
        return periodic_rate * py * 100
    compounding_rate = (1 + periodic_rate) ** (py / cy) - 1
    return compounding_rate * cy * 100


def _annuity_factor(i: float, n: float) -> float:
    """((1 + i)^n - 1) / i, continuous through i = 0."""
    if abs(i) < SMALL_RATE:
        return n + n * (n - 1) / 2 * i
    return ((1 + i) ** n - 1) / i


def _annuity_factor_derivative(i: float, n: float) -> float:
    if abs(i) < SMALL_RATE:
        return n * (n - 1) / 2
    growth = (1 + i) ** n
    return (n * (1 + i) ** (n - 1) * i - (growth - 1)) / (i * i)


def _validate(inputs: TVMInput, solve_for: SolveFor) -> None:
    errors = []
    if inputs.py <= 0 or inputs.cy <= 0:
        errors.append("Payments and compounding periods per year must be greater than 0")
    if solve_for is not SolveFor.n and inputs.n < 0:
        errors.append("Number of periods cannot be negative")
    if solve_for is not SolveFor.iy and inputs.cy > 0 and inputs.iy / 100 / inputs.cy <= -1:
        errors.append("Interest rate must be greater than -100% per compounding period")
    raise_if_errors(errors)


def _solve_fv(i: float, n: float, pv: float, pmt: float, b: int) -> float:
    growth = (1 + i) ** n
    return -(pv * growth + pmt * (1 + i * b) * _annuity_factor(i, n))


def _solve_pv(i: float, n: float, pmt: float, fv: float, b: int) -> float:
    growth = (1 + i) ** n
    return -(fv + pmt * (1 + i * b) * _annuity_factor(i, n)) / growth


def _solve_pmt(i: float, n: float, pv: float, fv: float, b: int) -> float:
    if n == 0:
        raise InvalidInputError("Number of periods must be greater than 0 to solve for payment")
    growth = (1 + i) ** n
    return -(pv * growth + fv) / ((1 + i * b) * _annuity_factor(i, n))


def _solve_n(i: float, pv: float, pmt: float, fv: float, b: int) -> float:
    if i == 0:
        if pmt == 0:
            raise DomainError("Payment cannot be 0 when the interest rate is 0")
        n = -(pv + fv) / pmt
    else:
        adjusted_pmt = pmt * (1 + i * b)
        numerator = adjusted_pmt - fv * i
        denominator = adjusted_pmt + pv * i
        if denominator == 0 or numerator / denominator <= 0:
            raise DomainError("No number of periods satisfies these values")
        n = math.log(numerator / denominator) / math.log(1 + i)

    if n < 0:
        raise DomainError("No number of periods satisfies these values")
    return n


def _solve_iy(
    inputs: TVMInput, tolerance: float, max_iterations: int
) -> float:
    n, pv, pmt, fv = inputs.n, inputs.pv, inputs.pmt, inputs.fv
    b = 1 if inputs.payment_at_beginning else 0

    if n <= 0:
        raise InvalidInputError("Number of periods must be greater than 0 to solve for interest rate")

    flows = (pv, pmt, fv)
    if all(v >= 0 for v in flows) or all(v <= 0 for v in flows):
        raise DomainError(
            "Cash flows must include both money paid out and money received"
        )

    scale = max(abs(pv), abs(pmt) * n, abs(fv), 1.0)
    if abs(pv + pmt * n + fv) <= tolerance * scale:
        return 0.0

    def residual(i: float) -> float:
        return pv * (1 + i) ** n + pmt * (1 + i * b) * _annuity_factor(i, n) + fv

    def derivative(i: float) -> float:
        return pv * n * (1 + i) ** (n - 1) + pmt * (
            b * _annuity_factor(i, n) + (1 + i * b) * _annuity_factor_derivative(i, n)
        )

    guess = 0.1 / inputs.py
    if pmt == 0 and pv != 0 and -fv / pv > 0:
        guess = (-fv / pv) ** (1 / n) - 1

    periodic_rate = find_root(
        residual,
        derivative,
        guess,
        RATE_LOWER_BOUND,
        RATE_UPPER_BOUND,
        tolerance=tolerance,
        max_iterations=max_iterations,
        scale=scale,
    )
    return nominal_rate(periodic_rate, inputs.py, inputs.cy)


def solve(
    inputs: TVMInput,
    tolerance: float = TOLERANCE,
    max_iterations: int = MAX_ITERATIONS,
) -> TVMResult:
    """
    Solve for the unknown TVM variable.

    Args:
        inputs: The four known values and the variable to solve for
        tolerance: Relative residual tolerance for the I/Y solver
        max_iterations: Newton iteration cap for the I/Y solver

    Returns:
        TVMResult with all five values filled in

    Raises:
        InvalidInputError: Malformed inputs (e.g., zero periods for PMT)
        DomainError: No finite answer exists (e.g., N with a negative log,
            or a result too large to represent)
        ConvergenceError: I/Y could not be solved
    """
    try:
        solve_for = SolveFor(inputs.solve_for)
    except ValueError:
        raise InvalidInputError(f"Unknown variable to solve for: {inputs.solve_for}") from None

    _validate(inputs, solve_for)

    b = 1 if inputs.payment_at_beginning else 0
    values = {
        "n": inputs.n,
        "iy": inputs.iy,
        "pv": inputs.pv,
        "pmt": inputs.pmt,
        "fv": inputs.fv,
    }

    try:
        if solve_for is SolveFor.iy:
            values["iy"] = _solve_iy(inputs, tolerance, max_iterations)

        i = effective_rate(values["iy"], inputs.py, inputs.cy)

        if solve_for is SolveFor.n:
            values["n"] = _solve_n(i, inputs.pv, inputs.pmt, inputs.fv, b)
        elif solve_for is SolveFor.pv:
            values["pv"] = _solve_pv(i, inputs.n, inputs.pmt, inputs.fv, b)
        elif solve_for is SolveFor.pmt:
            values["pmt"] = _solve_pmt(i, inputs.n, inputs.pv, inputs.fv, b)
        elif solve_for is SolveFor.fv:
            values["fv"] = _solve_fv(i, inputs.n, inputs.pv, inputs.pmt, b)
    except OverflowError:
        raise DomainError(RESULT_TOO_LARGE) from None
    check_finite(i, *values.values())

    logger.debug("Solved TVM for %s: %s", solve_for.value, values[solve_for.name])

    return TVMResult(
        py=inputs.py,
        cy=inputs.cy,
        payment_at_beginning=inputs.payment_at_beginning,
        periodic_rate=i,
        **values,
    )


def amortization_from_tvm(
    result: TVMResult, start_date: Optional[date] = None
) -> List[AmortizationRow]:
    """
    Amortize a solved TVM problem as a loan of |PV| repaid by |PMT|.

    A partial final period is rounded up to a whole payment. Dates are
    only attached when the payment count per year is a named frequency.
    """
    if result.pv == 0 or result.pmt == 0 or result.n <= 0:
        raise InvalidInputError(
            "Present value, payment and number of periods are required for a schedule"
        )

    frequency = next(
        (f for f, per_year in PERIODS_PER_YEAR.items() if per_year == result.py),
        None,
    )

    return generate_amortization_schedule(
        principal=abs(result.pv),
        periodic_rate=result.periodic_rate,
        period_count=math.ceil(result.n - 1e-9),
        payment=abs(result.pmt),
        payment_at_beginning=result.payment_at_beginning,
        start_date=start_date if frequency is not None else None,
        frequency=frequency or "monthly",
    )
