"""
Financial Calculation Engine

Independent, deterministic calculators. Each takes a typed input record
and returns a frozen result dataclass, or raises a CalculationError.
Rate-type calculations are designed to match Excel formula behavior.
"""

from fincalc.calculations import (
    amortization,
    annuity,
    auto_lease,
    cash_back,
    discount,
    growth,
    investment,
    irr,
    margin,
    marriage_tax,
    roi,
    tvm,
)
from fincalc.calculations.errors import (
    CalculationError,
    ConvergenceError,
    DomainError,
    InvalidInputError,
)

__all__ = [
    "amortization",
    "annuity",
    "auto_lease",
    "cash_back",
    "discount",
    "growth",
    "investment",
    "irr",
    "margin",
    "marriage_tax",
    "roi",
    "tvm",
    "CalculationError",
    "ConvergenceError",
    "DomainError",
    "InvalidInputError",
]
