"""
Investment Growth with Independent Contribution and Compounding Frequencies

When contributions arrive on a different schedule from compounding (say,
biweekly deposits into a monthly-compounding account), a single annuity
formula is wrong. Each contribution is compounded individually from the
moment it is made to the horizon:

    FV = P * g(T) + sum_k PMT * g(T - t_k)

with g(t) = (1 + r/n)^(n*t) for discrete compounding (fractional
exponents allowed) and g(t) = e^(r*t) for continuous compounding.
Contribution k is made at t_k = k/m (end of period) or (k-1)/m
(beginning of period), where m is the contribution frequency.
"""

import math
from dataclasses import dataclass, field
from typing import List, Union

import numpy as np

from fincalc.calculations.errors import check_finite, raise_if_errors
from fincalc.calculations.frequency import (
    Frequency,
    is_continuous,
    periods_per_year,
    to_frequency,
)
from fincalc.calculations.growth import YearlyBalance

# Contributions dated within this many years of a boundary count as on it
TIME_EPSILON = 1e-9


@dataclass(frozen=True)
class InvestmentInput:
    starting_amount: float
    contribution: float
    years: float
    annual_rate: float  # Percent
    contribution_frequency: Union[str, Frequency] = Frequency.monthly
    compounding: Union[str, Frequency] = Frequency.annually
    payment_at_beginning: bool = False


@dataclass(frozen=True)
class InvestmentResult:
    end_balance: float
    total_contributions: float  # Starting amount plus every contribution
    total_interest: float
    yearly: List[YearlyBalance] = field(default_factory=list)


def validate_investment_inputs(inputs: InvestmentInput) -> List[str]:
    errors = []
    if inputs.starting_amount < 0:
        errors.append("Starting amount cannot be negative")
    if inputs.contribution < 0:
        errors.append("Additional contribution cannot be negative")
    if inputs.years <= 0:
        errors.append("Investment length must be greater than 0")
    if inputs.annual_rate <= -100:
        errors.append("Return rate must be greater than -100%")
    if is_continuous(inputs.contribution_frequency):
        errors.append("Contributions must be made on a discrete schedule")
    return errors


class _Growth:
    """Growth of one unit over an elapsed time, for scalars or arrays."""

    def __init__(self, annual_rate: float, compounding: Frequency):
        self.continuous = is_continuous(compounding)
        self.rate = annual_rate
        self.n = None if self.continuous else periods_per_year(compounding)

    def __call__(self, elapsed):
        if self.continuous:
            return np.exp(self.rate * np.asarray(elapsed, dtype=float))
        return np.power(1 + self.rate / self.n, self.n * np.asarray(elapsed, dtype=float))


def contribution_times(
    count: int, per_year: int, payment_at_beginning: bool
) -> np.ndarray:
    """Times, in years from the start, at which each contribution is made."""
    k = np.arange(1, count + 1, dtype=float)
    if payment_at_beginning:
        k -= 1
    return k / per_year


def calculate_investment(inputs: InvestmentInput) -> InvestmentResult:
    """
    Calculate the future value of a starting amount plus regular contributions.

    Returns:
        InvestmentResult with a year-by-year breakdown whose ending balances
        chain exactly and whose last row matches end_balance
    """
    raise_if_errors(validate_investment_inputs(inputs))

    growth = _Growth(inputs.annual_rate / 100, to_frequency(inputs.compounding))
    per_year = periods_per_year(inputs.contribution_frequency)
    count = int(math.floor(per_year * inputs.years + TIME_EPSILON))
    times = contribution_times(count, per_year, inputs.payment_at_beginning)

    def made_by(t: float) -> np.ndarray:
        # A beginning-of-period deposit dated exactly at t opens the next
        # period, so it is not yet part of the balance at t
        if inputs.payment_at_beginning:
            return times < t - TIME_EPSILON
        return times <= t + TIME_EPSILON

    def balance_at(t: float) -> float:
        mask = made_by(t)
        contributions = inputs.contribution * float(np.sum(growth(t - times[mask])))
        return inputs.starting_amount * float(growth(t)) + contributions

    def contributed_by(t: float) -> float:
        return inputs.contribution * int(np.count_nonzero(made_by(t)))

    with np.errstate(over="ignore", invalid="ignore"):
        end_balance = balance_at(inputs.years)
    check_finite(end_balance)
    total_contributions = inputs.starting_amount + inputs.contribution * count

    yearly = []
    previous_t = 0.0
    previous_balance = inputs.starting_amount
    for year in range(1, math.ceil(inputs.years - TIME_EPSILON) + 1):
        t = min(float(year), inputs.years)
        balance = end_balance if t == inputs.years else balance_at(t)
        added = contributed_by(t) - contributed_by(previous_t)
        yearly.append(
            YearlyBalance(
                year=year,
                starting_balance=previous_balance,
                contributions=added,
                interest=balance - previous_balance - added,
                ending_balance=balance,
            )
        )
        previous_t, previous_balance = t, balance

    return InvestmentResult(
        end_balance=end_balance,
        total_contributions=total_contributions,
        total_interest=end_balance - total_contributions,
        yearly=yearly,
    )
