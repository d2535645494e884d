"""
Interest Growth Calculations

Simple interest, compound interest with regular contributions, and the
continuous-compounding variant.

Formula Reference:
    Simple:      I = P * r * t
    Compound:    FV = P(1 + r/n)^(nt) + PMT * [((1 + r/n)^(nt) - 1) / (r/n)] * (1 + r/n if due)
    Continuous:  FV = P e^(rt) + PMT * (e^(rt) - 1) / (e^(r/m) - 1) * (e^(r/m) if due)

A time horizon of zero or less is rejected rather than treated as no growth.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Union

from fincalc.calculations.errors import (
    RESULT_TOO_LARGE,
    DomainError,
    InvalidInputError,
    check_finite,
    raise_if_errors,
)
from fincalc.calculations.frequency import (
    Frequency,
    effective_annual_rate,
    is_continuous,
    periods_per_year,
    to_frequency,
)


@dataclass(frozen=True)
class YearlyBalance:
    """Balance movement over one year; ending_balance chains into the next year."""

    year: int
    starting_balance: float
    contributions: float
    interest: float
    ending_balance: float


@dataclass(frozen=True)
class SimpleInterestYear:
    year: int
    interest_earned: float
    cumulative_interest: float
    end_balance: float


@dataclass(frozen=True)
class SimpleInterestResult:
    principal: float
    total_interest: float
    end_balance: float
    total_years: float
    interest_percentage: float
    schedule: List[SimpleInterestYear]


@dataclass(frozen=True)
class CompoundInterestInput:
    """
    Inputs for compound growth with a level contribution.

    `contribution` is made once per compounding period. For continuous
    compounding it is made `contributions_per_year` times a year instead;
    with discrete compounding `contributions_per_year` may only restate the
    compounding frequency (see investment.calculate_investment otherwise).
    """

    principal: float
    annual_rate: float  # Percent, e.g. 5 for 5%
    years: float
    contribution: float = 0.0
    compounding: Union[str, Frequency] = Frequency.monthly
    payment_at_beginning: bool = False
    contributions_per_year: Optional[int] = None
    inflation_rate: float = 0.0  # Percent


@dataclass(frozen=True)
class GrowthResult:
    end_balance: float
    total_contributions: float  # Principal plus every contribution
    total_interest: float
    effective_annual_rate: float  # Percent
    inflation_adjusted_balance: float
    yearly: List[YearlyBalance] = field(default_factory=list)


def calculate_simple_interest(
    principal: float, annual_rate: float, years: float, months: float = 0
) -> SimpleInterestResult:
    """
    Calculate simple (non-compounding) interest.

    Args:
        principal: Amount borrowed or deposited
        annual_rate: Annual rate as percent
        years: Whole or fractional years
        months: Additional months

    Returns:
        SimpleInterestResult with a yearly schedule; leftover months form
        a final partial year
    """
    total_years = years + months / 12

    errors = []
    if principal < 0:
        errors.append("Principal cannot be negative")
    if annual_rate < 0:
        errors.append("Interest rate cannot be negative")
    if years < 0 or months < 0:
        errors.append("Time cannot be negative")
    elif total_years <= 0:
        errors.append("Time period must be greater than 0")
    raise_if_errors(errors)

    rate = annual_rate / 100
    total_interest = principal * rate * total_years
    end_balance = principal + total_interest

    schedule = []
    cumulative = 0.0
    elapsed = 0.0
    year = 0
    while elapsed < total_years - 1e-12:
        year += 1
        span = min(1.0, total_years - elapsed)
        earned = principal * rate * span
        cumulative += earned
        elapsed += span
        schedule.append(
            SimpleInterestYear(
                year=year,
                interest_earned=earned,
                cumulative_interest=cumulative,
                end_balance=principal + cumulative,
            )
        )

    return SimpleInterestResult(
        principal=principal,
        total_interest=total_interest,
        end_balance=end_balance,
        total_years=total_years,
        interest_percentage=(total_interest / end_balance * 100) if end_balance > 0 else 0.0,
        schedule=schedule,
    )


def annuity_factor(rate_per_period: float, periods: float) -> float:
    """Future value of one unit paid at the end of each period."""
    if rate_per_period == 0:
        return periods
    return ((1 + rate_per_period) ** periods - 1) / rate_per_period


def future_value(
    principal: float,
    rate_per_period: float,
    periods: float,
    payment: float = 0.0,
    payment_at_beginning: bool = False,
) -> float:
    """Closed-form balance after `periods` periods of growth and contributions."""
    growth = (1 + rate_per_period) ** periods
    contributions = payment * annuity_factor(rate_per_period, periods)
    if payment_at_beginning:
        contributions *= 1 + rate_per_period
    return principal * growth + contributions


def _continuous_future_value(
    principal: float,
    annual_rate: float,
    years: float,
    payment: float,
    per_year: int,
    payment_at_beginning: bool,
) -> float:
    if annual_rate == 0:
        return principal + payment * per_year * years

    step = math.exp(annual_rate / per_year)
    contributions = payment * (math.exp(annual_rate * years) - 1) / (step - 1)
    if payment_at_beginning:
        contributions *= step
    return principal * math.exp(annual_rate * years) + contributions


def _validate_growth(
    principal: float, annual_rate: float, years: float, contribution: float, inflation_rate: float
) -> None:
    errors = []
    if principal < 0:
        errors.append("Initial investment cannot be negative")
    if contribution < 0:
        errors.append("Contribution cannot be negative")
    if annual_rate <= -100:
        errors.append("Interest rate must be greater than -100%")
    if years <= 0:
        errors.append("Time period must be greater than 0")
    if inflation_rate <= -100:
        errors.append("Inflation rate must be greater than -100%")
    raise_if_errors(errors)


def _yearly_breakdown(years: float, balance_at, contributed_by) -> List[YearlyBalance]:
    """Build chained yearly rows from balance and contribution functions of time."""
    rows = []
    previous_t = 0.0
    previous_balance = balance_at(0.0)
    for year in range(1, math.ceil(years - 1e-12) + 1):
        t = min(float(year), years)
        balance = balance_at(t)
        contributions = contributed_by(t) - contributed_by(previous_t)
        rows.append(
            YearlyBalance(
                year=year,
                starting_balance=previous_balance,
                contributions=contributions,
                interest=balance - previous_balance - contributions,
                ending_balance=balance,
            )
        )
        previous_t, previous_balance = t, balance
    return rows


def calculate_continuous_compounding(
    principal: float,
    annual_rate: float,
    years: float,
    contribution: float = 0.0,
    contributions_per_year: int = 12,
    payment_at_beginning: bool = False,
    inflation_rate: float = 0.0,
) -> GrowthResult:
    """
    Calculate growth under continuous compounding.

    Args:
        principal: Starting balance
        annual_rate: Annual rate as percent
        years: Time horizon in years
        contribution: Amount added each contribution period
        contributions_per_year: Contribution frequency (m)
        payment_at_beginning: Contributions at the start of each period

    Returns:
        GrowthResult
    """
    _validate_growth(principal, annual_rate, years, contribution, inflation_rate)
    if contributions_per_year <= 0:
        raise_if_errors(["Contributions per year must be greater than 0"])

    r = annual_rate / 100

    def balance_at(t: float) -> float:
        return _continuous_future_value(
            principal, r, t, contribution, contributions_per_year, payment_at_beginning
        )

    def contributed_by(t: float) -> float:
        return contribution * contributions_per_year * t

    return _growth_result(
        principal,
        years,
        balance_at,
        contributed_by,
        effective_annual_rate(r, Frequency.continuously),
        inflation_rate,
    )


def calculate_compound_interest(inputs: CompoundInterestInput) -> GrowthResult:
    """
    Calculate compound growth with a level contribution each period.

    At a zero rate the annuity term degenerates to contribution * count.
    """
    compounding = to_frequency(inputs.compounding)

    if is_continuous(compounding):
        return calculate_continuous_compounding(
            principal=inputs.principal,
            annual_rate=inputs.annual_rate,
            years=inputs.years,
            contribution=inputs.contribution,
            contributions_per_year=inputs.contributions_per_year or 12,
            payment_at_beginning=inputs.payment_at_beginning,
            inflation_rate=inputs.inflation_rate,
        )

    _validate_growth(
        inputs.principal,
        inputs.annual_rate,
        inputs.years,
        inputs.contribution,
        inputs.inflation_rate,
    )

    r = inputs.annual_rate / 100
    n = periods_per_year(compounding)
    if inputs.contributions_per_year not in (None, n):
        raise InvalidInputError(
            "Contribution frequency must match the compounding frequency; "
            "use the investment calculator for a separate contribution schedule"
        )
    rate_per_period = r / n

    def balance_at(t: float) -> float:
        return future_value(
            inputs.principal,
            rate_per_period,
            n * t,
            inputs.contribution,
            inputs.payment_at_beginning,
        )

    def contributed_by(t: float) -> float:
        return inputs.contribution * (n * t)

    return _growth_result(
        inputs.principal,
        inputs.years,
        balance_at,
        contributed_by,
        effective_annual_rate(r, compounding),
        inputs.inflation_rate,
    )


def _growth_result(
    principal, years, balance_at, contributed_by, annual_yield, inflation_rate
) -> GrowthResult:
    try:
        end_balance = balance_at(years)
        inflation_factor = (1 + inflation_rate / 100) ** years
        yearly = _yearly_breakdown(years, balance_at, contributed_by)
    except OverflowError:
        raise DomainError(RESULT_TOO_LARGE) from None
    check_finite(end_balance, inflation_factor)
    total_contributions = principal + contributed_by(years)

    return GrowthResult(
        end_balance=end_balance,
        total_contributions=total_contributions,
        total_interest=end_balance - total_contributions,
        effective_annual_rate=annual_yield * 100,
        inflation_adjusted_balance=end_balance / inflation_factor,
        yearly=yearly,
    )
