"""
Annuity Calculations

Accumulation phase: a starting principal plus monthly and annual
additions, compounded monthly.

Payout phase: either the level payout that exhausts a principal over a
fixed length, or how long a fixed payout lasts.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Union

from fincalc.calculations.amortization import (
    YearlyAmortization,
    calculate_payment,
    generate_amortization_schedule,
    summarize_yearly,
)
from fincalc.calculations.errors import raise_if_errors
from fincalc.calculations.frequency import Frequency, periods_per_year
from fincalc.calculations.growth import YearlyBalance


@dataclass(frozen=True)
class AnnuityAccumulationInput:
    starting_principal: float
    annual_rate: float  # Percent
    years: float
    monthly_addition: float = 0.0
    annual_addition: float = 0.0
    payment_at_beginning: bool = False


@dataclass(frozen=True)
class AnnuityMonth:
    month: int
    addition: float
    interest: float
    balance: float


@dataclass(frozen=True)
class AnnuityAccumulationResult:
    end_balance: float
    starting_principal: float
    total_additions: float
    total_interest: float
    monthly: List[AnnuityMonth] = field(default_factory=list)
    yearly: List[YearlyBalance] = field(default_factory=list)


@dataclass(frozen=True)
class AnnuityPayoutResult:
    payout_amount: float
    total_payments: int
    total_payout: float
    total_interest: float
    schedule: List[YearlyAmortization] = field(default_factory=list)


@dataclass(frozen=True)
class PayoutDurationResult:
    """
    How long a fixed payout lasts.

    When the payout does not exceed the interest earned each period the
    principal is never exhausted: depletes is False and the count fields
    are None.
    """

    payout_amount: float
    depletes: bool
    will_grow: bool
    total_payments: Optional[int] = None
    years: Optional[float] = None
    total_payout: Optional[float] = None
    total_interest: Optional[float] = None


def calculate_annuity_accumulation(
    inputs: AnnuityAccumulationInput,
) -> AnnuityAccumulationResult:
    """
    Grow an annuity month by month.

    With beginning timing, additions land before the month's interest is
    credited (monthly additions every month, the annual addition in the
    first month of each year). With end timing they land after it (the
    annual addition in the last month of each year).
    """
    errors = []
    if inputs.starting_principal < 0:
        errors.append("Starting principal cannot be negative")
    if inputs.monthly_addition < 0 or inputs.annual_addition < 0:
        errors.append("Additions cannot be negative")
    if inputs.annual_rate <= -100:
        errors.append("Growth rate must be greater than -100%")
    total_months = round(inputs.years * 12)
    if inputs.years <= 0:
        errors.append("Years must be greater than 0")
    elif total_months == 0:
        errors.append("Accumulation period must be at least one month")
    raise_if_errors(errors)

    monthly_rate = inputs.annual_rate / 100 / 12

    balance = inputs.starting_principal
    total_additions = 0.0
    months = []

    for month in range(1, total_months + 1):
        addition = inputs.monthly_addition
        if inputs.payment_at_beginning:
            if (month - 1) % 12 == 0:
                addition += inputs.annual_addition
            balance += addition
            interest = balance * monthly_rate
            balance += interest
        else:
            if month % 12 == 0:
                addition += inputs.annual_addition
            interest = balance * monthly_rate
            balance += interest + addition

        total_additions += addition
        months.append(
            AnnuityMonth(month=month, addition=addition, interest=interest, balance=balance)
        )

    yearly = []
    starting = inputs.starting_principal
    for start in range(0, len(months), 12):
        rows = months[start:start + 12]
        added = sum(r.addition for r in rows)
        yearly.append(
            YearlyBalance(
                year=start // 12 + 1,
                starting_balance=starting,
                contributions=added,
                interest=sum(r.interest for r in rows),
                ending_balance=rows[-1].balance,
            )
        )
        starting = rows[-1].balance

    return AnnuityAccumulationResult(
        end_balance=balance,
        starting_principal=inputs.starting_principal,
        total_additions=total_additions,
        total_interest=balance - inputs.starting_principal - total_additions,
        monthly=months,
        yearly=yearly,
    )


def _validate_payout(principal: float, annual_rate: float) -> List[str]:
    errors = []
    if principal <= 0:
        errors.append("Starting principal must be greater than 0")
    if annual_rate < 0:
        errors.append("Interest rate cannot be negative")
    return errors


def calculate_annuity_payout(
    principal: float,
    annual_rate: float,
    years: float,
    frequency: Union[str, Frequency] = Frequency.monthly,
) -> AnnuityPayoutResult:
    """
    Level payout that exhausts the principal over a fixed length.

    Args:
        principal: Starting principal
        annual_rate: Annual rate as percent, compounded at the payout frequency
        years: Payout length in years
        frequency: Payout frequency
    """
    errors = _validate_payout(principal, annual_rate)
    if years <= 0:
        errors.append("Years must be greater than 0")
    raise_if_errors(errors)

    per_year = periods_per_year(frequency)
    total_payments = round(years * per_year)
    periodic_rate = annual_rate / 100 / per_year

    payout = calculate_payment(principal, periodic_rate, total_payments)
    schedule = generate_amortization_schedule(principal, periodic_rate, total_payments)
    total_payout = payout * total_payments

    return AnnuityPayoutResult(
        payout_amount=payout,
        total_payments=total_payments,
        total_payout=total_payout,
        total_interest=total_payout - principal,
        schedule=summarize_yearly(schedule, per_year),
    )


def calculate_payout_duration(
    principal: float,
    annual_rate: float,
    payout_amount: float,
    frequency: Union[str, Frequency] = Frequency.monthly,
) -> PayoutDurationResult:
    """
    How many payouts of a fixed amount the principal supports.

    The last payout is partial; total_payout sums what is actually paid.
    """
    errors = _validate_payout(principal, annual_rate)
    if payout_amount <= 0:
        errors.append("Payout amount must be greater than 0")
    raise_if_errors(errors)

    per_year = periods_per_year(frequency)
    periodic_rate = annual_rate / 100 / per_year
    first_interest = principal * periodic_rate

    if payout_amount <= first_interest:
        return PayoutDurationResult(
            payout_amount=payout_amount,
            depletes=False,
            will_grow=payout_amount < first_interest,
        )

    if periodic_rate == 0:
        exact_payments = principal / payout_amount
    else:
        exact_payments = math.log(
            payout_amount / (payout_amount - first_interest)
        ) / math.log(1 + periodic_rate)

    total_payments = math.ceil(exact_payments - 1e-9)
    schedule = generate_amortization_schedule(
        principal, periodic_rate, total_payments, payment=payout_amount
    )
    total_payout = sum(row.payment for row in schedule)

    return PayoutDurationResult(
        payout_amount=payout_amount,
        depletes=True,
        will_grow=False,
        total_payments=total_payments,
        years=exact_payments / per_year,
        total_payout=total_payout,
        total_interest=total_payout - principal,
    )
