"""
Loan Amortization Calculations

Implements level-payment and amortization schedule calculations,
matching Excel's PMT, IPMT, and PPMT functions for a periodic rate.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Union

from fincalc.calculations.errors import InvalidInputError, raise_if_errors
from fincalc.calculations.frequency import Frequency, period_dates


@dataclass(frozen=True)
class AmortizationRow:
    """One payment period of an amortization schedule."""

    period: int
    payment: float
    principal: float
    interest: float
    balance: float
    payment_date: Optional[date] = None


@dataclass(frozen=True)
class YearlyAmortization:
    """Amortization rows aggregated by year."""

    year: int
    beginning_balance: float
    payment: float
    interest: float
    principal: float
    ending_balance: float


def calculate_payment(
    principal: float, periodic_rate: float, period_count: int
) -> float:
    """
    Calculate the level payment that retires a loan.

    Matches Excel's PMT() function (sign flipped, payment is returned with
    the sign of the principal).

    Args:
        principal: Loan principal amount; negative values are allowed and
            give a negative payment
        periodic_rate: Interest rate per period as decimal (e.g., 0.005)
        period_count: Number of payment periods

    Returns:
        Payment per period

    Raises:
        InvalidInputError: If period_count is not positive
    """
    if period_count <= 0:
        raise InvalidInputError("Number of periods must be greater than 0")
    if periodic_rate <= -1:
        raise InvalidInputError("Periodic rate must be greater than -100%")

    if periodic_rate == 0:
        return principal / period_count

    growth = (1 + periodic_rate) ** period_count
    return principal * periodic_rate * growth / (growth - 1)


def calculate_remaining_balance(
    principal: float,
    periodic_rate: float,
    period_count: int,
    payments_completed: int,
) -> float:
    """Calculate remaining loan balance after N payments."""
    payment = calculate_payment(principal, periodic_rate, period_count)

    if periodic_rate == 0:
        return max(0.0, principal - payment * payments_completed)

    growth = (1 + periodic_rate) ** payments_completed
    balance = principal * growth - payment * (growth - 1) / periodic_rate

    return max(0.0, balance)


def generate_amortization_schedule(
    principal: float,
    periodic_rate: float,
    period_count: int,
    payment: Optional[float] = None,
    payment_at_beginning: bool = False,
    start_date: Optional[date] = None,
    frequency: Union[str, Frequency] = Frequency.monthly,
) -> List[AmortizationRow]:
    """
    Generate a full amortization schedule.

    The final period pays off whatever balance remains, so the schedule
    always closes at exactly zero. If a supplied payment retires the loan
    early, the schedule stops at that period.

    Args:
        principal: Loan principal amount
        periodic_rate: Interest rate per period as decimal
        period_count: Number of payment periods
        payment: Payment per period (defaults to the level payment)
        payment_at_beginning: Payments at the start of each period
            (annuity due); the first payment is then all principal
        start_date: Date of first payment, enables per-row dates
        frequency: Payment frequency used to step the dates

    Returns:
        List of amortization rows
    """
    errors = []
    if principal < 0:
        errors.append("Principal cannot be negative")
    if period_count <= 0:
        errors.append("Number of periods must be greater than 0")
    if periodic_rate <= -1:
        errors.append("Periodic rate must be greater than -100%")
    raise_if_errors(errors)

    if payment is None:
        payment = calculate_payment(principal, periodic_rate, period_count)
        if payment_at_beginning:
            payment /= 1 + periodic_rate

    dates = (
        period_dates(start_date, period_count, frequency)
        if start_date is not None
        else [None] * period_count
    )

    schedule = []
    balance = principal

    for period in range(1, period_count + 1):
        # An annuity-due payment lands before any interest accrues
        if payment_at_beginning and period == 1:
            interest = 0.0
        else:
            interest = balance * periodic_rate

        principal_pmt = payment - interest
        if period == period_count or principal_pmt > balance:
            principal_pmt = balance
        period_payment = principal_pmt + interest

        balance -= principal_pmt

        schedule.append(
            AmortizationRow(
                period=period,
                payment=period_payment,
                principal=principal_pmt,
                interest=interest,
                balance=max(0.0, balance),
                payment_date=dates[period - 1],
            )
        )

        # Stop if balance is paid off
        if balance <= 0:
            break

    return schedule


def calculate_total_interest(schedule: List[AmortizationRow]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(row.interest for row in schedule)


def calculate_total_principal(schedule: List[AmortizationRow]) -> float:
    return sum(row.principal for row in schedule)


def summarize_yearly(
    schedule: List[AmortizationRow], periods_per_year: int
) -> List[YearlyAmortization]:
    """Aggregate a schedule into calendar-agnostic years of payments."""
    if periods_per_year <= 0:
        raise InvalidInputError("Periods per year must be greater than 0")

    years = []
    for start in range(0, len(schedule), periods_per_year):
        rows = schedule[start:start + periods_per_year]
        first = rows[0]
        years.append(
            YearlyAmortization(
                year=start // periods_per_year + 1,
                beginning_balance=first.balance + first.principal,
                payment=sum(r.payment for r in rows),
                interest=sum(r.interest for r in rows),
                principal=sum(r.principal for r in rows),
                ending_balance=rows[-1].balance,
            )
        )
    return years
