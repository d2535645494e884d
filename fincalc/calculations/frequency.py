"""
Payment and Compounding Frequencies

Maps named frequencies to periods per year and computes growth factors.
Continuous compounding has no period count and is routed to e^(rt).
"""

import enum
import math
from datetime import date
from typing import List, Union

from dateutil.relativedelta import relativedelta

from fincalc.calculations.errors import InvalidInputError


class Frequency(str, enum.Enum):
    """Named payment / compounding frequency."""

    daily = "daily"
    weekly = "weekly"
    biweekly = "biweekly"
    semimonthly = "semimonthly"
    monthly = "monthly"
    quarterly = "quarterly"
    semiannually = "semiannually"
    annually = "annually"
    continuously = "continuously"


PERIODS_PER_YEAR = {
    Frequency.daily: 365,
    Frequency.weekly: 52,
    Frequency.biweekly: 26,
    Frequency.semimonthly: 24,
    Frequency.monthly: 12,
    Frequency.quarterly: 4,
    Frequency.semiannually: 2,
    Frequency.annually: 1,
}

# Calendar step between consecutive periods, used for schedule dates
_PERIOD_STEP = {
    Frequency.daily: relativedelta(days=1),
    Frequency.weekly: relativedelta(weeks=1),
    Frequency.biweekly: relativedelta(weeks=2),
    Frequency.monthly: relativedelta(months=1),
    Frequency.quarterly: relativedelta(months=3),
    Frequency.semiannually: relativedelta(months=6),
    Frequency.annually: relativedelta(years=1),
}


def to_frequency(value: Union[str, Frequency]) -> Frequency:
    """Coerce a tag such as 'monthly' into a Frequency."""
    try:
        return Frequency(value)
    except ValueError:
        raise InvalidInputError(f"Unknown frequency: {value}") from None


def is_continuous(frequency: Union[str, Frequency]) -> bool:
    return to_frequency(frequency) is Frequency.continuously


def periods_per_year(frequency: Union[str, Frequency]) -> int:
    """
    Number of periods per year for a discrete frequency.

    Raises:
        InvalidInputError: for continuous compounding, which has no period
            count and must use the exponential formula instead.
    """
    frequency = to_frequency(frequency)
    if frequency is Frequency.continuously:
        raise InvalidInputError("Continuous compounding has no periods per year")
    return PERIODS_PER_YEAR[frequency]


def growth_factor(
    annual_rate: float, years: float, compounding: Union[str, Frequency]
) -> float:
    """
    Growth of one unit over `years` at a nominal annual rate.

    Args:
        annual_rate: Nominal annual rate as decimal (e.g., 0.05 for 5%)
        years: Elapsed time in years, may be fractional
        compounding: Compounding frequency

    Returns:
        (1 + r/n)^(n*t) for discrete compounding, e^(r*t) for continuous
    """
    if is_continuous(compounding):
        return math.exp(annual_rate * years)
    n = periods_per_year(compounding)
    return (1 + annual_rate / n) ** (n * years)


def effective_annual_rate(annual_rate: float, compounding: Union[str, Frequency]) -> float:
    """Effective annual yield (APY) of a nominal rate, as decimal."""
    return growth_factor(annual_rate, 1.0, compounding) - 1


def period_dates(
    start_date: date, count: int, frequency: Union[str, Frequency]
) -> List[date]:
    """Generate `count` period dates beginning with `start_date`."""
    frequency = to_frequency(frequency)
    if frequency is Frequency.continuously:
        raise InvalidInputError("Continuous compounding has no period dates")

    if frequency is Frequency.semimonthly:
        # 1st and 16th style: two dates per calendar month
        return [
            start_date + relativedelta(months=k // 2, days=15 * (k % 2))
            for k in range(count)
        ]

    step = _PERIOD_STEP[frequency]
    return [start_date + step * k for k in range(count)]
