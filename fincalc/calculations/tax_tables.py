"""
Federal Income Tax Tables

Static, versioned tax parameters keyed by tax year. Calculations look up
a TaxTables instance instead of hard-coding thresholds, so a new year is
added here without touching the tax logic.
"""

import enum
import math
from dataclasses import dataclass
from typing import Dict, Tuple

from fincalc.calculations.errors import InvalidInputError


class FilingStatus(str, enum.Enum):
    single = "single"
    married_filing_jointly = "married_filing_jointly"
    head_of_household = "head_of_household"


@dataclass(frozen=True)
class Bracket:
    """Income up to `upper` (from the previous bracket's upper) is taxed at `rate`."""

    upper: float
    rate: float


Brackets = Tuple[Bracket, ...]


@dataclass(frozen=True)
class TaxTables:
    year: int
    ordinary_brackets: Dict[FilingStatus, Brackets]
    capital_gains_brackets: Dict[FilingStatus, Brackets]
    standard_deduction: Dict[FilingStatus, float]
    child_tax_credit: float
    child_tax_credit_phaseout: Dict[FilingStatus, float]
    salt_cap: float
    retirement_401k_limit: float
    # Credit shrinks by phaseout_reduction per full phaseout_step over the threshold
    phaseout_step: float = 1000
    phaseout_reduction: float = 50


def _brackets(*pairs) -> Brackets:
    return tuple(Bracket(upper, rate) for upper, rate in pairs)


TAX_TABLES: Dict[int, TaxTables] = {
    2025: TaxTables(
        year=2025,
        ordinary_brackets={
            FilingStatus.single: _brackets(
                (11925, 0.10), (48475, 0.12), (105700, 0.22), (201775, 0.24),
                (256225, 0.32), (626350, 0.35), (math.inf, 0.37),
            ),
            FilingStatus.married_filing_jointly: _brackets(
                (24800, 0.10), (100800, 0.12), (211400, 0.22), (403550, 0.24),
                (512450, 0.32), (751600, 0.35), (math.inf, 0.37),
            ),
            FilingStatus.head_of_household: _brackets(
                (17450, 0.10), (65450, 0.12), (105700, 0.22), (201775, 0.24),
                (256225, 0.32), (626350, 0.35), (math.inf, 0.37),
            ),
        },
        capital_gains_brackets={
            FilingStatus.single: _brackets(
                (48350, 0.0), (533400, 0.15), (math.inf, 0.20),
            ),
            FilingStatus.married_filing_jointly: _brackets(
                (96700, 0.0), (600050, 0.15), (math.inf, 0.20),
            ),
            FilingStatus.head_of_household: _brackets(
                (64750, 0.0), (566700, 0.15), (math.inf, 0.20),
            ),
        },
        standard_deduction={
            FilingStatus.single: 15750,
            FilingStatus.married_filing_jointly: 31500,
            FilingStatus.head_of_household: 23850,
        },
        child_tax_credit=2000,
        child_tax_credit_phaseout={
            FilingStatus.single: 200000,
            FilingStatus.married_filing_jointly: 400000,
            FilingStatus.head_of_household: 200000,
        },
        salt_cap=10000,
        retirement_401k_limit=30000,
    ),
}


def get_tax_tables(year: int) -> TaxTables:
    """
    Look up the tax tables for a year.

    Raises:
        InvalidInputError: If no tables exist for that year
    """
    try:
        return TAX_TABLES[year]
    except KeyError:
        available = ", ".join(str(y) for y in sorted(TAX_TABLES))
        raise InvalidInputError(
            f"No tax tables for {year}; available years: {available}"
        ) from None
