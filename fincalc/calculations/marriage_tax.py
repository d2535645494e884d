"""
Marriage Tax Calculations

Compares two people's federal and state/local taxes filed separately
(single or head of household) with the same household filing jointly.

Per return:
    gross income = salary + interest/dividends + short-term + long-term gains
    AGI          = gross income - pre-tax deductions (401(k), health, other)
    taxable      = max(0, AGI - deduction)
    ordinary tax = progressive brackets on (taxable - long-term gains)
    gains tax    = long-term gains * rate of the capital-gains bracket that
                   the stacked total (ordinary + gains) falls in
    final tax    = max(0, ordinary tax + gains tax - child tax credit)

Short-term gains are ordinary income and are taxed through the brackets,
at the filer's marginal rates. State and local tax is a flat rate on AGI.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from fincalc.calculations.errors import raise_if_errors
from fincalc.calculations.tax_tables import (
    Brackets,
    FilingStatus,
    TaxTables,
    get_tax_tables,
)

logger = logging.getLogger(__name__)

DEFAULT_TAX_YEAR = 2025
MAX_DEPENDENTS = 10
MAX_STATE_LOCAL_RATE = 20
# Penalties or bonuses within this many dollars are reported as minimal
SIGNIFICANT_DIFFERENCE = 1000


class MarriageImpact(str, enum.Enum):
    significant_bonus = "significant_bonus"
    significant_penalty = "significant_penalty"
    minimal = "minimal"


@dataclass(frozen=True)
class ItemizedDeductions:
    mortgage_interest: float = 0.0
    charitable_donations: float = 0.0
    state_local_taxes: float = 0.0
    medical_expenses: float = 0.0
    other_deductions: float = 0.0


@dataclass(frozen=True)
class PersonInput:
    salary: float
    interest_dividends: float = 0.0
    short_term_gains: float = 0.0
    long_term_gains: float = 0.0
    retirement_401k: float = 0.0
    health_insurance: float = 0.0
    other_pre_tax_deductions: float = 0.0
    filing_status: Union[str, FilingStatus] = FilingStatus.single
    itemized_deductions: Optional[ItemizedDeductions] = None


@dataclass(frozen=True)
class MarriageTaxInput:
    person1: PersonInput
    person2: PersonInput
    dependents: int = 0
    use_standard_deduction: bool = True
    state_local_tax_rate: float = 0.0  # Percent of AGI
    tax_year: int = DEFAULT_TAX_YEAR


@dataclass(frozen=True)
class TaxCalculation:
    filing_status: FilingStatus
    gross_income: float
    adjusted_gross_income: float
    deduction: float
    taxable_income: float
    ordinary_income: float
    capital_gains_income: float
    federal_tax: float  # On ordinary income
    capital_gains_tax: float
    total_federal_tax: float
    effective_tax_rate: float  # Percent of AGI
    marginal_rate: float  # Percent
    child_tax_credit: float
    final_tax: float
    state_local_tax: float
    total_tax: float


@dataclass(frozen=True)
class MarriageTaxResult:
    person1: TaxCalculation
    person2: TaxCalculation
    separate_total_tax: float
    married_filing_jointly: TaxCalculation
    marriage_penalty_or_bonus: float  # Positive is a penalty, negative a bonus
    percentage_change: float
    total_household_income: float
    effective_tax_rate_single: float
    effective_tax_rate_married: float
    impact: MarriageImpact


@dataclass(frozen=True)
class _Income:
    """Income and pre-tax deductions of one return."""

    ordinary: float  # Salary plus interest and dividends
    short_term_gains: float
    long_term_gains: float
    pre_tax_deductions: float
    itemized: float


def calculate_bracket_tax(income: float, brackets: Brackets) -> float:
    """Progressive tax on income across brackets."""
    tax = 0.0
    lower = 0.0
    for bracket in brackets:
        if income <= lower:
            break
        tax += (min(income, bracket.upper) - lower) * bracket.rate
        lower = bracket.upper
    return tax


def marginal_rate(income: float, brackets: Brackets) -> float:
    """Rate, as percent, of the bracket that income falls in."""
    for bracket in brackets:
        if income <= bracket.upper:
            return bracket.rate * 100
    return brackets[-1].rate * 100


def calculate_capital_gains_tax(
    gains: float, ordinary_income: float, brackets: Brackets
) -> float:
    """Long-term gains stacked on top of ordinary income, at a single rate."""
    if gains <= 0:
        return 0.0
    total = ordinary_income + gains
    for bracket in brackets:
        if total <= bracket.upper:
            return gains * bracket.rate
    return gains * brackets[-1].rate


def calculate_child_tax_credit(
    dependents: int, agi: float, status: FilingStatus, tables: TaxTables
) -> float:
    """Child tax credit after the income phase-out."""
    if dependents <= 0:
        return 0.0

    credit = dependents * tables.child_tax_credit
    threshold = tables.child_tax_credit_phaseout[status]
    if agi <= threshold:
        return credit

    steps = (agi - threshold) // tables.phaseout_step
    return max(0.0, credit - steps * tables.phaseout_reduction)


def calculate_itemized_deduction(
    deductions: Optional[ItemizedDeductions], tables: TaxTables
) -> float:
    if deductions is None:
        return 0.0
    return (
        deductions.mortgage_interest
        + deductions.charitable_donations
        + min(deductions.state_local_taxes, tables.salt_cap)
        + deductions.medical_expenses
        + deductions.other_deductions
    )


def _person_income(person: PersonInput, tables: TaxTables) -> _Income:
    return _Income(
        ordinary=person.salary + person.interest_dividends,
        short_term_gains=person.short_term_gains,
        long_term_gains=person.long_term_gains,
        pre_tax_deductions=(
            person.retirement_401k + person.health_insurance + person.other_pre_tax_deductions
        ),
        itemized=calculate_itemized_deduction(person.itemized_deductions, tables),
    )


def _combine(first: _Income, second: _Income) -> _Income:
    return _Income(
        ordinary=first.ordinary + second.ordinary,
        short_term_gains=first.short_term_gains + second.short_term_gains,
        long_term_gains=first.long_term_gains + second.long_term_gains,
        pre_tax_deductions=first.pre_tax_deductions + second.pre_tax_deductions,
        itemized=first.itemized + second.itemized,
    )


def calculate_return(
    income: _Income,
    status: FilingStatus,
    dependents: int,
    use_standard_deduction: bool,
    state_local_tax_rate: float,
    tables: TaxTables,
) -> TaxCalculation:
    """Tax on one return under one filing status."""
    gross = income.ordinary + income.short_term_gains + income.long_term_gains
    agi = gross - income.pre_tax_deductions

    standard = tables.standard_deduction[status]
    deduction = standard if use_standard_deduction else max(income.itemized, standard)

    taxable = max(0.0, agi - deduction)
    ordinary = max(0.0, taxable - income.long_term_gains)

    brackets = tables.ordinary_brackets[status]
    federal_tax = calculate_bracket_tax(ordinary, brackets)
    gains_tax = calculate_capital_gains_tax(
        income.long_term_gains, ordinary, tables.capital_gains_brackets[status]
    )
    total_federal = federal_tax + gains_tax

    credit = calculate_child_tax_credit(dependents, agi, status, tables)
    final_tax = max(0.0, total_federal - credit)
    state_local_tax = agi * state_local_tax_rate / 100

    return TaxCalculation(
        filing_status=status,
        gross_income=gross,
        adjusted_gross_income=agi,
        deduction=deduction,
        taxable_income=taxable,
        ordinary_income=ordinary,
        capital_gains_income=income.long_term_gains,
        federal_tax=federal_tax,
        capital_gains_tax=gains_tax,
        total_federal_tax=total_federal,
        effective_tax_rate=final_tax / agi * 100 if agi > 0 else 0.0,
        marginal_rate=marginal_rate(taxable, brackets),
        child_tax_credit=credit,
        final_tax=final_tax,
        state_local_tax=state_local_tax,
        total_tax=final_tax + state_local_tax,
    )


def validate_marriage_inputs(inputs: MarriageTaxInput, tables: TaxTables) -> List[str]:
    errors = []
    for label, person in (("Person 1", inputs.person1), ("Person 2", inputs.person2)):
        if person.salary < 0:
            errors.append(f"{label} salary cannot be negative")
        if person.retirement_401k > tables.retirement_401k_limit:
            errors.append(f"{label} 401(k) contribution exceeds IRS limit")
        if person.filing_status not in (FilingStatus.single, FilingStatus.head_of_household):
            errors.append(f"{label} must file as single or head of household")
    if inputs.dependents < 0:
        errors.append("Number of dependents cannot be negative")
    if inputs.dependents > MAX_DEPENDENTS:
        errors.append("Please verify number of dependents")
    if not 0 <= inputs.state_local_tax_rate <= MAX_STATE_LOCAL_RATE:
        errors.append("State/local tax rate must be between 0% and 20%")
    return errors


def classify_impact(difference: float) -> MarriageImpact:
    """Classify a joint-minus-separate tax difference."""
    if difference < -SIGNIFICANT_DIFFERENCE:
        return MarriageImpact.significant_bonus
    if difference > SIGNIFICANT_DIFFERENCE:
        return MarriageImpact.significant_penalty
    return MarriageImpact.minimal


def calculate_marriage_tax(inputs: MarriageTaxInput) -> MarriageTaxResult:
    """
    Compare filing separately with filing jointly.

    Dependents are claimed by person 1 when filing as head of household,
    otherwise by person 2 when person 2 files as head of household.
    Single filers claim none.
    """
    tables = get_tax_tables(inputs.tax_year)
    raise_if_errors(validate_marriage_inputs(inputs, tables))

    status1 = FilingStatus(inputs.person1.filing_status)
    status2 = FilingStatus(inputs.person2.filing_status)
    hoh = FilingStatus.head_of_household
    dependents1 = inputs.dependents if status1 is hoh else 0
    dependents2 = inputs.dependents if status2 is hoh and status1 is not hoh else 0

    income1 = _person_income(inputs.person1, tables)
    income2 = _person_income(inputs.person2, tables)

    person1 = calculate_return(
        income1, status1, dependents1, inputs.use_standard_deduction,
        inputs.state_local_tax_rate, tables,
    )
    person2 = calculate_return(
        income2, status2, dependents2, inputs.use_standard_deduction,
        inputs.state_local_tax_rate, tables,
    )
    joint = calculate_return(
        _combine(income1, income2),
        FilingStatus.married_filing_jointly,
        inputs.dependents,
        inputs.use_standard_deduction,
        inputs.state_local_tax_rate,
        tables,
    )

    separate_total = person1.total_tax + person2.total_tax
    difference = joint.total_tax - separate_total
    percentage_change = difference / separate_total * 100 if separate_total > 0 else 0.0
    household_income = person1.gross_income + person2.gross_income

    logger.debug(
        "Marriage tax %s: separate=%.2f joint=%.2f", inputs.tax_year, separate_total, joint.total_tax
    )

    return MarriageTaxResult(
        person1=person1,
        person2=person2,
        separate_total_tax=separate_total,
        married_filing_jointly=joint,
        marriage_penalty_or_bonus=difference,
        percentage_change=percentage_change,
        total_household_income=household_income,
        effective_tax_rate_single=(
            separate_total / household_income * 100 if household_income > 0 else 0.0
        ),
        effective_tax_rate_married=(
            joint.total_tax / household_income * 100 if household_income > 0 else 0.0
        ),
        impact=classify_impact(difference),
    )
