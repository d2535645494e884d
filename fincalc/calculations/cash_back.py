"""
Cash Back vs. Low Interest Financing

Compares taking a manufacturer rebate (applied to the loan) at the
standard rate against giving up the rebate for a reduced rate. The
option with the lower total paid is recommended.
"""

import enum
import math
from dataclasses import dataclass
from typing import List, Optional

from fincalc.calculations.amortization import calculate_payment
from fincalc.calculations.errors import raise_if_errors


class Recommendation(str, enum.Enum):
    cash_back = "cash_back"
    low_interest = "low_interest"


@dataclass(frozen=True)
class CashBackInput:
    purchase_price: float
    cash_back: float
    standard_rate: float  # Annual percent, taken with the cash back
    reduced_rate: float  # Annual percent, taken without it
    loan_term_months: int
    down_payment: float = 0.0


@dataclass(frozen=True)
class FinancingOption:
    loan_amount: float
    monthly_payment: float
    total_interest: float
    total_cost: float  # Loan amount plus interest
    total_paid: float  # Total cost plus down payment


@dataclass(frozen=True)
class CashBackResult:
    cash_back_option: FinancingOption
    low_interest_option: FinancingOption
    recommendation: Recommendation
    savings: float
    savings_percentage: float
    break_even_months: Optional[int]  # None when there is no break-even


def validate_cash_back_inputs(inputs: CashBackInput) -> List[str]:
    errors = []
    if inputs.purchase_price <= 0:
        errors.append("Purchase price must be greater than 0")
    if inputs.cash_back < 0:
        errors.append("Cash back cannot be negative")
    if inputs.cash_back > inputs.purchase_price:
        errors.append("Cash back cannot exceed purchase price")
    if inputs.standard_rate < 0:
        errors.append("Standard interest rate cannot be negative")
    if inputs.reduced_rate < 0:
        errors.append("Reduced interest rate cannot be negative")
    if inputs.reduced_rate > inputs.standard_rate:
        errors.append("Reduced rate should be lower than standard rate")
    if inputs.loan_term_months <= 0:
        errors.append("Loan term must be greater than 0 months")
    if inputs.down_payment < 0:
        errors.append("Down payment cannot be negative")
    if inputs.down_payment >= inputs.purchase_price:
        errors.append("Down payment must be less than purchase price")
    return errors


def calculate_financing_option(
    purchase_price: float,
    down_payment: float,
    cash_back: float,
    annual_rate: float,
    loan_term_months: int,
) -> FinancingOption:
    """Financing cost of one option; cash back reduces the amount financed."""
    loan_amount = max(0.0, purchase_price - down_payment - cash_back)
    monthly_payment = (
        calculate_payment(loan_amount, annual_rate / 100 / 12, loan_term_months)
        if loan_amount > 0
        else 0.0
    )
    total_interest = max(0.0, monthly_payment * loan_term_months - loan_amount)
    total_cost = loan_amount + total_interest

    return FinancingOption(
        loan_amount=loan_amount,
        monthly_payment=monthly_payment,
        total_interest=total_interest,
        total_cost=total_cost,
        total_paid=total_cost + down_payment,
    )


def calculate_break_even_months(
    cash_back_payment: float, low_interest_payment: float, cash_back: float
) -> Optional[int]:
    """
    Months of lower payments needed to recover the forgone cash back.

    Returns:
        ceil(cash_back / monthly savings), or None when the low-interest
        payment is not lower
    """
    monthly_savings = cash_back_payment - low_interest_payment
    if monthly_savings <= 0:
        return None
    return math.ceil(cash_back / monthly_savings)


def compare_cash_back(inputs: CashBackInput) -> CashBackResult:
    raise_if_errors(validate_cash_back_inputs(inputs))

    cash_back_option = calculate_financing_option(
        inputs.purchase_price,
        inputs.down_payment,
        inputs.cash_back,
        inputs.standard_rate,
        inputs.loan_term_months,
    )
    low_interest_option = calculate_financing_option(
        inputs.purchase_price,
        inputs.down_payment,
        0.0,
        inputs.reduced_rate,
        inputs.loan_term_months,
    )

    if cash_back_option.total_paid < low_interest_option.total_paid:
        recommendation = Recommendation.cash_back
    else:
        recommendation = Recommendation.low_interest

    savings = abs(cash_back_option.total_paid - low_interest_option.total_paid)
    higher_total = max(cash_back_option.total_paid, low_interest_option.total_paid)

    return CashBackResult(
        cash_back_option=cash_back_option,
        low_interest_option=low_interest_option,
        recommendation=recommendation,
        savings=savings,
        savings_percentage=savings / higher_total * 100 if higher_total > 0 else 0.0,
        break_even_months=calculate_break_even_months(
            cash_back_option.monthly_payment,
            low_interest_option.monthly_payment,
            inputs.cash_back,
        ),
    )
