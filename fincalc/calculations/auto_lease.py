"""
Auto Lease Calculations

    Trade-in equity       = trade-in value - amount owed on trade-in
    Adjusted cap cost     = negotiated price - down payment - trade-in equity + fees
    Residual value        = MSRP * residual % / 100
    Monthly depreciation  = (adjusted cap cost - residual value) / term
    Money factor          = APR / 2400
    Monthly finance fee   = (adjusted cap cost + residual value) * money factor
    Monthly sales tax     = (depreciation + finance fee) * tax % / 100
    Monthly payment       = depreciation + finance fee + sales tax
    Amount at signing     = down payment + fees - trade-in equity
    Total lease cost      = monthly payment * term + amount at signing

Trade-in equity may be negative (upside-down trade-in); it then raises
the cap cost.
"""

from dataclasses import dataclass
from typing import List

from fincalc.calculations.errors import raise_if_errors

MONEY_FACTOR_DIVISOR = 2400


@dataclass(frozen=True)
class AutoLeaseInput:
    msrp: float
    negotiated_price: float
    lease_term: int  # Months
    interest_rate: float  # APR percent
    residual_percent: float
    down_payment: float = 0.0
    trade_in_value: float = 0.0
    amount_owed_on_trade_in: float = 0.0
    sales_tax_rate: float = 0.0  # Percent
    fees: float = 0.0


@dataclass(frozen=True)
class AutoLeaseResult:
    monthly_payment: float
    monthly_depreciation_fee: float
    monthly_finance_fee: float
    monthly_sales_tax: float
    adjusted_cap_cost: float
    residual_value: float
    total_of_payments: float
    amount_at_signing: float
    total_lease_cost: float
    money_factor: float
    trade_in_equity: float


def money_factor(apr: float) -> float:
    """Convert an APR (percent) to a lease money factor."""
    return apr / MONEY_FACTOR_DIVISOR


def validate_lease_inputs(inputs: AutoLeaseInput) -> List[str]:
    errors = []
    if inputs.lease_term <= 0:
        errors.append("Lease term must be greater than 0 months")
    prices = {
        "MSRP": inputs.msrp,
        "Negotiated price": inputs.negotiated_price,
        "Down payment": inputs.down_payment,
        "Trade-in value": inputs.trade_in_value,
        "Amount owed on trade-in": inputs.amount_owed_on_trade_in,
        "Fees": inputs.fees,
    }
    for label, value in prices.items():
        if value < 0:
            errors.append(f"{label} cannot be negative")
    if inputs.interest_rate < 0:
        errors.append("Interest rate cannot be negative")
    if inputs.sales_tax_rate < 0:
        errors.append("Sales tax rate cannot be negative")
    if not 0 <= inputs.residual_percent <= 100:
        errors.append("Residual percent must be between 0 and 100")
    return errors


def calculate_auto_lease(inputs: AutoLeaseInput) -> AutoLeaseResult:
    """
    Calculate a monthly lease payment and the lease's total cost.

    Raises:
        InvalidInputError: If the term is not positive or any price or
            rate is negative
    """
    raise_if_errors(validate_lease_inputs(inputs))

    trade_in_equity = inputs.trade_in_value - inputs.amount_owed_on_trade_in
    adjusted_cap_cost = (
        inputs.negotiated_price - inputs.down_payment - trade_in_equity + inputs.fees
    )
    residual_value = inputs.msrp * inputs.residual_percent / 100

    depreciation = (adjusted_cap_cost - residual_value) / inputs.lease_term
    factor = money_factor(inputs.interest_rate)
    finance_fee = (adjusted_cap_cost + residual_value) * factor
    sales_tax = (depreciation + finance_fee) * inputs.sales_tax_rate / 100
    monthly_payment = depreciation + finance_fee + sales_tax

    total_of_payments = monthly_payment * inputs.lease_term
    amount_at_signing = inputs.down_payment + inputs.fees - trade_in_equity

    return AutoLeaseResult(
        monthly_payment=monthly_payment,
        monthly_depreciation_fee=depreciation,
        monthly_finance_fee=finance_fee,
        monthly_sales_tax=sales_tax,
        adjusted_cap_cost=adjusted_cap_cost,
        residual_value=residual_value,
        total_of_payments=total_of_payments,
        amount_at_signing=amount_at_signing,
        total_lease_cost=total_of_payments + amount_at_signing,
        money_factor=factor,
        trade_in_equity=trade_in_equity,
    )
