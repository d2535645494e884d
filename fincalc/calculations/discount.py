"""
Discount Calculations

    discount amount = original price * discount percent / 100
    final price     = original price - discount amount

Any two of original price, discount percent or amount, and final price
determine the rest. A percent-mode discount is described by its percent,
a fixed-mode discount by its amount.
"""

import enum
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Union

from fincalc.calculations.errors import DomainError, InvalidInputError, raise_if_errors
from fincalc.calculations.known_values import mismatched_values, select_variant


class DiscountMode(str, enum.Enum):
    percent = "percent"
    fixed = "fixed"


@dataclass(frozen=True)
class OriginalPercent:
    original_price: float
    discount_percent: float


@dataclass(frozen=True)
class OriginalAmount:
    original_price: float
    discount_amount: float


@dataclass(frozen=True)
class OriginalFinal:
    original_price: float
    final_price: float


@dataclass(frozen=True)
class PercentFinal:
    discount_percent: float
    final_price: float


@dataclass(frozen=True)
class AmountFinal:
    discount_amount: float
    final_price: float


DiscountInput = Union[OriginalPercent, OriginalAmount, OriginalFinal, PercentFinal, AmountFinal]

_VARIANTS = {
    DiscountMode.percent: [
        (("original_price", "discount_percent"), OriginalPercent),
        (("original_price", "final_price"), OriginalFinal),
        (("discount_percent", "final_price"), PercentFinal),
    ],
    DiscountMode.fixed: [
        (("original_price", "discount_amount"), OriginalAmount),
        (("original_price", "final_price"), OriginalFinal),
        (("discount_amount", "final_price"), AmountFinal),
    ],
}


@dataclass(frozen=True)
class DiscountResult:
    original_price: float
    discount_percent: float
    discount_amount: float
    final_price: float
    savings: float


def from_known(
    original_price: Optional[float] = None,
    discount_percent: Optional[float] = None,
    discount_amount: Optional[float] = None,
    final_price: Optional[float] = None,
    mode: Union[str, DiscountMode] = DiscountMode.percent,
) -> DiscountInput:
    """
    Pick the input variant for whichever two values are known.

    Percent mode ignores discount_amount and fixed mode ignores
    discount_percent. Every other supplied value is validated, and any
    value beyond the chosen pair must agree with what that pair solves to.
    """
    try:
        mode = DiscountMode(mode)
    except ValueError:
        raise InvalidInputError(f"Unknown discount mode: {mode}") from None

    values = {"original_price": original_price, "final_price": final_price}
    if mode is DiscountMode.percent:
        values["discount_percent"] = discount_percent
    else:
        values["discount_amount"] = discount_amount
    variant = select_variant(values, _VARIANTS[mode])
    raise_if_errors(validate_discount_values(values))
    raise_if_errors(mismatched_values(values, variant, calculate_discount(variant)))
    return variant


def validate_discount_values(values: Dict[str, Optional[float]]) -> List[str]:
    errors = []
    labels = {
        "original_price": "Original price",
        "discount_amount": "Discount amount",
        "final_price": "Final price",
    }
    for name, label in labels.items():
        value = values.get(name)
        if value is not None and value < 0:
            errors.append(f"{label} cannot be negative")

    percent = values.get("discount_percent")
    if percent is not None:
        if percent < 0:
            errors.append("Discount percent cannot be negative")
        elif percent > 100:
            errors.append("Discount percent cannot be greater than 100%")

    original = values.get("original_price")
    if original is not None:
        final, amount = values.get("final_price"), values.get("discount_amount")
        if final is not None and final > original:
            errors.append("Final price cannot be greater than original price")
        if amount is not None and amount > original:
            errors.append("Discount amount cannot be greater than original price")
    return errors


def validate_discount_inputs(inputs: DiscountInput) -> List[str]:
    return validate_discount_values(asdict(inputs))


def calculate_discount(inputs: DiscountInput) -> DiscountResult:
    """
    Solve for the remaining discount quantities.

    Raises:
        InvalidInputError: Negative amounts, percent outside [0, 100], or a
            final price above the original
        DomainError: A 100% discount with only the final price known, or
            a zero original price
    """
    raise_if_errors(validate_discount_inputs(inputs))

    if isinstance(inputs, OriginalPercent):
        original = inputs.original_price
        amount = original * inputs.discount_percent / 100
    elif isinstance(inputs, OriginalAmount):
        original = inputs.original_price
        amount = inputs.discount_amount
    elif isinstance(inputs, OriginalFinal):
        original = inputs.original_price
        amount = original - inputs.final_price
    elif isinstance(inputs, PercentFinal):
        if inputs.discount_percent == 100:
            raise DomainError(
                "Original price cannot be determined from a 100% discount"
            )
        original = inputs.final_price / (1 - inputs.discount_percent / 100)
        amount = original - inputs.final_price
    elif isinstance(inputs, AmountFinal):
        original = inputs.final_price + inputs.discount_amount
        amount = inputs.discount_amount
    else:
        raise TypeError(f"Unsupported discount input: {type(inputs).__name__}")

    if isinstance(inputs, (OriginalPercent, PercentFinal)):
        percent = inputs.discount_percent
    elif original == 0:
        raise DomainError("Original price must be greater than 0")
    else:
        percent = amount / original * 100

    return DiscountResult(
        original_price=original,
        discount_percent=percent,
        discount_amount=amount,
        final_price=original - amount,
        savings=amount,
    )
