"""
Profit Margin Calculations

Cost, revenue, profit and margin are tied together by

    profit = revenue - cost
    margin = profit / revenue * 100

so any two of them determine the other two. Markup (profit / cost * 100)
is derived from the result.
"""

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Union

from fincalc.calculations.errors import DomainError, raise_if_errors
from fincalc.calculations.known_values import mismatched_values, select_variant


@dataclass(frozen=True)
class CostRevenue:
    cost: float
    revenue: float


@dataclass(frozen=True)
class CostMargin:
    cost: float
    margin: float


@dataclass(frozen=True)
class CostProfit:
    cost: float
    profit: float


@dataclass(frozen=True)
class RevenueMargin:
    revenue: float
    margin: float


@dataclass(frozen=True)
class RevenueProfit:
    revenue: float
    profit: float


@dataclass(frozen=True)
class MarginProfit:
    margin: float
    profit: float


MarginInput = Union[CostRevenue, CostMargin, CostProfit, RevenueMargin, RevenueProfit, MarginProfit]

_VARIANTS = [
    (("cost", "revenue"), CostRevenue),
    (("cost", "margin"), CostMargin),
    (("cost", "profit"), CostProfit),
    (("revenue", "margin"), RevenueMargin),
    (("revenue", "profit"), RevenueProfit),
    (("margin", "profit"), MarginProfit),
]


@dataclass(frozen=True)
class MarginResult:
    cost: float
    revenue: float
    profit: float
    margin: float  # Percent of revenue
    markup: float  # Percent of cost


def from_known(
    cost: Optional[float] = None,
    revenue: Optional[float] = None,
    margin: Optional[float] = None,
    profit: Optional[float] = None,
) -> MarginInput:
    """
    Pick the input variant for whichever two values are known.

    Every supplied value is validated, and any value beyond the chosen
    pair must agree with what that pair solves to.
    """
    values = {"cost": cost, "revenue": revenue, "margin": margin, "profit": profit}
    variant = select_variant(values, _VARIANTS)
    raise_if_errors(validate_margin_values(values))
    raise_if_errors(mismatched_values(values, variant, calculate_margin(variant)))
    return variant


def validate_margin_values(values: Dict[str, Optional[float]]) -> List[str]:
    errors = []
    for name in ("cost", "revenue", "profit"):
        value = values.get(name)
        if value is not None and value < 0:
            errors.append(f"{name.capitalize()} cannot be negative")

    margin = values.get("margin")
    if margin is not None:
        if margin < 0:
            errors.append("Margin cannot be negative")
        elif margin >= 100:
            errors.append("Margin must be less than 100%")

    cost, revenue, profit = values.get("cost"), values.get("revenue"), values.get("profit")
    if cost is not None and revenue is not None and revenue < cost:
        errors.append("Revenue must be greater than or equal to cost")
    if profit is not None and revenue is not None and profit > revenue:
        errors.append("Profit cannot exceed revenue")
    return errors


def validate_margin_inputs(inputs: MarginInput) -> List[str]:
    return validate_margin_values(asdict(inputs))


def calculate_margin(inputs: MarginInput) -> MarginResult:
    """
    Solve for the two unknown quantities.

    Raises:
        InvalidInputError: Negative amounts, margin outside [0, 100), or
            revenue below cost
        DomainError: The pair leaves revenue undetermined (zero revenue,
            or zero margin with a profit)
    """
    raise_if_errors(validate_margin_inputs(inputs))

    if isinstance(inputs, CostRevenue):
        cost, revenue = inputs.cost, inputs.revenue
    elif isinstance(inputs, CostMargin):
        cost = inputs.cost
        revenue = cost / (1 - inputs.margin / 100)
    elif isinstance(inputs, CostProfit):
        cost = inputs.cost
        revenue = cost + inputs.profit
    elif isinstance(inputs, RevenueMargin):
        revenue = inputs.revenue
        cost = revenue - inputs.margin / 100 * revenue
    elif isinstance(inputs, RevenueProfit):
        revenue = inputs.revenue
        cost = revenue - inputs.profit
    elif isinstance(inputs, MarginProfit):
        if inputs.margin == 0:
            raise DomainError("Margin cannot be 0 when solving from profit")
        revenue = inputs.profit / (inputs.margin / 100)
        cost = revenue - inputs.profit
    else:
        raise TypeError(f"Unsupported margin input: {type(inputs).__name__}")

    if revenue == 0:
        raise DomainError("Revenue must be greater than 0 to calculate margin")

    profit = revenue - cost
    return MarginResult(
        cost=cost,
        revenue=revenue,
        profit=profit,
        margin=profit / revenue * 100,
        markup=profit / cost * 100 if cost > 0 else 0.0,
    )
