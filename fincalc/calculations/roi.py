"""
Return on Investment Calculations

Basic ROI:       ROI = (returned - invested) / invested * 100
Annualized ROI:  ((1 + ROI/100)^(1/years) - 1) * 100
Real ROI:        (1 + annualized) / (1 + inflation) - 1   (Fisher equation)

Two entry points: a reverse solver taking any two of amount invested,
amount returned and ROI, and a forward calculator that also accounts for
additional costs and gains over a holding period.
"""

import enum
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Union

from fincalc.calculations.errors import DomainError, InvalidInputError, raise_if_errors
from fincalc.calculations.known_values import mismatched_values, select_variant

DAYS_PER_YEAR = 365
MONTHS_PER_YEAR = 12


class PeriodType(str, enum.Enum):
    years = "years"
    months = "months"
    days = "days"


@dataclass(frozen=True)
class InvestedReturned:
    amount_invested: float
    amount_returned: float


@dataclass(frozen=True)
class InvestedRoi:
    amount_invested: float
    roi: float


@dataclass(frozen=True)
class ReturnedRoi:
    amount_returned: float
    roi: float


ROIKnowns = Union[InvestedReturned, InvestedRoi, ReturnedRoi]

_VARIANTS = [
    (("amount_invested", "amount_returned"), InvestedReturned),
    (("amount_invested", "roi"), InvestedRoi),
    (("amount_returned", "roi"), ReturnedRoi),
]


@dataclass(frozen=True)
class ROISolution:
    amount_invested: float
    amount_returned: float
    roi: float  # Percent
    net_profit: float


@dataclass(frozen=True)
class ROIInput:
    initial_investment: float
    final_value: float
    investment_period: float
    period_type: Union[str, PeriodType] = PeriodType.years
    additional_costs: float = 0.0
    additional_gains: float = 0.0
    inflation_rate: Optional[float] = None  # Percent


@dataclass(frozen=True)
class ROIResult:
    roi: float
    annualized_roi: float
    total_invested: float
    total_return: float
    net_profit: float
    effective_period_in_years: float
    monthly_growth_rate: float
    daily_growth_rate: float
    real_roi: Optional[float] = None


@dataclass(frozen=True)
class InvestmentScenario:
    name: str
    initial_investment: float
    final_value: float
    period: float
    period_type: Union[str, PeriodType] = PeriodType.years
    additional_costs: float = 0.0
    additional_gains: float = 0.0


@dataclass(frozen=True)
class ScenarioComparison:
    scenario: str
    roi: float
    annualized_roi: float
    net_profit: float
    rank: int


@dataclass(frozen=True)
class GrowthProjection:
    year: int
    projected_value: float
    projected_roi: float
    cumulative_gain: float


def from_known(
    amount_invested: Optional[float] = None,
    amount_returned: Optional[float] = None,
    roi: Optional[float] = None,
) -> ROIKnowns:
    """
    Pick the input variant for whichever two values are known.

    A third value, when supplied, must agree with what the pair solves to.
    """
    values = {"amount_invested": amount_invested, "amount_returned": amount_returned, "roi": roi}
    variant = select_variant(values, _VARIANTS)
    raise_if_errors(_validate_knowns(values))
    raise_if_errors(mismatched_values(values, variant, solve_roi(variant), labels={"roi": "ROI"}))
    return variant


def _validate_knowns(values: Dict[str, Optional[float]]) -> List[str]:
    errors = []
    for name, label in (("amount_invested", "Amount invested"), ("amount_returned", "Amount returned")):
        value = values.get(name)
        if value is not None and value < 0:
            errors.append(f"{label} cannot be negative")
    roi = values.get("roi")
    if roi is not None and roi < -100:
        errors.append("ROI cannot be less than -100%")
    return errors


def solve_roi(inputs: ROIKnowns) -> ROISolution:
    """
    Solve for the missing one of amount invested, amount returned and ROI.

    Raises:
        InvalidInputError: Negative amounts or an ROI below -100%
        DomainError: Zero invested (given, or implied by a zero amount
            returned), or an ROI of -100% with only the amount returned known
    """
    raise_if_errors(_validate_knowns(asdict(inputs)))
    if getattr(inputs, "amount_invested", None) == 0:
        raise DomainError("Amount invested must be greater than 0")

    if isinstance(inputs, InvestedReturned):
        invested, returned = inputs.amount_invested, inputs.amount_returned
        roi = (returned - invested) / invested * 100
    elif isinstance(inputs, InvestedRoi):
        invested = inputs.amount_invested
        returned = invested * (1 + inputs.roi / 100)
        roi = inputs.roi
    elif isinstance(inputs, ReturnedRoi):
        if inputs.roi == -100:
            raise DomainError("Amount invested cannot be determined from a -100% ROI")
        if inputs.amount_returned == 0:
            raise DomainError("Amount invested must be greater than 0")
        returned = inputs.amount_returned
        invested = returned / (1 + inputs.roi / 100)
        roi = inputs.roi
    else:
        raise TypeError(f"Unsupported ROI input: {type(inputs).__name__}")

    return ROISolution(
        amount_invested=invested,
        amount_returned=returned,
        roi=roi,
        net_profit=returned - invested,
    )


def convert_to_years(period: float, period_type: Union[str, PeriodType]) -> float:
    """Convert a holding period to years."""
    try:
        period_type = PeriodType(period_type)
    except ValueError:
        raise InvalidInputError(
            "Invalid period type. Must be years, months, or days"
        ) from None
    if period_type is PeriodType.months:
        return period / MONTHS_PER_YEAR
    if period_type is PeriodType.days:
        return period / DAYS_PER_YEAR
    return period


def annualize_roi(roi: float, years: float) -> float:
    """
    Compound-annualize a total ROI (percent) over a holding period.

    A total loss stays a total loss at any horizon.
    """
    if years <= 0:
        raise InvalidInputError("Investment period must be greater than 0")
    if roi <= -100:
        return -100.0
    return ((1 + roi / 100) ** (1 / years) - 1) * 100


def real_roi(annualized_roi: float, inflation_rate: float) -> float:
    """Inflation-adjusted annual ROI via the Fisher equation (percents)."""
    if inflation_rate <= -100:
        raise InvalidInputError("Inflation rate must be greater than -100%")
    return ((1 + annualized_roi / 100) / (1 + inflation_rate / 100) - 1) * 100


def validate_roi_inputs(inputs: ROIInput) -> List[str]:
    errors = []
    if inputs.initial_investment <= 0:
        errors.append("Initial investment must be greater than 0")
    if inputs.final_value < 0:
        errors.append("Final value must be greater than or equal to 0")
    if inputs.investment_period <= 0:
        errors.append("Investment period must be greater than 0")
    if inputs.additional_costs < 0:
        errors.append("Additional costs cannot be negative")
    if inputs.additional_gains < 0:
        errors.append("Additional gains cannot be negative")
    try:
        PeriodType(inputs.period_type)
    except ValueError:
        errors.append("Invalid period type. Must be years, months, or days")
    return errors


def calculate_roi(inputs: ROIInput) -> ROIResult:
    """
    Calculate ROI over a holding period, including costs and gains.

    Monthly and daily growth rates are the compound per-month and per-day
    rates that produce the total ROI over the holding period.
    """
    raise_if_errors(validate_roi_inputs(inputs))

    total_invested = inputs.initial_investment + inputs.additional_costs
    total_return = inputs.final_value + inputs.additional_gains
    roi = (total_return - total_invested) / total_invested * 100

    years = convert_to_years(inputs.investment_period, inputs.period_type)
    annualized = annualize_roi(roi, years)

    return ROIResult(
        roi=roi,
        annualized_roi=annualized,
        total_invested=total_invested,
        total_return=total_return,
        net_profit=total_return - total_invested,
        effective_period_in_years=years,
        monthly_growth_rate=annualize_roi(roi, years * MONTHS_PER_YEAR),
        daily_growth_rate=annualize_roi(roi, years * DAYS_PER_YEAR),
        real_roi=(
            real_roi(annualized, inputs.inflation_rate)
            if inputs.inflation_rate is not None
            else None
        ),
    )


def compare_scenarios(scenarios: List[InvestmentScenario]) -> List[ScenarioComparison]:
    """Rank scenarios by annualized ROI, best first (rank 1)."""
    results = []
    for scenario in scenarios:
        result = calculate_roi(
            ROIInput(
                initial_investment=scenario.initial_investment,
                final_value=scenario.final_value,
                investment_period=scenario.period,
                period_type=scenario.period_type,
                additional_costs=scenario.additional_costs,
                additional_gains=scenario.additional_gains,
            )
        )
        results.append((scenario.name, result))

    results.sort(key=lambda item: item[1].annualized_roi, reverse=True)

    return [
        ScenarioComparison(
            scenario=name,
            roi=result.roi,
            annualized_roi=result.annualized_roi,
            net_profit=result.net_profit,
            rank=rank,
        )
        for rank, (name, result) in enumerate(results, start=1)
    ]


def project_growth(
    initial_value: float, annualized_roi: float, years: int
) -> List[GrowthProjection]:
    """Project a value forward year by year at a constant annualized ROI."""
    if initial_value <= 0:
        raise InvalidInputError("Initial value must be greater than 0")
    if years <= 0:
        raise InvalidInputError("Projection years must be greater than 0")

    growth = 1 + annualized_roi / 100
    projections = []
    for year in range(1, years + 1):
        value = initial_value * growth ** year
        projections.append(
            GrowthProjection(
                year=year,
                projected_value=value,
                projected_roi=(value - initial_value) / initial_value * 100,
                cumulative_gain=value - initial_value,
            )
        )
    return projections
