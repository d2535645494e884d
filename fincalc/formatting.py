"""
Display formatting for calculation results.

Calculators return raw floats; anything user-facing goes through here.
"""

import math

from fincalc.calculations.marriage_tax import MarriageImpact, MarriageTaxResult


def format_currency(amount: float, decimals: int = 2) -> str:
    """Format as US dollars, e.g. -1234.5 -> '-$1,234.50'."""
    if not math.isfinite(amount):
        return "N/A"
    sign = "-" if amount < 0 and round(abs(amount), decimals) != 0 else ""
    return f"{sign}${abs(amount):,.{decimals}f}"


def format_percentage(value: float, decimals: int = 2) -> str:
    if not math.isfinite(value):
        return "N/A"
    return f"{value:.{decimals}f}%"


def marriage_tax_recommendation(result: MarriageTaxResult) -> str:
    """Advice text for a marriage tax comparison."""
    difference = result.marriage_penalty_or_bonus
    amount = format_currency(abs(difference), decimals=0)
    if result.impact is MarriageImpact.significant_bonus:
        return (
            f"Marriage provides a significant tax benefit of {amount} per year. "
            f"Filing jointly would reduce your combined tax liability by "
            f"{format_percentage(abs(result.percentage_change), decimals=1)}."
        )
    if result.impact is MarriageImpact.significant_penalty:
        return (
            f"Marriage results in a tax penalty of {amount} per year. "
            "This is common for dual high-income earners. Consider maximizing "
            "pre-tax deductions to reduce the impact."
        )
    kind = "penalty" if difference > 0 else "bonus"
    return (
        f"Marriage has minimal tax impact ({amount} {kind}). "
        "Your tax situation would remain essentially the same."
    )
