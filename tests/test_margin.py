"""
Tests for profit margin calculations.
"""

import pytest

from fincalc.calculations import margin
from fincalc.calculations.errors import DomainError, InvalidInputError
from fincalc.calculations.margin import (
    CostMargin,
    CostProfit,
    CostRevenue,
    MarginProfit,
    RevenueMargin,
    RevenueProfit,
    calculate_margin,
)


class TestMarginVariants:
    """Each known pair solves for the other two."""

    def test_cost_revenue(self):
        result = calculate_margin(CostRevenue(cost=50, revenue=100))
        assert result.profit == 50
        assert result.margin == 50
        assert result.markup == 100

    def test_cost_margin(self):
        result = calculate_margin(CostMargin(cost=50, margin=50))
        assert result.revenue == pytest.approx(100)
        assert result.profit == pytest.approx(50)

    def test_cost_profit(self):
        result = calculate_margin(CostProfit(cost=60, profit=40))
        assert result.revenue == 100
        assert result.margin == pytest.approx(40)
        assert abs(result.markup - 66.67) < 0.01

    def test_revenue_margin(self):
        result = calculate_margin(RevenueMargin(revenue=200, margin=25))
        assert result.cost == pytest.approx(150)
        assert result.profit == pytest.approx(50)

    def test_revenue_profit(self):
        result = calculate_margin(RevenueProfit(revenue=80, profit=20))
        assert result.cost == 60
        assert result.margin == pytest.approx(25)

    def test_margin_profit(self):
        result = calculate_margin(MarginProfit(margin=20, profit=30))
        assert result.revenue == pytest.approx(150)
        assert result.cost == pytest.approx(120)


class TestMarginEdgeCases:
    """Test rejected and degenerate inputs."""

    def test_zero_cost_has_zero_markup(self):
        result = calculate_margin(CostRevenue(cost=0, revenue=100))
        assert result.margin == 100
        assert result.markup == 0

    def test_zero_revenue(self):
        with pytest.raises(DomainError):
            calculate_margin(CostRevenue(cost=0, revenue=0))

    def test_zero_margin_with_profit(self):
        with pytest.raises(DomainError):
            calculate_margin(MarginProfit(margin=0, profit=10))

    def test_margin_of_100_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_margin(CostMargin(cost=50, margin=100))

    def test_revenue_below_cost_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_margin(CostRevenue(cost=100, revenue=50))

    def test_negative_values_all_reported(self):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_margin(CostProfit(cost=-1, profit=-1))
        assert len(exc_info.value.errors) == 2


class TestFromKnown:
    """Test picking a variant from loose optional values."""

    def test_picks_pair(self):
        assert margin.from_known(cost=50, revenue=100) == CostRevenue(50, 100)
        assert margin.from_known(margin=20, profit=30) == MarginProfit(20, 30)

    def test_priority_with_three_values(self):
        assert isinstance(margin.from_known(cost=50, revenue=100, margin=50), CostRevenue)

    def test_single_value_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            margin.from_known(cost=50)
        assert exc_info.value.errors == ["Please provide at least 2 values"]

    def test_all_zero_rejected(self):
        with pytest.raises(InvalidInputError):
            margin.from_known(cost=0, revenue=0)

    def test_invalid_third_value_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            margin.from_known(cost=50, revenue=100, margin=-5)
        assert exc_info.value.errors == ["Margin cannot be negative"]

    def test_contradictory_third_value_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            margin.from_known(cost=50, revenue=100, profit=10)
        assert exc_info.value.errors == ["Profit does not match the other values"]

    def test_rounded_third_value_accepted(self):
        inputs = margin.from_known(cost=200, revenue=300, margin=33.33)
        assert inputs == CostRevenue(200, 300)

    def test_profit_above_revenue_outside_pair(self):
        """Profit is checked against revenue even when the pair is cost and revenue."""
        with pytest.raises(InvalidInputError) as exc_info:
            margin.from_known(cost=10, revenue=20, profit=30)
        assert exc_info.value.errors == ["Profit cannot exceed revenue"]


class TestMarginRoundTrip:
    """Re-solving from any two outputs reproduces the same result."""

    @pytest.mark.parametrize(
        "pair",
        [
            ("cost", "revenue"),
            ("cost", "margin"),
            ("cost", "profit"),
            ("revenue", "margin"),
            ("revenue", "profit"),
            ("margin", "profit"),
        ],
    )
    def test_round_trip(self, pair):
        original = calculate_margin(CostRevenue(cost=64, revenue=80))
        known = {name: getattr(original, name) for name in pair}
        result = calculate_margin(margin.from_known(**known))
        for name in ("cost", "revenue", "profit", "margin", "markup"):
            assert getattr(result, name) == pytest.approx(getattr(original, name))
