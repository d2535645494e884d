"""
Tests for ROI calculations.
"""

import pytest

from fincalc.calculations import roi
from fincalc.calculations.errors import DomainError, InvalidInputError
from fincalc.calculations.roi import (
    InvestedReturned,
    InvestedRoi,
    InvestmentScenario,
    ROIInput,
    ReturnedRoi,
    annualize_roi,
    calculate_roi,
    compare_scenarios,
    project_growth,
    real_roi,
    solve_roi,
)


class TestSolveROI:
    """Test the any-two-of-three ROI solver."""

    def test_invested_returned(self):
        result = solve_roi(InvestedReturned(amount_invested=1000, amount_returned=1500))
        assert result.roi == 50
        assert result.net_profit == 500

    def test_invested_roi(self):
        result = solve_roi(InvestedRoi(amount_invested=1000, roi=25))
        assert result.amount_returned == pytest.approx(1250)

    def test_returned_roi(self):
        result = solve_roi(ReturnedRoi(amount_returned=1500, roi=50))
        assert result.amount_invested == pytest.approx(1000)
        assert result.net_profit == pytest.approx(500)

    def test_total_loss_from_returned(self):
        with pytest.raises(DomainError):
            solve_roi(ReturnedRoi(amount_returned=0, roi=-100))

    def test_zero_invested(self):
        with pytest.raises(DomainError):
            solve_roi(InvestedReturned(amount_invested=0, amount_returned=100))

    def test_roi_below_minus_100_rejected(self):
        with pytest.raises(InvalidInputError):
            solve_roi(InvestedRoi(amount_invested=1000, roi=-150))

    def test_from_known(self):
        assert roi.from_known(amount_returned=1500, roi=50) == ReturnedRoi(1500, 50)
        with pytest.raises(InvalidInputError):
            roi.from_known(roi=50)

    def test_zero_invested_with_roi(self):
        with pytest.raises(DomainError):
            solve_roi(roi.from_known(amount_invested=0, roi=50))

    def test_zero_returned_with_roi(self):
        """Zero returned at a finite ROI implies nothing was invested."""
        with pytest.raises(DomainError):
            solve_roi(ReturnedRoi(amount_returned=0, roi=50))

    def test_from_known_consistent_third_value(self):
        inputs = roi.from_known(amount_invested=1000, amount_returned=1500, roi=50)
        assert inputs == InvestedReturned(1000, 1500)

    def test_from_known_contradictory_third_value(self):
        with pytest.raises(InvalidInputError) as exc_info:
            roi.from_known(amount_invested=1000, amount_returned=1500, roi=10)
        assert exc_info.value.errors == ["ROI does not match the other values"]


class TestCalculateROI:
    """Test the holding-period ROI calculator."""

    def test_two_year_roi(self):
        result = calculate_roi(
            ROIInput(initial_investment=10000, final_value=15000, investment_period=2)
        )
        assert result.roi == pytest.approx(50)
        assert abs(result.annualized_roi - 22.474) < 0.001
        assert result.effective_period_in_years == 2

    def test_period_units_agree(self):
        years = calculate_roi(ROIInput(10000, 15000, 2, "years"))
        months = calculate_roi(ROIInput(10000, 15000, 24, "months"))
        days = calculate_roi(ROIInput(10000, 15000, 730, "days"))
        assert months.annualized_roi == pytest.approx(years.annualized_roi)
        assert days.annualized_roi == pytest.approx(years.annualized_roi)

    def test_costs_and_gains(self):
        result = calculate_roi(
            ROIInput(
                initial_investment=10000, final_value=12000, investment_period=1,
                additional_costs=500, additional_gains=300,
            )
        )
        assert result.total_invested == 10500
        assert result.total_return == 12300
        assert abs(result.roi - 17.142857) < 1e-6

    def test_growth_rates_compound_to_annual(self):
        result = calculate_roi(ROIInput(1000, 1100, 1))
        monthly = result.monthly_growth_rate / 100
        assert (1 + monthly) ** 12 == pytest.approx(1.10)

    def test_real_roi(self):
        result = calculate_roi(ROIInput(1000, 1100, 1, inflation_rate=3))
        assert abs(result.real_roi - 6.796) < 0.001

    def test_no_inflation_no_real_roi(self):
        assert calculate_roi(ROIInput(1000, 1100, 1)).real_roi is None

    def test_total_loss(self):
        result = calculate_roi(ROIInput(1000, 0, 3))
        assert result.roi == -100
        assert result.annualized_roi == -100

    def test_invalid_period_type(self):
        with pytest.raises(InvalidInputError):
            calculate_roi(ROIInput(1000, 1100, 1, period_type="weeks"))

    def test_zero_investment_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_roi(ROIInput(0, 1100, 1))


class TestROIHelpers:
    """Test annualization, comparison and projection."""

    def test_annualize_requires_positive_years(self):
        with pytest.raises(InvalidInputError):
            annualize_roi(10, 0)

    def test_fisher(self):
        assert real_roi(10, 10) == pytest.approx(0)

    def test_compare_scenarios_ranks_by_annualized_roi(self):
        ranked = compare_scenarios(
            [
                InvestmentScenario("bonds", 1000, 1100, 2),
                InvestmentScenario("stocks", 1000, 1500, 3),
                InvestmentScenario("flip", 1000, 1200, 6, period_type="months"),
            ]
        )
        assert [r.scenario for r in ranked] == ["flip", "stocks", "bonds"]
        assert [r.rank for r in ranked] == [1, 2, 3]

    def test_project_growth(self):
        projection = project_growth(1000, 10, 2)
        assert projection[0].projected_value == pytest.approx(1100)
        assert projection[1].projected_value == pytest.approx(1210)
        assert projection[1].projected_roi == pytest.approx(21)
        assert projection[1].cumulative_gain == pytest.approx(210)
