"""
Tests for investment growth with mixed contribution and compounding frequencies.
"""

import pytest

from fincalc.calculations.errors import DomainError, InvalidInputError
from fincalc.calculations.growth import future_value
from fincalc.calculations.investment import InvestmentInput, calculate_investment


class TestInvestment:
    """Test per-contribution compounding."""

    def test_matching_frequencies_use_annuity_formula(self):
        """Monthly deposits into a monthly-compounding account match the closed form."""
        result = calculate_investment(
            InvestmentInput(
                starting_amount=1000, contribution=100, years=10, annual_rate=6,
                contribution_frequency="monthly", compounding="monthly",
            )
        )
        expected = future_value(1000, 0.005, 120, 100)
        assert abs(result.end_balance - expected) < 1e-6

    def test_matching_frequencies_beginning(self):
        result = calculate_investment(
            InvestmentInput(
                starting_amount=0, contribution=100, years=5, annual_rate=6,
                contribution_frequency="monthly", compounding="monthly",
                payment_at_beginning=True,
            )
        )
        expected = future_value(0, 0.005, 60, 100, payment_at_beginning=True)
        assert abs(result.end_balance - expected) < 1e-6

    def test_monthly_deposits_annual_compounding(self):
        """Each deposit grows for its own remaining fraction of the year."""
        result = calculate_investment(
            InvestmentInput(
                starting_amount=0, contribution=100, years=1, annual_rate=12,
                contribution_frequency="monthly", compounding="annually",
            )
        )
        expected = sum(100 * 1.12 ** ((12 - k) / 12) for k in range(1, 13))
        assert abs(result.end_balance - expected) < 1e-9
        assert 1200 < result.end_balance < 1200 * 1.12

    def test_continuous_compounding(self):
        result = calculate_investment(
            InvestmentInput(
                starting_amount=1000, contribution=0, years=10, annual_rate=5,
                compounding="continuously",
            )
        )
        assert abs(result.end_balance - 1648.72) < 0.01

    def test_totals(self):
        result = calculate_investment(
            InvestmentInput(
                starting_amount=2000, contribution=50, years=3, annual_rate=4,
                contribution_frequency="biweekly", compounding="monthly",
            )
        )
        assert result.total_contributions == pytest.approx(2000 + 50 * 78)
        assert result.total_interest == pytest.approx(
            result.end_balance - result.total_contributions
        )

    def test_yearly_rows_chain_to_end_balance(self):
        result = calculate_investment(
            InvestmentInput(
                starting_amount=5000, contribution=200, years=2.5, annual_rate=8,
                contribution_frequency="quarterly", compounding="monthly",
            )
        )
        assert len(result.yearly) == 3
        for previous, current in zip(result.yearly, result.yearly[1:]):
            assert current.starting_balance == pytest.approx(previous.ending_balance)
        assert result.yearly[-1].ending_balance == result.end_balance
        assert sum(row.contributions for row in result.yearly) == pytest.approx(200 * 10)

    def test_zero_rate(self):
        result = calculate_investment(
            InvestmentInput(
                starting_amount=1000, contribution=100, years=2, annual_rate=0,
                contribution_frequency="monthly", compounding="annually",
            )
        )
        assert result.end_balance == pytest.approx(3400)
        assert result.total_interest == pytest.approx(0)

    def test_continuous_contributions_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_investment(
                InvestmentInput(
                    starting_amount=1000, contribution=100, years=2, annual_rate=5,
                    contribution_frequency="continuously",
                )
            )

    def test_zero_years_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_investment(
                InvestmentInput(starting_amount=1000, contribution=0, years=0, annual_rate=5)
            )

    def test_overflow_is_domain_error(self):
        with pytest.raises(DomainError):
            calculate_investment(
                InvestmentInput(
                    starting_amount=1000, contribution=100, years=100, annual_rate=1e6,
                    compounding="annually",
                )
            )
