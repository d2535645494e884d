"""
Tests for discount calculations.
"""

import pytest

from fincalc.calculations import discount
from fincalc.calculations.discount import (
    AmountFinal,
    OriginalAmount,
    OriginalFinal,
    OriginalPercent,
    PercentFinal,
    calculate_discount,
)
from fincalc.calculations.errors import DomainError, InvalidInputError


class TestDiscountVariants:
    """Each known pair solves for the rest."""

    def test_original_percent(self):
        result = calculate_discount(OriginalPercent(original_price=200, discount_percent=30))
        assert result.discount_amount == 60
        assert result.final_price == 140
        assert result.savings == 60

    def test_original_amount(self):
        result = calculate_discount(OriginalAmount(original_price=200, discount_amount=50))
        assert result.discount_percent == 25
        assert result.final_price == 150

    def test_original_final(self):
        result = calculate_discount(OriginalFinal(original_price=80, final_price=60))
        assert result.discount_amount == 20
        assert result.discount_percent == 25

    def test_percent_final(self):
        result = calculate_discount(PercentFinal(discount_percent=20, final_price=80))
        assert result.original_price == pytest.approx(100)
        assert result.discount_amount == pytest.approx(20)

    def test_amount_final(self):
        result = calculate_discount(AmountFinal(discount_amount=15, final_price=85))
        assert result.original_price == 100
        assert result.discount_percent == pytest.approx(15)


class TestDiscountEdgeCases:
    """Test rejected and degenerate inputs."""

    def test_full_discount_from_final_price(self):
        with pytest.raises(DomainError):
            calculate_discount(PercentFinal(discount_percent=100, final_price=0))

    def test_full_discount_from_original(self):
        result = calculate_discount(OriginalPercent(original_price=50, discount_percent=100))
        assert result.final_price == 0

    def test_zero_original_price(self):
        with pytest.raises(DomainError):
            calculate_discount(AmountFinal(discount_amount=0, final_price=0))

    def test_final_above_original_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_discount(OriginalFinal(original_price=50, final_price=60))

    def test_percent_above_100_rejected(self):
        with pytest.raises(InvalidInputError):
            calculate_discount(OriginalPercent(original_price=50, discount_percent=120))


class TestFromKnown:
    """Test picking a variant by discount mode."""

    def test_percent_mode(self):
        inputs = discount.from_known(original_price=200, discount_percent=30)
        assert inputs == OriginalPercent(200, 30)

    def test_fixed_mode_ignores_percent(self):
        inputs = discount.from_known(
            original_price=100, discount_percent=10, discount_amount=5, mode="fixed"
        )
        assert inputs == OriginalAmount(100, 5)

    def test_percent_mode_ignores_amount(self):
        with pytest.raises(InvalidInputError):
            discount.from_known(original_price=100, discount_amount=5)

    def test_unknown_mode(self):
        with pytest.raises(InvalidInputError):
            discount.from_known(original_price=100, final_price=90, mode="bogus")

    def test_contradictory_final_price_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            discount.from_known(original_price=200, discount_percent=30, final_price=150)
        assert exc_info.value.errors == ["Final price does not match the other values"]

    def test_consistent_final_price_accepted(self):
        inputs = discount.from_known(original_price=200, discount_percent=30, final_price=140)
        assert inputs == OriginalPercent(200, 30)

    def test_invalid_unused_value_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            discount.from_known(original_price=200, discount_amount=50, final_price=-1, mode="fixed")
        assert "Final price cannot be negative" in exc_info.value.errors


class TestDiscountRoundTrip:
    """Re-solving from any two outputs reproduces the same result."""

    @pytest.mark.parametrize(
        "mode, pair",
        [
            ("percent", ("original_price", "discount_percent")),
            ("percent", ("original_price", "final_price")),
            ("percent", ("discount_percent", "final_price")),
            ("fixed", ("original_price", "discount_amount")),
            ("fixed", ("discount_amount", "final_price")),
        ],
    )
    def test_round_trip(self, mode, pair):
        original = calculate_discount(OriginalPercent(original_price=250, discount_percent=12))
        known = {name: getattr(original, name) for name in pair}
        result = calculate_discount(discount.from_known(mode=mode, **known))
        assert result.original_price == pytest.approx(original.original_price)
        assert result.discount_percent == pytest.approx(original.discount_percent)
        assert result.final_price == pytest.approx(original.final_price)
