"""Unit tests for promotion code validation and discounts."""

from datetime import date
from decimal import Decimal

import pytest

from src.models.booking import PromoError
from src.models.catalog import PromoCode, PromoType
from src.rules import DISCOUNT_RULES, PromoCodeEngine


TODAY = date(2026, 6, 1)


def apply(code, subtotal, catalog, **kwargs):
    kwargs.setdefault("today", TODAY)
    return PromoCodeEngine.apply(code, Decimal(subtotal), catalog, **kwargs)


class TestClassification:
    """Tests for the error classification order."""

    def test_normalize(self):
        assert PromoCodeEngine.normalize("  save50 ") == "SAVE50"
        assert PromoCodeEngine.normalize(None) == ""

    @pytest.mark.parametrize("code", ["", "   ", None])
    def test_empty_code(self, code, promo_catalog):
        result = apply(code, "300", promo_catalog)

        assert result.error == PromoError.EMPTY_CODE
        assert result.discount == 0

    def test_not_found(self, promo_catalog):
        result = apply("NOPE", "300", promo_catalog)

        assert result.error == PromoError.NOT_FOUND
        assert not result.applied

    def test_expired_wins_over_invalid(self, promo_catalog):
        """Test a code that is both expired and flagged invalid."""
        result = apply("expired", "300", promo_catalog)

        assert result.error == PromoError.EXPIRED
        assert result.discount == 0

    def test_expired_while_flagged_valid(self, promo_catalog):
        result = apply("LASTWINTER", "300", promo_catalog)

        assert result.error == PromoError.EXPIRED

    def test_last_valid_day_is_inclusive(self, promo_catalog):
        result = apply("SUMMER15", "300", promo_catalog, today=date(2026, 8, 31))

        assert result.applied

    def test_invalid(self, promo_catalog):
        result = apply("PAUSED", "300", promo_catalog)

        assert result.error == PromoError.INVALID

    def test_below_minimum(self, promo_catalog):
        result = apply("WELCOME20", "999.99", promo_catalog)

        assert result.error == PromoError.BELOW_MINIMUM
        assert "1000" in result.detail

    def test_minimum_reached_exactly(self, promo_catalog):
        result = apply("WELCOME20", "1000", promo_catalog)

        assert result.applied
        assert result.discount == Decimal("80")


class TestDiscounts:
    """Tests for per-type discount computation and caps."""

    def test_fixed(self, promo_catalog):
        result = apply("save50", "300", promo_catalog)

        assert result.applied
        assert result.promo.type == PromoType.FIXED
        assert result.discount == Decimal("50")

    def test_percentage_capped_by_max_discount(self, promo_catalog):
        """Test 15% of 300 = 45 capped to 40."""
        result = apply("SUMMER15", "300", promo_catalog)

        assert result.discount == Decimal("40")

    def test_percentage_below_cap(self, promo_catalog):
        result = apply("SUMMER15", "200", promo_catalog)

        assert result.discount == Decimal("30")

    def test_fixed_capped_by_subtotal(self, promo_catalog):
        result = apply("BIGFIXED", "300", promo_catalog)

        assert result.discount == Decimal("300")

    def test_free_night_booking_scope(self, promo_catalog):
        """Test one free night of a 3 night, 2 room stay at 100 per room."""
        result = apply("FREENIGHT", "600", promo_catalog, nights=3, rooms=2)

        assert result.discount == Decimal("200")

    def test_free_night_room_scope(self, promo_catalog):
        result = apply(
            "FREENIGHT", "600", promo_catalog, nights=3, rooms=2, free_night_scope="room"
        )

        assert result.discount == Decimal("100")

    def test_free_night_without_nights(self):
        promo = PromoCode(code="FN", type=PromoType.FREE_NIGHT, value=Decimal("1"))

        result = PromoCodeEngine.evaluate("FN", promo, Decimal("0"), nights=0, today=TODAY)

        assert result.discount == 0

    def test_discount_bounds(self, promo_catalog):
        """Test 0 <= discount <= subtotal and <= max_discount for every code."""
        for subtotal in ("0", "50", "300", "1200", "5000"):
            for code, promo in promo_catalog.items():
                result = apply(code, subtotal, promo_catalog, nights=3, rooms=1)
                if not result.applied:
                    continue
                assert 0 <= result.discount <= Decimal(subtotal)
                if promo.max_discount is not None:
                    assert result.discount <= promo.max_discount

    def test_changed_subtotal_recomputes(self, promo_catalog):
        """Test that a new subtotal never reuses the previous discount."""
        first = apply("SUMMER15", "100", promo_catalog)
        again = apply("SUMMER15", "100", promo_catalog)
        second = apply("SUMMER15", "200", promo_catalog)

        assert first == again
        assert first.discount == Decimal("15")
        assert second.discount == Decimal("30")

    def test_every_type_has_a_rule(self):
        assert set(DISCOUNT_RULES) == set(PromoType)

    def test_evaluate_prefetched_promo(self, promo_catalog):
        """Test evaluating a promotion returned by an async lookup."""
        result = PromoCodeEngine.evaluate(
            " save50", promo_catalog["SAVE50"], Decimal("300"), today=TODAY
        )

        assert result.code == "SAVE50"
        assert result.discount == Decimal("50")
