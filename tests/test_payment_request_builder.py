"""Unit tests for the payment hand-off payload."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from src.models.booking import (
    BookingState,
    ConfirmationStatus,
    DateRange,
    PaymentMethod,
)
from src.models.catalog import EARLY_CHECK_IN_SLOTS, LATE_CHECK_OUT_SLOTS
from src.rules import PaymentRequestBuilder, PriceCalculator


BOOKED_AT = datetime(2026, 6, 1, 9, 0)


@pytest.fixture
def priced_state(deluxe_room, contact):
    """Two rooms, two nights, late check-out at 15:00."""
    breakdown = PriceCalculator.compute(
        deluxe_room, nights=2, rooms_count=2, add_on_fees=Decimal("25")
    )
    return BookingState(
        booking_id="a1b2c3d4e5",
        room=deluxe_room,
        date_range=DateRange(check_in=date(2026, 6, 10), check_out=date(2026, 6, 12)),
        check_out_time="15:00",
        contact=contact,
        price_breakdown=breakdown,
        payment_method=PaymentMethod.PAY_LATER,
    )


def build(state, **kwargs):
    return PaymentRequestBuilder.build(
        state,
        EARLY_CHECK_IN_SLOTS,
        LATE_CHECK_OUT_SLOTS,
        tax_rate=Decimal("0.10"),
        service_fee_rate=Decimal("0.05"),
        **kwargs,
    )


class TestPaymentRequestBuilder:
    """Tests for PaymentRequestBuilder."""

    def test_build(self, priced_state):
        request = build(priced_state, order_code="42")

        assert request.amount == Decimal("485.00")
        assert request.currency == "USD"
        assert request.payment_method == PaymentMethod.PAY_LATER
        assert request.items[0].name == "Deluxe King x 2 nights"
        assert request.items[0].quantity == 2
        assert request.items[0].price == Decimal("200.00")
        assert request.items[-1].name == "Late check-out 15:00"
        assert request.buyer_phone == "+84 912 345 678"

    def test_camel_case_dump(self, priced_state):
        payload = build(priced_state, order_code="42").model_dump(by_alias=True)

        assert payload["orderCode"] == "42"
        assert payload["buyerName"] == "Linh Nguyen"

    def test_order_code_from_clock(self, priced_state):
        request = build(priced_state, now=BOOKED_AT)

        assert request.order_code == str(int(BOOKED_AT.timestamp() * 1000))

    def test_requires_payment_method(self, priced_state):
        with pytest.raises(ValueError):
            build(priced_state.model_copy(update={"payment_method": None}))

    def test_requires_dates(self, priced_state):
        with pytest.raises(ValueError):
            build(priced_state.model_copy(update={"date_range": DateRange()}))

    def test_deposit_terms(self):
        amount, due_at = PaymentRequestBuilder.deposit_terms(
            Decimal("485"), BOOKED_AT, Decimal("0.30"), 24
        )

        assert amount == Decimal("145.50")
        assert due_at == BOOKED_AT + timedelta(hours=24)

    def test_confirm_pay_later(self, priced_state):
        confirmation = PaymentRequestBuilder.confirm(
            priced_state, "HOLD-9", BOOKED_AT, Decimal("0.30"), 24
        )

        assert confirmation.status == ConfirmationStatus.PENDING_DEPOSIT
        assert confirmation.confirmation_number == "BK-A1B2C3D4"
        assert confirmation.deposit_amount == Decimal("145.50")

    def test_confirm_online(self, priced_state):
        state = priced_state.model_copy(update={"payment_method": PaymentMethod.ONLINE})

        confirmation = PaymentRequestBuilder.confirm(
            state, "PAY-9", BOOKED_AT, Decimal("0.30"), 24
        )

        assert confirmation.status == ConfirmationStatus.CONFIRMED
        assert confirmation.deposit_due_at is None
