"""Payment hand-off payload and confirmation terms."""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from structlog import get_logger

from src.models.booking.payment import (
    BookingConfirmation,
    ConfirmationStatus,
    PaymentItem,
    PaymentMethod,
    PaymentRequest,
)
from src.models.booking.pricing import round_money
from src.models.booking.state import BookingState
from src.models.catalog.time_slot import TimeSlot
from src.rules.time_slot_pricing import TimeSlotPricing

logger = get_logger(__name__)


def _percent_label(rate: Decimal) -> str:
    return f"{(rate * 100).normalize():f}%"


class PaymentRequestBuilder:
    """Turns a priced BookingState into what the payment collaborator needs."""

    @staticmethod
    def generate_order_code(now: datetime) -> str:
        """Numeric order code derived from a timestamp in milliseconds."""
        return str(int(now.timestamp() * 1000))

    @staticmethod
    def build(
        state: BookingState,
        check_in_slots: Iterable[TimeSlot],
        check_out_slots: Iterable[TimeSlot],
        tax_rate: Decimal,
        service_fee_rate: Decimal,
        order_code: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PaymentRequest:
        """Build the payment request of a priced booking.

        Args:
            state: Booking with room, dates and price breakdown
            check_in_slots: Slot table used to label the check-in add-on
            check_out_slots: Slot table used to label the check-out add-on
            tax_rate: Rate shown on the taxes line
            service_fee_rate: Rate shown on the service fee line
            order_code: Explicit order code, generated from `now` when omitted
            now: Reference time for the generated order code

        Returns:
            PaymentRequest with rounded amounts

        Raises:
            ValueError: If the booking has no room, dates or payment method
        """
        if state.room is None or not state.date_range.is_complete:
            raise ValueError("Payment request needs a room and a complete date range")
        if state.payment_method is None:
            raise ValueError("Payment request needs a payment method")

        room = state.room
        breakdown = state.price_breakdown
        nights = breakdown.nights
        order_code = order_code or PaymentRequestBuilder.generate_order_code(
            now or datetime.now()
        )

        items = [
            PaymentItem(
                name=f"{room.name} x {nights} {'night' if nights == 1 else 'nights'}",
                quantity=breakdown.rooms,
                price=round_money(room.price_per_night * nights),
            ),
            PaymentItem(
                name=f"Taxes ({_percent_label(tax_rate)})",
                price=round_money(breakdown.taxes),
            ),
            PaymentItem(
                name=f"Service fee ({_percent_label(service_fee_rate)})",
                price=round_money(breakdown.service_fee),
            ),
        ]

        if state.check_in_time is not None:
            fee = TimeSlotPricing.fee_for(state.check_in_time, check_in_slots)
            if fee > 0:
                items.append(
                    PaymentItem(name=f"Early check-in {state.check_in_time}", price=round_money(fee))
                )
        if state.check_out_time is not None:
            fee = TimeSlotPricing.fee_for(state.check_out_time, check_out_slots)
            if fee > 0:
                items.append(
                    PaymentItem(name=f"Late check-out {state.check_out_time}", price=round_money(fee))
                )

        if state.promo is not None and breakdown.discount > 0:
            items.append(
                PaymentItem(
                    name=f"Promotion {state.promo.code}",
                    price=-round_money(breakdown.discount),
                )
            )

        contact = state.contact
        description = (
            f"Booking {room.name} "
            f"({state.date_range.check_in.isoformat()} - {state.date_range.check_out.isoformat()})"
        )

        logger.info(
            "Payment request built",
            booking_id=state.booking_id,
            order_code=order_code,
            amount=str(round_money(breakdown.total)),
            payment_method=state.payment_method.value,
        )

        return PaymentRequest(
            order_code=order_code,
            amount=round_money(breakdown.total),
            currency=breakdown.currency,
            description=description,
            items=tuple(items),
            buyer_name=contact.full_name if contact else "",
            buyer_email=contact.email.strip() if contact else "",
            buyer_phone=contact.phone.strip() if contact else "",
            payment_method=state.payment_method,
        )

    @staticmethod
    def deposit_terms(
        total: Decimal,
        booked_at: datetime,
        deposit_rate: Decimal,
        due_hours: int,
    ) -> tuple[Decimal, datetime]:
        """Deposit amount and deadline of a pay-later booking."""
        return round_money(total * deposit_rate), booked_at + timedelta(hours=due_hours)

    @staticmethod
    def confirm(
        state: BookingState,
        payment_reference: str,
        booked_at: datetime,
        deposit_rate: Decimal,
        deposit_due_hours: int,
    ) -> BookingConfirmation:
        """Produce the confirmation record of a paid (or deposit-pending) booking."""
        total = round_money(state.price_breakdown.total)
        deposit_amount = None
        deposit_due_at = None
        status = ConfirmationStatus.CONFIRMED

        if state.payment_method == PaymentMethod.PAY_LATER:
            deposit_amount, deposit_due_at = PaymentRequestBuilder.deposit_terms(
                state.price_breakdown.total, booked_at, deposit_rate, deposit_due_hours
            )
            status = ConfirmationStatus.PENDING_DEPOSIT

        return BookingConfirmation(
            booking_id=state.booking_id,
            confirmation_number=f"BK-{state.booking_id[:8].upper()}",
            status=status,
            payment_method=state.payment_method,
            payment_reference=payment_reference,
            booked_at=booked_at,
            total=total,
            deposit_amount=deposit_amount,
            deposit_due_at=deposit_due_at,
        )
