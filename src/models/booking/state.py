"""Booking wizard steps and the booking state threaded through them."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.models.booking.guests import GuestConfiguration
from src.models.booking.payment import BookingConfirmation, GuestContact, PaymentMethod
from src.models.booking.pricing import PriceBreakdown
from src.models.booking.stay import DateRange
from src.models.catalog.promotion import PromoCode
from src.models.catalog.room import Room


class WizardStep(str, Enum):
    """Booking wizard steps in their only allowed forward order."""

    ROOM_AND_DATES = "room_and_dates"
    GUEST_INFO = "guest_info"
    PROMOTION = "promotion"
    PAYMENT = "payment"
    CONFIRMATION = "confirmation"

    @property
    def position(self) -> int:
        return _STEP_ORDER.index(self)

    def next(self) -> Optional["WizardStep"]:
        """Following step, None for the terminal step."""
        index = self.position + 1
        return _STEP_ORDER[index] if index < len(_STEP_ORDER) else None

    def previous(self) -> Optional["WizardStep"]:
        """Preceding step, None for the first step."""
        index = self.position - 1
        return _STEP_ORDER[index] if index >= 0 else None


_STEP_ORDER = list(WizardStep)


class BookingState(BaseModel):
    """Single source of truth of one booking session.

    Instances are immutable; every wizard transition produces a new one
    via model_copy(update=...).
    """

    booking_id: str = Field(description="Session-local booking identifier")
    step: WizardStep = WizardStep.ROOM_AND_DATES
    room: Optional[Room] = None
    date_range: DateRange = DateRange()
    guests: GuestConfiguration = GuestConfiguration()
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    contact: Optional[GuestContact] = None
    promo: Optional[PromoCode] = None
    discount: Decimal = Decimal("0")
    pending_promo_request: Optional[int] = Field(
        None,
        description="Id of the in-flight promotion lookup, if any",
    )
    price_breakdown: PriceBreakdown = PriceBreakdown()
    payment_method: Optional[PaymentMethod] = None
    payment_reference: Optional[str] = None
    paid_amount: Optional[Decimal] = None
    confirmation: Optional[BookingConfirmation] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_final(self) -> bool:
        return self.step == WizardStep.CONFIRMATION

    @property
    def promo_code(self) -> Optional[str]:
        return self.promo.code if self.promo else None

    def summary(self) -> dict[str, object]:
        """Compact view used in log events."""
        return {
            "step": self.step.value,
            "room_id": self.room.id if self.room else None,
            "check_in": self.date_range.check_in.isoformat() if self.date_range.check_in else None,
            "check_out": self.date_range.check_out.isoformat() if self.date_range.check_out else None,
            "adults": self.guests.adults,
            "children": self.guests.children,
            "rooms": self.guests.rooms,
            "promo": self.promo_code,
            "total": str(self.price_breakdown.total),
        }
