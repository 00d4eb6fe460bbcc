"""Booking-side models produced by the reservation core."""

from src.models.booking.guests import (
    GuestCategory,
    GuestConfiguration,
    GuestLimits,
    RoomGuestEntry,
    RoomSelection,
)
from src.models.booking.payment import (
    BookingConfirmation,
    ConfirmationStatus,
    GuestContact,
    PaymentItem,
    PaymentMethod,
    PaymentRequest,
)
from src.models.booking.pricing import (
    PriceBreakdown,
    PromoApplication,
    PromoError,
    round_money,
)
from src.models.booking.state import BookingState, WizardStep
from src.models.booking.stay import (
    DateRange,
    DateRejection,
    DateRole,
    DateVerdict,
    StayConstraints,
)

__all__ = [
    "BookingState",
    "WizardStep",
    "DateRange",
    "DateRole",
    "DateRejection",
    "DateVerdict",
    "StayConstraints",
    "GuestCategory",
    "GuestConfiguration",
    "GuestLimits",
    "RoomGuestEntry",
    "RoomSelection",
    "PriceBreakdown",
    "PromoApplication",
    "PromoError",
    "round_money",
    "GuestContact",
    "PaymentMethod",
    "PaymentItem",
    "PaymentRequest",
    "BookingConfirmation",
    "ConfirmationStatus",
]
