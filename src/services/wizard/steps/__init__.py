"""Entry guards, one per step that can be left forward."""

from src.models.booking.state import WizardStep

from .guest_info_step import GuestInfoGuard
from .payment_step import PaymentGuard
from .promotion_step import PromotionGuard
from .room_and_dates_step import RoomAndDatesGuard

GUARDS = {
    WizardStep.ROOM_AND_DATES: RoomAndDatesGuard(),
    WizardStep.GUEST_INFO: GuestInfoGuard(),
    WizardStep.PROMOTION: PromotionGuard(),
    WizardStep.PAYMENT: PaymentGuard(),
}

__all__ = [
    "GUARDS",
    "RoomAndDatesGuard",
    "GuestInfoGuard",
    "PromotionGuard",
    "PaymentGuard",
]
