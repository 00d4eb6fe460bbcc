"""Commands accepted by the booking reducer."""

from datetime import date
from decimal import Decimal
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from src.models.booking.guests import GuestCategory
from src.models.booking.payment import GuestContact, PaymentMethod
from src.models.booking.stay import DateRole
from src.models.catalog.promotion import PromoCode
from src.models.catalog.room import Room
from src.models.catalog.time_slot import SlotSide


class WizardCommand(BaseModel):
    """Base of every user or collaborator event fed to the reducer."""

    model_config = ConfigDict(frozen=True)


class SelectRoom(WizardCommand):
    room: Room


class SelectDate(WizardCommand):
    role: DateRole
    candidate: date


class ClearDates(WizardCommand):
    pass


class AdjustGuests(WizardCommand):
    category: GuestCategory
    delta: Literal[1, -1]


class SelectTimeSlot(WizardCommand):
    """Pick a check-in or check-out time; None returns to no selection."""

    side: SlotSide
    time: Optional[str] = None


class SetGuestContact(WizardCommand):
    contact: GuestContact


class ApplyPromo(WizardCommand):
    """Apply a code against the synchronous catalog of the wizard context."""

    code: str


class PromoLookupStarted(WizardCommand):
    request_id: int
    code: str


class PromoLookupResolved(WizardCommand):
    """Outcome of an async catalog lookup, matched by request id."""

    request_id: int
    code: str
    promo: Optional[PromoCode] = None
    failed: bool = False


class RemovePromo(WizardCommand):
    pass


class SkipPromotion(WizardCommand):
    pass


class SelectPaymentMethod(WizardCommand):
    method: PaymentMethod


class PaymentProcessed(WizardCommand):
    """Report from the payment collaborator that a charge went through."""

    reference: str = Field(min_length=1)
    amount: Decimal


class Advance(WizardCommand):
    pass


class GoBack(WizardCommand):
    pass


Command = Union[
    SelectRoom,
    SelectDate,
    ClearDates,
    AdjustGuests,
    SelectTimeSlot,
    SetGuestContact,
    ApplyPromo,
    PromoLookupStarted,
    PromoLookupResolved,
    RemovePromo,
    SkipPromotion,
    SelectPaymentMethod,
    PaymentProcessed,
    Advance,
    GoBack,
]
