"""Booking wizard: step guards, commands, reducer and session shell."""

from .base_step import StepGuard
from .commands import (
    AdjustGuests,
    Advance,
    ApplyPromo,
    ClearDates,
    Command,
    GoBack,
    PaymentProcessed,
    PromoLookupResolved,
    PromoLookupStarted,
    RemovePromo,
    SelectDate,
    SelectPaymentMethod,
    SelectRoom,
    SelectTimeSlot,
    SetGuestContact,
    SkipPromotion,
)
from .context import WizardContext
from .reducer import TransitionResult, reduce, reprice
from .wizard import BookingWizard

__all__ = [
    "BookingWizard",
    "WizardContext",
    "StepGuard",
    "TransitionResult",
    "reduce",
    "reprice",
    "Command",
    "SelectRoom",
    "SelectDate",
    "ClearDates",
    "AdjustGuests",
    "SelectTimeSlot",
    "SetGuestContact",
    "ApplyPromo",
    "PromoLookupStarted",
    "PromoLookupResolved",
    "RemovePromo",
    "SkipPromotion",
    "SelectPaymentMethod",
    "PaymentProcessed",
    "Advance",
    "GoBack",
]
