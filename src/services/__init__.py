"""Business services package."""

from src.services.wizard import BookingWizard, TransitionResult, WizardContext

__all__ = [
    "BookingWizard",
    "TransitionResult",
    "WizardContext",
]
