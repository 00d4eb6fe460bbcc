"""Guard for leaving the promotion step."""

from src.models.booking.state import BookingState, WizardStep
from src.models.field_error import FieldError

from ..base_step import StepGuard
from ..context import WizardContext


class PromotionGuard(StepGuard):
    """Promotion is optional; only an in-flight code lookup holds the step."""

    step = WizardStep.PROMOTION

    def check(self, state: BookingState, context: WizardContext) -> list[FieldError]:
        if state.pending_promo_request is not None:
            return [
                FieldError.blocked(
                    "promo_code",
                    "promo_lookup_pending",
                    "Still checking your promotion code.",
                )
            ]
        return []
