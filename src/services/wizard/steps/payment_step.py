"""Guard for leaving the payment step."""

from src.models.booking.pricing import round_money
from src.models.booking.state import BookingState, WizardStep
from src.models.field_error import FieldError

from ..base_step import StepGuard
from ..context import WizardContext


class PaymentGuard(StepGuard):
    """Requires a priced booking and a processed payment for the presented total."""

    step = WizardStep.PAYMENT

    def check(self, state: BookingState, context: WizardContext) -> list[FieldError]:
        errors = []
        breakdown = state.price_breakdown

        if not breakdown.is_priced or breakdown.total < 0:
            errors.append(
                FieldError.blocked("price", "not_priced", "The booking has no price yet.")
            )

        if state.payment_method is None:
            errors.append(
                FieldError.blocked(
                    "payment_method", "payment_method_required", "Please choose how to pay."
                )
            )

        if state.payment_reference is None or state.paid_amount is None:
            errors.append(
                FieldError.blocked("payment", "payment_required", "The payment has not been processed.")
            )
        elif state.paid_amount != round_money(breakdown.total):
            errors.append(
                FieldError.blocked(
                    "payment",
                    "amount_mismatch",
                    "The booking total changed after payment. Please pay the updated amount.",
                )
            )

        return errors
