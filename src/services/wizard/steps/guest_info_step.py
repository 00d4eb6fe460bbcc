"""Guard for leaving the guest information step."""

from src.models.booking.state import BookingState, WizardStep
from src.models.field_error import FieldError
from src.rules.contact_validator import GuestContactValidator
from src.rules.guest_configuration import GuestConfigurator

from ..base_step import StepGuard
from ..context import WizardContext


class GuestInfoGuard(StepGuard):
    """Requires guests within bounds and capacity plus a valid lead-guest contact."""

    step = WizardStep.GUEST_INFO

    def check(self, state: BookingState, context: WizardContext) -> list[FieldError]:
        errors = [
            FieldError.blocked(error.field, error.code, error.message)
            for error in GuestConfigurator.bound_errors(state.guests, context.limits)
        ]

        if state.room is None:
            errors.append(FieldError.blocked("room", "room_required", "Please select a room."))
        else:
            capacity_error = GuestConfigurator.check_capacity(state.guests, state.room)
            if capacity_error is not None:
                errors.append(
                    FieldError.blocked(
                        capacity_error.field, capacity_error.code, capacity_error.message
                    )
                )

        if state.contact is None:
            errors.append(
                FieldError.blocked(
                    "contact", "contact_required", "Please enter the lead guest details."
                )
            )
        else:
            errors.extend(
                FieldError.blocked(error.field, error.code, error.message)
                for error in GuestContactValidator.validate(state.contact)
            )

        return errors
