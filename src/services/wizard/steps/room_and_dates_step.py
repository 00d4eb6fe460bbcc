"""Guard for leaving the room and dates step."""

from src.models.booking.state import BookingState, WizardStep
from src.models.field_error import FieldError
from src.rules.date_range_validator import DateRangeValidator

from ..base_step import StepGuard
from ..context import WizardContext


class RoomAndDatesGuard(StepGuard):
    """Requires a selected room and a complete range that still validates."""

    step = WizardStep.ROOM_AND_DATES

    def check(self, state: BookingState, context: WizardContext) -> list[FieldError]:
        errors = []

        if state.room is None:
            errors.append(FieldError.blocked("room", "room_required", "Please select a room."))

        if not state.date_range.is_complete:
            errors.append(
                FieldError.blocked(
                    "dates",
                    "dates_incomplete",
                    "Please select both check-in and check-out dates.",
                )
            )
            return errors

        # Dates may have gone stale since they were picked
        for verdict in DateRangeValidator.validate_range(
            state.date_range, context.constraints, context.today()
        ):
            errors.append(
                FieldError.blocked(verdict.role.value, verdict.reason.value, verdict.message)
            )

        return errors
