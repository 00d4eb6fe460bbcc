"""Base class for wizard step guards."""

from abc import ABC, abstractmethod

from structlog import get_logger

from src.models.booking.state import BookingState, WizardStep
from src.models.field_error import FieldError

logger = get_logger(__name__)


class StepGuard(ABC):
    """Entry guard evaluated before the wizard leaves `step`.

    Each guard should:
    1. Implement check()
    2. Read the booking state and the wizard context
    3. Return one TRANSITION_BLOCKED FieldError per unmet requirement
    """

    step: WizardStep

    def __init__(self, name: str | None = None):
        """Initialize the guard.

        Args:
            name: Optional custom name for the guard. Defaults to class name.
        """
        self.name = name or self.__class__.__name__
        self.logger = logger.bind(step=self.name)

    @abstractmethod
    def check(self, state: BookingState, context: "WizardContext") -> list[FieldError]:
        """Evaluate the guard.

        Args:
            state: Booking state about to leave the step
            context: Wizard context

        Returns:
            Blocking errors, empty when the transition may proceed
        """
        pass

    def run(self, state: BookingState, context: "WizardContext") -> list[FieldError]:
        """Run the guard with logging."""
        errors = self.check(state, context)

        if errors:
            self.logger.info(
                "Transition blocked",
                booking_id=state.booking_id,
                codes=[error.code for error in errors],
            )
        else:
            self.logger.debug("Transition allowed", booking_id=state.booking_id)

        return errors

    def get_name(self) -> str:
        return self.name
