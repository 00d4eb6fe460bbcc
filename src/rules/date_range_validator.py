"""Validation of check-in / check-out selections."""

from datetime import date
from typing import Optional

from structlog import get_logger

from src.models.booking.stay import (
    DateRange,
    DateRejection,
    DateRole,
    DateVerdict,
    StayConstraints,
)

logger = get_logger(__name__)


def _plural_nights(count: int) -> str:
    return f"{count} night" if count == 1 else f"{count} nights"


class DateRangeValidator:
    """Decides whether a candidate date may become a stay endpoint.

    All methods are pure functions of their arguments: "today" is passed in
    explicitly by the caller so verdicts are reproducible.
    """

    @staticmethod
    def validate(
        candidate: date,
        role: DateRole,
        date_range: DateRange,
        constraints: StayConstraints,
        today: Optional[date] = None,
    ) -> DateVerdict:
        """Validate one candidate date for the given role.

        Checks, in order:
        - the date is not before today
        - the date is not a blackout date
        - for check-out: a check-in exists and the stay length is within
          [min_stay_nights, max_stay_nights]

        Args:
            candidate: Proposed calendar date
            role: Endpoint the date is proposed for
            date_range: Currently stored range (its check-in anchors check-out)
            constraints: Stay bounds and blackout calendar
            today: Reference day, defaults to the local calendar day

        Returns:
            Verdict with a rejection reason and message when refused
        """
        today = today or date.today()

        def reject(reason: DateRejection, message: str) -> DateVerdict:
            logger.debug(
                "Date rejected",
                role=role.value,
                candidate=candidate.isoformat(),
                reason=reason.value,
            )
            return DateVerdict(
                accepted=False,
                role=role,
                candidate=candidate,
                reason=reason,
                message=message,
            )

        if candidate < today:
            return reject(DateRejection.PAST_DATE, "Dates in the past cannot be selected.")

        if candidate in constraints.blackout_dates:
            return reject(
                DateRejection.BLACKOUT_DATE,
                f"{candidate.isoformat()} is not available at this property.",
            )

        if role == DateRole.CHECK_OUT:
            check_in = date_range.check_in
            if check_in is None:
                return reject(
                    DateRejection.MISSING_CHECK_IN,
                    "Select a check-in date before choosing check-out.",
                )

            stay_nights = (candidate - check_in).days
            if stay_nights <= 0:
                return reject(
                    DateRejection.CHECK_OUT_NOT_AFTER_CHECK_IN,
                    "Check-out must be after check-in.",
                )
            if stay_nights < constraints.min_stay_nights:
                return reject(
                    DateRejection.BELOW_MINIMUM_STAY,
                    f"Minimum stay is {_plural_nights(constraints.min_stay_nights)}.",
                )
            if stay_nights > constraints.max_stay_nights:
                return reject(
                    DateRejection.EXCEEDS_MAXIMUM_STAY,
                    "Check-out exceeds maximum stay of "
                    f"{_plural_nights(constraints.max_stay_nights)}.",
                )

        return DateVerdict(accepted=True, role=role, candidate=candidate)

    @staticmethod
    def select(
        candidate: date,
        role: DateRole,
        date_range: DateRange,
        constraints: StayConstraints,
        today: Optional[date] = None,
    ) -> tuple[DateRange, DateVerdict]:
        """Validate a candidate and merge it into the range when accepted.

        A newly accepted check-in always clears the stored check-out, so a
        changed start date forces the check-out to be chosen again.

        Returns:
            Tuple of (resulting range, verdict); the range is unchanged on rejection
        """
        verdict = DateRangeValidator.validate(candidate, role, date_range, constraints, today)
        if not verdict.accepted:
            return date_range, verdict

        if role == DateRole.CHECK_IN:
            return DateRange(check_in=candidate, check_out=None), verdict
        return DateRange(check_in=date_range.check_in, check_out=candidate), verdict

    @staticmethod
    def validate_range(
        date_range: DateRange,
        constraints: StayConstraints,
        today: Optional[date] = None,
    ) -> list[DateVerdict]:
        """Re-validate both endpoints of a stored range.

        Used before leaving the dates step, since "today" or the blackout
        calendar may have moved since the dates were picked.

        Returns:
            Rejected verdicts only (empty list when the range is valid)
        """
        rejected: list[DateVerdict] = []
        if date_range.check_in is None:
            return rejected

        check_in_verdict = DateRangeValidator.validate(
            date_range.check_in, DateRole.CHECK_IN, DateRange(), constraints, today
        )
        if not check_in_verdict.accepted:
            rejected.append(check_in_verdict)

        if date_range.check_out is not None:
            check_out_verdict = DateRangeValidator.validate(
                date_range.check_out, DateRole.CHECK_OUT, date_range, constraints, today
            )
            if not check_out_verdict.accepted:
                rejected.append(check_out_verdict)

        return rejected

    @staticmethod
    def compute_nights(date_range: DateRange) -> int:
        """Number of nights in the range, 0 if either endpoint is missing."""
        return date_range.nights
