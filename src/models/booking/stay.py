"""Stay dates, stay constraints and date verdicts."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DateRole(str, Enum):
    """Which endpoint of the stay a candidate date is proposed for."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class DateRejection(str, Enum):
    """Reasons a candidate stay date is refused."""

    PAST_DATE = "past_date"
    BLACKOUT_DATE = "blackout_date"
    MISSING_CHECK_IN = "missing_check_in"
    CHECK_OUT_NOT_AFTER_CHECK_IN = "check_out_not_after_check_in"
    BELOW_MINIMUM_STAY = "below_minimum_stay"
    EXCEEDS_MAXIMUM_STAY = "exceeds_maximum_stay"


class DateRange(BaseModel):
    """Check-in / check-out pair; either side may still be unselected."""

    check_in: Optional[date] = None
    check_out: Optional[date] = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_complete(self) -> bool:
        return self.check_in is not None and self.check_out is not None

    @property
    def nights(self) -> int:
        """Whole nights between check-in and check-out, 0 when incomplete."""
        if self.check_in is None or self.check_out is None:
            return 0
        return (self.check_out - self.check_in).days


class StayConstraints(BaseModel):
    """Stay-length bounds and blackout calendar of one property."""

    min_stay_nights: int = Field(default=1, ge=1)
    max_stay_nights: int = Field(default=30, ge=1)
    blackout_dates: frozenset[date] = frozenset()

    model_config = ConfigDict(frozen=True)


class DateVerdict(BaseModel):
    """Outcome of validating one candidate date."""

    accepted: bool
    role: DateRole
    candidate: date
    reason: Optional[DateRejection] = None
    message: Optional[str] = None

    model_config = ConfigDict(frozen=True)
