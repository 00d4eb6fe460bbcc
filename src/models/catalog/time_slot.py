"""Check-in / check-out time slot tables."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SlotSide(str, Enum):
    """Which end of the stay a time slot applies to."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class TimeSlot(BaseModel):
    """Selectable arrival or departure time with its add-on fee."""

    time: str = Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$", description="HH:MM")
    label: str
    fee: Decimal = Field(default=Decimal("0"), ge=0, description="0 for the standard slot")

    model_config = ConfigDict(frozen=True)

    @property
    def is_standard(self) -> bool:
        return self.fee == 0


EARLY_CHECK_IN_SLOTS: tuple[TimeSlot, ...] = (
    TimeSlot(time="06:00", label="6:00 AM", fee=Decimal("50")),
    TimeSlot(time="08:00", label="8:00 AM", fee=Decimal("30")),
    TimeSlot(time="10:00", label="10:00 AM", fee=Decimal("20")),
    TimeSlot(time="12:00", label="12:00 PM", fee=Decimal("10")),
    TimeSlot(time="14:00", label="2:00 PM", fee=Decimal("5")),
    TimeSlot(time="15:00", label="3:00 PM (Standard)", fee=Decimal("0")),
)

LATE_CHECK_OUT_SLOTS: tuple[TimeSlot, ...] = (
    TimeSlot(time="11:00", label="11:00 AM (Standard)", fee=Decimal("0")),
    TimeSlot(time="13:00", label="1:00 PM", fee=Decimal("15")),
    TimeSlot(time="15:00", label="3:00 PM", fee=Decimal("25")),
    TimeSlot(time="17:00", label="5:00 PM", fee=Decimal("40")),
    TimeSlot(time="19:00", label="7:00 PM", fee=Decimal("60")),
    TimeSlot(time="21:00", label="9:00 PM", fee=Decimal("80")),
)
