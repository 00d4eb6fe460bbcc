"""Read-only catalog data consumed by the booking core."""

from src.models.catalog.promotion import PromoCode, PromoType
from src.models.catalog.room import Room
from src.models.catalog.time_slot import (
    EARLY_CHECK_IN_SLOTS,
    LATE_CHECK_OUT_SLOTS,
    SlotSide,
    TimeSlot,
)

__all__ = [
    "Room",
    "PromoCode",
    "PromoType",
    "TimeSlot",
    "SlotSide",
    "EARLY_CHECK_IN_SLOTS",
    "LATE_CHECK_OUT_SLOTS",
]
