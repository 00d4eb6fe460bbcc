"""Add-on fees for early check-in and late check-out."""

from decimal import Decimal
from typing import Iterable, Optional

from src.models.catalog.time_slot import TimeSlot


class UnknownTimeSlotError(ValueError):
    """Raised when a time is not part of the offered slot table."""

    pass


class TimeSlotPricing:
    """Exact-match fee lookup over a closed table of time slots."""

    @staticmethod
    def fee_for(time: str, slot_table: Iterable[TimeSlot]) -> Decimal:
        """Return the add-on fee of a time slot.

        Args:
            time: Slot time as HH:MM
            slot_table: Ordered slots offered for one side of the stay

        Returns:
            Fee of the matching slot (0 for the standard slot)

        Raises:
            UnknownTimeSlotError: If the time is not in the table
        """
        for slot in slot_table:
            if slot.time == time:
                return slot.fee
        raise UnknownTimeSlotError(f"Time slot {time} is not offered")

    @staticmethod
    def is_offered(time: str, slot_table: Iterable[TimeSlot]) -> bool:
        return any(slot.time == time for slot in slot_table)

    @staticmethod
    def standard_time(slot_table: Iterable[TimeSlot]) -> Optional[str]:
        """Time of the fee-free slot, if the table has one."""
        return next((slot.time for slot in slot_table if slot.is_standard), None)

    @staticmethod
    def add_on_fees(
        check_in_time: Optional[str],
        check_out_time: Optional[str],
        check_in_slots: Iterable[TimeSlot],
        check_out_slots: Iterable[TimeSlot],
    ) -> Decimal:
        """Sum the independent check-in and check-out fees.

        An unselected side contributes nothing.
        """
        total = Decimal("0")
        if check_in_time is not None:
            total += TimeSlotPricing.fee_for(check_in_time, check_in_slots)
        if check_out_time is not None:
            total += TimeSlotPricing.fee_for(check_out_time, check_out_slots)
        return total
