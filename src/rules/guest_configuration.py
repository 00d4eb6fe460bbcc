"""Guest counter adjustments and room capacity checks."""

from typing import Optional

from structlog import get_logger

from src.models.booking.guests import (
    GuestCategory,
    GuestConfiguration,
    GuestLimits,
    RoomGuestEntry,
    RoomSelection,
)
from src.models.catalog.room import Room
from src.models.field_error import FieldError

logger = get_logger(__name__)


class GuestConfigurator:
    """Bounded +1/-1 adjustments of the adults/children/rooms counters."""

    @staticmethod
    def adjust(
        config: GuestConfiguration,
        category: GuestCategory,
        delta: int,
        limits: GuestLimits | None = None,
    ) -> GuestConfiguration:
        """Apply a single-step adjustment to one counter.

        An adjustment that would leave the category's bounds is a no-op:
        the same configuration is returned unchanged.

        Args:
            config: Current configuration
            category: Counter to change
            delta: +1 or -1
            limits: Counter bounds (defaults to GuestLimits())

        Returns:
            Adjusted configuration, or the input when out of bounds

        Raises:
            ValueError: If delta is not +1 or -1
        """
        if delta not in (1, -1):
            raise ValueError(f"Guest adjustments move by one, got delta={delta}")

        limits = limits or GuestLimits()
        floor, ceiling = limits.bounds(category)
        proposed = config.count(category) + delta

        if proposed < floor or proposed > ceiling:
            return config

        return config.model_copy(update={category.value: proposed})

    @staticmethod
    def bound_errors(
        config: GuestConfiguration,
        limits: GuestLimits | None = None,
    ) -> list[FieldError]:
        """Report counters outside their bounds (for configurations built elsewhere)."""
        limits = limits or GuestLimits()
        errors = []
        for category in GuestCategory:
            floor, ceiling = limits.bounds(category)
            value = config.count(category)
            if not floor <= value <= ceiling:
                errors.append(
                    FieldError.rejected(
                        category.value,
                        "out_of_bounds",
                        f"{category.value.capitalize()} must be between {floor} and {ceiling}.",
                    )
                )
        return errors

    @staticmethod
    def check_capacity(config: GuestConfiguration, room: Room) -> Optional[FieldError]:
        """Check adults + children against the capacity of the booked rooms.

        Returns:
            A rejection when the guests do not fit, None otherwise
        """
        capacity = room.max_guests * config.rooms
        if config.total_guests <= capacity:
            return None

        logger.info(
            "Guest capacity exceeded",
            room_id=room.id,
            guests=config.total_guests,
            capacity=capacity,
        )
        return FieldError.rejected(
            "guests",
            "capacity_exceeded",
            f"{config.total_guests} guests do not fit in {config.rooms} x {room.name} "
            f"(max {capacity}). Add a room or reduce the number of guests.",
        )


class RoomSelector:
    """Multi-room picker where each room type carries its own guest pair."""

    @staticmethod
    def add_room(
        selection: RoomSelection,
        room: Room,
        limits: GuestLimits | None = None,
    ) -> RoomSelection:
        """Add a room type with 1 adult / 0 children, or one more of it."""
        if selection.find(room.id) is not None:
            return RoomSelector.update_quantity(selection, room.id, 1, limits)

        limits = limits or GuestLimits()
        if selection.total_rooms + 1 > limits.max_rooms:
            return selection

        entry = RoomGuestEntry(room=room, quantity=1, adults=1, children=0)
        return RoomSelection(entries=selection.entries + (entry,))

    @staticmethod
    def update_quantity(
        selection: RoomSelection,
        room_id: str,
        delta: int,
        limits: GuestLimits | None = None,
    ) -> RoomSelection:
        """Change how many rooms of a type are booked (never below 1)."""
        limits = limits or GuestLimits()
        entries = []
        for entry in selection.entries:
            if entry.room.id == room_id:
                quantity = max(1, entry.quantity + delta)
                if selection.total_rooms - entry.quantity + quantity > limits.max_rooms:
                    return selection
                entry = entry.model_copy(update={"quantity": quantity})
            entries.append(entry)
        return RoomSelection(entries=tuple(entries))

    @staticmethod
    def update_guests(
        selection: RoomSelection,
        room_id: str,
        adults: int,
        children: int,
    ) -> RoomSelection:
        """Set the per-room guest pair of one room type.

        Counts are clamped to the room's adult/child limits; when the
        clamped pair still exceeds the room's guest capacity the entry is
        left unchanged.
        """
        entries = []
        for entry in selection.entries:
            if entry.room.id == room_id:
                room = entry.room
                valid_adults = max(1, min(room.adult_limit, adults))
                valid_children = max(0, min(room.child_limit, children))
                if valid_adults + valid_children <= room.max_guests:
                    entry = entry.model_copy(
                        update={"adults": valid_adults, "children": valid_children}
                    )
            entries.append(entry)
        return RoomSelection(entries=tuple(entries))

    @staticmethod
    def remove_room(selection: RoomSelection, room_id: str) -> RoomSelection:
        return RoomSelection(
            entries=tuple(entry for entry in selection.entries if entry.room.id != room_id)
        )

    @staticmethod
    def capacity_errors(selection: RoomSelection) -> list[FieldError]:
        """Aggregate re-check of every entry against its room capacity."""
        errors = []
        for entry in selection.entries:
            room = entry.room
            if (
                entry.adults > room.adult_limit
                or entry.children > room.child_limit
                or entry.guests_per_room > room.max_guests
            ):
                errors.append(
                    FieldError.rejected(
                        f"rooms.{room.id}",
                        "capacity_exceeded",
                        f"{room.name} holds at most {room.max_guests} guests per room.",
                    )
                )
        return errors
