"""Guest counters and the per-room selection of the multi-room picker."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.models.catalog.room import Room


class GuestCategory(str, Enum):
    """Counter adjusted by the guest picker."""

    ADULTS = "adults"
    CHILDREN = "children"
    ROOMS = "rooms"


class GuestLimits(BaseModel):
    """Business bounds for each guest counter (not physical limits)."""

    min_adults: int = 1
    max_adults: int = 8
    min_children: int = 0
    max_children: int = 4
    min_rooms: int = 1
    max_rooms: int = 5

    model_config = ConfigDict(frozen=True)

    def bounds(self, category: GuestCategory) -> tuple[int, int]:
        """Return the (floor, ceiling) pair of a counter."""
        if category == GuestCategory.ADULTS:
            return self.min_adults, self.max_adults
        if category == GuestCategory.CHILDREN:
            return self.min_children, self.max_children
        return self.min_rooms, self.max_rooms


class GuestConfiguration(BaseModel):
    """Adults, children and rooms requested for the stay."""

    adults: int = Field(default=2, ge=1)
    children: int = Field(default=0, ge=0)
    rooms: int = Field(default=1, ge=1)

    model_config = ConfigDict(frozen=True)

    @property
    def total_guests(self) -> int:
        return self.adults + self.children

    def count(self, category: GuestCategory) -> int:
        return getattr(self, category.value)


class RoomGuestEntry(BaseModel):
    """One room type in a multi-room selection with its own guest pair."""

    room: Room
    quantity: int = Field(default=1, ge=1)
    adults: int = Field(default=1, ge=1)
    children: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def guests_per_room(self) -> int:
        return self.adults + self.children


class RoomSelection(BaseModel):
    """Ordered room entries picked in the multi-room selector."""

    entries: tuple[RoomGuestEntry, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def total_rooms(self) -> int:
        return sum(entry.quantity for entry in self.entries)

    @property
    def total_guests(self) -> int:
        return sum(entry.guests_per_room * entry.quantity for entry in self.entries)

    @property
    def nightly_rate(self) -> Decimal:
        """Price of one night for every selected room."""
        return sum(
            (entry.room.price_per_night * entry.quantity for entry in self.entries),
            Decimal("0"),
        )

    def find(self, room_id: str) -> RoomGuestEntry | None:
        return next((entry for entry in self.entries if entry.room.id == room_id), None)
