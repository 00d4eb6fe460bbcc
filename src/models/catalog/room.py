"""Pydantic models for rooms supplied by the hotel catalog."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Room(BaseModel):
    """Bookable room type as published by the catalog (read-only)."""

    id: str = Field(description="Catalog room identifier")
    name: str = Field(description="Display name of the room type")
    price_per_night: Decimal = Field(
        alias="pricePerNight",
        ge=0,
        description="Nightly rate for one room",
    )
    currency: str = Field(default="USD", max_length=3, description="ISO 4217 code")
    max_guests: int = Field(
        alias="maxGuests",
        ge=1,
        description="Maximum guests (adults + children) per room",
    )
    max_adults: Optional[int] = Field(None, alias="maxAdults", ge=1)
    max_children: Optional[int] = Field(None, alias="maxChildren", ge=0)

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @property
    def adult_limit(self) -> int:
        """Adults allowed in one room (falls back to the guest capacity)."""
        return self.max_adults if self.max_adults is not None else self.max_guests

    @property
    def child_limit(self) -> int:
        """Children allowed in one room (one bed is always kept for an adult)."""
        if self.max_children is not None:
            return self.max_children
        return max(self.max_guests - 1, 0)
