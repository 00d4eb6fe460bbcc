"""Price breakdown and promotion application results."""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.models.catalog.promotion import PromoCode

CENT = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    """Round an amount to 2 decimal places for presentation."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


class PriceBreakdown(BaseModel):
    """Full price of a booking, kept at full precision.

    Invariant: total = subtotal + taxes + service_fee + add_on_fees - discount,
    floored at zero.
    """

    subtotal: Decimal = Decimal("0")
    taxes: Decimal = Decimal("0")
    service_fee: Decimal = Decimal("0")
    add_on_fees: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    currency: str = "USD"
    nights: int = Field(default=0, ge=0)
    rooms: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def is_priced(self) -> bool:
        """True once nights and rooms produce a real room charge."""
        return self.nights > 0 and self.rooms > 0

    def to_display(self) -> dict[str, str]:
        """Rounded amounts for the presentation layer.

        Returns:
            Dictionary of amount name to 2-decimal string
        """
        return {
            "subtotal": str(round_money(self.subtotal)),
            "taxes": str(round_money(self.taxes)),
            "serviceFee": str(round_money(self.service_fee)),
            "addOnFees": str(round_money(self.add_on_fees)),
            "discount": str(round_money(self.discount)),
            "total": str(round_money(self.total)),
            "currency": self.currency,
        }


class PromoError(str, Enum):
    """Reasons a promotion code cannot be applied."""

    EMPTY_CODE = "empty_code"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    BELOW_MINIMUM = "below_minimum"
    INVALID = "invalid"
    LOOKUP_FAILED = "lookup_failed"

    @property
    def message(self) -> str:
        return _PROMO_ERROR_MESSAGES[self]


_PROMO_ERROR_MESSAGES = {
    PromoError.EMPTY_CODE: "Please enter a promotion code.",
    PromoError.NOT_FOUND: "This promotion code does not exist.",
    PromoError.EXPIRED: "This promotion code has expired.",
    PromoError.BELOW_MINIMUM: "The booking does not reach the minimum amount for this code.",
    PromoError.INVALID: "This promotion code is not valid.",
    PromoError.LOOKUP_FAILED: "Promotion codes cannot be checked right now, please try again.",
}


class PromoApplication(BaseModel):
    """Result of applying a promotion code to a subtotal."""

    code: str
    promo: Optional[PromoCode] = None
    discount: Decimal = Decimal("0")
    error: Optional[PromoError] = None
    detail: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def applied(self) -> bool:
        return self.error is None and self.promo is not None
