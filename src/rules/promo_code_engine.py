"""Promotion code validation and bounded discount computation."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Literal, Mapping, Optional

from structlog import get_logger

from src.models.booking.pricing import PromoApplication, PromoError
from src.models.catalog.promotion import PromoCode, PromoType

logger = get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

FreeNightScope = Literal["booking", "room"]


class DiscountRule(ABC):
    """Raw discount computation for one promotion type.

    Rules compute the uncapped amount only; PromoCodeEngine applies the
    max_discount and subtotal caps for every type alike.
    """

    @abstractmethod
    def raw_discount(
        self,
        promo: PromoCode,
        subtotal: Decimal,
        nights: int,
        rooms: int,
        free_night_scope: FreeNightScope,
    ) -> Decimal:
        pass


class PercentageDiscount(DiscountRule):
    def raw_discount(self, promo, subtotal, nights, rooms, free_night_scope):
        return subtotal * promo.value / HUNDRED


class FixedDiscount(DiscountRule):
    def raw_discount(self, promo, subtotal, nights, rooms, free_night_scope):
        return promo.value


class FreeNightDiscount(DiscountRule):
    """Value of `promo.value` nights of the stay.

    With scope "booking" a night covers every booked room (subtotal / nights);
    with scope "room" it covers a single room (subtotal / (nights * rooms)).
    """

    def raw_discount(self, promo, subtotal, nights, rooms, free_night_scope):
        if nights <= 0:
            return ZERO
        divisor = nights
        if free_night_scope == "room":
            divisor = nights * max(rooms, 1)
        return subtotal / Decimal(divisor) * promo.value


DISCOUNT_RULES: dict[PromoType, DiscountRule] = {
    PromoType.PERCENTAGE: PercentageDiscount(),
    PromoType.FIXED: FixedDiscount(),
    PromoType.FREE_NIGHT: FreeNightDiscount(),
}


class PromoCodeEngine:
    """Applies promotion codes from an injected catalog to a room subtotal."""

    @staticmethod
    def normalize(code: Optional[str]) -> str:
        return (code or "").strip().upper()

    @staticmethod
    def apply(
        code: Optional[str],
        subtotal: Decimal,
        catalog: Mapping[str, PromoCode],
        nights: int = 1,
        rooms: int = 1,
        today: Optional[date] = None,
        free_night_scope: FreeNightScope = "booking",
    ) -> PromoApplication:
        """Look a code up in the catalog and compute its discount.

        Args:
            code: Code as typed by the guest
            subtotal: Room subtotal (rate x nights x rooms)
            catalog: Normalized code to promotion record
            nights: Nights of the stay, used by free-night promotions
            rooms: Booked rooms, used by the "room" free-night scope
            today: Reference day for expiry, defaults to the local calendar day
            free_night_scope: How a free night is valued for multi-room stays

        Returns:
            PromoApplication with either a discount or an error
        """
        normalized = PromoCodeEngine.normalize(code)
        promo = catalog.get(normalized) if normalized else None
        return PromoCodeEngine.evaluate(
            normalized,
            promo,
            subtotal,
            nights=nights,
            rooms=rooms,
            today=today,
            free_night_scope=free_night_scope,
        )

    @staticmethod
    def evaluate(
        code: Optional[str],
        promo: Optional[PromoCode],
        subtotal: Decimal,
        nights: int = 1,
        rooms: int = 1,
        today: Optional[date] = None,
        free_night_scope: FreeNightScope = "booking",
    ) -> PromoApplication:
        """Classify an already fetched promotion and compute its discount.

        Classification order: empty code, not found, expired, invalid,
        below minimum. Expiry is checked before the intrinsic validity flag
        so an expired code always reports as expired.
        """
        normalized = PromoCodeEngine.normalize(code)
        today = today or date.today()

        error = PromoCodeEngine._classify(normalized, promo, subtotal, today)
        if error is not None:
            logger.info("Promotion code rejected", code=normalized, error=error.value)
            detail = error.message
            if error == PromoError.BELOW_MINIMUM and promo and promo.min_amount is not None:
                detail = f"Minimum room subtotal for {normalized} is {promo.min_amount}."
            return PromoApplication(code=normalized, error=error, detail=detail)

        rule = DISCOUNT_RULES[promo.type]
        raw = rule.raw_discount(promo, subtotal, nights, rooms, free_night_scope)
        discount = PromoCodeEngine.bound_discount(raw, subtotal, promo.max_discount)

        logger.debug(
            "Promotion code applied",
            code=normalized,
            type=promo.type.value,
            raw_discount=str(raw),
            discount=str(discount),
        )
        return PromoApplication(code=normalized, promo=promo, discount=discount)

    @staticmethod
    def bound_discount(
        raw: Decimal,
        subtotal: Decimal,
        max_discount: Optional[Decimal] = None,
    ) -> Decimal:
        """Clamp a raw discount to [0, min(max_discount, subtotal)]."""
        discount = raw
        if max_discount is not None:
            discount = min(discount, max_discount)
        discount = min(discount, subtotal)
        return max(discount, ZERO)

    @staticmethod
    def _classify(
        code: str,
        promo: Optional[PromoCode],
        subtotal: Decimal,
        today: date,
    ) -> Optional[PromoError]:
        if not code:
            return PromoError.EMPTY_CODE
        if promo is None:
            return PromoError.NOT_FOUND
        if promo.valid_until is not None and promo.valid_until < today:
            return PromoError.EXPIRED
        if not promo.is_valid:
            return PromoError.INVALID
        if promo.min_amount is not None and subtotal < promo.min_amount:
            return PromoError.BELOW_MINIMUM
        return None
