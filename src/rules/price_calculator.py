"""Price breakdown computation."""

from decimal import Decimal

from structlog import get_logger

from src.models.booking.guests import RoomSelection
from src.models.booking.pricing import PriceBreakdown
from src.models.catalog.room import Room

logger = get_logger(__name__)

ZERO = Decimal("0")


class PricingComputationError(Exception):
    """Raised when the calculator receives inputs no validator should let through."""

    pass


class PriceCalculator:
    """Stateless derivation of a full PriceBreakdown from current inputs."""

    @staticmethod
    def compute(
        room: Room,
        nights: int,
        rooms_count: int,
        add_on_fees: Decimal = ZERO,
        discount: Decimal = ZERO,
        tax_rate: Decimal = Decimal("0.10"),
        service_fee_rate: Decimal = Decimal("0.05"),
    ) -> PriceBreakdown:
        """Compute the price of a single-room-type booking.

        Args:
            room: Booked room type
            nights: Nights of the stay (0 while dates are incomplete)
            rooms_count: Number of rooms of this type
            add_on_fees: Sum of time slot fees
            discount: Promotion discount, capped at the subtotal here
            tax_rate: Tax share of the subtotal
            service_fee_rate: Service fee share of the subtotal

        Returns:
            Breakdown at full precision

        Raises:
            PricingComputationError: If nights, rooms or rates are out of range
        """
        if rooms_count < 1:
            raise PricingComputationError(f"Room count must be at least 1, got {rooms_count}")

        return PriceCalculator._breakdown(
            nightly_rate=room.price_per_night * rooms_count,
            nights=nights,
            rooms=rooms_count,
            currency=room.currency,
            add_on_fees=add_on_fees,
            discount=discount,
            tax_rate=tax_rate,
            service_fee_rate=service_fee_rate,
        )

    @staticmethod
    def compute_for_selection(
        selection: RoomSelection,
        nights: int,
        add_on_fees: Decimal = ZERO,
        discount: Decimal = ZERO,
        tax_rate: Decimal = Decimal("0.10"),
        service_fee_rate: Decimal = Decimal("0.05"),
        currency: str = "USD",
    ) -> PriceBreakdown:
        """Compute the price of a multi-room selection.

        The subtotal is the sum over entries of rate x quantity x nights.
        An empty selection prices to zero.
        """
        if selection.entries:
            currency = selection.entries[0].room.currency

        return PriceCalculator._breakdown(
            nightly_rate=selection.nightly_rate,
            nights=nights,
            rooms=selection.total_rooms,
            currency=currency,
            add_on_fees=add_on_fees,
            discount=discount,
            tax_rate=tax_rate,
            service_fee_rate=service_fee_rate,
        )

    @staticmethod
    def _breakdown(
        nightly_rate: Decimal,
        nights: int,
        rooms: int,
        currency: str,
        add_on_fees: Decimal,
        discount: Decimal,
        tax_rate: Decimal,
        service_fee_rate: Decimal,
    ) -> PriceBreakdown:
        if nights < 0:
            logger.error("Negative night count reached the price calculator", nights=nights)
            raise PricingComputationError(f"Nights must not be negative, got {nights}")
        if tax_rate < 0 or service_fee_rate < 0:
            logger.error(
                "Negative rate reached the price calculator",
                tax_rate=str(tax_rate),
                service_fee_rate=str(service_fee_rate),
            )
            raise PricingComputationError("Tax and service fee rates must not be negative")
        if add_on_fees < 0 or discount < 0:
            raise PricingComputationError("Add-on fees and discount must not be negative")

        subtotal = nightly_rate * nights
        taxes = subtotal * tax_rate
        service_fee = subtotal * service_fee_rate
        applied_discount = min(discount, subtotal)
        total = max(ZERO, subtotal + taxes + service_fee + add_on_fees - applied_discount)

        return PriceBreakdown(
            subtotal=subtotal,
            taxes=taxes,
            service_fee=service_fee,
            add_on_fees=add_on_fees,
            discount=applied_discount,
            total=total,
            currency=currency,
            nights=nights,
            rooms=rooms,
        )
