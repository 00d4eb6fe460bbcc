"""Pure booking rules: validators and calculators."""

from src.rules.contact_validator import GuestContactValidator
from src.rules.date_range_validator import DateRangeValidator
from src.rules.guest_configuration import GuestConfigurator, RoomSelector
from src.rules.payment_request_builder import PaymentRequestBuilder
from src.rules.price_calculator import PriceCalculator, PricingComputationError
from src.rules.promo_code_engine import DISCOUNT_RULES, DiscountRule, PromoCodeEngine
from src.rules.time_slot_pricing import TimeSlotPricing, UnknownTimeSlotError

__all__ = [
    "DateRangeValidator",
    "GuestConfigurator",
    "RoomSelector",
    "TimeSlotPricing",
    "UnknownTimeSlotError",
    "PromoCodeEngine",
    "DiscountRule",
    "DISCOUNT_RULES",
    "PriceCalculator",
    "PricingComputationError",
    "GuestContactValidator",
    "PaymentRequestBuilder",
]
