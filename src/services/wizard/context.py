"""Read-only collaborators and rules shared by every wizard transition."""

from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, Mapping, Optional

from src.clients.promotion_catalog_client import InMemoryPromotionCatalog
from src.config.settings import Settings, settings
from src.models.booking.guests import GuestConfiguration, GuestLimits
from src.models.booking.stay import StayConstraints
from src.models.catalog.promotion import PromoCode
from src.models.catalog.time_slot import EARLY_CHECK_IN_SLOTS, LATE_CHECK_OUT_SLOTS, TimeSlot


class WizardContext:
    """Context object passed to the reducer and to every step guard.

    Holds the injected catalogs, the configured business rules and the
    clock. Anything left unset falls back to the application settings.
    """

    def __init__(
        self,
        catalog: Optional[Mapping[str, PromoCode]] = None,
        blackout_dates: Iterable[date] = (),
        constraints: Optional[StayConstraints] = None,
        limits: Optional[GuestLimits] = None,
        default_guests: Optional[GuestConfiguration] = None,
        check_in_slots: tuple[TimeSlot, ...] = EARLY_CHECK_IN_SLOTS,
        check_out_slots: tuple[TimeSlot, ...] = LATE_CHECK_OUT_SLOTS,
        tax_rate: Optional[Decimal] = None,
        service_fee_rate: Optional[Decimal] = None,
        free_night_scope: Optional[str] = None,
        clock: Callable[[], datetime] = datetime.now,
        app_settings: Optional[Settings] = None,
    ):
        """Initialize the wizard context.

        Args:
            catalog: Promotion catalog used by synchronous promo application
            blackout_dates: Days the property does not accept check-in or check-out
            constraints: Stay bounds, built from STAY_* settings when omitted
            limits: Guest counter bounds, built from GUESTS_* settings when omitted
            default_guests: Guests a new booking starts with
            check_in_slots: Early check-in slot table
            check_out_slots: Late check-out slot table
            tax_rate: Tax share of the subtotal
            service_fee_rate: Service fee share of the subtotal
            free_night_scope: "booking" or "room"
            clock: Returns the current local time
            app_settings: Settings to fall back to, the global instance by default
        """
        app_settings = app_settings or settings
        self.catalog = catalog if catalog is not None else InMemoryPromotionCatalog()
        self.constraints = constraints or StayConstraints(
            min_stay_nights=app_settings.stay.min_stay_nights,
            max_stay_nights=app_settings.stay.max_stay_nights,
            blackout_dates=frozenset(blackout_dates),
        )
        self.limits = limits or GuestLimits(
            min_adults=app_settings.guests.min_adults,
            max_adults=app_settings.guests.max_adults,
            min_children=app_settings.guests.min_children,
            max_children=app_settings.guests.max_children,
            min_rooms=app_settings.guests.min_rooms,
            max_rooms=app_settings.guests.max_rooms,
        )
        self.default_guests = default_guests or GuestConfiguration(
            adults=app_settings.guests.default_adults,
            children=app_settings.guests.default_children,
            rooms=app_settings.guests.default_rooms,
        )
        self.check_in_slots = check_in_slots
        self.check_out_slots = check_out_slots

        self.tax_rate = app_settings.pricing.tax_rate if tax_rate is None else tax_rate
        self.service_fee_rate = (
            app_settings.pricing.service_fee_rate if service_fee_rate is None else service_fee_rate
        )
        self.currency = app_settings.pricing.currency
        self.free_night_scope = free_night_scope or app_settings.promotion.free_night_scope

        self.deposit_rate = app_settings.payment.deposit_rate
        self.deposit_due_hours = app_settings.payment.deposit_due_hours

        self.clock = clock

    def now(self) -> datetime:
        return self.clock()

    def today(self) -> date:
        """Local calendar day used for every date-only comparison."""
        return self.clock().date()
