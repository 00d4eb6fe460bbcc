"""Stateful shell around the booking reducer."""

import asyncio
import itertools
import uuid
from datetime import timedelta
from typing import Optional, Protocol

from structlog import get_logger

from src.clients.promotion_catalog_client import (
    InMemoryPromotionCatalog,
    PromotionCatalogError,
)
from src.models.booking.payment import PaymentRequest
from src.models.booking.state import BookingState
from src.models.booking.stay import DateRange, DateRole
from src.models.catalog.promotion import PromoCode
from src.models.catalog.room import Room
from src.rules.date_range_validator import DateRangeValidator
from src.rules.payment_request_builder import PaymentRequestBuilder

from .commands import Command, PromoLookupResolved, PromoLookupStarted
from .context import WizardContext
from .reducer import TransitionResult, reduce, reprice

logger = get_logger(__name__)


class PromotionLookup(Protocol):
    async def lookup(self, code: str) -> Optional[PromoCode]:
        ...


class BookingWizard:
    """Owns one booking session: current state, history and promo lookups.

    The wizard:
    1. Starts a state with the supplied room, default dates and guests
    2. Feeds every command through the pure reducer
    3. Keeps every produced state in an append-only history
    4. Runs async promotion lookups where the newest request wins
    """

    def __init__(
        self,
        context: Optional[WizardContext] = None,
        promotion_lookup: Optional[PromotionLookup] = None,
    ):
        """Initialize the wizard.

        Args:
            context: Catalogs, rules and clock (defaults from settings)
            promotion_lookup: Async promotion source, defaults to the context catalog
        """
        self.context = context or WizardContext()
        self.promotion_lookup = promotion_lookup or InMemoryPromotionCatalog(
            self.context.catalog.values()
        )
        self.history: list[BookingState] = []
        self._request_ids = itertools.count(1)
        self._lookup_task: Optional[asyncio.Task] = None

    @property
    def state(self) -> BookingState:
        if not self.history:
            raise RuntimeError("Booking wizard has not been started")
        return self.history[-1]

    def start(self, room: Optional[Room] = None, booking_id: Optional[str] = None) -> BookingState:
        """Create the initial booking state.

        Dates default to today through today + minimum stay when that range
        is valid (no blackout day), otherwise they start empty.
        """
        today = self.context.today()
        constraints = self.context.constraints

        date_range, verdict = DateRangeValidator.select(
            today, DateRole.CHECK_IN, DateRange(), constraints, today
        )
        if verdict.accepted:
            date_range, verdict = DateRangeValidator.select(
                today + timedelta(days=constraints.min_stay_nights),
                DateRole.CHECK_OUT,
                date_range,
                constraints,
                today,
            )
        if not verdict.accepted:
            date_range = DateRange()

        initial = BookingState(
            booking_id=booking_id or uuid.uuid4().hex,
            room=room,
            date_range=date_range,
            guests=self.context.default_guests,
        )
        initial, _ = reprice(initial, self.context)

        self.history = [initial]
        logger.info("Booking wizard started", booking_id=initial.booking_id, **initial.summary())
        return initial

    def dispatch(self, command: Command) -> TransitionResult:
        """Reduce a command against the current state and record the result."""
        previous = self.state
        result = reduce(previous, command, self.context)
        if result.state is not previous:
            self.history.append(result.state)
        if result.errors:
            logger.info(
                "Command produced field errors",
                booking_id=previous.booking_id,
                command=type(command).__name__,
                errors=result.error_codes(),
            )
        return result

    async def lookup_promo(self, code: str) -> TransitionResult:
        """Look a code up asynchronously and apply the outcome.

        A newer lookup cancels the task of an older one; responses of
        superseded requests never reach the state.

        Returns:
            Result of applying the lookup, or the unchanged state when superseded
        """
        if self._lookup_task is not None and not self._lookup_task.done():
            self._lookup_task.cancel()

        request_id = next(self._request_ids)
        started = self.dispatch(PromoLookupStarted(request_id=request_id, code=code))
        if started.errors:
            return started

        task = asyncio.ensure_future(self.promotion_lookup.lookup(code))
        self._lookup_task = task

        try:
            promo = await task
        except asyncio.CancelledError:
            if self._lookup_task is not task:
                logger.debug(
                    "Promotion lookup superseded",
                    booking_id=self.state.booking_id,
                    request_id=request_id,
                )
                return TransitionResult(state=self.state)
            raise
        except PromotionCatalogError as e:
            logger.warning(
                "Promotion lookup failed",
                booking_id=self.state.booking_id,
                request_id=request_id,
                error=str(e),
            )
            return self.dispatch(
                PromoLookupResolved(request_id=request_id, code=code, failed=True)
            )

        return self.dispatch(PromoLookupResolved(request_id=request_id, code=code, promo=promo))

    def payment_request(self, order_code: Optional[str] = None) -> PaymentRequest:
        """Build the payment hand-off payload of the current state."""
        return PaymentRequestBuilder.build(
            self.state,
            self.context.check_in_slots,
            self.context.check_out_slots,
            tax_rate=self.context.tax_rate,
            service_fee_rate=self.context.service_fee_rate,
            order_code=order_code,
            now=self.context.now(),
        )
