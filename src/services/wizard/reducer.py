"""Pure transition function of the booking wizard.

reduce(state, command, context) never mutates its inputs and never raises
for user input: rejections come back as FieldError values next to the
unchanged state. Every accepted command re-derives the price breakdown
(and re-evaluates a held promotion) from the new inputs.
"""

from decimal import Decimal
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict
from structlog import get_logger

from src.models.booking.pricing import PriceBreakdown, PromoError, round_money
from src.models.booking.state import BookingState, WizardStep
from src.models.booking.stay import DateRange
from src.models.catalog.time_slot import SlotSide
from src.models.field_error import ErrorKind, FieldError
from src.rules.contact_validator import GuestContactValidator
from src.rules.date_range_validator import DateRangeValidator
from src.rules.guest_configuration import GuestConfigurator
from src.rules.payment_request_builder import PaymentRequestBuilder
from src.rules.price_calculator import PriceCalculator
from src.rules.promo_code_engine import PromoCodeEngine
from src.rules.time_slot_pricing import TimeSlotPricing

from .commands import (
    AdjustGuests,
    Advance,
    ApplyPromo,
    ClearDates,
    Command,
    GoBack,
    PaymentProcessed,
    PromoLookupResolved,
    PromoLookupStarted,
    RemovePromo,
    SelectDate,
    SelectPaymentMethod,
    SelectRoom,
    SelectTimeSlot,
    SetGuestContact,
    SkipPromotion,
)
from .context import WizardContext
from .steps import GUARDS

logger = get_logger(__name__)

ZERO = Decimal("0")


class TransitionResult(BaseModel):
    """New state plus the field errors produced by one command."""

    state: BookingState
    errors: tuple[FieldError, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def blocked(self) -> bool:
        return any(error.kind == ErrorKind.TRANSITION_BLOCKED for error in self.errors)

    def error_codes(self) -> list[str]:
        return [error.code for error in self.errors]


def reprice(state: BookingState, context: WizardContext) -> tuple[BookingState, list[FieldError]]:
    """Recompute the breakdown from scratch, re-running the held promotion.

    A promotion that no longer applies to the new subtotal is dropped and
    reported as a promo error.

    Returns:
        Tuple of (repriced state, promo errors)
    """
    if state.room is None:
        cleared = state.model_copy(
            update={"discount": ZERO, "price_breakdown": PriceBreakdown(currency=context.currency)}
        )
        return cleared, []

    nights = state.date_range.nights
    rooms = state.guests.rooms
    add_on_fees = TimeSlotPricing.add_on_fees(
        state.check_in_time,
        state.check_out_time,
        context.check_in_slots,
        context.check_out_slots,
    )

    def compute(discount: Decimal) -> PriceBreakdown:
        return PriceCalculator.compute(
            state.room,
            nights,
            rooms,
            add_on_fees=add_on_fees,
            discount=discount,
            tax_rate=context.tax_rate,
            service_fee_rate=context.service_fee_rate,
        )

    errors = []
    promo = state.promo
    discount = ZERO
    breakdown = compute(ZERO)

    if promo is not None:
        application = PromoCodeEngine.evaluate(
            promo.code,
            promo,
            breakdown.subtotal,
            nights=nights,
            rooms=rooms,
            today=context.today(),
            free_night_scope=context.free_night_scope,
        )
        if application.applied:
            discount = application.discount
            breakdown = compute(discount)
        else:
            logger.info(
                "Held promotion no longer applies",
                booking_id=state.booking_id,
                code=promo.code,
                error=application.error.value,
            )
            errors.append(FieldError.promo(application.error.value, application.detail))
            promo = None

    repriced = state.model_copy(
        update={"promo": promo, "discount": breakdown.discount, "price_breakdown": breakdown}
    )
    return repriced, errors


def _accept(
    state: BookingState,
    context: WizardContext,
    errors: tuple[FieldError, ...] = (),
) -> "TransitionResult":
    repriced, promo_errors = reprice(state, context)
    return TransitionResult(state=repriced, errors=tuple(errors) + tuple(promo_errors))


def _reject(state: BookingState, *errors: FieldError) -> "TransitionResult":
    return TransitionResult(state=state, errors=errors)


def _wrong_step(state: BookingState, command: Command, *steps: WizardStep) -> Optional[FieldError]:
    if state.step in steps:
        return None
    return FieldError.blocked(
        "step",
        "wrong_step",
        f"{type(command).__name__} is not available on the {state.step.value} step.",
    )


def _select_room(state, command: SelectRoom, context):
    error = _wrong_step(state, command, WizardStep.ROOM_AND_DATES)
    if error is not None:
        return _reject(state, error)
    return _accept(state.model_copy(update={"room": command.room}), context)


def _select_date(state, command: SelectDate, context):
    error = _wrong_step(state, command, WizardStep.ROOM_AND_DATES)
    if error is not None:
        return _reject(state, error)

    date_range, verdict = DateRangeValidator.select(
        command.candidate,
        command.role,
        state.date_range,
        context.constraints,
        context.today(),
    )
    if not verdict.accepted:
        return _reject(
            state, FieldError.rejected(verdict.role.value, verdict.reason.value, verdict.message)
        )
    return _accept(state.model_copy(update={"date_range": date_range}), context)


def _clear_dates(state, command: ClearDates, context):
    error = _wrong_step(state, command, WizardStep.ROOM_AND_DATES)
    if error is not None:
        return _reject(state, error)
    return _accept(state.model_copy(update={"date_range": DateRange()}), context)


def _adjust_guests(state, command: AdjustGuests, context):
    error = _wrong_step(state, command, WizardStep.ROOM_AND_DATES, WizardStep.GUEST_INFO)
    if error is not None:
        return _reject(state, error)

    guests = GuestConfigurator.adjust(state.guests, command.category, command.delta, context.limits)
    if guests is state.guests:
        # Out-of-bound adjustments are a silent no-op
        return TransitionResult(state=state)
    return _accept(state.model_copy(update={"guests": guests}), context)


def _select_time_slot(state, command: SelectTimeSlot, context):
    error = _wrong_step(state, command, WizardStep.ROOM_AND_DATES)
    if error is not None:
        return _reject(state, error)

    if command.side == SlotSide.CHECK_IN:
        field, slot_table = "check_in_time", context.check_in_slots
    else:
        field, slot_table = "check_out_time", context.check_out_slots

    if command.time is not None and not TimeSlotPricing.is_offered(command.time, slot_table):
        return _reject(
            state,
            FieldError.rejected(
                field, "unknown_time_slot", f"{command.time} is not an available time."
            ),
        )
    return _accept(state.model_copy(update={field: command.time}), context)


def _set_guest_contact(state, command: SetGuestContact, context):
    error = _wrong_step(state, command, WizardStep.GUEST_INFO)
    if error is not None:
        return _reject(state, error)

    errors = GuestContactValidator.validate(command.contact)
    if errors:
        return _reject(state, *errors)
    return _accept(state.model_copy(update={"contact": command.contact}), context)


def _apply_promo(state, command: ApplyPromo, context):
    error = _wrong_step(state, command, WizardStep.PROMOTION)
    if error is not None:
        return _reject(state, error)

    application = PromoCodeEngine.apply(
        command.code,
        state.price_breakdown.subtotal,
        context.catalog,
        nights=state.date_range.nights,
        rooms=state.guests.rooms,
        today=context.today(),
        free_night_scope=context.free_night_scope,
    )
    if not application.applied:
        failure = FieldError.promo(application.error.value, application.detail)
        if application.error == PromoError.EMPTY_CODE:
            return _reject(state, failure)
        cleared = state.model_copy(update={"promo": None, "pending_promo_request": None})
        return _accept(cleared, context, (failure,))

    return _accept(
        state.model_copy(update={"promo": application.promo, "pending_promo_request": None}),
        context,
    )


def _promo_lookup_started(state, command: PromoLookupStarted, context):
    error = _wrong_step(state, command, WizardStep.PROMOTION)
    if error is not None:
        return _reject(state, error)
    return _accept(state.model_copy(update={"pending_promo_request": command.request_id}), context)


def _promo_lookup_resolved(state, command: PromoLookupResolved, context):
    if command.request_id != state.pending_promo_request:
        logger.debug(
            "Discarding superseded promotion lookup",
            booking_id=state.booking_id,
            request_id=command.request_id,
            pending=state.pending_promo_request,
        )
        return TransitionResult(state=state)

    settled = state.model_copy(update={"promo": None, "pending_promo_request": None})

    if command.failed:
        return _accept(
            settled,
            context,
            (FieldError.promo(PromoError.LOOKUP_FAILED.value, PromoError.LOOKUP_FAILED.message),),
        )

    application = PromoCodeEngine.evaluate(
        command.code,
        command.promo,
        state.price_breakdown.subtotal,
        nights=state.date_range.nights,
        rooms=state.guests.rooms,
        today=context.today(),
        free_night_scope=context.free_night_scope,
    )
    if not application.applied:
        return _accept(
            settled, context, (FieldError.promo(application.error.value, application.detail),)
        )
    return _accept(settled.model_copy(update={"promo": application.promo}), context)


def _remove_promo(state, command: RemovePromo, context):
    error = _wrong_step(state, command, WizardStep.PROMOTION)
    if error is not None:
        return _reject(state, error)
    return _accept(
        state.model_copy(update={"promo": None, "pending_promo_request": None}), context
    )


def _skip_promotion(state, command: SkipPromotion, context):
    error = _wrong_step(state, command, WizardStep.PROMOTION)
    if error is not None:
        return _reject(state, error)
    skipped = state.model_copy(
        update={"promo": None, "pending_promo_request": None, "step": WizardStep.PAYMENT}
    )
    return _accept(skipped, context)


def _select_payment_method(state, command: SelectPaymentMethod, context):
    error = _wrong_step(state, command, WizardStep.PAYMENT)
    if error is not None:
        return _reject(state, error)
    if command.method == state.payment_method:
        return TransitionResult(state=state)
    # A payment taken under the previous method no longer counts
    updated = state.model_copy(
        update={"payment_method": command.method, "payment_reference": None, "paid_amount": None}
    )
    return _accept(updated, context)


def _payment_processed(state, command: PaymentProcessed, context):
    error = _wrong_step(state, command, WizardStep.PAYMENT)
    if error is not None:
        return _reject(state, error)

    if state.payment_method is None:
        return _reject(
            state,
            FieldError.rejected(
                "payment_method", "payment_method_required", "Please choose how to pay."
            ),
        )

    breakdown = state.price_breakdown
    if not breakdown.is_priced:
        return _reject(
            state, FieldError.rejected("price", "not_priced", "The booking has no price yet.")
        )

    expected = round_money(breakdown.total)
    if round_money(command.amount) != expected:
        logger.warning(
            "Processed payment amount differs from the presented amount",
            booking_id=state.booking_id,
            amount=str(command.amount),
            expected=str(expected),
        )
        return _reject(
            state,
            FieldError.rejected(
                "payment",
                "amount_mismatch",
                f"Payment of {round_money(command.amount)} does not match {expected}.",
            ),
        )

    processed = state.model_copy(
        update={"payment_reference": command.reference, "paid_amount": round_money(breakdown.total)}
    )
    return _accept(processed, context)


def _advance(state, command: Advance, context):
    next_step = state.step.next()
    guard = GUARDS[state.step]

    repriced, promo_errors = reprice(state, context)
    guard_errors = guard.run(repriced, context)
    if guard_errors:
        return TransitionResult(state=repriced, errors=tuple(promo_errors) + tuple(guard_errors))

    update = {"step": next_step}
    if next_step == WizardStep.CONFIRMATION:
        update["confirmation"] = PaymentRequestBuilder.confirm(
            repriced,
            repriced.payment_reference,
            booked_at=context.now(),
            deposit_rate=context.deposit_rate,
            deposit_due_hours=context.deposit_due_hours,
        )

    logger.info(
        "Wizard advanced",
        booking_id=state.booking_id,
        from_step=state.step.value,
        to_step=next_step.value,
    )
    return TransitionResult(state=repriced.model_copy(update=update), errors=tuple(promo_errors))


def _go_back(state, command: GoBack, context):
    previous_step = state.step.previous()
    if previous_step is None:
        return TransitionResult(state=state)
    return _accept(state.model_copy(update={"step": previous_step}), context)


_HANDLERS: dict[type, Callable[..., TransitionResult]] = {
    SelectRoom: _select_room,
    SelectDate: _select_date,
    ClearDates: _clear_dates,
    AdjustGuests: _adjust_guests,
    SelectTimeSlot: _select_time_slot,
    SetGuestContact: _set_guest_contact,
    ApplyPromo: _apply_promo,
    PromoLookupStarted: _promo_lookup_started,
    PromoLookupResolved: _promo_lookup_resolved,
    RemovePromo: _remove_promo,
    SkipPromotion: _skip_promotion,
    SelectPaymentMethod: _select_payment_method,
    PaymentProcessed: _payment_processed,
    Advance: _advance,
    GoBack: _go_back,
}


def reduce(state: BookingState, command: Command, context: WizardContext) -> TransitionResult:
    """Apply one command to a booking state.

    Args:
        state: Current state (never modified)
        command: User or collaborator event
        context: Catalogs, rules and clock

    Returns:
        TransitionResult with the new state and any field errors

    Raises:
        TypeError: If the command type is unknown
        PricingComputationError: If a validator let an impossible input through
    """
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unsupported wizard command: {type(command).__name__}")

    if state.is_final:
        return _reject(
            state,
            FieldError.blocked(
                "step",
                "booking_confirmed",
                "This booking is confirmed. Start a new booking to make changes.",
            ),
        )

    result = handler(state, command, context)
    logger.debug(
        "Command reduced",
        booking_id=state.booking_id,
        command=type(command).__name__,
        step=result.state.step.value,
        errors=result.error_codes(),
    )
    return result
