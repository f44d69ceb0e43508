"""Booking and payment flows.

Booking sequence: trip exists -> authorize payment -> mark booked -> respond.
Payment provider failures are translated into the error taxonomy here and
never surface as provider-specific exceptions.
"""

import logging
import time
from dataclasses import dataclass

from backend.app.adapters.payments import PaymentGateway, PaymentProviderError
from backend.app.config import Settings
from backend.app.db.repositories import TripStore
from backend.app.errors import (
    InvalidPaymentAmountError,
    PaymentConfirmationFailedError,
    PaymentMismatchError,
    PaymentNotCompletedError,
    PaymentSetupFailedError,
    TripNotFoundError,
)
from backend.app.models.payments import CreateIntentRequest, PaymentIntent
from backend.app.models.trip import PaymentInfo, Trip
from backend.app.utils.metrics import PrometheusTripMetrics

logger = logging.getLogger(__name__)

MINOR_UNITS_PER_UNIT = 100


def new_booking_id() -> str:
    """Booking confirmation id: "TRP" followed by epoch milliseconds."""
    return f"TRP{time.time_ns() // 1_000_000}"


@dataclass
class BookingResult:
    booking_id: str
    trip: Trip


def _amount_due(trip: Trip, payment_info: PaymentInfo) -> int:
    """Amount to charge in whole currency units."""
    if payment_info.total_amount is not None:
        return payment_info.total_amount
    if trip.generated_itinerary is not None and trip.generated_itinerary.total_budget > 0:
        return trip.generated_itinerary.total_budget
    raise InvalidPaymentAmountError(
        "No amount to charge: trip has no itinerary and no totalAmount was given"
    )


def _verify_intent_covers(
    intent: PaymentIntent, trip: Trip, amount_due: int, currency: str
) -> None:
    """Reject an intent made for another trip, for less than is due, or in another currency."""
    if intent.metadata.get("tripId") != trip.id:
        raise PaymentMismatchError(f"Payment {intent.id} was not made for trip {trip.id}")
    if intent.currency.lower() != currency:
        raise PaymentMismatchError(
            f"Payment {intent.id} is in {intent.currency.upper()}, expected {currency.upper()}"
        )
    if intent.amount < amount_due:
        raise PaymentMismatchError(
            f"Payment {intent.id} covers {intent.amount}, {amount_due} is due (minor units)"
        )


async def book_trip(
    trip_id: str,
    payment_info: PaymentInfo,
    *,
    store: TripStore,
    gateway: PaymentGateway,
    settings: Settings,
    metrics: PrometheusTripMetrics | None = None,
) -> BookingResult:
    """Authorize payment for a trip and mark it booked.

    Args:
        trip_id: Trip identifier
        payment_info: Payment details from the booking form
        store: Trip store
        gateway: Payment gateway
        settings: Application settings

    Returns:
        BookingResult with a fresh booking id and the updated trip

    Raises:
        TripNotFoundError: Unknown trip id
        InvalidPaymentAmountError: Nothing to charge
        PaymentSetupFailedError: Provider rejected or could not be reached
        PaymentNotCompletedError: Provider did not report the payment as succeeded
        PaymentMismatchError: Existing payment does not cover this trip
    """
    metrics = metrics or PrometheusTripMetrics()

    logger.info(
        f"[book] trip={trip_id} card="
        f"{'[CARD PROVIDED]' if payment_info.card_number else '[NO CARD]'}"
    )

    trip = store.get(trip_id)
    if trip is None:
        metrics.inc_booking("not_found")
        raise TripNotFoundError(trip_id)

    currency = settings.currency.lower()

    try:
        amount_due = _amount_due(trip, payment_info) * MINOR_UNITS_PER_UNIT
        if payment_info.payment_intent_id:
            intent = await gateway.retrieve_intent(payment_info.payment_intent_id)
        else:
            intent = await gateway.create_intent(
                amount=amount_due,
                currency=currency,
                metadata={
                    "tripId": trip.id,
                    "customerName": payment_info.customer_name,
                    "customerEmail": payment_info.email or "",
                },
                payment_method=payment_info.payment_method,
                confirm=True,
            )
    except PaymentProviderError as e:
        logger.error(f"[book] trip={trip_id} payment provider error: {e}")
        metrics.inc_booking("payment_failed")
        raise PaymentSetupFailedError(str(e)) from e
    except InvalidPaymentAmountError:
        metrics.inc_booking("payment_failed")
        raise

    if not intent.succeeded:
        logger.warning(f"[book] trip={trip_id} payment {intent.id} status={intent.status}")
        metrics.inc_booking("payment_failed")
        raise PaymentNotCompletedError()

    try:
        _verify_intent_covers(intent, trip, amount_due, currency)
    except PaymentMismatchError as e:
        logger.warning(f"[book] trip={trip_id} {e.message}")
        metrics.inc_booking("payment_failed")
        raise

    booked = store.mark_booked(trip_id)
    if booked is None:
        # Expired between lookup and update
        metrics.inc_booking("not_found")
        raise TripNotFoundError(trip_id)

    booking_id = new_booking_id()
    metrics.inc_booking("booked")
    logger.info(f"[book] trip={trip_id} booked as {booking_id} (payment {intent.id})")

    return BookingResult(booking_id=booking_id, trip=booked)


async def start_payment(
    request: CreateIntentRequest,
    *,
    gateway: PaymentGateway,
    settings: Settings,
    metrics: PrometheusTripMetrics | None = None,
) -> PaymentIntent:
    """Create a payment intent for client-side confirmation.

    Raises:
        InvalidPaymentAmountError: Amount missing or below the provider minimum
        PaymentSetupFailedError: Provider rejected or could not be reached
    """
    metrics = metrics or PrometheusTripMetrics()

    if not request.amount or request.amount < settings.payment_min_amount:
        metrics.inc_payment("create_intent", "invalid_amount")
        minimum = settings.payment_min_amount / MINOR_UNITS_PER_UNIT
        raise InvalidPaymentAmountError(
            f"Amount must be at least {settings.currency_symbol}{minimum:.2f}"
        )

    customer = request.customer_info
    try:
        intent = await gateway.create_intent(
            amount=round(request.amount),
            currency=(request.currency or settings.currency).lower(),
            metadata={
                "tripId": request.trip_id or "",
                "customerName": f"{customer.first_name} {customer.last_name}".strip(),
                "customerEmail": customer.email,
            },
        )
    except PaymentProviderError as e:
        logger.error(f"[payments] create intent failed: {e}")
        metrics.inc_payment("create_intent", "error")
        raise PaymentSetupFailedError(str(e)) from e

    metrics.inc_payment("create_intent", "success")
    return intent


async def confirm_payment(
    payment_intent_id: str,
    trip_id: str | None,
    *,
    store: TripStore,
    gateway: PaymentGateway,
    metrics: PrometheusTripMetrics | None = None,
) -> PaymentIntent:
    """Verify a payment succeeded and, when a trip id is given, mark it booked.

    Raises:
        PaymentNotCompletedError: Provider status is not "succeeded"
        PaymentMismatchError: Payment was made for a different trip
        PaymentConfirmationFailedError: Provider rejected or could not be reached
    """
    metrics = metrics or PrometheusTripMetrics()

    try:
        intent = await gateway.retrieve_intent(payment_intent_id)
    except PaymentProviderError as e:
        logger.error(f"[payments] confirm {payment_intent_id} failed: {e}")
        metrics.inc_payment("confirm", "error")
        raise PaymentConfirmationFailedError(str(e)) from e

    if not intent.succeeded:
        metrics.inc_payment("confirm", "not_completed")
        raise PaymentNotCompletedError()

    if trip_id:
        if intent.metadata.get("tripId") != trip_id:
            metrics.inc_payment("confirm", "mismatch")
            raise PaymentMismatchError(f"Payment {intent.id} was not made for trip {trip_id}")
        if store.mark_booked(trip_id) is None:
            logger.warning(f"[payments] payment {payment_intent_id} references unknown trip {trip_id}")
        else:
            logger.info(f"Trip {trip_id} successfully booked with payment {payment_intent_id}")

    metrics.inc_payment("confirm", "success")
    return intent
