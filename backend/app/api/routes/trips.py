"""Trip endpoints - generation, lookup, listing and booking."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from backend.app.adapters.payments import PaymentGateway
from backend.app.api.deps import (
    get_app_settings,
    get_itinerary_client,
    get_payment_gateway,
    get_trip_store,
)
from backend.app.config import Settings
from backend.app.db.repositories import TripStore
from backend.app.errors import TripNotFoundError
from backend.app.llm.client import ItineraryGenerator
from backend.app.models.trip import BookingRequest, BookingResponse, GenerateTripResponse, Trip
from backend.app.orchestration.booking import book_trip
from backend.app.orchestration.generation import generate_trip_itinerary

router = APIRouter(prefix="/api/trips", tags=["trips"])
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=GenerateTripResponse)
async def generate_trip(
    store: Annotated[TripStore, Depends(get_trip_store)],
    client: Annotated[ItineraryGenerator | None, Depends(get_itinerary_client)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    payload: Annotated[Any, Body()] = None,
) -> GenerateTripResponse:
    """Generate an AI itinerary for submitted preferences.

    Returns:
        tripId and the normalized itinerary

    Raises:
        AIUnavailableError: 503, capability unconfigured
        PreferencesValidationError: 400 with field details
        AITimeoutError: 504
        AIGenerationFailedError: 500
    """
    destination = payload.get("destination") if isinstance(payload, dict) else None
    logger.info(f"[POST /api/trips/generate] destination={destination!r}")

    result = await generate_trip_itinerary(payload, store=store, client=client, settings=settings)

    logger.info(f"[POST /api/trips/generate] trip_id={result.trip_id} generated")
    return GenerateTripResponse(trip_id=result.trip_id, itinerary=result.itinerary)


@router.get("", response_model=list[Trip])
async def list_trips(store: Annotated[TripStore, Depends(get_trip_store)]) -> list[Trip]:
    """List all trips, newest first."""
    return store.list_all()


@router.get("/{trip_id}", response_model=Trip)
async def get_trip(trip_id: str, store: Annotated[TripStore, Depends(get_trip_store)]) -> Trip:
    """Get a trip by id (404 if unknown)."""
    trip = store.get(trip_id)
    if trip is None:
        raise TripNotFoundError(trip_id)
    return trip


@router.post("/{trip_id}/book", response_model=BookingResponse)
async def book(
    trip_id: str,
    store: Annotated[TripStore, Depends(get_trip_store)],
    gateway: Annotated[PaymentGateway, Depends(get_payment_gateway)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    request: Annotated[BookingRequest | None, Body()] = None,
) -> BookingResponse:
    """Authorize payment and mark a trip booked."""
    booking = request or BookingRequest()

    result = await book_trip(
        trip_id,
        booking.payment_info,
        store=store,
        gateway=gateway,
        settings=settings,
    )

    return BookingResponse(booking_id=result.booking_id, trip=result.trip)
