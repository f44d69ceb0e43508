"""Itinerary generation flow.

availability check -> validate preferences -> create trip -> call AI
-> normalize -> attach itinerary

A failed call leaves the trip with no itinerary; resubmitting creates a new
trip rather than patching the old one.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

from backend.app.config import Settings
from backend.app.db.repositories import TripStore
from backend.app.errors import AIGenerationFailedError, AITimeoutError, AIUnavailableError
from backend.app.llm.client import ItineraryGenerator
from backend.app.models.itinerary import GeneratedItinerary
from backend.app.models.preferences import validate_preferences
from backend.app.orchestration.normalize import normalize_itinerary
from backend.app.utils.logging import StructuredGenerationLogger
from backend.app.utils.metrics import PrometheusTripMetrics

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    trip_id: str
    itinerary: GeneratedItinerary


async def generate_trip_itinerary(
    payload: Any,
    *,
    store: TripStore,
    client: ItineraryGenerator | None,
    settings: Settings,
    metrics: PrometheusTripMetrics | None = None,
    structured_logger: StructuredGenerationLogger | None = None,
) -> GenerationResult:
    """Validate preferences, generate an itinerary, and persist it on a new trip.

    Args:
        payload: Raw request body
        store: Trip store
        client: Generation client, or None when the capability is unconfigured
        settings: Application settings
        metrics: Metrics sink (optional)
        structured_logger: Structured logger (optional)

    Returns:
        GenerationResult with the new trip id and its itinerary

    Raises:
        AIUnavailableError: Capability unconfigured (no trip is created)
        PreferencesValidationError: Payload invalid (no trip is created)
        AITimeoutError: Call exceeded its bounded wait
        AIGenerationFailedError: Call failed or reply unusable
    """
    metrics = metrics or PrometheusTripMetrics()
    structured_logger = structured_logger or StructuredGenerationLogger()

    if client is None:
        metrics.record_generation("unavailable")
        raise AIUnavailableError()

    preferences = validate_preferences(
        payload,
        min_budget=settings.min_budget,
        currency_symbol=settings.currency_symbol,
    )

    trip = store.create(preferences)
    logger.info(f"[generate] Created trip record {trip.id} for {preferences.destination}")

    start = time.perf_counter()
    try:
        reply = await client.generate_itinerary(preferences)
        itinerary = normalize_itinerary(reply, preferences)
    except AITimeoutError as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        metrics.record_generation("timeout", elapsed_ms)
        structured_logger.log_generation(
            trip.id, preferences.destination, "timeout", elapsed_ms, e.message
        )
        raise
    except AIGenerationFailedError as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        metrics.record_generation("failed", elapsed_ms)
        structured_logger.log_generation(
            trip.id, preferences.destination, "failed", elapsed_ms, e.message
        )
        raise
    except ValueError as e:
        # Model validators reject an inconsistent itinerary
        elapsed_ms = (time.perf_counter() - start) * 1000
        metrics.record_generation("failed", elapsed_ms)
        structured_logger.log_generation(
            trip.id, preferences.destination, "failed", elapsed_ms, str(e)
        )
        raise AIGenerationFailedError(f"AI itinerary generation failed: {e}") from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    metrics.record_generation("success", elapsed_ms)
    structured_logger.log_generation(trip.id, preferences.destination, "success", elapsed_ms)

    store.attach_itinerary(trip.id, itinerary)

    return GenerationResult(trip_id=trip.id, itinerary=itinerary)
