"""Structured logging for itinerary generation."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredGenerationLogger:
    """Structured logger for itinerary generation attempts."""

    def log_generation(
        self,
        trip_id: str,
        destination: str,
        outcome: str,
        latency_ms: float,
        error_reason: str | None = None,
    ) -> None:
        """Log a generation attempt with structured data."""
        log_data: dict[str, Any] = {
            "trip_id": trip_id,
            "destination": destination,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Itinerary generation: {destination} - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})
