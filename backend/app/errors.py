"""Error taxonomy for the trip planner.

Every failure that reaches a client is one of these. Provider-specific
exceptions (OpenAI SDK, httpx, payment adapter) are translated into this
hierarchy at the orchestration boundary.
"""

from typing import Any


class TripPlannerError(Exception):
    """Base class for user-visible failures."""

    status_code: int = 500
    label: str = "Internal error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, Any]:
        """Render the JSON error envelope."""
        return {"error": self.label, "message": self.message}


class PreferencesValidationError(TripPlannerError):
    """Submitted trip preferences violate one or more field constraints."""

    status_code = 400
    label = "Invalid trip preferences"

    def __init__(self, details: list[dict[str, Any]]) -> None:
        super().__init__(f"{len(details)} field error(s) in trip preferences")
        self.details = details

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        body["details"] = self.details
        return body


class TripNotFoundError(TripPlannerError):
    """No trip record exists for the given identifier."""

    status_code = 404
    label = "Trip not found"

    def __init__(self, trip_id: str) -> None:
        super().__init__(f"No trip with id {trip_id}")
        self.trip_id = trip_id


class AIUnavailableError(TripPlannerError):
    """Generation capability is not configured; no call was attempted."""

    status_code = 503
    label = "AI service unavailable"

    def __init__(
        self,
        message: str = "The AI service is currently not available. Please try again later.",
    ) -> None:
        super().__init__(message)


class AITimeoutError(TripPlannerError):
    """Generation call exceeded its bounded wait."""

    status_code = 504
    label = "AI service timeout"


class AIGenerationFailedError(TripPlannerError):
    """Generation call was attempted but failed or returned an unusable reply."""

    status_code = 500
    label = "Failed to generate itinerary"


class InvalidPaymentAmountError(TripPlannerError):
    status_code = 400
    label = "Invalid amount"


class PaymentSetupFailedError(TripPlannerError):
    status_code = 500
    label = "Payment setup failed"


class PaymentNotCompletedError(TripPlannerError):
    status_code = 400
    label = "Payment not completed"

    def __init__(self, message: str = "Payment has not been successfully processed") -> None:
        super().__init__(message)


class PaymentConfirmationFailedError(TripPlannerError):
    status_code = 500
    label = "Payment confirmation failed"


class PaymentMismatchError(TripPlannerError):
    """A succeeded payment does not cover this trip (other trip, short amount or currency)."""

    status_code = 400
    label = "Payment mismatch"
