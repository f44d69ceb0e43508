"""Models package - re-exports for convenience."""

from backend.app.models.ai_reply import ItineraryReply, ReplyActivity, ReplyDay
from backend.app.models.common import SUMMARY_BUCKETS, ActivityType, CamelModel
from backend.app.models.itinerary import Activity, CostSummary, DayPlan, GeneratedItinerary
from backend.app.models.payments import (
    ConfirmPaymentRequest,
    ConfirmPaymentResponse,
    CreateIntentRequest,
    CreateIntentResponse,
    CustomerInfo,
    PaymentIntent,
)
from backend.app.models.preferences import TripPreferences, validate_preferences
from backend.app.models.trip import (
    BookingRequest,
    BookingResponse,
    GenerateTripResponse,
    PaymentInfo,
    Trip,
)

__all__ = [
    # Common
    "CamelModel",
    "ActivityType",
    "SUMMARY_BUCKETS",
    # Preferences
    "TripPreferences",
    "validate_preferences",
    # AI reply
    "ItineraryReply",
    "ReplyDay",
    "ReplyActivity",
    # Itinerary
    "GeneratedItinerary",
    "DayPlan",
    "Activity",
    "CostSummary",
    # Trip
    "Trip",
    "PaymentInfo",
    "BookingRequest",
    "BookingResponse",
    "GenerateTripResponse",
    # Payments
    "PaymentIntent",
    "CustomerInfo",
    "CreateIntentRequest",
    "CreateIntentResponse",
    "ConfirmPaymentRequest",
    "ConfirmPaymentResponse",
]
