"""Trip record model and booking/payment request shapes."""

from datetime import datetime

from pydantic import ConfigDict, Field, SecretStr

from backend.app.models.common import CamelModel
from backend.app.models.itinerary import GeneratedItinerary
from backend.app.models.payments import PAYMENT_INTENT_ID_PATTERN


class Trip(CamelModel):
    """Persisted trip: preferences, optional itinerary, booking status."""

    id: str
    destination: str
    budget: int
    duration: int
    group_size: int
    interests: list[str]
    start_date: str
    end_date: str
    generated_itinerary: GeneratedItinerary | None = None
    is_booked: bool = False
    created_at: datetime


class PaymentInfo(CamelModel):
    """Payment details submitted with a booking.

    Card fields are accepted for parity with the booking form but are never
    forwarded, stored or logged.
    """

    model_config = ConfigDict(extra="ignore")

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    card_number: SecretStr | None = None
    expiry_date: SecretStr | None = None
    cvv: SecretStr | None = None

    total_amount: int | None = Field(default=None, gt=0, description="Whole currency units")
    payment_intent_id: str | None = Field(default=None, pattern=PAYMENT_INTENT_ID_PATTERN)
    payment_method: str | None = None

    @property
    def customer_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


class BookingRequest(CamelModel):
    payment_info: PaymentInfo = Field(default_factory=PaymentInfo)


class BookingResponse(CamelModel):
    success: bool = True
    booking_id: str
    trip: Trip


class GenerateTripResponse(CamelModel):
    trip_id: str
    itinerary: GeneratedItinerary
