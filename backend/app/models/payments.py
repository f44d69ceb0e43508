"""Payment models - provider intent shape and payment endpoint bodies."""

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.common import CamelModel

# Provider intent ids: "pi_" followed by letters, digits and underscores
PAYMENT_INTENT_ID_PATTERN = r"^pi_[A-Za-z0-9_]+$"


class PaymentIntent(BaseModel):
    """Payment intent as reported by the payment provider."""

    model_config = ConfigDict(extra="ignore")

    id: str
    client_secret: str | None = None
    status: str = Field(..., description="Provider status, e.g. requires_payment_method, succeeded")
    amount: int = Field(..., description="Minor currency units")
    amount_received: int = 0
    currency: str
    metadata: dict[str, str] = Field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"


class CustomerInfo(CamelModel):
    model_config = ConfigDict(extra="ignore")

    first_name: str = ""
    last_name: str = ""
    email: str = ""


class CreateIntentRequest(CamelModel):
    """Body of POST /api/payments/create-intent."""

    amount: float | None = Field(default=None, description="Minor currency units")
    currency: str | None = None
    trip_id: str | None = None
    customer_info: CustomerInfo = Field(default_factory=CustomerInfo)


class CreateIntentResponse(BaseModel):
    client_secret: str | None
    payment_intent_id: str


class ConfirmPaymentRequest(BaseModel):
    """Body of POST /api/payments/confirm (provider-style snake_case intent id)."""

    model_config = ConfigDict(populate_by_name=True)

    payment_intent_id: str = Field(..., min_length=1, pattern=PAYMENT_INTENT_ID_PATTERN)
    trip_id: str | None = Field(default=None, alias="tripId")


class ConfirmPaymentResponse(BaseModel):
    success: bool = True
    payment_status: str
    amount_received: int
