"""Payment endpoints - intent creation and confirmation."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from backend.app.adapters.payments import PaymentGateway
from backend.app.api.deps import get_app_settings, get_payment_gateway, get_trip_store
from backend.app.config import Settings
from backend.app.db.repositories import TripStore
from backend.app.models.payments import (
    ConfirmPaymentRequest,
    ConfirmPaymentResponse,
    CreateIntentRequest,
    CreateIntentResponse,
)
from backend.app.orchestration.booking import confirm_payment, start_payment

router = APIRouter(prefix="/api/payments", tags=["payments"])
logger = logging.getLogger(__name__)


@router.post("/create-intent", response_model=CreateIntentResponse)
async def create_intent(
    request: CreateIntentRequest,
    gateway: Annotated[PaymentGateway, Depends(get_payment_gateway)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> CreateIntentResponse:
    """Create a payment intent; amount is in minor currency units."""
    logger.info(f"[POST /api/payments/create-intent] trip_id={request.trip_id} amount={request.amount}")

    intent = await start_payment(request, gateway=gateway, settings=settings)

    return CreateIntentResponse(client_secret=intent.client_secret, payment_intent_id=intent.id)


@router.post("/confirm", response_model=ConfirmPaymentResponse)
async def confirm(
    request: ConfirmPaymentRequest,
    store: Annotated[TripStore, Depends(get_trip_store)],
    gateway: Annotated[PaymentGateway, Depends(get_payment_gateway)],
) -> ConfirmPaymentResponse:
    """Verify a payment succeeded and mark the referenced trip booked."""
    logger.info(f"[POST /api/payments/confirm] intent={request.payment_intent_id}")

    intent = await confirm_payment(
        request.payment_intent_id,
        request.trip_id,
        store=store,
        gateway=gateway,
    )

    return ConfirmPaymentResponse(
        payment_status=intent.status,
        amount_received=intent.amount_received,
    )
