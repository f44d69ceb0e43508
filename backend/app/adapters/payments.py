"""Payment adapters - Stripe REST API over httpx, plus an in-process simulator."""

import logging
import re
import secrets
from collections import OrderedDict
from typing import Protocol

import httpx
from pydantic import ValidationError

from backend.app.config import Settings
from backend.app.models.payments import PAYMENT_INTENT_ID_PATTERN, PaymentIntent

logger = logging.getLogger(__name__)

_INTENT_ID = re.compile(PAYMENT_INTENT_ID_PATTERN)


class PaymentProviderError(Exception):
    """Payment provider rejected a request or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PaymentGateway(Protocol):
    """Protocol for payment provider implementations."""

    async def create_intent(
        self,
        *,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        payment_method: str | None = None,
        confirm: bool = False,
    ) -> PaymentIntent:
        """Create a payment intent.

        Args:
            amount: Amount in minor currency units
            currency: Lowercase ISO currency code
            metadata: Correlation fields (trip id, customer identity)
            payment_method: Provider payment method reference, if charging now
            confirm: Confirm (charge) immediately

        Raises:
            PaymentProviderError: On provider or network failure
        """
        ...

    async def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        """Fetch the current state of a payment intent.

        Raises:
            PaymentProviderError: On provider or network failure
        """
        ...


class StripePaymentGateway:
    """Stripe PaymentIntents via the REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.stripe.com/v1",
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize Stripe gateway.

        Args:
            api_key: Stripe secret key
            base_url: Stripe API base URL
            timeout_seconds: Per-request timeout
            client: Optional httpx client (for testing with mocks)
        """
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._client = client

    async def create_intent(
        self,
        *,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        payment_method: str | None = None,
        confirm: bool = False,
    ) -> PaymentIntent:
        """Create a Stripe PaymentIntent."""
        # Stripe expects form encoding with bracketed nested keys
        data: dict[str, str] = {"amount": str(amount), "currency": currency}
        for key, value in metadata.items():
            data[f"metadata[{key}]"] = value

        if payment_method:
            data["payment_method"] = payment_method
            data["payment_method_types[]"] = "card"
        else:
            data["automatic_payment_methods[enabled]"] = "true"

        if confirm:
            data["confirm"] = "true"

        return await self._request("POST", "/payment_intents", data=data)

    async def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        """Retrieve a Stripe PaymentIntent."""
        # The id becomes a URL path segment
        if not _INTENT_ID.fullmatch(intent_id):
            raise PaymentProviderError(
                f"Invalid payment intent id: {intent_id!r}", status_code=400
            )
        return await self._request("GET", f"/payment_intents/{intent_id}")

    async def _request(
        self, method: str, path: str, data: dict[str, str] | None = None
    ) -> PaymentIntent:
        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout_seconds)
            close_client = True

        try:
            response = await client.request(
                method,
                f"{self._base_url}{path}",
                data=data,
                auth=(self._api_key, ""),
            )
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise PaymentProviderError(f"Payment provider request failed: {e}") from e
        finally:
            if close_client:
                await client.aclose()

        if response.status_code >= 400:
            error = body.get("error") if isinstance(body, dict) else None
            if not isinstance(error, dict):
                error = {}
            message = error.get("message") or f"HTTP {response.status_code}"
            raise PaymentProviderError(message, status_code=response.status_code)

        try:
            return PaymentIntent.model_validate(body)
        except ValidationError as e:
            raise PaymentProviderError(
                f"Unexpected payment provider response ({e.error_count()} error(s))"
            ) from e


class SimulatedPaymentGateway:
    """In-process gateway used when no payment provider is configured.

    For development and tests only. Intents succeed as soon as they are
    created; only the most recent max_intents are kept.
    """

    def __init__(self, max_intents: int = 1000) -> None:
        self._intents: OrderedDict[str, PaymentIntent] = OrderedDict()
        self._max_intents = max_intents

    async def create_intent(
        self,
        *,
        amount: int,
        currency: str,
        metadata: dict[str, str],
        payment_method: str | None = None,
        confirm: bool = False,
    ) -> PaymentIntent:
        """Create an immediately-succeeded simulated intent."""
        intent_id = f"pi_sim_{secrets.token_hex(12)}"
        intent = PaymentIntent(
            id=intent_id,
            client_secret=f"{intent_id}_secret_{secrets.token_hex(8)}",
            status="succeeded",
            amount=amount,
            amount_received=amount,
            currency=currency,
            metadata=dict(metadata),
        )
        self._intents[intent_id] = intent
        while len(self._intents) > self._max_intents:
            self._intents.popitem(last=False)
        return intent

    async def retrieve_intent(self, intent_id: str) -> PaymentIntent:
        """Retrieve a simulated intent."""
        intent = self._intents.get(intent_id)
        if intent is None:
            raise PaymentProviderError(f"No such payment_intent: '{intent_id}'", status_code=404)
        return intent


def build_payment_gateway(settings: Settings) -> PaymentGateway:
    """Factory function to get the payment gateway based on config.

    Returns:
        StripePaymentGateway if a secret key is configured, SimulatedPaymentGateway otherwise
    """
    key = settings.stripe_secret_key
    if key and key.get_secret_value():
        logger.info("Using Stripe payment gateway")
        return StripePaymentGateway(
            api_key=key.get_secret_value(),
            base_url=settings.stripe_api_base,
            timeout_seconds=settings.payment_timeout_seconds,
        )

    logger.warning("No Stripe secret key configured, using simulated payment gateway")
    return SimulatedPaymentGateway()
