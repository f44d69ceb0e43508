"""Shared pytest fixtures for all test suites."""

import copy
from collections.abc import Callable
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.app.adapters.payments import SimulatedPaymentGateway
from backend.app.config import Settings
from backend.app.db.inmemory import InMemoryTripStore
from backend.app.main import create_app
from backend.app.models.ai_reply import ItineraryReply
from backend.app.models.preferences import TripPreferences


class FakeItineraryClient:
    """Itinerary generator returning a canned reply (or raising)."""

    def __init__(self, reply: dict[str, Any] | None = None, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[TripPreferences] = []

    async def generate_itinerary(self, preferences: TripPreferences) -> ItineraryReply:
        self.calls.append(preferences)
        if self.error is not None:
            raise self.error
        return ItineraryReply.model_validate(self.reply)


@pytest.fixture
def settings() -> Settings:
    """Settings with no provider credentials."""
    return Settings(_env_file=None, openai_api_key=None, stripe_secret_key=None)


@pytest.fixture
def preferences_payload() -> dict[str, Any]:
    """Valid raw preferences as submitted by the form."""
    return {
        "destination": "Goa",
        "budget": 20000,
        "duration": 3,
        "groupSize": 2,
        "interests": ["beaches"],
        "startDate": "2024-03-01",
        "endDate": "2024-03-03",
    }


@pytest.fixture
def preferences(preferences_payload: dict[str, Any]) -> TripPreferences:
    return TripPreferences.model_validate(preferences_payload)


@pytest.fixture
def ai_reply_payload() -> dict[str, Any]:
    """Two-day AI reply with day totals 1200 and 1300 and a wrong declared total."""
    return {
        "destination": "Goa, India",
        "totalBudget": 99999,
        "days": [
            {
                "day": 1,
                "date": "2024-03-01",
                "activities": [
                    {
                        "time": "09:00",
                        "title": "Beach shack breakfast",
                        "description": "Breakfast at Baga beach",
                        "location": "Baga Beach",
                        "cost": 500,
                        "type": "meal",
                    },
                    {
                        "time": "11:00",
                        "title": "Scooter rental",
                        "description": "Rent two scooters for the day",
                        "location": "Calangute",
                        "cost": 700,
                        "type": "transport",
                    },
                ],
            },
            {
                "day": 2,
                "date": "2024-03-02",
                "activities": [
                    {
                        "time": "14:00",
                        "title": "Beach resort",
                        "description": "Check in to a sea-facing room",
                        "location": "Candolim",
                        "cost": 1000,
                        "type": "accommodation",
                    },
                    {
                        "time": "17:00",
                        "title": "Fort Aguada",
                        "description": "Sunset at the fort",
                        "location": "Fort Aguada, Candolim",
                        "cost": 300,
                        "type": "activity",
                    },
                ],
            },
        ],
    }


@pytest.fixture
def ai_reply(ai_reply_payload: dict[str, Any]) -> ItineraryReply:
    return ItineraryReply.model_validate(ai_reply_payload)


@pytest.fixture
def fake_client_factory(
    ai_reply_payload: dict[str, Any],
) -> Callable[..., FakeItineraryClient]:
    """Build fake clients; defaults to the two-day reply."""

    def factory(
        reply: dict[str, Any] | None = None, error: Exception | None = None
    ) -> FakeItineraryClient:
        return FakeItineraryClient(
            reply=copy.deepcopy(reply if reply is not None else ai_reply_payload), error=error
        )

    return factory


@pytest.fixture
def trip_store() -> InMemoryTripStore:
    """Isolated trip store without expiry."""
    return InMemoryTripStore()


@pytest.fixture
def payment_gateway() -> SimulatedPaymentGateway:
    return SimulatedPaymentGateway()


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Isolated application (own store, no AI credential, simulated payments)."""
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)
