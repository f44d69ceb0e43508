"""Request dependencies for process-lifetime collaborators.

The app factory builds each collaborator once and stores it on app.state;
handlers receive them through these providers.
"""

from fastapi import Request

from backend.app.adapters.payments import PaymentGateway
from backend.app.config import Settings
from backend.app.db.repositories import TripStore
from backend.app.llm.client import ItineraryGenerator


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_trip_store(request: Request) -> TripStore:
    return request.app.state.trip_store


def get_itinerary_client(request: Request) -> ItineraryGenerator | None:
    """Generation client, or None when the capability is unconfigured."""
    return request.app.state.itinerary_client


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway
