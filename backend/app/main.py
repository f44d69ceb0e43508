"""FastAPI application."""

import logging
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.app.adapters.payments import build_payment_gateway
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.payments import router as payments_router
from backend.app.api.routes.trips import router as trips_router
from backend.app.config import Settings, get_settings
from backend.app.db.inmemory import InMemoryTripStore
from backend.app.errors import TripPlannerError
from backend.app.llm.client import build_itinerary_client

logger = logging.getLogger(__name__)


async def handle_trip_planner_error(request: Request, exc: Exception) -> JSONResponse:
    """Render taxonomy errors as {error, message[, details]}."""
    assert isinstance(exc, TripPlannerError)
    if exc.status_code >= 500:
        logger.error(f"[{request.method} {request.url.path}] {exc.label}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def handle_request_validation_error(request: Request, exc: Exception) -> JSONResponse:
    """Malformed request bodies get the same envelope as other failures."""
    assert isinstance(exc, RequestValidationError)
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request",
            "message": "Request body could not be parsed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and its process-lifetime collaborators.

    Args:
        settings: Settings to use (defaults to environment-derived settings)

    Returns:
        Configured FastAPI app with trip store, itinerary client and payment
        gateway attached to app.state
    """
    settings = settings or get_settings()

    app = FastAPI(title="Trip Planner API", version="0.1.0")

    retention = (
        timedelta(hours=settings.trip_retention_hours) if settings.trip_retention_hours > 0 else None
    )
    app.state.settings = settings
    app.state.trip_store = InMemoryTripStore(retention=retention)
    app.state.itinerary_client = build_itinerary_client(settings)
    app.state.payment_gateway = build_payment_gateway(settings)

    app.add_exception_handler(TripPlannerError, handle_trip_planner_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    # Register routes
    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(trips_router)
    app.include_router(payments_router)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Trip Planner API", "version": "0.1.0"}

    return app


app = create_app()
