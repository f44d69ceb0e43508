"""Health check endpoints.

- /health: liveness, always 200
- /api/health/ai: whether the generation capability is configured
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from backend.app.api.deps import get_app_settings, get_itinerary_client
from backend.app.config import Settings
from backend.app.llm.client import ItineraryGenerator

router = APIRouter()


class AIHealthResponse(BaseModel):
    available: bool
    service: str
    status: Literal["operational", "unavailable"]
    message: str


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/api/health/ai", response_model=AIHealthResponse)
async def ai_health(
    settings: Annotated[Settings, Depends(get_app_settings)],
    client: Annotated[ItineraryGenerator | None, Depends(get_itinerary_client)],
) -> AIHealthResponse:
    """Report generation capability availability.

    Does not call the capability; availability means a credential is configured.
    """
    available = client is not None
    return AIHealthResponse(
        available=available,
        service=settings.ai_service_name,
        status="operational" if available else "unavailable",
        message="AI service is ready" if available else "OPENAI_API_KEY not configured",
    )
