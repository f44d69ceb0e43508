"""Provisional itinerary shape returned by the generation capability.

Parsed strictly: unknown keys are rejected and every activity must carry
the full set of content fields.
"""

from pydantic import ConfigDict, Field

from backend.app.models.common import ActivityType, CamelModel


class ReplyModel(CamelModel):
    model_config = ConfigDict(extra="forbid")


class ReplyActivity(ReplyModel):
    """One activity as proposed by the generation capability."""

    # Accepted but never used; identifiers are assigned during normalization
    id: str | int | None = Field(default=None, exclude=True)

    time: str = Field(..., description="HH:MM")
    title: str
    description: str
    location: str
    cost: float = Field(..., ge=0, allow_inf_nan=False)
    type: ActivityType


class ReplyDay(ReplyModel):
    day: int = Field(..., ge=1, description="1-based day number")
    date: str = Field(..., description="YYYY-MM-DD")
    activities: list[ReplyActivity]


class ItineraryReply(ReplyModel):
    """Top-level reply document."""

    destination: str = Field(..., min_length=1)
    # Declared total is discarded; totals are recomputed from activities
    total_budget: float | None = None
    days: list[ReplyDay]
