"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model whose JSON keys are camelCase.

    Python attributes stay snake_case; inputs are accepted in either form.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActivityType(str, Enum):
    """Category tag of an itinerary activity."""

    accommodation = "accommodation"
    transport = "transport"
    activity = "activity"
    meal = "meal"


# Activity category -> CostSummary bucket
SUMMARY_BUCKETS: dict[ActivityType, str] = {
    ActivityType.accommodation: "accommodation",
    ActivityType.transport: "transport",
    ActivityType.activity: "activities",
    ActivityType.meal: "meals",
}
