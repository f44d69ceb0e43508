"""Trip preference models and the preference validator."""

from typing import Any

from pydantic import ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from backend.app.errors import PreferencesValidationError
from backend.app.models.common import CamelModel

DEFAULT_MIN_BUDGET = 1000
DEFAULT_CURRENCY_SYMBOL = "₹"

# Friendly messages for range/length violations, keyed by wire field name
FIELD_MESSAGES: dict[str, str] = {
    "destination": "Destination is required",
    "duration": "Duration must be between 1-30 days",
    "groupSize": "Group size must be between 1-20 people",
    "interests": "At least one interest must be selected",
    "startDate": "Start date is required",
    "endDate": "End date is required",
}

_RANGE_ERROR_TYPES = {"greater_than_equal", "less_than_equal", "string_too_short", "too_short"}


class TripPreferences(CamelModel):
    """Validated travel preferences submitted by the user."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    destination: str = Field(..., min_length=1)
    budget: int = Field(..., strict=True, description="Per-person budget, whole currency units")
    duration: int = Field(..., strict=True, ge=1, le=30, description="Trip length in days")
    group_size: int = Field(..., strict=True, ge=1, le=20)
    interests: list[str] = Field(..., min_length=1, description="Interest tags")
    start_date: str = Field(..., min_length=1)
    end_date: str = Field(..., min_length=1)

    @field_validator("budget")
    @classmethod
    def validate_min_budget(cls, v: int, info: ValidationInfo) -> int:
        """Enforce the configured minimum budget (passed via validation context)."""
        context = info.context or {}
        min_budget = context.get("min_budget", DEFAULT_MIN_BUDGET)
        if v < min_budget:
            raise PydanticCustomError(
                "budget_too_low",
                "Budget must be at least {symbol}{min_budget}",
                {
                    "symbol": context.get("currency_symbol", DEFAULT_CURRENCY_SYMBOL),
                    "min_budget": min_budget,
                },
            )
        return v


_WIRE_NAMES = {name: field.alias or name for name, field in TripPreferences.model_fields.items()}


def _field_error(error: dict[str, Any]) -> dict[str, Any]:
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else "body"
    field = _WIRE_NAMES.get(field, field)

    message = error["msg"]
    if error["type"] in _RANGE_ERROR_TYPES and field in FIELD_MESSAGES:
        message = FIELD_MESSAGES[field]

    return {
        "field": field,
        "path": [field, *loc[1:]],
        "code": error["type"],
        "message": message,
    }


def validate_preferences(
    payload: Any,
    *,
    min_budget: int = DEFAULT_MIN_BUDGET,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> TripPreferences:
    """Validate a raw request payload into TripPreferences.

    All field errors are collected; nothing stops at the first failure.

    Args:
        payload: Decoded JSON body (any shape)
        min_budget: Minimum accepted budget
        currency_symbol: Symbol used in the budget error message

    Returns:
        Validated TripPreferences

    Raises:
        PreferencesValidationError: With one entry per violated field constraint
    """
    try:
        return TripPreferences.model_validate(
            payload,
            context={"min_budget": min_budget, "currency_symbol": currency_symbol},
        )
    except ValidationError as e:
        details = [_field_error(err) for err in e.errors(include_url=False)]
        raise PreferencesValidationError(details) from e
