"""Tests for the preference validator."""

from typing import Any

import pytest
from pydantic import ValidationError

from backend.app.errors import PreferencesValidationError
from backend.app.models.preferences import TripPreferences, validate_preferences


def _errors_for(payload: Any, **kwargs: Any) -> list[dict[str, Any]]:
    with pytest.raises(PreferencesValidationError) as exc_info:
        validate_preferences(payload, **kwargs)
    return exc_info.value.details


def test_valid_preferences_accepted(preferences_payload: dict[str, Any]) -> None:
    """Test that the Goa scenario validates into typed preferences."""
    prefs = validate_preferences(preferences_payload)

    assert prefs.destination == "Goa"
    assert prefs.budget == 20000
    assert prefs.duration == 3
    assert prefs.group_size == 2
    assert prefs.interests == ["beaches"]
    assert prefs.start_date == "2024-03-01"
    assert prefs.end_date == "2024-03-03"


def test_boundary_values_accepted(preferences_payload: dict[str, Any]) -> None:
    """Test that range endpoints are inclusive."""
    for duration, group_size in ((1, 1), (30, 20)):
        payload = {**preferences_payload, "duration": duration, "groupSize": group_size}
        prefs = validate_preferences(payload)
        assert prefs.duration == duration
        assert prefs.group_size == group_size

    prefs = validate_preferences({**preferences_payload, "budget": 1000})
    assert prefs.budget == 1000


def test_snake_case_keys_accepted(preferences_payload: dict[str, Any]) -> None:
    """Test that snake_case keys populate the same fields."""
    payload = dict(preferences_payload)
    payload["group_size"] = payload.pop("groupSize")
    payload["start_date"] = payload.pop("startDate")
    payload["end_date"] = payload.pop("endDate")

    prefs = validate_preferences(payload)

    assert prefs.group_size == 2
    assert prefs.start_date == "2024-03-01"


def test_validated_preferences_are_immutable(preferences_payload: dict[str, Any]) -> None:
    """Test that preferences cannot be reassigned after validation."""
    prefs = validate_preferences(preferences_payload)

    with pytest.raises(ValidationError):
        prefs.budget = 1  # type: ignore[misc]


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("destination", ""),
        ("destination", "   "),
        ("budget", 999),
        ("budget", "20000"),
        ("budget", "lots"),
        ("duration", 0),
        ("duration", 31),
        ("duration", "3"),
        ("groupSize", 0),
        ("groupSize", 21),
        ("interests", []),
        ("interests", "beaches"),
        ("interests", ["beaches", 7]),
        ("startDate", ""),
        ("endDate", ""),
    ],
)
def test_single_violation_reports_only_that_field(
    preferences_payload: dict[str, Any], field: str, value: Any
) -> None:
    """Test that violating exactly one constraint yields exactly that field's error."""
    payload = {**preferences_payload, field: value}

    details = _errors_for(payload)

    assert len(details) == 1
    assert details[0]["field"] == field


@pytest.mark.parametrize(
    "field", ["destination", "budget", "duration", "groupSize", "interests", "startDate", "endDate"]
)
def test_missing_field_reported(preferences_payload: dict[str, Any], field: str) -> None:
    """Test that a missing required field is reported on its own."""
    payload = {k: v for k, v in preferences_payload.items() if k != field}

    details = _errors_for(payload)

    assert [d["field"] for d in details] == [field]
    assert details[0]["code"] == "missing"


def test_all_errors_collected(preferences_payload: dict[str, Any]) -> None:
    """Test that validation does not stop at the first failure."""
    payload = {
        **preferences_payload,
        "destination": "",
        "budget": 10,
        "duration": 45,
        "groupSize": 0,
        "interests": [],
    }

    details = _errors_for(payload)

    assert {d["field"] for d in details} == {
        "destination",
        "budget",
        "duration",
        "groupSize",
        "interests",
    }


def test_friendly_messages(preferences_payload: dict[str, Any]) -> None:
    """Test that range violations carry user-facing messages."""
    payload = {**preferences_payload, "budget": 500, "duration": 31, "interests": []}

    messages = {d["field"]: d["message"] for d in _errors_for(payload)}

    assert messages["budget"] == "Budget must be at least ₹1000"
    assert messages["duration"] == "Duration must be between 1-30 days"
    assert messages["interests"] == "At least one interest must be selected"


def test_configured_minimum_budget(preferences_payload: dict[str, Any]) -> None:
    """Test that the minimum budget comes from the caller, not a constant."""
    payload = {**preferences_payload, "budget": 4000}

    details = _errors_for(payload, min_budget=5000, currency_symbol="$")

    assert details[0]["field"] == "budget"
    assert details[0]["code"] == "budget_too_low"
    assert details[0]["message"] == "Budget must be at least $5000"

    assert validate_preferences(payload, min_budget=2000).budget == 4000


def test_nested_error_path(preferences_payload: dict[str, Any]) -> None:
    """Test that errors inside interests point at the offending item."""
    payload = {**preferences_payload, "interests": ["beaches", 7]}

    details = _errors_for(payload)

    assert details[0]["path"] == ["interests", 1]


def test_non_object_payload_rejected() -> None:
    """Test that a non-object body is a single body-level error."""
    details = _errors_for(["Goa", 20000])

    assert len(details) == 1
    assert details[0]["field"] == "body"


def test_direct_model_validation_uses_default_minimum() -> None:
    """Test that TripPreferences without context applies the default minimum."""
    with pytest.raises(ValidationError, match="Budget must be at least"):
        TripPreferences(
            destination="Goa",
            budget=999,
            duration=3,
            group_size=2,
            interests=["beaches"],
            start_date="2024-03-01",
            end_date="2024-03-03",
        )
