"""LLM client for itinerary generation with OpenAI integration.

Security: Reads API key from settings/environment only, never hardcoded.
No fallback: when no key is configured the factory returns None and callers
report the capability as unavailable without attempting a call.
"""

import asyncio
import json
import logging
from typing import Protocol

from openai import APITimeoutError, AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from backend.app.config import Settings
from backend.app.errors import AIGenerationFailedError, AITimeoutError
from backend.app.models.ai_reply import ItineraryReply
from backend.app.models.preferences import TripPreferences

logger = logging.getLogger(__name__)

FAILURE_PREFIX = "AI itinerary generation failed"


class ItineraryGenerator(Protocol):
    """Protocol for itinerary generation clients."""

    async def generate_itinerary(self, preferences: TripPreferences) -> ItineraryReply:
        """Produce a provisional itinerary for the given preferences.

        Args:
            preferences: Validated trip preferences

        Returns:
            Strictly parsed ItineraryReply (not yet normalized)

        Raises:
            AITimeoutError: Call exceeded its bounded wait
            AIGenerationFailedError: Call failed or reply was unusable
        """
        ...


def _strip_code_fence(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()


def parse_itinerary_reply(raw: str | None) -> ItineraryReply:
    """Parse the raw reply body into an ItineraryReply.

    Empty and non-JSON bodies fail differently from parseable bodies with a
    bad structure, but all surface as AIGenerationFailedError.

    Raises:
        AIGenerationFailedError: On empty, unparseable or structurally invalid replies
    """
    if raw is None or not raw.strip():
        raise AIGenerationFailedError(f"{FAILURE_PREFIX}: empty response from AI service")

    try:
        data = json.loads(_strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise AIGenerationFailedError(
            f"{FAILURE_PREFIX}: response is not valid JSON ({e.msg} at position {e.pos})"
        ) from e

    if (
        not isinstance(data, dict)
        or not data.get("destination")
        or not isinstance(data.get("days"), list)
    ):
        raise AIGenerationFailedError(f"{FAILURE_PREFIX}: invalid AI response structure")

    try:
        return ItineraryReply.model_validate(data)
    except ValidationError as e:
        first = e.errors(include_url=False)[0]
        where = ".".join(str(p) for p in first["loc"]) or "<root>"
        raise AIGenerationFailedError(
            f"{FAILURE_PREFIX}: invalid AI response structure "
            f"({e.error_count()} error(s); {where}: {first['msg']})"
        ) from e


class OpenAIItineraryClient:
    """OpenAI-backed itinerary generator."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        *,
        timeout_seconds: float = 90.0,
        temperature: float = 0.7,
        currency: str = "INR",
        currency_symbol: str = "₹",
        client: AsyncOpenAI | None = None,
    ):
        """Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (read from environment)
            model: Model name to use
            timeout_seconds: Bounded wait for one generation call
            temperature: Sampling temperature
            currency: ISO code all costs must be expressed in
            currency_symbol: Symbol used in prompts
            client: Preconfigured AsyncOpenAI (for testing)
        """
        self.client = client or AsyncOpenAI(api_key=api_key)
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.temperature = temperature
        self.currency = currency
        self.currency_symbol = currency_symbol

    async def generate_itinerary(self, preferences: TripPreferences) -> ItineraryReply:
        """Generate an itinerary using the OpenAI API."""
        system_prompt = self._build_system_prompt()
        user_prompt = self._build_user_prompt(preferences)

        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    response_format={"type": "json_object"},
                    temperature=self.temperature,
                ),
                timeout=self.timeout_seconds,
            )
        except (asyncio.TimeoutError, APITimeoutError) as e:
            logger.error(f"OpenAI call timed out after {self.timeout_seconds:g}s")
            raise AITimeoutError(
                f"{FAILURE_PREFIX}: AI service did not respond within {self.timeout_seconds:g} seconds"
            ) from e
        except OpenAIError as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise AIGenerationFailedError(f"{FAILURE_PREFIX}: {e}") from e

        raw = response.choices[0].message.content if response.choices else None
        if raw:
            logger.debug(f"OpenAI itinerary response: {raw[:500]}...")

        return parse_itinerary_reply(raw)

    def _build_system_prompt(self) -> str:
        """Build system prompt with planning rules and the reply shape."""
        return f"""You are an expert travel planner. Create detailed, realistic day-by-day
itineraries based on the traveler's preferences.

IMPORTANT RULES:
- All costs must be in {self.currency} ({self.currency_symbol}), as plain numbers without symbols.
- Stay within the specified budget.
- Costs are for the whole group: account for the group size in every activity's cost.
- Reflect the traveler's interests in the chosen activities.
- Include realistic travel times and costs, and account for travel between locations.
- Include a mix of accommodation, transport, meals and activities every day.
- Provide specific location names and addresses where possible.

Respond with a single JSON object and nothing else, matching exactly this structure:
{{
  "destination": "string",
  "totalBudget": number,
  "days": [
    {{
      "day": number,
      "date": "YYYY-MM-DD",
      "activities": [
        {{
          "time": "HH:MM",
          "title": "Activity name",
          "description": "Detailed description",
          "location": "Specific location/address",
          "cost": number,
          "type": "accommodation|transport|activity|meal"
        }}
      ]
    }}
  ]
}}
Do not add any other keys. "type" must be exactly one of: accommodation, transport, activity, meal."""

    def _build_user_prompt(self, preferences: TripPreferences) -> str:
        """Build user prompt from validated preferences."""
        lines = [
            f"Create a {preferences.duration}-day itinerary for {preferences.destination} "
            "with these preferences:",
            "",
            f"- Budget: {self.currency_symbol}{preferences.budget} per person",
            f"- Group size: {preferences.group_size} people",
            f"- Travel dates: {preferences.start_date} to {preferences.end_date}",
            f"- Interests: {', '.join(preferences.interests)}",
            "",
            "Create a balanced itinerary that:",
            "- Maximizes value within the budget",
            "- Incorporates the specified interests",
            "- Includes appropriate accommodation, transport, meals, and activities",
            "- Considers the group size for cost calculations",
            f"- Has exactly {preferences.duration} days, numbered from 1, "
            f"starting on {preferences.start_date}",
        ]
        return "\n".join(lines)


def build_itinerary_client(settings: Settings) -> ItineraryGenerator | None:
    """Factory function to get the itinerary client based on config.

    Returns:
        OpenAIItineraryClient if an API key is configured, None otherwise
    """
    if not settings.ai_available or settings.openai_api_key is None:
        logger.warning("No OpenAI API key configured, itinerary generation unavailable")
        return None

    logger.info(f"Using OpenAI client for itinerary generation (model={settings.openai_model})")
    return OpenAIItineraryClient(
        api_key=settings.openai_api_key.get_secret_value(),
        model=settings.openai_model,
        timeout_seconds=settings.ai_timeout_seconds,
        temperature=settings.ai_temperature,
        currency=settings.currency,
        currency_symbol=settings.currency_symbol,
    )
