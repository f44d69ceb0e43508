"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Generation capability
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    ai_service_name: str = "OpenAI"
    ai_temperature: float = 0.7

    # Timeouts (seconds)
    ai_timeout_seconds: float = 90.0
    payment_timeout_seconds: float = 10.0

    # Preference validation
    min_budget: int = 1000

    # Deployment currency (whole units in itineraries, minor units in payments)
    currency: str = "INR"
    currency_symbol: str = "₹"

    # Trip record retention (hours, 0 keeps records forever)
    trip_retention_hours: int = 168

    # Payment provider
    stripe_secret_key: SecretStr | None = None
    stripe_api_base: str = "https://api.stripe.com/v1"
    payment_min_amount: int = 50

    @property
    def ai_available(self) -> bool:
        """Whether a credential for the generation capability is configured."""
        return bool(self.openai_api_key and self.openai_api_key.get_secret_value())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
