"""Configuration management for foodie."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


StrategyName = Literal["rule", "ai"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenRouter Configuration
    openrouter_api_key: str | None = Field(default=None, description="OpenRouter API key for LLM access")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # SQLite Configuration
    sqlite_db_path: str = Field(default="data/foodie.db", description="Path of the SQLite pantry database")

    # Strategy Selection
    expiry_estimator: StrategyName = Field(
        default="rule", description="Expiry estimator strategy: 'rule' (offline) or 'ai' (LLM-backed)"
    )
    suggestion_generator: StrategyName = Field(
        default="rule", description="Suggestion generator strategy: 'rule' (offline) or 'ai' (LLM-backed)"
    )

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value

    # AI Model Configuration
    model_id: str = Field(
        default="openai/gpt-4o-mini",
        description="Model ID for OpenRouter (defaults to GPT-4o mini)",
    )


# Application Constants
class Constants:
    """Application-wide constants."""

    # Urgency
    EXPIRING_SOON_DAYS: int = 2  # Products expiring within 2 days are urgent

    # Suggestions
    DEFAULT_SUGGESTION_LIMIT: int = 5
    MIN_PRODUCTS_FOR_SUGGESTIONS: int = 2

    # Expiry estimation
    ESTIMATOR_TIMEOUT_SECONDS: float = 10.0
    ESTIMATOR_TEMPERATURE: float = 0.1

    # Suggestion generation
    GENERATOR_TEMPERATURE: float = 0.7
    GENERATOR_MAX_TOKENS: int = 2000


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
