"""Text-generation agent shared by the AI-backed estimator and suggestion generator.

The agent is plain text in, plain text out. Each caller passes its own instructions
and parses the reply itself.
"""

import logging

from pydantic_ai import Agent
from pydantic_ai.models.openrouter import OpenRouterModel
from pydantic_ai.providers.openrouter import OpenRouterProvider

from src.core.config import Settings
from src.core.logging import configure_logfire


logger = logging.getLogger(__name__)


TextAgent = Agent[None, str]


def create_text_agent(settings: Settings) -> TextAgent:
    """Create an OpenRouter-backed text agent.

    Raises:
        ValueError: If the OpenRouter API key is not configured
    """
    if settings.logfire_token:
        configure_logfire()

    api_key = settings.require_credential("openrouter_api_key", "OpenRouter API key")
    provider = OpenRouterProvider(api_key=api_key)
    model = OpenRouterModel(model_name=settings.model_id, provider=provider)

    logger.info("Created text agent", extra={"model_id": settings.model_id})

    # Callers own failure handling, so no native retries
    return Agent(model=model, output_type=str, retries=0)
