"""LLM-backed suggestion generator.

Sends the urgency-sorted pantry to a text-generation agent and validates every element
of the JSON reply through the Suggestion factory. Any failure aborts the whole batch.
"""

import logging
import uuid
from typing import Any

from src.agents.agent_instance import TextAgent
from src.agents.json_reply import parse_json_array
from src.core.config import constants
from src.core.errors import GenerationFailedError
from src.core.logging import span
from src.domain.product import Product
from src.domain.suggestion import Suggestion, SuggestionIngredient, TimeRange, create_suggestion
from src.domain.urgency import days_until_expiry, is_expired, urgency_level


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are a helpful cooking assistant for a Spanish kitchen app called Foodie.
Your goal: help tired users decide what to cook quickly, prioritizing ingredients that are expiring soon.

Core principles:
- Keep suggestions SIMPLE (max 30 min cooking time)
- Prioritize products expiring soon
- Use realistic ingredient combinations
- Be calm and clear - this is for people who are tired
- Focus on common Spanish/Mediterranean dishes when possible

Return ONLY a valid JSON array, no additional text."""


def format_product_line(product: Product) -> str:
    """Format one product as ``- name [id: ...] (tier, expiry text)``."""
    days = days_until_expiry(product)
    days_text = f"expires in {days} days" if days is not None else "no expiry date"
    return f"- {product.name} [id: {product.id}] ({urgency_level(product)}, {days_text})"


def build_prompt(products: list[Product], limit: int) -> str:
    """Build the user prompt listing products in urgency order."""
    product_list = "\n".join(format_product_line(product) for product in products)

    return f"""Given these products from the user's pantry, suggest {limit} simple recipes they can make TODAY.

PRODUCTS (sorted by urgency):
{product_list}

Requirements:
- Return {limit} suggestions maximum
- Prioritize recipes using products expiring soon (use_today, use_soon)
- Keep recipes SIMPLE and realistic
- Estimate time: "quick" (~10min), "medium" (~20min), "long" (~30min)
- Provide 3-4 brief steps per recipe
- Only use products from the list above and copy their ids exactly

Return JSON array with this EXACT structure:
[
  {{
    "title": "Recipe name in Spanish",
    "description": "Brief description mentioning urgent ingredients if any",
    "estimatedTime": "quick" | "medium" | "long",
    "ingredients": [
      {{
        "productId": "product-id-from-list",
        "productName": "Product name",
        "isUrgent": true | false
      }}
    ],
    "steps": ["Step 1", "Step 2", "Step 3"]
  }}
]"""


def _parse_ingredient(raw: dict[str, Any], products_by_id: dict[str, Product]) -> SuggestionIngredient:
    product_id = str(raw["productId"])
    product = products_by_id.get(product_id)
    return SuggestionIngredient(
        product_id=product_id,
        product_name=str(raw["productName"]),
        quantity=product.quantity if product else None,
        is_urgent=bool(raw.get("isUrgent", False)),
    )


def parse_suggestions(reply: str, products: list[Product]) -> list[Suggestion]:
    """Convert the agent reply into Suggestions.

    Raises:
        ValueError, KeyError, TypeError: If the reply or any element is malformed
        InvalidSuggestionError: If an element has an empty title or no ingredients
    """
    products_by_id = {product.id: product for product in products}
    batch_id = uuid.uuid4().hex[:8]

    suggestions = []
    for index, item in enumerate(parse_json_array(reply)):
        if not isinstance(item, dict):
            msg = f"Invalid suggestion structure at index {index}"
            raise TypeError(msg)

        ingredients = [_parse_ingredient(raw, products_by_id) for raw in item.get("ingredients") or []]
        steps = item.get("steps")

        suggestions.append(
            create_suggestion(
                id=f"ai-{batch_id}-{index}",
                title=str(item.get("title") or ""),
                description=item.get("description"),
                estimated_time=TimeRange(item["estimatedTime"]),
                ingredients=ingredients,
                steps=[str(step) for step in steps] if steps else None,
            )
        )
    return suggestions


class AISuggestionGenerator:
    """SuggestionGeneratorService backed by a text-generation agent.

    Features:
    - Prioritizes urgent (expiring) ingredients through the prompt
    - Tolerates markdown fences around the JSON reply
    - Raises GenerationFailedError on any failure, never returns a partial batch
    """

    def __init__(self, agent: TextAgent) -> None:
        self._agent = agent

    async def generate(self, products: list[Product], limit: int) -> list[Suggestion]:
        """Generate up to ``limit`` suggestions from urgency-sorted products."""
        with span("ai_suggestion_generator.generate", product_count=len(products), limit=limit):
            usable = [p for p in products if not is_expired(p)]
            if not usable:
                logger.info("No usable products for suggestions", extra={"product_count": len(products)})
                return []

            logger.info(
                "Generating suggestions with agent",
                extra={"product_count": len(usable), "limit": limit},
            )

            try:
                result = await self._agent.run(
                    build_prompt(usable, limit),
                    instructions=SYSTEM_PROMPT,
                    model_settings={
                        "temperature": constants.GENERATOR_TEMPERATURE,
                        "max_tokens": constants.GENERATOR_MAX_TOKENS,
                    },
                )
            except Exception as e:
                logger.error("Failed to generate suggestions with agent", extra={"error": str(e)})
                raise GenerationFailedError(str(e)) from e

            reply = result.output
            if not reply:
                raise GenerationFailedError("agent returned empty response")

            try:
                suggestions = parse_suggestions(reply, usable)
            except Exception as e:
                logger.error(
                    "Failed to parse agent suggestions",
                    extra={"error": str(e), "content": reply[:200]},
                )
                raise GenerationFailedError("invalid JSON response from agent") from e

            logger.info("Generated suggestions successfully", extra={"count": len(suggestions)})
            return suggestions[: max(limit, 0)]
