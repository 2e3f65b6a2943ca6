"""Deterministic suggestion generator matching pantry products against recipe templates."""

import logging
import re
import uuid

from src.core.logging import span
from src.domain.product import Product
from src.domain.suggestion import Suggestion, SuggestionIngredient, create_suggestion
from src.domain.urgency import is_expired, is_expiring_soon
from src.services.recipe_catalog import RECIPE_TEMPLATES, RecipeTemplate


logger = logging.getLogger(__name__)


def match_pattern(pattern: list[str], products: list[Product]) -> list[Product] | None:
    """Bind each keyword to the first product whose name contains it.

    Returns:
        Bound products (a product bound by several keywords appears once),
        or None unless every keyword matched
    """
    bound: list[Product] = []
    for keyword in pattern:
        needle = keyword.lower()
        product = next((p for p in products if needle in p.name.lower()), None)
        if product is None:
            return None
        if all(existing.id != product.id for existing in bound):
            bound.append(product)
    return bound


def match_template(template: RecipeTemplate, products: list[Product]) -> list[Product] | None:
    """Return the products bound by the first fully matching pattern, if any."""
    for pattern in template.patterns:
        bound = match_pattern(pattern, products)
        if bound is not None:
            return bound
    return None


def _slugify(title: str) -> str:
    return re.sub(r"\s+", "-", title.lower())


class RuleBasedSuggestionGenerator:
    """Offline SuggestionGeneratorService.

    Strategy:
    - Drop expired products
    - Match the remaining products against the recipe catalog
    - Rank recipes by how many urgent ingredients they use, catalog order on ties
    """

    def __init__(self, templates: list[RecipeTemplate] | None = None) -> None:
        self._templates = templates if templates is not None else RECIPE_TEMPLATES

    async def generate(self, products: list[Product], limit: int) -> list[Suggestion]:
        """Generate up to ``limit`` suggestions from urgency-sorted products."""
        with span("rule_suggestion_generator.generate", product_count=len(products), limit=limit):
            usable = [p for p in products if not is_expired(p)]
            if not usable:
                logger.info("No usable products for suggestions", extra={"product_count": len(products)})
                return []

            ranked: list[tuple[int, Suggestion]] = []
            for template in self._templates:
                bound = match_template(template, usable)
                if bound is None:
                    continue
                suggestion = self._build_suggestion(template, bound)
                ranked.append((len(suggestion.urgent_ingredients), suggestion))

            # list.sort is stable with reverse=True, so equal counts keep catalog order
            ranked.sort(key=lambda item: item[0], reverse=True)
            suggestions = [suggestion for _, suggestion in ranked[: max(limit, 0)]]

            logger.info(
                "Generated rule-based suggestions",
                extra={"matched": len(ranked), "returned": len(suggestions)},
            )
            return suggestions

    def _build_suggestion(self, template: RecipeTemplate, bound: list[Product]) -> Suggestion:
        ingredients = [
            SuggestionIngredient(
                product_id=product.id,
                product_name=product.name,
                quantity=product.quantity,
                is_urgent=is_expiring_soon(product),
            )
            for product in bound
        ]
        return create_suggestion(
            id=f"rule-{_slugify(template.title)}-{uuid.uuid4().hex[:8]}",
            title=template.title,
            description=f"Con {', '.join(product.name for product in bound)}",
            estimated_time=template.time_range,
            ingredients=ingredients,
            steps=list(template.steps),
        )
