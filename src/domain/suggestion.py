"""Suggestion domain models.

A suggestion is a short recipe bound to concrete pantry products. Suggestions are built
per request and never persisted.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from src.core.config import constants
from src.core.errors import InvalidSuggestionError, NotEnoughProductsError


class TimeRange(StrEnum):
    """Rough preparation time."""

    QUICK = "quick"  # ~10 min
    MEDIUM = "medium"  # ~20 min
    LONG = "long"  # ~30 min


_MINUTES = {
    TimeRange.QUICK: 10,
    TimeRange.MEDIUM: 20,
    TimeRange.LONG: 30,
}


class SuggestionIngredient(BaseModel):
    """Pantry product used by a suggestion."""

    product_id: str = Field(..., description="ID of the pantry product")
    product_name: str = Field(..., description="Name of the pantry product")
    quantity: str | None = Field(default=None, description="Free-text quantity of the product")
    is_urgent: bool = Field(default=False, description="True if the product is expiring soon")


class Suggestion(BaseModel):
    """Cooking suggestion built from available products."""

    id: str
    title: str = Field(..., description="Concrete dish name (e.g., 'Arroz con pollo')")
    description: str | None = None
    estimated_time: TimeRange
    ingredients: list[SuggestionIngredient]
    urgent_ingredients: list[str] = Field(default_factory=list, description="IDs of urgent products")
    steps: list[str] | None = None
    created_at: datetime


def create_suggestion(
    *,
    id: str,  # noqa: A002
    title: str,
    estimated_time: TimeRange,
    ingredients: list[SuggestionIngredient],
    description: str | None = None,
    steps: list[str] | None = None,
) -> Suggestion:
    """Validate input and build a Suggestion.

    ``urgent_ingredients`` is always derived from the ingredients' ``is_urgent`` flags.

    Raises:
        InvalidSuggestionError: If the title is blank or there are no ingredients
    """
    trimmed_title = title.strip()
    if not trimmed_title:
        raise InvalidSuggestionError("title cannot be empty")

    if not ingredients:
        raise InvalidSuggestionError("at least one ingredient is required")

    return Suggestion(
        id=id,
        title=trimmed_title,
        description=description.strip() if description is not None else None,
        estimated_time=estimated_time,
        ingredients=list(ingredients),
        urgent_ingredients=[ingredient.product_id for ingredient in ingredients if ingredient.is_urgent],
        steps=steps,
        created_at=datetime.now(),
    )


def has_urgent_ingredients(suggestion: Suggestion) -> bool:
    """Return True if any ingredient is expiring soon."""
    return len(suggestion.urgent_ingredients) > 0


def time_in_minutes(time_range: TimeRange) -> int:
    """Return the approximate minutes for a time range."""
    return _MINUTES[time_range]


def ensure_enough_products(count: int) -> None:
    """Raise NotEnoughProductsError when fewer than MIN_PRODUCTS_FOR_SUGGESTIONS are available."""
    if count < constants.MIN_PRODUCTS_FOR_SUGGESTIONS:
        raise NotEnoughProductsError(count=count, required=constants.MIN_PRODUCTS_FOR_SUGGESTIONS)
