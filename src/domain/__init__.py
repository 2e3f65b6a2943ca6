"""Domain models and DTOs."""

from src.domain.ports import Confidence, ExpiryEstimation
from src.domain.product import (
    FieldChange,
    Product,
    ProductCreate,
    ProductLocation,
    ProductOutcome,
    ProductStatus,
    ProductUpdate,
)
from src.domain.shopping_item import ShoppingItem
from src.domain.suggestion import Suggestion, SuggestionIngredient, TimeRange
from src.domain.urgency import UrgencyInfo, UrgencyLevel


__all__ = [
    "Confidence",
    "ExpiryEstimation",
    "FieldChange",
    "Product",
    "ProductCreate",
    "ProductLocation",
    "ProductOutcome",
    "ProductStatus",
    "ProductUpdate",
    "ShoppingItem",
    "Suggestion",
    "SuggestionIngredient",
    "TimeRange",
    "UrgencyInfo",
    "UrgencyLevel",
]
