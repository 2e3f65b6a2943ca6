"""Ports consumed by the use cases and implemented by swappable adapters."""

from datetime import datetime
from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel, Field

from src.domain.product import Product, ProductCreate, ProductLocation, ProductStatus
from src.domain.shopping_item import ShoppingItem
from src.domain.suggestion import Suggestion


class Confidence(StrEnum):
    """Confidence of an expiry estimation."""

    HIGH = "high"  # Well-known product category
    MEDIUM = "medium"  # Reasonable guess
    LOW = "low"  # Uncertain
    NONE = "none"  # Unable to estimate


class ExpiryEstimation(BaseModel):
    """Result of an expiry estimation."""

    date: datetime | None = Field(default=None, description="Estimated expiry date, None if unknown")
    confidence: Confidence = Field(default=Confidence.NONE, description="Confidence of the estimate")


UNKNOWN_ESTIMATION = ExpiryEstimation(date=None, confidence=Confidence.NONE)


class ProductRepository(Protocol):
    """Persistence for products."""

    async def get_all(self) -> list[Product]:
        """Return every product, finished ones included."""
        ...

    async def get_by_id(self, product_id: str) -> Product | None:
        """Return the product or None if it does not exist."""
        ...

    async def create(self, data: ProductCreate) -> Product:
        """Create a new product with a repository-assigned id and status new."""
        ...

    async def save(self, product: Product) -> None:
        """Insert or replace a product under its own id."""
        ...

    async def delete(self, product_id: str) -> None:
        """Delete a product. Deleting a missing id is a no-op."""
        ...

    async def get_active_products(self) -> list[Product]:
        """Return products whose status is not finished."""
        ...


class ShoppingItemRepository(Protocol):
    """Persistence for the shopping list."""

    async def get_all(self) -> list[ShoppingItem]:
        """Return every shopping item in insertion order."""
        ...

    async def get_by_id(self, item_id: str) -> ShoppingItem | None:
        """Return the item or None if it does not exist."""
        ...

    async def save(self, item: ShoppingItem) -> ShoppingItem:
        """Persist an item. An empty id asks the repository to assign one."""
        ...

    async def update(self, item_id: str, *, name: str | None = None, is_bought: bool | None = None) -> ShoppingItem:
        """Change name and/or bought flag, raising ShoppingItemNotFoundError if missing."""
        ...

    async def delete(self, item_id: str) -> None:
        """Delete an item. Deleting a missing id is a no-op."""
        ...

    async def clear_bought(self) -> int:
        """Delete every bought item and return how many were removed."""
        ...


class ExpiryEstimatorService(Protocol):
    """Estimates when a product will spoil.

    Implementations never raise: on any internal failure they return UNKNOWN_ESTIMATION.
    Opened products get shorter estimates than new ones and the freezer extends shelf life.
    """

    async def estimate_expiry_date(
        self,
        product_name: str,
        status: ProductStatus,
        location: ProductLocation | None = None,
    ) -> ExpiryEstimation:
        """Estimate the expiry date for a product."""
        ...


class SuggestionGeneratorService(Protocol):
    """Generates cooking suggestions from urgency-sorted products."""

    async def generate(self, products: list[Product], limit: int) -> list[Suggestion]:
        """Return at most ``limit`` suggestions.

        Raises:
            GenerationFailedError: If generation fails
        """
        ...
