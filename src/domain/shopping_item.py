"""Shopping list domain model."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.core.errors import ShoppingItemNameEmptyError


class ShoppingItem(BaseModel):
    """Shopping list item data transfer object."""

    id: str = Field(..., description="Unique item ID")
    name: str = Field(..., description="Item name")
    product_id: str | None = Field(default=None, description="Pantry product this item restocks")
    is_bought: bool = Field(default=False, description="Whether the item has been bought")
    created_at: datetime = Field(..., description="When the item was added")
    updated_at: datetime = Field(..., description="When the item was last changed")


def create_shopping_item(*, id: str, name: str, product_id: str | None = None) -> ShoppingItem:  # noqa: A002
    """Build a new, not-yet-bought shopping item.

    Raises:
        ShoppingItemNameEmptyError: If the name is blank after trimming
    """
    trimmed_name = name.strip()
    if not trimmed_name:
        raise ShoppingItemNameEmptyError()

    now = datetime.now()
    return ShoppingItem(
        id=id,
        name=trimmed_name,
        product_id=product_id,
        is_bought=False,
        created_at=now,
        updated_at=now,
    )
