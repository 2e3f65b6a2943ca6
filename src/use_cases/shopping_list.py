"""Shopping list use cases."""

import logging

from src.core.logging import span
from src.domain.ports import ShoppingItemRepository
from src.domain.shopping_item import ShoppingItem, create_shopping_item


_default_logger = logging.getLogger(__name__)


class AddShoppingItem:
    """Put an item on the shopping list, optionally linked to a pantry product."""

    def __init__(self, repository: ShoppingItemRepository, logger: logging.Logger | None = None) -> None:
        self._repository = repository
        self._logger = logger or _default_logger

    async def execute(self, name: str, product_id: str | None = None) -> ShoppingItem:
        """Add an item and return it with its assigned id.

        Raises:
            ShoppingItemNameEmptyError: If the name is blank
        """
        item = create_shopping_item(id="", name=name, product_id=product_id)

        with span("add_shopping_item.execute", item_name=item.name):
            saved = await self._repository.save(item)
            self._logger.info("Added shopping item", extra={"item_id": saved.id, "item_name": saved.name})
            return saved


class GetShoppingItems:
    def __init__(self, repository: ShoppingItemRepository) -> None:
        self._repository = repository

    async def execute(self) -> list[ShoppingItem]:
        with span("get_shopping_items.execute"):
            return await self._repository.get_all()


class ToggleShoppingItem:
    """Mark an item as bought or not bought."""

    def __init__(self, repository: ShoppingItemRepository, logger: logging.Logger | None = None) -> None:
        self._repository = repository
        self._logger = logger or _default_logger

    async def execute(self, item_id: str, is_bought: bool) -> ShoppingItem:
        """Set the bought flag.

        Raises:
            ShoppingItemNotFoundError: If the item does not exist
        """
        with span("toggle_shopping_item.execute", item_id=item_id, is_bought=is_bought):
            item = await self._repository.update(item_id, is_bought=is_bought)
            self._logger.info("Toggled shopping item", extra={"item_id": item_id, "is_bought": is_bought})
            return item


class DeleteShoppingItem:
    def __init__(self, repository: ShoppingItemRepository, logger: logging.Logger | None = None) -> None:
        self._repository = repository
        self._logger = logger or _default_logger

    async def execute(self, item_id: str) -> None:
        with span("delete_shopping_item.execute", item_id=item_id):
            await self._repository.delete(item_id)
            self._logger.info("Deleted shopping item", extra={"item_id": item_id})


class ClearBoughtItems:
    """Remove everything already bought from the list."""

    def __init__(self, repository: ShoppingItemRepository, logger: logging.Logger | None = None) -> None:
        self._repository = repository
        self._logger = logger or _default_logger

    async def execute(self) -> int:
        """Return the number of items removed."""
        with span("clear_bought_items.execute"):
            removed = await self._repository.clear_bought()
            self._logger.info("Cleared bought shopping items", extra={"removed": removed})
            return removed
