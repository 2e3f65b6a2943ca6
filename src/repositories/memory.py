"""Dict-backed repositories for tests and throwaway sessions.

Every read returns a copy, so callers can never mutate stored state by accident.
"""

from datetime import datetime

from src.core.errors import ShoppingItemNotFoundError
from src.domain.product import Product, ProductCreate, create_product, is_active
from src.domain.shopping_item import ShoppingItem


class InMemoryProductRepository:
    """ProductRepository keeping products in insertion order."""

    def __init__(self, products: list[Product] | None = None) -> None:
        self._products: dict[str, Product] = {}
        self._id_counter = 1
        for product in products or []:
            self._products[product.id] = product.model_copy()

    def _next_id(self) -> str:
        while str(self._id_counter) in self._products:
            self._id_counter += 1
        record_id = str(self._id_counter)
        self._id_counter += 1
        return record_id

    async def get_all(self) -> list[Product]:
        return [product.model_copy() for product in self._products.values()]

    async def get_by_id(self, product_id: str) -> Product | None:
        product = self._products.get(product_id)
        return product.model_copy() if product else None

    async def create(self, data: ProductCreate) -> Product:
        product = create_product(
            id=self._next_id(),
            name=data.name,
            location=data.location,
            quantity=data.quantity,
            expiry_date=data.expiry_date,
        )
        self._products[product.id] = product
        return product.model_copy()

    async def save(self, product: Product) -> None:
        self._products[product.id] = product.model_copy()

    async def delete(self, product_id: str) -> None:
        self._products.pop(product_id, None)

    async def get_active_products(self) -> list[Product]:
        return [product.model_copy() for product in self._products.values() if is_active(product)]


class InMemoryShoppingItemRepository:
    """ShoppingItemRepository keeping items in insertion order."""

    def __init__(self) -> None:
        self._items: dict[str, ShoppingItem] = {}
        self._id_counter = 1

    def _next_id(self) -> str:
        while str(self._id_counter) in self._items:
            self._id_counter += 1
        record_id = str(self._id_counter)
        self._id_counter += 1
        return record_id

    async def get_all(self) -> list[ShoppingItem]:
        return [item.model_copy() for item in self._items.values()]

    async def get_by_id(self, item_id: str) -> ShoppingItem | None:
        item = self._items.get(item_id)
        return item.model_copy() if item else None

    async def save(self, item: ShoppingItem) -> ShoppingItem:
        if not item.id:
            item = item.model_copy(update={"id": self._next_id()})
        self._items[item.id] = item.model_copy()
        return item.model_copy()

    async def update(self, item_id: str, *, name: str | None = None, is_bought: bool | None = None) -> ShoppingItem:
        existing = self._items.get(item_id)
        if existing is None:
            raise ShoppingItemNotFoundError(item_id)

        changes: dict[str, object] = {"updated_at": datetime.now()}
        if name is not None:
            changes["name"] = name
        if is_bought is not None:
            changes["is_bought"] = is_bought

        updated = existing.model_copy(update=changes)
        self._items[item_id] = updated
        return updated.model_copy()

    async def delete(self, item_id: str) -> None:
        self._items.pop(item_id, None)

    async def clear_bought(self) -> int:
        bought = [item_id for item_id, item in self._items.items() if item.is_bought]
        for item_id in bought:
            del self._items[item_id]
        return len(bought)
