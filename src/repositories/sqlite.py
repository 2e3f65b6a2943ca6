"""SQLite-backed repositories using aiosqlite.

Each repository lazily opens its own connection to the database file. Call ``init()``
once to create the tables and ``close()`` when done.
"""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite

from src.core.config import settings
from src.core.errors import ShoppingItemNotFoundError
from src.domain.product import Product, ProductCreate, ProductStatus, create_product
from src.domain.shopping_item import ShoppingItem


logger = logging.getLogger(__name__)


PRODUCTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    status TEXT NOT NULL,
    location TEXT,
    quantity TEXT,
    expiry_date TEXT,
    estimated_expiry_date TEXT,
    outcome TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

SHOPPING_ITEMS_SCHEMA = """
CREATE TABLE IF NOT EXISTS shopping_items (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    product_id TEXT,
    is_bought INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

_PRODUCT_COLUMNS = (
    "id",
    "name",
    "status",
    "location",
    "quantity",
    "expiry_date",
    "estimated_expiry_date",
    "outcome",
    "created_at",
    "updated_at",
)

_SHOPPING_ITEM_COLUMNS = ("id", "name", "product_id", "is_bought", "created_at", "updated_at")


def get_db_path(db_path: str | None = None) -> Path:
    """Get the resolved SQLite database file path."""
    path_str = db_path or settings.sqlite_db_path
    return Path(path_str).resolve()


def _row_to_dict(cursor: aiosqlite.Cursor, row: Any) -> dict[str, Any]:
    columns = [description[0] for description in cursor.description]
    return dict(zip(columns, row, strict=True))


def _upsert_query(table: str, columns: tuple[str, ...]) -> str:
    columns_str = ", ".join(columns)
    placeholders = ", ".join("?" for _ in columns)
    updates = ", ".join(f"{column} = excluded.{column}" for column in columns if column != "id")
    return (
        f"INSERT INTO {table} ({columns_str}) VALUES ({placeholders}) "  # noqa: S608 - table and columns are constants
        f"ON CONFLICT(id) DO UPDATE SET {updates}"
    )


class _SQLiteRepository:
    """Shared connection handling for the SQLite repositories."""

    table: str = ""
    schema: str = ""

    def __init__(self, db_path: str | None = None) -> None:
        self._db_path = get_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = await aiosqlite.connect(str(self._db_path))
            await self._conn.execute("PRAGMA journal_mode = WAL")
            logger.info("Opened SQLite connection", extra={"db_path": str(self._db_path), "table": self.table})
        return self._conn

    async def init(self) -> None:
        """Create the table if it does not exist."""
        conn = await self._connection()
        await conn.execute(self.schema)
        await conn.commit()
        logger.info("Initialized table", extra={"table": self.table})

    async def close(self) -> None:
        """Close the connection, if one was opened."""
        if self._conn is None:
            return
        try:
            await self._conn.close()
            logger.info("Closed SQLite connection", extra={"db_path": str(self._db_path), "table": self.table})
        finally:
            self._conn = None

    async def _execute(self, query: str, params: tuple[Any, ...] | list[Any] = ()) -> aiosqlite.Cursor:
        conn = await self._connection()
        try:
            return await conn.execute(query, params)
        except aiosqlite.OperationalError as e:
            if "no such table" in str(e):
                msg = f"Table '{self.table}' does not exist. Call init() first."
                logger.error("Table not found", extra={"table": self.table})
                raise RuntimeError(msg) from e
            raise

    async def _commit(self) -> None:
        conn = await self._connection()
        await conn.commit()

    async def _fetch_all(self, query: str, params: tuple[Any, ...] = ()) -> list[dict[str, Any]]:
        cursor = await self._execute(query, params)
        rows = await cursor.fetchall()
        return [_row_to_dict(cursor, row) for row in rows]

    async def _fetch_one(self, query: str, params: tuple[Any, ...] = ()) -> dict[str, Any] | None:
        cursor = await self._execute(query, params)
        row = await cursor.fetchone()
        return _row_to_dict(cursor, row) if row is not None else None


class SQLiteProductRepository(_SQLiteRepository):
    """ProductRepository persisted in the ``products`` table."""

    table = "products"
    schema = PRODUCTS_SCHEMA

    async def get_all(self) -> list[Product]:
        records = await self._fetch_all("SELECT * FROM products ORDER BY rowid")
        return [Product.model_validate(record) for record in records]

    async def get_by_id(self, product_id: str) -> Product | None:
        record = await self._fetch_one("SELECT * FROM products WHERE id = ?", (product_id,))
        return Product.model_validate(record) if record else None

    async def create(self, data: ProductCreate) -> Product:
        product = create_product(
            id=uuid.uuid4().hex,
            name=data.name,
            location=data.location,
            quantity=data.quantity,
            expiry_date=data.expiry_date,
        )
        await self.save(product)
        logger.info("Created product", extra={"product_id": product.id})
        return product

    async def save(self, product: Product) -> None:
        values = product.model_dump(mode="json")
        await self._execute(
            _upsert_query(self.table, _PRODUCT_COLUMNS),
            [values[column] for column in _PRODUCT_COLUMNS],
        )
        await self._commit()

    async def delete(self, product_id: str) -> None:
        await self._execute("DELETE FROM products WHERE id = ?", (product_id,))
        await self._commit()

    async def get_active_products(self) -> list[Product]:
        records = await self._fetch_all(
            "SELECT * FROM products WHERE status != ? ORDER BY rowid",
            (ProductStatus.FINISHED.value,),
        )
        return [Product.model_validate(record) for record in records]


class SQLiteShoppingItemRepository(_SQLiteRepository):
    """ShoppingItemRepository persisted in the ``shopping_items`` table."""

    table = "shopping_items"
    schema = SHOPPING_ITEMS_SCHEMA

    async def get_all(self) -> list[ShoppingItem]:
        records = await self._fetch_all("SELECT * FROM shopping_items ORDER BY rowid")
        return [ShoppingItem.model_validate(record) for record in records]

    async def get_by_id(self, item_id: str) -> ShoppingItem | None:
        record = await self._fetch_one("SELECT * FROM shopping_items WHERE id = ?", (item_id,))
        return ShoppingItem.model_validate(record) if record else None

    async def save(self, item: ShoppingItem) -> ShoppingItem:
        if not item.id:
            item = item.model_copy(update={"id": uuid.uuid4().hex})

        values = item.model_dump(mode="json")
        values["is_bought"] = int(item.is_bought)
        await self._execute(
            _upsert_query(self.table, _SHOPPING_ITEM_COLUMNS),
            [values[column] for column in _SHOPPING_ITEM_COLUMNS],
        )
        await self._commit()
        return item

    async def update(self, item_id: str, *, name: str | None = None, is_bought: bool | None = None) -> ShoppingItem:
        existing = await self.get_by_id(item_id)
        if existing is None:
            raise ShoppingItemNotFoundError(item_id)

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if is_bought is not None:
            changes["is_bought"] = is_bought

        changes["updated_at"] = datetime.now()
        return await self.save(existing.model_copy(update=changes))

    async def delete(self, item_id: str) -> None:
        await self._execute("DELETE FROM shopping_items WHERE id = ?", (item_id,))
        await self._commit()

    async def clear_bought(self) -> int:
        cursor = await self._execute("DELETE FROM shopping_items WHERE is_bought = 1")
        await self._commit()
        removed = cursor.rowcount
        logger.info("Cleared bought items", extra={"removed": removed})
        return removed
