"""Unit tests for the SQLite repositories using a temporary database file."""

from datetime import datetime

import pytest

from src.core.errors import ShoppingItemNotFoundError
from src.domain.product import ProductCreate, ProductLocation, ProductOutcome, ProductStatus, ProductUpdate, update_product
from src.domain.shopping_item import create_shopping_item
from src.repositories.sqlite import SQLiteProductRepository, SQLiteShoppingItemRepository


@pytest.fixture
async def product_repo(tmp_path):
    repository = SQLiteProductRepository(str(tmp_path / "foodie.db"))
    await repository.init()
    yield repository
    await repository.close()


@pytest.fixture
async def shopping_repo(tmp_path):
    repository = SQLiteShoppingItemRepository(str(tmp_path / "foodie.db"))
    await repository.init()
    yield repository
    await repository.close()


@pytest.mark.unit
class TestSQLiteProductRepository:
    """Tests for SQLiteProductRepository."""

    async def test_create_and_read_back(self, product_repo):
        """Test a created product round-trips with every field."""
        created = await product_repo.create(
            ProductCreate(
                name="Milk",
                location=ProductLocation.FRIDGE,
                quantity="1 L",
                expiry_date=datetime(2025, 2, 25, 9, 30),
            )
        )

        fetched = await product_repo.get_by_id(created.id)

        assert fetched == created
        assert fetched.status == ProductStatus.NEW
        assert fetched.expiry_date == datetime(2025, 2, 25, 9, 30)

    async def test_save_updates_in_place(self, product_repo):
        """Test saving an existing id replaces its fields and keeps its position."""
        milk = await product_repo.create(ProductCreate(name="Milk"))
        await product_repo.create(ProductCreate(name="Rice"))

        finished = update_product(
            milk,
            ProductUpdate(status=ProductStatus.FINISHED, outcome=ProductOutcome.USED, location=None),
        )
        await product_repo.save(finished)

        products = await product_repo.get_all()
        assert [p.name for p in products] == ["Milk", "Rice"]
        assert products[0].status == ProductStatus.FINISHED
        assert products[0].outcome == ProductOutcome.USED

    async def test_active_products_exclude_finished(self, product_repo):
        """Test finished products are filtered out by the query."""
        milk = await product_repo.create(ProductCreate(name="Milk"))
        await product_repo.create(ProductCreate(name="Rice"))
        await product_repo.save(update_product(milk, ProductUpdate(status=ProductStatus.FINISHED)))

        assert [p.name for p in await product_repo.get_active_products()] == ["Rice"]

    async def test_delete(self, product_repo):
        """Test deleting a product, and deleting it again."""
        milk = await product_repo.create(ProductCreate(name="Milk"))

        await product_repo.delete(milk.id)
        await product_repo.delete(milk.id)

        assert await product_repo.get_by_id(milk.id) is None

    async def test_persists_across_connections(self, tmp_path):
        """Test data survives closing and reopening the database."""
        path = str(tmp_path / "persist.db")
        first = SQLiteProductRepository(path)
        await first.init()
        created = await first.create(ProductCreate(name="Milk"))
        await first.close()

        second = SQLiteProductRepository(path)
        try:
            assert await second.get_by_id(created.id) == created
        finally:
            await second.close()

    async def test_missing_table_raises(self, tmp_path):
        """Test using the repository before init() gives a clear error."""
        repository = SQLiteProductRepository(str(tmp_path / "empty.db"))
        try:
            with pytest.raises(RuntimeError, match="Call init\\(\\) first"):
                await repository.get_all()
        finally:
            await repository.close()


@pytest.mark.unit
class TestSQLiteShoppingItemRepository:
    """Tests for SQLiteShoppingItemRepository."""

    async def test_save_assigns_id(self, shopping_repo):
        """Test an empty id gets a generated one."""
        saved = await shopping_repo.save(create_shopping_item(id="", name="Leche", product_id="milk"))

        fetched = await shopping_repo.get_by_id(saved.id)

        assert saved.id
        assert fetched == saved
        assert fetched.is_bought is False

    async def test_update_and_clear_bought(self, shopping_repo):
        """Test toggling and clearing bought items."""
        leche = await shopping_repo.save(create_shopping_item(id="", name="Leche"))
        await shopping_repo.save(create_shopping_item(id="", name="Pan"))

        updated = await shopping_repo.update(leche.id, is_bought=True)
        removed = await shopping_repo.clear_bought()

        assert updated.is_bought is True
        assert removed == 1
        assert [i.name for i in await shopping_repo.get_all()] == ["Pan"]

    async def test_update_missing_raises(self, shopping_repo):
        """Test updating an unknown id."""
        with pytest.raises(ShoppingItemNotFoundError):
            await shopping_repo.update("nope", name="Leche")
