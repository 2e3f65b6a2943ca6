"""Unit tests for shopping list use cases."""

import pytest

from src.core.errors import ShoppingItemNameEmptyError, ShoppingItemNotFoundError


@pytest.mark.unit
class TestAddShoppingItem:
    """Tests for AddShoppingItem."""

    async def test_adds_trimmed_item(self, use_cases):
        """Test the item is stored unbought with a trimmed name and an id."""
        item = await use_cases.add_shopping_item.execute("  Leche ")

        assert item.id
        assert item.name == "Leche"
        assert item.is_bought is False
        assert item.product_id is None

    async def test_links_product(self, use_cases):
        """Test an item can restock a pantry product."""
        item = await use_cases.add_shopping_item.execute("Leche", product_id="milk")

        assert item.product_id == "milk"

    async def test_blank_name_raises(self, use_cases, shopping_item_repository):
        """Test blank names are rejected."""
        with pytest.raises(ShoppingItemNameEmptyError):
            await use_cases.add_shopping_item.execute("  ")

        assert await shopping_item_repository.get_all() == []


@pytest.mark.unit
class TestShoppingListFlow:
    """Tests for listing, toggling, deleting and clearing."""

    async def test_get_items_in_insertion_order(self, use_cases):
        """Test items come back in the order they were added."""
        await use_cases.add_shopping_item.execute("Leche")
        await use_cases.add_shopping_item.execute("Huevos")

        items = await use_cases.get_shopping_items.execute()

        assert [i.name for i in items] == ["Leche", "Huevos"]

    async def test_toggle(self, use_cases):
        """Test marking an item as bought and back."""
        item = await use_cases.add_shopping_item.execute("Leche")

        bought = await use_cases.toggle_shopping_item.execute(item.id, True)
        unbought = await use_cases.toggle_shopping_item.execute(item.id, False)

        assert bought.is_bought is True
        assert unbought.is_bought is False

    async def test_toggle_missing_item(self, use_cases):
        """Test toggling an unknown id."""
        with pytest.raises(ShoppingItemNotFoundError):
            await use_cases.toggle_shopping_item.execute("nope", True)

    async def test_delete(self, use_cases):
        """Test deleting an item."""
        item = await use_cases.add_shopping_item.execute("Leche")

        await use_cases.delete_shopping_item.execute(item.id)

        assert await use_cases.get_shopping_items.execute() == []

    async def test_clear_bought(self, use_cases):
        """Test only bought items are cleared and the count is returned."""
        leche = await use_cases.add_shopping_item.execute("Leche")
        huevos = await use_cases.add_shopping_item.execute("Huevos")
        await use_cases.add_shopping_item.execute("Pan")
        await use_cases.toggle_shopping_item.execute(leche.id, True)
        await use_cases.toggle_shopping_item.execute(huevos.id, True)

        removed = await use_cases.clear_bought_items.execute()

        assert removed == 2
        assert [i.name for i in await use_cases.get_shopping_items.execute()] == ["Pan"]

    async def test_clear_bought_with_nothing_bought(self, use_cases):
        """Test clearing an untouched list removes nothing."""
        await use_cases.add_shopping_item.execute("Pan")

        assert await use_cases.clear_bought_items.execute() == 0
