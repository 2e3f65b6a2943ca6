"""Unit tests for the rule-based expiry estimator."""

from datetime import datetime, timedelta

import pytest

from src.domain.ports import Confidence
from src.domain.product import ProductLocation, ProductStatus
from src.services.rule_expiry_estimator import FoodCategory, RuleBasedExpiryEstimator, classify_food


@pytest.mark.unit
class TestClassifyFood:
    """Tests for classify_food keyword matching."""

    @pytest.mark.parametrize(
        ("name", "category"),
        [
            ("Leche entera", FoodCategory.DAIRY),
            ("Greek yogurt", FoodCategory.DAIRY),
            ("Chicken breast", FoodCategory.MEAT),
            ("Salmon fillet", FoodCategory.MEAT),
            ("Cherry tomatoes", FoodCategory.FRESH_PRODUCE),
            ("Arroz basmati", FoodCategory.DRY_GOODS),
            ("Olive oil", FoodCategory.UNKNOWN),
        ],
    )
    def test_categories(self, name, category):
        """Test names are classified by case-insensitive substring."""
        assert classify_food(name) == category

    def test_dairy_checked_before_meat(self):
        """Test the first matching category wins."""
        assert classify_food("Chicken with cheese") == FoodCategory.DAIRY


@pytest.mark.unit
class TestRuleBasedExpiryEstimator:
    """Tests for RuleBasedExpiryEstimator."""

    @pytest.fixture
    def estimator(self):
        return RuleBasedExpiryEstimator()

    async def _days(self, estimator, name, status, location=None):
        before = datetime.now()
        estimation = await estimator.estimate_expiry_date(name, status, location)
        after = datetime.now()
        assert estimation.date is not None
        # Day counts are whole numbers so rounding the elapsed time is exact
        days = round((estimation.date - before) / timedelta(days=1))
        assert before <= estimation.date - timedelta(days=days) <= after
        return days, estimation.confidence

    @pytest.mark.parametrize(
        ("name", "status", "location", "days", "confidence"),
        [
            ("Milk", ProductStatus.NEW, ProductLocation.FRIDGE, 7, Confidence.HIGH),
            ("Milk", ProductStatus.OPENED, ProductLocation.FRIDGE, 3, Confidence.HIGH),
            ("Milk", ProductStatus.NEW, ProductLocation.PANTRY, 1, Confidence.HIGH),
            ("Milk", ProductStatus.NEW, None, 1, Confidence.HIGH),
            ("Pollo", ProductStatus.NEW, ProductLocation.FRIDGE, 3, Confidence.HIGH),
            ("Pollo", ProductStatus.OPENED, ProductLocation.FRIDGE, 1, Confidence.HIGH),
            ("Pollo", ProductStatus.NEW, ProductLocation.PANTRY, 0, Confidence.HIGH),
            ("Tomatoes", ProductStatus.NEW, ProductLocation.FRIDGE, 7, Confidence.MEDIUM),
            ("Tomatoes", ProductStatus.OPENED, ProductLocation.FRIDGE, 3, Confidence.MEDIUM),
            ("Tomatoes", ProductStatus.NEW, ProductLocation.PANTRY, 5, Confidence.MEDIUM),
            ("Tomatoes", ProductStatus.ALMOST_EMPTY, None, 2, Confidence.MEDIUM),
            ("Rice", ProductStatus.NEW, ProductLocation.PANTRY, 365, Confidence.MEDIUM),
            ("Rice", ProductStatus.OPENED, ProductLocation.PANTRY, 180, Confidence.MEDIUM),
            ("Mystery box", ProductStatus.NEW, ProductLocation.FRIDGE, 5, Confidence.LOW),
            ("Mystery box", ProductStatus.NEW, ProductLocation.PANTRY, 30, Confidence.LOW),
            ("Mystery box", ProductStatus.NEW, None, 3, Confidence.LOW),
        ],
    )
    async def test_shelf_life_table(self, estimator, name, status, location, days, confidence):
        """Test the category, status and location rules."""
        assert await self._days(estimator, name, status, location) == (days, confidence)

    @pytest.mark.parametrize("name", ["Milk", "Pollo", "Rice", "Mystery box"])
    async def test_freezer_dominates(self, estimator, name):
        """Test the freezer overrides every category."""
        assert await self._days(estimator, name, ProductStatus.NEW, ProductLocation.FREEZER) == (
            180,
            Confidence.MEDIUM,
        )
        assert await self._days(estimator, name, ProductStatus.OPENED, ProductLocation.FREEZER) == (
            90,
            Confidence.MEDIUM,
        )

    async def test_opened_never_longer_than_new(self, estimator):
        """Test opening a product never extends its estimate."""
        for name in ["Milk", "Pollo", "Tomatoes", "Rice", "Mystery box"]:
            for location in [None, *ProductLocation]:
                new_days, _ = await self._days(estimator, name, ProductStatus.NEW, location)
                opened_days, _ = await self._days(estimator, name, ProductStatus.OPENED, location)
                assert opened_days <= new_days
