"""Pytest configuration and fixtures for unit tests."""

import pytest

from src.container import UseCases, build_use_cases
from src.repositories.memory import InMemoryProductRepository, InMemoryShoppingItemRepository
from tests.unit.mocks import RecordingExpiryEstimator, ScriptedSuggestionGenerator


@pytest.fixture
def product_repository() -> InMemoryProductRepository:
    """Provides a fresh in-memory product repository for each test."""
    return InMemoryProductRepository()


@pytest.fixture
def shopping_item_repository() -> InMemoryShoppingItemRepository:
    """Provides a fresh in-memory shopping list for each test."""
    return InMemoryShoppingItemRepository()


@pytest.fixture
def estimator() -> RecordingExpiryEstimator:
    return RecordingExpiryEstimator()


@pytest.fixture
def generator() -> ScriptedSuggestionGenerator:
    return ScriptedSuggestionGenerator()


@pytest.fixture
def use_cases(product_repository, shopping_item_repository, estimator, generator) -> UseCases:
    """All handlers wired against in-memory adapters and recording fakes."""
    return build_use_cases(
        product_repository=product_repository,
        shopping_item_repository=shopping_item_repository,
        estimator=estimator,
        generator=generator,
    )
