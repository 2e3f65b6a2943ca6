"""Unit tests for strategy selection and use-case wiring."""

import logging

import pytest

from src.container import UseCases, build_use_cases, create_expiry_estimator, create_suggestion_generator
from src.domain.product import ProductLocation
from src.services import (
    AIExpiryEstimator,
    AISuggestionGenerator,
    RuleBasedExpiryEstimator,
    RuleBasedSuggestionGenerator,
)


@pytest.mark.unit
class TestStrategySelection:
    """Tests for create_expiry_estimator and create_suggestion_generator."""

    def test_rule_strategies_by_default(self, test_settings):
        """Test the offline strategies are the default."""
        assert isinstance(create_expiry_estimator(test_settings), RuleBasedExpiryEstimator)
        assert isinstance(create_suggestion_generator(test_settings), RuleBasedSuggestionGenerator)

    def test_ai_strategies(self, test_settings):
        """Test the LLM-backed strategies are built when selected."""
        settings = test_settings.model_copy(update={"expiry_estimator": "ai", "suggestion_generator": "ai"})

        assert isinstance(create_expiry_estimator(settings), AIExpiryEstimator)
        assert isinstance(create_suggestion_generator(settings), AISuggestionGenerator)

    def test_ai_strategy_requires_api_key(self, test_settings):
        """Test selecting the AI estimator without a key fails fast."""
        settings = test_settings.model_copy(update={"expiry_estimator": "ai", "openrouter_api_key": None})

        with pytest.raises(ValueError, match="OPENROUTER_API_KEY"):
            create_expiry_estimator(settings)

    def test_rule_strategy_needs_no_api_key(self, test_settings):
        """Test the offline strategies work without credentials."""
        settings = test_settings.model_copy(update={"openrouter_api_key": None})

        assert isinstance(create_suggestion_generator(settings), RuleBasedSuggestionGenerator)


@pytest.mark.unit
class TestBuildUseCases:
    """Tests for build_use_cases."""

    def test_handlers_share_one_estimate_expiry(self, use_cases):
        """Test every re-estimating handler uses the same EstimateExpiry."""
        assert isinstance(use_cases, UseCases)
        assert use_cases.add_product._estimate_expiry is use_cases.estimate_expiry
        assert use_cases.update_product._estimate_expiry is use_cases.estimate_expiry
        assert use_cases.update_product_status._estimate_expiry is use_cases.estimate_expiry

    def test_injected_logger_is_used(self, product_repository, shopping_item_repository, estimator, generator):
        """Test a custom logger reaches the handlers."""
        custom = logging.getLogger("foodie.test")

        use_cases = build_use_cases(
            product_repository=product_repository,
            shopping_item_repository=shopping_item_repository,
            estimator=estimator,
            generator=generator,
            logger=custom,
        )

        assert use_cases.get_suggestions._logger is custom
        assert use_cases.estimate_expiry._logger is custom

    async def test_end_to_end_with_rule_strategies(self, test_settings, product_repository, shopping_item_repository):
        """Test the default strategies wired together add and suggest."""
        use_cases = build_use_cases(
            product_repository=product_repository,
            shopping_item_repository=shopping_item_repository,
            estimator=create_expiry_estimator(test_settings),
            generator=create_suggestion_generator(test_settings),
        )

        await use_cases.add_product.execute("Pollo", location=ProductLocation.FRIDGE)
        await use_cases.add_product.execute("Arroz")
        suggestions = await use_cases.get_suggestions.execute(limit=1)

        stored = await product_repository.get_all()
        assert all(p.estimated_expiry_date is not None for p in stored)
        assert [s.title for s in suggestions] == ["Arroz con pollo"]
